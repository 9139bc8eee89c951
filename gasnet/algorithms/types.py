"""Result and failure types returned by the network algorithms.

Algorithms never raise for expected conditions such as an unknown station or
a cyclic network; they return a ``Failure`` instead. ``Failure`` is falsy, so
callers can branch with ``if not result``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Set, Tuple, TypeVar, Union

from gasnet.algorithms.base import Capacity, Cost, StationID

T = TypeVar("T")


class FailureKind(Enum):
    """Named failure outcomes of network operations."""

    #: A station or pipe id is not present in the store.
    UNKNOWN_ID = "unknown_id"
    #: Source or sink has no linked, usable pipe.
    NOT_CONNECTED = "not_connected"
    #: Shortest-path search exhausted the frontier without reaching the target.
    NO_PATH = "no_path"
    #: The linked pipes form a directed cycle.
    CYCLE_DETECTED = "cycle_detected"
    #: No free pipe of the requested diameter and no way to create one.
    NO_FREE_PIPE = "no_free_pipe"
    #: A pipe would connect a station to itself.
    SELF_LOOP = "self_loop"
    #: Requested diameter is outside the allowed set.
    INVALID_DIAMETER = "invalid_diameter"
    #: A link request leaves exactly one end of a pipe unconnected.
    HALF_LINKED = "half_linked"


@dataclass(frozen=True)
class Failure:
    """A named, non-fatal failure of a network operation.

    Attributes:
        kind: Failure category.
        message: Human-readable description.
    """

    kind: FailureKind
    message: str = ""

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.message or self.kind.value


#: Either a value of type T or a Failure.
Outcome = Union[T, Failure]


@dataclass(frozen=True)
class PathResult:
    """Shortest path between two stations.

    Attributes:
        total_length: Sum of pipe lengths along the path (km).
        stations: Station ids from start to end, inclusive.
        pipes: Pipe ids traversed; ``pipes[i]`` joins ``stations[i]`` and
            ``stations[i + 1]``.
    """

    total_length: Cost
    stations: List[StationID]
    pipes: List[int]


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        total_flow: Maximum flow value achieved.
        residual_cap: Remaining capacity per ordered station pair after the
            last augmentation (reverse entries hold cancellable flow).
        reachable: Stations reachable from the source in the residual graph.
        min_cut: Station pairs ``(u, v)`` with ``u`` reachable, ``v`` not and
            positive original capacity from ``u`` to ``v``.
    """

    total_flow: Capacity
    residual_cap: Dict[StationID, Dict[StationID, Capacity]] = field(
        default_factory=dict
    )
    reachable: Set[StationID] = field(default_factory=set)
    min_cut: List[Tuple[StationID, StationID]] = field(default_factory=list)


@dataclass(frozen=True)
class LinkedPipeInfo:
    """One row of the network summary: a linked pipe and its derived capacity."""

    pipe_id: int
    source: StationID
    dest: StationID
    length: float
    diameter: int
    under_repair: bool
    capacity: Capacity
