"""Topological ordering of stations with cycle detection.

Uses the order view, which includes pipes under repair. Depth-first search
with three-color marking; roots are visited in ascending station id so that
the order of unrelated components is deterministic.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterable, Iterator, List, Tuple

from gasnet.algorithms.base import StationID
from gasnet.algorithms.types import Failure, FailureKind, Outcome
from gasnet.algorithms.views import OrderAdjacency, build_order_adjacency
from gasnet.logging import get_logger
from gasnet.model.entities import Pipe

logger = get_logger(__name__)


class Mark(IntEnum):
    UNVISITED = 0
    IN_PROGRESS = 1
    FINISHED = 2


class CycleError(Exception):
    """Raised internally when DFS re-enters an in-progress station."""

    def __init__(self, station: StationID) -> None:
        super().__init__(f"Cycle through station {station}")
        self.station = station


def _visit(
    root: StationID,
    adjacency: OrderAdjacency,
    marks: Dict[StationID, Mark],
    finished: List[StationID],
) -> None:
    marks[root] = Mark.IN_PROGRESS
    stack: List[Tuple[StationID, Iterator[StationID]]] = [
        (root, iter(adjacency.get(root, ())))
    ]
    while stack:
        node, successors = stack[-1]
        for nxt in successors:
            mark = marks.get(nxt, Mark.UNVISITED)
            if mark == Mark.IN_PROGRESS:
                raise CycleError(nxt)
            if mark == Mark.UNVISITED:
                marks[nxt] = Mark.IN_PROGRESS
                stack.append((nxt, iter(adjacency.get(nxt, ()))))
                break
        else:
            stack.pop()
            marks[node] = Mark.FINISHED
            finished.append(node)


def order_stations(adjacency: OrderAdjacency) -> List[StationID]:
    """Return a topological order of the stations in ``adjacency``.

    Raises:
        CycleError: If the adjacency contains a directed cycle.
    """
    marks: Dict[StationID, Mark] = {}
    finished: List[StationID] = []
    for station in sorted(adjacency):
        if marks.get(station, Mark.UNVISITED) == Mark.UNVISITED:
            _visit(station, adjacency, marks, finished)
    finished.reverse()
    return finished


def topological_order(pipes: Iterable[Pipe]) -> Outcome[List[StationID]]:
    """Order stations so that every linked pipe runs from earlier to later.

    Args:
        pipes: Current pipe collection.

    Returns:
        Station ids in topological order (empty when no pipe is linked), or a
        ``CYCLE_DETECTED`` ``Failure``. No partial order is ever returned.
    """
    adjacency = build_order_adjacency(pipes)
    try:
        order = order_stations(adjacency)
    except CycleError as exc:
        logger.warning("Topological order impossible: %s", exc)
        return Failure(
            FailureKind.CYCLE_DETECTED, f"Cycle detected: {exc}; no order exists"
        )
    logger.debug("Topological order: %s", order)
    return order
