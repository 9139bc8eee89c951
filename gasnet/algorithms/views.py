"""Per-algorithm adjacency views built from the current pipe collection.

Each algorithm needs a different shape of graph, so nothing is cached: every
call materializes a fresh view from the pipes as they are now.

Inclusion rules per view:
    - Path view (shortest path): linked pipes that are not under repair, kept
      as parallel edges.
    - Flow view (max flow): linked pipes with positive capacity, aggregated
      per ordered station pair. Pipes under repair have zero capacity and
      drop out.
    - Order view (topological order): every linked pipe, including pipes
      under repair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, NamedTuple

from gasnet.algorithms.base import Capacity, Cost, StationID
from gasnet.algorithms.metrics import pipe_capacity, pipe_weight
from gasnet.config import NETWORK_CONFIG, NetworkConfig
from gasnet.model.entities import Pipe


class PathEdge(NamedTuple):
    """Outgoing pipe in the path view."""

    pipe_id: int
    dest: StationID
    weight: Cost


#: Station id -> outgoing usable pipes, in pipe enumeration order.
PathAdjacency = Dict[StationID, List[PathEdge]]

#: Station id -> destination station ids, one entry per linked pipe.
OrderAdjacency = Dict[StationID, List[StationID]]


@dataclass
class FlowAdjacency:
    """Aggregated capacities plus the undirected neighbor lists driving BFS.

    Attributes:
        capacity: ``capacity[u][v]`` is the summed capacity of all usable
            pipes from ``u`` to ``v``. Missing entries mean zero.
        neighbors: For every station touching a positive-capacity pipe, the
            stations adjacent to it in either direction. Reverse directions
            are needed to walk cancellation edges of the residual graph.
    """

    capacity: Dict[StationID, Dict[StationID, Capacity]] = field(
        default_factory=dict
    )
    neighbors: Dict[StationID, List[StationID]] = field(default_factory=dict)

    def cap(self, u: StationID, v: StationID) -> Capacity:
        return self.capacity.get(u, {}).get(v, 0.0)

    def _connect(self, u: StationID, v: StationID) -> None:
        adj = self.neighbors.setdefault(u, [])
        if v not in adj:
            adj.append(v)


def build_path_adjacency(pipes: Iterable[Pipe]) -> PathAdjacency:
    """Build the shortest-path view.

    Pipes under repair and pipes missing either endpoint are left out
    entirely rather than carried with an infinite weight.
    """
    adjacency: PathAdjacency = {}
    for pipe in pipes:
        if not pipe.is_linked or pipe.under_repair:
            continue
        adjacency.setdefault(pipe.source_station_id, []).append(
            PathEdge(pipe.id, pipe.dest_station_id, pipe_weight(pipe))
        )
    return adjacency


def build_flow_adjacency(
    pipes: Iterable[Pipe], config: NetworkConfig = NETWORK_CONFIG
) -> FlowAdjacency:
    """Build the max-flow view with parallel pipes summed per station pair."""
    view = FlowAdjacency()
    for pipe in pipes:
        if not pipe.is_linked:
            continue
        cap = pipe_capacity(pipe, config)
        if cap <= 0:
            continue
        u, v = pipe.source_station_id, pipe.dest_station_id
        row = view.capacity.setdefault(u, {})
        row[v] = row.get(v, 0.0) + cap
        view._connect(u, v)
        view._connect(v, u)
    return view


def build_order_adjacency(pipes: Iterable[Pipe]) -> OrderAdjacency:
    """Build the topological-order view.

    Every station that appears as an endpoint of a linked pipe is a key, even
    when it has no outgoing pipes.
    """
    adjacency: OrderAdjacency = {}
    for pipe in pipes:
        if not pipe.is_linked:
            continue
        adjacency.setdefault(pipe.source_station_id, []).append(pipe.dest_station_id)
        adjacency.setdefault(pipe.dest_station_id, [])
    return adjacency
