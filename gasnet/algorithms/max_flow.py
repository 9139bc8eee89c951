"""Maximum-flow computation via BFS augmenting paths (Edmonds-Karp).

Parallel pipes between the same ordered pair of stations are summed into one
capacity. Each round a breadth-first search finds the shortest augmenting
path in the residual graph; its bottleneck is pushed forward and credited to
the reverse direction so later rounds can cancel it. The loop ends when the
sink is no longer reachable.
"""

from __future__ import annotations

from collections import deque
from copy import deepcopy
from typing import Dict, Iterable, List, Optional, Set, Tuple

from gasnet.algorithms.base import INF_COST, Capacity, StationID
from gasnet.algorithms.types import Failure, FailureKind, FlowSummary, Outcome
from gasnet.algorithms.views import FlowAdjacency, build_flow_adjacency
from gasnet.config import NETWORK_CONFIG, NetworkConfig
from gasnet.logging import get_logger
from gasnet.model.entities import Pipe

logger = get_logger(__name__)

Residual = Dict[StationID, Dict[StationID, Capacity]]


def _bfs(
    residual: Residual,
    neighbors: Dict[StationID, List[StationID]],
    src: StationID,
    dst: Optional[StationID] = None,
) -> Dict[StationID, Optional[StationID]]:
    """Breadth-first search over edges with strictly positive residual.

    Returns:
        Predecessor map of every visited station (``src`` maps to None). The
        search stops early once ``dst`` is dequeued.
    """
    parent: Dict[StationID, Optional[StationID]] = {src: None}
    queue = deque([src])
    while queue:
        u = queue.popleft()
        if u == dst:
            break
        row = residual.get(u, {})
        for v in neighbors.get(u, ()):
            if v not in parent and row.get(v, 0.0) > 0:
                parent[v] = u
                queue.append(v)
    return parent


def _path_edges(
    parent: Dict[StationID, Optional[StationID]], src: StationID, dst: StationID
) -> List[Tuple[StationID, StationID]]:
    edges: List[Tuple[StationID, StationID]] = []
    node = dst
    while node != src:
        prev = parent[node]
        assert prev is not None
        edges.append((prev, node))
        node = prev
    return edges


def edmonds_karp(
    view: FlowAdjacency, src: StationID, dst: StationID
) -> Tuple[Capacity, Residual]:
    """Run Edmonds-Karp on an aggregated flow view.

    Args:
        view: Flow view; it is not modified.
        src: Source station.
        dst: Sink station.

    Returns:
        A tuple of (total_flow, residual) where ``residual`` holds remaining
        capacities after the last augmentation.
    """
    residual: Residual = deepcopy(view.capacity)
    total: Capacity = 0.0
    if src == dst:
        return total, residual

    while True:
        parent = _bfs(residual, view.neighbors, src, dst)
        if dst not in parent:
            break

        edges = _path_edges(parent, src, dst)
        bottleneck = INF_COST
        for u, v in edges:
            bottleneck = min(bottleneck, residual[u][v])

        for u, v in edges:
            residual[u][v] -= bottleneck
            back = residual.setdefault(v, {})
            back[u] = back.get(u, 0.0) + bottleneck

        total += bottleneck
        logger.debug(
            "Augmented %s along %s", bottleneck, [src] + [v for _, v in reversed(edges)]
        )

    return total, residual


def _check_connected(
    view: FlowAdjacency, src: StationID, dst: StationID
) -> Optional[Failure]:
    missing = [sid for sid in (src, dst) if sid not in view.neighbors]
    if not missing:
        return None
    logger.warning("Max flow: station(s) %s not connected to the network", missing)
    return Failure(
        FailureKind.NOT_CONNECTED,
        f"Source or sink not connected to network: {', '.join(map(str, missing))}",
    )


def calc_max_flow_summary(
    pipes: Iterable[Pipe],
    src: StationID,
    dst: StationID,
    config: NetworkConfig = NETWORK_CONFIG,
) -> Outcome[FlowSummary]:
    """Compute max flow from ``src`` to ``dst`` with cut analytics.

    Args:
        pipes: Current pipe collection.
        src: Source station.
        dst: Sink station.
        config: Capacity scaling configuration.

    Returns:
        A ``FlowSummary``, or a ``Failure`` of kind ``NOT_CONNECTED`` when
        either station touches no linked, in-service pipe with positive
        capacity.
    """
    view = build_flow_adjacency(pipes, config)
    failure = _check_connected(view, src, dst)
    if failure is not None:
        return failure

    total, residual = edmonds_karp(view, src, dst)
    reachable: Set[StationID] = set(_bfs(residual, view.neighbors, src))
    min_cut = [
        (u, v)
        for u in sorted(reachable)
        for v, cap in view.capacity.get(u, {}).items()
        if cap > 0 and v not in reachable
    ]
    logger.debug("Max flow %s -> %s: %s", src, dst, total)
    return FlowSummary(
        total_flow=total, residual_cap=residual, reachable=reachable, min_cut=min_cut
    )


def calc_max_flow(
    pipes: Iterable[Pipe],
    src: StationID,
    dst: StationID,
    config: NetworkConfig = NETWORK_CONFIG,
) -> Outcome[Capacity]:
    """Compute the maximum sustainable flow from ``src`` to ``dst``.

    Returns:
        The total flow as a float, or a ``NOT_CONNECTED`` ``Failure``.
    """
    summary = calc_max_flow_summary(pipes, src, dst, config)
    if isinstance(summary, Failure):
        return summary
    return summary.total_flow
