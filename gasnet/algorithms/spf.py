"""Shortest-path-first (SPF) search between two stations.

Dijkstra over the path view: pipe lengths are the edge costs, parallel pipes
are separate edges, and pipes under repair are absent. The search stops as
soon as the destination is popped at its minimal distance.
"""

from __future__ import annotations

from heapq import heappop, heappush
from typing import Dict, Iterable, List, Optional, Tuple

from gasnet.algorithms.base import INF_COST, Cost, StationID
from gasnet.algorithms.types import Failure, FailureKind, Outcome, PathResult
from gasnet.algorithms.views import PathAdjacency, build_path_adjacency
from gasnet.logging import get_logger
from gasnet.model.entities import Pipe

logger = get_logger(__name__)


def dijkstra(
    adjacency: PathAdjacency,
    station_ids: Iterable[StationID],
    src: StationID,
    dst: Optional[StationID] = None,
) -> Tuple[Dict[StationID, Cost], Dict[StationID, Tuple[StationID, int]]]:
    """Single-source Dijkstra over a path view.

    Args:
        adjacency: Outgoing usable pipes per station.
        station_ids: All known stations; each starts at infinite distance.
        src: Source station.
        dst: Optional destination. When given, the search terminates once
            ``dst`` is popped at minimal distance.

    Returns:
        A tuple of (dist, pred):
          - dist: Distance from ``src`` for every known station (``inf`` if
            unreached or not settled before early termination).
          - pred: For each improved station, ``(previous station, pipe id)``
            of the best known way in.
    """
    dist: Dict[StationID, Cost] = {sid: INF_COST for sid in station_ids}
    dist[src] = 0.0
    pred: Dict[StationID, Tuple[StationID, int]] = {}
    min_pq: List[Tuple[Cost, StationID]] = [(0.0, src)]

    while min_pq:
        current, node = heappop(min_pq)
        if current > dist[node]:
            continue
        if node == dst:
            break

        for edge in adjacency.get(node, ()):
            new_dist = current + edge.weight
            if new_dist < dist.get(edge.dest, INF_COST):
                dist[edge.dest] = new_dist
                pred[edge.dest] = (node, edge.pipe_id)
                heappush(min_pq, (new_dist, edge.dest))

    return dist, pred


def resolve_path(
    pred: Dict[StationID, Tuple[StationID, int]], src: StationID, dst: StationID
) -> Tuple[List[StationID], List[int]]:
    """Walk predecessor links back from ``dst`` to ``src``.

    Returns:
        Station ids and pipe ids in travel order.
    """
    stations: List[StationID] = [dst]
    pipes: List[int] = []
    node = dst
    while node != src:
        prev, pipe_id = pred[node]
        pipes.append(pipe_id)
        stations.append(prev)
        node = prev
    stations.reverse()
    pipes.reverse()
    return stations, pipes


def shortest_path(
    pipes: Iterable[Pipe],
    station_ids: Iterable[StationID],
    start: StationID,
    end: StationID,
) -> Outcome[PathResult]:
    """Find a minimum-length route of linked, in-service pipes.

    Equal-length alternatives are not distinguished; any one of them may be
    returned.

    Args:
        pipes: Current pipe collection.
        station_ids: Ids of all known stations.
        start: Station to start from.
        end: Station to reach.

    Returns:
        A ``PathResult``, or a ``Failure`` of kind ``UNKNOWN_ID`` when either
        station is unknown, or ``NO_PATH`` when ``end`` is unreachable.
    """
    known = list(station_ids)
    known_set = set(known)
    missing = [sid for sid in (start, end) if sid not in known_set]
    if missing:
        logger.warning("Shortest path: unknown station id(s) %s", missing)
        return Failure(
            FailureKind.UNKNOWN_ID,
            f"Start or end station not found: {', '.join(map(str, missing))}",
        )

    adjacency = build_path_adjacency(pipes)
    dist, pred = dijkstra(adjacency, known, start, end)

    if dist[end] == INF_COST:
        logger.debug("Shortest path: no path from %s to %s", start, end)
        return Failure(
            FailureKind.NO_PATH,
            f"No path exists between station {start} and station {end}",
        )

    stations, pipe_ids = resolve_path(pred, start, end)
    logger.debug(
        "Shortest path %s -> %s: length=%s via %s", start, end, dist[end], stations
    )
    return PathResult(total_length=dist[end], stations=stations, pipes=pipe_ids)
