"""Record filters over pipe and station collections.

Every filter returns matches in enumeration order and logs the match count.
"""

from __future__ import annotations

from typing import Callable, Iterable, List, TypeVar

from gasnet.logging import get_logger
from gasnet.model.entities import Pipe, Station

logger = get_logger(__name__)

T = TypeVar("T", Pipe, Station)


def search_by_condition(
    items: Iterable[T], condition: Callable[[T], bool], description: str
) -> List[T]:
    """Return items for which ``condition`` holds.

    Args:
        items: Records to scan.
        condition: Predicate applied to each record.
        description: Human-readable query label used in the log message.

    Returns:
        Matching records in the order they were enumerated.
    """
    results = [item for item in items if condition(item)]
    logger.debug("%s - found %d", description, len(results))
    return results


def search_by_id(items: Iterable[T], record_id: int) -> List[T]:
    """Return a list holding the record with ``record_id``, or an empty list."""
    for item in items:
        if item.id == record_id:
            logger.debug("Search by id %d - found", record_id)
            return [item]
    logger.debug("Search by id %d - no results", record_id)
    return []


# Pipes


def pipes_by_km_mark(pipes: Iterable[Pipe], km_mark: str) -> List[Pipe]:
    return search_by_condition(
        pipes, lambda p: km_mark in p.km_mark, f"Pipes by km mark {km_mark!r}"
    )


def pipes_by_diameter(pipes: Iterable[Pipe], diameter: int) -> List[Pipe]:
    return search_by_condition(
        pipes, lambda p: p.diameter == diameter, f"Pipes by diameter {diameter} mm"
    )


def pipes_by_repair(pipes: Iterable[Pipe], under_repair: bool) -> List[Pipe]:
    return search_by_condition(
        pipes,
        lambda p: p.under_repair == under_repair,
        f"Pipes by repair status {under_repair}",
    )


def pipes_by_length(
    pipes: Iterable[Pipe], min_length: float, max_length: float
) -> List[Pipe]:
    """Return pipes whose length lies in ``[min_length, max_length]``."""
    return search_by_condition(
        pipes,
        lambda p: min_length <= p.length <= max_length,
        f"Pipes by length {min_length}-{max_length} km",
    )


# Stations


def stations_by_name(stations: Iterable[Station], name: str) -> List[Station]:
    return search_by_condition(
        stations, lambda s: name in s.name, f"Stations by name {name!r}"
    )


def stations_by_classification(
    stations: Iterable[Station], classification: str
) -> List[Station]:
    return search_by_condition(
        stations,
        lambda s: classification in s.classification,
        f"Stations by classification {classification!r}",
    )


def stations_by_status(stations: Iterable[Station], working: bool) -> List[Station]:
    return search_by_condition(
        stations, lambda s: s.working == working, f"Stations by status {working}"
    )


def stations_by_workshop_load(
    stations: Iterable[Station], min_percent: float, max_percent: float
) -> List[Station]:
    """Return stations whose working-workshop percentage is in range.

    Stations without workshops never match.
    """
    return search_by_condition(
        stations,
        lambda s: s.workshop_count > 0
        and min_percent <= s.workshop_load() <= max_percent,
        f"Stations by workshop load {min_percent}%-{max_percent}%",
    )


def stations_by_working_workshops(
    stations: Iterable[Station], min_count: int, max_count: int
) -> List[Station]:
    return search_by_condition(
        stations,
        lambda s: min_count <= s.workshop_working <= max_count,
        f"Stations by working workshops {min_count}-{max_count}",
    )
