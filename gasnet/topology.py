"""Topology mutation: linking pipes to stations and releasing them.

Only the two station references of a single pipe are ever written. Both are
set or cleared together, so a pipe is always either linked or free.
"""

from __future__ import annotations

from typing import Optional

from gasnet.algorithms.types import Failure, FailureKind, Outcome
from gasnet.logging import get_logger
from gasnet.model.entities import UNCONNECTED, Pipe
from gasnet.model.store import PipeStore, StationStore

logger = get_logger(__name__)


def _unknown_pipe(pipe_id: int) -> Failure:
    logger.warning("Pipe %s not found", pipe_id)
    return Failure(FailureKind.UNKNOWN_ID, f"Pipe {pipe_id} not found")


def link_pipe(
    pipes: PipeStore, pipe_id: int, source_id: int, dest_id: int
) -> Outcome[Pipe]:
    """Point pipe ``pipe_id`` from ``source_id`` to ``dest_id``.

    Station existence and ``source_id != dest_id`` are the caller's checks
    (see ``connect_stations``). Both ids must be set, or both ``UNCONNECTED``.

    Returns:
        The updated pipe, or a ``Failure`` of kind ``UNKNOWN_ID`` or
        ``HALF_LINKED``. The pipe is left untouched on failure.
    """
    pipe = pipes.get(pipe_id)
    if pipe is None:
        return _unknown_pipe(pipe_id)
    if (source_id == UNCONNECTED) != (dest_id == UNCONNECTED):
        logger.warning(
            "Refusing to link pipe %s with one open end (%s -> %s)",
            pipe_id,
            source_id,
            dest_id,
        )
        return Failure(
            FailureKind.HALF_LINKED,
            f"Pipe {pipe_id} needs both ends connected, got {source_id} -> {dest_id}",
        )
    pipe.source_station_id = source_id
    pipe.dest_station_id = dest_id
    logger.info("Linked pipe %s: station %s -> station %s", pipe_id, source_id, dest_id)
    return pipe


def unlink_pipe(pipes: PipeStore, pipe_id: int) -> Outcome[Pipe]:
    """Return pipe ``pipe_id`` to the free state."""
    pipe = pipes.get(pipe_id)
    if pipe is None:
        return _unknown_pipe(pipe_id)
    pipe.source_station_id = UNCONNECTED
    pipe.dest_station_id = UNCONNECTED
    logger.info("Unlinked pipe %s", pipe_id)
    return pipe


def find_free_pipe(pipes: PipeStore, diameter: int) -> Optional[int]:
    """Return the id of the first free pipe with the given diameter.

    First fit in enumeration order; neither length nor id value is
    considered.

    Returns:
        The pipe id, or None when no free pipe of that diameter exists.
    """
    for pipe in pipes:
        if pipe.is_free and pipe.diameter == diameter:
            return pipe.id
    return None


def connect_stations(
    pipes: PipeStore,
    stations: StationStore,
    source_id: int,
    dest_id: int,
    diameter: int,
    length: Optional[float] = None,
    km_mark: str = "",
    under_repair: bool = False,
) -> Outcome[Pipe]:
    """Connect two stations with a free pipe, creating one if needed.

    A free pipe of ``diameter`` is reused when available. Otherwise a new
    pipe is created from ``length``, ``km_mark`` and ``under_repair``.

    Args:
        pipes: Pipe store.
        stations: Station store used to validate the endpoints.
        source_id: Upstream station.
        dest_id: Downstream station.
        diameter: Required pipe diameter.
        length: Length for a newly created pipe. When None and no free pipe
            exists, nothing is created.
        km_mark: Name for a newly created pipe.
        under_repair: Repair flag for a newly created pipe.

    Returns:
        The linked pipe, or a ``Failure`` of kind ``SELF_LOOP``,
        ``UNKNOWN_ID``, ``INVALID_DIAMETER`` or ``NO_FREE_PIPE``.
    """
    if source_id == dest_id:
        return Failure(FailureKind.SELF_LOOP, "Loops are not allowed")
    missing = [sid for sid in (source_id, dest_id) if sid not in stations]
    if missing:
        return Failure(
            FailureKind.UNKNOWN_ID,
            f"Station(s) not found: {', '.join(map(str, missing))}",
        )
    if not pipes.config.is_allowed_diameter(diameter):
        return Failure(
            FailureKind.INVALID_DIAMETER,
            f"Diameter {diameter} is not one of {list(pipes.config.allowed_diameters)}",
        )

    pipe_id = find_free_pipe(pipes, diameter)
    if pipe_id is None:
        if length is None:
            return Failure(
                FailureKind.NO_FREE_PIPE,
                f"No free pipe with diameter {diameter} and no length to create one",
            )
        try:
            pipe_id = pipes.add(
                Pipe(
                    km_mark=km_mark,
                    length=length,
                    diameter=diameter,
                    under_repair=under_repair,
                )
            )
        except ValueError as exc:
            return Failure(FailureKind.NO_FREE_PIPE, f"Cannot create pipe: {exc}")
        logger.info("No free %s mm pipe; created pipe %s", diameter, pipe_id)

    return link_pipe(pipes, pipe_id, source_id, dest_id)


def disconnect_pipe(pipes: PipeStore, pipe_id: int) -> Outcome[Pipe]:
    """Remove pipe ``pipe_id`` from the network, keeping the record."""
    return unlink_pipe(pipes, pipe_id)
