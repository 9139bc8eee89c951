"""Gas network records: compressor stations and pipe segments."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

#: Station id value meaning "pipe end not connected".
UNCONNECTED = 0


@dataclass
class Station:
    """A compressor station (graph node).

    Only ``id`` is consulted by the network algorithms; the remaining fields
    are descriptive.

    Attributes:
        id (int): Unique positive identifier assigned by the station store.
        name (str): Station name.
        workshop_count (int): Number of workshops at the station.
        workshop_working (int): Number of workshops currently in operation.
        classification (str): Station class label.
        working (bool): Whether the station is in service.
    """

    id: int = 0
    name: str = ""
    workshop_count: int = 0
    workshop_working: int = 0
    classification: str = ""
    working: bool = True

    def workshop_load(self) -> float:
        """Return the share of working workshops as a percentage."""
        if self.workshop_count <= 0:
            return 0.0
        return self.workshop_working / self.workshop_count * 100.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Pipe:
    """A pipe segment (directed graph edge).

    A pipe is *linked* when both station references are set and *free* when
    neither is. Station references are plain ids resolved through the store.

    Attributes:
        id (int): Unique positive identifier assigned by the pipe store.
        km_mark (str): Kilometre mark used as a human-readable name.
        length (float): Length in kilometres (> 0).
        diameter (int): Diameter in millimetres.
        under_repair (bool): Whether the pipe is out of service for repair.
        source_station_id (int): Station the gas flows from, 0 if unconnected.
        dest_station_id (int): Station the gas flows to, 0 if unconnected.
    """

    id: int = 0
    km_mark: str = ""
    length: float = 1.0
    diameter: int = 500
    under_repair: bool = False
    source_station_id: int = UNCONNECTED
    dest_station_id: int = UNCONNECTED

    @property
    def is_linked(self) -> bool:
        return (
            self.source_station_id != UNCONNECTED
            and self.dest_station_id != UNCONNECTED
        )

    @property
    def is_free(self) -> bool:
        return (
            self.source_station_id == UNCONNECTED
            and self.dest_station_id == UNCONNECTED
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
