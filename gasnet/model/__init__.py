"""Network records and their stores."""

from gasnet.model.entities import UNCONNECTED, Pipe, Station
from gasnet.model.store import EntityStore, PipeStore, StationStore

__all__ = [
    "UNCONNECTED",
    "Pipe",
    "Station",
    "EntityStore",
    "PipeStore",
    "StationStore",
]
