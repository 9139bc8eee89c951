"""Id-keyed record stores for pipes and stations.

Records are kept in insertion order, which is the enumeration order every
network algorithm relies on. Ids are assigned from a per-store counter that
only ever moves forward, so deleted ids are never reused.
"""

from __future__ import annotations

from typing import Dict, Generic, Iterator, List, Optional, TypeVar

from gasnet.config import NETWORK_CONFIG, NetworkConfig
from gasnet.logging import get_logger
from gasnet.model.entities import Pipe, Station

logger = get_logger(__name__)

T = TypeVar("T", Pipe, Station)


class EntityStore(Generic[T]):
    """Ordered collection of records addressable by integer id.

    Subclasses hook into ``_validate`` and ``_describe`` to check records
    before insertion and to render them in log messages.
    """

    kind: str = "record"

    def __init__(self) -> None:
        self._items: Dict[int, T] = {}
        self._next_id: int = 1

    @property
    def next_id(self) -> int:
        return self._next_id

    def add(self, record: T) -> int:
        """Insert ``record`` under a freshly assigned id.

        Args:
            record: Record to insert; its ``id`` field is overwritten.

        Returns:
            The id assigned to the record.

        Raises:
            ValueError: If the record fails validation.
        """
        self._validate(record)
        record.id = self._next_id
        self._next_id += 1
        self._items[record.id] = record
        logger.info("Added %s: %s", self.kind, self._describe(record))
        return record.id

    def add_existing(self, record: T) -> int:
        """Insert ``record`` keeping its own id (used when loading saved data).

        Raises:
            ValueError: If the id is not positive, already taken, or the record
                fails validation.
        """
        if record.id <= 0:
            raise ValueError(f"{self.kind} id must be positive, got {record.id}")
        if record.id in self._items:
            raise ValueError(f"{self.kind} id {record.id} already exists")
        self._validate(record)
        self._items[record.id] = record
        self._next_id = max(self._next_id, record.id + 1)
        logger.debug("Loaded %s: %s", self.kind, self._describe(record))
        return record.id

    def get(self, record_id: int) -> Optional[T]:
        """Return the record with ``record_id`` or None if absent."""
        return self._items.get(record_id)

    def delete(self, record_id: int) -> bool:
        """Remove the record with ``record_id``.

        Returns:
            True if a record was removed, False if the id was unknown.
        """
        record = self._items.pop(record_id, None)
        if record is None:
            return False
        logger.info("Deleted %s: %s", self.kind, self._describe(record))
        return True

    def all(self) -> List[T]:
        """Return all records in insertion order."""
        return list(self._items.values())

    def ids(self) -> List[int]:
        return list(self._items.keys())

    def clear(self) -> None:
        self._items.clear()
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items.values())

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._items

    def _validate(self, record: T) -> None:
        pass

    def _describe(self, record: T) -> str:
        return f"id={record.id}"


class PipeStore(EntityStore[Pipe]):
    """Store of pipe segments with length and diameter validation."""

    kind = "pipe"

    def __init__(self, config: NetworkConfig = NETWORK_CONFIG) -> None:
        super().__init__()
        self.config = config

    def _validate(self, record: Pipe) -> None:
        if record.length <= 0:
            raise ValueError(f"Pipe length must be positive, got {record.length}")
        if not self.config.is_allowed_diameter(record.diameter):
            raise ValueError(
                f"Pipe diameter {record.diameter} is not one of "
                f"{list(self.config.allowed_diameters)}"
            )
        if not (record.is_linked or record.is_free):
            raise ValueError(
                f"Pipe {record.id} has only one end connected "
                f"({record.source_station_id} -> {record.dest_station_id})"
            )

    def _describe(self, record: Pipe) -> str:
        return (
            f"id={record.id}, km_mark={record.km_mark!r}, "
            f"length={record.length}, diameter={record.diameter}"
        )


class StationStore(EntityStore[Station]):
    """Store of compressor stations."""

    kind = "station"

    def _validate(self, record: Station) -> None:
        if record.workshop_count < 0:
            raise ValueError("Workshop count cannot be negative")
        if not 0 <= record.workshop_working <= record.workshop_count:
            raise ValueError(
                f"Working workshops ({record.workshop_working}) must be between 0 "
                f"and the workshop count ({record.workshop_count})"
            )

    def _describe(self, record: Station) -> str:
        return (
            f"id={record.id}, name={record.name!r}, "
            f"workshops={record.workshop_working}/{record.workshop_count}, "
            f"class={record.classification!r}, working={record.working}"
        )
