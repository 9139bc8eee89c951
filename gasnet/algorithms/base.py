from __future__ import annotations

from typing import Union

#: Station identifier. Pipes refer to stations by this id, never by object.
StationID = int

#: Path cost in the network (pipe length in km).
Cost = Union[int, float]

#: Flow-carrying capacity in scaled, human-readable units.
Capacity = Union[int, float]

#: Infinite path cost for pipes that cannot be traversed.
INF_COST: float = float("inf")
