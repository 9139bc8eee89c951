"""Shared fixtures: small gas networks with fixed station and pipe ids.

Pipe tuples are ``(pipe_id, source, dest, length, diameter, under_repair)``;
``source``/``dest`` of 0 leave the pipe free.
"""

from __future__ import annotations

from typing import Callable, Iterable, Tuple

import pytest

from gasnet.model.entities import Pipe, Station
from gasnet.network import GasNetwork

PipeSpec = Tuple[int, int, int, float, int, bool]


def build_network(
    station_ids: Iterable[int], pipe_specs: Iterable[PipeSpec]
) -> GasNetwork:
    net = GasNetwork()
    for sid in station_ids:
        net.stations.add_existing(Station(id=sid, name=f"CS{sid}"))
    for pid, src, dst, length, diameter, repair in pipe_specs:
        net.pipes.add_existing(
            Pipe(
                id=pid,
                km_mark=f"km{pid}",
                length=length,
                diameter=diameter,
                under_repair=repair,
                source_station_id=src,
                dest_station_id=dst,
            )
        )
    return net


@pytest.fixture
def make_network() -> Callable[..., GasNetwork]:
    return build_network


@pytest.fixture
def line3() -> GasNetwork:
    #  1 --(10: 100km, 700mm)--> 2 --(11: 50km, 700mm)--> 3
    return build_network(
        [1, 2, 3],
        [
            (10, 1, 2, 100, 700, False),
            (11, 2, 3, 50, 700, False),
        ],
    )


@pytest.fixture
def diamond() -> GasNetwork:
    # Lengths:
    #        [10]      [10]
    #    ┌──────► 2 ───────┐
    #    │                 ▼
    #    1                 4
    #    │                 ▲
    #    └──────► 3 ───────┘
    #        [5]       [30]
    #
    # Plus a direct 1 -> 4 pipe of 1 km under repair.
    return build_network(
        [1, 2, 3, 4],
        [
            (1, 1, 2, 10, 1000, False),
            (2, 2, 4, 10, 500, False),
            (3, 1, 3, 5, 700, False),
            (4, 3, 4, 30, 1400, False),
            (5, 1, 4, 1, 1400, True),
        ],
    )


@pytest.fixture
def mixed_store() -> GasNetwork:
    # Two 700 mm pipes (one linked, one free) and a free 500 mm pipe.
    return build_network(
        [1, 2],
        [
            (1, 1, 2, 20, 700, False),
            (2, 0, 0, 15, 500, False),
            (3, 0, 0, 40, 700, False),
        ],
    )
