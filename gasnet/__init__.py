"""gasnet: gas transport network modeling and analysis.

Models a network of compressor stations connected by pipes and computes the
shortest transit path, the maximum sustainable flow, and a cycle-free
processing order of stations.

Example:
    from gasnet import GasNetwork, Pipe, Station

    net = GasNetwork()
    a = net.add_station(Station(name="North"))
    b = net.add_station(Station(name="South"))
    net.connect_stations(a, b, diameter=700, length=100)

    path = net.shortest_path(a, b)
    flow = net.max_flow(a, b)
"""

from __future__ import annotations

from gasnet import cli, logging
from gasnet.algorithms.types import (
    Failure,
    FailureKind,
    FlowSummary,
    LinkedPipeInfo,
    PathResult,
)
from gasnet.io import load_network, save_network
from gasnet.model.entities import Pipe, Station
from gasnet.network import GasNetwork

__version__ = "0.1.0"

__all__ = [
    "cli",
    "logging",
    "Failure",
    "FailureKind",
    "FlowSummary",
    "LinkedPipeInfo",
    "PathResult",
    "load_network",
    "save_network",
    "Pipe",
    "Station",
    "GasNetwork",
]
