"""Pipe metrics: flow capacity and path weight.

The capacity is a readability-scaled heuristic, ``sqrt(d^5 / l) / 100``
rounded half away from zero, with diameter in millimetres and length in
kilometres. It grows with diameter and shrinks with length; it is not a
fluid-dynamics flow rate.
"""

from __future__ import annotations

import math

from gasnet.algorithms.base import INF_COST, Capacity, Cost
from gasnet.config import NETWORK_CONFIG, NetworkConfig
from gasnet.model.entities import Pipe


def _round_half_away(value: float) -> float:
    # Built-in round() is half-to-even; capacities must round halves upward.
    return math.copysign(math.floor(abs(value) + 0.5), value)


def pipe_capacity(pipe: Pipe, config: NetworkConfig = NETWORK_CONFIG) -> Capacity:
    """Return the flow capacity of ``pipe``.

    Args:
        pipe: Pipe to evaluate.
        config: Supplies the scaling divisor.

    Returns:
        0.0 for a pipe under repair, otherwise
        ``round(sqrt(diameter**5 / length) / capacity_divisor)``.
    """
    if pipe.under_repair:
        return 0.0
    raw = math.sqrt(float(pipe.diameter) ** 5 / pipe.length)
    return _round_half_away(raw / config.capacity_divisor)


def pipe_weight(pipe: Pipe) -> Cost:
    """Return the path cost of ``pipe``: its length, or infinity under repair."""
    if pipe.under_repair:
        return INF_COST
    return pipe.length
