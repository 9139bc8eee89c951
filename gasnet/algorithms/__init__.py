"""Network algorithms: pipe metrics, adjacency views, and the three engines."""

from gasnet.algorithms.max_flow import calc_max_flow, calc_max_flow_summary
from gasnet.algorithms.metrics import pipe_capacity, pipe_weight
from gasnet.algorithms.spf import shortest_path
from gasnet.algorithms.topo import topological_order
from gasnet.algorithms.types import (
    Failure,
    FailureKind,
    FlowSummary,
    LinkedPipeInfo,
    PathResult,
)

__all__ = [
    "calc_max_flow",
    "calc_max_flow_summary",
    "pipe_capacity",
    "pipe_weight",
    "shortest_path",
    "topological_order",
    "Failure",
    "FailureKind",
    "FlowSummary",
    "LinkedPipeInfo",
    "PathResult",
]
