"""
Core Graph Model and Errors
"""
from .models import (
    SystemStatus,
    DependencyStrength,
    SystemType,
    FailureMode,
    EdgeOutcome,
    ExplanationPolicy,
    SystemNode,
    DependencyEdge,
)
from .graph import SubsystemGraph, GraphSummary
from .errors import (
    AeroDepError,
    NoFailedSeeds,
    NodeNotFoundError,
    EdgeRejectedError,
    DanglingEdgeReference,
)
from .sample import build_sample_graph, slugify

__all__ = [
    "SystemStatus",
    "DependencyStrength",
    "SystemType",
    "FailureMode",
    "EdgeOutcome",
    "ExplanationPolicy",
    "SystemNode",
    "DependencyEdge",
    "SubsystemGraph",
    "GraphSummary",
    "AeroDepError",
    "NoFailedSeeds",
    "NodeNotFoundError",
    "EdgeRejectedError",
    "DanglingEdgeReference",
    "build_sample_graph",
    "slugify",
]
