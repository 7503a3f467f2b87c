"""
Failure Propagation

Redundancy-aware cascade analysis over a SubsystemGraph.

Usage:
    from aerodep.core import build_sample_graph, SystemStatus
    from aerodep.simulation import run_propagation

    graph = build_sample_graph()
    graph.set_status("electrical", SystemStatus.FAILED)
    for line in run_propagation(graph, graph.failed_node_ids()):
        print(line)
"""

from .redundancy import RedundancyIndex, GroupStats
from .explanations import Explanation, ExplanationPolicy, ExplanationRecorder
from .propagation import (
    PropagationEngine,
    PropagationResult,
    StatusChange,
    propose_status,
    run_propagation,
    snapshot_statuses,
    restore_statuses,
)
from .session import AnalysisSession

__all__ = [
    "RedundancyIndex",
    "GroupStats",
    "Explanation",
    "ExplanationPolicy",
    "ExplanationRecorder",
    "PropagationEngine",
    "PropagationResult",
    "StatusChange",
    "propose_status",
    "run_propagation",
    "snapshot_statuses",
    "restore_statuses",
    "AnalysisSession",
]
