"""
Error Taxonomy

Exceptions raised by the graph editing surface and the propagation engine,
plus the record type for edges skipped during a propagation run.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any

from .models import EdgeOutcome


class AeroDepError(Exception):
    """Base class for all analyzer errors."""


class NoFailedSeeds(AeroDepError):
    """Raised when propagation is requested without any failed seed node."""

    def __init__(self, message: str = "Mark at least one system as Failed before running analysis."):
        super().__init__(message)


class NodeNotFoundError(AeroDepError, KeyError):
    """Raised when an editing operation references an unknown node id."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node '{node_id}' not found")

    def __str__(self) -> str:
        return self.args[0]


class EdgeRejectedError(AeroDepError):
    """Raised by add_edge(strict=True) when the edge violates a graph invariant."""

    def __init__(self, from_id: str, to_id: str, outcome: EdgeOutcome):
        self.from_id = from_id
        self.to_id = to_id
        self.outcome = outcome
        super().__init__(f"Edge {from_id} -> {to_id} rejected: {outcome.value}")


@dataclass(frozen=True)
class DanglingEdgeReference:
    """An adjacency entry that could not be resolved during propagation."""
    dependent_id: str
    dependency_id: str
    reason: str  # "missing_edge" or "missing_node"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dependent": self.dependent_id,
            "dependency": self.dependency_id,
            "reason": self.reason,
        }
