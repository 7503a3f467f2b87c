"""
Explanation Recorder

Keeps one human-readable explanation per node whose status was set or
changed by an analysis. Entries are overwritten, not accumulated, and are
emitted sorted by their rendered text.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Any

from aerodep.core.models import SystemNode, SystemStatus, DependencyStrength, ExplanationPolicy


@dataclass(frozen=True)
class Explanation:
    """Why a node ended up in its status."""
    node_id: str
    node_name: str
    status: SystemStatus
    cause_id: Optional[str] = None
    cause_name: Optional[str] = None
    strength: Optional[DependencyStrength] = None

    @property
    def is_source(self) -> bool:
        return self.cause_id is None

    @property
    def text(self) -> str:
        if self.is_source:
            return f"{self.node_name} is FAILED (source)."
        if self.status == SystemStatus.FAILED:
            return f"{self.node_name} FAILED due to {self.strength.label} dependency on {self.cause_name}."
        return f"{self.node_name} degraded due to {self.strength.label} dependency on {self.cause_name}."

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node": self.node_id,
            "status": self.status.value,
            "cause": self.cause_id,
            "strength": self.strength.value if self.strength else None,
            "text": self.text,
        }


class ExplanationRecorder:
    """Explanation store keyed by node id."""

    def __init__(self, policy: ExplanationPolicy = ExplanationPolicy.LAST_CAUSE):
        self.policy = policy
        self._entries: Dict[str, Explanation] = {}

    def record_source(self, node: SystemNode) -> Explanation:
        entry = Explanation(node_id=node.id, node_name=node.name, status=SystemStatus.FAILED)
        self._entries[node.id] = entry
        return entry

    def record_change(
        self,
        node: SystemNode,
        status: SystemStatus,
        cause: SystemNode,
        strength: DependencyStrength,
    ) -> Explanation:
        entry = Explanation(
            node_id=node.id,
            node_name=node.name,
            status=status,
            cause_id=cause.id,
            cause_name=cause.name,
            strength=strength,
        )
        self._entries[node.id] = entry
        return entry

    def offer_alternative(
        self,
        node: SystemNode,
        cause: SystemNode,
        strength: DependencyStrength,
    ) -> bool:
        """
        Offer a cause that would justify the node's current status without
        changing it. Only STRONGEST_CAUSE acts on it, and only over a
        derived explanation at the same level with a weaker edge.
        """
        if self.policy != ExplanationPolicy.STRONGEST_CAUSE:
            return False

        existing = self._entries.get(node.id)
        if existing is None or existing.is_source:
            return False
        if existing.status != node.status or strength <= existing.strength:
            return False

        self.record_change(node, node.status, cause, strength)
        return True

    def get(self, node_id: str) -> Optional[Explanation]:
        return self._entries.get(node_id)

    def entries(self) -> List[Explanation]:
        return sorted(self._entries.values(), key=lambda e: e.text)

    def lines(self) -> List[str]:
        """Rendered explanations in lexicographic order."""
        return sorted(e.text for e in self._entries.values())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._entries
