"""
Redundancy Index

Per-group health summary (total members, failed members), computed from
the current node states once per analysis run. Groups are not stored
entities: they are derived from the trimmed ``redundancy_group`` labels.

A failed node only cascades at full strength when its whole redundancy
group is down. Ungrouped nodes count as fully failed once they fail.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Any, Optional

from aerodep.core.models import SystemNode, SystemStatus


@dataclass(frozen=True)
class GroupStats:
    """Member counts for one redundancy group."""
    total: int
    failed: int

    @property
    def fully_failed(self) -> bool:
        return self.failed >= self.total

    @property
    def remaining(self) -> int:
        return max(0, self.total - self.failed)


class RedundancyIndex:
    """Read-only view over redundancy group health."""

    def __init__(self, stats: Optional[Dict[str, GroupStats]] = None):
        self._stats: Dict[str, GroupStats] = dict(stats or {})

    @classmethod
    def build(cls, nodes: Iterable[SystemNode]) -> RedundancyIndex:
        totals: Dict[str, int] = {}
        failed: Dict[str, int] = {}

        for node in nodes:
            key = node.group_key
            if not key:
                continue
            totals[key] = totals.get(key, 0) + 1
            if node.status == SystemStatus.FAILED:
                failed[key] = failed.get(key, 0) + 1

        return cls({
            key: GroupStats(total=total, failed=failed.get(key, 0))
            for key, total in totals.items()
        })

    def is_group_fully_failed(self, node: SystemNode) -> bool:
        """
        True if the node's group offers no remaining redundancy.

        Blank labels (ungrouped) and labels missing from the index both
        count as fully failed.
        """
        key = node.group_key
        if not key:
            return True
        stats = self._stats.get(key)
        if stats is None:
            return True
        return stats.fully_failed

    def stats(self, label: str) -> Optional[GroupStats]:
        return self._stats.get((label or "").strip())

    @property
    def groups(self) -> Dict[str, GroupStats]:
        return dict(self._stats)

    def __len__(self) -> int:
        return len(self._stats)

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and label.strip() in self._stats

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: {"total": s.total, "failed": s.failed, "fully_failed": s.fully_failed}
            for key, s in sorted(self._stats.items())
        }
