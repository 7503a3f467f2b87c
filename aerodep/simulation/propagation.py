"""
Failure Propagation Engine

Forward-propagates declared failures through the dependency graph and
explains every resulting status change.

Cascade Rules (dependent D of a FAILED dependency F, edge D -> F):
    - CRITICAL:      D -> FAILED if F's redundancy group is fully failed,
                     otherwise D -> DEGRADED
    - MAJOR / MINOR: NOMINAL D -> DEGRADED, otherwise unchanged
    - INFORMATIONAL: never changes D

A change is applied only when it is strictly worse than D's current
status, and only FAILED nodes push the cascade further. The worklist is a
FIFO queue with a pending-id set; a node is re-queued only after its
status worsened, so a run performs at most 2 x |nodes| status changes
(three-level lattice) and terminates on cyclic graphs as well.
"""

from __future__ import annotations
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Iterable, Any, Optional, Set

from aerodep.core.errors import NoFailedSeeds, DanglingEdgeReference
from aerodep.core.graph import SubsystemGraph
from aerodep.core.models import SystemStatus, DependencyStrength

from .explanations import ExplanationPolicy, ExplanationRecorder
from .redundancy import RedundancyIndex


@dataclass(frozen=True)
class StatusChange:
    """A single applied status change."""
    node_id: str
    before: SystemStatus
    after: SystemStatus
    cause_id: str
    strength: DependencyStrength
    order: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "node": self.node_id,
            "before": self.before.value,
            "after": self.after.value,
            "cause": self.cause_id,
            "strength": self.strength.value,
            "order": self.order,
        }


@dataclass
class PropagationResult:
    """Result of a propagation run."""
    seeds: List[str]
    explanations: List[str]
    changes: List[StatusChange] = field(default_factory=list)
    final_statuses: Dict[str, SystemStatus] = field(default_factory=dict)
    skipped: List[DanglingEdgeReference] = field(default_factory=list)
    truncated: bool = False
    duration_ms: float = 0.0
    component_names: Dict[str, str] = field(default_factory=dict)

    @property
    def changed_node_ids(self) -> List[str]:
        seen: Dict[str, None] = {}
        for change in self.changes:
            seen.setdefault(change.node_id, None)
        return list(seen)

    @property
    def skipped_edges(self) -> int:
        return len(self.skipped)

    def nodes_with_status(self, status: SystemStatus) -> List[str]:
        return sorted(n for n, s in self.final_statuses.items() if s == status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seeds": self.seeds,
            "explanations": self.explanations,
            "changes": [c.to_dict() for c in self.changes],
            "final_statuses": {k: v.value for k, v in self.final_statuses.items()},
            "skipped": [s.to_dict() for s in self.skipped],
            "truncated": self.truncated,
            "duration_ms": round(self.duration_ms, 3),
        }


class PropagationEngine:
    """
    Breadth-first failure cascade over a SubsystemGraph.

    The engine reads the graph and mutates node statuses only; it never
    adds or removes nodes or edges, and holds no baseline of its own.
    The caller must not edit the graph while propagate() runs.

    Example:
        >>> engine = PropagationEngine(graph)
        >>> result = engine.propagate(graph.failed_node_ids())
        >>> for line in result.explanations:
        ...     print(line)
    """

    def __init__(
        self,
        graph: SubsystemGraph,
        policy: ExplanationPolicy = ExplanationPolicy.LAST_CAUSE,
        max_state_changes: Optional[int] = None,
    ):
        """
        Args:
            graph: Graph to analyze
            policy: Which cause explanations name
            max_state_changes: Optional watchdog; the run stops early and
                is marked truncated once this many changes were applied
        """
        self.graph = graph
        self.policy = policy
        self.max_state_changes = max_state_changes
        self.logger = logging.getLogger(__name__)

    def propagate(
        self,
        seeds: Iterable[str],
        recorder: Optional[ExplanationRecorder] = None,
    ) -> PropagationResult:
        seed_ids = self._resolve_seeds(seeds)
        if not seed_ids:
            raise NoFailedSeeds()

        if recorder is None:
            recorder = ExplanationRecorder(self.policy)

        start = time.perf_counter()
        nodes = self.graph.nodes
        index = RedundancyIndex.build(nodes.values())

        self.logger.info(
            f"Propagating failure from {len(seed_ids)} seed(s) "
            f"across {len(nodes)} nodes, {len(index)} redundancy groups"
        )

        for seed_id in seed_ids:
            recorder.record_source(nodes[seed_id])

        queue = deque(seed_ids)
        pending: Set[str] = set(seed_ids)
        changes: List[StatusChange] = []
        skipped: List[DanglingEdgeReference] = []
        truncated = False

        while queue and not truncated:
            current_id = queue.popleft()
            pending.discard(current_id)

            current = nodes.get(current_id)
            if current is None:
                continue

            group_fully_failed = index.is_group_fully_failed(current)

            for dependent_id in self.graph.iter_dependents(current_id):
                edge = self.graph.get_edge(dependent_id, current_id)
                if edge is None:
                    skipped.append(DanglingEdgeReference(dependent_id, current_id, "missing_edge"))
                    continue

                dependent = nodes.get(dependent_id)
                if dependent is None:
                    skipped.append(DanglingEdgeReference(dependent_id, current_id, "missing_node"))
                    continue

                # Only an actually failed dependency contributes
                if current.status != SystemStatus.FAILED:
                    continue

                before = dependent.status
                proposed = propose_status(edge.strength, before, group_fully_failed)

                if proposed > before:
                    if self.max_state_changes is not None and len(changes) >= self.max_state_changes:
                        self.logger.warning(
                            f"Stopping propagation after {len(changes)} status changes (watchdog limit)"
                        )
                        truncated = True
                        break

                    dependent.status = proposed
                    changes.append(StatusChange(
                        node_id=dependent_id,
                        before=before,
                        after=proposed,
                        cause_id=current_id,
                        strength=edge.strength,
                        order=len(changes),
                    ))
                    recorder.record_change(dependent, proposed, current, edge.strength)

                    self.logger.debug(
                        f"{dependent.name}: {before.value} -> {proposed.value} "
                        f"({edge.strength.label} on {current.name})"
                    )

                    if dependent_id not in pending:
                        queue.append(dependent_id)
                        pending.add(dependent_id)

                elif before != SystemStatus.NOMINAL and impact_level(edge.strength, group_fully_failed) == before:
                    recorder.offer_alternative(dependent, current, edge.strength)

        if skipped:
            self.logger.warning(f"Skipped {len(skipped)} unresolved dependency reference(s)")

        duration_ms = (time.perf_counter() - start) * 1000
        self.logger.info(f"Propagation complete: {len(changes)} status change(s) in {duration_ms:.2f} ms")

        return PropagationResult(
            seeds=seed_ids,
            explanations=recorder.lines(),
            changes=changes,
            final_statuses={node_id: node.status for node_id, node in nodes.items()},
            skipped=skipped,
            truncated=truncated,
            duration_ms=duration_ms,
            component_names={node_id: node.name for node_id, node in nodes.items()},
        )

    def _resolve_seeds(self, seeds: Iterable[str]) -> List[str]:
        """Known, currently FAILED seed ids, deduplicated in order."""
        resolved: List[str] = []
        for seed_id in dict.fromkeys(seeds):
            node = self.graph.nodes.get(seed_id)
            if node is None:
                self.logger.warning(f"Ignoring seed '{seed_id}': not in graph")
            elif node.status != SystemStatus.FAILED:
                self.logger.warning(f"Ignoring seed '{seed_id}': status is {node.status.value}")
            else:
                resolved.append(seed_id)
        return resolved


# =============================================================================
# Status Rules
# =============================================================================

def propose_status(
    strength: DependencyStrength,
    before: SystemStatus,
    group_fully_failed: bool,
) -> SystemStatus:
    """Status proposed for a dependent whose dependency failed."""
    if strength == DependencyStrength.CRITICAL:
        return SystemStatus.FAILED if group_fully_failed else SystemStatus.DEGRADED
    if strength in (DependencyStrength.MAJOR, DependencyStrength.MINOR):
        return SystemStatus.DEGRADED if before == SystemStatus.NOMINAL else before
    return before


def impact_level(strength: DependencyStrength, group_fully_failed: bool) -> Optional[SystemStatus]:
    """Level a failed dependency can push a NOMINAL dependent to (None for INFORMATIONAL)."""
    if strength == DependencyStrength.INFORMATIONAL:
        return None
    return propose_status(strength, SystemStatus.NOMINAL, group_fully_failed)


# =============================================================================
# Caller-facing Boundary
# =============================================================================

def run_propagation(
    graph: SubsystemGraph,
    failed_seeds: Iterable[str],
    policy: ExplanationPolicy = ExplanationPolicy.LAST_CAUSE,
    recorder: Optional[ExplanationRecorder] = None,
    max_state_changes: Optional[int] = None,
) -> List[str]:
    """
    Run one analysis and return the sorted explanations.

    Raises:
        NoFailedSeeds: failed_seeds is empty (or holds no usable seed);
            the graph is left untouched.
    """
    seeds = list(failed_seeds)
    if not seeds:
        raise NoFailedSeeds()

    engine = PropagationEngine(graph, policy=policy, max_state_changes=max_state_changes)
    return engine.propagate(seeds, recorder=recorder).explanations


def snapshot_statuses(graph: SubsystemGraph) -> Dict[str, SystemStatus]:
    """Copy of every node's status, for later rollback."""
    return {node_id: node.status for node_id, node in graph.nodes.items()}


def restore_statuses(graph: SubsystemGraph, snapshot: Dict[str, SystemStatus]) -> None:
    """Copy a snapshot back verbatim; ids no longer in the graph are skipped."""
    for node_id, status in snapshot.items():
        node = graph.nodes.get(node_id)
        if node is not None:
            node.status = status
