"""
Analysis Session

Caller-side Run / Clear Analysis workflow around the propagation engine.
The session, not the engine, owns the pre-analysis baseline snapshot and
the explanations shown to the user:

    - run_analysis():   snapshot statuses, propagate from the failed
                        nodes, keep that run's explanations
    - clear_analysis(): restore the snapshot verbatim, drop explanations
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from aerodep.config import Settings
from aerodep.core.errors import NoFailedSeeds
from aerodep.core.graph import SubsystemGraph
from aerodep.core.models import SystemStatus

from .explanations import ExplanationRecorder
from .propagation import (
    PropagationEngine,
    PropagationResult,
    snapshot_statuses,
    restore_statuses,
)


class AnalysisSession:
    """
    Baseline and explanation state for repeated analyses of one graph.

    Every successful run replaces the baseline with the statuses it found
    and starts from an empty explanation set, so clear_analysis() undoes
    the most recent run only.
    """

    def __init__(self, graph: SubsystemGraph, settings: Optional[Settings] = None):
        self.graph = graph
        self.settings = settings or Settings()
        self.logger = logging.getLogger(__name__)

        self._baseline: Dict[str, SystemStatus] = {}
        self._explanations: List[str] = []

    @property
    def has_baseline(self) -> bool:
        return bool(self._baseline)

    @property
    def baseline(self) -> Dict[str, SystemStatus]:
        return dict(self._baseline)

    @property
    def explanations(self) -> List[str]:
        """Explanations of the most recent run."""
        return list(self._explanations)

    def run_analysis(self, seeds: Optional[Iterable[str]] = None) -> Optional[PropagationResult]:
        """
        Propagate from ``seeds`` (default: every node currently FAILED).

        Returns None, with the graph untouched, when there is nothing to
        propagate from.
        """
        seed_ids = list(seeds) if seeds is not None else self.graph.failed_node_ids()
        self._explanations = []

        engine = PropagationEngine(
            self.graph,
            policy=self.settings.explanation_policy,
            max_state_changes=self.settings.max_state_changes,
        )
        recorder = ExplanationRecorder(self.settings.explanation_policy)

        baseline = snapshot_statuses(self.graph)
        try:
            result = engine.propagate(seed_ids, recorder=recorder)
        except NoFailedSeeds as e:
            self.logger.warning(f"Analysis skipped: {e}")
            return None

        self._baseline = baseline
        self._explanations = result.explanations
        return result

    def clear_analysis(self) -> None:
        """Roll statuses back to the pre-analysis baseline and forget explanations."""
        if self._baseline:
            restore_statuses(self.graph, self._baseline)
            self.logger.info(f"Restored baseline statuses for {len(self._baseline)} nodes")
            self._baseline = {}
        self._explanations = []
