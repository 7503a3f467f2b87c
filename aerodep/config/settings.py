"""
Application Settings

Environment configuration for analyses and the CLI.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from aerodep.core.models import ExplanationPolicy


_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Settings:
    """Application settings from environment."""

    log_level: str = "INFO"
    explanation_policy: ExplanationPolicy = ExplanationPolicy.LAST_CAUSE

    # Watchdog for pathological graph sizes (None = unbounded)
    max_state_changes: Optional[int] = None

    use_color: bool = True

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        log_level = os.getenv("AERODEP_LOG_LEVEL", "INFO").upper()
        if not isinstance(getattr(logging, log_level, None), int):
            raise ValueError(f"AERODEP_LOG_LEVEL: unknown level '{log_level}'")

        policy_name = os.getenv("AERODEP_EXPLANATION_POLICY", ExplanationPolicy.LAST_CAUSE.value)
        try:
            policy = ExplanationPolicy(policy_name.strip().lower())
        except ValueError:
            choices = ", ".join(p.value for p in ExplanationPolicy)
            raise ValueError(f"AERODEP_EXPLANATION_POLICY: expected one of {choices}, got '{policy_name}'")

        raw_limit = os.getenv("AERODEP_MAX_STATE_CHANGES", "").strip()
        max_state_changes = None
        if raw_limit:
            try:
                max_state_changes = int(raw_limit)
            except ValueError:
                raise ValueError(f"AERODEP_MAX_STATE_CHANGES: expected an integer, got '{raw_limit}'")
            if max_state_changes < 1:
                raise ValueError("AERODEP_MAX_STATE_CHANGES: must be at least 1")

        use_color = os.getenv("AERODEP_COLOR", "1").strip().lower() not in _FALSE_VALUES
        if os.getenv("NO_COLOR"):
            use_color = False

        return cls(
            log_level=log_level,
            explanation_policy=policy,
            max_state_changes=max_state_changes,
            use_color=use_color,
        )
