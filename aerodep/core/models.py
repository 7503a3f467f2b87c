"""
Core Value Objects and Entities

Subsystem nodes, dependency edges and the ordered enums that drive
failure propagation (status lattice and dependency strength).
"""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Tuple


# =============================================================================
# Ordered Enums
# =============================================================================

class SystemStatus(Enum):
    """
    Health status of a subsystem.

    Totally ordered: NOMINAL < DEGRADED < FAILED. Propagation only ever
    moves a node upward in this order.
    """
    NOMINAL = "nominal"
    DEGRADED = "degraded"
    FAILED = "failed"

    @property
    def numeric(self) -> int:
        """Numeric value for comparison (higher = worse)."""
        return {"nominal": 0, "degraded": 1, "failed": 2}[self.value]

    @property
    def color(self) -> str:
        """ANSI color code for terminal output."""
        return {
            "nominal": "\033[94m",   # Blue
            "degraded": "\033[93m",  # Yellow
            "failed": "\033[91m",    # Red
        }[self.value]

    def __ge__(self, other: "SystemStatus") -> bool:
        if isinstance(other, SystemStatus):
            return self.numeric >= other.numeric
        return NotImplemented

    def __gt__(self, other: "SystemStatus") -> bool:
        if isinstance(other, SystemStatus):
            return self.numeric > other.numeric
        return NotImplemented

    def __le__(self, other: "SystemStatus") -> bool:
        if isinstance(other, SystemStatus):
            return self.numeric <= other.numeric
        return NotImplemented

    def __lt__(self, other: "SystemStatus") -> bool:
        if isinstance(other, SystemStatus):
            return self.numeric < other.numeric
        return NotImplemented


class DependencyStrength(Enum):
    """
    How strongly a dependent is affected when its dependency fails.

    INFORMATIONAL: display only
    MINOR:         might degrade
    MAJOR:         degradation likely
    CRITICAL:      can force failure
    """
    INFORMATIONAL = "informational"
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"

    @property
    def numeric(self) -> int:
        """Numeric value for comparison (higher = stronger)."""
        return {"informational": 0, "minor": 1, "major": 2, "critical": 3}[self.value]

    @property
    def label(self) -> str:
        """Upper-case label used in explanations."""
        return self.name

    def __ge__(self, other: "DependencyStrength") -> bool:
        if isinstance(other, DependencyStrength):
            return self.numeric >= other.numeric
        return NotImplemented

    def __gt__(self, other: "DependencyStrength") -> bool:
        if isinstance(other, DependencyStrength):
            return self.numeric > other.numeric
        return NotImplemented

    def __le__(self, other: "DependencyStrength") -> bool:
        if isinstance(other, DependencyStrength):
            return self.numeric <= other.numeric
        return NotImplemented

    def __lt__(self, other: "DependencyStrength") -> bool:
        if isinstance(other, DependencyStrength):
            return self.numeric < other.numeric
        return NotImplemented


# =============================================================================
# Informational Enums
# =============================================================================

class SystemType(Enum):
    """Category of an aircraft subsystem (informational only)."""
    ELECTRICAL = "Electrical"
    AVIONICS = "Avionics"
    FLIGHT_CONTROLS = "FlightControls"
    HYDRAULICS = "Hydraulics"
    PNEUMATICS = "Pneumatics"
    FUEL = "Fuel"
    PROPULSION = "Propulsion"
    NAVIGATION = "Navigation"
    COMMUNICATIONS = "Communications"
    SENSORS = "Sensors"
    ANTI_ICE = "AntiIce"
    ENVIRONMENTAL = "Environmental"
    LANDING_GEAR = "LandingGear"
    FIRE_PROTECTION = "FireProtection"
    AUTOPILOT = "Autopilot"
    MISSION_SYSTEMS = "MissionSystems"
    OTHER = "Other"


class FailureMode(Enum):
    """How a failure manifests. Tagged on nodes, not used by propagation."""
    NONE = "none"
    INTERMITTENT = "intermittent"
    DEGRADED_PERFORMANCE = "degraded_performance"
    TOTAL_LOSS = "total_loss"
    OVERHEAT = "overheat"
    DATA_INVALID = "data_invalid"
    POWER_LOSS = "power_loss"


class ExplanationPolicy(Enum):
    """Which cause an explanation names when several could apply."""
    LAST_CAUSE = "last_cause"            # Last applied status change wins
    STRONGEST_CAUSE = "strongest_cause"  # Strongest edge justifying the final level wins


class EdgeOutcome(Enum):
    """Outcome of an add_edge request."""
    ADDED = "added"
    SELF_LOOP_REJECTED = "self_loop_rejected"
    DUPLICATE_REJECTED = "duplicate_rejected"
    MISSING_NODE_REJECTED = "missing_node_rejected"

    @property
    def accepted(self) -> bool:
        return self is EdgeOutcome.ADDED


# =============================================================================
# Entities
# =============================================================================

def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class SystemNode:
    """A subsystem in the dependency graph."""
    id: str = field(default_factory=_new_id)
    name: str = "New System"
    type: SystemType = SystemType.OTHER

    # e.g. "ELEC_BUS_A", "HYD_SYS_1". Empty means non-redundant.
    redundancy_group: str = ""

    status: SystemStatus = SystemStatus.NOMINAL
    failure_mode: FailureMode = FailureMode.NONE

    @property
    def group_key(self) -> str:
        """Trimmed redundancy group label ("" when ungrouped)."""
        return (self.redundancy_group or "").strip()

    @property
    def is_grouped(self) -> bool:
        return bool(self.group_key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "redundancy_group": self.group_key,
            "status": self.status.value,
            "failure_mode": self.failure_mode.value,
        }


@dataclass
class DependencyEdge:
    """
    A directed dependency.

    from_id -> to_id means "from_id depends on to_id": the dependent's
    health can be affected by the dependency's failure.
    """
    from_id: str
    to_id: str
    strength: DependencyStrength = DependencyStrength.MAJOR

    @property
    def key(self) -> Tuple[str, str]:
        return (self.from_id, self.to_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_id,
            "to": self.to_id,
            "strength": self.strength.value,
        }
