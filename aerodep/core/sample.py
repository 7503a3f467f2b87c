"""
Sample Aircraft Graph

A small starter graph so analyses do not start empty:

    Avionics        -> Electrical
    Autopilot       -> Avionics
    Flight Controls -> Hydraulics
    Flight Controls -> Electrical
"""

from __future__ import annotations
import re

from .graph import SubsystemGraph
from .models import SystemNode, SystemType, DependencyStrength


def slugify(name: str) -> str:
    """Node id derived from a display name ("Flight Controls" -> "flight_controls")."""
    return re.sub(r"[^a-z0-9]+", "_", name.strip().lower()).strip("_")


SAMPLE_SYSTEMS = [
    ("Electrical", SystemType.ELECTRICAL),
    ("Avionics", SystemType.AVIONICS),
    ("Autopilot", SystemType.AUTOPILOT),
    ("Hydraulics", SystemType.HYDRAULICS),
    ("Flight Controls", SystemType.FLIGHT_CONTROLS),
]

# (dependent, dependency)
SAMPLE_DEPENDENCIES = [
    ("Avionics", "Electrical"),
    ("Autopilot", "Avionics"),
    ("Flight Controls", "Hydraulics"),
    ("Flight Controls", "Electrical"),
]


def build_sample_graph() -> SubsystemGraph:
    graph = SubsystemGraph()

    for name, system_type in SAMPLE_SYSTEMS:
        graph.add_node(SystemNode(id=slugify(name), name=name, type=system_type))

    for dependent, dependency in SAMPLE_DEPENDENCIES:
        graph.add_edge(slugify(dependent), slugify(dependency), DependencyStrength.MAJOR)

    return graph
