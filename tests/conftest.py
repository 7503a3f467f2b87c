"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the failure propagation tests.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "propagation"   # Run only propagation tests
    pytest tests/ --quick            # Skip slow tests
"""

import sys
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Tuple

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from aerodep.core import (
    SubsystemGraph,
    SystemNode,
    SystemStatus,
    DependencyStrength,
    build_sample_graph,
)


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# Graph Fixtures
# =============================================================================

EdgeSpec = Tuple[str, str, DependencyStrength]


def make_graph(
    names: Iterable[str],
    edges: Iterable[EdgeSpec] = (),
    failed: Iterable[str] = (),
    groups: Optional[Dict[str, str]] = None,
) -> SubsystemGraph:
    """
    Build a graph whose node ids equal their names.

    Edges are (dependent, dependency, strength) triples.
    """
    graph = SubsystemGraph()
    for name in names:
        graph.add_node(SystemNode(id=name, name=name))
    for dependent, dependency, strength in edges:
        graph.add_edge(dependent, dependency, strength)
    for name, label in (groups or {}).items():
        graph.set_redundancy_group(name, label)
    for name in failed:
        graph.set_status(name, SystemStatus.FAILED)
    return graph


@pytest.fixture
def graph_factory() -> Callable[..., SubsystemGraph]:
    return make_graph


@pytest.fixture
def chain_graph() -> SubsystemGraph:
    """A -> B (CRITICAL), B -> C (CRITICAL), C failed, no redundancy groups."""
    return make_graph(
        ["A", "B", "C"],
        [
            ("A", "B", DependencyStrength.CRITICAL),
            ("B", "C", DependencyStrength.CRITICAL),
        ],
        failed=["C"],
    )


@pytest.fixture
def redundant_graph() -> SubsystemGraph:
    """Two-member group G (P1 failed, P2 healthy); D depends CRITICALly on P1."""
    return make_graph(
        ["P1", "P2", "D"],
        [("D", "P1", DependencyStrength.CRITICAL)],
        failed=["P1"],
        groups={"P1": "G", "P2": "G"},
    )


@pytest.fixture
def sample_graph() -> SubsystemGraph:
    return build_sample_graph()
