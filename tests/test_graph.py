"""
Tests for the subsystem graph model.

Covers:
    - Node insertion and lookup
    - Edge invariants (self-loop, duplicate, reverse edge, unknown nodes)
    - Transactional node removal
    - Editing surface (status, strength, redundancy group, toggle)
    - Summary statistics
    - Sample aircraft graph
"""

import pytest

from aerodep.core import (
    SubsystemGraph,
    SystemNode,
    SystemStatus,
    SystemType,
    DependencyStrength,
    EdgeOutcome,
    EdgeRejectedError,
    NodeNotFoundError,
    slugify,
)


# =============================================================================
# Nodes
# =============================================================================

class TestNodes:

    def test_default_node(self):
        node = SystemNode()
        assert node.name == "New System"
        assert node.type == SystemType.OTHER
        assert node.status == SystemStatus.NOMINAL
        assert node.redundancy_group == ""
        assert not node.is_grouped

    def test_to_dict_fields(self):
        data = SystemNode(id="hyd", name="Hydraulics", redundancy_group=" HYD ").to_dict()
        assert set(data) == {"id", "name", "type", "redundancy_group", "status", "failure_mode"}
        assert data["redundancy_group"] == "HYD"

    def test_generated_ids_are_unique(self):
        assert SystemNode().id != SystemNode().id

    def test_add_and_get(self, graph_factory):
        graph = graph_factory(["A", "B"])
        assert len(graph) == 2
        assert "A" in graph
        assert graph.get_node("A").name == "A"

    def test_get_unknown_raises(self, graph_factory):
        graph = graph_factory(["A"])
        with pytest.raises(NodeNotFoundError):
            graph.get_node("missing")

    def test_not_found_is_key_error(self, graph_factory):
        graph = graph_factory(["A"])
        with pytest.raises(KeyError):
            graph.set_status("missing", SystemStatus.FAILED)

    def test_find_by_name_is_case_insensitive(self, sample_graph):
        node = sample_graph.find_by_name("flight controls")
        assert node is not None
        assert node.id == "flight_controls"
        assert sample_graph.find_by_name("Fuel") is None

    def test_group_key_is_trimmed(self):
        node = SystemNode(redundancy_group="  HYD_SYS_1 ")
        assert node.group_key == "HYD_SYS_1"
        assert SystemNode(redundancy_group="   ").group_key == ""


# =============================================================================
# Edges
# =============================================================================

class TestEdges:

    def test_add_edge_updates_both_views(self, graph_factory):
        graph = graph_factory(["A", "B"])
        assert graph.add_edge("A", "B") is EdgeOutcome.ADDED

        assert graph.dependencies_of("A") == {"B"}
        assert graph.dependents_of("B") == {"A"}
        assert graph.dependents_of("A") == set()

    def test_default_strength_is_major(self, graph_factory):
        graph = graph_factory(["A", "B"])
        graph.add_edge("A", "B")
        assert graph.get_edge("A", "B").strength == DependencyStrength.MAJOR

    def test_self_loop_rejected(self, graph_factory):
        graph = graph_factory(["A"])
        outcome = graph.add_edge("A", "A", DependencyStrength.CRITICAL)

        assert outcome is EdgeOutcome.SELF_LOOP_REJECTED
        assert graph.edge_count == 0

    def test_duplicate_keeps_first_strength(self, graph_factory):
        graph = graph_factory(["A", "B"])
        graph.add_edge("A", "B", DependencyStrength.MINOR)
        outcome = graph.add_edge("A", "B", DependencyStrength.CRITICAL)

        assert outcome is EdgeOutcome.DUPLICATE_REJECTED
        assert graph.edge_count == 1
        assert graph.get_edge("A", "B").strength == DependencyStrength.MINOR

    def test_reverse_edge_is_distinct(self, graph_factory):
        graph = graph_factory(["A", "B"])
        graph.add_edge("A", "B", DependencyStrength.MINOR)
        outcome = graph.add_edge("B", "A", DependencyStrength.CRITICAL)

        assert outcome is EdgeOutcome.ADDED
        assert graph.edge_count == 2
        assert graph.get_edge("B", "A").strength == DependencyStrength.CRITICAL

    def test_unknown_endpoint_rejected(self, graph_factory):
        graph = graph_factory(["A"])
        assert graph.add_edge("A", "ghost") is EdgeOutcome.MISSING_NODE_REJECTED
        assert graph.edge_count == 0
        assert "ghost" not in graph.graph

    def test_strict_mode_raises(self, graph_factory):
        graph = graph_factory(["A", "B"])
        graph.add_edge("A", "B")

        with pytest.raises(EdgeRejectedError) as exc:
            graph.add_edge("A", "B", strict=True)
        assert exc.value.outcome is EdgeOutcome.DUPLICATE_REJECTED

        with pytest.raises(EdgeRejectedError):
            graph.add_edge("A", "A", strict=True)

    def test_get_edge_missing(self, graph_factory):
        graph = graph_factory(["A", "B"])
        assert graph.get_edge("A", "B") is None

    def test_remove_edge(self, graph_factory):
        graph = graph_factory(["A", "B"], [("A", "B", DependencyStrength.MAJOR)])

        assert graph.remove_edge("A", "B") is True
        assert graph.remove_edge("A", "B") is False
        assert graph.dependents_of("B") == set()
        assert graph.dependencies_of("A") == set()

    def test_edges_listing(self, graph_factory):
        graph = graph_factory(
            ["A", "B", "C"],
            [("A", "B", DependencyStrength.MAJOR), ("B", "C", DependencyStrength.MINOR)],
        )
        keys = sorted(e.key for e in graph.edges)
        assert keys == [("A", "B"), ("B", "C")]


# =============================================================================
# Node Removal
# =============================================================================

class TestRemoveNode:

    def test_remove_node_purges_all_references(self, graph_factory):
        graph = graph_factory(
            ["A", "B", "C"],
            [
                ("A", "B", DependencyStrength.MAJOR),
                ("B", "C", DependencyStrength.CRITICAL),
                ("C", "B", DependencyStrength.MINOR),
            ],
        )

        assert graph.remove_node("B") is True

        assert "B" not in graph
        assert graph.edge_count == 0
        assert graph.get_edge("A", "B") is None
        assert graph.get_edge("B", "C") is None
        assert graph.dependencies_of("A") == set()
        assert graph.dependents_of("C") == set()
        assert graph.dependencies_of("C") == set()

    def test_remove_unknown_node(self, graph_factory):
        graph = graph_factory(["A"])
        assert graph.remove_node("ghost") is False
        assert len(graph) == 1

    def test_edges_can_be_recreated_after_removal(self, graph_factory):
        graph = graph_factory(["A", "B"], [("A", "B", DependencyStrength.MAJOR)])
        graph.remove_node("B")
        graph.add_node(SystemNode(id="B", name="B"))

        assert graph.add_edge("A", "B", DependencyStrength.MINOR) is EdgeOutcome.ADDED


# =============================================================================
# Editing Surface
# =============================================================================

class TestEditing:

    def test_set_strength(self, graph_factory):
        graph = graph_factory(["A", "B"], [("A", "B", DependencyStrength.MAJOR)])

        assert graph.set_strength("A", "B", DependencyStrength.CRITICAL) is True
        assert graph.get_edge("A", "B").strength == DependencyStrength.CRITICAL
        assert graph.set_strength("B", "A", DependencyStrength.CRITICAL) is False

    def test_set_redundancy_group(self, graph_factory):
        graph = graph_factory(["A"])
        graph.set_redundancy_group("A", " ELEC_BUS_A ")
        assert graph.get_node("A").group_key == "ELEC_BUS_A"

        graph.set_redundancy_group("A", None)
        assert graph.get_node("A").redundancy_group == ""

    def test_rename(self, graph_factory):
        graph = graph_factory(["A"])
        graph.rename_node("A", "Air Data")
        assert graph.get_node("A").name == "Air Data"

    def test_toggle_failed(self, graph_factory):
        graph = graph_factory(["A"])
        assert graph.toggle_failed("A") == SystemStatus.FAILED
        assert graph.toggle_failed("A") == SystemStatus.NOMINAL

        graph.set_status("A", SystemStatus.DEGRADED)
        assert graph.toggle_failed("A") == SystemStatus.FAILED

    def test_failed_node_ids(self, graph_factory):
        graph = graph_factory(["A", "B", "C"], failed=["A", "C"])
        assert sorted(graph.failed_node_ids()) == ["A", "C"]


# =============================================================================
# Summary
# =============================================================================

class TestSummary:

    def test_acyclic_summary(self, chain_graph):
        summary = chain_graph.summary()

        assert summary.total_nodes == 3
        assert summary.total_edges == 2
        assert summary.is_acyclic is True
        assert summary.cycle_count == 0
        assert summary.connected_components == 1
        assert summary.status_counts == {"nominal": 2, "failed": 1}
        assert summary.strength_counts == {"critical": 2}

    def test_cycle_detected(self, graph_factory):
        graph = graph_factory(
            ["A", "B", "C"],
            [("A", "B", DependencyStrength.MAJOR), ("B", "A", DependencyStrength.MAJOR)],
            groups={"A": "G1", "B": "G1", "C": "G2"},
        )
        summary = graph.summary()

        assert summary.is_acyclic is False
        assert summary.cycle_count == 1
        assert summary.connected_components == 2
        assert summary.redundancy_groups == 2

    def test_empty_graph(self):
        summary = SubsystemGraph().summary()
        assert summary.total_nodes == 0
        assert summary.connected_components == 0
        assert summary.to_dict()["nodes"] == 0


# =============================================================================
# Sample Graph
# =============================================================================

class TestSampleGraph:

    def test_slugify(self):
        assert slugify("Flight Controls") == "flight_controls"
        assert slugify("  Anti-Ice ") == "anti_ice"

    def test_sample_structure(self, sample_graph):
        assert len(sample_graph) == 5
        assert sample_graph.edge_count == 4
        assert sample_graph.dependents_of("electrical") == {"avionics", "flight_controls"}
        assert sample_graph.dependencies_of("flight_controls") == {"hydraulics", "electrical"}
        assert all(e.strength == DependencyStrength.MAJOR for e in sample_graph.edges)
        assert sample_graph.get_node("autopilot").type == SystemType.AUTOPILOT
