"""
Subsystem Dependency Graph

In-memory graph of subsystems and their directed dependency edges.

An edge A -> B means "A depends on B". Edges live in a single
networkx DiGraph (edge attribute ``edge`` holds the DependencyEdge), so the
two adjacency views are always mutual duals:
    - dependencies_of(A) = successors of A  (what A depends on)
    - dependents_of(B)   = predecessors of B (what depends on B)
"""

from __future__ import annotations
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Set, Any, Optional, Iterator

import networkx as nx

from .errors import NodeNotFoundError, EdgeRejectedError
from .models import (
    SystemNode,
    SystemStatus,
    DependencyEdge,
    DependencyStrength,
    EdgeOutcome,
)


@dataclass
class GraphSummary:
    """Summary statistics for a subsystem graph."""
    total_nodes: int = 0
    total_edges: int = 0
    status_counts: Dict[str, int] = field(default_factory=dict)
    type_counts: Dict[str, int] = field(default_factory=dict)
    strength_counts: Dict[str, int] = field(default_factory=dict)
    redundancy_groups: int = 0
    is_acyclic: bool = True
    cycle_count: int = 0
    connected_components: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": self.total_nodes,
            "edges": self.total_edges,
            "status_counts": self.status_counts,
            "type_counts": self.type_counts,
            "strength_counts": self.strength_counts,
            "redundancy_groups": self.redundancy_groups,
            "is_acyclic": self.is_acyclic,
            "cycle_count": self.cycle_count,
            "connected_components": self.connected_components,
        }


class SubsystemGraph:
    """
    Graph of subsystems for failure propagation analysis.

    The editing surface (add/remove nodes and edges, set status, strength
    and redundancy group) is consumed by whatever front-end builds the
    graph. Invalid edge requests are ignored and reported through an
    EdgeOutcome instead of raising, unless ``strict=True`` is passed.

    Example:
        >>> graph = SubsystemGraph()
        >>> elec = graph.add_node(SystemNode(id="elec", name="Electrical"))
        >>> avio = graph.add_node(SystemNode(id="avio", name="Avionics"))
        >>> graph.add_edge("avio", "elec", DependencyStrength.CRITICAL)
        <EdgeOutcome.ADDED: 'added'>
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

        # Edge structure (A -> B: A depends on B)
        self.graph = nx.DiGraph()

        # Node registry
        self.nodes: Dict[str, SystemNode] = {}

    # =========================================================================
    # Nodes
    # =========================================================================

    def add_node(self, node: SystemNode) -> SystemNode:
        """Insert a node keyed by its identifier."""
        self.nodes[node.id] = node
        self.graph.add_node(node.id)
        return node

    def remove_node(self, node_id: str) -> bool:
        """
        Remove a node together with every edge it appears in.

        networkx drops incident edges in both directions with the node, so
        neither adjacency view can be left holding the removed id.
        """
        if node_id not in self.nodes:
            return False

        incident = self.graph.in_degree(node_id) + self.graph.out_degree(node_id)
        self.graph.remove_node(node_id)
        del self.nodes[node_id]

        self.logger.debug(f"Removed node '{node_id}' and {incident} incident edges")
        return True

    def get_node(self, node_id: str) -> SystemNode:
        node = self.nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def find_by_name(self, name: str) -> Optional[SystemNode]:
        """First node whose name matches (case-insensitive), or None."""
        wanted = name.strip().lower()
        for node in self.nodes.values():
            if node.name.lower() == wanted:
                return node
        return None

    # =========================================================================
    # Edges
    # =========================================================================

    def add_edge(
        self,
        from_id: str,
        to_id: str,
        strength: DependencyStrength = DependencyStrength.MAJOR,
        strict: bool = False,
    ) -> EdgeOutcome:
        """
        Add a dependency edge: from_id depends on to_id.

        Self-loops, duplicates of an existing ordered pair and edges to
        unknown nodes are rejected without touching the graph. The first
        strength given for a pair is kept.
        """
        if from_id == to_id:
            outcome = EdgeOutcome.SELF_LOOP_REJECTED
        elif from_id not in self.nodes or to_id not in self.nodes:
            outcome = EdgeOutcome.MISSING_NODE_REJECTED
        elif self.graph.has_edge(from_id, to_id):
            outcome = EdgeOutcome.DUPLICATE_REJECTED
        else:
            edge = DependencyEdge(from_id=from_id, to_id=to_id, strength=strength)
            self.graph.add_edge(from_id, to_id, edge=edge)
            return EdgeOutcome.ADDED

        self.logger.debug(f"Ignored edge {from_id} -> {to_id}: {outcome.value}")
        if strict:
            raise EdgeRejectedError(from_id, to_id, outcome)
        return outcome

    def remove_edge(self, from_id: str, to_id: str) -> bool:
        if not self.graph.has_edge(from_id, to_id):
            return False
        self.graph.remove_edge(from_id, to_id)
        return True

    def get_edge(self, from_id: str, to_id: str) -> Optional[DependencyEdge]:
        """Edge for the ordered pair (from_id, to_id), or None."""
        data = self.graph.get_edge_data(from_id, to_id)
        if data is None:
            return None
        return data.get("edge")

    @property
    def edges(self) -> List[DependencyEdge]:
        return [
            data["edge"]
            for _, _, data in self.graph.edges(data=True)
            if "edge" in data
        ]

    def dependents_of(self, node_id: str) -> Set[str]:
        """Ids of nodes that depend on node_id."""
        if node_id not in self.graph:
            return set()
        return set(self.graph.predecessors(node_id))

    def dependencies_of(self, node_id: str) -> Set[str]:
        """Ids of nodes that node_id depends on."""
        if node_id not in self.graph:
            return set()
        return set(self.graph.successors(node_id))

    def iter_dependents(self, node_id: str) -> Iterator[str]:
        """Dependents in insertion order (deterministic traversal)."""
        if node_id not in self.graph:
            return iter(())
        return iter(list(self.graph.predecessors(node_id)))

    # =========================================================================
    # Editing Surface
    # =========================================================================

    def set_strength(self, from_id: str, to_id: str, strength: DependencyStrength) -> bool:
        edge = self.get_edge(from_id, to_id)
        if edge is None:
            return False
        edge.strength = strength
        return True

    def set_status(self, node_id: str, status: SystemStatus) -> None:
        self.get_node(node_id).status = status

    def set_redundancy_group(self, node_id: str, label: str) -> None:
        self.get_node(node_id).redundancy_group = label or ""

    def rename_node(self, node_id: str, name: str) -> None:
        self.get_node(node_id).name = name

    def toggle_failed(self, node_id: str) -> SystemStatus:
        """Quick-fail toggle: FAILED -> NOMINAL, anything else -> FAILED."""
        node = self.get_node(node_id)
        node.status = SystemStatus.NOMINAL if node.status == SystemStatus.FAILED else SystemStatus.FAILED
        return node.status

    # =========================================================================
    # Queries
    # =========================================================================

    def failed_node_ids(self) -> List[str]:
        return [n.id for n in self.nodes.values() if n.status == SystemStatus.FAILED]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return self.graph.number_of_edges()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def summary(self) -> GraphSummary:
        """Summary statistics including cycle and connectivity structure."""
        status_counts = Counter(n.status.value for n in self.nodes.values())
        type_counts = Counter(n.type.value for n in self.nodes.values())
        strength_counts = Counter(e.strength.value for e in self.edges)
        groups = {n.group_key for n in self.nodes.values() if n.is_grouped}

        cycle_count = sum(1 for _ in nx.simple_cycles(self.graph))

        return GraphSummary(
            total_nodes=self.node_count,
            total_edges=self.edge_count,
            status_counts=dict(status_counts),
            type_counts=dict(type_counts),
            strength_counts=dict(strength_counts),
            redundancy_groups=len(groups),
            is_acyclic=nx.is_directed_acyclic_graph(self.graph),
            cycle_count=cycle_count,
            connected_components=(
                nx.number_weakly_connected_components(self.graph)
                if self.graph.number_of_nodes() else 0
            ),
        )
