"""
Class hierarchy diagrams for detected prototypal inheritance.
Builds a NetworkX graph of subclass -> superclass edges and renders it as Mermaid.
"""

import logging
import re
from typing import Any, Dict, Iterable

import networkx as nx

from protoclass.domain.models.inheritance import ClassInheritance

logger = logging.getLogger(__name__)


class HierarchyDiagramService:
    """
    Service for turning grouped inheritance evidence into diagrams.
    """

    _NODE_ID_PATTERN = re.compile(r"[^A-Za-z0-9_]")

    def build_graph(self, classes: Iterable[ClassInheritance]) -> nx.DiGraph:
        """
        Build a directed graph with one edge per class pointing at its superclass.

        Args:
            classes: Grouped inheritance entries

        Returns:
            NetworkX DiGraph keyed by dotted class names
        """
        graph = nx.DiGraph()
        for entry in classes:
            super_name = entry.super_class_name
            self._register_node(graph, entry.class_name)
            self._register_node(graph, super_name)
            graph.add_edge(
                entry.class_name,
                super_name,
                evidence=len(entry.related_expressions),
            )

        logger.debug(
            "Built hierarchy graph with %d nodes and %d edges",
            graph.number_of_nodes(),
            graph.number_of_edges(),
        )
        return graph

    def generate_mermaid(self, classes: Iterable[ClassInheritance]) -> str:
        """Render grouped inheritance entries straight to Mermaid."""
        return self.networkx_to_mermaid(self.build_graph(classes))

    def _register_node(self, graph: nx.DiGraph, name: str) -> None:
        if name not in graph:
            graph.add_node(name, label=self._sanitize_label(name))

    def _sanitize_label(self, label: Any) -> str:
        """Normalize diagram labels to Mermaid-friendly text."""

        if label is None:
            return ""

        text = str(label).replace("\n", " ").strip()
        return text.replace('"', "'")

    def _node_id(self, name: Any, ids: Dict[Any, str]) -> str:
        if name not in ids:
            base = self._NODE_ID_PATTERN.sub("_", str(name)) or "node"
            ids[name] = f"{base}_{len(ids)}" if base in ids.values() else base
        return ids[name]

    # ===== NetworkX to Mermaid =====

    def networkx_to_mermaid(self, G: nx.DiGraph, graph_type: str = "graph BT") -> str:
        """
        Convert NetworkX graph to Mermaid diagram.

        Args:
            G: NetworkX directed graph
            graph_type: Mermaid graph type (e.g., "graph BT", "flowchart LR")

        Returns:
            Mermaid diagram string
        """
        lines = [graph_type]
        ids: Dict[Any, str] = {}

        for node, data in G.nodes(data=True):
            label = data.get("label", str(node))
            lines.append(f'    {self._node_id(node, ids)}["{label}"]')

        for u, v in G.edges():
            lines.append(f"    {self._node_id(u, ids)} --> {self._node_id(v, ids)}")

        return "\n".join(lines)
