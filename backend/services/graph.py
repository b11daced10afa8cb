"""
Scenario -> renderer-ready graph.

Decorated nodes and edges use the vis-network attribute schema so they can be
handed to pyvis as-is. The raw edge list is kept next to them for neighbour
queries in the narrative engine.
"""
from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any

from backend.models import Edge, EdgeType, NodeType, Scenario

DEFAULT_NODE_COLOR = "#e5e7eb"

NODE_COLORS: dict[NodeType, str] = {
    NodeType.SELLER: "#0ea5e9",
    NodeType.BUYER: "#22c55e",
    NodeType.BANK: "#f97373",
    NodeType.DEVICE: "#a855f7",
    NodeType.CARD: "#facc15",
    NodeType.DISPUTE: "#fb923c",
    NodeType.OTHER: DEFAULT_NODE_COLOR,
    NodeType.UNKNOWN: DEFAULT_NODE_COLOR,
}

# "other" and unrecognised tags share the neutral pill.
PILL_CLASSES: dict[NodeType, str] = {
    NodeType.SELLER: "pill-seller",
    NodeType.BUYER: "pill-buyer",
    NodeType.BANK: "pill-bank",
    NodeType.DEVICE: "pill-device",
    NodeType.CARD: "pill-card",
    NodeType.DISPUTE: "pill-dispute",
    NodeType.OTHER: "pill-other",
    NodeType.UNKNOWN: "pill-other",
}

EDGE_LABELS: dict[EdgeType, str] = {
    EdgeType.ORDER: "ORDER",
    EdgeType.PAYOUT: "PAYOUT",
    EdgeType.USES_DEVICE: "USES DEVICE",
    EdgeType.USES_CARD: "USES CARD",
    EdgeType.CONTROLS: "CONTROLS",
}

NODE_BORDER = "#020617"
NODE_HIGHLIGHT_BORDER = "#f9fafb"
NODE_FONT = {"color": "#e5e7eb", "size": 14}
EDGE_COLOR = {"color": "#4b5563", "highlight": "#6366f1"}
EDGE_FONT = {"color": "#9ca3af", "size": 10}


@dataclass(frozen=True)
class DisplayGraph:
    nodes: list[dict[str, Any]] = field(default_factory=list)
    edges: list[dict[str, Any]] = field(default_factory=list)
    node_by_id: dict[str, dict[str, Any]] = field(default_factory=dict)
    edges_raw: tuple[Edge, ...] = ()

    def node_type(self, node_id: str) -> str:
        node = self.node_by_id.get(node_id)
        return node["type"] if node else NodeType.OTHER.value


def node_color_for_type(node_type: str) -> str:
    return NODE_COLORS[NodeType.parse(node_type)]


def node_type_pill(node_type: str) -> str:
    """HTML badge for a node type; unrecognised types get the 'other' pill."""
    cls = PILL_CLASSES[NodeType.parse(node_type)]
    return f'<span class="pill-type {cls}">{html.escape(node_type)}</span>'


def edge_label(edge_type: str) -> str:
    # Other and unknown tags are shown as the raw tag, uppercased.
    return EDGE_LABELS.get(EdgeType.parse(edge_type), edge_type.upper())


def _decorate_node(node) -> dict[str, Any]:
    color = node_color_for_type(node.type)
    return {
        "id": node.id,
        "label": node.label,
        "title": f"{node.type}: {node.label}",
        "shape": "dot",
        "size": 18,
        "color": {
            "background": color,
            "border": NODE_BORDER,
            "highlight": {"background": color, "border": NODE_HIGHLIGHT_BORDER},
        },
        "font": dict(NODE_FONT),
        "type": node.type,
    }


def _decorate_edge(edge: Edge, idx: int) -> dict[str, Any]:
    return {
        "id": f"e{idx}",
        "from": edge.source,
        "to": edge.target,
        "arrows": "to",
        "color": dict(EDGE_COLOR),
        "width": 1.2,
        "label": edge_label(edge.type),
        "font": dict(EDGE_FONT),
        "type": edge.type,
    }


def build_display_graph(scenario: Scenario) -> DisplayGraph:
    """One decorated node per node and one decorated edge per edge, input order kept."""
    nodes = [_decorate_node(n) for n in scenario.nodes]
    edges = [_decorate_edge(e, idx) for idx, e in enumerate(scenario.edges)]
    return DisplayGraph(
        nodes=nodes,
        edges=edges,
        node_by_id={n["id"]: n for n in nodes},
        edges_raw=tuple(scenario.edges),
    )
