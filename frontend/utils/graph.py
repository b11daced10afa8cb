"""Pyvis network graph for the scenario canvas."""
from __future__ import annotations

import tempfile
from pathlib import Path

from pyvis.network import Network

from backend import config
from backend.services.graph import DisplayGraph

# Passed positionally or not part of the vis-network schema.
_RENDER_SKIP = {"id", "type", "from", "to"}


def build_network(graph: DisplayGraph, height: int | None = None) -> Network:
    """
    Build the interactive scenario network: one vis node per decorated node,
    one directed edge per decorated edge, barnes-hut physics, hover enabled.
    """
    net = Network(
        height=f"{height or config.GRAPH_HEIGHT_PX}px",
        width="100%",
        directed=True,
        notebook=False,
        heading="",
        bgcolor="#020617",
        cdn_resources="remote",
    )
    net.barnes_hut(gravity=-5000, spring_length=120)
    net.toggle_stabilization(True)
    for n in graph.nodes:
        opts = {k: v for k, v in n.items() if k not in _RENDER_SKIP}
        net.add_node(n["id"], **opts)
    for e in graph.edges:
        opts = {k: v for k, v in e.items() if k not in _RENDER_SKIP}
        net.add_edge(e["from"], e["to"], id=e["id"], **opts)
    net.options.interaction.hover = True
    return net


def build_network_graph_html(graph: DisplayGraph, height: int | None = None) -> str:
    """Return HTML string for st.components.v1.html."""
    net = build_network(graph, height)
    with tempfile.NamedTemporaryFile(mode="w", suffix=".html", delete=False) as f:
        tmp = f.name
    try:
        net.save_graph(tmp)
        return Path(tmp).read_text()
    finally:
        Path(tmp).unlink(missing_ok=True)
