"""
Fraud Network Training Lab: main Streamlit layout.

Layout: sidebar (scenario picker, description, load, lens) | network canvas | narrative panels.
Panels: Summary, Node insight, Scenario lens, Checklist; each with a copy-to-clipboard button.
Run: streamlit run frontend/app.py  (from project root)
"""
import logging
import sys
from html import escape
from pathlib import Path

import streamlit as st

# Backend: ensure project root is on path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend import config
from backend.models import LENS_LABELS, Lens
from backend.services import view_state as vs
from backend.services.scenarios import ScenarioLoadError, get_scenarios
from frontend.styles import get_app_css, legend_html
from frontend.utils.clipboard import copy_button_html
from frontend.utils.graph import build_network_graph_html
from frontend.utils.tables import composition_frame, edges_frame, nodes_frame

config.configure_logging()
logger = logging.getLogger("frontend.app")

st.set_page_config(
    page_title="Fraud Network Training Lab",
    page_icon="🕸️",
    layout="wide",
    initial_sidebar_state="expanded",
)
st.markdown(get_app_css(), unsafe_allow_html=True)

st.markdown('<p class="hero-title">Fraud Network Training Lab</p>', unsafe_allow_html=True)
st.markdown(
    '<p class="hero-sub">Synthetic scenarios only. A thinking and training aid, not case evidence.</p>',
    unsafe_allow_html=True,
)

# -----------------------------------------------------------------------------
# Load scenarios once; nothing is interactive until this succeeds
# -----------------------------------------------------------------------------
try:
    scenarios = get_scenarios()
except ScenarioLoadError as e:
    logger.error("Scenario load failed: %s", e)
    st.error(f"Could not load scenarios: {e}")
    st.stop()

if not scenarios:
    st.warning("The scenario file is empty.")
    st.stop()

# -----------------------------------------------------------------------------
# Session state: one ViewState, replaced by pure updates on every event
# -----------------------------------------------------------------------------
if "view" not in st.session_state:
    st.session_state.view = vs.init_state(scenarios)
if "load_seq" not in st.session_state:
    st.session_state.load_seq = 0
state: vs.ViewState = st.session_state.view

scenario_ids = [s.id for s in scenarios]
scenario_names = {s.id: s.name for s in scenarios}
lens_values = [lens.value for lens in Lens]

# -----------------------------------------------------------------------------
# Sidebar: scenario picker, description, load button, lens
# -----------------------------------------------------------------------------
with st.sidebar:
    st.header("Scenario")
    picked = st.selectbox(
        "Select scenario",
        scenario_ids,
        index=scenario_ids.index(state.scenario_id) if state.scenario_id in scenario_ids else 0,
        format_func=lambda sid: scenario_names.get(sid, sid),
    )
    if picked != state.scenario_id:
        state = vs.select_scenario(state, picked)
    st.markdown(
        f'<div class="scenario-desc">{escape(vs.selected_description(state, scenarios))}</div>',
        unsafe_allow_html=True,
    )
    if st.button("Load scenario", key="btn_load_scenario"):
        state = vs.load_scenario(state, scenarios, picked)
        st.session_state.load_seq += 1

    st.divider()
    st.header("Lens")
    lens = st.selectbox(
        "Analytical lens",
        lens_values,
        index=lens_values.index(state.lens) if state.lens in lens_values else 0,
        format_func=lambda v: LENS_LABELS[Lens(v)],
    )
    if lens != state.lens:
        state = vs.select_lens(state, lens)

# -----------------------------------------------------------------------------
# Main area: network canvas (left) + narrative panels (right)
# -----------------------------------------------------------------------------
if state.graph is None or state.scenario is None:
    st.info("No scenario loaded. Pick one in the sidebar and press **Load scenario**.")
    st.session_state.view = state
    st.stop()

canvas_col, panel_col = st.columns([3, 2])

with canvas_col:
    st.subheader(state.scenario.name)
    st.components.v1.html(
        build_network_graph_html(state.graph, height=config.GRAPH_HEIGHT_PX),
        height=config.GRAPH_HEIGHT_PX + 20,
        scrolling=False,
    )
    st.markdown(legend_html(), unsafe_allow_html=True)

    # Node inspector stands in for canvas clicks: the pyvis iframe cannot post events back.
    node_ids = [n["id"] for n in state.graph.nodes]
    inspected = st.selectbox(
        "Inspect node",
        [None] + node_ids,
        format_func=lambda nid: "—" if nid is None else f"{state.graph.node_by_id[nid]['label']} ({state.graph.node_by_id[nid]['type']})",
        key=f"node_pick_{state.scenario.id}_{st.session_state.load_seq}",
    )
    if inspected is not None and inspected != state.node_id:
        state = vs.click_node(state, inspected)

    with st.expander("Composition", expanded=False):
        st.dataframe(composition_frame(state.scenario), use_container_width=True, hide_index=True)
        st.caption("Nodes")
        st.dataframe(nodes_frame(state.scenario), use_container_width=True, hide_index=True)
        st.caption("Edges")
        st.dataframe(edges_frame(state.scenario), use_container_width=True, hide_index=True)

with panel_col:
    tabs = list(vs.Tab)
    chosen = st.radio(
        "Panel",
        tabs,
        index=tabs.index(state.active_tab),
        format_func=lambda t: vs.TAB_LABELS[t],
        horizontal=True,
        label_visibility="collapsed",
    )
    if chosen != state.active_tab:
        state = vs.switch_tab(state, chosen)

    tab = state.active_tab
    if tab is vs.Tab.SUMMARY:
        body = vs.summary_text(state)
        st.markdown(f'<div class="narrative">{escape(body)}</div>', unsafe_allow_html=True)
    elif tab is vs.Tab.NODE:
        header = vs.node_header_html(state)
        if header:
            st.markdown(f'<div class="node-header">{header}</div>', unsafe_allow_html=True)
            st.markdown(f'<div class="narrative">{escape(state.last_node_text)}</div>', unsafe_allow_html=True)
        else:
            st.caption("Pick a node under the graph to see what its neighbourhood suggests.")
    elif tab is vs.Tab.LENS:
        lens_label = LENS_LABELS.get(Lens.parse(state.lens))
        if lens_label:
            st.markdown(f"**{lens_label}**")
        st.markdown(f'<div class="narrative">{escape(vs.lens_text(state))}</div>', unsafe_allow_html=True)
    else:
        checklist = vs.checklist_html(state)
        if checklist:
            st.markdown(f'<div class="narrative">{checklist}</div>', unsafe_allow_html=True)
        else:
            st.caption("No checklist for this scenario.")

    st.components.v1.html(
        copy_button_html(vs.copy_text(state, tab), vs.COPY_LABELS[tab], key=tab.value),
        height=48,
    )

st.session_state.view = state

st.divider()
st.caption("All nodes, edges and narratives are synthetic training content. Not investigative advice.")
