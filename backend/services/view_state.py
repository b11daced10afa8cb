"""
Dashboard state as a value.

The UI keeps one ViewState and replaces it with the result of an update
function on every event (scenario picked, scenario loaded, lens changed,
node clicked, tab switched). Nothing here touches Streamlit, so the whole
interaction flow can be exercised in tests.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from html import escape

from backend import config
from backend.explainability.narrative import (
    build_lens_narrative,
    build_scenario_summary,
    checklist_text,
    explain_node,
)
from backend.models import Lens, Scenario
from backend.services.graph import DisplayGraph, build_display_graph, node_type_pill
from backend.services.scenarios import find_by_id

logger = logging.getLogger(__name__)


class Tab(str, Enum):
    SUMMARY = "summary"
    NODE = "node"
    LENS = "lens"
    CHECKLIST = "checklist"


TAB_LABELS = {
    Tab.SUMMARY: "Summary",
    Tab.NODE: "Node insight",
    Tab.LENS: "Scenario lens",
    Tab.CHECKLIST: "Checklist",
}

COPY_LABELS = {
    Tab.SUMMARY: "Copy summary",
    Tab.NODE: "Copy node insight",
    Tab.LENS: "Copy lens narrative",
    Tab.CHECKLIST: "Copy checklist",
}


@dataclass(frozen=True)
class ViewState:
    scenario_id: str | None = None
    scenario: Scenario | None = None
    graph: DisplayGraph | None = None
    lens: str = Lens.FRAUD.value
    active_tab: Tab = Tab.SUMMARY
    node_id: str | None = None
    last_node_text: str = ""


def init_state(scenarios: list[Scenario], lens: str | None = None) -> ViewState:
    """Select and load the first scenario, as the page does on start-up."""
    state = ViewState(lens=lens or config.DEFAULT_LENS)
    if not scenarios:
        return state
    return load_scenario(state, scenarios, scenarios[0].id)


def select_scenario(state: ViewState, scenario_id: str) -> ViewState:
    """Move the picker only; the loaded graph stays until load_scenario."""
    return replace(state, scenario_id=scenario_id)


def load_scenario(state: ViewState, scenarios: list[Scenario], scenario_id: str) -> ViewState:
    sc = find_by_id(scenarios, scenario_id)
    if sc is None:
        logger.warning("Scenario %r not found; clearing panels", scenario_id)
        return replace(
            state, scenario_id=scenario_id, scenario=None, graph=None,
            node_id=None, last_node_text="", active_tab=Tab.SUMMARY,
        )
    return replace(
        state,
        scenario_id=sc.id,
        scenario=sc,
        graph=build_display_graph(sc),
        node_id=None,
        last_node_text="",
        active_tab=Tab.SUMMARY,
    )


def select_lens(state: ViewState, lens: str) -> ViewState:
    return replace(state, lens=lens, active_tab=Tab.LENS)


def click_node(state: ViewState, node_id: str | None) -> ViewState:
    """Explain node_id; ids that are not in the loaded graph are ignored."""
    if state.graph is None or state.scenario is None or node_id not in state.graph.node_by_id:
        return state
    node = state.scenario.get_node(node_id)
    if node is None:
        return state
    return replace(
        state,
        node_id=node_id,
        last_node_text=explain_node(node, state.graph),
        active_tab=Tab.NODE,
    )


def switch_tab(state: ViewState, tab: Tab | str) -> ViewState:
    return replace(state, active_tab=Tab(tab))


# ---- text for each display region ----

def selected_description(state: ViewState, scenarios: list[Scenario]) -> str:
    sc = find_by_id(scenarios, state.scenario_id)
    return sc.description if sc else ""


def summary_text(state: ViewState) -> str:
    return build_scenario_summary(state.scenario) if state.scenario else ""


def lens_text(state: ViewState) -> str:
    return build_lens_narrative(state.scenario, state.lens) if state.scenario else ""


def checklist_items(state: ViewState) -> list[str]:
    return list(state.scenario.checklist) if state.scenario else []


def checklist_html(state: ViewState) -> str:
    """Numbered checklist markup; items are escaped and rendered verbatim."""
    items = checklist_items(state)
    if not items:
        return ""
    return '<ol class="checklist">' + "".join(f"<li>{escape(item)}</li>" for item in items) + "</ol>"


def node_header_html(state: ViewState) -> str:
    if state.graph is None or state.node_id not in state.graph.node_by_id:
        return ""
    node = state.graph.node_by_id[state.node_id]
    return f"{node_type_pill(node['type'])} <strong>{escape(node['label'])}</strong>"


def copy_text(state: ViewState, tab: Tab | str) -> str:
    """Text the copy button of a panel puts on the clipboard."""
    tab = Tab(tab)
    if tab is Tab.SUMMARY:
        return summary_text(state)
    if tab is Tab.NODE:
        return state.last_node_text.strip()
    if tab is Tab.LENS:
        return lens_text(state)
    return checklist_text(checklist_items(state))
