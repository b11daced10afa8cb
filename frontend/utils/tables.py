"""DataFrame views of a scenario for the composition tables."""
from __future__ import annotations

import pandas as pd

from backend.models import Scenario
from backend.services.graph import edge_label


def nodes_frame(scenario: Scenario) -> pd.DataFrame:
    return pd.DataFrame(
        [{"id": n.id, "label": n.label, "type": n.type} for n in scenario.nodes],
        columns=["id", "label", "type"],
    )


def edges_frame(scenario: Scenario) -> pd.DataFrame:
    labels = {n.id: n.label for n in scenario.nodes}
    return pd.DataFrame(
        [
            {
                "from": labels.get(e.source, e.source),
                "relationship": edge_label(e.type),
                "to": labels.get(e.target, e.target),
            }
            for e in scenario.edges
        ],
        columns=["from", "relationship", "to"],
    )


def composition_frame(scenario: Scenario) -> pd.DataFrame:
    """Node count per type, largest first (ties keep first-seen order)."""
    df = nodes_frame(scenario)
    if df.empty:
        return pd.DataFrame(columns=["type", "nodes"])
    counts = df["type"].value_counts(sort=False).rename_axis("type").reset_index(name="nodes")
    return counts.sort_values("nodes", ascending=False, kind="stable").reset_index(drop=True)
