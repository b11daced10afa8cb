# Explainability: template narratives for nodes, scenarios and lenses
from .narrative import (
    build_lens_narrative,
    build_scenario_summary,
    checklist_text,
    explain_node,
)

__all__ = [
    "explain_node",
    "build_scenario_summary",
    "build_lens_narrative",
    "checklist_text",
]
