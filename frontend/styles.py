"""Global CSS for the Fraud Network Training Lab."""
from backend.models import NodeType
from backend.services.graph import NODE_COLORS

# Pill backgrounds follow the node palette so the panel badge matches the canvas.
_PILL_TYPES = (
    NodeType.SELLER, NodeType.BUYER, NodeType.BANK,
    NodeType.DEVICE, NodeType.CARD, NodeType.DISPUTE, NodeType.OTHER,
)


def _pill_rules() -> str:
    return "\n".join(
        f"  .pill-{t.value} {{ background: {NODE_COLORS[t]}; }}" for t in _PILL_TYPES
    )


def legend_html() -> str:
    """Node colour legend shown under the network."""
    items = "".join(
        f'<span class="pill-type pill-{t.value}">{t.value}</span>' for t in _PILL_TYPES
    )
    return f'<div class="legend">{items}</div>'


def get_app_css() -> str:
    """Return the full <style>...</style> markdown string for st.markdown(..., unsafe_allow_html=True)."""
    return """
<style>
  .stApp { background: #020617; min-height: 100vh; }
  [data-testid="stSidebar"] {
    background: linear-gradient(165deg, #0b1120 0%, #111827 60%, #0f172a 100%);
    border-right: 1px solid rgba(55, 65, 81, 0.6);
  }
  [data-testid="stSidebar"] .stMarkdown { color: #e5e7eb; }
  h1, h2, h3 { color: #e5e7eb !important; font-weight: 600 !important; }
  .hero-title {
    font-size: 2rem; font-weight: 700; color: #e5e7eb;
    letter-spacing: -0.03em; margin-top: 0; margin-bottom: 0.25rem !important;
  }
  .hero-sub { font-size: 0.95rem; color: #9ca3af; margin-top: 0; margin-bottom: 1.5rem !important; }
  /* Narrative panel: pre-wrapped plain text, one sentence per line */
  .narrative {
    background: rgba(17, 24, 39, 0.9);
    border: 1px solid rgba(55, 65, 81, 0.7);
    border-radius: 14px;
    padding: 1.1rem 1.35rem;
    color: #e5e7eb; line-height: 1.7; white-space: pre-wrap;
  }
  .narrative .checklist { margin: 0; padding-left: 1.3rem; }
  .node-header { font-size: 1.05rem; color: #e5e7eb; margin-bottom: 0.6rem; }
  .scenario-desc { color: #9ca3af; font-size: 0.9rem; line-height: 1.5; }
  /* Node type pills */
  .pill-type {
    display: inline-block; padding: 2px 8px; margin-right: 6px;
    border-radius: 999px; font-size: 0.72rem; font-weight: 700;
    color: #020617; text-transform: uppercase; letter-spacing: 0.04em;
  }
""" + _pill_rules() + """
  .legend { margin-top: 0.4rem; }
  .stButton > button { border-radius: 12px; font-weight: 600; width: 100%; }
  [data-testid="stRadio"] > div { gap: 0.75rem; }
  .block-container { padding-top: 2.75rem; padding-bottom: 2rem; }
</style>
"""
