"""Copy-to-clipboard button for the narrative panels."""
import json
from html import escape

from backend import config


def copy_button_html(text: str, label: str, key: str, ack_ms: int | None = None) -> str:
    """
    Return HTML for a button that writes text to the clipboard (UTF-8, trimmed).
    The label flips to "Copied!" and back after ack_ms; a rejected write shows "Copy failed".
    Rendered with st.components.v1.html, so the script runs inside its own iframe.
    """
    delay = config.COPY_ACK_MS if ack_ms is None else ack_ms
    btn_id = f"copy-{key}"
    # json.dumps gives a safe JS string literal; "</" is split so the payload cannot close the script tag.
    payload = json.dumps((text or "").strip()).replace("</", "<\\/")
    label_js = json.dumps(label)
    return f"""
<button id="{escape(btn_id)}" class="copy-btn">{escape(label)}</button>
<style>
  .copy-btn {{
    background: #1f2937; color: #e5e7eb; border: 1px solid #374151;
    border-radius: 10px; padding: 0.35rem 0.9rem; font-weight: 600; cursor: pointer;
    font-family: sans-serif; font-size: 0.85rem;
  }}
  .copy-btn:hover {{ border-color: #6366f1; }}
</style>
<script>
  (function () {{
    const btn = document.getElementById({json.dumps(btn_id)});
    const text = {payload};
    const label = {label_js};
    const reset = () => setTimeout(() => {{ btn.textContent = label; }}, {delay});
    btn.addEventListener('click', () => {{
      navigator.clipboard.writeText(text).then(() => {{
        btn.textContent = 'Copied!';
        reset();
      }}, () => {{
        btn.textContent = 'Copy failed';
        reset();
      }});
    }});
  }})();
</script>"""
