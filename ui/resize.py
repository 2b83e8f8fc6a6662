# ui/resize.py
from pathlib import Path

import streamlit.components.v1 as components

_SCRIPT = Path(__file__).resolve().parent / "static" / "chart_resize.js"


def bind_chart_resize():
    """Inject the window-resize hook; the script itself binds only once per page."""
    components.html(f"<script>{_SCRIPT.read_text(encoding='utf-8')}</script>", height=0)
