"""dashboard/main.py — FX Trade Journal entry point.

Run with:
    streamlit run dashboard/main.py --server.port 8506

Layout
------
  left   — trade form (log / edit, AI suggestion)
  right  — performance dashboard (metrics, charts, recent trades)

The journal store and the coach are ``st.cache_resource`` objects from
``dashboard/services.py``; every browser session shares them.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime
from pathlib import Path

import streamlit as st

# ── Path bootstrap ────────────────────────────────────────────────────────────
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

os.chdir(_ROOT)

from dashboard.components.journal_dashboard import render_journal_dashboard
from dashboard.components.trade_form import render_trade_form
from dashboard.services import get_journal_config, get_trade_coach, get_trade_log_store
from logging_config import get_dashboard_logger

LOGGER = get_dashboard_logger()

# ── Page config (called ONCE here) ────────────────────────────────────────────
st.set_page_config(
    page_title="The Trader's Book: FX",
    page_icon="📓",
    layout="wide",
)

st.markdown(
    """
    <style>
    .journal-footer {
        text-align: center;
        color: #64748b;
        font-size: .85rem;
        padding: 1.5rem 0;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

st.title("📓 The Trader's Book: FX")

try:
    cfg = get_journal_config()
    store = get_trade_log_store()
    coach = get_trade_coach()
except Exception as exc:
    LOGGER.exception("Journal startup failed")
    st.error(f"Trade journal unavailable: {exc}")
    st.stop()

form_col, dash_col = st.columns([1, 2], gap="large")
with form_col:
    render_trade_form(store=store, coach=coach)
with dash_col:
    render_journal_dashboard(store=store, recent_limit=cfg.recent_trades_limit)

st.markdown(
    f'<div class="journal-footer">Built for disciplined traders. © {datetime.now().year}</div>',
    unsafe_allow_html=True,
)
