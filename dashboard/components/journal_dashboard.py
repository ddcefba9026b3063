"""dashboard/components/journal_dashboard.py — Journal analytics and recent trades.

Renders:
- Metric tiles: total trades, win rate, total pips, risk-free trades
- Win/Loss donut, pips-by-session bars, wins-by-strategy pie
- Recent trades list with Edit / Delete (delete asks for confirmation)
- Clear All (asks for confirmation) and CSV export
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from core.analytics import RECENT_TRADES_LIMIT, JournalAnalytics, compute_journal_analytics
from dashboard.components.trade_form import SS_EDITING_ID
from models.trade_log import TradeLog, TradeResult

LOGGER = logging.getLogger(__name__)

_COLORS = ["#4f46e5", "#10b981", "#f59e0b", "#ef4444", "#3b82f6", "#8b5cf6"]
_WIN_COLOR = "#10b981"
_LOSS_COLOR = "#ef4444"

_SS_PENDING_DELETE = "tj_pending_delete"
_SS_PENDING_CLEAR = "tj_pending_clear"


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def render_journal_dashboard(*, store: Any, recent_limit: int = RECENT_TRADES_LIMIT) -> None:
    """Render analytics and the recent-trades list for *store*."""
    analytics = compute_journal_analytics(store.trade_logs, recent_limit=recent_limit)

    head_l, head_r = st.columns([3, 1])
    with head_l:
        st.subheader("📊 Performance Dashboard")
    with head_r:
        if analytics.total_trades:
            st.button(
                "🗑 Clear All",
                key="tj_clear_all_btn",
                on_click=_request_clear_all,
                use_container_width=True,
            )

    if st.session_state.get(_SS_PENDING_CLEAR):
        _render_clear_confirmation(store)

    _render_metrics(analytics)

    if analytics.total_trades == 0:
        st.info("No trades logged yet. Use the form to add your first trade.")
        return

    _render_charts(analytics)
    _render_recent_trades(store, analytics)
    _render_all_trades_table(store.trade_logs)

    csv_data = store.export_csv()
    if csv_data:
        st.download_button(
            label="⬇ Export CSV",
            data=csv_data,
            file_name=f"trade_journal_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}.csv",
            mime="text/csv",
            help="Download every logged trade as a CSV file",
        )


# ---------------------------------------------------------------------------
# Metrics & charts
# ---------------------------------------------------------------------------

def _render_metrics(analytics: JournalAnalytics) -> None:
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Total Trades", analytics.total_trades)
    m2.metric("Win Rate", f"{analytics.win_rate:.1f}%")
    m3.metric("Total Pips", f"{analytics.total_pips:+.1f}")
    m4.metric("Risk-Free Trades", analytics.risk_free_trades)


def _render_charts(analytics: JournalAnalytics) -> None:
    c1, c2 = st.columns(2)

    with c1:
        st.markdown("#### Win / Loss")
        data = analytics.win_loss_data
        fig = go.Figure(
            go.Pie(
                labels=[d["name"] for d in data],
                values=[d["value"] for d in data],
                hole=0.55,
                marker={"colors": [_WIN_COLOR, _LOSS_COLOR]},
                sort=False,
            )
        )
        fig.update_layout(height=280, margin={"l": 10, "r": 10, "t": 10, "b": 10})
        st.plotly_chart(fig, use_container_width=True)

    with c2:
        st.markdown("#### Pips by Session")
        data = analytics.pips_by_session_data
        fig = go.Figure(
            go.Bar(
                x=[d["name"] for d in data],
                y=[d["pips"] for d in data],
                marker_color=[_WIN_COLOR if d["pips"] >= 0 else _LOSS_COLOR for d in data],
            )
        )
        fig.update_layout(height=280, margin={"l": 10, "r": 10, "t": 10, "b": 10}, yaxis_title="Pips")
        st.plotly_chart(fig, use_container_width=True)

    st.markdown("#### Wins by Strategy")
    data = analytics.wins_by_strategy_data
    if not data:
        st.caption("No winning trades yet.")
        return
    fig = go.Figure(
        go.Pie(
            labels=[d["name"] for d in data],
            values=[d["value"] for d in data],
            marker={"colors": [_COLORS[i % len(_COLORS)] for i in range(len(data))]},
        )
    )
    fig.update_layout(height=300, margin={"l": 10, "r": 10, "t": 10, "b": 10})
    st.plotly_chart(fig, use_container_width=True)


# ---------------------------------------------------------------------------
# Recent trades
# ---------------------------------------------------------------------------

def _render_recent_trades(store: Any, analytics: JournalAnalytics) -> None:
    st.markdown(f"#### Recent Trades (last {len(analytics.recent_trades)})")
    pending_delete = st.session_state.get(_SS_PENDING_DELETE)

    for trade in analytics.recent_trades:
        with st.container(border=True):
            _render_trade_row(trade)
            b1, b2, _ = st.columns([1, 1, 4])
            b1.button("Edit", key=f"tj_edit_{trade.id}", on_click=_start_edit, args=(trade.id,))
            b2.button("Delete", key=f"tj_delete_{trade.id}", on_click=_request_delete, args=(trade.id,))
            if pending_delete == trade.id:
                st.warning("Are you sure you want to delete this trade?")
                y, n, _ = st.columns([1, 1, 4])
                y.button(
                    "Yes, delete",
                    type="primary",
                    key=f"tj_delete_yes_{trade.id}",
                    on_click=_confirm_delete,
                    args=(store, trade.id),
                )
                n.button("Cancel", key=f"tj_delete_no_{trade.id}", on_click=_cancel_pending)


def _render_all_trades_table(trade_logs: tuple[TradeLog, ...]) -> None:
    with st.expander(f"📋 All trades ({len(trade_logs)})", expanded=False):
        df = pd.DataFrame(
            [
                {
                    "Entry": f"{t.entry_date_time:%Y-%m-%d %H:%M}",
                    "Session": t.session.value,
                    "Pair": t.currency_pair,
                    "Direction": t.direction.value,
                    "Strategy": t.strategy,
                    "Pips": t.pips_captured,
                    "Result": t.result.value,
                    "Risk-Free": "Yes" if t.risk_free else "No",
                    "Emotion": t.emotional_state.value,
                    "Reason": t.reason[:60],
                }
                for t in trade_logs
            ]
        )
        st.dataframe(df, use_container_width=True, hide_index=True)


def _render_trade_row(trade: TradeLog) -> None:
    badge = "🟢" if trade.result is TradeResult.WIN else "🔴"
    st.markdown(
        f"{badge} **{trade.currency_pair}** · {trade.direction.value} · "
        f"{trade.pips_captured:+.1f} pips · {trade.strategy}"
    )
    risk = " · risk-free" if trade.risk_free else ""
    st.caption(
        f"{trade.entry_date_time:%Y-%m-%d %H:%M} · {trade.session.value} · "
        f"{trade.emotional_state.value}{risk}"
    )
    if trade.reason:
        st.markdown(f"*{trade.reason}*")
    if trade.suggestion:
        st.info(f"💡 {trade.suggestion}")


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------

def _start_edit(trade_id: str) -> None:
    st.session_state[SS_EDITING_ID] = trade_id


def _request_delete(trade_id: str) -> None:
    st.session_state[_SS_PENDING_CLEAR] = False
    st.session_state[_SS_PENDING_DELETE] = trade_id


def _confirm_delete(store: Any, trade_id: str) -> None:
    store.delete(trade_id)
    st.session_state[_SS_PENDING_DELETE] = None
    if st.session_state.get(SS_EDITING_ID) == trade_id:
        st.session_state[SS_EDITING_ID] = None


def _request_clear_all() -> None:
    st.session_state[_SS_PENDING_DELETE] = None
    st.session_state[_SS_PENDING_CLEAR] = True


def _confirm_clear_all(store: Any) -> None:
    store.clear_all()
    st.session_state[_SS_PENDING_CLEAR] = False
    st.session_state[SS_EDITING_ID] = None


def _cancel_pending() -> None:
    st.session_state[_SS_PENDING_DELETE] = None
    st.session_state[_SS_PENDING_CLEAR] = False


def _render_clear_confirmation(store: Any) -> None:
    st.warning(
        "⚠️ Are you sure you want to delete all trade logs? This action cannot be undone."
    )
    y, n, _ = st.columns([1, 1, 3])
    y.button(
        "Yes, clear everything",
        type="primary",
        key="tj_clear_yes_btn",
        on_click=_confirm_clear_all,
        args=(store,),
    )
    n.button("Cancel", key="tj_clear_no_btn", on_click=_cancel_pending)
