"""dashboard/components/trade_form.py — Log / edit a trade.

Renders:
- Entry date & time, session, pair, direction, strategy (+ custom text for "Other")
- Pips captured, risk-free flag, reason, emotional state
- "Generate AI Suggestion" → fills the suggestion box via the TradeCoach
- Submit (add or update) and Cancel Edit

Widget values live in ``st.session_state`` under ``tf_*`` keys so callbacks can
rewrite them (suggestion merge, edit pre-fill, reset) before the next render.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

import streamlit as st

from agents.trade_coach import SuggestionError
from dashboard.services import run_async
from models.trade_log import (
    OTHER_STRATEGY,
    STRATEGY_OPTIONS,
    EmotionalState,
    TradeDirection,
    TradeFormData,
    TradeNotFoundError,
    TradeSession,
    TradeValidationError,
)

LOGGER = logging.getLogger(__name__)

# Session-state keys
SS_EDITING_ID = "tj_editing_id"
_SS_LOADED_FOR = "tf_loaded_for"
_SS_ERROR = "tf_error"
_SS_NOTICE = "tf_notice"
_SS_SUGGESTION_LOADING = "tf_suggestion_loading"
_NEW_TRADE = "__new__"


# ---------------------------------------------------------------------------
# Form state <-> TradeFormData
# ---------------------------------------------------------------------------

def _default_form() -> TradeFormData:
    return TradeFormData(entry_date_time=datetime.now().replace(second=0, microsecond=0))


def _write_form_state(form: TradeFormData) -> None:
    ss = st.session_state
    ss["tf_entry_date"] = form.entry_date_time.date()
    ss["tf_entry_time"] = form.entry_date_time.time().replace(second=0, microsecond=0)
    ss["tf_session"] = form.session
    ss["tf_currency_pair"] = form.currency_pair
    ss["tf_direction"] = form.direction
    ss["tf_strategy"] = form.strategy
    ss["tf_custom_strategy"] = form.custom_strategy
    ss["tf_pips"] = float(form.pips_captured)
    ss["tf_risk_free"] = form.risk_free
    ss["tf_reason"] = form.reason
    ss["tf_emotional_state"] = form.emotional_state
    ss["tf_suggestion"] = form.suggestion


def _read_form_state() -> TradeFormData:
    ss = st.session_state
    return TradeFormData.build(
        entry_date_time=datetime.combine(ss["tf_entry_date"], ss["tf_entry_time"]),
        session=ss["tf_session"],
        currency_pair=ss["tf_currency_pair"],
        direction=ss["tf_direction"],
        strategy=ss["tf_strategy"],
        custom_strategy=ss.get("tf_custom_strategy", ""),
        pips_captured=ss["tf_pips"],
        risk_free=ss["tf_risk_free"],
        reason=ss["tf_reason"],
        emotional_state=ss["tf_emotional_state"],
        suggestion=ss["tf_suggestion"],
    )


def _sync_form_with_editing(store: Any) -> Optional[str]:
    """Pre-fill the form when the trade being edited changes."""
    editing_id: Optional[str] = st.session_state.get(SS_EDITING_ID)
    target = editing_id or _NEW_TRADE
    if st.session_state.get(_SS_LOADED_FOR) == target:
        return editing_id

    trade = store.get(editing_id) if editing_id else None
    if editing_id and trade is None:
        # Deleted while the form was open
        st.session_state[SS_EDITING_ID] = None
        editing_id = None
        target = _NEW_TRADE
    _write_form_state(trade.to_form_data() if trade is not None else _default_form())
    st.session_state[_SS_LOADED_FOR] = target
    return editing_id


def _reset_form() -> None:
    st.session_state[SS_EDITING_ID] = None
    st.session_state[_SS_LOADED_FOR] = _NEW_TRADE
    _write_form_state(_default_form())


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------

def _on_generate_suggestion(coach: Any) -> None:
    st.session_state[_SS_ERROR] = ""
    st.session_state[_SS_SUGGESTION_LOADING] = True
    try:
        form = _read_form_state()
        suggestion = run_async(coach.generate_suggestion(form))
    except (TradeValidationError, SuggestionError) as exc:
        st.session_state[_SS_ERROR] = str(exc)
    else:
        st.session_state["tf_suggestion"] = suggestion
    finally:
        st.session_state[_SS_SUGGESTION_LOADING] = False


def _on_submit(store: Any) -> None:
    st.session_state[_SS_ERROR] = ""
    editing_id: Optional[str] = st.session_state.get(SS_EDITING_ID)
    try:
        form = _read_form_state()
        if editing_id:
            trade = store.update(editing_id, form)
            notice = f"Updated {trade.currency_pair} trade."
        else:
            trade = store.add(form)
            notice = f"Logged {trade.currency_pair} trade ({trade.result.value})."
    except TradeValidationError as exc:
        st.session_state[_SS_ERROR] = str(exc)
        return
    except TradeNotFoundError:
        st.session_state[_SS_ERROR] = "This trade no longer exists; the form has been reset."
        _reset_form()
        return
    st.session_state[_SS_NOTICE] = notice
    _reset_form()


def _on_cancel_edit() -> None:
    st.session_state[_SS_ERROR] = ""
    _reset_form()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def render_trade_form(*, store: Any, coach: Any) -> None:
    """Render the trade entry form.

    Args:
        store: Loaded ``TradeLogStore``.
        coach: ``TradeCoach`` used for the suggestion button.
    """
    editing_id = _sync_form_with_editing(store)
    is_editing = bool(editing_id)

    st.subheader("✏️ Edit Trade" if is_editing else "📝 Log New Trade")

    d_col, t_col = st.columns(2)
    with d_col:
        st.date_input("Entry date", key="tf_entry_date")
    with t_col:
        st.time_input("Entry time", key="tf_entry_time", step=60)

    st.selectbox("Session", list(TradeSession), key="tf_session", format_func=lambda s: s.value)
    st.text_input("Currency Pair", key="tf_currency_pair", placeholder="e.g. EUR/USD")
    st.radio(
        "Direction",
        list(TradeDirection),
        key="tf_direction",
        format_func=lambda d: d.value,
        horizontal=True,
    )

    st.selectbox("Strategy", list(STRATEGY_OPTIONS), key="tf_strategy")
    if st.session_state.get("tf_strategy") == OTHER_STRATEGY:
        st.text_input("Custom strategy", key="tf_custom_strategy", placeholder="Describe your setup")

    st.number_input("Pips Captured", key="tf_pips", step=0.1, format="%.1f")
    st.checkbox("Risk-free trade (stop at break-even or better)", key="tf_risk_free")
    st.text_area("Reason for Win/Loss", key="tf_reason", height=90)
    st.selectbox(
        "Emotional State",
        list(EmotionalState),
        key="tf_emotional_state",
        format_func=lambda e: e.value,
    )

    loading = bool(st.session_state.get(_SS_SUGGESTION_LOADING))
    st.button(
        "⏳ Generating…" if loading else "✨ Generate AI Suggestion",
        key="tf_suggest_btn",
        on_click=_on_generate_suggestion,
        args=(coach,),
        disabled=loading,
        help="Needs Pips Captured and a Reason before it can run.",
    )
    st.text_area("Suggestion", key="tf_suggestion", height=90)

    error = st.session_state.get(_SS_ERROR)
    if error:
        st.error(error)
    notice = st.session_state.pop(_SS_NOTICE, None)
    if notice:
        st.success(notice)

    submit_col, cancel_col = st.columns(2)
    with submit_col:
        st.button(
            "💾 Update Trade" if is_editing else "➕ Add Trade",
            type="primary",
            key="tf_submit_btn",
            on_click=_on_submit,
            args=(store,),
            use_container_width=True,
        )
    if is_editing:
        with cancel_col:
            st.button(
                "Cancel Edit",
                key="tf_cancel_btn",
                on_click=_on_cancel_edit,
                use_container_width=True,
            )
