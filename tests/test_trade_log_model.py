"""tests/test_trade_log_model.py — TradeFormData / TradeLog unit tests."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from models.trade_log import (
    OTHER_STRATEGY,
    EmotionalState,
    TradeDirection,
    TradeFormData,
    TradeLog,
    TradeNotFoundError,
    TradeResult,
    TradeSession,
    TradeValidationError,
    derive_result,
    resolve_strategy,
)


# ---------------------------------------------------------------------------
# derive_result
# ---------------------------------------------------------------------------

class TestDeriveResult:
    def test_positive_pips_is_win(self):
        assert derive_result(0.1) is TradeResult.WIN

    def test_zero_pips_is_loss(self):
        assert derive_result(0) is TradeResult.LOSS
        assert derive_result(0.0) is TradeResult.LOSS

    def test_negative_pips_is_loss(self):
        assert derive_result(-12.5) is TradeResult.LOSS


# ---------------------------------------------------------------------------
# resolve_strategy
# ---------------------------------------------------------------------------

class TestResolveStrategy:
    def test_preset_passes_through(self):
        assert resolve_strategy("Breakout", "ignored") == "Breakout"

    def test_other_uses_trimmed_custom_text(self):
        assert resolve_strategy(OTHER_STRATEGY, "  London Fix Fade ") == "London Fix Fade"

    @pytest.mark.parametrize("custom", ["", "   ", None])
    def test_other_without_custom_text_is_rejected(self, custom):
        with pytest.raises(TradeValidationError, match="custom strategy"):
            resolve_strategy(OTHER_STRATEGY, custom)


# ---------------------------------------------------------------------------
# TradeFormData
# ---------------------------------------------------------------------------

class TestTradeFormData:
    def test_strings_are_coerced(self):
        form = TradeFormData.build(
            entry_date_time="2024-06-03T09:30",
            session="New York",
            currency_pair="GBP/USD",
            direction="Short",
            pips_captured="-7.5",
            emotional_state="Revenge Trading",
        )
        assert form.entry_date_time == datetime(2024, 6, 3, 9, 30)
        assert form.session is TradeSession.NEW_YORK
        assert form.direction is TradeDirection.SHORT
        assert form.pips_captured == -7.5
        assert form.emotional_state is EmotionalState.REVENGE_TRADING

    def test_blank_pips_defaults_to_zero(self, make_form):
        assert make_form(pips_captured="").pips_captured == 0.0

    @pytest.mark.parametrize("pips", ["nan", "inf", float("-inf")])
    def test_non_finite_pips_are_rejected(self, pips):
        with pytest.raises(TradeValidationError, match="pips_captured"):
            TradeFormData.build(entry_date_time="2024-06-03T09:30", pips_captured=pips)

    def test_bad_enum_value_raises_validation_error(self):
        with pytest.raises(TradeValidationError, match="session"):
            TradeFormData.build(entry_date_time="2024-06-03T09:30", session="Sydney")

    def test_validated_requires_currency_pair(self, make_form):
        with pytest.raises(TradeValidationError, match="Currency Pair"):
            make_form(currency_pair="   ").validated()

    def test_validated_resolves_other_strategy(self, make_form):
        clean = make_form(strategy=OTHER_STRATEGY, custom_strategy=" Range Fade ").validated()
        assert clean.strategy == "Range Fade"
        assert clean.custom_strategy == ""

    def test_result_follows_pips(self, make_form):
        assert make_form(pips_captured=3).result is TradeResult.WIN
        assert make_form(pips_captured=0).result is TradeResult.LOSS


# ---------------------------------------------------------------------------
# TradeLog
# ---------------------------------------------------------------------------

class TestTradeLog:
    def test_from_form_derives_result_and_resolves_strategy(self, make_form):
        form = make_form(pips_captured=0, strategy=OTHER_STRATEGY, custom_strategy="Fib Retrace")
        trade = TradeLog.from_form("t-1", form)
        assert trade.id == "t-1"
        assert trade.result is TradeResult.LOSS
        assert trade.strategy == "Fib Retrace"
        assert trade.strategy != OTHER_STRATEGY

    def test_document_uses_iso_dates_and_enum_values(self, make_form):
        trade = TradeLog.from_form("t-1", make_form(session=TradeSession.NEW_YORK))
        doc = trade.to_document()
        assert doc["entryDateTime"] == "2024-06-03T09:30:00"
        assert doc["session"] == "New York"
        assert doc["result"] == "Win"
        assert doc["riskFree"] is False

    def test_document_round_trip(self, make_form):
        trade = TradeLog.from_form(
            "t-2",
            make_form(entry_date_time=datetime(2024, 6, 3, 9, 30, tzinfo=timezone.utc)),
        )
        assert TradeLog.from_document(trade.to_document()) == trade

    def test_from_document_accepts_javascript_timestamps(self, make_form):
        doc = TradeLog.from_form("t-3", make_form()).to_document()
        doc["entryDateTime"] = "2024-06-03T09:30:00.000Z"
        revived = TradeLog.from_document(doc)
        assert revived.entry_date_time == datetime(2024, 6, 3, 9, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda d: d.pop("currencyPair"),
            lambda d: d.update(session="Sydney"),
            lambda d: d.update(entryDateTime="yesterday"),
            lambda d: d.update(entryDateTime=12345),
            lambda d: d.update(pipsCaptured="ten"),
            lambda d: d.update(id=""),
            lambda d: d.update(riskFree="false"),
            lambda d: d.update(currencyPair=None),
            lambda d: d.update(reason=None),
            lambda d: d.update(suggestion=7),
            lambda d: d.update(pipsCaptured=True),
            lambda d: d.update(pipsCaptured=float("nan")),
        ],
    )
    def test_from_document_rejects_bad_shapes(self, make_form, mutate):
        doc = TradeLog.from_form("t-4", make_form()).to_document()
        mutate(doc)
        with pytest.raises((ValueError, KeyError, TypeError)):
            TradeLog.from_document(doc)

    def test_from_document_rejects_non_objects(self):
        with pytest.raises(TypeError):
            TradeLog.from_document(["not", "a", "record"])

    def test_to_form_data_maps_custom_strategy_back_to_other(self, make_form):
        trade = TradeLog.from_form(
            "t-5", make_form(strategy=OTHER_STRATEGY, custom_strategy="Asian Range Fade")
        )
        form = trade.to_form_data()
        assert form.strategy == OTHER_STRATEGY
        assert form.custom_strategy == "Asian Range Fade"

    def test_to_form_data_keeps_preset_strategy(self, make_form):
        form = TradeLog.from_form("t-6", make_form(strategy="Scalping")).to_form_data()
        assert form.strategy == "Scalping"
        assert form.custom_strategy == ""


def test_not_found_error_is_a_key_error():
    exc = TradeNotFoundError("abc")
    assert isinstance(exc, KeyError)
    assert exc.trade_id == "abc"
    assert "abc" in str(exc)
