"""models/seed_data.py — Demonstration trades loaded when no journal exists yet."""
from __future__ import annotations

from datetime import datetime

from models.trade_log import (
    EmotionalState,
    TradeDirection,
    TradeFormData,
    TradeLog,
    TradeSession,
)

_SEED_FORMS: list[tuple[str, dict]] = [
    (
        "seed-0006",
        dict(
            entry_date_time=datetime(2024, 5, 24, 14, 5),
            session=TradeSession.OVERLAP,
            currency_pair="GBP/USD",
            direction=TradeDirection.SHORT,
            strategy="News Trading",
            pips_captured=-18.0,
            risk_free=False,
            reason="Entered before the data release instead of waiting for the retest.",
            emotional_state=EmotionalState.RUSHED,
            suggestion="Wait for the first 5-minute candle to close after high-impact news.",
        ),
    ),
    (
        "seed-0005",
        dict(
            entry_date_time=datetime(2024, 5, 23, 8, 15),
            session=TradeSession.LONDON,
            currency_pair="EUR/USD",
            direction=TradeDirection.LONG,
            strategy="Breakout",
            pips_captured=32.5,
            risk_free=True,
            reason="Clean break of the Asian range high with volume; moved stop to entry early.",
            emotional_state=EmotionalState.CALM,
            suggestion="",
        ),
    ),
    (
        "seed-0004",
        dict(
            entry_date_time=datetime(2024, 5, 22, 1, 40),
            session=TradeSession.ASIA,
            currency_pair="USD/JPY",
            direction=TradeDirection.LONG,
            strategy="Trend Following",
            pips_captured=21.0,
            risk_free=False,
            reason="Followed the daily trend after a pullback to the 20 EMA.",
            emotional_state=EmotionalState.CONFIDENT,
            suggestion="",
        ),
    ),
    (
        "seed-0003",
        dict(
            entry_date_time=datetime(2024, 5, 21, 15, 30),
            session=TradeSession.NEW_YORK,
            currency_pair="AUD/USD",
            direction=TradeDirection.SHORT,
            strategy="Support/Resistance",
            pips_captured=-12.0,
            risk_free=False,
            reason="Shorted into support after the previous loss; the level held.",
            emotional_state=EmotionalState.REVENGE_TRADING,
            suggestion="Take a break after a loss before looking for the next setup.",
        ),
    ),
    (
        "seed-0002",
        dict(
            entry_date_time=datetime(2024, 5, 20, 9, 0),
            session=TradeSession.LONDON,
            currency_pair="EUR/GBP",
            direction=TradeDirection.LONG,
            strategy="Price Action",
            pips_captured=0.0,
            risk_free=True,
            reason="Pin bar at support; scratched at break-even when momentum stalled.",
            emotional_state=EmotionalState.ANXIOUS,
            suggestion="",
        ),
    ),
    (
        "seed-0001",
        dict(
            entry_date_time=datetime(2024, 5, 17, 13, 45),
            session=TradeSession.OVERLAP,
            currency_pair="GBP/JPY",
            direction=TradeDirection.SHORT,
            strategy="Breakout",
            pips_captured=45.0,
            risk_free=True,
            reason="Breakdown of the London low with the New York open adding momentum.",
            emotional_state=EmotionalState.CALM,
            suggestion="",
        ),
    ),
]


def build_seed_trade_logs() -> list[TradeLog]:
    """Return a fresh list of demonstration trades, newest first."""
    return [TradeLog.from_form(trade_id, TradeFormData(**fields)) for trade_id, fields in _SEED_FORMS]
