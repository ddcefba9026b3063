"""
core/analytics.py — Journal summary statistics and chart data.

Everything here is recomputed from the full trade list on each call; the
journal is small enough that no caching is needed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from models.trade_log import TradeLog, TradeResult, TradeSession

RECENT_TRADES_LIMIT = 10


@dataclass(frozen=True)
class JournalAnalytics:
    total_trades: int = 0
    win_rate: float = 0.0               # percent, 0–100
    total_pips: float = 0.0
    risk_free_trades: int = 0
    pips_by_session: dict[TradeSession, float] = field(
        default_factory=lambda: {s: 0.0 for s in TradeSession}
    )
    wins_by_strategy: dict[str, int] = field(default_factory=dict)
    recent_trades: tuple[TradeLog, ...] = ()

    @property
    def wins(self) -> int:
        return sum(self.wins_by_strategy.values())

    @property
    def losses(self) -> int:
        return self.total_trades - self.wins

    # ── Chart-ready views ────────────────────────────────────────────────────

    @property
    def win_loss_data(self) -> list[dict[str, Any]]:
        if self.total_trades == 0:
            return []
        return [
            {"name": "Wins", "value": self.wins},
            {"name": "Losses", "value": self.losses},
        ]

    @property
    def pips_by_session_data(self) -> list[dict[str, Any]]:
        return [{"name": s.value, "pips": pips} for s, pips in self.pips_by_session.items()]

    @property
    def wins_by_strategy_data(self) -> list[dict[str, Any]]:
        return [{"name": name, "value": count} for name, count in self.wins_by_strategy.items()]


def compute_journal_analytics(
    trade_logs: Iterable[TradeLog],
    *,
    recent_limit: int = RECENT_TRADES_LIMIT,
) -> JournalAnalytics:
    """Aggregate *trade_logs* (in store order) into a :class:`JournalAnalytics`."""
    logs = tuple(trade_logs)
    total_trades = len(logs)

    pips_by_session: dict[TradeSession, float] = {s: 0.0 for s in TradeSession}
    wins_by_strategy: dict[str, int] = {}
    total_pips = 0.0
    risk_free_trades = 0
    wins = 0

    for trade in logs:
        total_pips += trade.pips_captured
        pips_by_session[trade.session] += trade.pips_captured
        if trade.risk_free:
            risk_free_trades += 1
        if trade.result is TradeResult.WIN:
            wins += 1
            # only winning trades are counted per strategy
            wins_by_strategy[trade.strategy] = wins_by_strategy.get(trade.strategy, 0) + 1

    win_rate = (wins / total_trades) * 100 if total_trades > 0 else 0.0

    return JournalAnalytics(
        total_trades=total_trades,
        win_rate=win_rate,
        total_pips=total_pips,
        risk_free_trades=risk_free_trades,
        pips_by_session=pips_by_session,
        wins_by_strategy=wins_by_strategy,
        recent_trades=logs[:recent_limit],
    )
