"""tests/test_analytics.py — compute_journal_analytics unit tests."""
from __future__ import annotations

import pytest

from core.analytics import JournalAnalytics, compute_journal_analytics
from models.trade_log import TradeLog, TradeSession


@pytest.fixture
def make_trade(make_form):
    counter = iter(range(1, 10_000))

    def _make(**kwargs) -> TradeLog:
        return TradeLog.from_form(f"t-{next(counter)}", make_form(**kwargs))

    return _make


def _all_sessions() -> dict[TradeSession, float]:
    return {s: 0.0 for s in TradeSession}


class TestEmptyJournal:
    def test_empty_list_degrades_to_zero(self):
        a = compute_journal_analytics([])
        assert a.total_trades == 0
        assert a.win_rate == 0
        assert a.total_pips == 0
        assert a.risk_free_trades == 0
        assert a.pips_by_session == _all_sessions()
        assert a.wins_by_strategy == {}
        assert a.recent_trades == ()
        assert a.win_loss_data == []
        assert a.wins_by_strategy_data == []

    def test_defaults_match_empty_computation(self):
        assert JournalAnalytics() == compute_journal_analytics([])


class TestWorkedScenario:
    def test_single_winning_trade(self, make_trade):
        t1 = make_trade(currency_pair="EUR/USD", strategy="Breakout", pips_captured=25,
                        session=TradeSession.LONDON)
        a = compute_journal_analytics([t1])
        assert a.total_trades == 1
        assert a.win_rate == 100
        assert a.total_pips == 25

    def test_win_and_loss(self, make_trade):
        t1 = make_trade(strategy="Breakout", pips_captured=25, session=TradeSession.LONDON)
        t2 = make_trade(strategy="Breakout", pips_captured=-10, session=TradeSession.ASIA)
        a = compute_journal_analytics([t2, t1])
        assert a.total_trades == 2
        assert a.win_rate == 50
        assert a.total_pips == 15
        assert a.pips_by_session == {
            TradeSession.ASIA: -10.0,
            TradeSession.LONDON: 25.0,
            TradeSession.NEW_YORK: 0.0,
            TradeSession.OVERLAP: 0.0,
        }
        assert a.wins_by_strategy == {"Breakout": 1}

    def test_flipping_the_winner_to_a_loss(self, make_trade):
        t1 = make_trade(strategy="Breakout", pips_captured=-5, session=TradeSession.LONDON)
        t2 = make_trade(strategy="Breakout", pips_captured=-10, session=TradeSession.ASIA)
        a = compute_journal_analytics([t2, t1])
        assert a.win_rate == 0
        assert a.total_pips == -15
        assert a.wins_by_strategy == {}


class TestAggregations:
    def test_win_rate_is_exact_percentage(self, make_trade):
        trades = [make_trade(pips_captured=p) for p in (10, -1, 0, 4, 7, -3)]
        a = compute_journal_analytics(trades)
        assert a.win_rate == pytest.approx(100 * 3 / 6)
        assert 0 <= a.win_rate <= 100

    def test_zero_pip_trade_is_not_a_win(self, make_trade):
        a = compute_journal_analytics([make_trade(pips_captured=0, strategy="Scalping")])
        assert a.win_rate == 0
        assert a.wins_by_strategy == {}
        assert a.win_loss_data == [{"name": "Wins", "value": 0}, {"name": "Losses", "value": 1}]

    def test_every_session_is_present(self, make_trade):
        a = compute_journal_analytics([make_trade(session=TradeSession.OVERLAP, pips_captured=-4.5)])
        assert set(a.pips_by_session) == set(TradeSession)
        assert a.pips_by_session[TradeSession.OVERLAP] == -4.5
        assert a.pips_by_session[TradeSession.NEW_YORK] == 0

    def test_losing_strategies_are_absent(self, make_trade):
        trades = [
            make_trade(strategy="Breakout", pips_captured=12),
            make_trade(strategy="Breakout", pips_captured=8),
            make_trade(strategy="News Trading", pips_captured=-20),
            make_trade(strategy="Scalping", pips_captured=3),
        ]
        a = compute_journal_analytics(trades)
        assert a.wins_by_strategy == {"Breakout": 2, "Scalping": 1}
        assert "News Trading" not in a.wins_by_strategy

    def test_risk_free_count(self, make_trade):
        trades = [make_trade(risk_free=True), make_trade(risk_free=False), make_trade(risk_free=True)]
        assert compute_journal_analytics(trades).risk_free_trades == 2

    def test_recent_trades_keep_store_order_and_limit(self, make_trade):
        trades = [make_trade() for _ in range(13)]
        a = compute_journal_analytics(trades)
        assert a.recent_trades == tuple(trades[:10])
        assert compute_journal_analytics(trades, recent_limit=3).recent_trades == tuple(trades[:3])


class TestChartData:
    def test_session_chart_follows_enum_order(self, make_trade):
        a = compute_journal_analytics([make_trade(session=TradeSession.ASIA, pips_captured=5)])
        assert a.pips_by_session_data == [
            {"name": "Asia", "pips": 5.0},
            {"name": "London", "pips": 0.0},
            {"name": "New York", "pips": 0.0},
            {"name": "Overlap", "pips": 0.0},
        ]

    def test_strategy_chart_lists_winning_strategies(self, make_trade):
        trades = [
            make_trade(strategy="Price Action", pips_captured=9),
            make_trade(strategy="Breakout", pips_captured=1),
            make_trade(strategy="Price Action", pips_captured=2),
        ]
        a = compute_journal_analytics(trades)
        assert a.wins_by_strategy_data == [
            {"name": "Price Action", "value": 2},
            {"name": "Breakout", "value": 1},
        ]
        assert a.win_loss_data == [{"name": "Wins", "value": 3}, {"name": "Losses", "value": 0}]
