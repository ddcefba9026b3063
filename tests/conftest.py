from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest

from core.trade_log_store import TradeLogStore
from database.local_store import LocalStore
from models.trade_log import (
    EmotionalState,
    TradeDirection,
    TradeFormData,
    TradeSession,
)


class InMemoryBlobStore:
    """Dict-backed stand-in for LocalStore that records every write."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})
        self.writes: list[tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False

    async def get_item(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("disk unavailable")
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.items[key] = value
        self.writes.append((key, value))


@pytest.fixture
def make_form() -> Callable[..., TradeFormData]:
    def _make(**kwargs) -> TradeFormData:
        defaults = dict(
            entry_date_time=datetime(2024, 6, 3, 9, 30),
            session=TradeSession.LONDON,
            currency_pair="EUR/USD",
            direction=TradeDirection.LONG,
            strategy="Breakout",
            pips_captured=25.0,
            risk_free=False,
            reason="Clean break of the Asian high",
            emotional_state=EmotionalState.CALM,
            suggestion="",
        )
        defaults.update(kwargs)
        return TradeFormData(**defaults)

    return _make


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def empty_store(blob_store: InMemoryBlobStore) -> TradeLogStore:
    """Loaded store with no trades (seed data disabled)."""
    store = TradeLogStore(blob_store, seed_factory=list)
    asyncio.run(store.load())
    return store


@pytest.fixture
def local_store(tmp_path: Path) -> LocalStore:
    return LocalStore(db_path=str(tmp_path / "journal.db"))


@pytest.fixture
def blob_factory() -> type[InMemoryBlobStore]:
    return InMemoryBlobStore
