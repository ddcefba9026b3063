"""dashboard/services.py — Process-wide journal objects shared by Streamlit reruns.

``st.cache_resource`` keeps one :class:`TradeLogStore` (loaded once at
startup) and one :class:`TradeCoach` for the lifetime of the server process.
"""
from __future__ import annotations

import asyncio
import concurrent.futures
import logging
from typing import Any, Coroutine, TypeVar

import streamlit as st

from agents.trade_coach import TradeCoach
from core.trade_log_store import TradeLogStore
from database.local_store import LocalStore
from journal_config import JournalEnvironmentConfig, load_journal_environment

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Async helper (Streamlit runs synchronously; LocalStore and the LLM are async)
# ---------------------------------------------------------------------------

def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run *coro* to completion from a synchronous Streamlit context.

    Exceptions raised by the coroutine propagate to the caller.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()


# ---------------------------------------------------------------------------
# Cached resources
# ---------------------------------------------------------------------------

@st.cache_resource
def get_journal_config() -> JournalEnvironmentConfig:
    return load_journal_environment()


@st.cache_resource
def get_trade_log_store() -> TradeLogStore:
    cfg = get_journal_config()
    store = TradeLogStore(LocalStore(db_path=cfg.db_path), storage_key=cfg.storage_key)
    run_async(store.load())
    logger.info("Journal ready: %d trades from %s", len(store), cfg.db_path)
    return store


@st.cache_resource
def get_trade_coach() -> TradeCoach:
    cfg = get_journal_config()
    return TradeCoach(model=cfg.llm_model, api_key=cfg.llm_api_key or None, base_url=cfg.llm_base_url)
