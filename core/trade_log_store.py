"""
core/trade_log_store.py — In-memory trade journal with write-through persistence.

The :class:`TradeLogStore` owns the ordered list of :class:`TradeLog` records.
It is loaded once from a key-value blob store (``LocalStore``) and the whole
list is written back as one JSON document after every successful mutation.

Ordering: newest first.  ``add`` prepends, ``update`` keeps the position,
``delete`` removes one record, ``clear_all`` removes everything.

Usage:
    store = TradeLogStore(LocalStore(db_path="data/trade_journal.db"))
    await store.load()
    trade = store.add(form)
    store.update(trade.id, edited_form)
    await store.flush()
"""
from __future__ import annotations

import asyncio
import csv
import io
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional

from models.seed_data import build_seed_trade_logs
from models.trade_log import (
    DOCUMENT_FIELDS,
    TradeFormData,
    TradeLog,
    TradeNotFoundError,
)

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "forexTradeLogs"


# ---------------------------------------------------------------------------
# Document codec
# ---------------------------------------------------------------------------


def serialize_trade_logs(trade_logs: Iterable[TradeLog]) -> str:
    """Render the full trade list as the persisted JSON document."""
    return json.dumps([t.to_document() for t in trade_logs])


def deserialize_trade_logs(raw: str) -> list[TradeLog]:
    """Parse a persisted document back into records.

    Raises ValueError, KeyError or TypeError on any parse or shape problem;
    callers discard the document wholesale in that case.
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise TypeError(f"trade log document must be a list, got {type(data).__name__}")
    trade_logs = [TradeLog.from_document(item) for item in data]
    ids = [t.id for t in trade_logs]
    if len(set(ids)) != len(ids):
        raise ValueError("trade log document contains duplicate ids")
    return trade_logs


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class TradeLogStore:
    """Owns the trade list and keeps the blob store in sync with it.

    Args:
        blob_store:   Object with async ``get_item(key)`` / ``set_item(key, value)``
                      (normally :class:`database.local_store.LocalStore`).
        storage_key:  Key of the journal document (default ``forexTradeLogs``).
        seed_factory: Returns the trades used when no document exists yet.
    """

    def __init__(
        self,
        blob_store: Any,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        seed_factory: Callable[[], list[TradeLog]] = build_seed_trade_logs,
    ) -> None:
        self._blob_store = blob_store
        self._storage_key = storage_key
        self._seed_factory = seed_factory
        self._trade_logs: tuple[TradeLog, ...] = ()
        self._loaded = False

        # Write bookkeeping: only a newer snapshot may overwrite an older one.
        self._version = 0
        self._persisted_version = 0
        self._write_lock: Optional[asyncio.Lock] = None
        self._pending_writes: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def trade_logs(self) -> tuple[TradeLog, ...]:
        """Immutable snapshot of the current list, newest first."""
        return self._trade_logs

    def get(self, trade_id: str) -> Optional[TradeLog]:
        for trade in self._trade_logs:
            if trade.id == trade_id:
                return trade
        return None

    def __len__(self) -> int:
        return len(self._trade_logs)

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    async def load(self) -> tuple[TradeLog, ...]:
        """Populate the store from the blob store.

        Missing document → seed data.  Unreadable or malformed document → empty
        list.  Failures are logged, never raised.
        """
        try:
            raw = await self._blob_store.get_item(self._storage_key)
        except Exception:
            logger.exception(
                "Failed to read trade logs from %r, starting fresh.", self._storage_key
            )
            self._trade_logs = ()
        else:
            if raw is None:
                self._trade_logs = tuple(self._seed_factory())
                logger.info(
                    "No stored trade logs under %r; loaded %d demo trades",
                    self._storage_key,
                    len(self._trade_logs),
                )
            else:
                try:
                    self._trade_logs = tuple(deserialize_trade_logs(raw))
                except (ValueError, KeyError, TypeError) as exc:
                    logger.error(
                        "Failed to load or parse trade logs from %r, starting fresh: %s",
                        self._storage_key,
                        exc,
                    )
                    self._trade_logs = ()
                else:
                    logger.info("Loaded %d trade logs", len(self._trade_logs))
        self._loaded = True
        return self._trade_logs

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, form: TradeFormData) -> TradeLog:
        """Create a trade from *form* and put it at the top of the list.

        Raises:
            TradeValidationError: empty currency pair or unresolved ``Other``
                strategy; the store is unchanged.
        """
        self._require_loaded()
        trade = TradeLog.from_form(self._new_trade_id(), form)
        self._trade_logs = (trade, *self._trade_logs)
        logger.info("Added trade %s (%s %s)", trade.id, trade.currency_pair, trade.result.value)
        self._schedule_persist()
        return trade

    def update(self, trade_id: str, form: TradeFormData) -> TradeLog:
        """Replace every field of *trade_id* except its id.

        Raises:
            TradeNotFoundError: no trade has this id; nothing changes.
            TradeValidationError: invalid form; nothing changes.
        """
        self._require_loaded()
        index = self._index_of(trade_id)
        if index is None:
            logger.warning("Update requested for unknown trade %s", trade_id)
            raise TradeNotFoundError(trade_id)
        trade = TradeLog.from_form(trade_id, form)
        logs = list(self._trade_logs)
        logs[index] = trade
        self._trade_logs = tuple(logs)
        logger.info("Updated trade %s", trade_id)
        self._schedule_persist()
        return trade

    def delete(self, trade_id: str) -> bool:
        """Remove *trade_id*; unknown ids are a no-op returning False."""
        self._require_loaded()
        remaining = tuple(t for t in self._trade_logs if t.id != trade_id)
        if len(remaining) == len(self._trade_logs):
            logger.debug("Delete ignored; no trade %s", trade_id)
            return False
        self._trade_logs = remaining
        logger.info("Deleted trade %s", trade_id)
        self._schedule_persist()
        return True

    def clear_all(self) -> None:
        self._require_loaded()
        count = len(self._trade_logs)
        self._trade_logs = ()
        logger.info("Cleared %d trades", count)
        self._schedule_persist()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def persist(self) -> None:
        """Write the current list now and wait for the write to finish."""
        self._version += 1
        await self._write(self._version, serialize_trade_logs(self._trade_logs))

    async def flush(self) -> None:
        """Wait for writes scheduled from inside a running event loop."""
        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes))

    def _schedule_persist(self) -> None:
        self._version += 1
        version = self._version
        document = serialize_trade_logs(self._trade_logs)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Synchronous caller (Streamlit script thread, CLI): write right away
            asyncio.run(self._write(version, document))
            return
        task = loop.create_task(self._write(version, document))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write(self, version: int, document: str) -> None:
        if self._write_lock is None:
            self._write_lock = asyncio.Lock()
        async with self._write_lock:
            if version <= self._persisted_version:
                return
            try:
                await self._blob_store.set_item(self._storage_key, document)
            except Exception:
                logger.exception("Failed to save trade logs to %r", self._storage_key)
                return
            self._persisted_version = version

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_csv(self, trade_logs: Optional[Iterable[TradeLog]] = None) -> str:
        """Serialise trades (default: all) to a CSV string."""
        rows = [t.to_document() for t in (self._trade_logs if trade_logs is None else trade_logs)]
        if not rows:
            return ""
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=list(DOCUMENT_FIELDS), extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
        return buf.getvalue()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise RuntimeError("TradeLogStore.load() must complete before mutating the journal")

    def _index_of(self, trade_id: str) -> Optional[int]:
        for i, trade in enumerate(self._trade_logs):
            if trade.id == trade_id:
                return i
        return None

    def _new_trade_id(self) -> str:
        existing = {t.id for t in self._trade_logs}
        while True:
            trade_id = f"{datetime.now(timezone.utc).isoformat()}-{uuid.uuid4().hex[:12]}"
            if trade_id not in existing:
                return trade_id
