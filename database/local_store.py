"""database/local_store.py — SQLite-backed key-value document store.

Holds whole serialized documents under string keys, the way a browser's
``localStorage`` does.  The trade journal keeps its entire trade list in one
document and overwrites it on every change.  Uses :mod:`aiosqlite` (async SQLite).

The SQLite file is created automatically at ``./data/trade_journal.db``
(relative to the project root).  Change ``JOURNAL_DB_PATH`` or pass a custom
path to the constructor.

Thread-safety note: aiosqlite wraps a dedicated worker thread, so it is safe
to call from any event-loop coroutine.  Connections are opened per call, so a
single :class:`LocalStore` may be driven from successive ``asyncio.run`` calls
(the Streamlit and CLI usage pattern).
"""
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Optional

import aiosqlite  # type: ignore[import]

logger = logging.getLogger(__name__)

# Default path (relative to project root; created on first use)
_DEFAULT_DB_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), "data", "trade_journal.db"
)


class LocalStore:
    """Async SQLite key-value store.

    Args:
        db_path: Absolute or relative path for the SQLite file.
                 Defaults to ``<project_root>/data/trade_journal.db``.
    """

    def __init__(self, db_path: str = _DEFAULT_DB_PATH) -> None:
        self._db_path = db_path
        self._initialised = False

    @property
    def db_path(self) -> str:
        return self._db_path

    # ------------------------------------------------------------------ #
    # Lifecycle                                                            #
    # ------------------------------------------------------------------ #

    async def _ensure_init(self) -> None:
        """Create the table schema the first time we open the DB."""
        if self._initialised:
            return
        parent = os.path.dirname(self._db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key         TEXT PRIMARY KEY,
                    value       TEXT NOT NULL,
                    updated_at  TEXT NOT NULL
                );
                """
            )
            await db.commit()
        self._initialised = True
        logger.info("LocalStore ready at %s", self._db_path)

    async def connect(self) -> None:
        """Initialise the schema eagerly; otherwise done on first query."""
        await self._ensure_init()

    async def close(self) -> None:
        """No-op; aiosqlite connections are opened/closed per-query."""

    # ------------------------------------------------------------------ #
    # Document access                                                      #
    # ------------------------------------------------------------------ #

    async def get_item(self, key: str) -> Optional[str]:
        """Return the document stored under *key*, or ``None`` when absent."""
        await self._ensure_init()
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute(
                "SELECT value FROM kv_store WHERE key = ?;", (key,)
            ) as cursor:
                row = await cursor.fetchone()
        return row[0] if row else None

    async def set_item(self, key: str, value: str) -> None:
        """Overwrite the document stored under *key*."""
        await self._ensure_init()
        now = datetime.now(timezone.utc).isoformat()
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at;
                """,
                (key, value, now),
            )
            await db.commit()
        logger.debug("Wrote %d chars under %s", len(value), key)

    async def remove_item(self, key: str) -> bool:
        """Delete *key*; returns True when a document was removed."""
        await self._ensure_init()
        async with aiosqlite.connect(self._db_path) as db:
            cursor = await db.execute("DELETE FROM kv_store WHERE key = ?;", (key,))
            await db.commit()
            removed = cursor.rowcount > 0
        return removed

    async def keys(self) -> list[str]:
        await self._ensure_init()
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute("SELECT key FROM kv_store ORDER BY key;") as cursor:
                rows = await cursor.fetchall()
        return [r[0] for r in rows]
