"""Key-value "brain" store for bot configuration.

Values are held in process and read synchronously. ``PostgresBrain`` mirrors
every write into the ``brain`` table and loads the table back on start.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import asyncpg

logger = logging.getLogger(__name__)

BRAIN_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS brain (
    key        TEXT PRIMARY KEY,
    value      JSONB NOT NULL,
    updated_at TIMESTAMPTZ DEFAULT NOW()
)
"""


class MemoryBrain:
    """In-process brain. Nothing survives a restart."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    async def load(self) -> None:
        pass

    def keys(self) -> list[str]:
        return list(self._data)


class PostgresBrain(MemoryBrain):
    """Brain backed by a PostgreSQL table (write-through, JSONB values)."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        super().__init__()
        self.pool = pool

    async def ensure_table(self) -> None:
        async with self.pool.acquire() as conn:
            await conn.execute(BRAIN_TABLE_SQL)

    async def load(self) -> None:
        """Replace in-process values with the table contents."""
        await self.ensure_table()
        async with self.pool.acquire() as conn:
            rows = await conn.fetch("SELECT key, value FROM brain")
        self._data = {row["key"]: json.loads(row["value"]) for row in rows}
        logger.info(f"Loaded {len(self._data)} brain keys from database")

    async def set(self, key: str, value: Any) -> None:
        await super().set(key, value)
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO brain (key, value)
                VALUES ($1, $2::jsonb)
                ON CONFLICT (key) DO UPDATE SET
                    value      = EXCLUDED.value,
                    updated_at = NOW()
                """,
                key,
                json.dumps(value),
            )
