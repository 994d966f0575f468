"""PostgreSQL LISTEN/NOTIFY relay with auto-reconnect."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable, Coroutine
from typing import Any

import asyncpg

LOGGER = logging.getLogger("PgListener")

ACTIVITY_CHANNEL = "bot_activity"


async def pg_listen(
    pool: asyncpg.Pool,
    channel: str,
    handler: Callable[..., Coroutine[Any, Any, None]],
    *,
    keepalive_interval: int = 30,
    reconnect_delay: int = 10,
) -> None:
    """Listen on a PostgreSQL NOTIFY channel until cancelled.

    Args:
        pool: asyncpg connection pool.
        channel: PostgreSQL NOTIFY channel name.
        handler: Async callback ``(connection, pid, channel, payload) -> None``.
        keepalive_interval: Seconds between keepalive pings.
        reconnect_delay: Seconds to wait before reconnect after error.
    """
    while True:
        connection: asyncpg.Connection | None = None
        try:
            connection = await pool.acquire()
            await connection.add_listener(channel, handler)
            LOGGER.info(f"PostgreSQL LISTEN active on '{channel}' channel")

            try:
                while True:
                    await asyncio.sleep(keepalive_interval)
                    await connection.execute("SELECT 1")
            finally:
                try:
                    await connection.remove_listener(channel, handler)
                except Exception as e:
                    LOGGER.debug(f"remove_listener('{channel}') failed: {e}")
                await pool.release(connection)
                connection = None

        except asyncio.CancelledError:
            LOGGER.info(f"PostgreSQL LISTEN '{channel}' shutting down...")
            break
        except Exception as e:
            LOGGER.error(f"Error in pg_listen('{channel}'): {e}")
            LOGGER.warning(
                f"Reconnecting to PostgreSQL LISTEN '{channel}' in {reconnect_delay}s..."
            )
            if connection is not None:
                connection.terminate()
                connection = None
            try:
                await asyncio.sleep(reconnect_delay)
            except asyncio.CancelledError:
                break


def decode_activity_payload(payload: str) -> dict[str, Any] | None:
    """Parse a ``bot_activity`` NOTIFY payload; None when it is not a JSON object."""
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        LOGGER.error(f"Invalid JSON in {ACTIVITY_CHANNEL} notification: {e}")
        return None
    if not isinstance(data, dict):
        LOGGER.error(f"Ignoring non-object {ACTIVITY_CHANNEL} notification: {payload!r}")
        return None
    return data
