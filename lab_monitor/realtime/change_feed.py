"""
Relay of Supabase Realtime table-change notifications.

The backend publishes postgres_changes events; this module holds the single
connection to that feed and wakes in-process subscribers (dashboard streams)
whenever a table they watch changes. A notification carries no state of its
own here: subscribers re-fetch what they show.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, Iterable, Optional, Set

from supabase import acreate_client

from lab_monitor.config.roles_config import REALTIME_TABLES
from lab_monitor.config.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class TableChange:
    table: str
    event: str


def _event_type(payload: Any) -> str:
    if not isinstance(payload, dict):
        return "*"
    data = payload.get("data") or payload
    return data.get("type") or data.get("eventType") or "*"


class Subscription:
    """Wake-ups for one subscriber; unread changes coalesce into the latest one"""

    def __init__(self, tables: Iterable[str]):
        self.tables = set(tables)
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=1)

    def notify(self, change: TableChange) -> None:
        if self._queue.full():
            self._queue.get_nowait()
        self._queue.put_nowait(change)

    async def next_change(self, timeout: Optional[float] = None) -> Optional[TableChange]:
        """Wait for the next change; None when the timeout elapses first"""
        try:
            return await asyncio.wait_for(self._queue.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None


class ChangeFeed:
    def __init__(self, tables: Iterable[str] = REALTIME_TABLES):
        self.tables = list(tables)
        self._subscriptions: Dict[str, Set[Subscription]] = {t: set() for t in self.tables}
        self._task: Optional[asyncio.Task] = None
        self.connected = False

    @asynccontextmanager
    async def subscribe(self, tables: Iterable[str]):
        subscription = Subscription(t for t in tables if t in self._subscriptions)
        for table in subscription.tables:
            self._subscriptions[table].add(subscription)
        try:
            yield subscription
        finally:
            for table in subscription.tables:
                self._subscriptions[table].discard(subscription)

    def subscriber_count(self, table: str) -> int:
        return len(self._subscriptions.get(table, ()))

    def publish(self, table: str, payload: Any = None) -> None:
        """Hand a change notification for table to its subscribers"""
        change = TableChange(table=table, event=_event_type(payload))
        logger.debug(f"Change on {table}: {change.event}")
        for subscription in list(self._subscriptions.get(table, ())):
            subscription.notify(change)

    async def _listen(self) -> None:
        # Only table names and event types are relayed, so the feed may see every row
        key = settings.supabase_service_role_key or settings.supabase_key
        client = await acreate_client(settings.supabase_url, key)
        await client.realtime.connect()
        for table in self.tables:
            channel = client.realtime.channel(f"{table}_changes")
            await channel.on_postgres_changes(
                "*",
                schema=settings.realtime_schema,
                table=table,
                callback=partial(self.publish, table),
            ).subscribe()
        self.connected = True
        logger.info(f"Realtime change feed subscribed to {', '.join(self.tables)}")
        try:
            # connect() runs the receive loop in the background; hold until the socket drops
            while client.realtime.is_connected:
                await asyncio.sleep(settings.realtime_health_check_seconds)
        finally:
            self.connected = False
            await client.realtime.close()

    async def run(self) -> None:
        """Keep the realtime connection up, reconnecting after a delay when it drops"""
        while True:
            try:
                await self._listen()
                logger.warning("Realtime change feed connection closed")
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Error in realtime change feed: {str(e)}")
            await asyncio.sleep(settings.realtime_reconnect_seconds)

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None


change_feed = ChangeFeed()
