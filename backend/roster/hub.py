"""
RosterHub: owner of the single authoritative Store.

Requests are applied one at a time under an asyncio.Lock: route, swap in the new
Store, resolve recipients and queue their frames. Queueing inside the lock fixes
the order every session sees; the socket writes happen later in per-connection
writer tasks, so a slow connection never holds up the next request.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from roster.broadcaster import Broadcaster, Outbound, Transport, resolve
from roster.identifiers import initial_seed
from roster.messages import ToBackend
from roster.router import RouteContext, route
from roster.sessions import subscription_count
from roster.store import Store, empty_store

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RosterHub:
    def __init__(
        self,
        transport: Transport,
        default_season: int,
        store: Optional[Store] = None,
        seed: Optional[int] = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if store is None:
            store = empty_store(seed if seed is not None else initial_seed())
        self._store = store
        self._broadcaster = Broadcaster(transport)
        self._default_season = default_season
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def store(self) -> Store:
        return self._store

    async def dispatch(self, session_id: str, request: ToBackend) -> List[Outbound]:
        """Apply a request and queue the resulting messages. Returns who gets what."""
        async with self._lock:
            ctx = RouteContext(
                session_id=session_id,
                now=self._clock(),
                default_season=self._default_season,
            )
            new_store, deliveries = route(self._store, request, ctx)
            self._store = new_store
            outbound = resolve(new_store, deliveries)
            self._broadcaster.deliver(outbound)
            return outbound

    def stats(self) -> Dict[str, int]:
        store = self._store
        return {
            "teams": len(store.teams),
            "subscriptions": subscription_count(store),
            "next_id": store.next_id,
        }
