"""
Fan-out of routed messages to sessions.

A ToSession delivery reaches exactly that session; a ToTeam delivery reaches every
session subscribed to the team in the given Store. Delivery only queues
frames: the transport writes them later, in queue order, and drops frames for
sessions with no open connection.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Protocol, Sequence, Tuple

from roster.messages import ToFrontend
from roster.router import Delivery, ToSession, ToTeam
from roster.store import Store

logger = logging.getLogger(__name__)

Outbound = Tuple[str, ToFrontend]  # (session_id, message)


class Transport(Protocol):
    """Anything that can queue a text frame for every open connection of a session."""

    def enqueue(self, session_id: str, payload: str) -> None:
        ...


def resolve(store: Store, deliveries: Sequence[Delivery]) -> List[Outbound]:
    """Expand delivery targets into concrete (session_id, message) pairs."""
    out: List[Outbound] = []
    for delivery in deliveries:
        target = delivery.target
        if isinstance(target, ToSession):
            out.append((target.session_id, delivery.message))
        elif isinstance(target, ToTeam):
            for session_id in sorted(store.subscribers(target.team_id)):
                out.append((session_id, delivery.message))
    return out


class Broadcaster:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def deliver(self, outbound: Sequence[Outbound]) -> None:
        """Queue each message in order; payloads are encoded once per distinct message."""
        encoded: Dict[int, str] = {}
        for session_id, message in outbound:
            payload = encoded.get(id(message))
            if payload is None:
                payload = message.model_dump_json()
                encoded[id(message)] = payload
            logger.debug("Queueing %s for session=%s", message.type, session_id)
            self._transport.enqueue(session_id, payload)
