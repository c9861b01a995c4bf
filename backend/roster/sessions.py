"""
Session subscriptions: which sessions currently view which team.

A session is subscribed once it has loaded a team with the right access code.
There is no unsubscribe; subscriptions live as long as the process.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, FrozenSet

from roster.store import Store


def subscribe(
    subscriptions: Dict[str, FrozenSet[str]],
    team_id: str,
    session_id: str,
) -> Dict[str, FrozenSet[str]]:
    """Return subscriptions with session_id added to team_id. Same object if already present."""
    current = subscriptions.get(team_id, frozenset())
    if session_id in current:
        return subscriptions
    updated = dict(subscriptions)
    updated[team_id] = current | {session_id}
    return updated


def subscribe_session(store: Store, team_id: str, session_id: str) -> Store:
    subscriptions = subscribe(store.subscriptions, team_id, session_id)
    if subscriptions is store.subscriptions:
        return store
    return replace(store, subscriptions=subscriptions)


def subscription_count(store: Store) -> int:
    """Total (team, session) pairs."""
    return sum(len(sessions) for sessions in store.subscriptions.values())
