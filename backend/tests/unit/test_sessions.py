"""Unit tests for session subscriptions."""

from __future__ import annotations

from roster.sessions import subscribe, subscribe_session, subscription_count
from roster.store import empty_store


def test_subscribe_adds_session() -> None:
    subs = subscribe({}, "team-a", "s1")
    assert subs == {"team-a": frozenset({"s1"})}


def test_subscribe_is_idempotent() -> None:
    subs = subscribe({}, "team-a", "s1")
    again = subscribe(subs, "team-a", "s1")
    assert again is subs
    assert len(again["team-a"]) == 1


def test_subscribe_does_not_mutate_input() -> None:
    original = {"team-a": frozenset({"s1"})}
    updated = subscribe(original, "team-a", "s2")
    assert original == {"team-a": frozenset({"s1"})}
    assert updated["team-a"] == frozenset({"s1", "s2"})


def test_subscribe_session_on_store() -> None:
    store = empty_store()
    store1 = subscribe_session(store, "team-a", "s1")
    store2 = subscribe_session(store1, "team-a", "s1")
    store3 = subscribe_session(store2, "team-b", "s1")
    assert store2 is store1
    assert store1.subscribers("team-a") == frozenset({"s1"})
    assert store.subscribers("team-a") == frozenset()
    assert subscription_count(store3) == 2
