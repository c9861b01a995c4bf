"""Unit tests for pure store operations."""

from __future__ import annotations

from datetime import datetime, timezone

from roster.schema import AvailabilityStatus, MatchForm, MemberForm, SeasonHalf
from roster.store import (
    Access,
    change_match_date,
    check_access,
    create_match,
    create_member,
    create_team,
    empty_store,
    update_availability,
)

NOW = datetime(2024, 8, 1, 12, 0, tzinfo=timezone.utc)
DEFAULT_SEASON = 2025


def _wrong(code: str) -> str:
    return "0000" if code != "0000" else "1111"


def test_create_team_members_and_creator() -> None:
    store = empty_store(seed=1)
    new_store, created = create_team(store, "Lions", "Alice", ["Bob", "Cara"], 11, NOW)
    aggregate = new_store.teams[created.team.id]
    assert created.creator_member_id in aggregate.members
    assert aggregate.members[created.creator_member_id].name == "Alice"
    assert len(aggregate.members) == 3
    assert len(set(created.member_ids)) == 3
    assert created.member_ids[0] == created.creator_member_id
    assert [aggregate.members[m].name for m in created.member_ids] == ["Alice", "Bob", "Cara"]
    assert created.team.slug == "lions"
    assert created.team.players_needed == 11
    assert created.team.created_at == NOW


def test_create_team_threads_counter_and_seed() -> None:
    store = empty_store(seed=1)
    new_store, created = create_team(store, "Lions", "Alice", ["Bob"], 5, NOW)
    assert created.creator_member_id == "member-1"
    assert new_store.next_id == 3
    assert new_store.seed != store.seed
    assert store.teams == {}


def test_create_team_skips_blank_names() -> None:
    _, created = create_team(empty_store(seed=1), "Lions", " Alice ", ["", "  ", "Bob "], 5, NOW)
    assert len(created.member_ids) == 2


def test_second_team_gets_new_ids() -> None:
    store, first = create_team(empty_store(seed=1), "Lions", "Alice", [], 5, NOW)
    store, second = create_team(store, "Tigers", "Tom", [], 5, NOW)
    assert first.team.id != second.team.id
    assert first.creator_member_id != second.creator_member_id


def test_check_access() -> None:
    store, created = create_team(empty_store(seed=1), "Lions", "Alice", [], 5, NOW)
    code = created.team.access_code
    assert check_access(store, created.team.id, code) == Access.GRANTED
    assert check_access(store, created.team.id, _wrong(code)) == Access.DENIED
    assert check_access(store, "missing", code) == Access.NOT_FOUND


def test_create_match_derives_season_and_half(lions) -> None:
    store, created, match = lions
    assert match.season == 2024
    assert match.season_half == SeasonHalf.FIRST_HALF
    aggregate = store.teams[created.team.id]
    assert aggregate.seasons[2024].first_half == (match,)
    assert store.match_index[match.id] == created.team.id


def test_create_match_prepends(lions) -> None:
    store, created, first = lions
    form = MatchForm(opponent="Bears", date="2024-10-01")
    store, second = create_match(store, created.team.id, form, created.team.access_code, DEFAULT_SEASON)
    assert store.teams[created.team.id].seasons[2024].first_half == (second, first)


def test_create_match_unparsable_date_uses_default_season(lions) -> None:
    store, created, _ = lions
    form = MatchForm(opponent="Bears", date="soon")
    _, match = create_match(store, created.team.id, form, created.team.access_code, DEFAULT_SEASON)
    assert match.season == DEFAULT_SEASON


def test_create_match_wrong_code_is_noop(lions) -> None:
    store, created, _ = lions
    form = MatchForm(opponent="Bears", date="2024-10-01")
    new_store, match = create_match(store, created.team.id, form, _wrong(created.team.access_code), DEFAULT_SEASON)
    assert match is None
    assert new_store is store


def test_create_member(lions) -> None:
    store, created, _ = lions
    new_store, member = create_member(store, created.team.id, MemberForm(name="Dan"), created.team.access_code)
    assert member.team_id == created.team.id
    assert new_store.teams[created.team.id].members[member.id] == member
    assert new_store.next_id == store.next_id + 1


def test_create_member_unknown_team_is_noop(lions) -> None:
    store, created, _ = lions
    new_store, member = create_member(store, "nope", MemberForm(name="Dan"), created.team.access_code)
    assert member is None
    assert new_store is store


def test_update_availability_touches_only_one_pair(lions) -> None:
    store, created, match = lions
    code = created.team.access_code
    alice, bob, cara = created.member_ids
    store, _, _ = update_availability(store, alice, match.id, AvailabilityStatus.MAYBE, code)
    before = dict(store.teams[created.team.id].availability)
    store, team_id, entry = update_availability(store, bob, match.id, AvailabilityStatus.AVAILABLE, code)
    assert team_id == created.team.id
    assert entry.status == AvailabilityStatus.AVAILABLE
    after = store.teams[created.team.id].availability
    assert after[(bob, match.id)] == AvailabilityStatus.AVAILABLE
    assert {k: v for k, v in after.items() if k != (bob, match.id)} == before


def test_update_availability_upserts(lions) -> None:
    store, created, match = lions
    code = created.team.access_code
    bob = created.member_ids[1]
    store, _, _ = update_availability(store, bob, match.id, AvailabilityStatus.AVAILABLE, code)
    store, _, _ = update_availability(store, bob, match.id, AvailabilityStatus.UNAVAILABLE, code)
    entries = store.teams[created.team.id].availability_entries()
    assert len(entries) == 1
    assert entries[0].status == AvailabilityStatus.UNAVAILABLE


def test_update_availability_unknown_match_or_bad_code_is_noop(lions) -> None:
    store, created, match = lions
    bob = created.member_ids[1]
    new_store, team_id, entry = update_availability(
        store, bob, "match-999", AvailabilityStatus.AVAILABLE, created.team.access_code
    )
    assert (new_store, team_id, entry) == (store, None, None)
    new_store, team_id, _ = update_availability(
        store, bob, match.id, AvailabilityStatus.AVAILABLE, _wrong(created.team.access_code)
    )
    assert new_store is store
    assert team_id is None


def test_change_match_date_clears_only_that_match(lions) -> None:
    store, created, match = lions
    code = created.team.access_code
    team_id = created.team.id
    alice, bob, cara = created.member_ids
    store, other = create_match(store, team_id, MatchForm(opponent="Bears", date="2024-10-01"), code, DEFAULT_SEASON)
    for member_id in (alice, bob, cara):
        store, _, _ = update_availability(store, member_id, match.id, AvailabilityStatus.AVAILABLE, code)
    store, _, _ = update_availability(store, bob, other.id, AvailabilityStatus.MAYBE, code)

    store, changed = change_match_date(store, match.id, "2025-01-10", team_id, code)
    assert changed is True
    aggregate = store.teams[team_id]
    assert [k for k in aggregate.availability if k[1] == match.id] == []
    assert aggregate.availability == {(bob, other.id): AvailabilityStatus.MAYBE}

    moved = aggregate.find_match(match.id)
    assert moved.date == "2025-01-10"
    # Classification is kept from creation time
    assert moved.season == 2024
    assert moved.season_half == SeasonHalf.FIRST_HALF


def test_change_match_date_wrong_team_or_code_is_noop(lions) -> None:
    store, created, match = lions
    code = created.team.access_code
    store2, other = create_team(store, "Tigers", "Tom", [], 5, NOW)
    new_store, changed = change_match_date(
        store2, match.id, "2025-01-10", other.team.id, other.team.access_code
    )
    assert changed is False
    assert new_store is store2
    new_store, changed = change_match_date(store, match.id, "2025-01-10", created.team.id, _wrong(code))
    assert changed is False
    assert new_store is store


def test_matches_flatten_in_season_order(lions) -> None:
    store, created, first = lions
    code = created.team.access_code
    team_id = created.team.id
    store, spring = create_match(store, team_id, MatchForm(opponent="Wolves", date="2025-03-01"), code, DEFAULT_SEASON)
    store, winter = create_match(store, team_id, MatchForm(opponent="Foxes", date="2024-02-01"), code, DEFAULT_SEASON)
    ids = [m.id for m in store.teams[team_id].matches()]
    assert ids == [first.id, winter.id, spring.id]
