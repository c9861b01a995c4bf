"""
Authoritative in-memory team store.

The Store is an immutable value. Every operation takes the current Store and
returns a new one together with its outcome; an operation that fails lookup or
authorization returns the very same Store object, so callers can detect a no-op
with ``new is old``.

Layout per team (TeamAggregate):
- team: Team metadata
- seasons: season year -> SeasonMatches (first/second half, newest first)
- members: member_id -> Member
- availability: (member_id, match_id) -> AvailabilityStatus

Store-wide:
- next_id: monotonic counter for member and match IDs (never reused across teams)
- seed: PRNG state for team IDs and access codes
- subscriptions: team_id -> frozenset of session IDs viewing that team
- match_index: match_id -> owning team_id
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from roster.identifiers import (
    next_access_code,
    next_match_id,
    next_member_id,
    next_team_id,
)
from roster.schema import (
    AvailabilityEntry,
    AvailabilityStatus,
    Match,
    MatchForm,
    Member,
    MemberForm,
    SeasonHalf,
    Team,
)
from roster.seasons import season_from_date, season_half, slugify

AvailabilityKey = Tuple[str, str]  # (member_id, match_id)


@dataclass(frozen=True)
class SeasonMatches:
    first_half: Tuple[Match, ...] = ()
    second_half: Tuple[Match, ...] = ()

    def prepend(self, match: Match) -> "SeasonMatches":
        if match.season_half == SeasonHalf.FIRST_HALF:
            return replace(self, first_half=(match,) + self.first_half)
        return replace(self, second_half=(match,) + self.second_half)

    def all_matches(self) -> Tuple[Match, ...]:
        return self.first_half + self.second_half


@dataclass(frozen=True)
class TeamAggregate:
    """Everything owned by one team."""

    team: Team
    seasons: Dict[int, SeasonMatches] = field(default_factory=dict)
    members: Dict[str, Member] = field(default_factory=dict)
    availability: Dict[AvailabilityKey, AvailabilityStatus] = field(default_factory=dict)

    def matches(self) -> List[Match]:
        """All matches flattened: seasons ascending, first half before second, list order within."""
        out: List[Match] = []
        for season in sorted(self.seasons):
            out.extend(self.seasons[season].all_matches())
        return out

    def find_match(self, match_id: str) -> Optional[Match]:
        for m in self.matches():
            if m.id == match_id:
                return m
        return None

    def availability_entries(self) -> List[AvailabilityEntry]:
        """Availability relation flattened, sorted by (member_id, match_id) for stable output."""
        return [
            AvailabilityEntry(member_id=member_id, match_id=match_id, status=status)
            for (member_id, match_id), status in sorted(self.availability.items())
        ]


@dataclass(frozen=True)
class Store:
    teams: Dict[str, TeamAggregate] = field(default_factory=dict)
    next_id: int = 1
    seed: int = 0
    subscriptions: Dict[str, FrozenSet[str]] = field(default_factory=dict)
    match_index: Dict[str, str] = field(default_factory=dict)

    def get_team(self, team_id: str) -> Optional[TeamAggregate]:
        return self.teams.get(team_id)

    def team_for_match(self, match_id: str) -> Optional[TeamAggregate]:
        team_id = self.match_index.get(match_id)
        if team_id is None:
            return None
        return self.teams.get(team_id)

    def subscribers(self, team_id: str) -> FrozenSet[str]:
        return self.subscriptions.get(team_id, frozenset())


def empty_store(seed: int = 0) -> Store:
    return Store(seed=seed)


def _put_team(store: Store, aggregate: TeamAggregate, **changes) -> Store:
    teams = dict(store.teams)
    teams[aggregate.team.id] = aggregate
    return replace(store, teams=teams, **changes)


# -----------------------------------------------------------------------------
# Access
# -----------------------------------------------------------------------------


class Access(StrEnum):
    """Result of checking a supplied access code against a team."""

    GRANTED = "GRANTED"
    DENIED = "DENIED"
    NOT_FOUND = "NOT_FOUND"


def check_access(store: Store, team_id: str, access_code: str) -> Access:
    aggregate = store.get_team(team_id)
    if aggregate is None:
        return Access.NOT_FOUND
    if access_code != aggregate.team.access_code:
        return Access.DENIED
    return Access.GRANTED


def _authorized(store: Store, team_id: str, access_code: str) -> Optional[TeamAggregate]:
    aggregate = store.get_team(team_id)
    if aggregate is None or access_code != aggregate.team.access_code:
        return None
    return aggregate


# -----------------------------------------------------------------------------
# Mutations
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class CreatedTeam:
    team: Team
    creator_member_id: str
    member_ids: Tuple[str, ...]  # creator first, then other members in input order


def create_team(
    store: Store,
    name: str,
    creator_name: str,
    other_member_names: Sequence[str],
    players_needed: int,
    created_at: datetime,
) -> Tuple[Store, CreatedTeam]:
    """
    Create a team with its creator and initial members.

    Team ID is drawn before the access code. The creator consumes the first counter
    tick, then one tick per non-blank name in other_member_names, in order.
    """
    team_id, seed = next_team_id(store.seed)
    access_code, seed = next_access_code(seed)
    team_name = name.strip()
    team = Team(
        id=team_id,
        name=team_name,
        slug=slugify(team_name),
        players_needed=players_needed,
        created_at=created_at,
        access_code=access_code,
    )

    counter = store.next_id
    members: Dict[str, Member] = {}
    names = [creator_name.strip()] + [n.strip() for n in other_member_names if n.strip()]
    for member_name in names:
        member_id, counter = next_member_id(counter)
        members[member_id] = Member(id=member_id, team_id=team_id, name=member_name)

    member_ids = tuple(members)
    aggregate = TeamAggregate(team=team, members=members)
    new_store = _put_team(store, aggregate, next_id=counter, seed=seed)
    return new_store, CreatedTeam(team=team, creator_member_id=member_ids[0], member_ids=member_ids)


def create_match(
    store: Store,
    team_id: str,
    form: MatchForm,
    access_code: str,
    default_season: int,
) -> Tuple[Store, Optional[Match]]:
    """Add a match to the front of its season/half list. No-op on unknown team or bad code."""
    aggregate = _authorized(store, team_id, access_code)
    if aggregate is None:
        return store, None

    match_id, counter = next_match_id(store.next_id)
    season = season_from_date(form.date, default_season)
    match = Match(
        id=match_id,
        opponent=form.opponent,
        date=form.date,
        time=form.time,
        is_home=form.is_home,
        venue=form.venue,
        season=season,
        season_half=season_half(form.date),
        matchday=form.matchday,
    )
    seasons = dict(aggregate.seasons)
    seasons[season] = seasons.get(season, SeasonMatches()).prepend(match)
    match_index = dict(store.match_index)
    match_index[match_id] = team_id
    new_store = _put_team(
        store,
        replace(aggregate, seasons=seasons),
        next_id=counter,
        match_index=match_index,
    )
    return new_store, match


def create_member(
    store: Store,
    team_id: str,
    form: MemberForm,
    access_code: str,
) -> Tuple[Store, Optional[Member]]:
    aggregate = _authorized(store, team_id, access_code)
    if aggregate is None:
        return store, None

    member_id, counter = next_member_id(store.next_id)
    member = Member(id=member_id, team_id=team_id, name=form.name.strip())
    members = dict(aggregate.members)
    members[member_id] = member
    return _put_team(store, replace(aggregate, members=members), next_id=counter), member


def update_availability(
    store: Store,
    member_id: str,
    match_id: str,
    status: AvailabilityStatus,
    access_code: str,
) -> Tuple[Store, Optional[str], Optional[AvailabilityEntry]]:
    """
    Upsert one (member, match) answer.

    The owning team is found through the match index. Returns
    (store, team_id, entry); team_id and entry are None on a no-op.
    """
    aggregate = store.team_for_match(match_id)
    if aggregate is None or access_code != aggregate.team.access_code:
        return store, None, None

    availability = dict(aggregate.availability)
    availability[(member_id, match_id)] = status
    entry = AvailabilityEntry(member_id=member_id, match_id=match_id, status=status)
    new_store = _put_team(store, replace(aggregate, availability=availability))
    return new_store, aggregate.team.id, entry


def change_match_date(
    store: Store,
    match_id: str,
    new_date: str,
    team_id: str,
    access_code: str,
) -> Tuple[Store, bool]:
    """
    Move a match to new_date and drop every availability answer for it.

    season and season_half keep the values derived at creation. Returns
    (store, changed); changed is False for unknown team, bad code, or a match that
    is not in that team.
    """
    aggregate = _authorized(store, team_id, access_code)
    if aggregate is None or store.match_index.get(match_id) != team_id:
        return store, False

    seasons: Dict[int, SeasonMatches] = {}
    for season, halves in aggregate.seasons.items():
        seasons[season] = SeasonMatches(
            first_half=tuple(_with_date(m, match_id, new_date) for m in halves.first_half),
            second_half=tuple(_with_date(m, match_id, new_date) for m in halves.second_half),
        )
    availability = {
        key: status for key, status in aggregate.availability.items() if key[1] != match_id
    }
    new_store = _put_team(store, replace(aggregate, seasons=seasons, availability=availability))
    return new_store, True


def _with_date(match: Match, match_id: str, new_date: str) -> Match:
    if match.id != match_id:
        return match
    return match.model_copy(update={"date": new_date})
