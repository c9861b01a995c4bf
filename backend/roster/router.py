"""
Request routing: one handler per request type.

route() is pure: it takes the current Store, the caller's session ID and a
request, and returns the new Store plus the deliveries to make. Lookup and
authorization failures never raise. GetTeam and SubmitAccessCode answer the
caller with TeamNotFound / AccessCodeRequired; every mutating request with a bad
code or unknown target is a silent no-op (same Store, no deliveries).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Tuple, Type, Union

from roster import store as team_store
from roster.messages import (
    AccessCodeRequired,
    AvailabilityUpdated,
    ChangeMatchDate,
    CreateMatch,
    CreateMember,
    CreateTeam,
    GetTeam,
    MatchCreated,
    MatchDateChanged,
    MemberCreated,
    SubmitAccessCode,
    TeamCreated,
    TeamLoaded,
    TeamNotFound,
    ToBackend,
    ToFrontend,
    UpdateAvailability,
)
from roster.errors import UnroutableRequestError
from roster.sessions import subscribe_session
from roster.store import Access, Store, TeamAggregate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToSession:
    """Deliver to one session (the caller)."""

    session_id: str


@dataclass(frozen=True)
class ToTeam:
    """Deliver to every session subscribed to a team."""

    team_id: str


Target = Union[ToSession, ToTeam]


@dataclass(frozen=True)
class Delivery:
    target: Target
    message: ToFrontend


@dataclass(frozen=True)
class RouteContext:
    session_id: str
    now: datetime
    default_season: int


Result = Tuple[Store, List[Delivery]]


def snapshot(aggregate: TeamAggregate) -> TeamLoaded:
    """Denormalized view of a team: flattened matches, members, availability."""
    return TeamLoaded(
        team=aggregate.team,
        matches=aggregate.matches(),
        members=list(aggregate.members.values()),
        availability=aggregate.availability_entries(),
    )


def _create_team(store: Store, request: CreateTeam, ctx: RouteContext) -> Result:
    new_store, created = team_store.create_team(
        store,
        name=request.name,
        creator_name=request.creator_name,
        other_member_names=request.other_member_names,
        players_needed=request.players_needed,
        created_at=ctx.now,
    )
    logger.info(
        "Team created: team_id=%s members=%d session=%s",
        created.team.id,
        len(created.member_ids),
        ctx.session_id,
    )
    reply = TeamCreated(
        team=created.team,
        creator_member_id=created.creator_member_id,
        access_code=created.team.access_code,
    )
    return new_store, [Delivery(ToSession(ctx.session_id), reply)]


def _load_team(store: Store, team_id: str, access_code: str, ctx: RouteContext) -> Result:
    """Shared by GetTeam and SubmitAccessCode: reply to caller, subscribe on success."""
    access = team_store.check_access(store, team_id, access_code)
    caller = ToSession(ctx.session_id)
    if access == Access.NOT_FOUND:
        return store, [Delivery(caller, TeamNotFound())]
    if access == Access.DENIED:
        logger.debug("Access code rejected: team_id=%s session=%s", team_id, ctx.session_id)
        return store, [Delivery(caller, AccessCodeRequired(team_id=team_id))]

    new_store = subscribe_session(store, team_id, ctx.session_id)
    if new_store is not store:
        logger.info("Session subscribed: team_id=%s session=%s", team_id, ctx.session_id)
    return new_store, [Delivery(caller, snapshot(new_store.teams[team_id]))]


def _get_team(store: Store, request: GetTeam, ctx: RouteContext) -> Result:
    return _load_team(store, request.team_id, request.access_code, ctx)


def _submit_access_code(store: Store, request: SubmitAccessCode, ctx: RouteContext) -> Result:
    return _load_team(store, request.team_id, request.access_code, ctx)


def _create_match(store: Store, request: CreateMatch, ctx: RouteContext) -> Result:
    new_store, match = team_store.create_match(
        store, request.team_id, request.match, request.access_code, ctx.default_season
    )
    if match is None:
        return store, []
    return new_store, [Delivery(ToTeam(request.team_id), MatchCreated(match=match))]


def _create_member(store: Store, request: CreateMember, ctx: RouteContext) -> Result:
    new_store, member = team_store.create_member(
        store, request.team_id, request.member, request.access_code
    )
    if member is None:
        return store, []
    return new_store, [Delivery(ToTeam(request.team_id), MemberCreated(member=member))]


def _update_availability(store: Store, request: UpdateAvailability, ctx: RouteContext) -> Result:
    new_store, team_id, entry = team_store.update_availability(
        store, request.member_id, request.match_id, request.status, request.access_code
    )
    if team_id is None or entry is None:
        return store, []
    return new_store, [Delivery(ToTeam(team_id), AvailabilityUpdated(entry=entry))]


def _change_match_date(store: Store, request: ChangeMatchDate, ctx: RouteContext) -> Result:
    new_store, changed = team_store.change_match_date(
        store, request.match_id, request.new_date, request.team_id, request.access_code
    )
    if not changed:
        return store, []
    message = MatchDateChanged(match_id=request.match_id, new_date=request.new_date)
    return new_store, [Delivery(ToTeam(request.team_id), message)]


_HANDLERS: Dict[Type, Callable[..., Result]] = {
    CreateTeam: _create_team,
    GetTeam: _get_team,
    CreateMatch: _create_match,
    CreateMember: _create_member,
    UpdateAvailability: _update_availability,
    ChangeMatchDate: _change_match_date,
    SubmitAccessCode: _submit_access_code,
}


def route(store: Store, request: ToBackend, ctx: RouteContext) -> Result:
    """Apply one request. Returns (new_store, deliveries)."""
    handler = _HANDLERS.get(type(request))
    if handler is None:
        raise UnroutableRequestError(f"no handler for request type {type(request).__name__}")
    return handler(store, request, ctx)
