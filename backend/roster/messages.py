"""
Wire messages between viewers and the backend.

Requests (ToBackend) and responses (ToFrontend) are tagged on a literal "type"
field so a single JSON frame can be parsed into the right model.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from roster.schema import (
    AvailabilityEntry,
    AvailabilityStatus,
    Match,
    MatchForm,
    Member,
    MemberForm,
    Team,
)


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class CreateTeam(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    type: Literal["create_team"] = "create_team"
    name: str = Field(..., min_length=1)
    creator_name: str = Field(..., min_length=1)
    other_member_names: List[str] = Field(default_factory=list)
    players_needed: int = Field(..., ge=0)


class GetTeam(BaseModel):
    type: Literal["get_team"] = "get_team"
    team_id: str
    access_code: str = ""


class CreateMatch(BaseModel):
    type: Literal["create_match"] = "create_match"
    team_id: str
    match: MatchForm
    access_code: str = ""


class CreateMember(BaseModel):
    type: Literal["create_member"] = "create_member"
    team_id: str
    member: MemberForm
    access_code: str = ""


class UpdateAvailability(BaseModel):
    type: Literal["update_availability"] = "update_availability"
    member_id: str
    match_id: str
    status: AvailabilityStatus
    access_code: str = ""


class ChangeMatchDate(BaseModel):
    type: Literal["change_match_date"] = "change_match_date"
    match_id: str
    new_date: str
    team_id: str
    access_code: str = ""


class SubmitAccessCode(BaseModel):
    type: Literal["submit_access_code"] = "submit_access_code"
    team_id: str
    access_code: str


ToBackend = Annotated[
    Union[
        CreateTeam,
        GetTeam,
        CreateMatch,
        CreateMember,
        UpdateAvailability,
        ChangeMatchDate,
        SubmitAccessCode,
    ],
    Field(discriminator="type"),
]


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class SessionOpened(BaseModel):
    """First frame on every connection: the IDs the client should reuse."""

    type: Literal["session"] = "session"
    session_id: str
    connection_id: str


class TeamCreated(BaseModel):
    type: Literal["team_created"] = "team_created"
    team: Team
    creator_member_id: str
    access_code: str


class TeamLoaded(BaseModel):
    """Full denormalized snapshot of one team."""

    type: Literal["team_loaded"] = "team_loaded"
    team: Team
    matches: List[Match]
    members: List[Member]
    availability: List[AvailabilityEntry]


class AccessCodeRequired(BaseModel):
    type: Literal["access_code_required"] = "access_code_required"
    team_id: str


class TeamNotFound(BaseModel):
    type: Literal["team_not_found"] = "team_not_found"


class MatchCreated(BaseModel):
    type: Literal["match_created"] = "match_created"
    match: Match


class MemberCreated(BaseModel):
    type: Literal["member_created"] = "member_created"
    member: Member


class AvailabilityUpdated(BaseModel):
    type: Literal["availability_updated"] = "availability_updated"
    entry: AvailabilityEntry


class MatchDateChanged(BaseModel):
    type: Literal["match_date_changed"] = "match_date_changed"
    match_id: str
    new_date: str


ToFrontend = Annotated[
    Union[
        SessionOpened,
        TeamCreated,
        TeamLoaded,
        AccessCodeRequired,
        TeamNotFound,
        MatchCreated,
        MemberCreated,
        AvailabilityUpdated,
        MatchDateChanged,
    ],
    Field(discriminator="type"),
]

_request_adapter: TypeAdapter[ToBackend] = TypeAdapter(ToBackend)
_response_adapter: TypeAdapter[ToFrontend] = TypeAdapter(ToFrontend)


def parse_request(raw: str | bytes) -> ToBackend:
    """Parse one JSON frame into a request. Raises pydantic.ValidationError on bad input."""
    return _request_adapter.validate_json(raw)


def parse_response(raw: str | bytes) -> ToFrontend:
    """Parse one JSON frame into a response (the client side of the protocol)."""
    return _response_adapter.validate_json(raw)
