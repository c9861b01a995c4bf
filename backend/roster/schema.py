"""
Team workspace entities: team, member, match, availability.

Entities are immutable pydantic models; the store replaces them rather than editing
them in place. Field names on the wire are the Python names (snake_case).
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SeasonHalf(StrEnum):
    """Half of a competition season, split at the winter break."""

    FIRST_HALF = "FirstHalf"
    SECOND_HALF = "SecondHalf"


class AvailabilityStatus(StrEnum):
    """A member's answer for one match. A missing entry means unknown."""

    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"
    MAYBE = "Maybe"


class Team(BaseModel):
    """Team metadata. id and access_code never change after creation."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    slug: str
    players_needed: int = Field(..., ge=0)
    created_at: datetime
    access_code: str


class Member(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    team_id: str
    name: str


class Match(BaseModel):
    """A scheduled match. season and season_half are fixed when the match is created."""

    model_config = ConfigDict(frozen=True)

    id: str
    opponent: str
    date: str = Field(..., description="YYYY-MM-DD")
    time: str
    is_home: bool
    venue: str
    season: int
    season_half: SeasonHalf
    matchday: Optional[int] = None


class AvailabilityEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    member_id: str
    match_id: str
    status: AvailabilityStatus


class MatchForm(BaseModel):
    """Client-supplied fields for a new match."""

    opponent: str
    date: str
    time: str = ""
    is_home: bool = True
    venue: str = ""
    matchday: Optional[int] = Field(None, ge=1)


class MemberForm(BaseModel):
    """Client-supplied fields for a new member."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
