"""
Date, season and slug helpers.

Dates travel as YYYY-MM-DD strings. The season is the 4-digit year prefix of the
date; the half is decided by month (July to December is the first half, January
to June the second, split at the winter break).
"""

from __future__ import annotations

import re
from typing import Optional

from roster.schema import SeasonHalf, Team

_YEAR_RE = re.compile(r"^(\d{4})")
_MONTH_RE = re.compile(r"^\d{4}-(\d{2})")
_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_DROP_RE = re.compile(r"[^a-z0-9-]")

FIRST_HALF_START_MONTH = 7


def season_from_date(date: str, default_season: int) -> int:
    """Year prefix of date, or default_season when the prefix is not four digits."""
    m = _YEAR_RE.match(date.strip())
    if m is None:
        return default_season
    return int(m.group(1))


def _month(date: str) -> Optional[int]:
    m = _MONTH_RE.match(date.strip())
    if m is None:
        return None
    month = int(m.group(1))
    if not 1 <= month <= 12:
        return None
    return month


def season_half(date: str) -> SeasonHalf:
    """Classify a date into a season half. Unparsable months count as first half."""
    month = _month(date)
    if month is None or month >= FIRST_HALF_START_MONTH:
        return SeasonHalf.FIRST_HALF
    return SeasonHalf.SECOND_HALF


def slugify(name: str) -> str:
    """Lowercase, whitespace runs to '-', anything outside [a-z0-9-] dropped."""
    slug = _WHITESPACE_RE.sub("-", name.strip().lower())
    return _SLUG_DROP_RE.sub("", slug)


def share_path(team: Team) -> str:
    """Path under which a team is opened, e.g. /team/lions-k3v9a0qz."""
    return f"/team/{team.slug}-{team.id}"


def share_link(base_url: str, team: Team) -> str:
    """Absolute share link carrying the access code as a query parameter."""
    return f"{base_url.rstrip('/')}{share_path(team)}?code={team.access_code}"
