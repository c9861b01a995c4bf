"""GET /api/v1/meta/version and /api/v1/meta/stats."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from core.dependencies import get_hub
from roster.hub import RosterHub
from version import get_version

router = APIRouter(prefix="/meta", tags=["meta"])


@router.get("/version", summary="Application version")
def meta_version() -> dict:
    """Return version from repo root VERSION file."""
    return {"version": get_version()}


@router.get(
    "/stats",
    summary="Store counters",
    description="Team, subscription and open connection counts. No team data is exposed.",
)
def meta_stats(request: Request, hub: RosterHub = Depends(get_hub)) -> dict:
    """GET /api/v1/meta/stats -> { teams, subscriptions, next_id, connections }."""
    stats = dict(hub.stats())
    stats["connections"] = request.app.state.connections.connection_count()
    return stats
