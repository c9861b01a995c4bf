# Ensure backend is at sys.path[0] when collecting unit tests
import asyncio
import json
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

_backend = Path(__file__).resolve().parent.parent.parent
_str_backend = str(_backend)
if _str_backend not in sys.path:
    sys.path.insert(0, _str_backend)

from roster.schema import MatchForm  # noqa: E402
from roster.store import create_match, create_team, empty_store  # noqa: E402

NOW = datetime(2024, 8, 1, 12, 0, tzinfo=timezone.utc)
DEFAULT_SEASON = 2025


@pytest.fixture
def lions():
    """Store with team Lions (Alice, Bob, Cara) and one match on 2024-09-14."""
    store, created = create_team(empty_store(seed=2024), "Lions", "Alice", ["Bob", "Cara"], 11, NOW)
    code = created.team.access_code
    form = MatchForm(opponent="Tigers", date="2024-09-14", time="15:30", is_home=True, venue="Park")
    store, match = create_match(store, created.team.id, form, code, DEFAULT_SEASON)
    return store, created, match


class FakeWebSocket:
    """Stands in for fastapi.WebSocket: records frames, optionally slow or broken."""

    def __init__(self, fail: bool = False, slow_on: str | None = None) -> None:
        self.frames: list[dict] = []
        self.fail = fail
        self.slow_on = slow_on

    async def send_text(self, payload: str) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        frame = json.loads(payload)
        if self.slow_on is not None and frame["type"] == self.slow_on:
            self.slow_on = None
            await asyncio.sleep(0.05)
        self.frames.append(frame)

    def types(self) -> list[str]:
        return [f["type"] for f in self.frames]


@pytest.fixture
def fake_socket():
    return FakeWebSocket
