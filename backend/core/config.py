import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional


_DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8000",
]


def _env_int(name: str) -> Optional[int]:
    """Parse an integer env var; None when unset or not an integer."""
    v = (os.environ.get(name) or "").strip()
    if not v:
        return None
    try:
        return int(v)
    except ValueError:
        return None


def _env_list(name: str) -> Optional[List[str]]:
    v = (os.environ.get(name) or "").strip()
    if not v:
        return None
    return [item.strip() for item in v.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "Roster Sync"
    env: str = "dev"
    log_level: str = "INFO"
    log_file: Optional[str] = None
    seed: Optional[int] = None  # None: seeded from OS entropy at startup
    default_season: int = 2025
    allowed_origins: List[str] = field(default_factory=lambda: list(_DEFAULT_ALLOWED_ORIGINS))

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        default_season = _env_int("DEFAULT_SEASON")
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            log_file=os.getenv("LOG_FILE") or None,
            seed=_env_int("ROSTER_SEED"),
            default_season=default_season if default_season is not None else cls.default_season,
            allowed_origins=_env_list("ALLOWED_ORIGINS") or list(_DEFAULT_ALLOWED_ORIGINS),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
