"""
Single source of version: the repo root VERSION file.

Installed copies without the source tree fall back to the distribution metadata.
Used by the meta API and logged by backend_entry at startup.
"""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "roster-sync"
UNKNOWN_VERSION = "0.0.0"


def _version_file_path() -> Path:
    # backend/version.py -> repo root
    return Path(__file__).resolve().parent.parent / "VERSION"


def _read_version_file(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return raw.splitlines()[0].strip() if raw else None


def get_version() -> str:
    """Return the VERSION file's first line, else the installed version, else '0.0.0'."""
    from_file = _read_version_file(_version_file_path())
    if from_file:
        return from_file
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION
