"""
Unit tests for version: VERSION file first, then installed metadata, then 0.0.0.
"""

from __future__ import annotations

from pathlib import Path

from version import get_version


def test_get_version_reads_repo_version_file() -> None:
    version_file = Path(__file__).resolve().parents[3] / "VERSION"
    assert get_version() == version_file.read_text(encoding="utf-8").strip()


def test_get_version_uses_first_line_only(monkeypatch, tmp_path) -> None:
    import version

    (tmp_path / "VERSION").write_text("1.2.3\nbuild notes\n", encoding="utf-8")
    monkeypatch.setattr(version, "_version_file_path", lambda: tmp_path / "VERSION")
    assert version.get_version() == "1.2.3"


def test_get_version_falls_back_to_metadata_when_file_missing(monkeypatch, tmp_path) -> None:
    import version

    monkeypatch.setattr(version, "_version_file_path", lambda: tmp_path / "VERSION")
    monkeypatch.setattr(version.metadata, "version", lambda name: "9.9.9")
    assert version.get_version() == "9.9.9"


def test_get_version_unknown_when_nothing_available(monkeypatch, tmp_path) -> None:
    import version

    def _missing(name: str) -> str:
        raise version.metadata.PackageNotFoundError(name)

    monkeypatch.setattr(version, "_version_file_path", lambda: tmp_path / "VERSION")
    monkeypatch.setattr(version.metadata, "version", _missing)
    assert version.get_version() == "0.0.0"
