"""Shared pytest fixtures for the full italtext test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

_FILES_DIR = Path(__file__).resolve().parent / "files"


@pytest.fixture
def guida_roma_path() -> Path:
    """Provide the Markdown travel-guide fixture used by pipeline and CLI tests."""

    return _FILES_DIR / "guida_roma.md"


@pytest.fixture
def guida_roma_text(guida_roma_path: Path) -> str:
    """Provide the raw Markdown of the travel-guide fixture."""

    return guida_roma_path.read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def _isolate_italtext_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer `ITALTEXT_*` variables from leaking into tests."""

    for key in (
        "ITALTEXT_WORDS_PER_MINUTE",
        "ITALTEXT_IMAGE_ALT_KEYWORDS",
        "ITALTEXT_DROP_REDUNDANT_HEADINGS",
        "ITALTEXT_MAX_INPUT_CHARS",
    ):
        monkeypatch.delenv(key, raising=False)
