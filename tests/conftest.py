import io
from pathlib import Path

import pytest
from rich.console import Console


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's config file and MM3U_* variables out of every test."""
    for name in ("MM3U_PARALLEL", "MM3U_ABSOLUTE", "MM3U_WORKERS", "MM3U_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MM3U_CONFIG", str(tmp_path / "no-such-config.json"))


@pytest.fixture
def make_console():
    """Return a factory for (Console, buffer) pairs that capture plain text."""

    def _make():
        buf = io.StringIO()
        return Console(file=buf, highlight=False, soft_wrap=True, emoji=False), buf

    return _make


@pytest.fixture
def library(tmp_path) -> Path:
    """A small music directory with a nested folder."""
    root = tmp_path / "music"
    (root / "rock").mkdir(parents=True)
    (root / "Bohemian Rhapsody.mp3").write_text("a")
    (root / "I'm Yours.flac").write_text("b")
    (root / "rock" / "Imagine.ogg").write_text("c")
    return root
