"""Tests for configuration loading and precedence."""

from __future__ import annotations

import json
from pathlib import Path

from mm3u.config import DEFAULTS, load_config


def write_config(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults_when_no_file() -> None:
    assert load_config() == DEFAULTS


def test_file_values_are_used(tmp_path: Path) -> None:
    cfg_path = write_config(
        tmp_path / "c.json", {"PARALLEL": True, "WORKERS": 3, "UNKNOWN": 1}
    )
    cfg = load_config(cfg_path)
    assert cfg["PARALLEL"] is True
    assert cfg["WORKERS"] == 3
    assert cfg["ABSOLUTE_OUTPUT"] is False
    assert "UNKNOWN" not in cfg


def test_env_overrides_file(tmp_path: Path, monkeypatch) -> None:
    cfg_path = write_config(tmp_path / "c.json", {"PARALLEL": True, "LOG_LEVEL": "info"})
    monkeypatch.setenv("MM3U_CONFIG", str(cfg_path))
    monkeypatch.setenv("MM3U_PARALLEL", "no")
    monkeypatch.setenv("MM3U_ABSOLUTE", "yes")
    cfg = load_config()
    assert cfg["PARALLEL"] is False
    assert cfg["ABSOLUTE_OUTPUT"] is True
    assert cfg["LOG_LEVEL"] == "INFO"


def test_bad_values_fall_back_to_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("MM3U_WORKERS", "many")
    monkeypatch.setenv("MM3U_PARALLEL", "perhaps")
    monkeypatch.setenv("MM3U_LOG_LEVEL", "LOUD")
    cfg = load_config()
    assert cfg["WORKERS"] == 0
    assert cfg["PARALLEL"] is False
    assert cfg["LOG_LEVEL"] == "WARNING"


def test_unreadable_file_is_ignored(tmp_path: Path) -> None:
    bad = tmp_path / "c.json"
    bad.write_text("{not json", encoding="utf-8")
    assert load_config(bad) == DEFAULTS
    assert load_config(write_config(tmp_path / "list.json", [1, 2])) == DEFAULTS
