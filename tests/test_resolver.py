"""Tests for single-name resolution and hit/miss classification."""

from __future__ import annotations

import pytest

from mm3u.catalog import CatalogEntry
from mm3u.errors import EmptyCatalog
from mm3u.resolver import (
    MATCH_THRESHOLD,
    Hit,
    Miss,
    classify,
    format_miss,
    resolve_and_classify,
    resolve_one,
)
from mm3u.similarity import score


def entry(name: str, ext: str = "mp3", directory: str = "music") -> CatalogEntry:
    return CatalogEntry(name, ext, directory, f"/abs/{directory}/{name}.{ext}")


CATALOG = [
    entry("Bohemian Rhapsody"),
    entry("I'm Yours", "flac"),
    entry("Imagine", "ogg", "music/rock"),
]


def test_resolve_one_picks_highest_score() -> None:
    best, rate = resolve_one("Im Yours", CATALOG)
    assert best.name == "I'm Yours"
    assert rate == pytest.approx(1 - 1 / 9)
    assert all(score("Im Yours", e.name) <= rate for e in CATALOG)


def test_ties_go_to_the_first_entry_in_catalog_order() -> None:
    first = entry("abd", directory="one")
    second = entry("abe", directory="two")
    best, _ = resolve_one("abc", [first, second])
    assert best is first
    best, _ = resolve_one("abc", [second, first])
    assert best is second


def test_duplicate_names_resolve_to_first_occurrence() -> None:
    a = entry("Song", "mp3", "a")
    b = entry("Song", "flac", "b")
    best, rate = resolve_one("Song", [a, b])
    assert best is a
    assert rate == 1.0


def test_empty_catalog_raises() -> None:
    with pytest.raises(EmptyCatalog) as exc:
        resolve_one("anything", [])
    assert exc.value.requested == "anything"


def test_classify_hit_relative_and_absolute() -> None:
    e = entry("Imagine", "ogg", "music/rock")
    relative = classify(3, "Imagine", e, 1.0, absolute=False)
    absolute = classify(3, "Imagine", e, 1.0, absolute=True)
    assert isinstance(relative, Hit)
    assert relative.text == "music/rock/Imagine.ogg"
    assert absolute.text == "/abs/music/rock/Imagine.ogg"


def test_threshold_is_inclusive_for_hits() -> None:
    e = entry("x")
    assert isinstance(classify(0, "x", e, MATCH_THRESHOLD, absolute=False), Hit)
    assert isinstance(classify(0, "x", e, MATCH_THRESHOLD - 0.001, absolute=False), Miss)


def test_low_score_is_a_miss_with_diagnostic() -> None:
    result = resolve_and_classify(0, "xyz completely unrelated", [entry("Imagine")], False)
    assert isinstance(result, Miss)
    assert result.index == 0
    assert result.entry.name == "Imagine"
    assert result.score < MATCH_THRESHOLD
    assert result.message == format_miss(0, "xyz completely unrelated", "Imagine", result.score)
    assert "target: 0.xyz completely unrelated" in result.message
    assert "match_song:Imagine" in result.message
    assert f"match_rate: {result.score:.2f}" in result.message


def test_format_miss_rounds_to_two_decimals() -> None:
    assert format_miss(7, "a", "b", 1 / 3) == "target: 7.a\nmatch_song:b\nmatch_rate: 0.33\n "
