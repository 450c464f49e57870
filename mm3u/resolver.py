"""
Resolves one requested name against the catalog and classifies the outcome.

``resolve_one`` is a full linear scan: O(len(catalog)) per name, no index or
pruning. That is fine for catalogs of a few thousand files.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from .catalog import CatalogEntry
from .errors import EmptyCatalog
from .similarity import score

logger = logging.getLogger(__name__)

# Best scores below this are reported as misses.
MATCH_THRESHOLD = 0.6


@dataclass(frozen=True)
class Hit:
    index: int
    text: str
    entry: CatalogEntry
    score: float


@dataclass(frozen=True)
class Miss:
    index: int
    requested: str
    entry: CatalogEntry
    score: float

    @property
    def message(self) -> str:
        return format_miss(self.index, self.requested, self.entry.name, self.score)


MatchResult = Union[Hit, Miss]


def format_miss(index: int, requested: str, candidate_name: str, rate: float) -> str:
    return f"target: {index}.{requested}\nmatch_song:{candidate_name}\nmatch_rate: {rate:.2f}\n "


def hit_text(entry: CatalogEntry, absolute: bool) -> str:
    return entry.canonical_path if absolute else entry.relative_text


def resolve_one(
    requested: str, catalog: Sequence[CatalogEntry]
) -> Tuple[CatalogEntry, float]:
    """Return the catalog entry scoring highest against ``requested``.

    On equal scores the entry met first in catalog order wins.

    Raises:
        EmptyCatalog: If the catalog has no entries.
    """
    best_entry = None
    best_score = -1.0
    for entry in catalog:
        s = score(requested, entry.name)
        if s > best_score:
            best_entry, best_score = entry, s
    if best_entry is None:
        raise EmptyCatalog(requested)
    return best_entry, best_score


def classify(
    index: int, requested: str, entry: CatalogEntry, rate: float, absolute: bool
) -> MatchResult:
    if rate < MATCH_THRESHOLD:
        logger.debug("Miss %d: '%s' -> '%s' (%.2f)", index, requested, entry.name, rate)
        return Miss(index, requested, entry, rate)
    return Hit(index, hit_text(entry, absolute), entry, rate)


def resolve_and_classify(
    index: int, requested: str, catalog: Sequence[CatalogEntry], absolute: bool
) -> MatchResult:
    entry, rate = resolve_one(requested, catalog)
    return classify(index, requested, entry, rate, absolute)
