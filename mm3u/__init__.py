"""
mm3u: build an M3U playlist from a list of song titles.

Each requested title is matched to the local file whose name is closest by
normalized Levenshtein similarity. Titles whose best match scores below 0.6
are reported as misses instead of being added to the playlist.
"""

from .catalog import CatalogEntry, build_catalog
from .errors import (
    CatalogPathUnresolvable,
    EmptyCatalog,
    InputListUnreadable,
    Mm3uError,
    OutputWriteError,
)
from .matching import Resolution, resolve, resolve_parallel, resolve_sequential
from .playlist import read_requested_names, write_playlist
from .resolver import MATCH_THRESHOLD, Hit, Miss, resolve_one
from .similarity import score

__version__ = "0.1.0"
