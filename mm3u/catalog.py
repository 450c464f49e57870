"""
Builds the catalog of local files that requested names are matched against.

The catalog is a flat, ordered list of immutable ``CatalogEntry`` records, one
per non-directory entry found below the root. Every file counts, whatever its
type. A path that cannot be canonicalized aborts the whole build: a partial
catalog would silently degrade match quality.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from .errors import CatalogPathUnresolvable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    """One local file.

    name: file stem, without the extension
    extension: extension without the leading dot, may be empty
    containing_directory: parent path as discovered (relative if the root was)
    canonical_path: absolute path with symlinks resolved
    """

    name: str
    extension: str
    containing_directory: str
    canonical_path: str

    @property
    def relative_text(self) -> str:
        """``containing_directory/name.extension`` as written into playlists.

        The dot is kept even when the extension is empty.
        """
        return f"{self.containing_directory}/{self.name}.{self.extension}"


def _raise_walk_error(error: OSError) -> None:
    raise CatalogPathUnresolvable(error.filename or "", error.strerror or str(error))


def make_entry(file_path: str) -> CatalogEntry:
    """Build a catalog entry for ``file_path``, canonicalizing it strictly."""
    path = Path(file_path)
    try:
        canonical = path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise CatalogPathUnresolvable(file_path, str(e)) from e
    suffix = path.suffix
    return CatalogEntry(
        name=path.stem,
        extension=suffix[1:] if suffix else "",
        containing_directory=os.path.dirname(file_path),
        canonical_path=str(canonical),
    )


def build_catalog(root_directory: Union[str, Path]) -> List[CatalogEntry]:
    """
    Recursively scan ``root_directory`` and return one entry per file.

    Args:
        root_directory: The directory to scan. Symlinked directories are not
            followed; symlinked files are resolved to their target.

    Returns:
        List[CatalogEntry]: Entries in traversal order. Ties between equal
        match scores are broken by this order, so it is only stable within
        one catalog snapshot.

    Raises:
        CatalogPathUnresolvable: If the root is not a directory, a directory
            cannot be listed, or a file cannot be canonicalized.
    """
    root = str(root_directory)
    if not os.path.isdir(root):
        raise CatalogPathUnresolvable(root, "not a directory")

    catalog: List[CatalogEntry] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames.sort()
        for filename in sorted(filenames):
            catalog.append(make_entry(os.path.join(dirpath, filename)))

    logger.info("Catalog built from %s: %d entries", root, len(catalog))
    return catalog
