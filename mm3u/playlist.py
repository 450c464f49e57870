"""Reads the requested-name list and writes M3U playlists."""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from .errors import InputListUnreadable, OutputWriteError
from .matching import M3U_HEADER

logger = logging.getLogger(__name__)


def read_requested_names(path: Union[str, Path]) -> List[str]:
    """
    Read the whole list file, one requested name per line.

    Lines are split on ``\\n`` only and blanks are kept, so a trailing newline
    yields a trailing empty name.

    Raises:
        InputListUnreadable: If the file is missing, unreadable or not UTF-8.
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            data = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputListUnreadable(str(path), str(e)) from e
    names = data.split("\n")
    logger.info("Loaded %d requested names from %s", len(names), path)
    return names


def write_playlist(path: Union[str, Path], hits: Iterable[str]) -> None:
    """Write the ``#EXTM3U`` marker followed by one hit per line.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(f"{M3U_HEADER}\n")
            for line in hits:
                f.write(f"{line}\n")
    except OSError as e:
        raise OutputWriteError(str(path), str(e)) from e
    logger.info("Wrote playlist %s", path)
