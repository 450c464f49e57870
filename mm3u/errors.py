"""
Error types raised by mm3u.

Every condition here is fatal for a run: nothing is retried and no partial
playlist is produced. Low-confidence matches are not errors; they are
reported as misses.
"""

from typing import Any, Dict, Optional


class Mm3uError(Exception):
    """Base exception for all mm3u errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputListUnreadable(Mm3uError):
    """The requested-name list file is missing, unreadable or not UTF-8."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Cannot read music list: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, {"path": path})
        self.path = path


class CatalogPathUnresolvable(Mm3uError):
    """A catalog path could not be listed or canonicalized."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Cannot resolve catalog path: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, {"path": path})
        self.path = path


class EmptyCatalog(Mm3uError):
    """There are no catalog entries to match against."""

    def __init__(self, requested: Optional[str] = None):
        message = "Fail to match: the catalog is empty"
        if requested is not None:
            message += f" (while resolving '{requested}')"
        super().__init__(message, {"requested": requested})
        self.requested = requested


class OutputWriteError(Mm3uError):
    """The playlist file could not be written."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Cannot write playlist: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, {"path": path})
        self.path = path
