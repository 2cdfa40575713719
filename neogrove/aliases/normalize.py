"""Path normalization for case-aware comparisons."""

from __future__ import annotations

import logging
import sys

logger = logging.getLogger(__name__)

_CASE_INSENSITIVE_PLATFORMS = ("darwin", "win32")


def filesystem_is_case_insensitive(platform: str | None = None) -> bool:
    """Return True on hosts whose default filesystems ignore case."""
    return (platform or sys.platform) in _CASE_INSENSITIVE_PLATFORMS


class PathNormalizer:
    """Canonicalizes paths for comparison only, never for output."""

    def __init__(self, case_insensitive: bool = False):
        self.case_insensitive = case_insensitive

    def normalize(self, path: str) -> str:
        if not self.case_insensitive:
            return path
        try:
            return path.lower()
        except (AttributeError, TypeError, ValueError, UnicodeError) as exc:
            logger.debug("Falling back to raw path for %r: %s", path, exc)
            return path

    def __repr__(self) -> str:
        return f"PathNormalizer(case_insensitive={self.case_insensitive})"
