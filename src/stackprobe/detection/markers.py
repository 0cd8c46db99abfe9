"""Best-effort readers for well-known marker files.

Every helper here returns a default instead of raising: detection is
advisory and a broken marker must never abort a scan.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def marker_exists(path: Path) -> bool:
    """Return True if a file or directory exists at path."""
    try:
        return path.exists()
    except OSError:
        return False


def read_text_marker(path: Path, encoding: str = "utf-8") -> str | None:
    """Read a marker file as text, or None when absent or unreadable."""
    try:
        if not path.is_file():
            return None
        return path.read_text(encoding=encoding, errors="replace")
    except OSError as e:
        logger.warning("Could not read %s: %s", path.name, e)
        return None


def read_json_marker(path: Path, default: Any = None) -> Any:
    """Parse a JSON marker file, or return default when absent, unreadable or malformed.

    Pass a sentinel as default to tell a missing file apart from a JSON
    ``null`` document. A leading UTF-8 byte order mark is ignored.
    """
    text = read_text_marker(path, encoding="utf-8-sig")
    if text is None:
        return default
    try:
        return json.loads(text)
    except ValueError as e:
        logger.warning("Could not parse %s: %s", path.name, e)
        return default


def contains_any(text: str | None, needles: Iterable[str]) -> bool:
    """Plain case-sensitive substring test; None never matches."""
    if text is None:
        return False
    return any(needle in text for needle in needles)
