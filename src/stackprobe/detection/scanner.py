"""Depth-bounded directory walker used by the detection rules."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Collection
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 2

# Never descended into, regardless of remaining depth
SKIP_DIR_NAMES = frozenset({"node_modules"})

FileMatcher = Callable[[str], bool]


def _should_descend(name: str) -> bool:
    return not name.startswith(".") and name not in SKIP_DIR_NAMES


def resolve_root(path: str | os.PathLike[str]) -> Path | None:
    """Absolute, symlink-resolved form of path, or None when it cannot be resolved."""
    try:
        return Path(path).resolve()
    except (OSError, RuntimeError) as e:
        # Path.resolve() raises RuntimeError for a symlink loop before Python 3.13
        logger.debug("Could not resolve %s: %s", path, e)
        return None


def _walk(
    root: Path,
    matches: FileMatcher,
    max_depth: int,
    *,
    stop_at_first: bool = False,
) -> list[Path]:
    """Collect files under root whose name satisfies matches().

    Depth 0 is root's direct children. Unreadable directories are treated as
    empty and the walk continues with their siblings.
    """
    found: list[Path] = []

    def search(current: Path, depth: int) -> bool:
        if depth > max_depth:
            return False
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    if entry.is_dir():
                        if _should_descend(entry.name) and search(Path(entry.path), depth + 1):
                            return True
                    elif entry.is_file() and matches(entry.name):
                        found.append(Path(entry.path))
                        if stop_at_first:
                            return True
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", current, e)
        return False

    start = resolve_root(root)
    if start is not None:
        search(start, 0)
    return found


def _extension_matcher(extensions: str | Collection[str]) -> FileMatcher:
    wanted = {extensions} if isinstance(extensions, str) else set(extensions)
    # os.path.splitext treats a leading dot as part of the name, so ".bashrc" has no extension
    return lambda name: os.path.splitext(name)[1] in wanted


def _pattern_matcher(pattern: str) -> FileMatcher:
    return lambda name: pattern in name


def find_files_by_extension(
    root_dir: str | os.PathLike[str],
    extensions: str | Collection[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Path]:
    """Return absolute paths of files whose extension is in extensions.

    Extensions are compared case-sensitively and include the leading dot.
    Results are in directory-listing order.
    """
    return _walk(Path(root_dir), _extension_matcher(extensions), max_depth)


def find_files_by_pattern(
    root_dir: str | os.PathLike[str],
    pattern: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Path]:
    """Return absolute paths of files whose name contains pattern (case-sensitive)."""
    return _walk(Path(root_dir), _pattern_matcher(pattern), max_depth)


def has_files_by_extension(
    root_dir: str | os.PathLike[str],
    extensions: str | Collection[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> bool:
    """Like find_files_by_extension() but stops at the first match."""
    return bool(_walk(Path(root_dir), _extension_matcher(extensions), max_depth, stop_at_first=True))


def has_files_by_pattern(
    root_dir: str | os.PathLike[str],
    pattern: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> bool:
    """Like find_files_by_pattern() but stops at the first match."""
    return bool(_walk(Path(root_dir), _pattern_matcher(pattern), max_depth, stop_at_first=True))
