"""Object file discovery for uselex."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

OBJECT_FILE_GLOB = "*.o"


def _should_include_file(
    path: Path,
    directory: Path,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Check if an object file should be included based on the glob filters."""
    if not path.is_file():
        return False

    try:
        rel_path_str = path.relative_to(directory).as_posix()
    except ValueError:
        return False

    if include_patterns and not any(
        fnmatch(rel_path_str, pat) for pat in include_patterns
    ):
        return False

    has_excluded_match = exclude_patterns and any(
        fnmatch(rel_path_str, pat) for pat in exclude_patterns
    )
    return not has_excluded_match


def find_object_files(
    directory: Path,
    *,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
) -> Iterator[Path]:
    """Find all object files in a directory.

    Args:
        directory: Directory to search for ``*.o`` files
        include_patterns: Optional list of fnmatch patterns; if provided,
            files must match at least one pattern to be included
        exclude_patterns: Optional list of fnmatch patterns; files matching
            any pattern are excluded

    Yields:
        Path objects for each object file found, sorted lexicographically
        by relative path for deterministic ordering.
    """
    matched_files = [
        path
        for path in directory.rglob(OBJECT_FILE_GLOB)
        if _should_include_file(path, directory, include_patterns, exclude_patterns)
    ]

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


__all__ = ["find_object_files"]
