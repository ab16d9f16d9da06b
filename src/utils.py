"""Shared utilities for uselex."""

from __future__ import annotations

from pathlib import Path


class UselexError(Exception):
    """Base class for fatal errors that abort a run."""


def read_list_file(path: str | Path) -> list[str]:
    """Read a whitelist-style file into a list of entries.

    Each line is stripped of surrounding whitespace. Blank lines and lines
    starting with ``#`` are skipped.

    Examples:
        A file containing ``"  # comment  \\n\\n  foo  \\n"`` yields
        ``["foo"]``.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    entries: list[str] = []
    with Path(path).open(encoding="utf-8") as handle:
        for raw_line in handle:
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            entries.append(line)
    return entries
