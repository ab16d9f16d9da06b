"""Synthetic uses: built-in defaults, whitelists, explicit exports and masks."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rules.config import ConfigError
from symbols.provenance import Default, ExplicitExport, Whitelist
from utils import read_list_file

if TYPE_CHECKING:
    from collections.abc import Iterable

    from symbols.index import SymbolIndex

# Symbols consumed by the C/C++ runtime without an object-level reference.
DEFAULT_USED_SYMBOLS = (
    "main",
    "operator new(unsigned int, void*)",
    "operator new(unsigned long, void*)",
)


def _read_override_file(path: str) -> list[str]:
    try:
        return read_list_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Failed to read {path}: {exc}"
        raise ConfigError(msg) from exc


def add_default_symbols(index: SymbolIndex) -> None:
    for symbol in DEFAULT_USED_SYMBOLS:
        index.add_use(Default(), symbol)


def add_whitelist(index: SymbolIndex, whitelist_file: str) -> int:
    """Mark every symbol listed in ``whitelist_file`` as used.

    Returns:
        Number of symbols read from the file.

    Raises:
        ConfigError: If the file cannot be read.
    """
    source = Whitelist(whitelist_file)
    symbols = _read_override_file(whitelist_file)
    for symbol in symbols:
        index.add_use(source, symbol)
    return len(symbols)


def add_exported(index: SymbolIndex, symbols: Iterable[str]) -> None:
    for symbol in symbols:
        index.add_use(ExplicitExport(symbol), symbol)


def load_masks(index: SymbolIndex, mask_files: Iterable[str]) -> int:
    """Load regular-expression masks, one per non-comment line.

    Returns:
        Total number of masks added.

    Raises:
        ConfigError: If a file cannot be read or a pattern does not compile.
    """
    count = 0
    for mask_file in mask_files:
        for pattern in _read_override_file(mask_file):
            index.add_mask(pattern)
            count += 1
    return count


__all__ = [
    "DEFAULT_USED_SYMBOLS",
    "add_default_symbols",
    "add_exported",
    "add_whitelist",
    "load_masks",
]
