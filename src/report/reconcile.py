"""Reconciliation of definitions against uses."""

from __future__ import annotations

from typing import TYPE_CHECKING

from report.models import RedundantExport

if TYPE_CHECKING:
    from symbols.index import SymbolIndex


def _defining_files(index: SymbolIndex, symbol: str) -> list[str]:
    return sorted(str(source) for source in index.definers(symbol))


def find_redundant_exports(index: SymbolIndex) -> list[RedundantExport]:
    """Return every defined symbol that nothing uses.

    Symbols are ordered by their sorted list of defining files, then by
    name, so output is grouped per object file and independent of the order
    files were parsed in. Masks are applied here, once per defined symbol,
    after every definition and use is known.
    """
    ordered = sorted(
        (_defining_files(index, symbol), symbol)
        for symbol in index.defined_symbols()
    )

    redundant: list[RedundantExport] = []
    for files, symbol in ordered:
        index.apply_masks(symbol)
        if index.is_used(symbol):
            continue
        redundant.append(RedundantExport(symbol=symbol, files=files))

    return redundant


__all__ = ["find_redundant_exports"]
