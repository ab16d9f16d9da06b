"""Symbol-table classification and cross-reference index."""

from symbols.classify import (
    SYMBOL_TYPE_CODES,
    SymbolFormatError,
    SymbolKind,
    classify_line,
    parse_symbol_lines,
)
from symbols.index import SymbolIndex
from symbols.provenance import (
    Default,
    ExplicitExport,
    Mask,
    ObjectFile,
    Source,
    Whitelist,
)

__all__ = [
    "SYMBOL_TYPE_CODES",
    "Default",
    "ExplicitExport",
    "Mask",
    "ObjectFile",
    "Source",
    "SymbolFormatError",
    "SymbolIndex",
    "SymbolKind",
    "Whitelist",
    "classify_line",
    "parse_symbol_lines",
]
