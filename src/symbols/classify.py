"""Classification of ``nm`` symbol-table lines into definitions and uses."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from symbols.provenance import ObjectFile
from utils import UselexError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from symbols.index import SymbolIndex


class SymbolKind(str, Enum):
    """Which side of the cross-reference a symbol-table line lands on."""

    DEFINITION = "definition"
    USE = "use"


# nm type code -> kind. Definitions carry an address, uses do not.
SYMBOL_TYPE_CODES: dict[str, SymbolKind] = {
    "A": SymbolKind.DEFINITION,  # absolute
    "B": SymbolKind.DEFINITION,  # bss
    "C": SymbolKind.DEFINITION,  # common
    "D": SymbolKind.DEFINITION,  # initialized data
    "R": SymbolKind.DEFINITION,  # read-only data
    "T": SymbolKind.DEFINITION,  # text
    "V": SymbolKind.DEFINITION,  # weak object
    "W": SymbolKind.DEFINITION,  # weak
    "i": SymbolKind.DEFINITION,  # indirect function
    "u": SymbolKind.DEFINITION,  # unique global
    "U": SymbolKind.USE,  # undefined
    "w": SymbolKind.USE,  # weak, undefined
}

# 00000000 T _Z21GetNumberOfProcessorsv
_ADDRESS_LINE = re.compile(
    r"^(?P<address>[0-9a-fA-F]+)\s+(?P<code>\S)\s+(?P<name>.+)$"
)
#          U __stack_chk_fail
_UNDEFINED_LINE = re.compile(r"^\s+(?P<code>\S)\s+(?P<name>.+)$")


class SymbolFormatError(UselexError):
    """Raised for a symbol-table line of unknown shape or type code."""

    def __init__(self, path: str, line: str) -> None:
        self.path = path
        self.line = line
        super().__init__(f"{path}: unknown sym type: '{line}'")


@dataclass(frozen=True)
class SymbolLine:
    kind: SymbolKind
    code: str
    symbol: str
    address: str | None = None


def classify_line(line: str, path: str = "<input>") -> SymbolLine:
    """Classify one line of ``nm`` output.

    The symbol name is everything after the type code, so demangled C++
    signatures with embedded spaces stay intact.

    Args:
        line: Raw symbol-table line, with or without trailing newline.
        path: Object file the line came from, used in error messages.

    Returns:
        The classified line.

    Raises:
        SymbolFormatError: If the line matches no known shape, or its type
            code is unknown or appears in the wrong shape.
    """
    text = line.rstrip("\r\n")

    match = _ADDRESS_LINE.match(text)
    expected = SymbolKind.DEFINITION
    if match is None:
        match = _UNDEFINED_LINE.match(text)
        expected = SymbolKind.USE
    if match is None:
        raise SymbolFormatError(path, text)

    code = match.group("code")
    if SYMBOL_TYPE_CODES.get(code) is not expected:
        raise SymbolFormatError(path, text)

    return SymbolLine(
        kind=expected,
        code=code,
        symbol=match.group("name"),
        address=match.groupdict().get("address"),
    )


def parse_symbol_lines(
    index: SymbolIndex, path: str, lines: Iterable[str]
) -> tuple[int, int]:
    """Record every definition and use found in one object file's dump.

    Returns:
        Number of definition lines and number of use lines.

    Raises:
        SymbolFormatError: On the first unrecognized line.
    """
    source = ObjectFile(path)
    definitions = uses = 0
    for line in lines:
        parsed = classify_line(line, path)
        if parsed.kind is SymbolKind.DEFINITION:
            index.add_definition(source, parsed.symbol)
            definitions += 1
        else:
            index.add_use(source, parsed.symbol)
            uses += 1
    return definitions, uses


__all__ = [
    "SYMBOL_TYPE_CODES",
    "SymbolFormatError",
    "SymbolKind",
    "SymbolLine",
    "classify_line",
    "parse_symbol_lines",
]
