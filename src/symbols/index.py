"""Definition/use index for exported symbols."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from rules.config import ConfigError
from symbols.provenance import Mask

if TYPE_CHECKING:
    from collections.abc import Iterator

    from symbols.provenance import Source


class SymbolIndex:
    """Cross-reference of symbol definitions and uses.

    Holds two independent mappings, symbol -> defining sources and
    symbol -> using sources, plus an ordered list of mask patterns. Entries
    are only ever added. A symbol with definers and no users is a redundant
    export.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, set[Source]] = {}
        self._uses: dict[str, set[Source]] = {}
        self._masks: list[re.Pattern[str]] = []

    def add_definition(self, source: Source, symbol: str) -> None:
        self._definitions.setdefault(symbol, set()).add(source)

    def add_use(self, source: Source, symbol: str) -> None:
        self._uses.setdefault(symbol, set()).add(source)

    def add_mask(self, pattern: str) -> None:
        """Compile and append a mask pattern.

        Raises:
            ConfigError: If the pattern is not a valid regular expression.
        """
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            msg = f"Invalid mask pattern '{pattern}': {exc}"
            raise ConfigError(msg) from exc
        self._masks.append(compiled)

    def apply_masks(self, symbol: str) -> None:
        """Mark ``symbol`` used by every mask found anywhere in its name.

        Matching is an unanchored search: ``BZ2_`` matches ``notBZ2_x`` too.
        """
        for mask in self._masks:
            if mask.search(symbol):
                self.add_use(Mask(mask.pattern), symbol)

    def is_used(self, symbol: str) -> bool:
        return bool(self._uses.get(symbol))

    def defined_symbols(self) -> Iterator[str]:
        return (symbol for symbol, sources in self._definitions.items() if sources)

    def definers(self, symbol: str) -> frozenset[Source]:
        return frozenset(self._definitions.get(symbol, ()))

    def users(self, symbol: str) -> frozenset[Source]:
        return frozenset(self._uses.get(symbol, ()))

    @property
    def masks(self) -> tuple[str, ...]:
        return tuple(mask.pattern for mask in self._masks)


__all__ = ["SymbolIndex"]
