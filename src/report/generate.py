from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Protocol, TextIO

from report.reconcile import find_redundant_exports
from rules.config import UselexConfig
from rules.overrides import add_default_symbols, add_exported, add_whitelist, load_masks
from scan.nm import dump_symbols
from symbols.classify import parse_symbol_lines
from symbols.index import SymbolIndex

if TYPE_CHECKING:
    from collections.abc import Sequence

    from report.models import RedundantExport


class DumpFn(Protocol):
    def __call__(
        self, path: str, *, nm: str, nm_args: Sequence[str]
    ) -> list[str]: ...


def _log(stream: TextIO | None, message: str) -> None:
    if stream is not None:
        stream.write(f"[uselex] {message}\n")


def build_index(
    paths: Sequence[str],
    *,
    config: UselexConfig | None = None,
    dump: DumpFn | None = None,
    log: TextIO | None = None,
) -> SymbolIndex:
    """Build the cross-reference index for a set of object files.

    Overrides and masks are loaded before any file is dumped, so a broken
    whitelist or mask aborts the run without invoking ``nm``.

    Args:
        paths: Object files to dump, in command-line order
        config: Run configuration (defaults when omitted)
        dump: Symbol dumper; ``scan.nm.dump_symbols`` when omitted
        log: Optional stream for ``[uselex]`` progress lines

    Raises:
        ConfigError: If an override file or mask pattern is invalid.
        SymbolDumpError: If the dumper fails for a file.
        SymbolFormatError: On the first unrecognized symbol-table line.
    """
    if config is None:
        config = UselexConfig()
    if dump is None:
        dump = dump_symbols

    index = SymbolIndex()
    add_default_symbols(index)

    for whitelist_file in config.whitelist:
        count = add_whitelist(index, whitelist_file)
        _log(log, f"whitelist {whitelist_file}: {count} symbols")

    add_exported(index, config.exported)

    mask_count = load_masks(index, config.masks)
    _log(log, f"masks: {mask_count} patterns")

    for path in paths:
        lines = dump(path, nm=config.nm, nm_args=config.nm_args)
        definitions, uses = parse_symbol_lines(index, path, lines)
        _log(log, f"parsed {path}: {definitions} definitions, {uses} uses")

    return index


def _log_provenance(index: SymbolIndex, stream: TextIO) -> None:
    for symbol in sorted(index.defined_symbols()):
        users = sorted(str(source) for source in index.users(symbol))
        _log(stream, f"{symbol}: used by: {' '.join(users) if users else '-'}")


def find_unused_exports(
    paths: Sequence[str],
    *,
    config: UselexConfig | None = None,
    dump: DumpFn | None = None,
    verbose: int = 0,
    debug: bool = False,
    log: TextIO | None = None,
) -> list[RedundantExport]:
    """Dump, classify and reconcile object files into a redundant-export report.

    Progress is written to ``log`` (stderr by default) when ``verbose`` is
    set; ``debug`` additionally lists the use sources of every defined
    symbol after masks are applied.
    """
    if log is None:
        log = sys.stderr
    progress = log if verbose or debug else None

    index = build_index(paths, config=config, dump=dump, log=progress)
    records = find_redundant_exports(index)

    if debug:
        _log_provenance(index, log)
    _log(
        progress,
        f"{len(records)} redundant exports in {len(paths)} files",
    )
    return records


__all__ = ["DumpFn", "build_index", "find_unused_exports"]
