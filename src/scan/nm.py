"""Symbol-table dumping via binutils ``nm``."""

from __future__ import annotations

import shlex
import subprocess
from typing import TYPE_CHECKING

from rules.config import DEFAULT_NM, DEFAULT_NM_ARGS
from utils import UselexError

if TYPE_CHECKING:
    from collections.abc import Sequence


class SymbolDumpError(UselexError):
    """Raised when the symbol dumper cannot be run or fails for a file."""


def _format_invocation(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def dump_symbols(
    path: str,
    *,
    nm: str = DEFAULT_NM,
    nm_args: Sequence[str] = DEFAULT_NM_ARGS,
) -> list[str]:
    """Run ``nm`` on one object file and return its output lines.

    The default arguments demangle C++ names (``-C``) and restrict the
    listing to external symbols (``-g``).

    Raises:
        SymbolDumpError: If ``nm`` is missing or exits with non-zero status.
    """
    argv = [nm, *nm_args, path]
    try:
        result = subprocess.run(argv, capture_output=True, text=True, check=False)
    except FileNotFoundError as exc:
        msg = f"{path}: symbol dumper not found: {exc}"
        raise SymbolDumpError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"{path}: symbol dumper output is not valid text: {exc}"
        raise SymbolDumpError(msg) from exc

    if result.returncode != 0:
        stderr = result.stderr.strip()
        msg = (
            f"{path}: '{_format_invocation(argv)}' exited with status "
            f"{result.returncode}"
        )
        if stderr:
            msg = f"{msg}: {stderr}"
        raise SymbolDumpError(msg)

    return result.stdout.splitlines()


__all__ = ["SymbolDumpError", "dump_symbols"]
