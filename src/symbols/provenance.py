"""Provenance of definition and use records.

Every record in the symbol index carries the source it came from: a real
object file, or one of the synthetic origins (built-in defaults, whitelist
files, explicit exports, masks). ``str()`` renders each source the way it
appears in diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class ObjectFile:
    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True, order=True)
class Default:
    def __str__(self) -> str:
        return "<default>"


@dataclass(frozen=True, order=True)
class Whitelist:
    path: str

    def __str__(self) -> str:
        return f"<whitelist:{self.path}>"


@dataclass(frozen=True, order=True)
class ExplicitExport:
    name: str

    def __str__(self) -> str:
        return f"<exported:{self.name}>"


@dataclass(frozen=True, order=True)
class Mask:
    pattern: str

    def __str__(self) -> str:
        return f"<mask:{self.pattern}>"


Source = ObjectFile | Default | Whitelist | ExplicitExport | Mask


__all__ = [
    "Default",
    "ExplicitExport",
    "Mask",
    "ObjectFile",
    "Source",
    "Whitelist",
]
