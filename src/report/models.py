"""Report record models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# Redundant export: defined, never used.
REDUNDANT_TAG = "R"

ReportTag = Literal["R"]


class RedundantExport(BaseModel):
    """A defined symbol with no recorded use."""

    symbol: str
    tag: ReportTag = Field(default=REDUNDANT_TAG)
    files: list[str] = Field(description="Defining object files, sorted")


__all__ = ["REDUNDANT_TAG", "RedundantExport", "ReportTag"]
