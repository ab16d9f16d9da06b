"""Report rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING, BinaryIO, Literal, TextIO

import orjson

if TYPE_CHECKING:
    from collections.abc import Sequence

    from report.models import RedundantExport

ReportFormat = Literal["text", "jsonl"]


def format_report_line(record: RedundantExport) -> str:
    """Render one record as ``<symbol>: [R]: exported from: <files>``."""
    return f"{record.symbol}: [{record.tag}]: exported from: {' '.join(record.files)}"


def write_text_report(stream: TextIO, records: Sequence[RedundantExport]) -> None:
    for record in records:
        stream.write(format_report_line(record))
        stream.write("\n")


def write_jsonl_report(stream: BinaryIO, records: Sequence[RedundantExport]) -> None:
    for record in records:
        stream.write(orjson.dumps(record.model_dump(), option=orjson.OPT_SORT_KEYS))
        stream.write(b"\n")


__all__ = [
    "ReportFormat",
    "format_report_line",
    "write_jsonl_report",
    "write_text_report",
]
