"""Redundant-export reconciliation and reporting."""

from report.models import REDUNDANT_TAG, RedundantExport
from report.reconcile import find_redundant_exports
from report.write import format_report_line

__all__ = [
    "REDUNDANT_TAG",
    "RedundantExport",
    "find_redundant_exports",
    "format_report_line",
]
