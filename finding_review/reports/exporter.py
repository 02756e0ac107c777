"""Cleaned report exporter.

Functions:
    export_report(issues)   -> str

Only findings that are still active are written back; anything the reviewer
marked as resolved is dropped from the output.
"""

import json
from collections.abc import Iterable

from finding_review.models import Issue

HEADER = "Page,Code,Severity,Message,BBox"


def _compact_number(value: float) -> float:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _format_bbox(issue: Issue) -> str:
    if issue.bbox is None:
        return '""'
    values = [_compact_number(v) for v in issue.bbox]
    return '"' + json.dumps(values, separators=(",", ":")) + '"'


def _format_row(issue: Issue) -> str:
    # Embedded quotes are written as is
    return (
        f"{issue.page},{issue.code},{issue.severity.value},"
        f'"{issue.message}",{_format_bbox(issue)}'
    )


def export_report(issues: Iterable[Issue]) -> str:
    """Serialize the active *issues* in the same shape the parser reads."""
    rows = [_format_row(i) for i in issues if i.is_active]
    return HEADER + "\n" + "\n".join(rows)
