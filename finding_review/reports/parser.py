"""Findings report parser.

Functions:
    split_row(line)       -> list[str]
    parse_bbox(text)      -> BBox | None
    parse_report(text)    -> list[Issue]

Expected input (first line is a header and is discarded):

    Page,Code,Severity,Message,BBox
    3,FONT_SIZE,Error,"Body text must be 16pt, not 14pt","[72,90,520,110]"

A double quote inside a quoted field has no escape sequence: it toggles the
quote state like any other quote and may shift the following fields.
"""

import json
import logging
import math
import re

from finding_review.models import BBox, Issue, Severity

logger = logging.getLogger(__name__)

DELIMITER = ","
QUOTE = '"'
FIELD_COUNT = 5

_SEVERITIES = {s.value: s for s in Severity}
_PAGE_RE = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

def split_row(line: str) -> list[str]:
    """Split *line* on commas that are not inside double quotes.

    Quote characters are kept in the returned fields.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(current))
            current = []
            continue
        current.append(char)

    fields.append("".join(current))
    return fields


def _unquote(value: str) -> str:
    """Strip one leading and one trailing quote, if present."""
    if value.startswith(QUOTE):
        value = value[1:]
    if value.endswith(QUOTE):
        value = value[:-1]
    return value


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------

def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def parse_bbox(text: str) -> BBox | None:
    """Return the four-number rectangle in *text*, or None.

    Unparseable text, anything but exactly four finite numbers, and the
    all-zero rectangle all mean "no region".
    """
    try:
        value = json.loads(text)
    except ValueError:
        return None

    if not isinstance(value, list) or len(value) != 4:
        return None
    if not all(_is_number(v) for v in value):
        return None
    if not any(v != 0 for v in value):
        return None
    return tuple(value)


def _parse_page(text: str) -> int | None:
    if not _PAGE_RE.fullmatch(text):
        return None
    try:
        page = int(text)
    except ValueError:
        return None
    return page if page >= 1 else None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_report(text: str) -> list[Issue]:
    """Turn raw report text into Issues, in row order.

    Each Issue's id is the row's 1-based position below the header. Short or
    otherwise malformed rows are dropped and do not stop the parse.
    """
    lines = text.strip().split("\n")
    issues: list[Issue] = []

    for row_index, line in enumerate(lines[1:], start=1):
        parts = split_row(line)
        if len(parts) < FIELD_COUNT:
            logger.debug("Row %d skipped: %d field(s)", row_index, len(parts))
            continue

        page_text, code, severity_text, message, bbox_text = (
            p.strip() for p in parts[:FIELD_COUNT]
        )

        page = _parse_page(page_text)
        if page is None:
            logger.debug("Row %d skipped: invalid page %r", row_index, page_text)
            continue

        severity = _SEVERITIES.get(severity_text.lower())
        if severity is None:
            logger.debug("Row %d skipped: unknown severity %r", row_index, severity_text)
            continue

        issues.append(Issue(
            id=row_index,
            page=page,
            code=code,
            severity=severity,
            message=_unquote(message),
            bbox=parse_bbox(_unquote(bbox_text)),
        ))

    logger.debug("Parsed %d issue(s) from %d row(s)", len(issues), len(lines) - 1)
    return issues
