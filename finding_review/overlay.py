"""Overlay geometry for drawing findings on top of a rendered page.

Functions:
    to_overlay_rect(bbox, page_width, page_height)       -> OverlayRect | None
    overlay_style(issue)                                 -> OverlayStyle
    overlays_for_page(issues, page_width, page_height)   -> list[Overlay]

Page dimensions are in the same coordinate space as the bbox, as reported by
the renderer. Nothing is clamped: a bbox outside the page yields a rectangle
outside the visible area.
"""

from collections.abc import Iterable

from finding_review.models import BBox, Issue, Overlay, OverlayRect, OverlayStyle, Severity

_ERROR_STYLE    = OverlayStyle("red",     "rgba(255, 0, 0, 0.1)",     show_tooltip=True)
_WARNING_STYLE  = OverlayStyle("#fbbf24", "rgba(251, 191, 36, 0.2)",  show_tooltip=True)
_RESOLVED_STYLE = OverlayStyle("#3b82f6", "rgba(59, 130, 246, 0.2)",  show_tooltip=False)


def to_overlay_rect(
    bbox: BBox | None,
    page_width: float | None,
    page_height: float | None,
) -> OverlayRect | None:
    """Map *bbox* to percentages of the page, or None if it cannot be placed."""
    if bbox is None or not page_width or not page_height:
        return None

    x0, y0, x1, y1 = bbox
    return OverlayRect(
        left=x0 / page_width * 100,
        top=y0 / page_height * 100,
        width=(x1 - x0) / page_width * 100,
        height=(y1 - y0) / page_height * 100,
    )


def overlay_style(issue: Issue) -> OverlayStyle:
    if issue.is_ignored:
        return _RESOLVED_STYLE
    if issue.severity is Severity.ERROR:
        return _ERROR_STYLE
    return _WARNING_STYLE


def overlays_for_page(
    issues: Iterable[Issue],
    page_width: float | None,
    page_height: float | None,
) -> list[Overlay]:
    """Build overlays for *issues*, skipping those without usable geometry."""
    overlays: list[Overlay] = []
    for issue in issues:
        rect = to_overlay_rect(issue.bbox, page_width, page_height)
        if rect is not None:
            overlays.append(Overlay(issue.id, rect, overlay_style(issue)))
    return overlays
