"""Data models for validation findings.

Contains the records shared by every part of the review engine:
    - Severity
    - PageStatus
    - Issue
    - OverlayRect / OverlayStyle / Overlay
"""

from dataclasses import dataclass, replace
from enum import Enum

BBox = tuple[float, float, float, float]


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class PageStatus(str, Enum):
    """Review state of a single page, derived from its findings."""

    CLEAN = "clean"        # no findings were ever reported
    ERROR = "error"
    WARNING = "warning"
    RESOLVED = "resolved"  # findings exist but all were acknowledged


# ---------------------------------------------------------------------------
# Issue
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Issue:
    id: int
    page: int
    code: str
    severity: Severity
    message: str
    bbox: BBox | None = None
    is_ignored: bool = False

    @property
    def is_active(self) -> bool:
        return not self.is_ignored

    def with_ignored(self, value: bool) -> "Issue":
        if value == self.is_ignored:
            return self
        return replace(self, is_ignored=value)

    def to_dict(self) -> dict:
        return {
            "id":         self.id,
            "page":       self.page,
            "code":       self.code,
            "severity":   self.severity.value,
            "message":    self.message,
            "bbox":       list(self.bbox) if self.bbox is not None else None,
            "is_ignored": self.is_ignored,
        }


# ---------------------------------------------------------------------------
# Overlay
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OverlayRect:
    """A region expressed as percentages of the page extent."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class OverlayStyle:
    border_color: str
    background_color: str
    show_tooltip: bool


@dataclass(frozen=True)
class Overlay:
    issue_id: int
    rect: OverlayRect
    style: OverlayStyle

    def to_dict(self) -> dict:
        return {
            "issue_id": self.issue_id,
            "left":     self.rect.left,
            "top":      self.rect.top,
            "width":    self.rect.width,
            "height":   self.rect.height,
            "border_color":     self.style.border_color,
            "background_color": self.style.background_color,
            "show_tooltip":     self.style.show_tooltip,
        }
