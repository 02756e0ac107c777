"""Review session: the state a viewer keeps around the issue store.

The renderer reports document facts as they become known:

    session = ReviewSession(store)
    session.document_loaded(page_count=42)
    session.page_rendered(1, width=595.0, height=842.0)
    session.current_overlays()          # -> [Overlay, ...]

Page dimensions arrive per page and only after that page was rendered once;
until then the page has no overlays.
"""

import logging

from finding_review import navigation
from finding_review.models import Issue, Overlay, PageStatus
from finding_review.overlay import overlays_for_page
from finding_review.reports.exporter import export_report
from finding_review.status import page_statuses, reported_page_statuses, status_of
from finding_review.store import IssueStore

logger = logging.getLogger(__name__)


class ReviewSession:

    def __init__(self, store: IssueStore, page_count: int | None = None) -> None:
        self.store = store
        self.current_page = 1
        self._page_count = page_count
        self._dimensions: dict[int, tuple[float, float]] = {}

    # ------------------------------------------------------------------
    # Renderer notifications
    # ------------------------------------------------------------------

    def document_loaded(self, page_count: int) -> None:
        self._page_count = page_count
        if page_count and self.current_page > page_count:
            self.current_page = page_count

    def page_rendered(self, page: int, width: float, height: float) -> None:
        self._dimensions[page] = (width, height)

    @property
    def page_count(self) -> int:
        """Known page count, or the highest page referenced by a finding."""
        if self._page_count:
            return self._page_count
        return max((i.page for i in self.store), default=1)

    def page_dimensions(self, page: int) -> tuple[float, float] | None:
        return self._dimensions.get(page)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def current_issues(self) -> list[Issue]:
        return self.store.issues_for_page(self.current_page)

    def current_status(self) -> PageStatus:
        return status_of(self.current_page, self.store.all_issues())

    def page_statuses(self) -> dict[int, PageStatus]:
        """Status of every page, or only of pages with findings when the
        page count is not known yet."""
        if self._page_count:
            return page_statuses(self._page_count, self.store.all_issues())
        return reported_page_statuses(self.store.all_issues())

    def current_overlays(self) -> list[Overlay]:
        width, height = self._dimensions.get(self.current_page, (0, 0))
        return overlays_for_page(self.current_issues(), width, height)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def go_to(self, page: int) -> int:
        self.current_page = max(1, min(self.page_count, page))
        return self.current_page

    def previous_page(self) -> int:
        self.current_page = navigation.step_page(self.current_page, -1, self.page_count)
        return self.current_page

    def next_page(self) -> int:
        self.current_page = navigation.step_page(self.current_page, 1, self.page_count)
        return self.current_page

    def jump_to_next_problem(self) -> int | None:
        """Move to the next page with active findings.

        Returns None, leaving the current page unchanged, when the rest of
        the document is fully reviewed.
        """
        page = navigation.next_problem_page(
            self.current_page, self.page_count, self.store.all_issues()
        )
        if page is None:
            logger.info("No problem pages after page %d", self.current_page)
            return None
        self.current_page = page
        return page

    def approve_and_advance(self) -> int:
        self.current_page = navigation.approve_and_advance(
            self.current_page, self.page_count, self.store
        )
        return self.current_page

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def toggle(self, issue_id: int) -> None:
        self.store.toggle(issue_id)

    def toggle_current_page(self) -> bool:
        return navigation.toggle_page(self.current_page, self.store)

    def export(self) -> str:
        return export_report(self.store.all_issues())
