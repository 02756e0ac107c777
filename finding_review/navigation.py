"""Page navigation rules.

Functions:
    next_problem_page(current_page, max_page, issues)    -> int | None
    approve_and_advance(current_page, max_page, store)   -> int
    toggle_page(page, store)                             -> bool
    step_page(current_page, delta, page_count)           -> int
"""

from collections.abc import Sequence

from finding_review.models import Issue, PageStatus
from finding_review.status import reported_page_statuses
from finding_review.store import IssueStore

_PROBLEM_STATUSES = (PageStatus.ERROR, PageStatus.WARNING)


def next_problem_page(current_page: int, max_page: int, issues: Sequence[Issue]) -> int | None:
    """Return the first page after *current_page* that still has active findings.

    None means every later page is clean or resolved; callers should report
    that as "all clear" rather than staying silent.
    """
    for page, status in reported_page_statuses(issues).items():
        if current_page < page <= max_page and status in _PROBLEM_STATUSES:
            return page
    return None


def approve_and_advance(current_page: int, max_page: int, store: IssueStore) -> int:
    """Resolve every finding on *current_page* and move to the next page.

    On the last page the findings are still resolved but the page does not
    change.
    """
    if any(i.is_active for i in store.issues_for_page(current_page)):
        store.set_page_ignored(current_page, True)
    if current_page < max_page:
        return current_page + 1
    return current_page


def toggle_page(page: int, store: IssueStore) -> bool:
    """Resolve all findings on *page*, or reinstate them if all are resolved.

    Returns the ``is_ignored`` value now applied to the page.
    """
    value = any(i.is_active for i in store.issues_for_page(page))
    store.set_page_ignored(page, value)
    return value


def step_page(current_page: int, delta: int, page_count: int | None) -> int:
    """Move by *delta* pages, staying within ``1..page_count``."""
    upper = page_count or 1
    return max(1, min(upper, current_page + delta))
