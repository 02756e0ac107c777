"""In-memory issue store.

Usage:
    store = IssueStore(parse_report(text))
    store.toggle(3)                     # flip one finding
    store.set_page_ignored(2, True)     # resolve a whole page
    store.issues_for_page(2)            # -> [Issue, ...]

The store is the only owner of resolution state. Every mutation builds the
new sequence first and then swaps it in, so readers only ever see complete
snapshots.
"""

import logging
from collections.abc import Callable, Iterable, Iterator

from finding_review.models import Issue

logger = logging.getLogger(__name__)

Listener = Callable[[tuple[Issue, ...]], None]


class IssueStore:
    """Ordered, session-scoped collection of Issues."""

    def __init__(self, issues: Iterable[Issue] = ()) -> None:
        self._issues: tuple[Issue, ...] = tuple(issues)
        self._listeners: list[Listener] = []

        seen: set[int] = set()
        for issue in self._issues:
            if issue.id in seen:
                raise ValueError(f"Duplicate issue id {issue.id}")
            seen.add(issue.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def all_issues(self) -> tuple[Issue, ...]:
        return self._issues

    def issues_for_page(self, page: int) -> list[Issue]:
        return [i for i in self._issues if i.page == page]

    def get(self, issue_id: int) -> Issue | None:
        for issue in self._issues:
            if issue.id == issue_id:
                return issue
        return None

    def __len__(self) -> int:
        return len(self._issues)

    def __iter__(self) -> Iterator[Issue]:
        return iter(self._issues)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def toggle(self, issue_id: int) -> None:
        """Flip ``is_ignored`` on one Issue. Unknown ids are ignored."""
        if self.get(issue_id) is None:
            logger.debug("toggle: no issue with id %s", issue_id)
            return
        self._commit(tuple(
            i.with_ignored(not i.is_ignored) if i.id == issue_id else i
            for i in self._issues
        ))

    def set_page_ignored(self, page: int, value: bool) -> None:
        """Set ``is_ignored`` to *value* for every Issue on *page*."""
        self._commit(tuple(
            i.with_ignored(value) if i.page == page else i
            for i in self._issues
        ))

    # ------------------------------------------------------------------
    # Change notifications
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with the new snapshot after each change.

        Returns a function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, issues: tuple[Issue, ...]) -> None:
        if issues == self._issues:
            return
        self._issues = issues
        for listener in list(self._listeners):
            listener(issues)
