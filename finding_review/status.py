"""Page status derivation.

Functions:
    status_of(page, issues)              -> PageStatus
    reported_page_statuses(issues)       -> dict[int, PageStatus]
    page_statuses(page_count, issues)    -> dict[int, PageStatus]
    build_summary(issues)                -> dict

All functions are pure: they read a snapshot of Issues and never mutate it.
"""

from collections.abc import Iterable, Sequence

from finding_review.models import Issue, PageStatus, Severity


def status_of(page: int, issues: Iterable[Issue]) -> PageStatus:
    """Classify *page*. An active error outranks an active warning."""
    page_issues = [i for i in issues if i.page == page]
    if not page_issues:
        return PageStatus.CLEAN

    active = [i for i in page_issues if i.is_active]
    if any(i.severity is Severity.ERROR for i in active):
        return PageStatus.ERROR
    if any(i.severity is Severity.WARNING for i in active):
        return PageStatus.WARNING
    return PageStatus.RESOLVED


def reported_page_statuses(issues: Iterable[Issue]) -> dict[int, PageStatus]:
    """Return the status of each page that has findings, in page order.

    Pages missing from the result are clean.
    """
    by_page: dict[int, list[Issue]] = {}
    for issue in issues:
        by_page.setdefault(issue.page, []).append(issue)
    return {page: status_of(page, by_page[page]) for page in sorted(by_page)}


def page_statuses(page_count: int, issues: Sequence[Issue]) -> dict[int, PageStatus]:
    """Return the status of every page from 1 to *page_count*."""
    reported = reported_page_statuses(issues)
    return {
        page: reported.get(page, PageStatus.CLEAN)
        for page in range(1, page_count + 1)
    }


def build_summary(issues: Sequence[Issue]) -> dict:
    by_severity = {s.value: 0 for s in Severity}
    active_by_severity = {s.value: 0 for s in Severity}

    for issue in issues:
        by_severity[issue.severity.value] += 1
        if issue.is_active:
            active_by_severity[issue.severity.value] += 1

    active = sum(active_by_severity.values())
    return {
        "total":              len(issues),
        "active":             active,
        "ignored":            len(issues) - active,
        "by_severity":        by_severity,
        "active_by_severity": active_by_severity,
    }
