"""
Pure derivations behind the listing and dashboard views.

visible = filter(all, predicate) recomputed from the loaded items and the
current search/status inputs; nothing here touches the network or Flask.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from .models import Application, ApplicationStatus, Job


ALL_STATUSES = "all"


def _contains(haystack: Optional[str], needle: str) -> bool:
    return needle in (haystack or "").lower()


def filter_jobs(jobs: Sequence[Job], query: Optional[str]) -> List[Job]:
    """
    Jobs whose title, company or location contains `query`, case-insensitively.

    An empty or missing query returns every job, in the original order.
    """
    needle = (query or "").lower()
    if not needle:
        return list(jobs)
    return [
        job for job in jobs
        if _contains(job.title, needle)
        or _contains(job.company, needle)
        or _contains(job.location, needle)
    ]


def parse_status_filter(value: Optional[str]) -> Optional[ApplicationStatus]:
    """
    Status filter from a query-string value.

    "all", empty and unknown values mean no status filter.
    """
    if not value or value == ALL_STATUSES:
        return None
    try:
        return ApplicationStatus(value.lower())
    except ValueError:
        return None


def filter_applications(
    applications: Sequence[Application],
    search: Optional[str] = None,
    status: Optional[ApplicationStatus] = None,
) -> List[Application]:
    """
    Combined dashboard filter.

    Free text matches applicant name, email or job title; status must be
    equal when given. Both filters apply together.
    """
    needle = (search or "").lower()
    result = []
    for application in applications:
        if needle and not (
            _contains(application.full_name, needle)
            or _contains(application.email, needle)
            or _contains(application.job_title, needle)
        ):
            continue
        if status is not None and application.status != status:
            continue
        result.append(application)
    return result


def status_counts(applications: Iterable[Application]) -> Dict[str, int]:
    """
    Per-status bucket sizes plus the "all" total, in display order.

    Counts are taken over the loaded list, not the filtered one, so each
    bucket shows how many rows clicking it will reveal.
    """
    counts: Dict[str, int] = {ALL_STATUSES: 0}
    counts.update({status.value: 0 for status in ApplicationStatus})
    for application in applications:
        counts[ALL_STATUSES] += 1
        counts[application.status.value] += 1
    return counts


def find_by_id(items: Iterable, item_id: int):
    """First item whose id equals item_id, or None."""
    return next((item for item in items if item.id == item_id), None)
