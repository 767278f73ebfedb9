"""
Date-range reports for the dashboard and report screens.

A report covers the viewer's open jobs only. Each candidate is placed in the
range by the moment it reached its current status.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Optional

from core.utils.datetime import in_date_range
from schemas.candidates import Candidate, CandidateStatus
from schemas.common import enum_value
from schemas.jobs import Job
from schemas.users import User
from visibility.aggregation import (
    FunnelStage,
    JobMetrics,
    RecordSummary,
    aggregate,
    conversion_rate,
    funnel,
    job_performance,
)
from visibility.assignment import expand_by_assignment
from visibility.filters import filter_records
from visibility.org_graph import OrgGraph
from visibility.scope import resolve_scope

logger = logging.getLogger(__name__)

OPEN_JOB_STATUS = "open"


@dataclass(frozen=True)
class Report:
    """Report for one viewer over an optional date range."""

    start: Optional[date]
    end: Optional[date]
    summary: RecordSummary
    funnel: list[FunnelStage] = field(default_factory=list)
    jobs: list[JobMetrics] = field(default_factory=list)
    scoped_job_count: int = 0

    @property
    def open_job_count(self) -> int:
        return len(self.jobs)

    @property
    def conversion_rate(self) -> float:
        return conversion_rate(self.summary)


def _normalize_status(value: Any) -> str:
    try:
        return CandidateStatus.parse(value).value
    except ValueError:
        return str(enum_value(value))


def status_timestamp(
    candidate: Candidate,
    statuses: Any,
    fallback: Optional[datetime] = None,
) -> Optional[datetime]:
    """
    Latest moment the candidate reached one of the given statuses.

    Joined and Selected prefer their dedicated date fields. Otherwise the
    newest matching status-history entry is used, then ``fallback``, then
    the candidate's creation time.

    Args:
        candidate: Candidate to inspect
        statuses: A status or an iterable of statuses
        fallback: Date used when the history has no match

    Returns:
        Timestamp, or None if nothing is known
    """
    if isinstance(statuses, (str, CandidateStatus)):
        statuses = [statuses]
    wanted = {_normalize_status(status) for status in statuses}

    if CandidateStatus.JOINED.value in wanted and candidate.joining_date:
        return candidate.joining_date
    if CandidateStatus.SELECTED.value in wanted and candidate.selection_date:
        return candidate.selection_date

    matches = [
        entry for entry in candidate.status_history
        if entry.timestamp is not None and _normalize_status(entry.status) in wanted
    ]
    if matches:
        return max(matches, key=lambda entry: entry.timestamp.timestamp()).timestamp

    return fallback or candidate.created_at


def build_report(
    viewer: Optional[User],
    users: Iterable[User],
    jobs: Iterable[Job],
    candidates: Iterable[Candidate],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Report:
    """
    Build the viewer's report for a date range.

    Args:
        viewer: Signed-in user
        users: Full user population
        jobs: Job collection
        candidates: Candidate collection
        start: Optional first day of the range
        end: Optional last day of the range

    Returns:
        Report with overall counts, funnel and per-open-job metrics
    """
    jobs = list(jobs or ())
    graph = OrgGraph(users)
    owner_scope = resolve_scope(viewer, graph)
    job_scope = expand_by_assignment(viewer, jobs)

    scoped_jobs = [
        job for job in jobs
        if (job.created_by is not None and job.created_by in owner_scope) or job.id in job_scope
    ]
    open_jobs = [job for job in scoped_jobs if job.status.strip().lower() == OPEN_JOB_STATUS]
    open_ids = {job.id for job in open_jobs}

    on_open_jobs = [
        candidate
        for candidate in filter_records(candidates, owner_scope, job_scope, jobs=jobs)
        if candidate.job_id in open_ids
    ]

    in_range = [
        candidate for candidate in on_open_jobs
        if in_date_range(status_timestamp(candidate, candidate.status), start, end)
    ]
    created_in_range = [
        candidate for candidate in on_open_jobs
        if in_date_range(
            candidate.created_at or status_timestamp(candidate, candidate.status), start, end
        )
    ]

    summary = aggregate(in_range)
    logger.debug(
        f"Report for {getattr(viewer, 'id', None)}: {len(open_jobs)} open jobs, "
        f"{summary.total_count} candidates in range"
    )

    return Report(
        start=start,
        end=end,
        summary=summary,
        funnel=funnel(summary),
        jobs=job_performance(open_jobs, created_in_range),
        scoped_job_count=len(scoped_jobs),
    )
