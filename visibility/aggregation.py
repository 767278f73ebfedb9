"""Summary counts and funnel metrics over already-filtered records."""

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from schemas.candidates import (
    ACTIVE_STATUSES,
    FUNNEL_ORDER,
    HIRED_STATUSES,
    Candidate,
    CandidateStatus,
)
from schemas.common import enum_value
from schemas.jobs import Job


@dataclass(frozen=True)
class RecordSummary:
    """Total and per-status counts of a record collection."""

    total_count: int = 0
    per_status: dict[str, int] = field(default_factory=dict)

    def count(self, status: Any) -> int:
        return self.per_status.get(enum_value(status), 0)


@dataclass(frozen=True)
class JobMetrics:
    """Per-job pipeline numbers shown on dashboards and reports."""

    job_id: str
    title: str
    status: str
    total_candidates: int = 0
    active_pipeline: int = 0
    hired: int = 0

    @property
    def hire_rate(self) -> float:
        return safe_ratio(self.hired, self.total_candidates)


@dataclass(frozen=True)
class FunnelStage:
    """One bar of the candidate funnel."""

    status: str
    count: int
    ratio: float


def safe_ratio(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is zero."""
    if not denominator:
        return 0.0
    return numerator / denominator


def aggregate(records: Iterable[Any], statuses: type[Enum] = CandidateStatus) -> RecordSummary:
    """
    Count records overall and per status.

    Args:
        records: Filtered records
        statuses: Status enum whose members are always present in the result

    Returns:
        RecordSummary; all zeros for an empty input
    """
    per_status = {member.value: 0 for member in statuses}
    total = 0
    for record in records or ():
        if record is None:
            continue
        total += 1
        key = enum_value(getattr(record, "status", None))
        per_status[key] = per_status.get(key, 0) + 1
    return RecordSummary(total_count=total, per_status=per_status)


def job_metrics(job: Job, candidates: Iterable[Candidate]) -> JobMetrics:
    """Compute pipeline metrics for one job from its candidates."""
    job_candidates = [c for c in candidates or () if c is not None and c.job_id == job.id]
    return _metrics_for(job, job_candidates)


def job_performance(jobs: Iterable[Job], candidates: Iterable[Candidate]) -> list[JobMetrics]:
    """Compute metrics for each job, in job order."""
    by_job: dict[str, list[Candidate]] = defaultdict(list)
    for candidate in candidates or ():
        if candidate is not None and candidate.job_id is not None:
            by_job[candidate.job_id].append(candidate)
    return [_metrics_for(job, by_job.get(job.id, [])) for job in jobs or () if job is not None]


def _metrics_for(job: Job, job_candidates: list[Candidate]) -> JobMetrics:
    return JobMetrics(
        job_id=job.id,
        title=job.title,
        status=job.status,
        total_candidates=len(job_candidates),
        active_pipeline=sum(1 for c in job_candidates if c.status in ACTIVE_STATUSES),
        hired=sum(1 for c in job_candidates if c.status in HIRED_STATUSES),
    )


def funnel(summary: RecordSummary) -> list[FunnelStage]:
    """
    Build the ordered candidate funnel (New through Joined).

    Rejected candidates count toward the total but have no bar of their own.
    """
    return [
        FunnelStage(
            status=status.value,
            count=summary.count(status),
            ratio=safe_ratio(summary.count(status), summary.total_count),
        )
        for status in FUNNEL_ORDER
    ]


def conversion_rate(summary: RecordSummary) -> float:
    """Share of candidates that were selected or joined."""
    hired = sum(summary.count(status) for status in HIRED_STATUSES)
    return safe_ratio(hired, summary.total_count)
