"""
Record filtering for listing screens.

A record is first tested for visibility (owner in scope OR job assigned to the
viewer) and only then against the user-entered criteria. All criteria are
AND-combined; free-text search ORs across the searchable fields.
"""

import logging
from typing import Any, Iterable, Optional, Sequence, TypeVar

from core.config import settings
from core.utils.datetime import in_date_range
from schemas.common import enum_value
from schemas.criteria import ALL, FilterCriteria
from schemas.jobs import Job

logger = logging.getLogger(__name__)

R = TypeVar("R")


def index_jobs(jobs: Iterable[Job]) -> dict[str, Job]:
    """Index jobs by id; the first occurrence of an id wins."""
    indexed: dict[str, Job] = {}
    for job in jobs or ():
        if job is not None and job.id not in indexed:
            indexed[job.id] = job
    return indexed


def is_visible(record: Any, owner_scope: set[str], job_scope: set[str]) -> bool:
    """
    Check the visibility predicate for a single record.

    A missing owner or job reference never satisfies its clause.
    """
    owner_id = getattr(record, "owner_id", None)
    if owner_id is not None and owner_id in owner_scope:
        return True
    job_id = getattr(record, "job_id", None)
    return job_id is not None and job_id in job_scope


def searchable_values(record: Any, job: Optional[Job]) -> list[str]:
    """Collect the values free-text search is matched against."""
    values: list[str] = []
    search_values = getattr(record, "search_values", None)
    if search_values is not None:
        values.extend(search_values(settings.candidate_search_fields))
    if job is not None and job.title:
        values.append(job.title)
    return values


def matches_criteria(record: Any, criteria: FilterCriteria, job: Optional[Job]) -> bool:
    """
    Check a visible record against the user-entered criteria.

    Args:
        record: Candidate or leave request
        criteria: Filter criteria
        job: The record's job, if known

    Returns:
        True if every active criterion matches
    """
    if criteria.status != ALL and enum_value(getattr(record, "status", None)) != criteria.status:
        return False

    if criteria.client != ALL and (job is None or job.client_name != criteria.client):
        return False

    if criteria.job_title != ALL and (job is None or job.title != criteria.job_title):
        return False

    stage = criteria.effective_stage
    if stage != ALL and getattr(record, "interview_stage", None) != stage:
        return False

    if criteria.search:
        if not any(criteria.search in value.lower() for value in searchable_values(record, job)):
            return False

    if not in_date_range(getattr(record, "created_at", None), criteria.created_from, criteria.created_to):
        return False
    if not in_date_range(getattr(record, "joining_date", None), criteria.joined_from, criteria.joined_to):
        return False
    if not in_date_range(
        getattr(record, "selection_date", None), criteria.selected_from, criteria.selected_to
    ):
        return False

    return True


def filter_records(
    records: Iterable[R],
    owner_scope: set[str],
    job_scope: set[str],
    criteria: Optional[FilterCriteria] = None,
    jobs: Iterable[Job] = (),
) -> list[R]:
    """
    Return the visible records that match the criteria, in input order.

    Args:
        records: Candidates or leave requests
        owner_scope: User ids whose records are visible
        job_scope: Job ids whose records are visible through assignment
        criteria: User-entered filters (pass-through when omitted)
        jobs: Job lookup for client, title and search matching

    Returns:
        Filtered list of records
    """
    criteria = criteria or FilterCriteria()
    jobs_by_id = index_jobs(jobs)
    owner_scope = owner_scope or set()
    job_scope = job_scope or set()

    total = 0
    visible = 0
    result: list[R] = []
    for record in records or ():
        if record is None:
            continue
        total += 1
        if not is_visible(record, owner_scope, job_scope):
            continue
        visible += 1
        job = jobs_by_id.get(getattr(record, "job_id", None))
        if matches_criteria(record, criteria, job):
            result.append(record)

    logger.debug(
        f"Filtered {total} records: {visible} visible, {len(result)} matching",
        extra={"criteria": criteria.model_dump(mode="json")},
    )
    return result


def job_title_options(jobs: Iterable[Job]) -> list[str]:
    """Sorted unique job titles for the job-title selector."""
    return sorted({job.title for job in jobs or () if job is not None and job.title})


def client_options(jobs: Iterable[Job]) -> list[str]:
    """Sorted unique client names for the client selector."""
    return sorted({job.client_name for job in jobs or () if job is not None and job.client_name})


def stage_options(jobs: Sequence[Job], job_title: Optional[str]) -> list[str]:
    """
    Stage names offered once a job title is selected.

    The stage selector stays empty while the job title is "all". Jobs sharing
    a title contribute their stages in first-seen order.
    """
    if not job_title or job_title == ALL:
        return []

    names: list[str] = []
    for job in jobs or ():
        if job is None or job.title != job_title:
            continue
        for name in job.stage_names:
            if name not in names:
                names.append(name)
    return names
