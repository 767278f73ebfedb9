"""Job assignment visibility."""

import logging
from typing import Iterable, Optional

from schemas.jobs import Job
from schemas.users import User

logger = logging.getLogger(__name__)


def expand_by_assignment(viewer: Optional[User], jobs: Iterable[Job]) -> set[str]:
    """
    Collect ids of jobs the viewer leads or is assigned to.

    Assignment grants visibility independently of the org graph: a recruiter
    on another recruiter's job sees that job's candidates.

    Args:
        viewer: Signed-in user, or None
        jobs: Job collection

    Returns:
        Set of job ids
    """
    if viewer is None or not getattr(viewer, "id", None):
        return set()

    job_ids = {job.id for job in jobs or () if job is not None and job.is_assigned(viewer.id)}
    logger.debug(f"User {viewer.id} is assigned to {len(job_ids)} jobs")
    return job_ids
