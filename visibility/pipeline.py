"""
End-to-end listings for a signed-in viewer.

These helpers accept either validated models or the raw documents returned by
the portal's services, run the full scope → assignment → filter pipeline and
return fresh results. Nothing is cached between calls.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from core.config import settings
from schemas.candidates import Candidate
from schemas.common import load_records
from schemas.criteria import FilterCriteria
from schemas.jobs import Job
from schemas.leaves import LeaveRequest, LeaveStatus
from schemas.users import User
from visibility.aggregation import RecordSummary, aggregate
from visibility.assignment import expand_by_assignment
from visibility.filters import filter_records
from visibility.org_graph import OrgGraph
from visibility.roles import FULL_SCOPE_ROLES, ScopePolicy
from visibility.scope import resolve_scope

logger = logging.getLogger(__name__)


def _as_viewer(viewer: Any) -> Optional[User]:
    if viewer is None or isinstance(viewer, User):
        return viewer
    loaded = load_records(User, [viewer])
    return loaded[0] if loaded else None


def visible_candidates(
    viewer: Any,
    users: Iterable[Any],
    jobs: Iterable[Any],
    candidates: Iterable[Any],
    criteria: Optional[FilterCriteria] = None,
) -> list[Candidate]:
    """
    List the candidates a viewer may see, after applying the criteria.

    Args:
        viewer: Signed-in user (model or raw document)
        users: Full user directory
        jobs: Job collection
        candidates: Candidate collection
        criteria: User-entered filters

    Returns:
        Visible, filtered candidates in input order
    """
    viewer = _as_viewer(viewer)
    job_models = load_records(Job, jobs)
    owner_scope = resolve_scope(viewer, OrgGraph(load_records(User, users)))
    job_scope = expand_by_assignment(viewer, job_models)
    return filter_records(
        load_records(Candidate, candidates),
        owner_scope,
        job_scope,
        criteria,
        jobs=job_models,
    )


def visible_jobs(viewer: Any, users: Iterable[Any], jobs: Iterable[Any]) -> list[Job]:
    """
    List jobs created by someone in the viewer's scope or assigned to the viewer.

    Args:
        viewer: Signed-in user
        users: Full user directory
        jobs: Job collection

    Returns:
        Visible jobs in input order
    """
    viewer = _as_viewer(viewer)
    job_models = load_records(Job, jobs)
    owner_scope = resolve_scope(viewer, OrgGraph(load_records(User, users)))
    job_scope = expand_by_assignment(viewer, job_models)
    return [
        job for job in job_models
        if (job.created_by is not None and job.created_by in owner_scope) or job.id in job_scope
    ]


@dataclass(frozen=True)
class LeaveBoard:
    """Leave requests split into the viewer's own and their team's."""

    own: list[LeaveRequest] = field(default_factory=list)
    team: list[LeaveRequest] = field(default_factory=list)
    summary: RecordSummary = field(default_factory=RecordSummary)

    @property
    def pending(self) -> int:
        return self.summary.count(LeaveStatus.PENDING)

    @property
    def approved(self) -> int:
        return self.summary.count(LeaveStatus.APPROVED)

    @property
    def rejected(self) -> int:
        return self.summary.count(LeaveStatus.REJECTED)


def leave_board(
    viewer: Any,
    users: Iterable[Any],
    leaves: Iterable[Any],
    criteria: Optional[FilterCriteria] = None,
    policy: Optional[ScopePolicy | str] = None,
) -> LeaveBoard:
    """
    Build the leave screen for a viewer.

    Admins see every request in the team list, their own included; everyone
    else sees their reportees' requests there and their own separately.

    Args:
        viewer: Signed-in user
        users: Full user directory
        leaves: Leave request collection
        criteria: User-entered filters, applied to both lists
        policy: Scope policy (defaults to ``settings.leave_scope_policy``)

    Returns:
        LeaveBoard with own and team requests and team status counts
    """
    viewer = _as_viewer(viewer)
    if viewer is None:
        return LeaveBoard(summary=aggregate([], statuses=LeaveStatus))

    policy = ScopePolicy(policy or settings.leave_scope_policy)
    leave_models = load_records(LeaveRequest, leaves)
    scope = resolve_scope(viewer, OrgGraph(load_records(User, users)), policy=policy)

    team_scope = set(scope)
    if viewer.role not in FULL_SCOPE_ROLES:
        team_scope.discard(viewer.id)

    own = filter_records(leave_models, {viewer.id}, set(), criteria)
    team = filter_records(leave_models, team_scope, set(), criteria)

    logger.debug(
        f"Leave board for {viewer.id}: {len(own)} own, {len(team)} team requests "
        f"({policy.value} policy)"
    )
    return LeaveBoard(own=own, team=team, summary=aggregate(team, statuses=LeaveStatus))

