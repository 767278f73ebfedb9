"""
Scope resolution: which users' records a viewer may see.

The scope is computed purely from the viewer and the org graph. It never
looks at candidates, jobs or leave requests, and it never raises: a missing
viewer sees nothing, an unknown designation sees only itself.
"""

import logging
from typing import Iterable, Optional

from schemas.users import Designation, User
from visibility.org_graph import OrgGraph
from visibility.roles import (
    FULL_SCOPE_ROLES,
    ScopePolicy,
    reportee_chain,
    structural_depth,
)

logger = logging.getLogger(__name__)


def _level_roles(role: Designation, policy: ScopePolicy) -> tuple[Optional[Designation], ...]:
    """Required reportee designation per level; None accepts any designation."""
    if policy == ScopePolicy.STRUCTURAL:
        return (None,) * structural_depth(role)
    return reportee_chain(role)


def resolve_scope(
    viewer: Optional[User],
    all_users: OrgGraph | Iterable[User],
    policy: ScopePolicy | str = ScopePolicy.DESIGNATION,
) -> set[str]:
    """
    Compute the set of user ids whose records the viewer may see.

    Args:
        viewer: Signed-in user, or None when unauthenticated
        all_users: Full user population (or a prebuilt OrgGraph)
        policy: DESIGNATION follows the role chains, STRUCTURAL walks the
            raw reporter graph

    Returns:
        Set of visible owner ids; includes the viewer's own id unless the
        viewer is missing
    """
    if viewer is None or not getattr(viewer, "id", None):
        logger.debug("No viewer supplied, resolving empty scope")
        return set()

    policy = ScopePolicy(policy)
    graph = all_users if isinstance(all_users, OrgGraph) else OrgGraph(all_users)

    role = viewer.role
    if role is None:
        logger.debug(
            f"Unrecognized designation {viewer.designation!r} for user {viewer.id}, "
            f"restricting to self"
        )
        return {viewer.id}

    if role in FULL_SCOPE_ROLES:
        return graph.user_ids | {viewer.id}

    scope = {viewer.id}
    frontier = {viewer.id}

    # Depth is bounded by the rule length, so reporter cycles cannot loop
    for required_role in _level_roles(role, policy):
        if not frontier:
            break
        next_level = {
            reportee.id
            for reportee in graph.reportees_of(frontier)
            if reportee.id not in scope
            and (required_role is None or reportee.role == required_role)
        }
        scope |= next_level
        frontier = next_level

    logger.debug(
        f"Resolved scope of {len(scope)} users for {role.value} {viewer.id} "
        f"({policy.value} policy)"
    )
    return scope
