"""
Designation rules for hierarchical visibility.

Each designation maps to the chain of reportee designations it may see, one
entry per reporting level. A Manager sees the Mentors reporting to them and
the Recruiters reporting to those Mentors; a Recruiter reporting directly to
a Manager is outside the Manager's chain.
"""

from enum import Enum

from schemas.users import Designation


class ScopePolicy(str, Enum):
    """How reportees are collected when resolving a scope."""

    DESIGNATION = "designation"  # follow REPORTEE_CHAINS level by level
    STRUCTURAL = "structural"  # raw reporter graph, ignoring designations


# Designations whose scope covers the whole directory
FULL_SCOPE_ROLES: frozenset[Designation] = frozenset({Designation.ADMIN})

# Role to reportee chain mapping (level 1, level 2, ...)
REPORTEE_CHAINS: dict[Designation, tuple[Designation, ...]] = {
    Designation.MANAGER: (Designation.MENTOR, Designation.RECRUITER),
    Designation.MENTOR: (Designation.RECRUITER,),
    Designation.RECRUITER: (),
}

# Depth of the structural walk per role; unlisted roles walk one level
STRUCTURAL_DEPTH: dict[Designation, int] = {
    Designation.MANAGER: 2,
}

MAX_REPORTING_DEPTH = max(
    max(len(chain) for chain in REPORTEE_CHAINS.values()),
    max(STRUCTURAL_DEPTH.values()),
)


def reportee_chain(role: Designation) -> tuple[Designation, ...]:
    """Return the reportee chain for a role (empty for roles without reportees)."""
    return REPORTEE_CHAINS.get(role, ())


def structural_depth(role: Designation) -> int:
    return STRUCTURAL_DEPTH.get(role, 1)
