"""
Organization reporting graph.

The directory service owns users and their ``reporter`` links; this module
only indexes them for reportee lookups. The reporter relation is expected to
form a forest, but nothing upstream enforces that, so cycles are detected and
reported rather than assumed away.
"""

import logging
from collections import defaultdict
from typing import Iterable, Optional

from schemas.users import User

logger = logging.getLogger(__name__)


class OrgGraph:
    """Read-only index over a user population and its reporter links."""

    def __init__(self, users: Iterable[User]):
        """
        Build the index.

        Args:
            users: Full user population; duplicates keep their first occurrence
        """
        self._users: dict[str, User] = {}
        self._reportees: dict[str, list[User]] = defaultdict(list)

        for user in users or ():
            if user is None or not user.id:
                continue
            if user.id in self._users:
                logger.debug(f"Duplicate user {user.id} in directory, keeping first")
                continue
            self._users[user.id] = user

        for user in self._users.values():
            # A self-reference is not a reporting line
            if user.reporter and user.reporter != user.id:
                self._reportees[user.reporter].append(user)

        self.cyclic_ids: frozenset[str] = frozenset(self._find_cycles())
        if self.cyclic_ids:
            logger.warning(
                f"Reporter graph contains cycles involving {len(self.cyclic_ids)} users: "
                f"{sorted(self.cyclic_ids)}"
            )

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    @property
    def user_ids(self) -> set[str]:
        return set(self._users)

    @property
    def users(self) -> list[User]:
        return list(self._users.values())

    def get(self, user_id: Optional[str]) -> Optional[User]:
        if user_id is None:
            return None
        return self._users.get(user_id)

    def reportees(self, user_id: Optional[str]) -> list[User]:
        """Return the direct reportees of a user."""
        if user_id is None:
            return []
        return list(self._reportees.get(user_id, ()))

    def reportees_of(self, user_ids: Iterable[str]) -> list[User]:
        """Return the direct reportees of any of the given users, without duplicates."""
        seen: set[str] = set()
        result: list[User] = []
        for user_id in user_ids:
            for reportee in self._reportees.get(user_id, ()):
                if reportee.id not in seen:
                    seen.add(reportee.id)
                    result.append(reportee)
        return result

    def _find_cycles(self) -> set[str]:
        """
        Collect ids of users that sit on a reporter cycle.

        Self-references count as a cycle of length one. Each user's reporter
        chain is walked at most once overall.
        """
        cyclic: set[str] = set()
        done: set[str] = set()

        for start in self._users:
            path: list[str] = []
            position: dict[str, int] = {}
            node: Optional[str] = start

            while node is not None and node in self._users and node not in done:
                if node in position:
                    cyclic.update(path[position[node]:])
                    break
                position[node] = len(path)
                path.append(node)
                node = self._users[node].reporter

            done.update(path)

        return cyclic
