"""
Scope: the set of user IDs whose records an acting user may read.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Scope:
    """
    Owner IDs visible to an acting user.

    Directors get the unbounded scope (``ALL_USERS``), which is never
    materialized into an ID set; callers must check ``unbounded`` before
    using ``user_ids``.
    """
    user_ids: frozenset[str] = frozenset()
    unbounded: bool = False

    @classmethod
    def of(cls, *user_ids: str) -> "Scope":
        return cls(user_ids=frozenset(user_ids))

    def __contains__(self, user_id: object) -> bool:
        return self.unbounded or user_id in self.user_ids

    def is_empty(self) -> bool:
        return not self.unbounded and not self.user_ids


ALL_USERS = Scope(unbounded=True)
NO_USERS = Scope()
