"""
Authorization engine for owned records.

One engine serves every record kind (evangelism contacts, student records).
Read access follows the acting user's scope from ``OrgHierarchyResolver``;
write access follows the leadership chain above the record's owner:

- Owners may always modify their own records
- Directors may modify any record
- Region leaders may modify records owned by leaders or members of any group
  in their region
- Group leaders may modify records owned by members of their group (not by
  other leaders of the same group)
- Everyone else is denied

Every check fails closed: a missing profile, group or owner denies access
without revealing which lookup came up empty.
"""
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from app.features.authorization.exceptions import Forbidden, NotFound, Unauthenticated
from app.features.authorization.records import RecordKind
from app.features.authorization.resolver import OrgHierarchyResolver
from app.features.users.models import Role, User
from app.utils import get_logger


log = get_logger(__name__)


def require_user(user: User | None) -> User:
    """Reject requests that carry no acting user."""
    if user is None:
        raise Unauthenticated()
    return user


class AuthorizationEngine:
    """Per-request read filtering and write checks, recomputed on every call."""

    def __init__(self, resolver: OrgHierarchyResolver):
        self.resolver = resolver
        self.store = resolver.store
        self._modify_checks: dict[Role, Callable[[User, str], Awaitable[bool]]] = {
            Role.DIRECTOR: self._director_may_modify,
            Role.REGION_LEADER: self._region_leader_may_modify,
            Role.GROUP_LEADER: self._group_leader_may_modify,
            Role.GROUP_MEMBER: self._group_member_may_modify,
        }

    def handles(self, role: Role) -> bool:
        return role in self._modify_checks

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    async def filter_visible(self, user: User | None, records: Iterable[Any], kind: RecordKind) -> list:
        """
        Keep the records whose owner lies inside the user's scope, newest first.

        Raises:
            Unauthenticated: if ``user`` is None
        """
        user = require_user(user)
        scope = await self.resolver.scope_user_ids(user)
        if scope.unbounded:
            visible = list(records)
        else:
            visible = [record for record in records if kind.owner_of(record) in scope]
        return sorted(visible, key=kind.sort_key, reverse=True)

    async def visible_records(
        self,
        user: User | None,
        kind: RecordKind,
        skip: int = 0,
        limit: int | None = None
    ) -> list:
        """Same visibility as ``filter_visible``, pushed down into the store query."""
        user = require_user(user)
        scope = await self.resolver.scope_user_ids(user)
        if scope.is_empty():
            return []
        owner_ids = None if scope.unbounded else scope.user_ids
        return await self.store.list_records(kind, owner_ids=owner_ids, skip=skip, limit=limit)

    async def get_record(self, user: User | None, kind: RecordKind, record_id: str):
        """
        Fetch one record the user may read.

        Records outside the user's scope are reported as missing so their
        existence is not disclosed.
        """
        user = require_user(user)
        record = await self.store.get_record(kind, record_id)
        if record is None:
            raise NotFound(f"{kind.label} not found")

        scope = await self.resolver.scope_user_ids(user)
        if kind.owner_of(record) not in scope:
            log.debug(f"User {user.id} cannot see {kind.label} {record_id}")
            raise NotFound(f"{kind.label} not found")
        return record

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    async def can_modify(self, user: User | None, record: Any, kind: RecordKind) -> bool:
        """
        Decide whether ``user`` may modify ``record``.

        Raises:
            Unauthenticated: if ``user`` is None
        """
        user = require_user(user)
        owner_id = kind.owner_of(record)
        if owner_id == user.id:
            return True

        check = self._modify_checks.get(user.role)
        if check is None:
            log.warning(f"Unrecognized role {user.role!r} for user {user.id}; denying modify")
            return False

        allowed = await check(user, owner_id)
        log.debug(f"User {user.id} ({user.role}) modify {kind.label} owned by {owner_id}: {allowed}")
        return allowed

    async def _director_may_modify(self, user: User, owner_id: str) -> bool:
        return True

    async def _region_leader_may_modify(self, user: User, owner_id: str) -> bool:
        profile = await self.store.get_profile_for_user(user.id, Role.REGION_LEADER)
        if profile is None:
            return False

        owner_group_id = await self.resolver.group_of(owner_id)
        if owner_group_id is None:
            return False

        groups = await self.store.get_groups_in_region(profile.region_id)
        return any(group.id == owner_group_id for group in groups)

    async def _group_leader_may_modify(self, user: User, owner_id: str) -> bool:
        profile = await self.store.get_profile_for_user(user.id, Role.GROUP_LEADER)
        if profile is None:
            return False

        # Only members count; records of other leaders in the group are off limits
        owner_profile = await self.store.get_profile_for_user(owner_id, Role.GROUP_MEMBER)
        return owner_profile is not None and owner_profile.group_id == profile.group_id

    async def _group_member_may_modify(self, user: User, owner_id: str) -> bool:
        return False

    async def create_record(self, user: User | None, kind: RecordKind, payload: dict[str, Any]):
        """Create a record owned by the acting user; any supplied owner is ignored."""
        user = require_user(user)
        data = {key: value for key, value in payload.items() if key != kind.owner_field}
        record = await self.store.create_record(kind, data, owner_id=user.id)
        log.info(f"User {user.id} created {kind.label} {record.id}")
        return record

    async def update_record(self, user: User | None, kind: RecordKind, record_id: str, patch: dict[str, Any]):
        """
        Apply ``patch`` to a record after checking write permission.

        Raises:
            Unauthenticated: if ``user`` is None
            NotFound: if no record has ``record_id``
            Forbidden: if the user may not modify the record
        """
        user = require_user(user)
        record = await self.store.get_record(kind, record_id)
        if record is None:
            raise NotFound(f"{kind.label} not found")

        if not await self.can_modify(user, record, kind):
            log.info(f"User {user.id} denied update of {kind.label} {record_id}")
            raise Forbidden(f"Not authorized to modify this {kind.label.lower()}")

        # Ownership never transfers; required columns ignore null
        required = kind.required_fields
        changes = {
            key: value for key, value in patch.items()
            if key not in (kind.owner_field, "id") and not (value is None and key in required)
        }
        return await self.store.update_record(record, changes)
