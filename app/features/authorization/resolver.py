"""
Org hierarchy resolver.

Expands an acting user into the set of user IDs that sit inside their
organizational scope:

- Directors: everyone (``ALL_USERS``)
- Region leaders: themselves plus every leader and member of every group in
  their region
- Group leaders: themselves plus the members of their group
- Group members: themselves only

Missing profile data never widens a scope: a region or group leader without
a profile row resolves to an empty scope.
"""
from collections.abc import Awaitable, Callable

from app.features.authorization.scope import ALL_USERS, NO_USERS, Scope
from app.features.authorization.store import HierarchyStore
from app.features.users.models import Role, User
from app.utils import get_logger


log = get_logger(__name__)


class OrgHierarchyResolver:
    """Stateless scope resolution over a ``HierarchyStore``."""

    def __init__(self, store: HierarchyStore):
        self.store = store
        self._scope_resolvers: dict[Role, Callable[[User], Awaitable[Scope]]] = {
            Role.DIRECTOR: self._director_scope,
            Role.REGION_LEADER: self._region_leader_scope,
            Role.GROUP_LEADER: self._group_leader_scope,
            Role.GROUP_MEMBER: self._group_member_scope,
        }

    def handles(self, role: Role) -> bool:
        return role in self._scope_resolvers

    async def scope_user_ids(self, user: User) -> Scope:
        """Compute the IDs of users whose records ``user`` may read."""
        resolve = self._scope_resolvers.get(user.role)
        if resolve is None:
            log.warning(f"Unrecognized role {user.role!r} for user {user.id}; scope is empty")
            return NO_USERS

        scope = await resolve(user)
        if scope.unbounded:
            log.debug(f"User {user.id} ({user.role}) has unbounded scope")
        else:
            log.debug(f"User {user.id} ({user.role}) scope covers {len(scope.user_ids)} users")
        return scope

    async def _director_scope(self, user: User) -> Scope:
        return ALL_USERS

    async def _region_leader_scope(self, user: User) -> Scope:
        profile = await self.store.get_profile_for_user(user.id, Role.REGION_LEADER)
        if profile is None:
            log.debug(f"Region leader {user.id} has no profile")
            return NO_USERS

        groups = await self.store.get_groups_in_region(profile.region_id)
        peer_ids = await self.store.get_group_members_and_leaders(group.id for group in groups)
        return Scope.of(user.id, *peer_ids)

    async def _group_leader_scope(self, user: User) -> Scope:
        profile = await self.store.get_profile_for_user(user.id, Role.GROUP_LEADER)
        if profile is None:
            log.debug(f"Group leader {user.id} has no profile")
            return NO_USERS

        member_ids = await self.store.get_group_member_ids(profile.group_id)
        return Scope.of(user.id, *member_ids)

    async def _group_member_scope(self, user: User) -> Scope:
        return Scope.of(user.id)

    async def group_of(self, user_id: str) -> str | None:
        """
        Group a user leads or belongs to.

        The leader profile is consulted first, then the member profile.
        """
        leader_profile = await self.store.get_profile_for_user(user_id, Role.GROUP_LEADER)
        if leader_profile is not None:
            return leader_profile.group_id

        member_profile = await self.store.get_profile_for_user(user_id, Role.GROUP_MEMBER)
        if member_profile is not None:
            return member_profile.group_id
        return None

    async def home_region_id(self, user: User) -> str | None:
        """
        Region a user sits in: their own region for region leaders, their
        group's region for group leaders and members. Directors and users
        with missing profiles have none.
        """
        if user.role == Role.REGION_LEADER:
            profile = await self.store.get_profile_for_user(user.id, Role.REGION_LEADER)
            return profile.region_id if profile is not None else None

        if user.role in (Role.GROUP_LEADER, Role.GROUP_MEMBER):
            profile = await self.store.get_profile_for_user(user.id, user.role)
            if profile is None:
                return None
            group = await self.store.get_group(profile.group_id)
            return group.region_id if group is not None else None

        return None
