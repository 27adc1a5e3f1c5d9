"""
Data store used by the hierarchy resolver and the authorization engine.

Wraps an ``AsyncSession`` with the handful of key/foreign-key lookups the
engine needs. A lookup that finds nothing returns ``None`` or an empty list;
a lookup that fails at the database layer raises ``StoreUnavailable``.
"""
import functools
from collections.abc import Iterable
from typing import Any

from sqlalchemy import select, union
from sqlalchemy.exc import InterfaceError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.authorization.exceptions import StoreUnavailable
from app.features.authorization.records import RecordKind
from app.features.regions.models import Group, Region
from app.features.users.models import (
    PROFILE_MODELS,
    GroupLeaderProfile,
    GroupMemberProfile,
    Role,
    User,
)
from app.utils import get_logger


log = get_logger(__name__)


def _guarded(func):
    """Translate connection-level database failures into ``StoreUnavailable``."""
    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except (OperationalError, InterfaceError, PoolTimeoutError) as e:
            log.error(f"Store operation {func.__name__} failed: {e}")
            raise StoreUnavailable() from e
    return wrapper


class HierarchyStore:
    """Lookups and writes against the organization database."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Hierarchy reads
    # ------------------------------------------------------------------

    @_guarded
    async def get_user(self, user_id: str) -> User | None:
        """Fetch a user with all profile relationships loaded."""
        return await self.db.scalar(select(User).where(User.id == user_id))

    @_guarded
    async def get_profile_for_user(self, user_id: str, role: Role):
        """
        Fetch the profile row of the given kind for a user.

        Returns None when the role has no profile model or no row exists.
        """
        model = PROFILE_MODELS.get(role)
        if model is None:
            return None
        return await self.db.scalar(select(model).where(model.user_id == user_id))

    @_guarded
    async def get_region(self, region_id: str) -> Region | None:
        return await self.db.scalar(select(Region).where(Region.id == region_id))

    @_guarded
    async def get_group(self, group_id: str) -> Group | None:
        return await self.db.scalar(select(Group).where(Group.id == group_id))

    @_guarded
    async def get_groups_in_region(self, region_id: str) -> list[Group]:
        result = await self.db.execute(
            select(Group).where(Group.region_id == region_id).order_by(Group.name)
        )
        return list(result.scalars().all())

    @_guarded
    async def get_group_members_and_leaders(self, group_ids: Iterable[str]) -> list[str]:
        """User IDs of every leader and member of the given groups."""
        group_ids = list(group_ids)
        if not group_ids:
            return []
        stmt = union(
            select(GroupLeaderProfile.user_id).where(GroupLeaderProfile.group_id.in_(group_ids)),
            select(GroupMemberProfile.user_id).where(GroupMemberProfile.group_id.in_(group_ids)),
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    @_guarded
    async def get_group_member_ids(self, group_id: str) -> list[str]:
        """User IDs of the members (not leaders) of one group."""
        result = await self.db.execute(
            select(GroupMemberProfile.user_id).where(GroupMemberProfile.group_id == group_id)
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Owned records
    # ------------------------------------------------------------------

    @_guarded
    async def get_record(self, kind: RecordKind, record_id: str):
        model = kind.model
        return await self.db.scalar(select(model).where(model.id == record_id))

    @_guarded
    async def list_records(
        self,
        kind: RecordKind,
        owner_ids: Iterable[str] | None = None,
        skip: int = 0,
        limit: int | None = None
    ) -> list:
        """
        List records newest-first by the kind's order field.

        ``owner_ids=None`` means no owner filter (unbounded scope).
        """
        model = kind.model
        order_column = getattr(model, kind.order_field)
        query = select(model)
        if owner_ids is not None:
            query = query.where(getattr(model, kind.owner_field).in_(list(owner_ids)))
        query = query.order_by(order_column.desc(), model.id.desc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    @_guarded
    async def create_record(self, kind: RecordKind, payload: dict[str, Any], owner_id: str):
        record = kind.model(**payload)
        setattr(record, kind.owner_field, owner_id)
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    @_guarded
    async def update_record(self, record, patch: dict[str, Any]):
        for field, value in patch.items():
            setattr(record, field, value)
        await self.db.commit()
        await self.db.refresh(record)
        return record
