"""
Region and group routes.

Directors manage the whole tree. Region leaders may add groups to their own
region. Everyone else sees the region they belong to.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import config
from app.core.database.engine import get_db
from app.core.limiter import limiter
from app.features.authorization.dependencies import get_resolver, get_store
from app.features.authorization.exceptions import Forbidden, NotFound
from app.features.authorization.resolver import OrgHierarchyResolver
from app.features.authorization.store import HierarchyStore
from app.features.regions.models import Group, Region
from app.features.regions.schemas import GroupCreate, GroupResponse, RegionCreate, RegionResponse
from app.features.users.dependencies import get_current_user, get_current_director
from app.features.users.models import Role, User
from app.utils import get_logger


log = get_logger(__name__)

router = APIRouter(tags=["regions"])


@router.get("/", response_model=list[RegionResponse])
async def list_regions(
    user: Annotated[User, Depends(get_current_user)],
    resolver: Annotated[OrgHierarchyResolver, Depends(get_resolver)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """
    List regions visible to the caller.

    - Directors: all regions, by name
    - Leaders and members: the region they belong to
    """
    if user.role == Role.DIRECTOR:
        result = await db.execute(select(Region).order_by(Region.name))
        return result.scalars().all()

    region_id = await resolver.home_region_id(user)
    if region_id is None:
        return []
    region = await resolver.store.get_region(region_id)
    return [region] if region is not None else []


@router.post("/", response_model=RegionResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(config.WRITE_RATE_LIMIT)
async def create_region(
    request: Request,
    region_data: RegionCreate,
    director: Annotated[User, Depends(get_current_director)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Create a new region (director only)."""
    region = Region(**region_data.model_dump())
    db.add(region)
    await db.commit()
    await db.refresh(region)

    log.info(f"Director {director.id} created region {region.id} ({region.name!r})")
    return region


@router.get("/{region_id}/groups", response_model=list[GroupResponse])
async def list_region_groups(
    region_id: str,
    user: Annotated[User, Depends(get_current_user)],
    resolver: Annotated[OrgHierarchyResolver, Depends(get_resolver)]
):
    """List the groups of a region the caller can see."""
    region = await resolver.store.get_region(region_id)
    if region is None:
        raise NotFound("Region not found")

    if user.role != Role.DIRECTOR and await resolver.home_region_id(user) != region_id:
        raise NotFound("Region not found")

    return await resolver.store.get_groups_in_region(region_id)


@router.post("/{region_id}/groups", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(config.WRITE_RATE_LIMIT)
async def create_group(
    request: Request,
    region_id: str,
    group_data: GroupCreate,
    user: Annotated[User, Depends(get_current_user)],
    store: Annotated[HierarchyStore, Depends(get_store)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """
    Create a group inside a region.

    Directors may use any region; region leaders only their own.
    """
    if user.role == Role.REGION_LEADER:
        profile = await store.get_profile_for_user(user.id, Role.REGION_LEADER)
        if profile is None or profile.region_id != region_id:
            raise Forbidden("Can only create groups in your own region")
    elif user.role != Role.DIRECTOR:
        raise Forbidden("Not authorized to create groups")

    if await store.get_region(region_id) is None:
        raise NotFound("Region not found")

    group = Group(region_id=region_id, **group_data.model_dump())
    db.add(group)
    await db.commit()
    await db.refresh(group)

    log.info(f"User {user.id} created group {group.id} in region {region_id}")
    return group
