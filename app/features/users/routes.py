"""
User feature routes.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import config
from app.core.database.engine import get_db
from app.core.limiter import limiter
from app.features.authorization.dependencies import get_resolver, get_store
from app.features.authorization.exceptions import NotFound
from app.features.authorization.resolver import OrgHierarchyResolver
from app.features.authorization.store import HierarchyStore
from app.features.users.dependencies import get_current_user, get_current_director
from app.features.users.models import Role, User
from app.features.users.profiles import attach_profile
from app.features.users.schemas import UserCreate, UserPublic, UserResponse
from app.utils import get_logger


log = get_logger(__name__)

router = APIRouter(tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(
    user: Annotated[User, Depends(get_current_user)]
):
    """Get current authenticated user's profile, including their region or group."""
    return user


@router.get("/", response_model=list[UserPublic])
async def list_users(
    user: Annotated[User, Depends(get_current_user)],
    resolver: Annotated[OrgHierarchyResolver, Depends(get_resolver)],
    db: Annotated[AsyncSession, Depends(get_db)],
    skip: int = 0,
    limit: int = 50
):
    """List active users inside the caller's organizational scope."""
    scope = await resolver.scope_user_ids(user)
    if scope.is_empty():
        return []

    query = select(User).where(User.is_active == True)
    if not scope.unbounded:
        query = query.where(User.id.in_(scope.user_ids))
    query = query.order_by(User.name).offset(skip).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(config.WRITE_RATE_LIMIT)
async def create_user(
    request: Request,
    user_data: UserCreate,
    director: Annotated[User, Depends(get_current_director)],
    store: Annotated[HierarchyStore, Depends(get_store)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Create a user with the profile matching their role (director only)."""
    existing = await db.scalar(select(User).where(User.email == user_data.email))
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email already exists"
        )

    if user_data.role == Role.REGION_LEADER and await store.get_region(user_data.region_id) is None:
        raise NotFound("Region not found")
    if user_data.role in (Role.GROUP_LEADER, Role.GROUP_MEMBER) and await store.get_group(user_data.group_id) is None:
        raise NotFound("Group not found")

    new_user = User(email=user_data.email, name=user_data.name, role=user_data.role)
    try:
        attach_profile(new_user, region_id=user_data.region_id, group_id=user_data.group_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)

    log.info(f"Director {director.id} created user {new_user.id} as {new_user.role}")
    return new_user
