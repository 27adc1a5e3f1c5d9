"""
FastAPI dependencies that build the authorization engine per request.

The store is bound to the request's database session; nothing here outlives
the request.
"""
from typing import Annotated
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database.engine import get_db
from app.features.authorization.engine import AuthorizationEngine
from app.features.authorization.resolver import OrgHierarchyResolver
from app.features.authorization.store import HierarchyStore


async def get_store(db: Annotated[AsyncSession, Depends(get_db)]) -> HierarchyStore:
    return HierarchyStore(db)


async def get_resolver(store: Annotated[HierarchyStore, Depends(get_store)]) -> OrgHierarchyResolver:
    return OrgHierarchyResolver(store)


async def get_authorization_engine(
    resolver: Annotated[OrgHierarchyResolver, Depends(get_resolver)]
) -> AuthorizationEngine:
    """
    Usage:
        @router.get("/contacts")
        async def list_contacts(
            user: Annotated[User, Depends(get_current_user)],
            engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)]
        ):
            return await engine.visible_records(user, CONTACT_RECORDS)
    """
    return AuthorizationEngine(resolver)
