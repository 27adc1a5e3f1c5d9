"""
Evangelism contact routes.

Visibility and edit rights cascade down the hierarchy; see
app.features.authorization.engine for the rules.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, Request, status

from app.core import config
from app.core.limiter import limiter
from app.features.authorization.dependencies import get_authorization_engine
from app.features.authorization.engine import AuthorizationEngine
from app.features.contacts.models import CONTACT_RECORDS
from app.features.contacts.schemas import ContactCreate, ContactResponse, ContactUpdate
from app.features.users.dependencies import get_current_user
from app.features.users.models import User


router = APIRouter(tags=["contacts"])


@router.get("", response_model=list[ContactResponse])
async def list_contacts(
    user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)],
    skip: int = 0,
    limit: int = 100
):
    """List contacts visible to the caller, newest first."""
    return await engine.visible_records(user, CONTACT_RECORDS, skip=skip, limit=limit)


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: str,
    user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)]
):
    """Get one contact inside the caller's scope."""
    return await engine.get_record(user, CONTACT_RECORDS, contact_id)


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(config.WRITE_RATE_LIMIT)
async def create_contact(
    request: Request,
    contact_data: ContactCreate,
    user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)]
):
    """Record a new contact owned by the caller."""
    return await engine.create_record(user, CONTACT_RECORDS, contact_data.model_dump())


@router.patch("/{contact_id}", response_model=ContactResponse)
@limiter.limit(config.WRITE_RATE_LIMIT)
async def update_contact(
    request: Request,
    contact_id: str,
    update_data: ContactUpdate,
    user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)]
):
    """
    Update a contact the caller may modify.

    Only fields present in the body change; null clears an optional field.
    """
    patch = update_data.model_dump(exclude_unset=True)
    return await engine.update_record(user, CONTACT_RECORDS, contact_id, patch)
