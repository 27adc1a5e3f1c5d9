"""
Student record routes.

Visibility and edit rights cascade down the hierarchy; see
app.features.authorization.engine for the rules.
"""
from typing import Annotated
from fastapi import APIRouter, Depends, Request, status

from app.core import config
from app.core.limiter import limiter
from app.features.authorization.dependencies import get_authorization_engine
from app.features.authorization.engine import AuthorizationEngine
from app.features.students.models import STUDENT_RECORDS
from app.features.students.schemas import StudentCreate, StudentResponse, StudentUpdate
from app.features.users.dependencies import get_current_user
from app.features.users.models import User


router = APIRouter(tags=["students"])


@router.get("", response_model=list[StudentResponse])
async def list_student_records(
    user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)],
    skip: int = 0,
    limit: int = 100
):
    """List student records visible to the caller, most recently updated first."""
    return await engine.visible_records(user, STUDENT_RECORDS, skip=skip, limit=limit)


@router.get("/{record_id}", response_model=StudentResponse)
async def get_student_record(
    record_id: str,
    user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)]
):
    """Get one student record inside the caller's scope."""
    return await engine.get_record(user, STUDENT_RECORDS, record_id)


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(config.WRITE_RATE_LIMIT)
async def create_student_record(
    request: Request,
    student_data: StudentCreate,
    user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)]
):
    """Start tracking a new student; the caller becomes the tracker."""
    return await engine.create_record(user, STUDENT_RECORDS, student_data.model_dump())


@router.patch("/{record_id}", response_model=StudentResponse)
@limiter.limit(config.WRITE_RATE_LIMIT)
async def update_student_record(
    request: Request,
    record_id: str,
    update_data: StudentUpdate,
    user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)]
):
    """
    Update a student record the caller may modify.

    Only fields present in the body change; null clears an optional field.
    """
    patch = update_data.model_dump(exclude_unset=True)
    return await engine.update_record(user, STUDENT_RECORDS, record_id, patch)
