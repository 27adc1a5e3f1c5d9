"""
Dashboard route: counts over the caller's visible contacts and students.
"""
from typing import Annotated
from fastapi import APIRouter, Depends

from app.features.authorization.dependencies import get_authorization_engine
from app.features.authorization.engine import AuthorizationEngine
from app.features.contacts.models import CONTACT_RECORDS
from app.features.contacts.schemas import ContactResponse
from app.features.dashboard.schemas import DashboardSummary
from app.features.students.models import STUDENT_RECORDS
from app.features.users.dependencies import get_current_user
from app.features.users.models import User


RECENT_CONTACTS = 5

router = APIRouter(tags=["dashboard"])


@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)]
):
    """Summarize the contacts and students inside the caller's scope."""
    contacts = await engine.visible_records(user, CONTACT_RECORDS)
    students = await engine.visible_records(user, STUDENT_RECORDS)

    contacted = sum(1 for contact in contacts if contact.contacted)
    return DashboardSummary(
        role=user.role,
        total_contacts=len(contacts),
        contacted=contacted,
        pending_follow_ups=len(contacts) - contacted,
        total_students=len(students),
        active_students=sum(1 for student in students if student.is_active),
        recent_contacts=[ContactResponse.model_validate(c) for c in contacts[:RECENT_CONTACTS]],
    )
