"""
Pydantic schemas for the dashboard summary.
"""
from pydantic import BaseModel, Field

from app.features.contacts.schemas import ContactResponse
from app.features.users.models import Role


class DashboardSummary(BaseModel):
    """Totals over the records visible to the caller."""
    role: Role
    total_contacts: int
    contacted: int
    pending_follow_ups: int
    total_students: int
    active_students: int
    recent_contacts: list[ContactResponse] = Field(default_factory=list)
