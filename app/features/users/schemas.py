"""
Pydantic schemas for user-related requests and responses.
"""
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, model_validator

from app.features.users.models import Role


class UserBase(BaseModel):
    """Base user schema with common fields."""
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)


class UserCreate(UserBase):
    """
    Schema for creating a user together with their role profile.

    Region leaders reference a region, group leaders and members a group,
    directors neither.
    """
    role: Role
    region_id: str | None = Field(None, description="Region led by a REGION_LEADER")
    group_id: str | None = Field(None, description="Group of a GROUP_LEADER or GROUP_MEMBER")

    @model_validator(mode="after")
    def check_profile_matches_role(self) -> "UserCreate":
        if self.role == Role.DIRECTOR and (self.region_id or self.group_id):
            raise ValueError("Directors are not attached to a region or group")
        if self.role == Role.REGION_LEADER and (not self.region_id or self.group_id):
            raise ValueError("Region leaders require region_id and no group_id")
        if self.role in (Role.GROUP_LEADER, Role.GROUP_MEMBER) and (not self.group_id or self.region_id):
            raise ValueError("Group leaders and members require group_id and no region_id")
        return self


class UserResponse(UserBase):
    """Schema for user responses."""
    id: str
    role: Role
    is_active: bool
    region_id: str | None = None
    group_id: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserPublic(BaseModel):
    """Public user information (limited fields)."""
    id: str
    name: str
    role: Role

    model_config = {"from_attributes": True}
