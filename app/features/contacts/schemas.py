"""
Pydantic schemas for evangelism contact requests and responses.
"""
from datetime import datetime
from pydantic import BaseModel, Field


class ContactBase(BaseModel):
    """Base schema for evangelism contacts."""
    contact_name: str = Field(..., min_length=1, max_length=255)
    contact_info: str | None = Field(None, max_length=255, description="Phone, email or address")
    location: str | None = Field(None, max_length=255, description="Where the person was contacted")
    notes: str | None = None
    follow_up_date: datetime | None = None


class ContactCreate(ContactBase):
    """Schema for creating a contact; the creator becomes the owner."""
    pass


class ContactUpdate(BaseModel):
    """Schema for updating a contact. Ownership cannot be changed."""
    contact_name: str | None = Field(None, min_length=1, max_length=255)
    contact_info: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    notes: str | None = None
    follow_up_date: datetime | None = None
    contacted: bool | None = None


class ContactResponse(ContactBase):
    """Schema for contact responses."""
    id: str
    contacted: bool
    created_by_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
