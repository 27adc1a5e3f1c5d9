"""
Pydantic schemas for student record requests and responses.
"""
from datetime import datetime
from pydantic import BaseModel, Field


class StudentBase(BaseModel):
    """Base schema for student records."""
    student_name: str = Field(..., min_length=1, max_length=255)
    last_lesson: str | None = Field(None, max_length=255, description="What was covered in the last lesson")
    last_lesson_date: datetime | None = None
    next_lesson_date: datetime | None = None
    notes: str | None = None


class StudentCreate(StudentBase):
    """Schema for creating a student record; the creator becomes the tracker."""
    pass


class StudentUpdate(BaseModel):
    """Schema for updating a student record. The tracker cannot be changed."""
    student_name: str | None = Field(None, min_length=1, max_length=255)
    last_lesson: str | None = Field(None, max_length=255)
    last_lesson_date: datetime | None = None
    next_lesson_date: datetime | None = None
    notes: str | None = None
    is_active: bool | None = None


class StudentResponse(StudentBase):
    """Schema for student record responses."""
    id: str
    is_active: bool
    tracker_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
