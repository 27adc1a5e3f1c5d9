"""
Pydantic schemas for regions and groups.
"""
from datetime import datetime
from pydantic import BaseModel, Field


class GroupBase(BaseModel):
    """Base group schema."""
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)


class GroupCreate(GroupBase):
    """Schema for creating a group; the region comes from the URL."""
    pass


class GroupResponse(GroupBase):
    """Schema for group responses."""
    id: str
    region_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RegionBase(BaseModel):
    """Base region schema."""
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)


class RegionCreate(RegionBase):
    """Schema for creating a region."""
    pass


class RegionResponse(RegionBase):
    """Schema for region responses, including the region's groups."""
    id: str
    created_at: datetime
    updated_at: datetime
    groups: list[GroupResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}
