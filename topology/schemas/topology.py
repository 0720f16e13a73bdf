"""Hierarchy API schemas (territories, buildings, rooms, devices)."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class LevelSaveRequest(BaseModel):
    """Request body for creating (no id) or renaming (id set) a territory, building or room."""

    id: str | None = Field(default=None, max_length=64, description="Omit to create")
    name: str = Field(..., min_length=1, max_length=255)


class DeviceSaveRequest(LevelSaveRequest):
    """Request body for saving a device. A type, when given, must be "Device"."""

    type: str | None = Field(default=None, max_length=100)


class LevelResponse(BaseModel):
    """A territory, building or room."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class PageResponse(BaseModel, Generic[T]):
    """One page of a paged listing plus totals for the whole query."""

    model_config = ConfigDict(from_attributes=True)

    data: list[T]
    total_pages: int
    total_elements: int
    has_next: bool
