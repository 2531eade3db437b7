from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


class MovementCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    category: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Name is required")
        return cleaned

    @field_validator("category", "notes")
    @classmethod
    def normalize_optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_optional(value)


class MovementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[int] = None
    name: str
    category: str
    is_custom: bool
    notes: Optional[str] = None
    created_at: datetime


class WodCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    format: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1)
    prescribed_loads: Optional[str] = Field(default=None, max_length=255)
    tags: Optional[str] = Field(default=None, max_length=255)

    @field_validator("name", "format", "description")
    @classmethod
    def normalize_required_text(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("This field is required")
        return cleaned

    @field_validator("prescribed_loads", "tags")
    @classmethod
    def normalize_optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_optional(value)


class WodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: Optional[int] = None
    name: str
    format: str
    description: str
    prescribed_loads: Optional[str] = None
    tags: Optional[str] = None
    is_custom: bool
    created_at: datetime


class SearchResponse(BaseModel):
    movements: Optional[list[MovementResponse]] = None
    wods: Optional[list[WodResponse]] = None
