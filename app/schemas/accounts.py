import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UnitSystem = Literal["kg", "lb"]


class AccountSummary(BaseModel):
    id: int
    email: Optional[str] = None
    phone: Optional[str] = None
    name: str
    unit_system: UnitSystem
    timezone: str
    needs_onboarding: bool


class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: Optional[str] = None
    phone: Optional[str] = None
    name: str
    unit_system: UnitSystem
    timezone: str
    birth_date: Optional[dt.date] = None
    gender: Optional[str] = None
    created_at: dt.datetime
    last_login: Optional[dt.datetime] = None


class ProfileUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    unit_system: UnitSystem
    timezone: Optional[str] = Field(default=None, max_length=64)
    birth_date: Optional[dt.date] = None
    gender: Optional[str] = Field(default=None, max_length=32)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Name is required")
        return cleaned

    @field_validator("timezone", "gender")
    @classmethod
    def normalize_optional_text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        cleaned = value.strip()
        return cleaned or None
