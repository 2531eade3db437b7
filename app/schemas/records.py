import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.accounts import UnitSystem


def _strip_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


class PrRecordUpdate(BaseModel):
    date: dt.date
    rep_scheme: str = Field(min_length=1, max_length=50)
    weight: Optional[float] = Field(default=None, ge=0)
    reps: Optional[int] = Field(default=None, ge=0)
    note: Optional[str] = None
    media_link: Optional[str] = Field(default=None, max_length=500)
    unit: UnitSystem
    is_pr: bool = False

    @field_validator("rep_scheme")
    @classmethod
    def normalize_rep_scheme(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Rep scheme is required")
        return cleaned

    @field_validator("note", "media_link")
    @classmethod
    def normalize_optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_optional(value)


class PrRecordCreate(PrRecordUpdate):
    movement_id: int


class PrRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    movement_id: int
    movement_name: Optional[str] = None
    category: Optional[str] = None
    date: dt.date
    rep_scheme: str
    weight: Optional[float] = None
    reps: Optional[int] = None
    est_1rm: Optional[float] = None
    note: Optional[str] = None
    media_link: Optional[str] = None
    unit: UnitSystem
    is_pr: bool
    created_at: dt.datetime


class WodResultUpdate(BaseModel):
    date: dt.date
    time_sec: Optional[int] = Field(default=None, ge=0)
    rounds: Optional[int] = Field(default=None, ge=0)
    extra_reps: Optional[int] = Field(default=None, ge=0)
    loads_used: Optional[str] = Field(default=None, max_length=255)
    rx_scaled: Literal["Rx", "Scaled"] = "Rx"
    note: Optional[str] = None
    media_link: Optional[str] = Field(default=None, max_length=500)

    @field_validator("loads_used", "note", "media_link")
    @classmethod
    def normalize_optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_optional(value)


class WodResultCreate(WodResultUpdate):
    wod_id: int
    format: Optional[str] = Field(default=None, max_length=50)


class WodResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    wod_id: int
    wod_name: Optional[str] = None
    wod_format: Optional[str] = None
    date: dt.date
    format: str
    time_sec: Optional[int] = None
    rounds: Optional[int] = None
    extra_reps: Optional[int] = None
    loads_used: Optional[str] = None
    rx_scaled: str
    note: Optional[str] = None
    media_link: Optional[str] = None
    created_at: dt.datetime


class CreatedResponse(BaseModel):
    id: int
    message: str


class PrRecordCreated(CreatedResponse):
    est_1rm: Optional[float] = None
