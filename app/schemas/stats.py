from typing import Optional

from pydantic import BaseModel, Field


class MovementStatsResponse(BaseModel):
    movement_id: int
    best_1rm: float
    first_1rm: float
    last_1rm: float
    delta_percent: float
    total_records: int


class WodStatsResponse(BaseModel):
    wod_id: int
    format: str
    total_attempts: int
    best_time: Optional[int] = None
    first_time: Optional[int] = None
    last_time: Optional[int] = None
    best_score: Optional[int] = None
    first_score: Optional[int] = None
    last_score: Optional[int] = None
    best_rounds: Optional[int] = None
    best_extra_reps: Optional[int] = None


class PercentRow(BaseModel):
    percent: int
    weight: float


class PercentTableResponse(BaseModel):
    movement_id: int
    base_1rm: float
    table: list[PercentRow] = Field(default_factory=list)
