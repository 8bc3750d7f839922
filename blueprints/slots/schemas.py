from __future__ import annotations
from datetime import date as dt_date
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .validators import ensure_time_range

class TimeSlotIn(BaseModel):
    date: dt_date
    time_range: str = Field(min_length=11, max_length=11)
    max_capacity: int = Field(ge=0, le=1000)
    is_active: bool = True

    @field_validator("time_range")
    @classmethod
    def check_range(cls, v: str):
        ensure_time_range(v)
        return v

class TimeSlotPatch(BaseModel):
    max_capacity: Optional[int] = Field(None, ge=0, le=1000)
    is_active: Optional[bool] = None
