from __future__ import annotations
from datetime import date as dt_date
from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator

# Required fields default to empty so the service can answer with its own
# "missing information" error; pydantic only rejects wrong shapes.
class OrderIn(BaseModel):
    student_name: str = Field("", max_length=200)
    room_number: str = Field("", max_length=50)
    phone_number: Optional[str] = Field(None, max_length=20)
    laundry_type: str = "normal"
    preferred_date: Optional[dt_date] = None
    preferred_time: str = Field("", max_length=11)
    slot_id: Optional[str] = None
    special_instructions: Optional[str] = Field(None, max_length=2000)
    items: Dict[str, int] = Field(default_factory=dict)

class StatusIn(BaseModel):
    status: str
    note: Optional[str] = Field(None, max_length=2000)
    feedback: Optional[str] = Field(None, max_length=2000)

    @field_validator("status")
    @classmethod
    def _lower(cls, v: str):
        return v.strip().lower()
