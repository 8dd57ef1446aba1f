from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ResizeRequest(BaseModel):
    total_slots: Optional[int] = Field(default=None, ge=0)


class AcquireRequest(BaseModel):
    key: str = Field(..., min_length=1)


class AcquireResponse(BaseModel):
    slot: int
    key: str


class SlotResponse(BaseModel):
    slot: int
    key: Optional[str]
    last_used: Optional[datetime]


class SlotPoolResponse(BaseModel):
    capacity: int
    used: int
    available: int
    slots: List[SlotResponse]


class RosterEntryResponse(BaseModel):
    slot: int
    name: str
    avatar: str


class RosterResponse(BaseModel):
    used: int
    available: int
    characters: List[RosterEntryResponse]
