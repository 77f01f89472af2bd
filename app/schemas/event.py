"""
Event Request/Response Models
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class EventResponse(BaseModel):
    """Event with date as DD-MM-YYYY and time as HH:MM:SS"""
    id: int
    name: str
    date: Optional[str]
    time: Optional[str]
    venue: Optional[str]


class EventRegistrationRequest(BaseModel):
    """Team registration for an event"""
    event_id: int = Field(..., alias="eventId", gt=0, lt=2**31)
    teammates: List[str] = Field(default_factory=list, description="Teammate IDs or codes; \"0\" marks an empty slot")
    
    class Config:
        populate_by_name = True
        example = {
            "eventId": 6,
            "teammates": ["PSM_12", "PSM_15", "0"]
        }


class EventRegistrationResponse(BaseModel):
    success: bool
    message: str
    event_id: int
    team: str = Field(..., description="Comma separated member user IDs, registering user first")


class SlotsTakenResponse(BaseModel):
    event_id: int
    slots_taken: int
