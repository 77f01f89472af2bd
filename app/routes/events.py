"""
Event Routes
Event listing and team registration
"""

from typing import List
from fastapi import APIRouter, Depends, status
from app.auth import get_current_user
from app.schemas.event import (
    EventResponse,
    EventRegistrationRequest,
    EventRegistrationResponse,
    SlotsTakenResponse
)
from app.services.event_service import event_service
from app.services.registration_service import registration_service

router = APIRouter()


@router.get("", response_model=List[EventResponse])
async def list_events():
    """List all events"""
    return await event_service.list_events()


@router.get("/slots-taken/{event_id}", response_model=SlotsTakenResponse)
async def get_slots_taken(event_id: int):
    """Number of teams already formed for an event"""
    slots = await event_service.get_slots_taken(event_id)
    return {"event_id": event_id, "slots_taken": slots}


@router.post("/register", response_model=EventRegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_for_event(
    request: EventRegistrationRequest,
    current_user: dict = Depends(get_current_user)
):
    """
    Register the logged-in user and their teammates for an event
    
    - **eventId**: Event to register for
    - **teammates**: Teammate user IDs or display codes; "0" marks an empty slot
    
    Event 1 takes at most one teammate, events 6-9 need one to three,
    every other event is individual.
    """
    return await registration_service.register_team(
        current_user["user_id"],
        request.event_id,
        request.teammates
    )
