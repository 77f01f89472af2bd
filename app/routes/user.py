"""
User Routes
Profile, payment status and registered events for the logged-in user
"""

from fastapi import APIRouter, Depends
from app.auth import get_current_user
from app.schemas.user import ProfileResponse, UpdateProfileRequest, PaymentStatusResponse
from app.services.event_service import event_service
from app.services.user_service import user_service

router = APIRouter()


@router.get("/get-profile", response_model=ProfileResponse)
async def get_profile(current_user: dict = Depends(get_current_user)):
    return await user_service.get_profile(current_user["user_id"])


@router.post("/update-profile")
async def update_profile(
    request: UpdateProfileRequest,
    current_user: dict = Depends(get_current_user)
):
    """Update name, college, year, accommodation and phone"""
    return await user_service.update_profile(current_user["user_id"], request)


@router.get("/payment-status", response_model=PaymentStatusResponse)
async def get_payment_status(current_user: dict = Depends(get_current_user)):
    payment_status = await user_service.get_payment_status(current_user["user_id"])
    return {"payment_status": payment_status}


@router.get("/events")
async def get_registered_events(current_user: dict = Depends(get_current_user)):
    """Events the user is registered for"""
    events = await event_service.get_user_events(current_user["user_id"])
    return {"total": len(events), "events": events}
