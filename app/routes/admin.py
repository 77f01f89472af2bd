"""
Admin Routes
Attendance marking and attendance reports
"""

from fastapi import APIRouter, Depends
from app.auth import get_admin_user
from app.schemas.attendance import MarkAttendanceRequest, MarkAttendanceResponse
from app.schemas.user import AdminProfileResponse
from app.services.attendance_service import attendance_service
from app.services.user_service import user_service

router = APIRouter()


@router.post("/mark-attendance", response_model=MarkAttendanceResponse)
async def mark_attendance(
    request: MarkAttendanceRequest,
    current_admin: dict = Depends(get_admin_user)
):
    """
    Mark a participant present by their scanned code (Admin only)
    
    Events 1-9 require a prior registration; other events register the
    participant on the spot.
    """
    return await attendance_service.mark_attendance(
        request.qr_code_id,
        request.event_id,
        current_admin["user_id"]
    )


@router.get("/overall-attendance")
async def get_overall_attendance(current_admin: dict = Depends(get_admin_user)):
    """All attendance records, newest first (Admin only)"""
    return await attendance_service.get_overall_attendance()


@router.get("/attendance")
async def get_my_attendance_records(current_admin: dict = Depends(get_admin_user)):
    """Attendance records marked by the calling admin"""
    records = await attendance_service.get_admin_attendance(current_admin["user_id"])
    return {"success": True, "data": records}


@router.get("/profile", response_model=AdminProfileResponse)
async def get_admin_profile(current_admin: dict = Depends(get_admin_user)):
    return await user_service.get_admin_profile(current_admin["user_id"])
