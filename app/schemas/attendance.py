"""
Attendance Request/Response Models
"""

from pydantic import BaseModel, Field


class MarkAttendanceRequest(BaseModel):
    """Scanned participant code and the event it was scanned at"""
    qr_code_id: str = Field(..., min_length=1)
    event_id: int = Field(..., gt=0, lt=2**31)


class MarkAttendanceResponse(BaseModel):
    success: bool
    message: str
    user_id: int
    event_id: int
