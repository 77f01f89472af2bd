"""
Pydantic schemas for request/response validation
"""

from app.schemas.user import (
    SignupRequest,
    SignupResponse,
    LoginRequest,
    LoginResponse,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    UpdateProfileRequest,
    ProfileResponse,
    AdminProfileResponse,
    PaymentStatusResponse
)
from app.schemas.event import (
    EventResponse,
    EventRegistrationRequest,
    EventRegistrationResponse,
    SlotsTakenResponse
)
from app.schemas.attendance import MarkAttendanceRequest, MarkAttendanceResponse

__all__ = [
    "SignupRequest",
    "SignupResponse",
    "LoginRequest",
    "LoginResponse",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "UpdateProfileRequest",
    "ProfileResponse",
    "AdminProfileResponse",
    "PaymentStatusResponse",
    "EventResponse",
    "EventRegistrationRequest",
    "EventRegistrationResponse",
    "SlotsTakenResponse",
    "MarkAttendanceRequest",
    "MarkAttendanceResponse",
]
