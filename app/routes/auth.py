"""
Authentication Routes
Signup, login, logout and password reset endpoints
"""

from fastapi import APIRouter, Depends, Response, status
from app.auth import AUTH_COOKIE_NAME, get_current_user
from app.config import settings
from app.schemas.user import (
    SignupRequest,
    SignupResponse,
    LoginRequest,
    LoginResponse,
    ForgotPasswordRequest,
    ResetPasswordRequest
)
from app.services.user_service import user_service

router = APIRouter()


@router.post("/register", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def register(request: SignupRequest):
    """
    Create a participant or admin account
    
    - **phone**: exactly 10 digits
    - **transaction_id**: exactly 12 digits
    - **admin_key**: required when role is admin
    
    Returns: Session token and the participant's display code
    """
    return await user_service.signup(request)


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest, response: Response):
    """
    Verify credentials, return a session token and set it as a cookie
    """
    result = await user_service.authenticate(credentials.email, credentials.password)
    
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=result["token"],
        httponly=True,
        secure=settings.APP_ENV == "production",
        samesite="strict",
        max_age=settings.JWT_EXPIRATION_HOURS * 3600,
        path="/"
    )
    return result


@router.post("/logout")
async def logout(response: Response):
    """
    Clear the session cookie
    """
    response.delete_cookie(AUTH_COOKIE_NAME, path="/")
    return {
        "status": "success",
        "message": "Successfully logged out"
    }


@router.get("/me")
async def get_current_user_info(current_user: dict = Depends(get_current_user)):
    """
    Check the session and return its contents
    """
    return {
        "message": "Authenticated",
        "user": current_user
    }


@router.post("/forgot-password")
async def forgot_password(request: ForgotPasswordRequest):
    """
    Issue a reset token (phone number + emailed code), valid for one hour
    """
    return await user_service.forgot_password(request.email)


@router.post("/reset-password")
async def reset_password(request: ResetPasswordRequest):
    return await user_service.reset_password(request.email, request.reset_token, request.new_password)
