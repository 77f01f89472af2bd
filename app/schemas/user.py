"""
User Request/Response Models
Signup, login, password reset and profile
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class SignupRequest(BaseModel):
    """Request to create an account"""
    name: str = Field(..., min_length=1, max_length=100)
    college: str = Field(..., min_length=1, max_length=200)
    department: Optional[str] = Field(default=None, max_length=100)
    reg_no: Optional[str] = Field(default=None, max_length=50)
    year: Optional[str] = Field(default=None, max_length=10)
    phone: str = Field(..., description="10 digit phone number")
    email: EmailStr
    password: str = Field(..., min_length=1)
    accommodation: Optional[str] = Field(default=None, max_length=20)
    role: str = Field(default="user", pattern="^(user|admin)$")
    admin_key: Optional[str] = Field(default=None, description="Required when role is admin")
    transaction_id: str = Field(..., description="12 digit payment transaction ID")
    pass_type: Optional[str] = Field(default=None, description="'single' allows one event registration")
    
    class Config:
        example = {
            "name": "Asha Raman",
            "college": "City Engineering College",
            "department": "CSE",
            "reg_no": "21CS042",
            "year": "3",
            "phone": "9876543210",
            "email": "asha@example.com",
            "password": "SecurePass123",
            "accommodation": "no",
            "transaction_id": "123456789012",
            "pass_type": "single"
        }


class SignupResponse(BaseModel):
    message: str
    token: str
    qr_code_id: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    message: str
    token: str
    role: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    email: EmailStr
    reset_token: str = Field(..., min_length=1)
    new_password: str


class UpdateProfileRequest(BaseModel):
    """All fields are required"""
    name: str = Field(..., min_length=1, max_length=100)
    college: str = Field(..., min_length=1, max_length=200)
    year: str = Field(..., min_length=1, max_length=10)
    accommodation: str = Field(..., min_length=1, max_length=20)
    phone: str


class ProfileResponse(BaseModel):
    """Profile as shown to its owner"""
    id: int
    name: str
    college: Optional[str]
    year: Optional[str]
    accommodation: Optional[str]
    role: str
    phone: Optional[str]
    qr_code_id: Optional[str]


class AdminProfileResponse(BaseModel):
    name: str
    email: str
    college: Optional[str]


class PaymentStatusResponse(BaseModel):
    payment_status: str
