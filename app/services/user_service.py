"""
User Service
Business logic for accounts, password reset and profiles
"""

import logging
import re
import time
from functools import partial
from app.config import settings
from app.database import database, INTEGRITY_ERRORS
from app.auth import hash_password, verify_password, generate_reset_code, create_session_token
from app.schemas.user import SignupRequest, UpdateProfileRequest
from app.services.email_service import email_service
from app.services.notification_queue import notification_queue
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

PHONE_PATTERN = re.compile(r"[0-9]{10}")
TRANSACTION_ID_PATTERN = re.compile(r"[0-9]{12}")
MIN_PASSWORD_LENGTH = 8


def _validate_phone(phone: str) -> None:
    if not PHONE_PATTERN.fullmatch(phone or ""):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid phone number! Must be 10 digits."
        )


def qr_code_for(user_id: int) -> str:
    """Display code printed on a participant's pass"""
    return f"{settings.QR_CODE_PREFIX}{user_id}"


def _now_ms() -> int:
    return int(time.time() * 1000)


class UserService:
    """Service for user account operations"""

    @staticmethod
    async def signup(data: SignupRequest) -> dict:
        """
        Create a user account

        Returns: Session token and the assigned display code
        """

        _validate_phone(data.phone)

        if data.role == "admin" and (not settings.ADMIN_KEY or data.admin_key != settings.ADMIN_KEY):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Invalid admin key!"
            )

        if not TRANSACTION_ID_PATTERN.fullmatch(data.transaction_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid transaction ID!"
            )

        existing = await database.fetch_one(
            "SELECT id FROM users WHERE email = :email",
            {"email": data.email}
        )
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email already exists."
            )

        password_hash = hash_password(data.password)

        try:
            async with database.transaction():
                await database.execute(
                    """
                    INSERT INTO users
                    (name, college, department, reg_no, year, phone, email, password_hash,
                     accommodation, role, transaction_id, pass_type, payment_status)
                    VALUES (:name, :college, :department, :reg_no, :year, :phone, :email, :password_hash,
                            :accommodation, :role, :transaction_id, :pass_type, 'pending')
                    """,
                    {
                        "name": data.name,
                        "college": data.college,
                        "department": data.department,
                        "reg_no": data.reg_no,
                        "year": data.year,
                        "phone": data.phone,
                        "email": data.email,
                        "password_hash": password_hash,
                        "accommodation": data.accommodation,
                        "role": data.role,
                        "transaction_id": data.transaction_id,
                        "pass_type": data.pass_type
                    }
                )
                user_id = await database.fetch_val(
                    "SELECT id FROM users WHERE email = :email",
                    {"email": data.email}
                )
                qr_code_id = qr_code_for(user_id)
                await database.execute(
                    "UPDATE users SET qr_code_id = :qr_code_id WHERE id = :user_id",
                    {"qr_code_id": qr_code_id, "user_id": user_id}
                )
        except INTEGRITY_ERRORS:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="User with this email already exists."
            )

        logger.info("User %s (%s) registered with code %s", data.name, data.email, qr_code_id)

        return {
            "message": f"{'Admin' if data.role == 'admin' else 'User'} registered successfully!",
            "token": create_session_token(user_id, data.role),
            "qr_code_id": qr_code_id
        }

    @staticmethod
    async def authenticate(email: str, password: str) -> dict:
        """Verify credentials and issue a session token"""

        user = await database.fetch_one(
            "SELECT id, email, password_hash, role FROM users WHERE email = :email",
            {"email": email}
        )

        if not user or not verify_password(password, user["password_hash"]):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials"
            )

        return {
            "message": "Logged in successfully",
            "token": create_session_token(user["id"], user["role"]),
            "role": user["role"]
        }

    @staticmethod
    async def forgot_password(email: str) -> dict:
        """
        Issue a password reset token

        The token is the user's phone number followed by a random code.
        Only the random code is emailed; it expires after
        RESET_TOKEN_TTL_MINUTES.
        """

        user = await database.fetch_one(
            "SELECT id, name, email, phone FROM users WHERE email = :email",
            {"email": email}
        )
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No user found with this email."
            )

        if not user["phone"]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Phone number not found for this account."
            )

        reset_code = generate_reset_code()
        expires = _now_ms() + settings.RESET_TOKEN_TTL_MINUTES * 60 * 1000

        await database.execute(
            "UPDATE users SET reset_token = :token, reset_expires = :expires WHERE id = :user_id",
            {"token": f"{user['phone']}{reset_code}", "expires": expires, "user_id": user["id"]}
        )
        logger.info("Password reset token issued for %s", email)

        notification_queue.enqueue(
            partial(email_service.send_password_reset, name=user["name"], email=user["email"], reset_code=reset_code),
            description=f"password reset to {user['email']}"
        )

        return {
            "success": True,
            "message": "Reset token generated successfully!",
            "note": "Your reset token = your registered phone number + the code sent to your email.",
            "expires_in_minutes": settings.RESET_TOKEN_TTL_MINUTES
        }

    @staticmethod
    async def reset_password(email: str, reset_token: str, new_password: str) -> dict:
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        user = await database.fetch_one(
            """
            SELECT id FROM users
            WHERE email = :email AND reset_token = :token AND reset_expires > :now
            """,
            {"email": email, "token": reset_token, "now": _now_ms()}
        )
        if not user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid token, email, or token has expired."
            )

        await database.execute(
            """
            UPDATE users
            SET password_hash = :password_hash, reset_token = NULL, reset_expires = NULL
            WHERE id = :user_id
            """,
            {"password_hash": hash_password(new_password), "user_id": user["id"]}
        )
        logger.info("Password reset completed for %s", email)

        return {"success": True, "message": "Password reset successful!"}

    @staticmethod
    async def get_profile(user_id: int) -> dict:
        """Get a user's profile, assigning a display code if one is missing"""

        user = await database.fetch_one(
            """
            SELECT id, name, college, year, accommodation, role, phone, qr_code_id
            FROM users WHERE id = :user_id
            """,
            {"user_id": user_id}
        )
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found!"
            )

        profile = dict(user)
        if not profile["qr_code_id"]:
            profile["qr_code_id"] = qr_code_for(profile["id"])
            await database.execute(
                "UPDATE users SET qr_code_id = :qr_code_id WHERE id = :user_id",
                {"qr_code_id": profile["qr_code_id"], "user_id": user_id}
            )
            logger.info("Assigned code %s to user %s", profile["qr_code_id"], user_id)

        return profile

    @staticmethod
    async def update_profile(user_id: int, data: UpdateProfileRequest) -> dict:
        _validate_phone(data.phone)

        user = await database.fetch_one(
            "SELECT id FROM users WHERE id = :user_id",
            {"user_id": user_id}
        )
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found!"
            )

        await database.execute(
            """
            UPDATE users
            SET name = :name, college = :college, year = :year, accommodation = :accommodation, phone = :phone
            WHERE id = :user_id
            """,
            {
                "name": data.name,
                "college": data.college,
                "year": data.year,
                "accommodation": data.accommodation,
                "phone": data.phone,
                "user_id": user_id
            }
        )

        return {"message": "Profile updated successfully"}

    @staticmethod
    async def get_payment_status(user_id: int) -> str:
        user = await database.fetch_one(
            "SELECT payment_status FROM users WHERE id = :user_id",
            {"user_id": user_id}
        )
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found!"
            )
        return user["payment_status"] or "pending"

    @staticmethod
    async def get_admin_profile(admin_id: int) -> dict:
        admin = await database.fetch_one(
            "SELECT name, email, college FROM users WHERE id = :admin_id AND role = 'admin'",
            {"admin_id": admin_id}
        )
        if not admin:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Admin not found!"
            )
        return dict(admin)


# Create singleton instance
user_service = UserService()
