"""
Authentication Module
Password hashing and JWT token management
"""

from app.auth.password import hash_password, verify_password, generate_random_password, generate_reset_code
from app.auth.dependencies import (
    AUTH_COOKIE_NAME,
    create_access_token,
    create_session_token,
    decode_access_token,
    get_current_user,
    get_admin_user
)

__all__ = [
    "hash_password",
    "verify_password",
    "generate_random_password",
    "generate_reset_code",
    "AUTH_COOKIE_NAME",
    "create_access_token",
    "create_session_token",
    "decode_access_token",
    "get_current_user",
    "get_admin_user",
]
