"""
Authentication Dependencies
JWT token handling and user authentication
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from app.config import settings

# Name of the cookie carrying the session token
AUTH_COOKIE_NAME = "authToken"

# Security scheme; a missing header is allowed because the cookie is checked too
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create JWT access token
    
    Args:
        data: Data to encode in token
        expires_delta: Token expiration time
        
    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    
    to_encode.update({"exp": expire})
    
    encoded_jwt = jwt.encode(
        to_encode, 
        settings.JWT_SECRET_KEY, 
        algorithm=settings.JWT_ALGORITHM
    )
    
    return encoded_jwt


def create_session_token(user_id: int, role: str) -> str:
    """Session token carrying the user id and role"""
    return create_access_token({"user_id": user_id, "role": role})


def decode_access_token(token: str) -> dict:
    """
    Decode JWT access token
    
    Args:
        token: JWT token string
        
    Returns:
        Decoded token payload
        
    Raises:
        HTTPException: If token is invalid
    """
    try:
        payload = jwt.decode(
            token, 
            settings.JWT_SECRET_KEY, 
            algorithms=[settings.JWT_ALGORITHM]
        )
        return payload
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> dict:
    """
    Get current authenticated user from the session cookie or bearer header
    
    Returns:
        User data from token
        
    Raises:
        HTTPException: If no token is present or it is invalid
    """
    cookie_token = request.cookies.get(AUTH_COOKIE_NAME)
    header_token = credentials.credentials if credentials is not None else None

    if not cookie_token and not header_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Kindly login to continue",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if cookie_token:
        try:
            payload = decode_access_token(cookie_token)
        except HTTPException:
            # A stale cookie must not shadow a valid bearer header
            if not header_token:
                raise
            payload = decode_access_token(header_token)
    else:
        payload = decode_access_token(header_token)

    user_id = payload.get("user_id")
    role = payload.get("role")
    
    if user_id is None or role is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token structure"
        )
    
    return {
        "user_id": int(user_id),
        "role": role
    }


async def get_admin_user(current_user: dict = Depends(get_current_user)) -> dict:
    """
    Require admin authentication
    
    Raises:
        HTTPException: If user is not an admin
    """
    if current_user["role"] != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    
    return current_user
