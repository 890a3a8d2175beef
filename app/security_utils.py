"""
Security utilities - password hashing and session tokens
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import ENVIRONMENT, SECRET_KEY, SESSION_COOKIE, TOKEN_MAX_AGE

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
MIN_PASSWORD_LENGTH = 8

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


def validate_password_strength(password: str) -> str:
    """Raise ValueError for passwords that fail the minimum policy"""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if password.isalpha() or password.isdigit():
        raise ValueError("Password must mix letters with numbers or symbols")
    return password


# ============================================================================
# SESSION TOKENS
# ============================================================================


def create_session_token(claims: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session JWT

    Args:
        claims: Session claims (sub, email, firstName, lastName, role, avatarUrl)
        expires_delta: Token lifetime (default TOKEN_MAX_AGE)
    """
    now = datetime.now(timezone.utc)
    to_encode = claims.copy()
    to_encode.update({"iat": now, "exp": now + (expires_delta or timedelta(seconds=TOKEN_MAX_AGE))})
    return jose_jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_session_token(token: str) -> Optional[dict[str, Any]]:
    """
    Verify and decode a session JWT

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jose_jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


def session_cookie_options(max_age: int = TOKEN_MAX_AGE) -> dict[str, Any]:
    """Keyword arguments for Response.set_cookie on the session cookie"""
    return {
        "key": SESSION_COOKIE,
        "httponly": True,
        "secure": ENVIRONMENT == "production",
        "samesite": "lax",
        "max_age": max_age,
        "path": "/",
    }
