import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, field_validator
from sqlalchemy.orm import Session

from ..auth import SessionClaims, get_current_session
from ..config import SESSION_COOKIE
from ..database import get_db, require_database
from ..models import User
from ..security_utils import create_session_token, session_cookie_options, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

BLOCKED_STATUSES = ("suspended", "terminated")


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        v = v.strip().lower()
        if not v:
            raise ValueError("Email is required")
        return v


class SessionUser(BaseModel):
    id: str
    email: str
    firstName: str
    lastName: str
    role: str
    avatarUrl: str | None = None


class LoginResponse(BaseModel):
    success: bool
    user: SessionUser


def session_claims(user: User) -> dict:
    return {
        "sub": user.id,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "role": user.role,
        "avatarUrl": user.avatar_url,
    }


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    _: None = Depends(require_database),
):
    """Authenticate by email + password and set the session cookie"""
    user = db.query(User).filter(User.email == data.email).first()
    if not user:
        logger.info(f"🔒 Login failed for unknown email {data.email}")
        raise HTTPException(status_code=401, detail="Invalid email or password.")

    if user.status in BLOCKED_STATUSES:
        logger.warning(f"⚠️ Login attempt on {user.status} account {user.email}")
        raise HTTPException(
            status_code=403,
            detail="Your account has been deactivated. Please contact an administrator.",
        )

    if not verify_password(data.password, user.password_hash):
        logger.info(f"🔒 Login failed for {user.email}: bad password")
        raise HTTPException(status_code=401, detail="Invalid email or password.")

    claims = session_claims(user)
    token = create_session_token(claims)
    response.set_cookie(value=token, **session_cookie_options())
    logger.info(f"✅ {user.email} logged in as {user.role}")

    return LoginResponse(
        success=True,
        user=SessionUser(
            id=user.id,
            email=user.email,
            firstName=user.first_name,
            lastName=user.last_name,
            role=user.role,
            avatarUrl=user.avatar_url,
        ),
    )


@router.post("/logout")
async def logout(response: Response):
    """Clear the session cookie"""
    response.delete_cookie(key=SESSION_COOKIE, path="/")
    return {"success": True}


@router.get("/session")
async def get_session(session: SessionClaims = Depends(get_current_session)):
    """Return the user carried by the session cookie"""
    return {
        "user": {
            "id": session.sub,
            "email": session.email,
            "firstName": session.firstName,
            "lastName": session.lastName,
            "role": session.role,
            "avatarUrl": session.avatarUrl,
        }
    }
