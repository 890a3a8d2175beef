import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .config import SESSION_COOKIE
from .roles import has_permission
from .security_utils import verify_session_token

logger = logging.getLogger(__name__)

# auto_error=False so the session cookie can be used instead of the header
security = HTTPBearer(auto_error=False)


class SessionClaims(BaseModel):
    """Claims carried by a verified session token"""

    sub: str
    email: str
    firstName: str = ""
    lastName: str = ""
    role: str
    avatarUrl: Optional[str] = None

    @property
    def user_id(self) -> str:
        return self.sub

    def can(self, permission: str) -> bool:
        return has_permission(self.role, permission)


async def get_current_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> SessionClaims:
    """Resolve the caller from the session cookie, falling back to a Bearer token"""
    token = request.cookies.get(SESSION_COOKIE)
    if not token and credentials:
        token = credentials.credentials

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    payload = verify_session_token(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    try:
        session = SessionClaims(**payload)
    except Exception as e:
        logger.error(f"❌ Session token missing claims: {e}")
        raise HTTPException(status_code=401, detail="Invalid token claims") from e

    logger.debug(f"✅ Session authenticated: {session.email} ({session.role})")
    return session


def require_permission(*permissions: str):
    """
    Dependency factory - the caller's role must hold at least one of the
    given permissions.
    """

    async def checker(session: SessionClaims = Depends(get_current_session)) -> SessionClaims:
        if not any(session.can(p) for p in permissions):
            logger.warning(
                f"⚠️ {session.email} ({session.role}) denied - needs one of {list(permissions)}"
            )
            raise HTTPException(status_code=403, detail="You do not have permission to do that")
        return session

    return checker


async def get_optional_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[SessionClaims]:
    """Like get_current_session, but None for anonymous callers"""
    if not request.cookies.get(SESSION_COOKIE) and not credentials:
        return None
    return await get_current_session(request, credentials)
