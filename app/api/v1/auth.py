"""Auth dependencies (get_current_user, require_admin) and the access profile endpoint."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.security import decode_access_token
from app.models import STATUS_ACTIVE, User
from app.schemas.auth import AccessProfileResponse, CurrentUser
from app.services.rbac import get_user_access_profile

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: resolve the acting user from a Bearer JWT.

    With AUTH_ENABLED off every request acts as the system actor. Raises 401 if
    the token is missing, invalid, or names an unknown or disabled user.
    """
    if not settings.AUTH_ENABLED:
        return CurrentUser(id=settings.SYSTEM_ACTOR_ID, is_system=True)
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")
    user = db.get(User, user_id)
    if user is None or user.status != STATUS_ACTIVE:
        raise _unauthorized("User not found")
    return CurrentUser.model_validate(user)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require the admin role (through an active assignment). Raises 403 otherwise."""
    if current_user.is_system:
        return current_user
    profile = get_user_access_profile(db, current_user.id)
    if settings.ADMIN_ROLE_NAME not in profile.roles:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


@router.get("/me", response_model=AccessProfileResponse)
def read_access_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> AccessProfileResponse:
    """Active roles of the current user and the permissions they grant."""
    profile = get_user_access_profile(db, current_user.id)
    return AccessProfileResponse(
        user_id=current_user.id,
        roles=list(profile.roles),
        permissions=list(profile.permissions),
    )
