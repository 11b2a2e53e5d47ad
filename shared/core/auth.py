import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy.orm import Session
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken
from shared.core.database import get_auth_db as get_db

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    payload = data.copy()
    minutes = expires_minutes or settings.JWT_EXPIRE_MINUTES
    payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes)

    if "name" not in payload and "full_name" in payload:
        payload["name"] = payload["full_name"]

    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        user = UserToken(**payload)
        UUID(user.user_id)
    except (JWTError, ValidationError, ValueError):
        logger.warning("Rejected invalid or expired token")
        return error_response(
            message="Invalid or expired token",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    return user


def _bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    if credentials is None or not credentials.credentials:
        return error_response(
            message="Access denied. No token provided.",
            status_code=AppStatusCode.AUTHENTICATION_TOKEN_MISSING,
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    return credentials.credentials


def _load_user(db: Session, user_data: UserToken) -> Users:
    user = db.query(Users).filter(
        Users.id == UUID(user_data.user_id),
        Users.is_deleted == False
    ).first()

    if not user:
        return error_response(
            message="Invalid token. User not found.",
            status_code=AppStatusCode.AUTHENTICATION_USER_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    return user


def _refresh_claims(user_data: UserToken, user: Users) -> UserToken:
    # The stored role wins over whatever the token was minted with
    user_data.role = user.role
    user_data.email = user.email
    user_data.name = user.full_name
    user_data.is_verified = user.is_verified
    return user_data


def validate_token(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        db: Session = Depends(get_db)
) -> UserToken:
    user_data = verify_token(_bearer_token(credentials))
    user = _load_user(db, user_data)
    return _refresh_claims(user_data, user)


def validate_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    user_data = verify_token(_bearer_token(credentials))
    user = _load_user(db, user_data)

    if not user.is_verified:
        return error_response(
            message="Please verify your email to access this resource.",
            status_code=AppStatusCode.AUTHENTICATION_USER_NOT_VERIFIED,
            http_status=status.HTTP_403_FORBIDDEN
        )

    return _refresh_claims(user_data, user)


def require_roles(*roles: UserRole):
    allowed = {UserRole(r).value for r in roles}
    label = "/".join(r.capitalize() for r in sorted(allowed))

    def checker(current_user: UserToken = Depends(validate_current_token)) -> UserToken:
        if current_user.role not in allowed:
            logger.warning("User %s with role '%s' denied, requires %s",
                           current_user.user_id, current_user.role, label)
            return error_response(
                message=f"Access denied. {label} role required.",
                status_code=AppStatusCode.AUTHENTICATION_UNAUTHORIZED_ACCESS,
                http_status=status.HTTP_403_FORBIDDEN
            )
        return current_user

    return checker


allow_admin = require_roles(UserRole.ADMIN)
allow_staff = require_roles(UserRole.ADMIN, UserRole.STAFF)
