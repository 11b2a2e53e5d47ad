import logging
from uuid import UUID
from fastapi import status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.config import settings
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from shared.utils.search import LIKE_ESCAPE, contains_pattern
from ..schemas.userschema import TokenOut, UserCreate, UserOut, UserQueryParams, UserUpdate

logger = logging.getLogger(__name__)


def _is_admin(current_user: UserToken) -> bool:
    return current_user.role == UserRole.ADMIN.value


def get_user_by_id(db: Session, user_id: UUID) -> Users:
    user = db.query(Users).filter(
        Users.id == user_id,
        Users.is_deleted == False
    ).first()

    if not user:
        return error_response(
            message="User not found",
            status_code=AppStatusCode.RESOURCE_NOT_FOUND,
            http_status=status.HTTP_404_NOT_FOUND
        )
    return user


def get_user_by_email(db: Session, email: str):
    return db.query(Users).filter(
        func.lower(Users.email) == email.strip().lower(),
        Users.is_deleted == False
    ).first()


def get_profile(db: Session, current_user: UserToken) -> UserOut:
    return UserOut.model_validate(get_user_by_id(db, UUID(current_user.user_id)))


def list_users(db: Session, params: UserQueryParams):
    query = db.query(Users).filter(Users.is_deleted == False)

    if params.search:
        term = contains_pattern(params.search.strip().lower())
        query = query.filter(or_(
            func.lower(Users.email).like(term, escape=LIKE_ESCAPE),
            func.lower(Users.full_name).like(term, escape=LIKE_ESCAPE)
        ))

    if params.role:
        query = query.filter(Users.role == params.role.value)

    total = query.count()
    users = query.order_by(Users.created_at.desc(), Users.email).offset(
        params.skip).limit(params.limit).all()

    return {"users": [UserOut.model_validate(u) for u in users], "total": total}


def create_user(db: Session, user: UserCreate) -> UserOut:
    if get_user_by_email(db, user.email):
        return error_response(
            message="Email already exists",
            status_code=AppStatusCode.USER_EMAIL_IS_UNIQUE,
            http_status=status.HTTP_400_BAD_REQUEST
        )

    # The email column is unique, so a soft-deleted account is restored instead
    user_instance = db.query(Users).filter(
        func.lower(Users.email) == user.email).first()
    if user_instance:
        user_instance.is_deleted = False
    else:
        user_instance = Users(email=user.email)
        db.add(user_instance)

    user_instance.full_name = user.full_name or ""
    user_instance.role = user.role.value
    user_instance.is_verified = user.is_verified
    db.commit()
    db.refresh(user_instance)

    logger.info("Created user %s with role %s",
                user_instance.email, user_instance.role)
    return UserOut.model_validate(user_instance)


def get_user(db: Session, user_id: UUID, current_user: UserToken) -> UserOut:
    # Users can only access their own profile unless they're admin
    if str(user_id) != current_user.user_id and not _is_admin(current_user):
        return error_response(
            message="Access denied",
            status_code=AppStatusCode.AUTHENTICATION_UNAUTHORIZED_ACCESS,
            http_status=status.HTTP_403_FORBIDDEN
        )
    return UserOut.model_validate(get_user_by_id(db, user_id))


def update_user(db: Session, user_id: UUID, data: UserUpdate, current_user: UserToken) -> UserOut:
    is_admin = _is_admin(current_user)
    if str(user_id) != current_user.user_id and not is_admin:
        return error_response(
            message="Access denied",
            status_code=AppStatusCode.AUTHENTICATION_UNAUTHORIZED_ACCESS,
            http_status=status.HTTP_403_FORBIDDEN
        )

    changes = data.model_dump(exclude_unset=True)
    if not is_admin and changes.keys() & {"role", "is_verified"}:
        return error_response(
            message="Access denied. Only admins can change role or verification status.",
            status_code=AppStatusCode.AUTHENTICATION_UNAUTHORIZED_ACCESS,
            http_status=status.HTTP_403_FORBIDDEN
        )

    user = get_user_by_id(db, user_id)
    for key, value in changes.items():
        if value is None:
            continue
        if key == "role":
            value = UserRole(value).value
        setattr(user, key, value)

    db.commit()
    db.refresh(user)

    logger.info("Updated user %s (%s)", user.email, ", ".join(changes) or "no changes")
    return UserOut.model_validate(user)


def delete_user(db: Session, user_id: UUID, current_user: UserToken) -> UserOut:
    if str(user_id) == current_user.user_id:
        return error_response(
            message="You cannot delete your own account",
            status_code=AppStatusCode.INVALID_INPUT,
            http_status=status.HTTP_400_BAD_REQUEST
        )

    user = get_user_by_id(db, user_id)
    user.is_deleted = True
    db.commit()
    db.refresh(user)

    logger.info("Soft deleted user %s", user.email)
    return UserOut.model_validate(user)


def issue_token(db: Session, user_id: UUID) -> TokenOut:
    user = get_user_by_id(db, user_id)
    token = auth.create_access_token(user.token_claims())

    logger.info("Issued access token for %s", user.email)
    return TokenOut(
        access_token=token,
        expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        user=UserOut.model_validate(user)
    )
