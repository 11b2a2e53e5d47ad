from uuid import UUID
from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from shared.core import auth
from shared.core.database import get_auth_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas import userschema
from ..services import userservices

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/me", response_model=userschema.UserOut)
def read_profile(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_token)):
    return userservices.get_profile(db, current_user)


@router.get("", response_model=userschema.UserListOut)
def list_users(
        params: Annotated[userschema.UserQueryParams, Query()],
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_admin)):
    return userservices.list_users(db, params)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=None)
def create_user(
        new_user: userschema.UserCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_admin)):
    user = userservices.create_user(db, new_user)
    return success_response(user, "User created successfully",
                            AppStatusCode.CREATED_SUCCESSFULLY)


@router.get("/{user_id}", response_model=userschema.UserOut)
def read_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return userservices.get_user(db, user_id, current_user)


@router.put("/{user_id}", response_model=None)
def update_user(
        user_id: UUID,
        data: userschema.UserUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    user = userservices.update_user(db, user_id, data, current_user)
    return success_response(user, "User updated successfully",
                            AppStatusCode.UPDATED_SUCCESSFULLY)


@router.delete("/{user_id}", response_model=None)
def delete_user(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_admin)):
    user = userservices.delete_user(db, user_id, current_user)
    return success_response(user, "User deleted successfully",
                            AppStatusCode.DELETED_SUCCESSFULLY)


@router.post("/{user_id}/token", response_model=userschema.TokenOut)
def issue_token(
        user_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.allow_admin)):
    return userservices.issue_token(db, user_id)
