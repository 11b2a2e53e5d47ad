from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: str = "user"
    is_verified: Optional[bool] = None
    exp: Optional[int] = None


class JsonOutResult(EmptyStringModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
