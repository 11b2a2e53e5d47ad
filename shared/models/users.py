import uuid
from sqlalchemy import TIMESTAMP, Boolean, Column, String, Uuid, func
from ..core.database import AuthBase
from ..utils.enums import UserRole


class Users(AuthBase):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(200), unique=True, index=True, nullable=False)
    full_name = Column(String(200), nullable=False, default="")
    role = Column(String(16), nullable=False, default=UserRole.USER.value)
    is_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())
    is_deleted = Column(Boolean, nullable=False, default=False)  # soft delete

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def token_claims(self) -> dict:
        return {
            "user_id": str(self.id),
            "email": self.email,
            "name": self.full_name,
            "role": self.role,
        }
