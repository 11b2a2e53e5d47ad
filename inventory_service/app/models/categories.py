# app/models/categories.py
import uuid
from sqlalchemy import Column, DateTime, String, Text, Uuid, func
from sqlalchemy.orm import relationship
from shared.core.database import Base
from shared.utils.time_utils import utcnow


class Category(Base):
    __tablename__ = "categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(128), nullable=False, unique=True, index=True)
    description = Column(Text)
    color = Column(String(32), default="#3B82F6")
    icon = Column(String(32))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    items = relationship("Item", back_populates="category")
