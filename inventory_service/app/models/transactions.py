# app/models/transactions.py
import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import relationship
from shared.core.database import Base
from shared.utils.time_utils import utcnow


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    item_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    quantity = Column(Integer, nullable=False)
    type = Column(String(8), nullable=False)  # "in" or "out"
    notes = Column(Text)
    quantity_after = Column(Integer, nullable=False)
    date = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    created_by = Column(Uuid(as_uuid=True))

    item = relationship("Item", back_populates="transactions")
