# app/models/items.py
import uuid
from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import relationship
from shared.core.database import Base
from shared.utils.time_utils import utcnow


class Item(Base):
    __tablename__ = "items"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text)
    price = Column(Float, nullable=False)
    cost_price = Column(Float)
    quantity = Column(Integer, nullable=False, default=0)
    min_stock_level = Column(Integer, nullable=False, default=5)
    category_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    sku = Column(String(64), index=True)
    # NULLs never collide, so any number of items may go without a barcode
    barcode = Column(String(64), unique=True, index=True)
    image = Column(String(512))
    supplier = Column(String(200))
    location = Column(String(128))
    created_by = Column(Uuid(as_uuid=True), index=True)  # users.id in the auth DB
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="items")
    transactions = relationship(
        "Transaction",
        back_populates="item",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    @property
    def is_low_stock(self) -> bool:
        return (self.quantity or 0) <= (self.min_stock_level or 0)

    @property
    def stock_value(self) -> float:
        return (self.price or 0) * (self.quantity or 0)
