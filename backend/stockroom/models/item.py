"""
Item database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from stockroom.database import Base


class Item(Base):
    """Inventory item owned by exactly one scope: a group or a single user."""

    __tablename__ = "items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    product_name = Column(String(255), nullable=True)
    price = Column(Integer, nullable=True)  # Smallest currency unit
    quantity = Column(Integer, default=0, nullable=False)
    unit = Column(String(20), nullable=False)
    threshold = Column(Integer, nullable=True)
    note = Column(Text, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"), nullable=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="items")
    group = relationship("Group", back_populates="items")

    # Indexes for scoped list queries
    __table_args__ = (
        Index("idx_item_group_sort", "group_id", "sort_order"),
        Index("idx_item_user_sort", "user_id", "sort_order"),
        Index("idx_item_category", "category_id"),
        CheckConstraint("quantity >= 0", name="ck_item_quantity_non_negative"),
        CheckConstraint(
            "(group_id IS NULL) <> (user_id IS NULL)",
            name="ck_item_single_scope",
        ),
    )

    @property
    def category_name(self):
        return self.category.name if self.category else None

    @property
    def category_color(self):
        return self.category.color if self.category else None

    @property
    def is_low_stock(self) -> bool:
        """Quantity has fallen below the configured restock threshold."""
        return self.threshold is not None and self.quantity < self.threshold
