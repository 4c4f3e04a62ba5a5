"""
Category database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from stockroom.database import Base


class Category(Base):
    """Category owned by exactly one scope: a group or a single user."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(50), nullable=False)
    color = Column(String(7), nullable=True)  # Hex color
    sort_order = Column(Integer, default=0, nullable=False)
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"), nullable=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    group = relationship("Group", back_populates="categories")
    items = relationship("Item", back_populates="category")

    __table_args__ = (
        UniqueConstraint("group_id", "name", name="uq_category_group_name"),
        UniqueConstraint("user_id", "name", name="uq_category_user_name"),
        CheckConstraint(
            "(group_id IS NULL) <> (user_id IS NULL)",
            name="ck_category_single_scope",
        ),
    )
