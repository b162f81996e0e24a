import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Boolean, Float
from sqlalchemy.orm import relationship

from groupcart.database import Base


class ItemPriority(str, enum.Enum):
    """How urgently an item needs to be bought."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ShoppingList(Base):
    """Shopping list owned by a group."""

    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    is_completed = Column(Boolean, default=False, nullable=False)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    # Many-to-one with group
    group = relationship("Group", back_populates="shopping_lists")

    # One-to-many with items
    items = relationship("ShoppingItem", back_populates="shopping_list", cascade="all, delete-orphan")


class ShoppingItem(Base):
    """Single entry on a shopping list."""

    __tablename__ = "shopping_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    quantity = Column(Integer, default=1, nullable=False)
    unit = Column(String(20), nullable=True)  # e.g., 'kg', 'pcs', 'l'
    notes = Column(Text, nullable=True)
    category = Column(String(50), nullable=True)  # e.g., 'dairy', 'produce'
    priority = Column(String(10), default=ItemPriority.MEDIUM.value, nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)
    estimated_price = Column(Float, nullable=True)
    actual_price = Column(Float, nullable=True)
    shopping_list_id = Column(
        Integer,
        ForeignKey("shopping_lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    # Many-to-one with shopping list
    shopping_list = relationship("ShoppingList", back_populates="items")
