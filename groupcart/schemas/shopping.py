"""Pydantic schemas for shopping lists and items."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from groupcart.models.shopping_list import ItemPriority


class ShoppingListCreate(BaseModel):
    """Schema for creating a new shopping list."""
    name: Optional[str] = None
    description: Optional[str] = None


class ShoppingListUpdate(BaseModel):
    """Schema for updating a shopping list (partial)."""
    name: Optional[str] = None
    description: Optional[str] = None
    is_completed: Optional[bool] = None


class ShoppingItemCreate(BaseModel):
    """Schema for adding an item to a list."""
    name: Optional[str] = None
    quantity: int = 1
    unit: Optional[str] = None
    notes: Optional[str] = None
    priority: ItemPriority = ItemPriority.MEDIUM
    category: Optional[str] = None
    estimated_price: Optional[float] = None


class ShoppingItemUpdate(BaseModel):
    """Schema for updating an item (partial)."""
    name: Optional[str] = None
    quantity: Optional[int] = None
    unit: Optional[str] = None
    notes: Optional[str] = None
    is_completed: Optional[bool] = None
    priority: Optional[ItemPriority] = None
    category: Optional[str] = None
    estimated_price: Optional[float] = None
    actual_price: Optional[float] = None


class ShoppingItemResponse(BaseModel):
    """Schema for item responses."""
    id: int
    shopping_list_id: int
    name: str
    quantity: int
    unit: Optional[str]
    notes: Optional[str]
    category: Optional[str]
    priority: ItemPriority
    is_completed: bool
    estimated_price: Optional[float]
    actual_price: Optional[float]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShoppingItemSummary(BaseModel):
    """Short form of an item embedded in a list."""
    id: int
    name: str
    is_completed: bool
    priority: ItemPriority

    model_config = ConfigDict(from_attributes=True)


class GroupRef(BaseModel):
    """Group a shopping list belongs to."""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ShoppingListResponse(BaseModel):
    """Schema for shopping list responses."""
    id: int
    group_id: int
    name: str
    description: Optional[str]
    is_completed: bool
    created_at: datetime
    updated_at: datetime
    items: List[ShoppingItemSummary] = []
    items_count: int = 0

    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode='before')
    @classmethod
    def count_items(cls, data: Any) -> Any:
        """Derive items_count from the items relationship."""
        if isinstance(data, dict):
            return data

        # Data is a SQLAlchemy model object (ShoppingList)
        if hasattr(data, 'items'):
            result = {}
            for field in ['id', 'group_id', 'name', 'description', 'is_completed', 'created_at', 'updated_at']:
                result[field] = getattr(data, field)
            result['items'] = list(data.items)
            result['items_count'] = len(result['items'])
            return result

        return data


class RecentShoppingList(BaseModel):
    """Dashboard entry for a recently updated list."""
    id: int
    name: str
    description: Optional[str]
    is_completed: bool
    created_at: datetime
    updated_at: datetime
    group: GroupRef
    items_count: int
    completed_items_count: int
