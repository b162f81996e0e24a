"""SQLAlchemy models for GroupCart."""

from groupcart.models.user import User
from groupcart.models.group import Group, MemberRole, group_members
from groupcart.models.shopping_list import ItemPriority, ShoppingItem, ShoppingList

__all__ = [
    "User",
    "Group",
    "MemberRole",
    "group_members",
    "ShoppingList",
    "ShoppingItem",
    "ItemPriority",
]
