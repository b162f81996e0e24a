"""Shopping item endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from groupcart.api.deps import get_current_user
from groupcart.database import get_db
from groupcart.models.group import group_members
from groupcart.models.shopping_list import ShoppingItem, ShoppingList
from groupcart.models.user import User
from groupcart.schemas.shopping import ShoppingItemResponse, ShoppingItemUpdate

router = APIRouter()


def get_accessible_item(item_id: int, user_id: int, db: Session) -> ShoppingItem:
    """Fetch an item on a list in one of the user's groups, or 404."""
    item = db.execute(
        select(ShoppingItem)
        .join(ShoppingList, ShoppingList.id == ShoppingItem.shopping_list_id)
        .join(group_members, group_members.c.group_id == ShoppingList.group_id)
        .where(
            ShoppingItem.id == item_id,
            group_members.c.user_id == user_id
        )
    ).scalar_one_or_none()

    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shopping item not found or you do not have access"
        )

    return item


@router.patch("/{item_id}", response_model=ShoppingItemResponse)
def update_item(
    item_id: int,
    item_data: ShoppingItemUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update an item's details (partial update).

    A blank name or a null priority is ignored; a quantity below 1 becomes 1.
    Prices may be cleared by sending null.
    """
    item = get_accessible_item(item_id, current_user.id, db)

    update_data = item_data.model_dump(exclude_unset=True)

    name = (update_data.pop("name", None) or "").strip()
    if name:
        update_data["name"] = name
    if update_data.get("priority") is None:
        update_data.pop("priority", None)
    else:
        update_data["priority"] = update_data["priority"].value
    if "quantity" in update_data:
        update_data["quantity"] = max(update_data["quantity"] or 1, 1)
    if update_data.get("is_completed") is None:
        update_data.pop("is_completed", None)

    for field, value in update_data.items():
        setattr(item, field, value)

    db.commit()
    db.refresh(item)

    return item


@router.delete("/{item_id}")
def delete_item(
    item_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete an item from its list."""
    item = get_accessible_item(item_id, current_user.id, db)

    db.delete(item)
    db.commit()

    return {"message": "Shopping item deleted successfully"}
