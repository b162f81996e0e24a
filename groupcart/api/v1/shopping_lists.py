"""Shopping list endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import case, select
from sqlalchemy.orm import Session

from groupcart.api.deps import get_current_user
from groupcart.database import get_db
from groupcart.models.group import group_members
from groupcart.models.shopping_list import ItemPriority, ShoppingItem, ShoppingList
from groupcart.models.user import User
from groupcart.schemas.shopping import (
    GroupRef,
    RecentShoppingList,
    ShoppingItemCreate,
    ShoppingItemResponse,
    ShoppingItemSummary,
    ShoppingListCreate,
    ShoppingListResponse,
    ShoppingListUpdate,
)
from groupcart.services import get_group_for_member

# Mounted under /groups/{group_id}/shopping-lists
group_router = APIRouter()

# Mounted under /shopping-lists
router = APIRouter()

# Priority is stored as text, so sort on an explicit rank
PRIORITY_RANK = case(
    {
        ItemPriority.HIGH.value: 3,
        ItemPriority.MEDIUM.value: 2,
        ItemPriority.LOW.value: 1,
    },
    value=ShoppingItem.priority,
    else_=0,
)


def get_accessible_list(list_id: int, user_id: int, db: Session) -> ShoppingList:
    """
    Fetch a shopping list that belongs to one of the user's groups.

    Raises:
        HTTPException: 404 if the list does not exist or the user is not
            a member of its group
    """
    shopping_list = db.execute(
        select(ShoppingList)
        .join(group_members, group_members.c.group_id == ShoppingList.group_id)
        .where(
            ShoppingList.id == list_id,
            group_members.c.user_id == user_id
        )
    ).scalar_one_or_none()

    if not shopping_list:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shopping list not found or you do not have access"
        )

    return shopping_list


def ordered_items(list_id: int, db: Session) -> List[ShoppingItem]:
    """Items of a list: open before done, then high priority first, newest first."""
    return list(
        db.execute(
            select(ShoppingItem)
            .where(ShoppingItem.shopping_list_id == list_id)
            .order_by(
                ShoppingItem.is_completed.asc(),
                PRIORITY_RANK.desc(),
                ShoppingItem.created_at.desc(),
                ShoppingItem.id.desc(),
            )
        ).scalars().all()
    )


def list_response(shopping_list: ShoppingList, db: Session) -> ShoppingListResponse:
    """Render a list with its items in display order."""
    response = ShoppingListResponse.model_validate(shopping_list)
    response.items = [ShoppingItemSummary.model_validate(i) for i in ordered_items(shopping_list.id, db)]
    return response


@group_router.get("", response_model=List[ShoppingListResponse])
def list_group_shopping_lists(
    group_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List shopping lists in a group, open lists first.

    Raises:
        GroupNotFoundError: 404 if group not found
        AccessDeniedError: 403 if not a member
    """
    get_group_for_member(group_id, current_user.id, db)

    return db.execute(
        select(ShoppingList)
        .where(ShoppingList.group_id == group_id)
        .order_by(ShoppingList.is_completed.asc(), ShoppingList.updated_at.desc())
    ).scalars().all()


@group_router.post("", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED)
def create_shopping_list(
    group_id: int,
    list_data: ShoppingListCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a shopping list in a group. Any member can do this.

    Raises:
        HTTPException: 400 if the name is blank
        GroupNotFoundError: 404 if group not found
        AccessDeniedError: 403 if not a member
    """
    name = (list_data.name or "").strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Shopping list name is required"
        )

    get_group_for_member(group_id, current_user.id, db)

    new_list = ShoppingList(
        name=name,
        description=list_data.description,
        group_id=group_id
    )

    db.add(new_list)
    db.commit()
    db.refresh(new_list)

    return new_list


@router.get("/recent", response_model=List[RecentShoppingList])
def list_recent_shopping_lists(
    limit: int = Query(5, ge=1, le=50, description="Maximum number of lists"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Most recently updated lists across all of the user's groups."""
    recent = db.execute(
        select(ShoppingList)
        .join(group_members, group_members.c.group_id == ShoppingList.group_id)
        .where(group_members.c.user_id == current_user.id)
        .order_by(ShoppingList.updated_at.desc(), ShoppingList.id.desc())
        .limit(limit)
    ).scalars().all()

    return [
        RecentShoppingList(
            id=lst.id,
            name=lst.name,
            description=lst.description,
            is_completed=lst.is_completed,
            created_at=lst.created_at,
            updated_at=lst.updated_at,
            group=GroupRef.model_validate(lst.group),
            items_count=len(lst.items),
            completed_items_count=sum(1 for item in lst.items if item.is_completed),
        )
        for lst in recent
    ]


@router.get("/{list_id}", response_model=ShoppingListResponse)
def get_shopping_list(
    list_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a shopping list with its items."""
    shopping_list = get_accessible_list(list_id, current_user.id, db)
    return list_response(shopping_list, db)


@router.patch("/{list_id}", response_model=ShoppingListResponse)
def update_shopping_list(
    list_id: int,
    list_data: ShoppingListUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update a shopping list. Only provided fields are changed; a blank name
    is ignored rather than clearing the name.
    """
    shopping_list = get_accessible_list(list_id, current_user.id, db)

    update_data = list_data.model_dump(exclude_unset=True)
    name = (update_data.pop("name", None) or "").strip()
    if name:
        update_data["name"] = name
    if update_data.get("is_completed") is None:
        update_data.pop("is_completed", None)

    for field, value in update_data.items():
        setattr(shopping_list, field, value)

    db.commit()
    db.refresh(shopping_list)

    return list_response(shopping_list, db)


@router.delete("/{list_id}")
def delete_shopping_list(
    list_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a shopping list and all of its items."""
    shopping_list = get_accessible_list(list_id, current_user.id, db)

    db.delete(shopping_list)
    db.commit()

    return {"message": "Shopping list deleted successfully"}


@router.get("/{list_id}/items", response_model=List[ShoppingItemResponse])
def list_items(
    list_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List items on a shopping list."""
    get_accessible_list(list_id, current_user.id, db)
    return ordered_items(list_id, db)


@router.post("/{list_id}/items", response_model=ShoppingItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    list_id: int,
    item_data: ShoppingItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Add an item to a shopping list.

    Raises:
        HTTPException: 400 if the name is blank, 404 if the list is not accessible
    """
    name = (item_data.name or "").strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Item name is required"
        )

    get_accessible_list(list_id, current_user.id, db)

    item = ShoppingItem(
        name=name,
        quantity=item_data.quantity or 1,
        unit=item_data.unit,
        notes=item_data.notes,
        priority=item_data.priority.value,
        category=item_data.category,
        estimated_price=item_data.estimated_price,
        shopping_list_id=list_id
    )

    db.add(item)
    db.commit()
    db.refresh(item)

    return item
