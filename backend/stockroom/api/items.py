"""
Item API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from stockroom.dependencies import get_db, get_current_user
from stockroom.models import User
from stockroom.schemas.common import ReorderEntry
from stockroom.schemas.item import (
    ItemCreate,
    ItemUpdate,
    ItemResponse,
    ItemList,
)
from stockroom.services import item_service

router = APIRouter()


@router.get("", response_model=ItemList)
def list_items(
    group_id: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None),
    low_stock: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List items of the selected group, or personal ones."""
    items = item_service.list_items(
        db,
        current_user,
        group_id=group_id,
        category_id=category_id,
        low_stock=low_stock
    )
    return ItemList(
        items=[ItemResponse.model_validate(i) for i in items],
        total=len(items)
    )


@router.post("", response_model=ItemResponse, status_code=201)
def create_item(
    item: ItemCreate,
    group_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a new item."""
    return item_service.create_item(db, current_user, item, group_id)


@router.put("/order", status_code=204)
def reorder_items(
    entries: List[ReorderEntry],
    group_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Persist a new item order."""
    item_service.reorder_items(db, current_user, entries, group_id)
    return None


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a specific item."""
    return item_service.get_item(db, current_user, item_id)


@router.patch("/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: str,
    item_update: ItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update an item."""
    return item_service.update_item(db, current_user, item_id, item_update)


@router.delete("/{item_id}", status_code=204)
def delete_item(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Permanently delete an item."""
    item_service.delete_item(db, current_user, item_id)
    return None


@router.post("/{item_id}/increment", response_model=ItemResponse)
def increment_stock(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Add one unit of stock."""
    return item_service.increment_stock(db, current_user, item_id)


@router.post("/{item_id}/decrement", response_model=ItemResponse)
def decrement_stock(
    item_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Remove one unit of stock."""
    return item_service.decrement_stock(db, current_user, item_id)
