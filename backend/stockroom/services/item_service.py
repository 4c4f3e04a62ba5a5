"""Service for scoped inventory items and stock counts."""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from stockroom.exceptions import InvalidInput, InvariantViolation
from stockroom.models import Category, Item, User
from stockroom.schemas.common import ReorderEntry
from stockroom.schemas.item import ItemCreate, ItemUpdate
from stockroom.services.access_service import (
    Scope,
    require_item,
    resolve_scope,
    scope_filter,
    scope_keys,
    scope_of,
)
from stockroom.services.ordering import apply_reorder, next_sort_order

logger = logging.getLogger(__name__)

# Query value selecting items without a category
UNCATEGORIZED = "none"


def _check_category_scope(db: Session, category_id: Optional[str], scope: Scope) -> None:
    """An item may only reference a category from its own scope."""
    if category_id is None:
        return
    match = db.query(Category.id).filter(
        Category.id == category_id,
        scope_filter(Category, scope),
    ).first()
    if not match:
        raise InvalidInput("Category does not belong to this item's group or owner")


def list_items(
    db: Session,
    user: User,
    group_id: Optional[str] = None,
    category_id: Optional[str] = None,
    low_stock: bool = False
) -> List[Item]:
    """Items of the selected scope in display order, with category data attached."""
    scope = resolve_scope(db, user, group_id)
    query = db.query(Item).options(joinedload(Item.category)).filter(scope_filter(Item, scope))

    if category_id == UNCATEGORIZED:
        query = query.filter(Item.category_id.is_(None))
    elif category_id:
        query = query.filter(Item.category_id == category_id)
    if low_stock:
        query = query.filter(
            Item.threshold.isnot(None),
            Item.quantity < Item.threshold,
        )

    return query.order_by(Item.sort_order.asc()).all()


def get_item(db: Session, user: User, item_id: str) -> Item:
    """Single item the caller may see."""
    return require_item(db, user, item_id)


def create_item(
    db: Session,
    user: User,
    data: ItemCreate,
    group_id: Optional[str] = None
) -> Item:
    """Create an item at the end of the scope's list."""
    scope = resolve_scope(db, user, group_id)
    _check_category_scope(db, data.category_id, scope)

    item = Item(
        id=str(uuid.uuid4()),
        **data.model_dump(),
        sort_order=next_sort_order(db, Item, scope),
        **scope_keys(scope),
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("User %s created item %s", user.id, item.id)
    return item


def update_item(db: Session, user: User, item_id: str, data: ItemUpdate) -> Item:
    """Apply the fields present in `data` to an item."""
    item = require_item(db, user, item_id)

    update_data = data.model_dump(exclude_unset=True)
    for field in ("name", "quantity", "unit"):
        if field in update_data and update_data[field] is None:
            raise InvalidInput(f"{field} cannot be empty")
    if "category_id" in update_data and update_data["category_id"] != item.category_id:
        _check_category_scope(db, update_data["category_id"], scope_of(item))

    for field, value in update_data.items():
        setattr(item, field, value)

    db.commit()
    db.refresh(item)
    return item


def delete_item(db: Session, user: User, item_id: str) -> None:
    """Permanently delete an item."""
    item = require_item(db, user, item_id)
    db.delete(item)
    db.commit()
    logger.info("User %s deleted item %s", user.id, item_id)


def increment_stock(db: Session, user: User, item_id: str) -> Item:
    """Add one unit. The delta is applied in SQL so concurrent calls do not lose updates."""
    item = require_item(db, user, item_id)
    db.query(Item).filter(Item.id == item.id).update(
        {Item.quantity: Item.quantity + 1},
        synchronize_session=False,
    )
    db.commit()
    db.refresh(item)
    return item


def decrement_stock(db: Session, user: User, item_id: str) -> Item:
    """Remove one unit. Stock never goes below zero."""
    item = require_item(db, user, item_id)
    updated = db.query(Item).filter(
        Item.id == item.id,
        Item.quantity > 0,
    ).update(
        {Item.quantity: Item.quantity - 1},
        synchronize_session=False,
    )
    if not updated:
        db.rollback()
        logger.warning("Rejected decrement of item %s at zero stock", item_id)
        raise InvariantViolation("Stock cannot be negative")

    db.commit()
    db.refresh(item)
    return item


def reorder_items(
    db: Session,
    user: User,
    entries: List[ReorderEntry],
    group_id: Optional[str] = None
) -> None:
    """Apply a drag-and-drop reorder. Fails as a whole if any id is outside the scope."""
    scope = resolve_scope(db, user, group_id)
    apply_reorder(db, Item, scope, entries)
    logger.info("User %s reordered %d items", user.id, len(entries))
