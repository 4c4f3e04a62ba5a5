"""Service for scoped categories."""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockroom.exceptions import Conflict
from stockroom.models import Category, Item, User
from stockroom.schemas.category import CategoryCreate, CategoryUpdate
from stockroom.schemas.common import ReorderEntry
from stockroom.services.access_service import (
    Scope,
    require_category,
    resolve_scope,
    scope_filter,
    scope_keys,
    scope_of,
)
from stockroom.services.ordering import apply_reorder, next_sort_order

logger = logging.getLogger(__name__)

CATEGORY_COLORS = [
    "#ef4444",  # red
    "#f97316",  # orange
    "#eab308",  # yellow
    "#22c55e",  # green
    "#3b82f6",  # blue
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#6b7280",  # gray
]


def suggest_color(db: Session, scope: Scope) -> str:
    """Next palette color, rotating by how many categories the scope has."""
    count = db.query(Category).filter(scope_filter(Category, scope)).count()
    return CATEGORY_COLORS[count % len(CATEGORY_COLORS)]


def _name_taken(db: Session, scope: Scope, name: str, exclude_id: Optional[str] = None) -> bool:
    query = db.query(Category.id).filter(
        scope_filter(Category, scope),
        Category.name == name,
    )
    if exclude_id:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


def _item_counts(db: Session, category_ids: list) -> dict:
    if not category_ids:
        return {}
    return dict(
        db.query(Item.category_id, func.count(Item.id)).filter(
            Item.category_id.in_(category_ids)
        ).group_by(Item.category_id).all()
    )


def _with_item_count(category: Category, count: int) -> Category:
    category.item_count = count
    return category


def _commit_unique(db: Session) -> None:
    """Commit, turning a lost race on the per-scope name constraint into Conflict."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("A category with this name already exists")


def list_categories(db: Session, user: User, group_id: Optional[str] = None) -> List[Category]:
    """Categories of the selected scope with live item counts, in display order."""
    scope = resolve_scope(db, user, group_id)
    categories = db.query(Category).filter(
        scope_filter(Category, scope)
    ).order_by(Category.sort_order.asc()).all()

    counts = _item_counts(db, [c.id for c in categories])
    return [_with_item_count(c, counts.get(c.id, 0)) for c in categories]


def create_category(
    db: Session,
    user: User,
    data: CategoryCreate,
    group_id: Optional[str] = None
) -> Category:
    """Create a category at the end of the scope's list."""
    scope = resolve_scope(db, user, group_id)

    if _name_taken(db, scope, data.name):
        raise Conflict("A category with this name already exists")

    category = Category(
        id=str(uuid.uuid4()),
        name=data.name,
        color=data.color or suggest_color(db, scope),
        sort_order=next_sort_order(db, Category, scope),
        **scope_keys(scope),
    )
    db.add(category)
    _commit_unique(db)
    db.refresh(category)
    logger.info("User %s created category %s", user.id, category.id)
    return _with_item_count(category, 0)


def update_category(db: Session, user: User, category_id: str, data: CategoryUpdate) -> Category:
    """Rename or recolor a category. An explicit null color clears it."""
    category = require_category(db, user, category_id)

    update_data = data.model_dump(exclude_unset=True)
    name = update_data.pop("name", None)
    if name is not None and name != category.name:
        if _name_taken(db, scope_of(category), name, exclude_id=category.id):
            raise Conflict("A category with this name already exists")
        category.name = name

    for field, value in update_data.items():
        setattr(category, field, value)

    _commit_unique(db)
    db.refresh(category)
    return _with_item_count(category, _item_counts(db, [category.id]).get(category.id, 0))


def delete_category(db: Session, user: User, category_id: str) -> None:
    """Delete a category. Its items stay, uncategorized."""
    category = require_category(db, user, category_id)
    db.delete(category)
    db.commit()
    logger.info("User %s deleted category %s", user.id, category_id)


def reorder_categories(
    db: Session,
    user: User,
    entries: List[ReorderEntry],
    group_id: Optional[str] = None
) -> None:
    """Apply a drag-and-drop reorder of the scope's categories."""
    scope = resolve_scope(db, user, group_id)
    apply_reorder(db, Category, scope, entries)
    logger.info("User %s reordered %d categories", user.id, len(entries))
