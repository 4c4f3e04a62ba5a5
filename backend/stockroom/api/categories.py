"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from stockroom.dependencies import get_db, get_current_user
from stockroom.models import User
from stockroom.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryList,
)
from stockroom.schemas.common import ReorderEntry
from stockroom.services import category_service

router = APIRouter()


@router.get("", response_model=CategoryList)
def list_categories(
    group_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List categories of the selected group, or personal ones."""
    categories = category_service.list_categories(db, current_user, group_id)
    return CategoryList(
        items=[CategoryResponse.model_validate(c) for c in categories],
        total=len(categories)
    )


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    category: CategoryCreate,
    group_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a new category."""
    return category_service.create_category(db, current_user, category, group_id)


@router.put("/order", status_code=204)
def reorder_categories(
    entries: List[ReorderEntry],
    group_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Persist a new category order."""
    category_service.reorder_categories(db, current_user, entries, group_id)
    return None


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    category_update: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update a category."""
    return category_service.update_category(db, current_user, category_id, category_update)


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a category (its items become uncategorized)."""
    category_service.delete_category(db, current_user, category_id)
    return None
