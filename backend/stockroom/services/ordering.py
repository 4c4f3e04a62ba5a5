"""Dense per-scope sort_order helpers shared by categories and items."""

from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from stockroom.exceptions import AccessDenied
from stockroom.schemas.common import ReorderEntry
from stockroom.services.access_service import Scope, scope_filter


def next_sort_order(db: Session, model, scope: Scope) -> int:
    """Current max sort_order in the scope plus one, or 0 when empty."""
    current = db.query(func.max(model.sort_order)).filter(scope_filter(model, scope)).scalar()
    return 0 if current is None else current + 1


def apply_reorder(db: Session, model, scope: Scope, entries: List[ReorderEntry]) -> None:
    """
    Write new sort orders for rows in one scope as a single transaction.
    Every id must belong to the scope, otherwise nothing is written.
    """
    ids = [entry.id for entry in entries]
    found = {
        row.id for row in db.query(model.id).filter(
            model.id.in_(ids),
            scope_filter(model, scope),
        ).all()
    }
    if not all(entry_id in found for entry_id in ids):
        raise AccessDenied("Some entries were not found or do not belong to this scope")

    try:
        for entry in entries:
            db.query(model).filter(model.id == entry.id).update(
                {model.sort_order: entry.sort_order},
                synchronize_session=False,
            )
        db.commit()
    except Exception:
        db.rollback()
        raise
