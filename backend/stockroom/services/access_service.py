"""Scope resolution and access checks shared by the resource services.

A Category or Item belongs to exactly one scope: a group (visible to the
owner and every member) or a single user. Operations on existing rows
always re-derive the scope from what is stored, never from what the
caller claims.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy import and_, or_, exists
from sqlalchemy.orm import Session

from stockroom.exceptions import AccessDenied
from stockroom.models import Category, Group, GroupMember, Item, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersonalScope:
    user_id: str


@dataclass(frozen=True)
class GroupScope:
    group_id: str


Scope = Union[PersonalScope, GroupScope]


def can_access_group(db: Session, user_id: str, group_id: str) -> bool:
    """True if the user owns the group or holds a membership row in it."""
    is_member = exists().where(
        GroupMember.group_id == Group.id,
        GroupMember.user_id == user_id,
    )
    return db.query(Group.id).filter(
        Group.id == group_id,
        or_(Group.owner_id == user_id, is_member),
    ).first() is not None


def resolve_scope(db: Session, user: User, group_id: Optional[str] = None) -> Scope:
    """Turn the caller's selected group (if any) into a verified scope."""
    if group_id:
        if not can_access_group(db, user.id, group_id):
            logger.warning("User %s denied access to group %s", user.id, group_id)
            raise AccessDenied("Group not found or access denied")
        return GroupScope(group_id=group_id)
    return PersonalScope(user_id=user.id)


def scope_of(resource: Union[Category, Item]) -> Scope:
    """Scope a persisted category or item belongs to."""
    if resource.group_id:
        return GroupScope(group_id=resource.group_id)
    return PersonalScope(user_id=resource.user_id)


def scope_filter(model, scope: Scope):
    """Filter criteria selecting rows of `model` inside `scope`."""
    if isinstance(scope, GroupScope):
        return model.group_id == scope.group_id
    return and_(model.user_id == scope.user_id, model.group_id.is_(None))


def scope_keys(scope: Scope) -> dict:
    """Owning foreign keys to set on a new row created in `scope`."""
    if isinstance(scope, GroupScope):
        return {"group_id": scope.group_id, "user_id": None}
    return {"group_id": None, "user_id": scope.user_id}


def verify_resource_access(db: Session, user: User, resource: Union[Category, Item]) -> bool:
    """Check the caller against the resource's stored scope."""
    scope = scope_of(resource)
    if isinstance(scope, GroupScope):
        return can_access_group(db, user.id, scope.group_id)
    return scope.user_id == user.id


def _require(db: Session, user: User, model, resource_id: str, label: str):
    resource = db.query(model).filter(model.id == resource_id).first()
    if resource is None or not verify_resource_access(db, user, resource):
        logger.warning("User %s denied access to %s %s", user.id, label, resource_id)
        raise AccessDenied(f"{label.capitalize()} not found or access denied")
    return resource


def require_category(db: Session, user: User, category_id: str) -> Category:
    """Load a category the caller may act on, or raise AccessDenied."""
    return _require(db, user, Category, category_id, "category")


def require_item(db: Session, user: User, item_id: str) -> Item:
    """Load an item the caller may act on, or raise AccessDenied."""
    return _require(db, user, Item, item_id, "item")


def require_owned_group(db: Session, user: User, group_id: str) -> Group:
    """Load a group owned by the caller, or raise AccessDenied."""
    group = db.query(Group).filter(
        Group.id == group_id,
        Group.owner_id == user.id,
    ).first()
    if not group:
        logger.warning("User %s is not the owner of group %s", user.id, group_id)
        raise AccessDenied("Group not found or you are not its owner")
    return group
