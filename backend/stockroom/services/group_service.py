"""Service for shared groups, memberships and invite codes."""

import logging
import uuid
from typing import Dict, Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockroom.config import settings
from stockroom.exceptions import AccessDenied, Conflict, NotFound
from stockroom.models import Group, GroupMember, Item, User
from stockroom.schemas.group import GroupCreate
from stockroom.services.access_service import can_access_group, require_owned_group

logger = logging.getLogger(__name__)


def generate_invite_code(db: Session) -> str:
    """
    Generate an invite code not used by any group.
    Codes are the first `invite_code_length` hex chars of a random UUID.
    """
    for _ in range(settings.invite_code_max_attempts):
        code = uuid.uuid4().hex[:settings.invite_code_length]
        taken = db.query(Group.id).filter(Group.invite_code == code).first()
        if not taken:
            return code
    raise RuntimeError("Could not generate a unique invite code")


def _commit_invite_code(db: Session, group: Group) -> None:
    """
    Assign a fresh invite code and commit. A concurrent writer can take the
    same code between the lookup and the commit, so a unique violation is
    retried with a new code.
    """
    for _ in range(settings.invite_code_max_attempts):
        group.invite_code = generate_invite_code(db)
        db.add(group)
        try:
            db.commit()
            return
        except IntegrityError:
            db.rollback()
            logger.warning("Invite code collision on group %s, retrying", group.id)
    raise Conflict("Could not allocate a unique invite code")


def _find_membership(db: Session, group_id: str, user_id: str):
    return db.query(GroupMember).filter(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id,
    ).first()


def _member_counts(db: Session, group_ids: list) -> Dict[str, int]:
    """Membership rows per group. The owner is not included."""
    if not group_ids:
        return {}
    rows = db.query(GroupMember.group_id, func.count(GroupMember.id)).filter(
        GroupMember.group_id.in_(group_ids)
    ).group_by(GroupMember.group_id).all()
    return {group_id: count for group_id, count in rows}


def get_groups(db: Session, user: User) -> Dict[str, Any]:
    """Groups the user owns and groups the user joined, oldest first."""
    owned = db.query(Group).filter(
        Group.owner_id == user.id
    ).order_by(Group.created_at.asc()).all()

    joined = db.query(Group).join(
        GroupMember, GroupMember.group_id == Group.id
    ).filter(
        GroupMember.user_id == user.id,
        Group.owner_id != user.id,
    ).order_by(Group.created_at.asc()).all()

    counts = _member_counts(db, [g.id for g in owned + joined])

    return {
        "owned": [
            {
                "id": g.id,
                "name": g.name,
                "invite_code": g.invite_code,
                "is_owner": True,
                "owner_name": None,
                "member_count": counts.get(g.id, 0) + 1,
            } for g in owned
        ],
        "joined": [
            {
                "id": g.id,
                "name": g.name,
                "invite_code": None,
                "is_owner": False,
                "owner_name": g.owner.name,
                "member_count": counts.get(g.id, 0) + 1,
            } for g in joined
        ],
    }


def get_group(db: Session, user: User, group_id: str) -> Dict[str, Any]:
    """
    Full group detail for an owner or member.
    Only the owner gets the invite code back.
    """
    if not can_access_group(db, user.id, group_id):
        raise AccessDenied("Group not found or access denied")

    group = db.query(Group).filter(Group.id == group_id).first()
    is_owner = group.owner_id == user.id

    item_counts = dict(
        db.query(Item.category_id, func.count(Item.id)).filter(
            Item.group_id == group.id,
            Item.category_id.isnot(None),
        ).group_by(Item.category_id).all()
    )

    return {
        "id": group.id,
        "name": group.name,
        "invite_code": group.invite_code if is_owner else None,
        "is_owner": is_owner,
        "owner": group.owner,
        "members": group.members,
        "categories": [
            {
                "id": c.id,
                "name": c.name,
                "color": c.color,
                "sort_order": c.sort_order,
                "item_count": item_counts.get(c.id, 0),
            } for c in group.categories
        ],
    }


def get_group_by_invite_code(db: Session, invite_code: str) -> Dict[str, Any]:
    """Preview shown on the join page before the user commits."""
    group = db.query(Group).filter(Group.invite_code == invite_code).first()
    if not group:
        raise NotFound("Group not found")

    return {
        "id": group.id,
        "name": group.name,
        "owner_name": group.owner.name,
        "member_count": _member_counts(db, [group.id]).get(group.id, 0) + 1,
    }


def create_group(db: Session, user: User, data: GroupCreate) -> Group:
    """Create a group owned by the caller."""
    group = Group(
        id=str(uuid.uuid4()),
        name=data.name,
        owner_id=user.id,
    )
    _commit_invite_code(db, group)
    db.refresh(group)
    logger.info("User %s created group %s", user.id, group.id)
    return group


def join_group(db: Session, user: User, invite_code: str) -> Group:
    """Add the caller as a member of the group behind `invite_code`."""
    group = db.query(Group).filter(Group.invite_code == invite_code).first()
    if not group:
        raise NotFound("Group not found")

    if group.owner_id == user.id:
        raise Conflict("You cannot join a group you own")

    if _find_membership(db, group.id, user.id):
        raise Conflict("You are already a member of this group")

    db.add(GroupMember(id=str(uuid.uuid4()), group_id=group.id, user_id=user.id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("You are already a member of this group")
    db.refresh(group)
    logger.info("User %s joined group %s", user.id, group.id)
    return group


def leave_group(db: Session, user: User, group_id: str) -> None:
    """Drop the caller's membership. Owners must delete the group instead."""
    group = db.query(Group).filter(Group.id == group_id).first()
    if not group:
        raise AccessDenied("Group not found or access denied")

    if group.owner_id == user.id:
        raise Conflict("The owner cannot leave the group. Delete the group instead.")

    membership = _find_membership(db, group_id, user.id)
    if not membership:
        raise AccessDenied("You are not a member of this group")

    db.delete(membership)
    db.commit()
    logger.info("User %s left group %s", user.id, group_id)


def delete_group(db: Session, user: User, group_id: str) -> None:
    """Delete a group with its members, categories and items."""
    group = require_owned_group(db, user, group_id)
    db.delete(group)
    db.commit()
    logger.info("User %s deleted group %s", user.id, group_id)


def remove_member(db: Session, user: User, group_id: str, member_id: str) -> None:
    """Owner removes a membership row from their group."""
    require_owned_group(db, user, group_id)

    membership = db.query(GroupMember).filter(
        GroupMember.id == member_id,
        GroupMember.group_id == group_id,
    ).first()
    if not membership:
        raise NotFound("Member not found")

    db.delete(membership)
    db.commit()
    logger.info("User %s removed member %s from group %s", user.id, member_id, group_id)


def regenerate_invite_code(db: Session, user: User, group_id: str) -> str:
    """Replace the invite code. The previous code stops working at once."""
    group = require_owned_group(db, user, group_id)
    _commit_invite_code(db, group)
    db.refresh(group)
    logger.info("User %s regenerated invite code for group %s", user.id, group_id)
    return group.invite_code
