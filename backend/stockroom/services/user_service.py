"""Service for user records. Credentials belong to the auth provider."""

import logging
import uuid

from sqlalchemy.orm import Session

from stockroom.exceptions import Conflict, NotFound
from stockroom.models import User
from stockroom.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user


def create_user(db: Session, data: UserCreate) -> User:
    """Register the profile for a newly signed-up user."""
    email = data.email.strip().lower()
    if db.query(User.id).filter(User.email == email).first():
        raise Conflict("A user with this email already exists")

    user = User(id=str(uuid.uuid4()), name=data.name, email=email)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def update_user(db: Session, user: User, data: UserUpdate) -> User:
    """Change the caller's display name."""
    if data.name is not None:
        user.name = data.name
    db.commit()
    db.refresh(user)
    return user
