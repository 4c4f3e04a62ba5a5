"""
FastAPI dependencies.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from stockroom.config import settings
from stockroom.database import get_db
from stockroom.models import User

__all__ = ["get_db", "get_current_user"]


def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
) -> User:
    """
    Load the caller from the user id the session collaborator forwarded.
    """
    user_id: Optional[str] = request.headers.get(settings.user_id_header)
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
