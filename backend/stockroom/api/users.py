"""
User API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.dependencies import get_db, get_current_user
from stockroom.models import User
from stockroom.schemas.user import UserCreate, UserUpdate, UserResponse
from stockroom.services import user_service

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
def register_user(
    user: UserCreate,
    db: Session = Depends(get_db)
):
    """Register a user profile after signup with the auth provider."""
    return user_service.create_user(db, user)


@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: User = Depends(get_current_user)):
    """Get the calling user."""
    return current_user


@router.patch("/me", response_model=UserResponse)
def update_current_user(
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update account settings."""
    return user_service.update_user(db, current_user, user_update)
