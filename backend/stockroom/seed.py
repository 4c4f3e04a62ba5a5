"""
Seed script for a demo user with starter categories and items.
"""

import logging

from sqlalchemy.orm import Session

from stockroom.database import SessionLocal
from stockroom.models import User
from stockroom.schemas.category import CategoryCreate
from stockroom.schemas.item import ItemCreate
from stockroom.schemas.user import UserCreate
from stockroom.services import category_service, item_service, user_service

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@example.com"


def seed_demo_data(db: Session) -> User:
    """Create the demo user and starter inventory unless it already exists."""
    existing = db.query(User).filter(User.email == DEMO_EMAIL).first()
    if existing:
        logger.info("Demo data already seeded (user %s)", existing.id)
        return existing

    user = user_service.create_user(db, UserCreate(name="Demo", email=DEMO_EMAIL))

    # Define starter categories with the items filed under them
    categories_data = [
        {
            "name": "Kitchen",
            "items": [
                {"name": "Milk", "quantity": 2, "unit": "bottles", "threshold": 1},
                {"name": "Eggs", "quantity": 10, "unit": "pcs", "threshold": 6},
                {"name": "Rice", "quantity": 1, "unit": "bags", "threshold": 1, "price": 1200},
            ],
        },
        {
            "name": "Bathroom",
            "items": [
                {"name": "Toilet paper", "quantity": 8, "unit": "rolls", "threshold": 4},
                {"name": "Shampoo", "quantity": 1, "unit": "bottles"},
            ],
        },
        {
            "name": "Cleaning",
            "items": [
                {"name": "Dish soap", "quantity": 0, "unit": "bottles", "threshold": 1},
            ],
        },
    ]

    for cat_data in categories_data:
        category = category_service.create_category(db, user, CategoryCreate(name=cat_data["name"]))
        for item_data in cat_data["items"]:
            item_service.create_item(db, user, ItemCreate(category_id=category.id, **item_data))

    logger.info("Seeded demo data for user %s", user.id)
    return user


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        seed_demo_data(db)
    finally:
        db.close()
