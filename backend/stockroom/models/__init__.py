"""
Database models package.
"""

from stockroom.models.user import User
from stockroom.models.group import Group, GroupMember
from stockroom.models.category import Category
from stockroom.models.item import Item

__all__ = [
    "User",
    "Group",
    "GroupMember",
    "Category",
    "Item",
]
