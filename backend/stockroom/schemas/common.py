"""
Schemas shared by the reorderable resources.
"""

from pydantic import BaseModel, Field


class ReorderEntry(BaseModel):
    """New position for a single category or item."""
    id: str = Field(..., min_length=1)
    sort_order: int = Field(..., ge=0)
