"""
Schemas shared by several entities.
"""

from pydantic import BaseModel, Field


class EntityRef(BaseModel):
    """Reference to an existing entity by identifier."""

    id: str = Field(..., example="5f2b8c0e4a1d4b0f9c3e7a6d1b2c3d4e")
