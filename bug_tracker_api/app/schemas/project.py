"""
Pydantic models for projects.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ProjectWrite(BaseModel):
    """Body of create and full-update requests.

    ``id`` must be absent on create and equal to the path id on update.
    """

    id: Optional[str] = None
    name: Optional[str] = Field(None, example="Backend")
    description: Optional[str] = Field(None, example="REST API and storage")


class ProjectPatch(BaseModel):
    """Body of merge-patch requests; only fields sent are applied."""

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None


class ProjectRead(BaseModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }
