"""
Pydantic models for tickets.

Relationships are written as references and read back as summaries:
``project`` and ``assigned_to`` are single references, ``labels`` a
list of references.  A label list in a full update replaces the
ticket's labels; an omitted or ``null`` list removes them all.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import EntityRef
from .project import ProjectRead
from .user import UserSummary


class TicketWrite(BaseModel):
    """Body of create and full-update requests."""

    id: Optional[str] = None
    title: Optional[str] = Field(None, example="Login page throws 500")
    description: Optional[str] = Field(None, example="Steps to reproduce: ...")
    due_date: Optional[date] = Field(None, example="2024-05-01")
    done: Optional[bool] = Field(None, example=False)
    project: Optional[EntityRef] = None
    assigned_to: Optional[EntityRef] = None
    labels: Optional[List[EntityRef]] = None


class TicketPatch(BaseModel):
    """Body of merge-patch requests.

    Only ``title``, ``description``, ``due_date`` and ``done`` are
    merged; relationships are left as stored.
    """

    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    done: Optional[bool] = None


class LabelSummary(BaseModel):
    id: str
    value: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class TicketSummary(BaseModel):
    """A ticket as embedded in a label: scalar fields only."""

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    done: Optional[bool] = None

    model_config = {
        "from_attributes": True,
    }


class TicketRead(TicketSummary):
    project: Optional[ProjectRead] = None
    assigned_to: Optional[UserSummary] = None
    labels: List[LabelSummary] = []
