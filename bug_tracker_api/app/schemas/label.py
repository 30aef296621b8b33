"""
Pydantic models for labels.

``tickets`` is the inverse side of the ticket/label association; when
written it replaces the set of tickets carrying the label.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .common import EntityRef
from .ticket import TicketSummary


class LabelWrite(BaseModel):
    id: Optional[str] = None
    value: Optional[str] = Field(None, example="bug")
    tickets: Optional[List[EntityRef]] = None


class LabelPatch(BaseModel):
    """Body of merge-patch requests; only ``value`` is merged."""

    id: Optional[str] = None
    value: Optional[str] = None


class LabelRead(BaseModel):
    id: str
    value: Optional[str] = None
    tickets: List[TicketSummary] = []

    model_config = {
        "from_attributes": True,
    }
