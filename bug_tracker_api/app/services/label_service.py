"""
Business logic for labels.

A label's ``tickets`` are the inverse side of the ticket/label
association.  Writing them (on create or full update) goes through the
synchronizer, so every resolved ticket also lists the label, and the
stored join rows are rewritten from the label's side.
"""

import logging
from typing import List, Optional

from bug_tracker_api.app.core.errors import EntityNotFound
from bug_tracker_api.app.domain.entities import Label
from bug_tracker_api.app.domain.merge import merge_patch
from bug_tracker_api.app.repositories import LabelRepository, TicketRepository
from bug_tracker_api.app.schemas.label import LabelPatch, LabelRead, LabelWrite
from bug_tracker_api.app.schemas.ticket import TicketSummary

from .validation import check_new, check_update, ensure_exists, resolve_all

logger = logging.getLogger(__name__)

ENTITY_NAME = Label.entity_name


class LabelService:
    """Service for managing labels."""

    @classmethod
    async def create_label(cls, data: LabelWrite) -> Label:
        check_new(ENTITY_NAME, data.id)
        label = Label()
        await cls._apply(label, data)
        await LabelRepository.save(label)
        logger.info("Created label %s '%s'", label.id, label.value)
        return label

    @classmethod
    async def update_label(cls, label_id: str, data: LabelWrite) -> Label:
        """Replace the label's value and ticket set."""
        check_update(ENTITY_NAME, label_id, data.id)
        await ensure_exists(LabelRepository, ENTITY_NAME, label_id)
        label = await LabelRepository.find_by_id(label_id)
        if label is None:
            raise EntityNotFound(ENTITY_NAME, label_id)
        await cls._apply(label, data)
        await LabelRepository.save(label)
        logger.info("Updated label %s", label_id)
        return label

    @classmethod
    async def partial_update_label(cls, label_id: str, patch: LabelPatch) -> Label:
        check_update(ENTITY_NAME, label_id, patch.id)
        await ensure_exists(LabelRepository, ENTITY_NAME, label_id)
        label = await LabelRepository.find_by_id(label_id)
        if label is None:
            raise EntityNotFound(ENTITY_NAME, label_id)
        merge_patch(label, patch)
        await LabelRepository.save(label)
        logger.info("Partially updated label %s", label_id)
        return label

    @classmethod
    async def get_label(cls, label_id: str) -> Optional[Label]:
        return await LabelRepository.find_by_id(label_id)

    @classmethod
    async def list_labels(cls) -> List[Label]:
        return await LabelRepository.find_all()

    @classmethod
    async def delete_label(cls, label_id: str) -> None:
        """Delete the label; tickets carrying it lose the association."""
        await LabelRepository.delete_by_id(label_id)

    @classmethod
    async def _apply(cls, label: Label, data: LabelWrite) -> None:
        tickets = await resolve_all(TicketRepository, "ticket", [ref.id for ref in data.tickets or ()])
        label.value = data.value
        label.set_tickets(tickets)

    @staticmethod
    def to_read(label: Label) -> LabelRead:
        return LabelRead(
            id=label.id,
            value=label.value,
            tickets=[TicketSummary.model_validate(ticket) for ticket in label.tickets],
        )
