"""
Business logic for tickets.

Creation and full updates resolve the referenced project, assignee and
labels before anything is written, then attach the labels through the
ticket/label synchronizer so the loaded label objects see the ticket as
well.  Partial updates merge only the scalar fields that were sent.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bug_tracker_api.app.core.errors import EntityNotFound
from bug_tracker_api.app.domain.entities import Ticket
from bug_tracker_api.app.domain.merge import merge_patch
from bug_tracker_api.app.repositories import (
    LabelRepository,
    ProjectRepository,
    TicketRepository,
    UserRepository,
)
from bug_tracker_api.app.schemas.project import ProjectRead
from bug_tracker_api.app.schemas.ticket import LabelSummary, TicketPatch, TicketRead, TicketWrite
from bug_tracker_api.app.schemas.user import UserSummary

from .user_service import UserService
from .validation import check_new, check_update, ensure_exists, resolve, resolve_all

logger = logging.getLogger(__name__)

ENTITY_NAME = Ticket.entity_name


class TicketService:
    """Service for creating, updating, reading and deleting tickets."""

    @classmethod
    async def create_ticket(cls, data: TicketWrite) -> Ticket:
        """Create a ticket; ``done`` defaults to ``False``.

        Raises ``IdentifierConflict`` if the body already has an id and
        ``EntityNotFound`` if a referenced entity does not exist.
        """
        check_new(ENTITY_NAME, data.id)
        ticket = Ticket()
        await cls._apply(ticket, data)
        if ticket.done is None:
            ticket.done = False
        await TicketRepository.save(ticket)
        logger.info("Created ticket %s '%s'", ticket.id, ticket.title)
        return ticket

    @classmethod
    async def update_ticket(cls, ticket_id: str, data: TicketWrite) -> Ticket:
        """Replace every field of the ticket, associations included.

        Fields missing from ``data`` become ``None``; a missing label
        list detaches the ticket from all its labels.
        """
        check_update(ENTITY_NAME, ticket_id, data.id)
        await ensure_exists(TicketRepository, ENTITY_NAME, ticket_id)
        ticket = await TicketRepository.find_by_id(ticket_id)
        if ticket is None:
            raise EntityNotFound(ENTITY_NAME, ticket_id)
        await cls._apply(ticket, data)
        await TicketRepository.save(ticket)
        logger.info("Updated ticket %s", ticket_id)
        return ticket

    @classmethod
    async def partial_update_ticket(cls, ticket_id: str, patch: TicketPatch) -> Ticket:
        """Merge the fields present in ``patch`` into the stored ticket."""
        check_update(ENTITY_NAME, ticket_id, patch.id)
        await ensure_exists(TicketRepository, ENTITY_NAME, ticket_id)
        ticket = await TicketRepository.find_by_id(ticket_id)
        if ticket is None:
            raise EntityNotFound(ENTITY_NAME, ticket_id)
        merge_patch(ticket, patch)
        await TicketRepository.save(ticket)
        logger.info("Partially updated ticket %s (%s)", ticket_id, ", ".join(sorted(patch.model_fields_set)))
        return ticket

    @classmethod
    async def get_ticket(cls, ticket_id: str) -> Optional[Ticket]:
        return await TicketRepository.find_by_id(ticket_id)

    @classmethod
    async def list_tickets(
        cls, page: int, size: int, sort: Optional[Sequence[str]] = None
    ) -> Tuple[List[Ticket], int]:
        """Return one page of tickets ordered by due date and the total count."""
        total = await TicketRepository.count()
        tickets = await TicketRepository.find_all_by_order_by_due_date_asc(page, size, sort)
        return tickets, total

    @classmethod
    async def list_self_tickets(cls, current_user: Dict[str, Any]) -> List[Ticket]:
        """Tickets assigned to the caller; empty when the caller is unknown."""
        user = await UserService.get_current_user(current_user)
        if user is None:
            return []
        return await TicketRepository.find_by_assigned_to_id(user.id)

    @classmethod
    async def delete_ticket(cls, ticket_id: str) -> None:
        await TicketRepository.delete_by_id(ticket_id)

    @classmethod
    async def _apply(cls, ticket: Ticket, data: TicketWrite) -> None:
        """Copy every field of ``data`` onto ``ticket``, resolving references first."""
        project = await resolve(ProjectRepository, "project", data.project.id if data.project else None)
        assigned_to = await resolve(UserRepository, "user", data.assigned_to.id if data.assigned_to else None)
        labels = await resolve_all(LabelRepository, "label", [ref.id for ref in data.labels or ()])
        ticket.title = data.title
        ticket.description = data.description
        ticket.due_date = data.due_date
        ticket.done = data.done
        ticket.project = project
        ticket.assigned_to = assigned_to
        ticket.set_labels(labels)

    @staticmethod
    def to_read(ticket: Ticket) -> TicketRead:
        """Convert a ticket entity to its response schema."""
        return TicketRead(
            id=ticket.id,
            title=ticket.title,
            description=ticket.description,
            due_date=ticket.due_date,
            done=ticket.done,
            project=ProjectRead.model_validate(ticket.project) if ticket.project else None,
            assigned_to=UserSummary.model_validate(ticket.assigned_to) if ticket.assigned_to else None,
            labels=[LabelSummary.model_validate(label) for label in ticket.labels],
        )
