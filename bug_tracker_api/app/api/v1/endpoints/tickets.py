"""
Ticket endpoints for API v1.

CRUD over tickets plus ``GET /tickets/self`` for the tickets assigned to
the caller.  The collection endpoint is paginated (``page``, ``size``,
``sort``) and ordered by due date; the total count and navigation links
are returned in the ``X-Total-Count`` and ``Link`` headers.  All routes
require authentication; deletion is reserved for administrators.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from bug_tracker_api.app.core.config import settings
from bug_tracker_api.app.core.db import ROLE_ADMIN
from bug_tracker_api.app.core.headers import (
    create_entity_creation_alert,
    create_entity_deletion_alert,
    create_entity_update_alert,
    generate_pagination_headers,
)
from bug_tracker_api.app.core.security import get_current_user, require_roles
from bug_tracker_api.app.schemas.ticket import TicketPatch, TicketRead, TicketWrite
from bug_tracker_api.app.services.ticket_service import ENTITY_NAME, TicketService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=TicketRead, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    ticket_in: TicketWrite,
    request: Request,
    response: Response,
    current_user: dict = Depends(get_current_user),
) -> TicketRead:
    """Create a new ticket.

    Returns HTTP 400 if the body already carries an ``id`` or references
    a project, user or label that does not exist.
    """
    logger.debug("REST request to save Ticket : %s", ticket_in)
    ticket = await TicketService.create_ticket(ticket_in)
    response.headers["Location"] = f"{request.url.path}/{ticket.id}"
    response.headers.update(create_entity_creation_alert(ENTITY_NAME, ticket.id))
    return TicketService.to_read(ticket)


@router.put("/{ticket_id}", response_model=TicketRead)
async def update_ticket(
    ticket_id: str,
    ticket_in: TicketWrite,
    response: Response,
    current_user: dict = Depends(get_current_user),
) -> TicketRead:
    """Replace an existing ticket.

    The body ``id`` must be present and equal to ``ticket_id``, and the
    ticket must exist; otherwise HTTP 400 is returned.
    """
    logger.debug("REST request to update Ticket : %s, %s", ticket_id, ticket_in)
    ticket = await TicketService.update_ticket(ticket_id, ticket_in)
    response.headers.update(create_entity_update_alert(ENTITY_NAME, ticket.id))
    return TicketService.to_read(ticket)


@router.patch("/{ticket_id}", response_model=TicketRead)
async def partial_update_ticket(
    ticket_id: str,
    ticket_in: TicketPatch,
    response: Response,
    current_user: dict = Depends(get_current_user),
) -> TicketRead:
    """Partially update a ticket; fields that are absent or ``null`` are ignored.

    Accepts ``application/json`` and ``application/merge-patch+json``.
    """
    logger.debug("REST request to partial update Ticket partially : %s, %s", ticket_id, ticket_in)
    ticket = await TicketService.partial_update_ticket(ticket_id, ticket_in)
    response.headers.update(create_entity_update_alert(ENTITY_NAME, ticket.id))
    return TicketService.to_read(ticket)


@router.get("", response_model=List[TicketRead])
async def list_tickets(
    request: Request,
    response: Response,
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort: Optional[List[str]] = Query(None, description="Secondary ordering, e.g. ``title,desc``"),
    current_user: dict = Depends(get_current_user),
) -> List[TicketRead]:
    """Return a page of tickets, earliest due date first."""
    logger.debug("REST request to get a page of Tickets")
    tickets, total = await TicketService.list_tickets(page, size, sort)
    response.headers.update(generate_pagination_headers(request.url, page, size, total))
    return [TicketService.to_read(ticket) for ticket in tickets]


@router.get("/self", response_model=List[TicketRead])
async def list_self_tickets(current_user: dict = Depends(get_current_user)) -> List[TicketRead]:
    """Return the tickets assigned to the authenticated user."""
    logger.debug("REST request to get a page of user's Tickets")
    tickets = await TicketService.list_self_tickets(current_user)
    return [TicketService.to_read(ticket) for ticket in tickets]


@router.get("/{ticket_id}", response_model=TicketRead)
async def get_ticket(ticket_id: str, current_user: dict = Depends(get_current_user)) -> TicketRead:
    """Retrieve a ticket with its project, assignee and labels; 404 if absent."""
    logger.debug("REST request to get Ticket : %s", ticket_id)
    ticket = await TicketService.get_ticket(ticket_id)
    if ticket is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket not found")
    return TicketService.to_read(ticket)


@router.delete("/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket(
    ticket_id: str,
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> Response:
    """Delete a ticket (admin only).  Its label associations are removed with it."""
    logger.debug("REST request to delete Ticket : %s", ticket_id)
    await TicketService.delete_ticket(ticket_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=create_entity_deletion_alert(ENTITY_NAME, ticket_id),
    )
