"""
Synchronizer for the many-to-many association between tickets and labels.

A ticket's ``labels`` and a label's ``tickets`` are two views of the
same association: ``label in ticket.labels`` holds exactly when
``ticket in label.tickets``.  Every function below updates both sides
before returning, under one process-wide re-entrant lock, so mutating
calls exclude each other and none starts from a half-updated
association.  Plain reads of ``ticket.labels`` or ``label.tickets`` do
not take the lock.

The ``Ticket`` and ``Label`` methods of the same names delegate here.
"""

import threading
from typing import TYPE_CHECKING, Iterable, Optional

from .entity_set import EntitySet

if TYPE_CHECKING:
    from .entities import Label, Ticket

_association_lock = threading.RLock()


def add_label(ticket: "Ticket", label: "Label") -> None:
    """Associate ``label`` with ``ticket``; does nothing if already associated."""
    with _association_lock:
        ticket.labels.add(label)
        label.tickets.add(ticket)


def remove_label(ticket: "Ticket", label: "Label") -> None:
    """Dissociate ``label`` from ``ticket``; does nothing if not associated."""
    with _association_lock:
        ticket.labels.discard(label)
        label.tickets.discard(ticket)


def set_labels(ticket: "Ticket", labels: Optional[Iterable["Label"]]) -> None:
    """Make ``labels`` the exact label set of ``ticket``.

    Labels that were on the ticket but are not in ``labels`` lose the
    ticket from their ``tickets``; every label in ``labels`` gains it.
    ``None`` or an empty iterable detaches the ticket from all labels.
    """
    with _association_lock:
        new_labels = EntitySet(labels)
        for old_label in ticket.labels:
            if old_label not in new_labels:
                old_label.tickets.discard(ticket)
        ticket.labels.clear()
        for label in new_labels:
            ticket.labels.add(label)
            label.tickets.add(ticket)


def add_ticket(label: "Label", ticket: "Ticket") -> None:
    add_label(ticket, label)


def remove_ticket(label: "Label", ticket: "Ticket") -> None:
    remove_label(ticket, label)


def set_tickets(label: "Label", tickets: Optional[Iterable["Ticket"]]) -> None:
    """Make ``tickets`` the exact ticket set of ``label`` (mirror of ``set_labels``)."""
    with _association_lock:
        new_tickets = EntitySet(tickets)
        for old_ticket in label.tickets:
            if old_ticket not in new_tickets:
                old_ticket.labels.discard(label)
        label.tickets.clear()
        for ticket in new_tickets:
            label.tickets.add(ticket)
            ticket.labels.add(label)
