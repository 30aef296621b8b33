import asyncio

import pytest

from bug_tracker_api.app.core.errors import EntityNotFound, IdentifierMismatch
from bug_tracker_api.app.repositories import TicketRepository
from bug_tracker_api.app.schemas.label import LabelWrite
from bug_tracker_api.app.schemas.ticket import TicketPatch, TicketWrite
from bug_tracker_api.app.services.label_service import LabelService
from bug_tracker_api.app.services.ticket_service import TicketService


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def saved_tickets(monkeypatch):
    calls = []
    original = TicketRepository.save

    async def spy(ticket):
        calls.append(ticket)
        return await original(ticket)

    monkeypatch.setattr(TicketRepository, "save", spy)
    return calls


def test_patch_of_missing_ticket_fails_before_any_write(database, saved_tickets):
    with pytest.raises(EntityNotFound) as excinfo:
        run(TicketService.partial_update_ticket("missing", TicketPatch(id="missing", title="x")))
    assert excinfo.value.entity_name == "ticket"
    assert saved_tickets == []


def test_mismatched_id_fails_before_existence_probe(database, saved_tickets, monkeypatch):
    async def probe(ticket_id):
        raise AssertionError("probe must not run")

    monkeypatch.setattr(TicketRepository, "exists_by_id", probe)
    with pytest.raises(IdentifierMismatch):
        run(TicketService.update_ticket("T1", TicketWrite(id="T2")))
    assert saved_tickets == []


def test_patch_merges_into_stored_ticket(database, saved_tickets):
    ticket = run(TicketService.create_ticket(TicketWrite(title="A", description="desc")))

    patched = run(
        TicketService.partial_update_ticket(
            ticket.id, TicketPatch.model_validate({"id": ticket.id, "title": None, "done": True})
        )
    )

    assert (patched.title, patched.description, patched.done) == ("A", "desc", True)
    assert len(saved_tickets) == 2


def test_created_label_is_linked_on_both_sides(database):
    ticket = run(TicketService.create_ticket(TicketWrite(title="t1")))
    label = run(LabelService.create_label(LabelWrite(value="bug", tickets=[{"id": ticket.id}])))

    assert ticket.id in label.tickets.ids()
    assert label in label.tickets.get(ticket.id).labels
    assert run(TicketService.get_ticket(ticket.id)).labels.ids() == [label.id]
