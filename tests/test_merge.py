from datetime import date

import pytest

from bug_tracker_api.app.domain import Label, Project, Ticket, merge_patch
from bug_tracker_api.app.schemas.ticket import TicketPatch


def test_null_fields_keep_stored_values():
    stored = Ticket(id="T1", title="A", done=False)
    merged = merge_patch(stored, {"title": None, "done": True})
    assert merged is stored
    assert stored.title == "A"
    assert stored.done is True


def test_absent_fields_keep_stored_values():
    stored = Ticket(id="T1", title="A", description="desc", due_date=date(2024, 1, 1))
    merge_patch(stored, {"description": "new"})
    assert stored.title == "A"
    assert stored.description == "new"
    assert stored.due_date == date(2024, 1, 1)


def test_false_is_a_present_value():
    stored = Ticket(id="T1", done=True)
    merge_patch(stored, {"done": False})
    assert stored.done is False


def test_pydantic_patch_only_applies_fields_that_were_sent():
    stored = Ticket(id="T1", title="A", description="desc")
    patch = TicketPatch.model_validate({"id": "T1", "due_date": "2024-05-01"})
    merge_patch(stored, patch)
    assert stored.title == "A"
    assert stored.description == "desc"
    assert stored.due_date == date(2024, 5, 1)


def test_entity_patch_uses_non_null_attributes():
    stored = Project(id="P1", name="old", description="kept")
    merge_patch(stored, Project(id="P1", name="new"))
    assert stored.name == "new"
    assert stored.description == "kept"


def test_merge_never_touches_associations_or_id():
    label = Label(id="L1")
    stored = Ticket(id="T1", labels=[label])
    merge_patch(stored, {"id": "other", "labels": [], "title": "x"})
    assert stored.id == "T1"
    assert list(stored.labels) == [label]
    assert stored.title == "x"


def test_merge_restricted_to_given_fields():
    stored = Ticket(id="T1", title="A", description="d")
    merge_patch(stored, {"title": "B", "description": "e"}, fields=["description"])
    assert stored.title == "A"
    assert stored.description == "e"


def test_unsupported_patch_type():
    with pytest.raises(TypeError):
        merge_patch(Ticket(id="T1"), ["title"])
