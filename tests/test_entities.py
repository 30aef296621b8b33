import pytest

from bug_tracker_api.app.domain import EntitySet, Label, Project, Ticket, User


def test_entity_is_equal_to_itself():
    ticket = Ticket(title="t1")
    assert ticket == ticket
    ticket.id = "T1"
    assert ticket == ticket


def test_unsaved_entities_are_never_equal():
    assert Label(value="bug") != Label(value="bug")
    assert Ticket() != Ticket()


def test_entities_with_same_id_are_equal():
    first = Label(value="bug")
    second = Label(value="feature")
    first.id = "X"
    second.id = "X"
    assert first == second


def test_saved_entity_differs_from_unsaved_one():
    assert Project(id="P1") != Project()
    assert Project() != Project(id="P1")


def test_entities_of_different_types_are_not_equal():
    assert Label(id="X") != Ticket(id="X")
    assert Project(id="X") != User(id="X")


def test_entities_are_unhashable():
    with pytest.raises(TypeError):
        hash(Ticket(id="T1"))


def test_entity_set_deduplicates_by_id():
    entities = EntitySet([Label(id="L1", value="a"), Label(id="L1", value="b"), Label(id="L2")])
    assert len(entities) == 2
    assert entities.ids() == ["L1", "L2"]
    assert entities.get("L1").value == "a"
    assert entities.get("missing") is None


def test_entity_set_keeps_distinct_unsaved_members():
    first, second = Label(), Label()
    entities = EntitySet([first, second, first])
    assert len(entities) == 2
    assert entities.ids() == []


def test_entity_set_finds_member_saved_after_insertion():
    label = Label(value="bug")
    entities = EntitySet([label])
    label.id = "L1"
    assert Label(id="L1") in entities
    entities.discard(Label(id="L1"))
    assert len(entities) == 0


def test_entity_set_equality_ignores_order():
    assert EntitySet([Label(id="a"), Label(id="b")]) == EntitySet([Label(id="b"), Label(id="a")])


def test_member_saved_with_existing_id_collapses():
    pending = Label(value="bug")
    entities = EntitySet([pending, Label(id="L1")])
    pending.id = "L1"
    assert len(entities) == 1
    assert entities.ids() == ["L1"]
    assert list(entities) == [pending]


def test_large_entity_set_keeps_membership_by_id():
    count = 20000
    entities = EntitySet(Ticket(id=f"T{i}") for i in range(count))
    for i in range(count):
        entities.add(Ticket(id=f"T{i}"))
    assert len(entities) == count
    assert Ticket(id=f"T{count - 1}") in entities
    assert Ticket(id="missing") not in entities
    entities.discard(Ticket(id="T0"))
    assert entities.ids()[0] == "T1"
