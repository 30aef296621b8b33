import asyncio
from datetime import date

import pytest

from bug_tracker_api.app.domain import Label, Project, Ticket, User
from bug_tracker_api.app.repositories import (
    LabelRepository,
    ProjectRepository,
    TicketRepository,
    UserRepository,
)


def run(coro):
    return asyncio.run(coro)


def test_save_assigns_identifier(database):
    project = run(ProjectRepository.save(Project(name="Backend")))
    assert project.id is not None
    assert len(project.id) == 32
    assert run(ProjectRepository.exists_by_id(project.id))
    assert run(ProjectRepository.count()) == 1


def test_save_existing_identifier_updates_in_place(database):
    project = run(ProjectRepository.save(Project(name="Backend")))
    run(ProjectRepository.save(Project(id=project.id, name="Frontend")))
    assert run(ProjectRepository.count()) == 1
    assert run(ProjectRepository.find_by_id(project.id)).name == "Frontend"


def test_find_missing_returns_none(database):
    assert run(TicketRepository.find_by_id("missing")) is None
    assert not run(TicketRepository.exists_by_id("missing"))


def test_ticket_round_trip_with_relationships(database):
    project = run(ProjectRepository.save(Project(name="Backend")))
    user = run(UserRepository.save(User(login="jdoe")))
    bug = run(LabelRepository.save(Label(value="bug")))
    ticket = Ticket(
        title="t1",
        description="d",
        due_date=date(2024, 5, 1),
        done=False,
        project=project,
        assigned_to=user,
        labels=[bug],
    )
    run(TicketRepository.save(ticket))

    loaded = run(TicketRepository.find_by_id(ticket.id))
    assert loaded == ticket
    assert loaded.due_date == date(2024, 5, 1)
    assert loaded.done is False
    assert loaded.project == project
    assert loaded.assigned_to.login == "jdoe"
    assert loaded.labels.ids() == [bug.id]
    assert loaded in loaded.labels.get(bug.id).tickets


def test_association_is_visible_from_both_sides(database):
    bug = run(LabelRepository.save(Label(value="bug")))
    ticket = run(TicketRepository.save(Ticket(title="t1", labels=[bug])))

    label = run(LabelRepository.find_by_id(bug.id))
    assert label.tickets.ids() == [ticket.id]

    label.set_tickets([])
    run(LabelRepository.save(label))
    assert len(run(TicketRepository.find_by_id(ticket.id)).labels) == 0


def test_deleting_label_removes_association(database):
    bug = run(LabelRepository.save(Label(value="bug")))
    ticket = run(TicketRepository.save(Ticket(title="t1", labels=[bug])))

    run(LabelRepository.delete_by_id(bug.id))

    assert len(run(TicketRepository.find_by_id(ticket.id)).labels) == 0


def test_deleting_project_clears_ticket_reference(database):
    project = run(ProjectRepository.save(Project(name="Backend")))
    ticket = run(TicketRepository.save(Ticket(title="t1", project=project)))

    run(ProjectRepository.delete_by_id(project.id))

    assert run(TicketRepository.find_by_id(ticket.id)).project is None


def test_tickets_sharing_a_label_share_the_label_object(database):
    bug = run(LabelRepository.save(Label(value="bug")))
    first = run(TicketRepository.save(Ticket(title="a", labels=[bug])))
    second = run(TicketRepository.save(Ticket(title="b", labels=[bug])))

    tickets = run(TicketRepository.find_all())
    labels = [ticket.labels.get(bug.id) for ticket in tickets]
    assert labels[0] is labels[1]
    assert labels[0].tickets.ids() == sorted([first.id, second.id])


def test_saving_unsaved_label_reference_fails(database):
    with pytest.raises(ValueError):
        run(TicketRepository.save(Ticket(title="t1", labels=[Label(value="bug")])))


def test_page_ordered_by_due_date(database):
    for day in (3, 1, 2):
        run(TicketRepository.save(Ticket(title=f"day {day}", due_date=date(2024, 1, day))))
    first_page = run(TicketRepository.find_all_by_order_by_due_date_asc(0, 2))
    second_page = run(TicketRepository.find_all_by_order_by_due_date_asc(1, 2))
    assert [t.title for t in first_page] == ["day 1", "day 2"]
    assert [t.title for t in second_page] == ["day 3"]


def test_find_by_assigned_to_id(database):
    user = run(UserRepository.save(User(login="jdoe")))
    run(TicketRepository.save(Ticket(title="mine", assigned_to=user)))
    run(TicketRepository.save(Ticket(title="other")))
    assert [t.title for t in run(TicketRepository.find_by_assigned_to_id(user.id))] == ["mine"]


def test_user_password_kept_when_not_given(database):
    user = run(UserRepository.save(User(login="jdoe"), password_hash="salt$hash"))
    user.full_name = "John Doe"
    run(UserRepository.save(user))
    assert run(UserRepository.find_password_hash("jdoe")) == "salt$hash"
    assert run(UserRepository.find_by_login("jdoe")).full_name == "John Doe"


def test_labels_of_one_result_share_loaded_tickets(database):
    bug = run(LabelRepository.save(Label(value="bug")))
    ui = run(LabelRepository.save(Label(value="ui")))
    ticket = run(TicketRepository.save(Ticket(title="t1", labels=[bug, ui])))
    run(TicketRepository.save(Ticket(title="t2", labels=[ui])))

    labels = run(LabelRepository.find_all())

    assert [label.value for label in labels] == ["bug", "ui"]
    assert len(labels[1].tickets) == 2
    shared = labels[0].tickets.get(ticket.id)
    assert shared is labels[1].tickets.get(ticket.id)
    assert sorted(shared.labels.ids()) == sorted([bug.id, ui.id])
