"""
Entities of the bug tracker.

Every entity has a string ``id`` that is ``None`` until a repository
saves it for the first time.  Equality follows the identifier:

* an entity is always equal to itself;
* two distinct instances are equal only when they are of the same type
  and both carry the same non-``None`` id;
* an unsaved entity is never equal to another instance.

Entities are mutable and therefore unhashable; collections of entities
use :class:`EntitySet`, which looks members up by identifier.
"""

from datetime import date
from typing import ClassVar, Iterable, Optional, Tuple

from . import relations
from .entity_set import EntitySet


class Entity:
    """Base class providing identifier-based equality."""

    entity_name: ClassVar[str] = "entity"
    # Scalar fields a merge-patch may overwrite.
    patchable_fields: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, id: Optional[str] = None) -> None:
        self.id = id

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return False
        return self.id is not None and self.id == other.id

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    __hash__ = None  # type: ignore[assignment]


class User(Entity):
    """An account.  The core only consumes ``id``; the rest is profile data."""

    entity_name = "user"

    def __init__(
        self,
        id: Optional[str] = None,
        login: Optional[str] = None,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        role_id: Optional[int] = None,
        disabled: bool = False,
    ) -> None:
        super().__init__(id)
        self.login = login
        self.email = email
        self.full_name = full_name
        self.role_id = role_id
        self.disabled = disabled

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, login={self.login!r})"


class Project(Entity):
    entity_name = "project"
    patchable_fields = ("name", "description")

    def __init__(
        self,
        id: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        super().__init__(id)
        self.name = name
        self.description = description

    def __repr__(self) -> str:
        return f"Project(id={self.id!r}, name={self.name!r})"


class Ticket(Entity):
    """A ticket; owning side of the ticket/label association."""

    entity_name = "ticket"
    patchable_fields = ("title", "description", "due_date", "done")

    def __init__(
        self,
        id: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        due_date: Optional[date] = None,
        done: Optional[bool] = None,
        project: Optional[Project] = None,
        assigned_to: Optional[User] = None,
        labels: Optional[Iterable["Label"]] = None,
    ) -> None:
        super().__init__(id)
        self.title = title
        self.description = description
        self.due_date = due_date
        self.done = done
        self.project = project
        self.assigned_to = assigned_to
        self._labels = EntitySet()
        if labels:
            relations.set_labels(self, labels)

    @property
    def labels(self) -> EntitySet:
        return self._labels

    @labels.setter
    def labels(self, labels: Optional[Iterable["Label"]]) -> None:
        relations.set_labels(self, labels)

    def set_labels(self, labels: Optional[Iterable["Label"]]) -> "Ticket":
        relations.set_labels(self, labels)
        return self

    def add_label(self, label: "Label") -> "Ticket":
        relations.add_label(self, label)
        return self

    def remove_label(self, label: "Label") -> "Ticket":
        relations.remove_label(self, label)
        return self

    def __repr__(self) -> str:
        return (
            f"Ticket(id={self.id!r}, title={self.title!r}, description={self.description!r}, "
            f"due_date={self.due_date!r}, done={self.done!r})"
        )


class Label(Entity):
    """A label; inverse side of the ticket/label association."""

    entity_name = "label"
    patchable_fields = ("value",)

    def __init__(
        self,
        id: Optional[str] = None,
        value: Optional[str] = None,
        tickets: Optional[Iterable[Ticket]] = None,
    ) -> None:
        super().__init__(id)
        self.value = value
        self._tickets = EntitySet()
        if tickets:
            relations.set_tickets(self, tickets)

    @property
    def tickets(self) -> EntitySet:
        return self._tickets

    @tickets.setter
    def tickets(self, tickets: Optional[Iterable[Ticket]]) -> None:
        relations.set_tickets(self, tickets)

    def set_tickets(self, tickets: Optional[Iterable[Ticket]]) -> "Label":
        relations.set_tickets(self, tickets)
        return self

    def add_ticket(self, ticket: Ticket) -> "Label":
        relations.add_ticket(self, ticket)
        return self

    def remove_ticket(self, ticket: Ticket) -> "Label":
        relations.remove_ticket(self, ticket)
        return self

    def __repr__(self) -> str:
        return f"Label(id={self.id!r}, value={self.value!r})"

