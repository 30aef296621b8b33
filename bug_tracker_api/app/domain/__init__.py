"""
Entity model of the bug tracker.

Plain Python classes for projects, tickets, labels and users, the
synchronizer that keeps the ticket/label association symmetric and the
merge routine used by partial updates.  Nothing here depends on
FastAPI or on the database; repositories translate between these
objects and SQLite rows, services translate between them and the
pydantic schemas.
"""

from .entity_set import EntitySet
from .entities import Entity, Label, Project, Ticket, User
from .merge import merge_patch

__all__ = ["Entity", "EntitySet", "Label", "Project", "Ticket", "User", "merge_patch"]
