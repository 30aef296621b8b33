"""
Persistence collaborators.

One repository per entity, each exposing ``async`` ``save``,
``find_by_id``, ``exists_by_id``, ``delete_by_id``, ``find_all`` and
``count`` over the SQLite tables created by ``core.db``.
"""

from .label_repository import LabelRepository
from .project_repository import ProjectRepository
from .ticket_repository import TicketRepository
from .user_repository import UserRepository

__all__ = ["LabelRepository", "ProjectRepository", "TicketRepository", "UserRepository"]
