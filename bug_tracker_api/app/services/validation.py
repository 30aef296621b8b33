"""
Identifier checks shared by the create, update and partial-update flows.

All checks run before anything is written; existence is probed
explicitly with ``exists_by_id`` instead of being inferred from a
failed write.
"""

from typing import Iterable, List, Optional, Type

from bug_tracker_api.app.core.errors import (
    EntityNotFound,
    IdentifierConflict,
    IdentifierMismatch,
    IdentifierMissing,
)
from bug_tracker_api.app.repositories.base import SqliteRepository


def check_new(entity_name: str, body_id: Optional[str]) -> None:
    if body_id is not None:
        raise IdentifierConflict(entity_name)


def check_update(entity_name: str, path_id: str, body_id: Optional[str]) -> None:
    if body_id is None:
        raise IdentifierMissing(entity_name)
    if body_id != path_id:
        raise IdentifierMismatch(entity_name)


async def ensure_exists(repository: Type[SqliteRepository], entity_name: str, entity_id: str) -> None:
    if not await repository.exists_by_id(entity_id):
        raise EntityNotFound(entity_name, entity_id)


async def resolve(repository, entity_name: str, entity_id: Optional[str]):
    """Load the referenced entity, or ``None`` when no reference was given."""
    if entity_id is None:
        return None
    entity = await repository.find_by_id(entity_id)
    if entity is None:
        raise EntityNotFound(entity_name, entity_id)
    return entity


async def resolve_all(repository, entity_name: str, entity_ids: Optional[Iterable[str]]) -> List:
    """Load every referenced entity; duplicates collapse to one."""
    resolved = []
    for entity_id in dict.fromkeys(entity_ids or ()):
        resolved.append(await resolve(repository, entity_name, entity_id))
    return resolved
