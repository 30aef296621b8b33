"""
Set of entities with identifier-based membership.

Entities are mutable and compare by identifier, so they are not
hashable.  ``EntitySet`` keys its members instead: a saved entity by
``(type, id)``, an unsaved one by its object identity.  Members keep
their insertion order.

An unsaved member that receives its id after being added is re-keyed
on the next access.  If another member already carries that id the two
collapse into one, the earlier member being kept, so the set never
holds two members with the same identifier.  Saved members are assumed
to keep their id.
"""

from collections.abc import MutableSet
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Set, Tuple

Key = Tuple[Hashable, Hashable]


def _key(entity: Any) -> Key:
    entity_id = getattr(entity, "id", None)
    if entity_id is None:
        return (None, id(entity))
    return (type(entity), entity_id)


class EntitySet(MutableSet):
    """An insertion-ordered, duplicate-free collection of entities."""

    __slots__ = ("_members", "_unsaved")

    def __init__(self, entities: Optional[Iterable[Any]] = None) -> None:
        self._members: Dict[Key, Any] = {}
        # Keys of members that had no id when they were inserted.
        self._unsaved: Set[Key] = set()
        for entity in entities or ():
            self._insert(entity)

    def _insert(self, entity: Any) -> None:
        key = _key(entity)
        if key in self._members:
            return
        self._members[key] = entity
        if key[0] is None:
            self._unsaved.add(key)

    def _rekey(self) -> None:
        if not any(getattr(self._members[key], "id", None) is not None for key in self._unsaved):
            return
        members = list(self._members.values())
        self._members = {}
        self._unsaved = set()
        for member in members:
            self._insert(member)

    def __contains__(self, entity: object) -> bool:
        self._rekey()
        member = self._members.get(_key(entity))
        return member is not None and member == entity

    def __iter__(self) -> Iterator[Any]:
        self._rekey()
        return iter(list(self._members.values()))

    def __len__(self) -> int:
        self._rekey()
        return len(self._members)

    def add(self, entity: Any) -> None:
        self._rekey()
        self._insert(entity)

    def discard(self, entity: Any) -> None:
        self._rekey()
        key = _key(entity)
        member = self._members.get(key)
        if member is not None and member == entity:
            del self._members[key]
            self._unsaved.discard(key)

    def clear(self) -> None:
        self._members = {}
        self._unsaved = set()

    def get(self, entity_id: str) -> Optional[Any]:
        """Return the member whose id is ``entity_id``, if any."""
        self._rekey()
        for (kind, key_id), member in self._members.items():
            if kind is not None and key_id == entity_id:
                return member
        return None

    def ids(self) -> List[str]:
        """Identifiers of the saved members, in insertion order."""
        self._rekey()
        return [key_id for kind, key_id in self._members if kind is not None]

    def __repr__(self) -> str:
        return f"EntitySet({list(self._members.values())!r})"
