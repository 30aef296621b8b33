"""
Shared pieces of the SQLite repositories.

Each repository is a class with ``async`` classmethods that open a
short‑lived connection per call, in the same way the services talk to
the database.  Identifiers are 32‑character hex UUIDs assigned on the
first ``save``.
"""

import logging
import uuid
from datetime import date
from typing import ClassVar, Iterable, List, Optional, Sequence

from bug_tracker_api.app.core.db import get_connection, get_cursor

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid.uuid4().hex


def to_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def from_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def to_bool(value: Optional[int]) -> Optional[bool]:
    return None if value is None else bool(value)


def from_bool(value: Optional[bool]) -> Optional[int]:
    return None if value is None else int(value)


def order_by_clause(sort: Optional[Sequence[str]], allowed: Iterable[str], default: str = "id ASC") -> str:
    """Translate ``sort`` parameters (``"field,asc"``) into an ORDER BY list.

    Unknown fields and directions are ignored.  ``id`` is always appended
    so that pages are stable.
    """
    allowed = set(allowed)
    terms: List[str] = []
    for item in sort or ():
        field, _, direction = item.partition(",")
        field = field.strip()
        if field not in allowed:
            continue
        direction = direction.strip().upper() or "ASC"
        if direction not in {"ASC", "DESC"}:
            direction = "ASC"
        terms.append(f"{field} {direction}")
    if not terms:
        terms.append(default)
    if not any(term.startswith("id ") for term in terms):
        terms.append("id ASC")
    return ", ".join(terms)


class SqliteRepository:
    """Operations that only depend on the table name."""

    table: ClassVar[str]

    @classmethod
    async def exists_by_id(cls, entity_id: str) -> bool:
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT 1 FROM {cls.table} WHERE id = ?", (entity_id,)
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    @classmethod
    async def count(cls) -> int:
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT COUNT(*) AS count FROM {cls.table}").fetchone()
            return row["count"]
        finally:
            conn.close()

    @classmethod
    async def delete_by_id(cls, entity_id: str) -> None:
        with get_cursor() as cursor:
            cursor.execute(f"DELETE FROM {cls.table} WHERE id = ?", (entity_id,))
            if cursor.rowcount:
                logger.info("Deleted %s %s", cls.table, entity_id)

