"""
Persistence of ``Label`` entities.

A label's ``tickets`` are read from the same ``ticket_labels`` rows that
give tickets their labels, with one join query per result.  Loaded
tickets carry their scalar fields only (no project or assignee); a
ticket carrying several labels of the result is one shared object.
"""

import sqlite3
from typing import Dict, List, Optional, Sequence

from bug_tracker_api.app.core.db import get_connection, get_cursor
from bug_tracker_api.app.domain.entities import Label, Ticket

from .base import SqliteRepository, new_id, to_bool, to_date


class LabelRepository(SqliteRepository):
    table = "labels"

    @classmethod
    async def save(cls, label: Label) -> Label:
        """Insert or replace ``label`` together with its ticket associations."""
        unsaved = [ticket for ticket in label.tickets if ticket.id is None]
        if unsaved:
            raise ValueError(f"Label references unsaved tickets: {unsaved!r}")
        if label.id is None:
            label.id = new_id()
        with get_cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO labels (id, value) VALUES (?, ?)
                ON CONFLICT(id) DO UPDATE SET value = excluded.value
                """,
                (label.id, label.value),
            )
            cursor.execute("DELETE FROM ticket_labels WHERE label_id = ?", (label.id,))
            cursor.executemany(
                "INSERT INTO ticket_labels (ticket_id, label_id) VALUES (?, ?)",
                [(ticket_id, label.id) for ticket_id in label.tickets.ids()],
            )
        return label

    @classmethod
    async def find_by_id(cls, label_id: str) -> Optional[Label]:
        labels = await cls._query("SELECT * FROM labels WHERE id = ?", (label_id,))
        return labels[0] if labels else None

    @classmethod
    async def find_all(cls) -> List[Label]:
        return await cls._query("SELECT * FROM labels ORDER BY value ASC, id ASC", ())

    @classmethod
    async def _query(cls, sql: str, params: Sequence) -> List[Label]:
        conn = get_connection()
        try:
            labels = [cls.row_to_label(row) for row in conn.execute(sql, tuple(params)).fetchall()]
            cls._attach_tickets(conn, labels)
            return labels
        finally:
            conn.close()

    @staticmethod
    def _attach_tickets(conn: sqlite3.Connection, labels: List[Label]) -> None:
        if not labels:
            return
        by_id = {label.id: label for label in labels}
        placeholders = ", ".join("?" for _ in by_id)
        rows = conn.execute(
            f"""
            SELECT tl.label_id, t.id, t.title, t.description, t.due_date, t.done
            FROM ticket_labels tl JOIN tickets t ON t.id = tl.ticket_id
            WHERE tl.label_id IN ({placeholders})
            ORDER BY t.due_date ASC, t.id ASC
            """,
            list(by_id),
        ).fetchall()
        tickets: Dict[str, Ticket] = {}
        for row in rows:
            ticket = tickets.get(row["id"])
            if ticket is None:
                ticket = tickets[row["id"]] = Ticket(
                    id=row["id"],
                    title=row["title"],
                    description=row["description"],
                    due_date=to_date(row["due_date"]),
                    done=to_bool(row["done"]),
                )
            by_id[row["label_id"]].add_ticket(ticket)

    @staticmethod
    def row_to_label(row: sqlite3.Row) -> Label:
        return Label(id=row["id"], value=row["value"])
