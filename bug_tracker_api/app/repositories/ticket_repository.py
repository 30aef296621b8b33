"""
Persistence of ``Ticket`` entities.

A ticket row references its project and assignee by id; its labels are
rows of the ``ticket_labels`` join table.  Reads are eager: the
returned tickets carry their ``Project``, ``User`` and ``Label``
objects, and labels shared by several tickets of one result are the
same object, so ``label.tickets`` lists every loaded ticket that uses
it.
"""

import logging
import sqlite3
from typing import Dict, List, Optional, Sequence

from bug_tracker_api.app.core.db import get_connection, get_cursor
from bug_tracker_api.app.domain.entities import Label, Project, Ticket, User

from .base import (
    SqliteRepository,
    from_bool,
    from_date,
    new_id,
    order_by_clause,
    to_bool,
    to_date,
)

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {"id", "title", "description", "due_date", "done"}

TICKET_SELECT = """
    SELECT t.id, t.title, t.description, t.due_date, t.done,
           p.id AS project_id, p.name AS project_name, p.description AS project_description,
           u.id AS user_id, u.login AS user_login, u.email AS user_email,
           u.full_name AS user_full_name, u.role_id AS user_role_id, u.disabled AS user_disabled
    FROM tickets t
    LEFT JOIN projects p ON p.id = t.project_id
    LEFT JOIN users u ON u.id = t.assigned_to_id
"""


class TicketRepository(SqliteRepository):
    table = "tickets"

    @classmethod
    async def save(cls, ticket: Ticket) -> Ticket:
        """Insert or replace ``ticket`` together with its label associations.

        Referenced project, assignee and labels must already be saved.
        """
        unsaved = [label for label in ticket.labels if label.id is None]
        if unsaved:
            raise ValueError(f"Ticket references unsaved labels: {unsaved!r}")
        if ticket.id is None:
            ticket.id = new_id()
        with get_cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO tickets (id, title, description, due_date, done, project_id, assigned_to_id)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    title = excluded.title,
                    description = excluded.description,
                    due_date = excluded.due_date,
                    done = excluded.done,
                    project_id = excluded.project_id,
                    assigned_to_id = excluded.assigned_to_id
                """,
                (
                    ticket.id,
                    ticket.title,
                    ticket.description,
                    from_date(ticket.due_date),
                    from_bool(ticket.done),
                    ticket.project.id if ticket.project else None,
                    ticket.assigned_to.id if ticket.assigned_to else None,
                ),
            )
            cursor.execute("DELETE FROM ticket_labels WHERE ticket_id = ?", (ticket.id,))
            cursor.executemany(
                "INSERT INTO ticket_labels (ticket_id, label_id) VALUES (?, ?)",
                [(ticket.id, label_id) for label_id in ticket.labels.ids()],
            )
        logger.debug("Saved ticket %s with labels %s", ticket.id, ticket.labels.ids())
        return ticket

    @classmethod
    async def find_by_id(cls, ticket_id: str) -> Optional[Ticket]:
        tickets = await cls._query(f"{TICKET_SELECT} WHERE t.id = ?", (ticket_id,))
        return tickets[0] if tickets else None

    @classmethod
    async def find_all(cls) -> List[Ticket]:
        return await cls._query(f"{TICKET_SELECT} ORDER BY t.id ASC", ())

    @classmethod
    async def find_all_by_order_by_due_date_asc(
        cls, page: int, size: int, sort: Optional[Sequence[str]] = None
    ) -> List[Ticket]:
        """Return one page of tickets, earliest due date first.

        Tickets without a due date come first, as in an ascending sort of
        the document store.  ``sort`` adds secondary ordering.
        """
        secondary = order_by_clause(sort, SORTABLE_FIELDS)
        order_by = ", ".join(f"t.{term}" for term in secondary.split(", "))
        return await cls._query(
            f"{TICKET_SELECT} ORDER BY t.due_date ASC, {order_by} LIMIT ? OFFSET ?",
            (size, page * size),
        )

    @classmethod
    async def find_by_assigned_to_id(cls, user_id: str) -> List[Ticket]:
        return await cls._query(
            f"{TICKET_SELECT} WHERE t.assigned_to_id = ? ORDER BY t.due_date ASC, t.id ASC",
            (user_id,),
        )

    @classmethod
    async def _query(cls, sql: str, params: Sequence) -> List[Ticket]:
        conn = get_connection()
        try:
            rows = conn.execute(sql, tuple(params)).fetchall()
            tickets = [cls.row_to_ticket(row) for row in rows]
            cls._attach_labels(conn, tickets)
            return tickets
        finally:
            conn.close()

    @staticmethod
    def _attach_labels(conn: sqlite3.Connection, tickets: List[Ticket]) -> None:
        if not tickets:
            return
        by_id = {ticket.id: ticket for ticket in tickets}
        placeholders = ", ".join("?" for _ in by_id)
        rows = conn.execute(
            f"""
            SELECT tl.ticket_id, l.id, l.value
            FROM ticket_labels tl JOIN labels l ON l.id = tl.label_id
            WHERE tl.ticket_id IN ({placeholders})
            ORDER BY l.value ASC, l.id ASC
            """,
            list(by_id),
        ).fetchall()
        labels: Dict[str, Label] = {}
        for row in rows:
            label = labels.get(row["id"])
            if label is None:
                label = labels[row["id"]] = Label(id=row["id"], value=row["value"])
            by_id[row["ticket_id"]].add_label(label)

    @staticmethod
    def row_to_ticket(row: sqlite3.Row) -> Ticket:
        project = None
        if row["project_id"] is not None:
            project = Project(
                id=row["project_id"],
                name=row["project_name"],
                description=row["project_description"],
            )
        assigned_to = None
        if row["user_id"] is not None:
            assigned_to = User(
                id=row["user_id"],
                login=row["user_login"],
                email=row["user_email"],
                full_name=row["user_full_name"],
                role_id=row["user_role_id"],
                disabled=bool(row["user_disabled"]),
            )
        return Ticket(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            due_date=to_date(row["due_date"]),
            done=to_bool(row["done"]),
            project=project,
            assigned_to=assigned_to,
        )
