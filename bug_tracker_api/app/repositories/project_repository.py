"""
Persistence of ``Project`` entities in the ``projects`` table.
"""

import sqlite3
from typing import List, Optional, Sequence

from bug_tracker_api.app.core.db import get_connection, get_cursor
from bug_tracker_api.app.domain.entities import Project

from .base import SqliteRepository, new_id, order_by_clause

SORTABLE_FIELDS = {"id", "name", "description"}


class ProjectRepository(SqliteRepository):
    table = "projects"

    @classmethod
    async def save(cls, project: Project) -> Project:
        """Insert or replace ``project``; assigns an id when it has none."""
        if project.id is None:
            project.id = new_id()
        with get_cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO projects (id, name, description) VALUES (?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET name = excluded.name, description = excluded.description
                """,
                (project.id, project.name, project.description),
            )
        return project

    @classmethod
    async def find_by_id(cls, project_id: str) -> Optional[Project]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,)).fetchone()
            return cls.row_to_project(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def find_all(cls) -> List[Project]:
        conn = get_connection()
        try:
            rows = conn.execute("SELECT * FROM projects ORDER BY id ASC").fetchall()
            return [cls.row_to_project(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def find_all_by(cls, page: int, size: int, sort: Optional[Sequence[str]] = None) -> List[Project]:
        """Return one page of projects ordered by ``sort`` (default: id)."""
        order_by = order_by_clause(sort, SORTABLE_FIELDS)
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT * FROM projects ORDER BY {order_by} LIMIT ? OFFSET ?",
                (size, page * size),
            ).fetchall()
            return [cls.row_to_project(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def row_to_project(row: sqlite3.Row) -> Project:
        return Project(id=row["id"], name=row["name"], description=row["description"])
