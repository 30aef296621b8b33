"""
Persistence of ``User`` entities in the ``users`` table.

The password hash never leaves this module except through
``find_password_hash``; ``User`` entities carry profile data only.
"""

import sqlite3
from typing import List, Optional

from bug_tracker_api.app.core.db import ROLE_USER, get_connection, get_cursor
from bug_tracker_api.app.domain.entities import User

from .base import SqliteRepository, new_id

USER_COLUMNS = "id, login, email, full_name, role_id, disabled"


class UserRepository(SqliteRepository):
    table = "users"

    @classmethod
    async def save(cls, user: User, password_hash: Optional[str] = None) -> User:
        """Insert or update ``user``.

        ``password_hash`` is written when given; on update an omitted hash
        keeps the stored one.
        """
        if user.id is None:
            user.id = new_id()
        if user.role_id is None:
            user.role_id = ROLE_USER
        with get_cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO users (id, login, email, full_name, password, role_id, disabled)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    login = excluded.login,
                    email = excluded.email,
                    full_name = excluded.full_name,
                    password = COALESCE(excluded.password, users.password),
                    role_id = excluded.role_id,
                    disabled = excluded.disabled
                """,
                (
                    user.id,
                    user.login,
                    user.email,
                    user.full_name,
                    password_hash,
                    user.role_id,
                    int(user.disabled),
                ),
            )
        return user

    @classmethod
    async def find_by_id(cls, user_id: str) -> Optional[User]:
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
            return cls.row_to_user(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def find_by_login(cls, login: str) -> Optional[User]:
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT {USER_COLUMNS} FROM users WHERE login = ?", (login,)).fetchone()
            return cls.row_to_user(row) if row else None
        finally:
            conn.close()

    @classmethod
    async def find_password_hash(cls, login: str) -> Optional[str]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT password FROM users WHERE login = ?", (login,)).fetchone()
            return row["password"] if row else None
        finally:
            conn.close()

    @classmethod
    async def find_all(cls) -> List[User]:
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT {USER_COLUMNS} FROM users ORDER BY login ASC").fetchall()
            return [cls.row_to_user(row) for row in rows]
        finally:
            conn.close()

    @staticmethod
    def row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            login=row["login"],
            email=row["email"],
            full_name=row["full_name"],
            role_id=row["role_id"],
            disabled=bool(row["disabled"]),
        )
