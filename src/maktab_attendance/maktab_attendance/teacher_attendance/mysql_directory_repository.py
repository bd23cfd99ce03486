from __future__ import annotations

from typing import Sequence

from ..core.enums import Branch
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Teacher
from .repository import TeacherDirectory


class MySQLTeacherDirectory(TeacherDirectory):
    """Teachers are the profiles with a maktab assigned; admin-only users have none."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_valid_teacher_names(self) -> set[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT full_name FROM profiles WHERE maktab IS NOT NULL")
            return {r["full_name"] for r in fetchall(cur) if r.get("full_name")}

    def list_teachers(self, *, branch: Branch) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT full_name, maktab
                FROM profiles
                WHERE maktab=%s AND full_name IS NOT NULL
                ORDER BY full_name ASC
                """,
                (branch.value,),
            )
            return [Teacher(full_name=r["full_name"], branch=Branch(r["maktab"])) for r in fetchall(cur)]
