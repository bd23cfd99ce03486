from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.enums import Branch, StudentGroup
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ProgressStudent
from .repository import ProgressRepository


def _to_student(r: Mapping[str, Any]) -> ProgressStudent:
    group = r.get("student_group")
    return ProgressStudent(
        student_id=str(r["id"]),
        name=r["name"],
        branch=Branch(r["maktab"]),
        student_group=StudentGroup(group) if group else None,
        last_progress_month=r.get("last_progress_month"),
    )


class MySQLProgressRepository(ProgressRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: str) -> Optional[ProgressStudent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, maktab, student_group, last_progress_month
                FROM students
                WHERE id=%s
                """,
                (student_id,),
            )
            row = fetchone(cur)
            return _to_student(row) if row else None

    def list_active(self, *, branch: Branch) -> Sequence[ProgressStudent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, maktab, student_group, last_progress_month
                FROM students
                WHERE maktab=%s AND status='active'
                ORDER BY name ASC
                """,
                (branch.value,),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def set_last_progress_month(self, *, student_id: str, month: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET last_progress_month=%s WHERE id=%s",
                (month, student_id),
            )
            return cur.rowcount > 0
