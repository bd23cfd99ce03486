from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import Branch
from ..database.connection import DatabaseConnection
from ..database.mysql_base import date_window, db_cursor, fetchall
from .model import AttendanceEvidence
from .repository import TeacherAttendanceRepository

_UPSERT_SQL = """
    INSERT INTO teacher_attendance(teacher_name, maktab, date, status, marked_by, marked_by_name, auto_marked)
    VALUES(%s,%s,%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE
        status=VALUES(status),
        marked_by=VALUES(marked_by),
        marked_by_name=VALUES(marked_by_name),
        auto_marked=VALUES(auto_marked)
"""


def _params(r: AttendanceEvidence) -> tuple:
    return (
        r.teacher_name,
        r.branch.value,
        r.date,
        r.status.value,
        r.marked_by,
        r.marked_by_name,
        int(r.auto_marked),
    )


class MySQLTeacherAttendanceRepository(TeacherAttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_explicit(
        self, *, start: date, end: date, branch: Optional[Branch] = None
    ) -> Sequence[Mapping[str, Any]]:
        where, params = date_window("date", start, end, branch=branch.value if branch else None)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT teacher_name, maktab, date, status, marked_by, marked_by_name, auto_marked
                FROM teacher_attendance
                WHERE {where}
                ORDER BY id ASC
                """,
                tuple(params),
            )
            return fetchall(cur)

    def list_legacy(
        self, *, start: date, end: date, branch: Optional[Branch] = None
    ) -> Sequence[Mapping[str, Any]]:
        where, params = date_window("date", start, end, branch=branch.value if branch else None)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT performed_by_name, maktab, date
                FROM attendance_audit_logs
                WHERE action='created' AND {where}
                ORDER BY id ASC
                """,
                tuple(params),
            )
            return fetchall(cur)

    def list_for_day(self, *, branch: Branch, day: date) -> Sequence[AttendanceEvidence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT teacher_name, maktab, date, status, marked_by, marked_by_name, auto_marked
                FROM teacher_attendance
                WHERE maktab=%s AND date=%s
                ORDER BY teacher_name ASC
                """,
                (branch.value, day),
            )
            return [AttendanceEvidence.from_row(r) for r in fetchall(cur)]

    def upsert(self, record: AttendanceEvidence) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_UPSERT_SQL, _params(record))

    def upsert_many(self, records: Sequence[AttendanceEvidence]) -> int:
        if not records:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(_UPSERT_SQL, [_params(r) for r in records])
        return len(records)

    def delete(self, *, branch: Branch, day: date, teacher_name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM teacher_attendance WHERE teacher_name=%s AND maktab=%s AND date=%s",
                (teacher_name, branch.value, day),
            )
            return cur.rowcount > 0
