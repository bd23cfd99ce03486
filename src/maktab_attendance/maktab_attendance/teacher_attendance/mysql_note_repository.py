from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import Branch, NoteType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import date_window, db_cursor, fetchall
from .model import SchoolHoliday, TeacherNote
from .repository import HolidayRepository, TeacherNoteRepository


class MySQLTeacherNoteRepository(TeacherNoteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_notes(self, *, start: date, end: date, branch: Optional[Branch] = None) -> Sequence[TeacherNote]:
        where, params = date_window("date", start, end, branch=branch.value if branch else None)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT teacher_name, maktab, date, note, note_type
                FROM teacher_attendance_notes
                WHERE {where}
                ORDER BY date ASC, teacher_name ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        notes = []
        for r in rows:
            try:
                note_type = NoteType(r.get("note_type") or NoteType.OTHER.value)
            except ValueError:
                note_type = NoteType.OTHER
            notes.append(
                TeacherNote(
                    teacher_name=r["teacher_name"],
                    branch=Branch(r["maktab"]),
                    date=r["date"],
                    note=r.get("note") or "",
                    note_type=note_type,
                )
            )
        return notes

    def upsert_notes(self, notes: Sequence[TeacherNote]) -> int:
        if not notes:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO teacher_attendance_notes(teacher_name, maktab, date, note, note_type)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE note=VALUES(note), note_type=VALUES(note_type)
                """,
                [(n.teacher_name, n.branch.value, n.date, n.note, n.note_type.value) for n in notes],
            )
        return len(notes)


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_holidays(self, *, start: date, end: date) -> Sequence[date]:
        where, params = date_window("date", start, end)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT date FROM school_holidays WHERE {where} ORDER BY date ASC", tuple(params))
            return [r["date"] for r in fetchall(cur)]

    def list_all(self) -> Sequence[SchoolHoliday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT date, reason FROM school_holidays ORDER BY date ASC")
            return [SchoolHoliday(date=r["date"], reason=r["reason"]) for r in fetchall(cur)]

    def add_holidays(self, holidays: Sequence[SchoolHoliday]) -> int:
        if not holidays:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "INSERT IGNORE INTO school_holidays(date, reason) VALUES(%s,%s)",
                [(h.date, h.reason) for h in holidays],
            )
            return cur.rowcount

    def remove_holiday(self, day: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM school_holidays WHERE date=%s", (day,))
            return cur.rowcount > 0
