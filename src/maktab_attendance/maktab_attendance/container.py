from __future__ import annotations

from dataclasses import dataclass

from .database.connection import DBConfig, DatabaseConnection
from .progress.mysql_progress_repository import MySQLProgressRepository
from .progress.service import ProgressService
from .teacher_attendance.mysql_attendance_repository import MySQLTeacherAttendanceRepository
from .teacher_attendance.mysql_directory_repository import MySQLTeacherDirectory
from .teacher_attendance.mysql_note_repository import MySQLHolidayRepository, MySQLTeacherNoteRepository
from .teacher_attendance.reconciler import AttendanceReconciler
from .teacher_attendance.service import TeacherAttendanceService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    teacher_attendance_repo: MySQLTeacherAttendanceRepository
    teacher_directory: MySQLTeacherDirectory
    teacher_notes_repo: MySQLTeacherNoteRepository
    holidays_repo: MySQLHolidayRepository
    progress_repo: MySQLProgressRepository

    teacher_attendance_service: TeacherAttendanceService
    progress_service: ProgressService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    teacher_attendance_repo = MySQLTeacherAttendanceRepository(conn)
    teacher_directory = MySQLTeacherDirectory(conn)
    teacher_notes_repo = MySQLTeacherNoteRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    progress_repo = MySQLProgressRepository(conn)

    teacher_attendance_service = TeacherAttendanceService(
        teacher_attendance_repo,
        teacher_directory,
        teacher_notes_repo,
        holidays_repo,
        reconciler=AttendanceReconciler(),
    )
    progress_service = ProgressService(progress_repo)

    return Container(
        conn=conn,
        teacher_attendance_repo=teacher_attendance_repo,
        teacher_directory=teacher_directory,
        teacher_notes_repo=teacher_notes_repo,
        holidays_repo=holidays_repo,
        progress_repo=progress_repo,
        teacher_attendance_service=teacher_attendance_service,
        progress_service=progress_service,
    )
