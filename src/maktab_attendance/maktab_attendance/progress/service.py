from __future__ import annotations

import logging
from datetime import date

from ..common.datetime_utils import month_key
from ..core.enums import Branch
from ..core.exceptions import NotFoundError
from .model import ProgressStudent
from .prompt import should_show_prompt
from .repository import ProgressRepository

logger = logging.getLogger(__name__)


class ProgressService:
    def __init__(self, students: ProgressRepository):
        self._students = students

    def prompt_for(self, *, student_id: str, branch: Branch, today: date) -> bool:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return should_show_prompt(branch, student, today)

    def students_due(self, *, branch: Branch, today: date) -> list[ProgressStudent]:
        return [s for s in self._students.list_active(branch=branch) if should_show_prompt(branch, s, today)]

    def mark_recorded(self, *, student_id: str, today: date) -> str:
        month = month_key(today)
        if not self._students.set_last_progress_month(student_id=student_id, month=month):
            raise NotFoundError("Student not found")
        logger.info("Progress recorded for student %s (%s)", student_id, month)
        return month
