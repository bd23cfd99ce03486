"""When teachers are asked to record a student's monthly progress.

Progress is taken on teaching days only: girls on Tuesday and Wednesday,
boys Monday to Thursday, once per calendar month. December 2024, the month
progress tracking began, only starts on the 9th (girls) and 8th (boys).
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import month_key
from ..core.enums import Branch
from .model import ProgressStudent

# date.weekday(): Monday=0 ... Sunday=6
PROMPT_WEEKDAYS = {
    Branch.GIRLS: frozenset({1, 2}),
    Branch.BOYS: frozenset({0, 1, 2, 3}),
}

LAUNCH_MONTH = "2024-12"
LAUNCH_FIRST_DAY = {
    Branch.GIRLS: 9,
    Branch.BOYS: 8,
}


def should_show_prompt(branch: Branch, student: Optional[ProgressStudent], today: date) -> bool:
    if student is None:
        return False

    current_month = month_key(today)
    if student.last_progress_month == current_month:
        return False
    if not student.student_group:
        return False

    if current_month == LAUNCH_MONTH and today.day < LAUNCH_FIRST_DAY[branch]:
        return False

    return today.weekday() in PROMPT_WEEKDAYS[branch]
