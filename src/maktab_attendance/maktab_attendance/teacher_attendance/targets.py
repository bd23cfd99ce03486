from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Sequence

from ..common.datetime_utils import iter_days, month_bounds
from ..core.constants import DISABLED_DATES
from ..core.exceptions import ValidationError
from .model import TeacherDaySummary

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass(frozen=True)
class TargetProgress:
    teacher_name: str
    branch: str
    days_count: int
    target_days: int

    @property
    def completed(self) -> bool:
        return self.target_days > 0 and self.days_count >= self.target_days

    def to_dict(self) -> dict:
        return {
            "teacher_name": self.teacher_name,
            "maktab": self.branch,
            "days_count": self.days_count,
            "target_days": self.target_days,
            "completed": self.completed,
        }


def weekday_indexes(names: Iterable[str]) -> set[int]:
    """Map weekday names (``Monday``...) to ``date.weekday()`` indexes."""
    out = set()
    for name in names:
        key = (name or "").strip().capitalize()
        if key not in WEEKDAYS:
            raise ValidationError(f"Unknown weekday {name!r}")
        out.add(WEEKDAYS.index(key))
    return out


def count_target_days(
    month: date,
    weekdays: Iterable[str],
    *,
    today: date,
    holidays: Iterable[date] = (),
    disabled_dates: Sequence[date] = DISABLED_DATES,
) -> int:
    """Days of ``month`` up to ``today`` a teacher is expected to teach."""

    wanted = weekday_indexes(weekdays)
    skip = set(holidays) | set(disabled_dates)
    start, end = month_bounds(month)

    return sum(1 for d in iter_days(start, min(end, today)) if d.weekday() in wanted and d not in skip)


def progress_against_target(summaries: Iterable[TeacherDaySummary], target_days: int) -> list[TargetProgress]:
    return [
        TargetProgress(
            teacher_name=s.teacher_name,
            branch=s.branch.value,
            days_count=s.days_count,
            target_days=target_days,
        )
        for s in summaries
    ]
