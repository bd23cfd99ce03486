from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Branch, StudentGroup


@dataclass(frozen=True)
class ProgressStudent:
    """Fields of a student that decide whether a progress update is due."""

    student_id: str
    name: str
    branch: Branch
    student_group: Optional[StudentGroup] = None
    last_progress_month: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "maktab": self.branch.value,
            "student_group": self.student_group.value if self.student_group else None,
            "last_progress_month": self.last_progress_month,
        }
