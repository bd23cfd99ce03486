from __future__ import annotations

from enum import Enum


class Branch(str, Enum):
    """Maktab branch; partitions teachers, students and attendance."""

    BOYS = "boys"
    GIRLS = "girls"


class BranchFilter(str, Enum):
    """Branch selector used by monthly reports."""

    ALL = "all"
    BOYS = "boys"
    GIRLS = "girls"

    @property
    def branch(self) -> Branch | None:
        if self is BranchFilter.ALL:
            return None
        return Branch(self.value)


class TeacherAttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"


class NoteType(str, Enum):
    """Reason attached to a teacher absence."""

    LEAVE = "leave"
    SICKNESS = "sickness"
    OTHER = "other"

    @property
    def label(self) -> str:
        return {
            NoteType.LEAVE: "Leave",
            NoteType.SICKNESS: "Sickness",
            NoteType.OTHER: "Note",
        }[self]


class StudentGroup(str, Enum):
    QAIDAH = "A"
    QURAN = "B"
    HIFZ = "C"
