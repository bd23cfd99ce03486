from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Branch
from .model import ProgressStudent


class ProgressRepository(Protocol):
    def get_by_id(self, student_id: str) -> Optional[ProgressStudent]:
        raise NotImplementedError

    def list_active(self, *, branch: Branch) -> Sequence[ProgressStudent]:
        raise NotImplementedError

    def set_last_progress_month(self, *, student_id: str, month: str) -> bool:
        raise NotImplementedError
