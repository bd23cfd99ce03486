from __future__ import annotations

from datetime import date
from types import SimpleNamespace

import pytest

from src.maktab_attendance.maktab_attendance.core.enums import Branch, StudentGroup
from src.maktab_attendance.maktab_attendance.core.exceptions import NotFoundError
from src.maktab_attendance.maktab_attendance.main import create_app
from src.maktab_attendance.maktab_attendance.progress import controller as progress_controller
from src.maktab_attendance.maktab_attendance.progress.model import ProgressStudent
from src.maktab_attendance.maktab_attendance.progress.service import ProgressService


class InMemoryStudents:
    def __init__(self, students):
        self._by_id = {s.student_id: s for s in students}

    def get_by_id(self, student_id):
        return self._by_id.get(student_id)

    def list_active(self, *, branch):
        return [s for s in self._by_id.values() if s.branch == branch]

    def set_last_progress_month(self, *, student_id, month):
        s = self._by_id.get(student_id)
        if not s:
            return False
        self._by_id[student_id] = ProgressStudent(
            student_id=s.student_id,
            name=s.name,
            branch=s.branch,
            student_group=s.student_group,
            last_progress_month=month,
        )
        return True


TUESDAY = date(2024, 3, 5)


@pytest.fixture
def service():
    return ProgressService(
        InMemoryStudents(
            [
                ProgressStudent("s1", "Ahmed", Branch.BOYS, StudentGroup.QAIDAH),
                ProgressStudent("s2", "Umar", Branch.BOYS, StudentGroup.HIFZ, "2024-03"),
                ProgressStudent("s3", "Aisha", Branch.GIRLS, StudentGroup.QURAN),
                ProgressStudent("s4", "Zaid", Branch.BOYS, None),
            ]
        )
    )


def test_students_due(service):
    due = service.students_due(branch=Branch.BOYS, today=TUESDAY)

    assert [s.student_id for s in due] == ["s1"]


def test_mark_recorded_stops_prompt(service):
    assert service.prompt_for(student_id="s1", branch=Branch.BOYS, today=TUESDAY) is True

    assert service.mark_recorded(student_id="s1", today=TUESDAY) == "2024-03"
    assert service.prompt_for(student_id="s1", branch=Branch.BOYS, today=TUESDAY) is False


def test_unknown_student(service):
    with pytest.raises(NotFoundError):
        service.prompt_for(student_id="nope", branch=Branch.BOYS, today=TUESDAY)
    with pytest.raises(NotFoundError):
        service.mark_recorded(student_id="nope", today=TUESDAY)


def test_progress_routes(monkeypatch, service):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(progress_controller, "today_local", lambda: TUESDAY)
    app = create_app(container=SimpleNamespace(teacher_attendance_service=SimpleNamespace(), progress_service=service))
    client = app.test_client()

    assert client.get("/api/progress/prompt/s3?maktab=girls").get_json()["should_show_prompt"] is True
    assert client.get("/api/progress/prompt/nope?maktab=girls").status_code == 404
    assert client.get("/api/progress/prompt/s3").status_code == 400

    due = client.get("/api/progress/due?maktab=boys").get_json()
    assert [s["id"] for s in due["students"]] == ["s1"]

    resp = client.post("/api/progress/s1/recorded")
    assert resp.get_json()["last_progress_month"] == "2024-03"
    assert client.get("/api/progress/due?maktab=boys").get_json()["students"] == []
