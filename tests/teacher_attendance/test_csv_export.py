from __future__ import annotations

from datetime import date, datetime

from src.maktab_attendance.maktab_attendance.core.enums import Branch, BranchFilter, NoteType
from src.maktab_attendance.maktab_attendance.teacher_attendance.csv_export import generate_teacher_attendance_csv
from src.maktab_attendance.maktab_attendance.teacher_attendance.model import TeacherDaySummary, TeacherNote


def summary(name, branch, *days):
    return TeacherDaySummary(
        teacher_name=name,
        branch=branch,
        present_dates=frozenset(date(2024, 3, d) for d in days),
        absent_dates=frozenset(),
        has_explicit_record=True,
    )


GENERATED = datetime(2024, 4, 2, 14, 5)


def test_header_and_summary():
    body = generate_teacher_attendance_csv(
        [summary("A", Branch.BOYS, 4, 5), summary("B", Branch.GIRLS, 5)],
        date(2024, 3, 1),
        BranchFilter.ALL,
        generated_at=GENERATED,
    )
    lines = body.splitlines()

    assert lines[0] == '"TEACHER ATTENDANCE REPORT"'
    assert lines[1] == '"Generated: Apr 02, 2024 at 02:05 PM"'
    assert lines[2] == '"Month: March 2024"'
    assert lines[3] == '"Maktab Filter: All"'
    assert '"Total Teachers","2"' in lines
    assert '"Total Teaching Days","3"' in lines
    assert '"Average Days per Teacher","1.5"' in lines


def test_empty_report_average_is_zero_and_no_notes_section():
    body = generate_teacher_attendance_csv([], date(2024, 3, 1), BranchFilter.GIRLS, generated_at=GENERATED)

    assert '"Maktab Filter: Girls"' in body
    assert '"Average Days per Teacher","0"' in body
    assert "TEACHER NOTES" not in body
    assert body.rstrip().endswith('"Date","Teacher","Maktab"')


def test_per_teacher_counts_leave_and_sick_notes():
    notes = [
        TeacherNote("A", Branch.BOYS, date(2024, 3, 12), "Leave", NoteType.LEAVE),
        TeacherNote("A", Branch.BOYS, date(2024, 3, 11), "Sickness", NoteType.SICKNESS),
        TeacherNote("A", Branch.BOYS, date(2024, 3, 13), 'Said "back soon"', NoteType.OTHER),
        TeacherNote("A", Branch.GIRLS, date(2024, 3, 14), "Leave", NoteType.LEAVE),
    ]

    body = generate_teacher_attendance_csv(
        [summary("A", Branch.BOYS, 5, 4)], date(2024, 3, 1), BranchFilter.BOYS, notes, generated_at=GENERATED
    )

    assert '"A","boys","2","1","1","Mar 4, Mar 5"' in body
    notes_block = body.split("TEACHER NOTES\n")[1].split("\n\n")[0].splitlines()
    assert notes_block[0] == '"Date","Teacher","Maktab","Type","Note"'
    assert notes_block[1] == '"Mar 11, 2024","A","boys","Sickness","Sickness"'
    assert notes_block[3] == '"Mar 13, 2024","A","boys","Note","Said ""back soon"""'


def test_detailed_log_is_sorted_by_date():
    body = generate_teacher_attendance_csv(
        [summary("A", Branch.BOYS, 9, 2), summary("B", Branch.GIRLS, 5)],
        date(2024, 3, 1),
        BranchFilter.ALL,
        generated_at=GENERATED,
    )

    log = body.split("DETAILED TEACHING LOG\n")[1].splitlines()[1:]
    assert log == [
        '"Mar 02, 2024","A","boys"',
        '"Mar 05, 2024","B","girls"',
        '"Mar 09, 2024","A","boys"',
    ]
