from __future__ import annotations

import logging
from datetime import date

import pytest

from src.maktab_attendance.maktab_attendance.core.enums import Branch, TeacherAttendanceStatus
from src.maktab_attendance.maktab_attendance.core.exceptions import MalformedRowError
from src.maktab_attendance.maktab_attendance.teacher_attendance.model import AttendanceEvidence, LegacyEvidence
from src.maktab_attendance.maktab_attendance.teacher_attendance.reconciler import AttendanceReconciler


def explicit(name, day, status="present", maktab="boys"):
    return {"teacher_name": name, "maktab": maktab, "date": day, "status": status}


def legacy(name, day, maktab="boys"):
    return {"performed_by_name": name, "maktab": maktab, "date": day}


def by_name(result):
    return {(s.teacher_name, s.branch.value): s for s in result.summaries}


def test_end_to_end_scenario():
    result = AttendanceReconciler().reconcile(
        [explicit("A", "2024-03-04")],
        [legacy("A", "2024-03-05"), legacy("B", "2024-03-05")],
        {"A"},
    )

    assert len(result.summaries) == 1
    a = result.summaries[0]
    assert (a.teacher_name, a.branch) == ("A", Branch.BOYS)
    assert a.present_dates == {date(2024, 3, 4), date(2024, 3, 5)}
    assert a.days_count == 2
    assert a.has_explicit_record is True


def test_empty_input():
    result = AttendanceReconciler().reconcile([], [], set())

    assert result.summaries == ()
    assert result.total_days == 0
    assert result.average_days == 0


def test_none_inputs_are_treated_as_empty():
    result = AttendanceReconciler().reconcile(None, None, None)

    assert result.summaries == ()
    assert result.total_days == 0


def test_explicit_and_legacy_for_same_day_count_once():
    result = AttendanceReconciler().reconcile(
        [explicit("A", "2024-03-04")],
        [legacy("A", "2024-03-04")],
        {"A"},
    )

    a = result.summaries[0]
    assert a.days_count == 1
    assert a.has_explicit_record is True


def test_duplicate_legacy_rows_are_idempotent():
    once = AttendanceReconciler().reconcile([], [legacy("A", "2024-03-04")], {"A"})
    twice = AttendanceReconciler().reconcile([], [legacy("A", "2024-03-04")] * 2, {"A"})

    assert once.summaries[0].days_count == twice.summaries[0].days_count == 1


def test_legacy_only_teacher_is_not_explicit():
    result = AttendanceReconciler().reconcile([], [legacy("A", "2024-03-04")], {"A"})

    assert result.summaries[0].has_explicit_record is False


def test_legacy_from_unknown_name_is_dropped_even_without_explicit_rows():
    result = AttendanceReconciler().reconcile([], [legacy("Office Admin", "2024-03-04")], {"A"})

    assert result.summaries == ()


def test_empty_validity_set_discards_all_legacy_rows():
    result = AttendanceReconciler().reconcile(
        [explicit("A", "2024-03-04")],
        [legacy("A", "2024-03-05")],
        set(),
    )

    assert result.summaries[0].present_dates == {date(2024, 3, 4)}


def test_absent_and_leave_go_to_absent_dates_and_still_mark_explicit():
    result = AttendanceReconciler().reconcile(
        [explicit("A", "2024-03-04", "absent"), explicit("A", "2024-03-05", "leave")],
        [],
        set(),
    )

    a = result.summaries[0]
    assert a.days_count == 0
    assert a.absent_dates == {date(2024, 3, 4), date(2024, 3, 5)}
    assert a.has_explicit_record is True


def test_legacy_never_populates_absent_dates_or_overrides_explicit_absence():
    result = AttendanceReconciler().reconcile(
        [explicit("A", "2024-03-04", "absent")],
        [legacy("A", "2024-03-04"), legacy("A", "2024-03-05")],
        {"A"},
    )

    a = result.summaries[0]
    assert a.present_dates == {date(2024, 3, 5)}
    assert a.absent_dates == {date(2024, 3, 4)}


def test_conflicting_explicit_rows_last_one_wins_with_retraction():
    result = AttendanceReconciler().reconcile(
        [explicit("A", "2024-03-04", "present"), explicit("A", "2024-03-04", "absent")],
        [],
        set(),
    )
    a = result.summaries[0]
    assert a.present_dates == frozenset()
    assert a.absent_dates == {date(2024, 3, 4)}

    result = AttendanceReconciler().reconcile(
        [explicit("A", "2024-03-04", "leave"), explicit("A", "2024-03-04", "present")],
        [],
        set(),
    )
    a = result.summaries[0]
    assert a.present_dates == {date(2024, 3, 4)}
    assert a.absent_dates == frozenset()


def test_same_name_in_both_branches_gives_two_summaries():
    result = AttendanceReconciler().reconcile(
        [explicit("A", "2024-03-04", maktab="boys"), explicit("A", "2024-03-05", maktab="girls")],
        [],
        set(),
    )

    assert set(by_name(result)) == {("A", "boys"), ("A", "girls")}


def test_sort_by_days_count_descending():
    rows = []
    for name, days in (("A", 3), ("B", 7), ("C", 1)):
        rows += [explicit(name, f"2024-03-{d:02d}") for d in range(1, days + 1)]

    result = AttendanceReconciler().reconcile(rows, [], set())

    assert [s.days_count for s in result.summaries] == [7, 3, 1]
    assert [s.teacher_name for s in result.summaries] == ["B", "A", "C"]


def test_ties_are_broken_by_teacher_name():
    result = AttendanceReconciler().reconcile(
        [explicit("zaid", "2024-03-04"), explicit("Bilal", "2024-03-04"), explicit("adam", "2024-03-04")],
        [],
        set(),
    )

    assert [s.teacher_name for s in result.summaries] == ["adam", "Bilal", "zaid"]


def test_totals_and_average():
    rows = [explicit("A", f"2024-03-{d:02d}") for d in range(1, 5)]
    rows += [explicit("B", f"2024-03-{d:02d}") for d in range(1, 7)]

    result = AttendanceReconciler().reconcile(rows, [], set())

    assert result.total_days == 10
    assert result.average_days == 5


def test_average_is_not_rounded():
    rows = [explicit("A", "2024-03-01"), explicit("B", "2024-03-01"), explicit("B", "2024-03-02")]
    rows.append(explicit("C", "2024-03-03", "absent"))

    result = AttendanceReconciler().reconcile(rows, [], set())

    assert result.total_days == 3
    assert result.average_days == 1.0
    result = AttendanceReconciler().reconcile(rows[:3], [], set())
    assert result.average_days == 1.5


def test_branch_partitions_preserve_sorted_order():
    rows = [
        explicit("A", "2024-03-01", maktab="girls"),
        explicit("B", "2024-03-01", maktab="boys"),
        explicit("B", "2024-03-02", maktab="boys"),
        explicit("C", "2024-03-01", maktab="girls"),
        explicit("C", "2024-03-02", maktab="girls"),
        explicit("C", "2024-03-03", maktab="girls"),
    ]

    result = AttendanceReconciler().reconcile(rows, [], set())

    assert [s.teacher_name for s in result.boys] == ["B"]
    assert [s.teacher_name for s in result.girls] == ["C", "A"]
    assert sorted(result.boys + result.girls, key=result.summaries.index) == list(result.summaries)


def test_malformed_rows_are_skipped_and_logged(caplog):
    rows = [
        explicit("A", "2024-03-04"),
        explicit("A", "2024-03-05", "late"),
        {"maktab": "boys", "date": "2024-03-06", "status": "present"},
        explicit("A", "2024-03-07", maktab="mixed"),
        explicit("A", "not-a-date"),
    ]

    with caplog.at_level(logging.WARNING):
        result = AttendanceReconciler().reconcile(rows, [legacy("A", None)], {"A"})

    assert result.summaries[0].present_dates == {date(2024, 3, 4)}
    assert result.skipped_rows == 5
    assert "malformed" in caplog.text


def test_accepts_validated_records_and_date_objects():
    rec = AttendanceEvidence(
        teacher_name="A",
        branch=Branch.GIRLS,
        date=date(2024, 3, 4),
        status=TeacherAttendanceStatus.PRESENT,
        auto_marked=True,
    )
    leg = LegacyEvidence(performed_by_name="A", branch=Branch.GIRLS, date=date(2024, 3, 5))

    result = AttendanceReconciler().reconcile([rec], [leg, legacy("A", date(2024, 3, 6), "girls")], {"A"})

    assert result.summaries[0].days_count == 3


def test_identical_inputs_give_identical_output():
    rows = [explicit("A", "2024-03-04"), explicit("B", "2024-03-04", "leave")]
    logs = [legacy("A", "2024-03-05"), legacy("B", "2024-03-06")]
    reconciler = AttendanceReconciler()

    assert reconciler.reconcile(rows, logs, {"A", "B"}) == reconciler.reconcile(rows, logs, {"A", "B"})


def test_to_dict_shapes_summary_for_presentation():
    result = AttendanceReconciler().reconcile(
        [explicit("A", "2024-03-05"), explicit("A", "2024-03-04")], [], set()
    )

    data = result.to_dict()
    assert data["teachers"][0]["dates"] == ["2024-03-04", "2024-03-05"]
    assert data["boys_teachers"][0]["teacher_name"] == "A"
    assert data["girls_teachers"] == []
    assert data["total_days"] == 2


def test_records_built_with_plain_strings_are_coerced():
    rec = AttendanceEvidence("A", "boys", date(2024, 3, 4), "present")
    leg = LegacyEvidence("A", "boys", date(2024, 3, 5))

    result = AttendanceReconciler().reconcile([rec], [leg], {"A"})

    a = result.summaries[0]
    assert a.branch is Branch.BOYS
    assert a.present_dates == {date(2024, 3, 4), date(2024, 3, 5)}
    assert a.absent_dates == frozenset()
    assert result.skipped_rows == 0


def test_records_with_unknown_enum_values_are_rejected():
    with pytest.raises(MalformedRowError):
        AttendanceEvidence("A", Branch.BOYS, date(2024, 3, 4), "late")
    with pytest.raises(MalformedRowError):
        LegacyEvidence("A", "mixed", date(2024, 3, 4))
    with pytest.raises(MalformedRowError):
        LegacyEvidence("A", Branch.BOYS, "2024-03-04")


def test_names_are_stripped_on_ingestion():
    result = AttendanceReconciler().reconcile(
        [explicit(" A ", "2024-03-04")],
        [legacy("A  ", "2024-03-05"), legacy(" B", "2024-03-05")],
        {"A", "B "},
    )

    assert [(s.teacher_name, s.days_count) for s in result.summaries] == [("A", 2), ("B", 1)]
