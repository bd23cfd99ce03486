from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import month_key, parse_iso_date, parse_month, today_local
from ..common.http import json_api, json_body
from ..common.validators import require_choice
from ..core.constants import DEFAULT_TARGET_WEEKDAYS
from ..core.enums import Branch, BranchFilter, NoteType, TeacherAttendanceStatus
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.teacher_attendance_service

    def _month_arg() -> date:
        value = request.args.get("month")
        return parse_month(value) if value else today_local().replace(day=1)

    def _branch_filter_arg() -> BranchFilter:
        return require_choice(BranchFilter, request.args.get("maktab", BranchFilter.ALL.value), "maktab")

    def _date(value, field_name: str) -> date:
        try:
            return parse_iso_date(str(value))
        except ValueError:
            raise ValidationError(f"{field_name} must be YYYY-MM-DD")

    @app.route("/api/teacher-attendance/report", methods=["GET"], endpoint="teacher_attendance_report")
    @json_api
    def report():
        month = _month_arg()
        branch_filter = _branch_filter_arg()
        result = service.monthly_report(month=month, branch_filter=branch_filter)
        return jsonify({"month": month_key(month), "maktab": branch_filter.value, **result.to_dict()})

    @app.route("/teacher-attendance/report.csv", methods=["GET"], endpoint="teacher_attendance_report_csv")
    @json_api
    def report_csv():
        month = _month_arg()
        branch_filter = _branch_filter_arg()
        body = service.monthly_export(month=month, branch_filter=branch_filter)

        filename = f"teacher_attendance_{month.strftime('%Y_%m')}_{branch_filter.value}.csv"
        return app.response_class(
            body.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/teacher-attendance/targets", methods=["GET"], endpoint="teacher_attendance_targets")
    @json_api
    def targets():
        month = _month_arg()
        days_arg = request.args.get("days")
        weekdays = [d for d in days_arg.split(",") if d.strip()] if days_arg else list(DEFAULT_TARGET_WEEKDAYS)

        rows = service.target_progress(
            month=month,
            branch_filter=_branch_filter_arg(),
            today=today_local(),
            target_weekdays=weekdays,
        )
        return jsonify({"month": month_key(month), "target_days": weekdays, "teachers": [r.to_dict() for r in rows]})

    @app.route("/api/teacher-attendance/day", methods=["GET"], endpoint="teacher_attendance_day")
    @json_api
    def day_records():
        branch = require_choice(Branch, request.args.get("maktab"), "maktab")
        day = _date(request.args.get("date") or today_local().isoformat(), "date")
        teacher_name = (request.args.get("teacher_name") or "").strip()
        if teacher_name:
            found = service.status_for(branch=branch, day=day, teacher_name=teacher_name)
            records = [found] if found else []
        else:
            records = service.day_records(branch=branch, day=day)
        return jsonify(
            {
                "maktab": branch.value,
                "date": day.isoformat(),
                "records": [
                    {
                        "teacher_name": r.teacher_name,
                        "status": r.status.value,
                        "marked_by_name": r.marked_by_name,
                        "auto_marked": r.auto_marked,
                    }
                    for r in records
                ],
            }
        )

    @app.route("/api/teacher-attendance/day", methods=["POST"], endpoint="teacher_attendance_mark")
    @json_api
    def mark():
        data = json_body()
        record = service.record_status(
            branch=require_choice(Branch, data.get("maktab"), "maktab"),
            day=_date(data.get("date") or today_local().isoformat(), "date"),
            teacher_name=data.get("teacher_name", ""),
            status=require_choice(TeacherAttendanceStatus, data.get("status"), "status"),
            marked_by=data.get("marked_by", ""),
            marked_by_name=data.get("marked_by_name", ""),
        )
        return jsonify({"success": True, "teacher_name": record.teacher_name, "status": record.status.value})

    @app.route("/api/teacher-attendance/mark-all", methods=["POST"], endpoint="teacher_attendance_mark_all")
    @json_api
    def mark_all():
        data = json_body()
        teachers = data.get("teachers")
        if teachers is not None and not isinstance(teachers, list):
            raise ValidationError("teachers must be a list")

        count = service.mark_all(
            branch=require_choice(Branch, data.get("maktab"), "maktab"),
            day=_date(data.get("date") or today_local().isoformat(), "date"),
            status=require_choice(TeacherAttendanceStatus, data.get("status", "present"), "status"),
            marked_by=data.get("marked_by", ""),
            marked_by_name=data.get("marked_by_name", ""),
            teacher_names=teachers,
        )
        return jsonify({"success": True, "marked": count})

    @app.route("/api/teacher-attendance/absence", methods=["POST"], endpoint="teacher_attendance_absence")
    @json_api
    def absence():
        data = json_body()
        start = _date(data.get("start_date"), "start_date")
        end = _date(data["end_date"], "end_date") if data.get("end_date") else None

        days = service.record_absence(
            branch=require_choice(Branch, data.get("maktab"), "maktab"),
            teacher_name=data.get("teacher_name", ""),
            start=start,
            end=end,
            absence_type=require_choice(NoteType, data.get("absence_type", "leave"), "absence_type"),
            note=data.get("note"),
            marked_by=data.get("marked_by", ""),
            marked_by_name=data.get("marked_by_name", ""),
        )
        return jsonify({"success": True, "days": days})

    @app.route("/api/teacher-attendance/day", methods=["DELETE"], endpoint="teacher_attendance_clear")
    @json_api
    def clear():
        data = json_body()
        branch = require_choice(Branch, data.get("maktab"), "maktab")
        day = _date(data.get("date") or today_local().isoformat(), "date")
        service.clear_status(branch=branch, day=day, teacher_name=data.get("teacher_name", ""))
        return jsonify({"success": True})

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    @json_api
    def holidays():
        return jsonify({"holidays": [h.to_dict() for h in service.list_holidays()]})

    @app.route("/api/holidays", methods=["POST"], endpoint="holidays_add")
    @json_api
    def add_holidays():
        data = json_body()
        start = _date(data.get("start_date"), "start_date")
        end = _date(data["end_date"], "end_date") if data.get("end_date") else None
        added = service.add_holidays(start=start, end=end, reason=data.get("reason"))
        return jsonify({"success": True, "added": added})

    @app.route("/api/holidays/<day>", methods=["DELETE"], endpoint="holidays_remove")
    @json_api
    def remove_holiday(day: str):
        service.remove_holiday(_date(day, "date"))
        return jsonify({"success": True})
