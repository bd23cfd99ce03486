from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import json_api
from ..common.validators import require_choice
from ..core.enums import Branch
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.progress_service

    @app.route("/api/progress/prompt/<student_id>", methods=["GET"], endpoint="progress_prompt")
    @json_api
    def prompt(student_id: str):
        branch = require_choice(Branch, request.args.get("maktab"), "maktab")
        show = service.prompt_for(student_id=student_id, branch=branch, today=today_local())
        return jsonify({"student_id": student_id, "should_show_prompt": show})

    @app.route("/api/progress/due", methods=["GET"], endpoint="progress_due")
    @json_api
    def due():
        branch = require_choice(Branch, request.args.get("maktab"), "maktab")
        students = service.students_due(branch=branch, today=today_local())
        return jsonify({"maktab": branch.value, "students": [s.to_dict() for s in students]})

    @app.route("/api/progress/<student_id>/recorded", methods=["POST"], endpoint="progress_recorded")
    @json_api
    def recorded(student_id: str):
        month = service.mark_recorded(student_id=student_id, today=today_local())
        return jsonify({"success": True, "student_id": student_id, "last_progress_month": month})
