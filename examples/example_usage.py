"""Example: build a monthly teacher report through the service layer (no Flask)."""

import importlib
from datetime import date

from config import get_settings_module

from src.maktab_attendance.maktab_attendance.container import build_container
from src.maktab_attendance.maktab_attendance.core.enums import BranchFilter


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    report = container.teacher_attendance_service.monthly_report(
        month=date.today().replace(day=1),
        branch_filter=BranchFilter.ALL,
    )
    for s in report.summaries:
        print(f"{s.teacher_name:<30} {s.branch.value:<6} {s.days_count}")
    print(f"total={report.total_days} average={report.average_days:.1f}")


if __name__ == "__main__":
    main()
