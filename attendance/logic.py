from datetime import date as Date
from typing import Iterable, Optional

from attendance.constants import MIN_SUMMARY_FIELDS
from attendance.exceptions import ValidationError
from attendance.models import (
    AttendanceRecord,
    AttendanceRequest,
    AttendanceSummary,
    RollSummary
)
from attendance.storage import RecordStore

# ==================================================
# Mark attendance
# ==================================================

def mark_attendance(store: RecordStore, request: AttendanceRequest, day: Optional[Date] = None) -> AttendanceRecord:
    if not request.name.strip():
        raise ValidationError("Please enter the student name.")
    if not request.roll_number.strip():
        raise ValidationError("Please enter the roll number.")

    if day is None:
        day = Date.today()

    return store.append(request.to_record(day))

# ==================================================
# Summary
# ==================================================

def summarize(records: Iterable[AttendanceRecord]) -> Optional[AttendanceSummary]:
    """
    Totals and per-roll counts in first-seen roll order.

    Returns None when there are no records at all, so callers can tell
    "nothing recorded" apart from a summary whose counts happen to be zero.
    Rows with fewer than three fields are skipped.
    """
    records = list(records)
    if not records:
        return None

    summary = AttendanceSummary()

    for record in records:
        if record.field_count < MIN_SUMMARY_FIELDS:
            continue

        summary.total_count += 1
        if record.is_present:
            summary.present_count += 1

        bucket = summary.per_roll.setdefault(record.roll_number, RollSummary())
        if record.is_present:
            bucket.present_count += 1
        bucket.total_count += 1

    return summary


def load_summary(store: RecordStore) -> Optional[AttendanceSummary]:
    return summarize(store.read_all())


def format_summary(summary: AttendanceSummary) -> str:
    lines = [
        "SUMMARY",
        f"Total Records: {summary.total_count}",
        f"Present: {summary.present_count} | Absent: {summary.absent_count}",
        "",
        "Per Roll Number:"
    ]
    for roll_number, bucket in summary.per_roll.items():
        lines.append(
            f"Roll {roll_number}: Present={bucket.present_count}, "
            f"Absent={bucket.absent_count}, %Present={bucket.percentage_text}%"
        )
    return "\n".join(lines) + "\n"
