import logging
import os
from datetime import date as Date, datetime
from typing import List, Optional

from attendance.constants import (
    ATTENDANCE_FILE,
    FILE_ENCODING,
    FIELD_SEPARATOR,
    MIN_DATED_FIELDS
)
from attendance.exceptions import DuplicateRecordError, ValidationError
from attendance.models import AttendanceRecord, AttendanceStatus, ReadResult

logger = logging.getLogger(__name__)


def normalize_date(value):
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, Date):
        return value.isoformat()
    if not isinstance(value, str):
        raise ValidationError(f"Invalid date: {value!r}")

    text = value.strip()
    try:
        parsed = Date.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}")
    if parsed.isoformat() != text:
        raise ValidationError(f"Date must be YYYY-MM-DD: {value!r}")
    return text


def validate_record(record: AttendanceRecord) -> AttendanceRecord:
    name = (record.name or "").strip()
    roll_number = (record.roll_number or "").strip()

    if not name:
        raise ValidationError("Please enter the student name.")
    if not roll_number:
        raise ValidationError("Please enter the roll number.")

    try:
        status = AttendanceStatus(record.status).value
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {record.status!r}")

    for label, value in (("name", name), ("roll number", roll_number)):
        if "\r" in value or "\n" in value:
            raise ValidationError(f"Student {label} must be on a single line: {value!r}")
        if FIELD_SEPARATOR in value:
            logger.warning("Student %s %r contains %r, the stored line will not parse back cleanly",
                           label, value, FIELD_SEPARATOR)

    return AttendanceRecord(
        name=name,
        roll_number=roll_number,
        status=status,
        date=normalize_date(record.date)
    )


class RecordStore:
    """
    Append-only attendance log kept as one comma separated line per record.

    Nothing is cached between calls: every read parses the whole file again.
    """

    def __init__(self, path=ATTENDANCE_FILE):
        self.path = os.fspath(path)

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def append(self, record: AttendanceRecord) -> AttendanceRecord:
        record = validate_record(record)

        if self.exists_for_roll_on_date(record.roll_number, record.date):
            logger.warning("Duplicate attendance for roll %s on %s rejected",
                           record.roll_number, record.date)
            raise DuplicateRecordError(record.roll_number, record.date)

        try:
            with open(self.path, "a", encoding=FILE_ENCODING) as f:
                f.write(record.to_line() + "\n")
        except OSError:
            logger.exception("Failed to write attendance record to %s", self.path)
            raise

        logger.info("Marked roll %s as %s on %s", record.roll_number, record.status, record.date)
        return record

    def load(self) -> ReadResult:
        if not self.exists():
            return ReadResult(missing=True)

        result = ReadResult()
        try:
            with open(self.path, "r", encoding=FILE_ENCODING, errors="replace") as f:
                for line in f:
                    line = line.rstrip("\r\n")
                    if not line.strip():
                        continue
                    result.records.append(AttendanceRecord.from_line(line))
        except OSError as e:
            result.error = e
        return result

    def read_all(self) -> List[AttendanceRecord]:
        result = self.load()
        if result.error is not None:
            logger.warning("Reading %s stopped after %d records: %s",
                           self.path, len(result.records), result.error)
        return result.records

    def exists_for_roll_on_date(self, roll_number, date) -> bool:
        for record in self.read_all():
            if record.field_count >= MIN_DATED_FIELDS:
                if record.roll_number == roll_number and record.date == date:
                    return True
        return False

    def read_text(self) -> Optional[str]:
        if not self.exists():
            return None

        with open(self.path, "r", encoding=FILE_ENCODING, errors="replace") as f:
            lines = [line.rstrip("\r\n") for line in f]

        return "".join(line + "\n" for line in lines)
