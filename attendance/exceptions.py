class AttendanceError(Exception):
    """Base exception for attendance rule violations."""


class ValidationError(AttendanceError):
    """Raised when a record is rejected before any storage access."""


class DuplicateRecordError(AttendanceError):
    """Raised when the roll number already has a record for that date."""

    def __init__(self, roll_number, date):
        self.roll_number = roll_number
        self.date = date
        super().__init__(f"Attendance already marked on {date} for roll: {roll_number}")
