from dataclasses import dataclass, field
from datetime import date as Date, datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from attendance.constants import (
    FIELD_SEPARATOR,
    STATUS_PRESENT,
    STATUS_ABSENT
)


class AttendanceStatus(str, Enum):
    PRESENT = STATUS_PRESENT
    ABSENT = STATUS_ABSENT

    @classmethod
    def from_flag(cls, present: bool) -> "AttendanceStatus":
        return cls.PRESENT if present else cls.ABSENT


@dataclass
class AttendanceRecord:
    name: str
    roll_number: Optional[str] = None
    status: Optional[str] = None
    date: Optional[str] = None
    extra: Tuple[str, ...] = ()

    @classmethod
    def from_line(cls, line: str) -> "AttendanceRecord":
        """
        Parse one stored line. Trailing empty fields are dropped, so short
        rows come back with the missing fields set to None.
        """
        parts = line.split(FIELD_SEPARATOR)
        while parts and parts[-1] == "":
            parts.pop()
        if not parts:
            parts = [""]

        padded = parts + [None] * (4 - len(parts))
        return cls(
            name=padded[0],
            roll_number=padded[1],
            status=padded[2],
            date=padded[3],
            extra=tuple(parts[4:])
        )

    @property
    def fields(self) -> List[str]:
        values = [self.name, self.roll_number, self.status, self.date]
        present = []
        for value in values:
            if value is None:
                break
            present.append(value)
        return present + list(self.extra)

    @property
    def field_count(self) -> int:
        return len(self.fields)

    @property
    def is_present(self) -> bool:
        return (self.status or "").lower() == STATUS_PRESENT.lower()

    def to_line(self) -> str:
        return FIELD_SEPARATOR.join(self.fields)


@dataclass
class AttendanceRequest:
    name: str
    roll_number: str
    present: bool = True

    def to_record(self, day: Date) -> AttendanceRecord:
        if isinstance(day, datetime):
            day = day.date()
        return AttendanceRecord(
            name=self.name.strip(),
            roll_number=self.roll_number.strip(),
            status=AttendanceStatus.from_flag(self.present).value,
            date=day.isoformat()
        )


@dataclass
class ReadResult:
    records: List[AttendanceRecord] = field(default_factory=list)
    missing: bool = False
    error: Optional[OSError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class RollSummary:
    present_count: int = 0
    total_count: int = 0

    @property
    def absent_count(self) -> int:
        return self.total_count - self.present_count

    @property
    def present_percentage(self) -> float:
        if self.total_count == 0:
            return 0.0
        return self.present_count * 100.0 / self.total_count

    @property
    def percentage_text(self) -> str:
        return "%.1f" % self.present_percentage


@dataclass
class AttendanceSummary:
    total_count: int = 0
    present_count: int = 0
    per_roll: Dict[str, RollSummary] = field(default_factory=dict)

    @property
    def absent_count(self) -> int:
        return self.total_count - self.present_count
