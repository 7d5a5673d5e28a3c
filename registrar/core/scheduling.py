"""
Weekly meetings and the conflict predicates the enrollment engine relies on.

Overlap rule:
    start < other_end AND end > other_start
Touching windows (one ends exactly when the other starts) never conflict.
"""

from dataclasses import dataclass
from datetime import time
from typing import Any, Dict, Iterable, Union

from .enums import DayOfWeek
from .exceptions import SchedulingError


def _parse_time(value: Union[str, time]) -> time:
    """
    Convert 'HH:MM' to a time object.
    Raises SchedulingError for invalid formats.
    """
    if isinstance(value, time):
        return value
    parts = str(value).strip().split(":")
    if len(parts) != 2:
        raise SchedulingError(f"Invalid time format: {value!r}")
    try:
        h = int(parts[0])
        m = int(parts[1])
    except ValueError:
        raise SchedulingError(f"Invalid time format: {value!r}")
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise SchedulingError(f"Invalid time value: {value!r}")
    return time(h, m)


def _parse_day(value: Union[str, DayOfWeek]) -> DayOfWeek:
    if isinstance(value, DayOfWeek):
        return value
    try:
        return DayOfWeek(str(value).strip().lower())
    except ValueError:
        raise SchedulingError(f"Invalid day of week: {value!r}")


@dataclass(frozen=True)
class WeeklyMeeting:
    """A recurring room/day/time slot belonging to a course."""
    day: DayOfWeek
    start_time: time
    end_time: time
    room: str
    
    def __post_init__(self):
        if self.end_time <= self.start_time:
            raise SchedulingError(
                f"Meeting must end after it starts: {self.start_time} - {self.end_time}"
            )
        if not self.room or not self.room.strip():
            raise SchedulingError("Meeting room is required")
    
    @classmethod
    def from_strings(cls, day: Union[str, DayOfWeek], start: Union[str, time],
                     end: Union[str, time], room: str) -> 'WeeklyMeeting':
        """Build a meeting from values such as ('monday', '10:00', '11:30', 'B-204')."""
        return cls(_parse_day(day), _parse_time(start), _parse_time(end), room)
    
    @property
    def room_key(self) -> str:
        return self.room.strip().upper()
    
    def overlaps_with(self, other: 'WeeklyMeeting') -> bool:
        """Same day and overlapping windows."""
        return (self.day == other.day and
                self.start_time < other.end_time and
                self.end_time > other.start_time)
    
    def has_time_conflict(self, other: 'WeeklyMeeting') -> bool:
        """A person cannot attend both meetings, whatever rooms they are in."""
        return self.overlaps_with(other)
    
    def has_room_conflict(self, other: 'WeeklyMeeting') -> bool:
        """Both meetings want the same room at the same time."""
        return self.room_key == other.room_key and self.overlaps_with(other)
    
    def duration_minutes(self) -> int:
        """Get duration in minutes."""
        return ((self.end_time.hour * 60 + self.end_time.minute) -
                (self.start_time.hour * 60 + self.start_time.minute))
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'day': self.day.value,
            'start_time': self.start_time.strftime("%H:%M"),
            'end_time': self.end_time.strftime("%H:%M"),
            'room': self.room,
        }


def conflicts(a: WeeklyMeeting, b: WeeklyMeeting) -> bool:
    """Room conflict between two meetings; symmetric by construction."""
    return a.has_room_conflict(b)


def any_time_conflict(existing: Iterable[WeeklyMeeting], candidates: Iterable[WeeklyMeeting]) -> bool:
    """True if any candidate meeting overlaps any existing one."""
    candidates = list(candidates)
    return any(e.has_time_conflict(c) for e in existing for c in candidates)
