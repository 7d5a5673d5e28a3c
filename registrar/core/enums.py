"""
Enumerations and constants for the registrar.
"""

from enum import Enum


class EntityStatus(Enum):
    """Status of an entity in the system."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class PersonType(Enum):
    """Types of persons in the system."""
    STUDENT = "student"
    TEACHER = "teacher"


class SpecializationType(Enum):
    """Kind of program a specialization represents."""
    MAJOR = "major"
    MINOR = "minor"


class SemesterSeason(Enum):
    """Season a semester is named after."""
    FALL = "Fall"
    SPRING = "Spring"
    SUMMER = "Summer"


class DayOfWeek(Enum):
    """Days a weekly meeting can fall on."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class GPAStatus(Enum):
    """Academic standing derived from a GPA."""
    HIGHEST_HONORS = "Highest Honors"
    DEANS_LIST = "Dean's List"
    HONORS = "Honors"
    NORMAL = "Normal"
    PROBATION = "Probation"


class RejectionReason(Enum):
    """Why a registration was aborted or a student was turned away."""
    DUPLICATE_ID = "duplicate_id"  # Aborts the whole call
    ROOM_CONFLICT = "room_conflict"  # Aborts the whole call
    TEACHER_CONFLICT = "teacher_conflict"  # Aborts the whole call
    MISSING_PREREQUISITES = "missing_prerequisites"
    SCHEDULE_CONFLICT = "schedule_conflict"


class EventType(Enum):
    """Types of events published by the services."""
    REGISTRATION = "registration"
    GRADING = "grading"

