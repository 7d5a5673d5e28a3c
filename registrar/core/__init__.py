"""
Core module containing the academic records model and the enrollment engine.
"""

from .enums import *
from .exceptions import *
from .entities import AbstractEntity, Event
from .interfaces import EventHandler, Schedulable
from .scheduling import WeeklyMeeting, conflicts
from .academics import Course, Department, Faculty, FacultyRegistry, Specialization
from .gpa import GPACalculator, classify_gpa, convert_grade, parallel_sum
from .people import Person, Student, Teacher
from .semester import RegistrationOutcome, Semester

__all__ = [
    # Entities
    "AbstractEntity",
    "Event",
    "WeeklyMeeting",
    "Course",
    "Faculty",
    "Department",
    "Specialization",
    "FacultyRegistry",
    "Person",
    "Student",
    "Teacher",
    "Semester",
    "RegistrationOutcome",
    
    # Functions
    "conflicts",
    "convert_grade",
    "classify_gpa",
    "parallel_sum",
    "GPACalculator",
    
    # Interfaces
    "EventHandler",
    "Schedulable",
    
    # Enums
    "EntityStatus",
    "PersonType",
    "SpecializationType",
    "SemesterSeason",
    "DayOfWeek",
    "GPAStatus",
    "RejectionReason",
    "EventType",
    
    # Exceptions
    "RegistrarException",
    "ValidationError",
    "SchedulingError",
    "DuplicateEntityError",
    "ResourceNotFoundError",
    "ConcurrencyError",
    "ConfigurationError",
]
