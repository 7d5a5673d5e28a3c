"""
Semester and its enrollment engine.

A registration runs three aborting checks against the semester as a whole
(duplicate course ID, room conflict, teacher availability), then filters the
candidate students on prerequisites and personal schedule, and finally commits
the survivors in the order they were given.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterator, List, Optional, Sequence, Set, Tuple

from .academics import Course
from .enums import RejectionReason, SemesterSeason
from .exceptions import ConcurrencyError, ValidationError
from .people import Student, Teacher

logger = logging.getLogger(__name__)


@dataclass
class RegistrationOutcome:
    """Result of one call to ``Semester.register``."""
    course_id: str
    accepted: List[Student] = field(default_factory=list)
    rejected: List[Tuple[Student, RejectionReason]] = field(default_factory=list)
    over_capacity: List[Student] = field(default_factory=list)
    aborted: Optional[RejectionReason] = None
    messages: List[str] = field(default_factory=list)
    
    @property
    def success(self) -> bool:
        return self.aborted is None and bool(self.accepted)
    
    def rejected_students(self, reason: Optional[RejectionReason] = None) -> List[Student]:
        """Students turned away, optionally for one reason only."""
        seen: List[Student] = []
        for student, why in self.rejected:
            if (reason is None or why == reason) and student not in seen:
                seen.append(student)
        return seen
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'course_id': self.course_id,
            'success': self.success,
            'aborted': self.aborted.value if self.aborted else None,
            'accepted': [s.id for s in self.accepted],
            'rejected': [{'student_id': s.id, 'reason': r.value} for s, r in self.rejected],
            'over_capacity': [s.id for s in self.over_capacity],
            'messages': list(self.messages),
        }


def season_for(start_date: date) -> SemesterSeason:
    """Season a semester starting on ``start_date`` is named after."""
    month = start_date.month
    if 9 <= month <= 12:
        return SemesterSeason.FALL
    if 1 <= month <= 6:
        return SemesterSeason.SPRING
    return SemesterSeason.SUMMER


def weeks_between(start_date: date, end_date: date) -> int:
    """Whole weeks from start to end."""
    return (end_date - start_date).days // 7


class Semester:
    """One academic term with the courses, students and teachers registered in it.

    Callers that touch the same semester from several threads must go through
    ``locked()``; ``register`` takes the lock itself.
    """
    
    def __init__(self, start_date: date, end_date: date):
        if end_date < start_date:
            raise ValidationError(f"Semester cannot end ({end_date}) before it starts ({start_date})")
        self._start_date = start_date
        self._end_date = end_date
        self._season = season_for(start_date)
        self._semester_name = f"{self._season.value} - {start_date.year}"
        self._weeks_number = weeks_between(start_date, end_date)
        self._courses: List[Course] = []
        self._students: Set[Student] = set()
        self._teachers: Set[Teacher] = set()
        self._lock = threading.RLock()
    
    @property
    def name(self) -> str:
        return self._season.value
    
    @property
    def semester_name(self) -> str:
        return self._semester_name
    
    @property
    def season(self) -> SemesterSeason:
        return self._season
    
    @property
    def start_date(self) -> date:
        return self._start_date
    
    @property
    def end_date(self) -> date:
        return self._end_date
    
    @property
    def weeks_number(self) -> int:
        return self._weeks_number
    
    @property
    def is_fall(self) -> bool:
        return self._season == SemesterSeason.FALL
    
    @property
    def is_spring(self) -> bool:
        return self._season == SemesterSeason.SPRING
    
    @property
    def is_summer(self) -> bool:
        return self._season == SemesterSeason.SUMMER
    
    @property
    def courses(self) -> List[Course]:
        return self._courses.copy()
    
    @property
    def students(self) -> Set[Student]:
        return self._students.copy()
    
    @property
    def teachers(self) -> Set[Teacher]:
        return self._teachers.copy()
    
    @contextmanager
    def locked(self, timeout: Optional[float] = None) -> Iterator['Semester']:
        """Hold the semester's lock for a block of reads and writes."""
        acquired = self._lock.acquire(timeout=timeout) if timeout is not None else self._lock.acquire()
        if not acquired:
            raise ConcurrencyError(f"Timed out waiting for {self._semester_name}")
        try:
            yield self
        finally:
            self._lock.release()
    
    def has_course(self, course_id: str) -> bool:
        key = course_id.strip().upper()
        return any(c.normalized_id == key for c in self._courses)
    
    def get_course(self, course_id: str) -> Optional[Course]:
        key = course_id.strip().upper()
        return next((c for c in self._courses if c.normalized_id == key), None)
    
    def register(self, course: Course, students: Sequence[Student], teacher: Teacher) -> RegistrationOutcome:
        """Register ``course`` with ``teacher`` and admit the eligible ``students``.

        Never raises for an invalid registration; everything that went wrong is
        on the returned outcome and in the log.
        """
        with self.locked():
            outcome = RegistrationOutcome(course_id=course.course_id)
            candidates = list(students)
            meetings = course.weekly_meetings
            
            if any(existing.same_id_as(course) for existing in self._courses):
                return self._abort(outcome, RejectionReason.DUPLICATE_ID,
                                   f"There's already a course with the ID: {course.course_id}; "
                                   f"cannot have 2 courses with the same ID.")
            
            room_conflict = any(
                new.has_room_conflict(old)
                for existing in self._courses
                for old in existing.weekly_meetings
                for new in meetings
            )
            if room_conflict:
                return self._abort(outcome, RejectionReason.ROOM_CONFLICT,
                                   f"Error registering {course.course_name} because another course "
                                   f"has conflict with room")
            
            if not teacher.is_free_on(meetings):
                return self._abort(outcome, RejectionReason.TEACHER_CONFLICT,
                                   f"Error registering {course.course_name} because teacher has "
                                   f"conflict with course weekly meetings")
            
            for student in candidates:
                if not student.pre_requisites_check(course):
                    self._reject(outcome, student, RejectionReason.MISSING_PREREQUISITES,
                                 f"Prerequisites need to be completed for {student.id}: "
                                 f"{student.name} to register in {course.course_name}")
            
            for student in candidates:
                if not student.is_free_on(meetings):
                    self._reject(outcome, student, RejectionReason.SCHEDULE_CONFLICT,
                                 f"Error registering {student.id} {student.name} in "
                                 f"{course.course_name} because of conflict")
            
            eligible = [s for s in candidates
                        if s.is_free_on(meetings) and s.pre_requisites_check(course)]
            for student in eligible:
                course.enroll_student(student)
                # The capacity check runs after the roster insert and only
                # gates the bookkeeping below; the roster entry stays.
                if course.is_full:
                    outcome.over_capacity.append(student)
                    logger.warning("%s is full; %s %s was not registered",
                                   course.course_id, student.id, student.name)
                    continue
                self._commit(course, student, teacher)
                outcome.accepted.append(student)
                outcome.messages.append(f"{student.id} {student.name} registered in {course.course_name}")
                logger.info("%s %s registered in %s", student.id, student.name, course.course_name)
            
            return outcome
    
    def _commit(self, course: Course, student: Student, teacher: Teacher) -> None:
        student.add_registered_course(course)
        if course not in self._courses:
            self._courses.append(course)
        course.set_teacher(teacher)
        teacher.add_registered_course(course)
        self._students.add(student)
        self._teachers.add(teacher)
    
    @staticmethod
    def _abort(outcome: RegistrationOutcome, reason: RejectionReason, message: str) -> RegistrationOutcome:
        outcome.aborted = reason
        outcome.messages.append(message)
        logger.warning(message)
        return outcome
    
    @staticmethod
    def _reject(outcome: RegistrationOutcome, student: Student, reason: RejectionReason, message: str) -> None:
        outcome.rejected.append((student, reason))
        outcome.messages.append(message)
        logger.warning(message)
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            'semester_name': self._semester_name,
            'start_date': self._start_date.isoformat(),
            'end_date': self._end_date.isoformat(),
            'weeks_number': self._weeks_number,
            'courses': [c.course_id for c in self._courses],
            'students': sorted(s.id for s in self._students),
            'teachers': sorted(t.id for t in self._teachers),
        }
    
    def __str__(self) -> str:
        return f"Semester: {self._semester_name}[from:{self._start_date}, to:{self._end_date}]"
