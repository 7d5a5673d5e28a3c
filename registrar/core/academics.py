"""
Academic structure: courses, faculties, departments and specializations.
"""

import threading
from typing import Any, Dict, Iterable, List, Optional, Set

from .entities import AbstractEntity
from .enums import SpecializationType
from .exceptions import DuplicateEntityError, ResourceNotFoundError, ValidationError
from .scheduling import WeeklyMeeting


class Course(AbstractEntity):
    """Course offered in a semester, with its meetings, prerequisites and roster."""
    
    def __init__(self, course_id: str, course_name: str, credit_hours: int, capacity: int,
                 weekly_meetings: Iterable[WeeklyMeeting] = (),
                 prerequisites: Iterable['Course'] = (), **kwargs):
        super().__init__(**kwargs)
        if not course_id or not course_id.strip():
            raise ValidationError("Course ID is required")
        if capacity < 0:
            raise ValidationError("Capacity cannot be negative")
        if credit_hours < 0:
            raise ValidationError("Credit hours cannot be negative")
        self._course_id = course_id.strip()
        self._course_name = course_name
        self._credit_hours = credit_hours
        self._capacity = capacity
        self._weekly_meetings: Set[WeeklyMeeting] = set(weekly_meetings)
        self._prerequisites: Set['Course'] = set()
        self._roster: Dict['Student', None] = {}  # insertion-ordered set
        self._teacher: Optional['Teacher'] = None
        for prerequisite in prerequisites:
            self.add_prerequisite(prerequisite)
    
    @property
    def course_id(self) -> str:
        return self._course_id
    
    @property
    def normalized_id(self) -> str:
        return self._course_id.upper()
    
    @property
    def course_name(self) -> str:
        return self._course_name
    
    @property
    def credit_hours(self) -> int:
        return self._credit_hours
    
    @property
    def capacity(self) -> int:
        return self._capacity
    
    @property
    def weekly_meetings(self) -> Set[WeeklyMeeting]:
        return self._weekly_meetings.copy()
    
    @property
    def prerequisites(self) -> Set['Course']:
        return self._prerequisites.copy()
    
    @property
    def roster(self) -> List['Student']:
        return list(self._roster)
    
    @property
    def enrolled_count(self) -> int:
        return len(self._roster)
    
    @property
    def is_full(self) -> bool:
        """True once the roster holds more students than the capacity.

        Registration inserts a student first and asks this afterwards, so a
        course with capacity N still reports "not full" right after its Nth
        student is inserted.
        """
        return len(self._roster) > self._capacity
    
    @property
    def teacher(self) -> Optional['Teacher']:
        return self._teacher
    
    def get_teacher(self) -> Optional['Teacher']:
        return self._teacher
    
    def same_id_as(self, other: 'Course') -> bool:
        return self.normalized_id == other.normalized_id
    
    def add_weekly_meeting(self, meeting: WeeklyMeeting) -> None:
        """Add a weekly meeting."""
        self._weekly_meetings.add(meeting)
        self.touch()
    
    def add_prerequisite(self, course: 'Course') -> None:
        """Add a prerequisite course."""
        if course is self or course.same_id_as(self):
            raise ValidationError(f"{self._course_id} cannot be its own prerequisite")
        self._prerequisites.add(course)
        self.touch()
    
    def enroll_student(self, student: 'Student') -> None:
        """Insert a student into the roster; capacity is not checked here."""
        if student not in self._roster:
            self._roster[student] = None
            self.touch()
    
    def set_teacher(self, teacher: Optional['Teacher']) -> None:
        """Assign the teacher, or clear it with None."""
        self._teacher = teacher
        self.touch()
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert course to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'course_id': self._course_id,
            'course_name': self._course_name,
            'credit_hours': self._credit_hours,
            'capacity': self._capacity,
            'weekly_meetings': [m.to_dict() for m in sorted(
                self._weekly_meetings, key=lambda m: (m.day.value, m.start_time, m.room_key))],
            'prerequisites': sorted(c.course_id for c in self._prerequisites),
            'roster': [s.id for s in self._roster],
            'teacher': self._teacher.id if self._teacher else None,
            'is_full': self.is_full,
        })
        return base_dict
    
    def __str__(self) -> str:
        return f"{self._course_id} {self._course_name}"


class Faculty(AbstractEntity):
    """A faculty with its teachers, students, courses and specializations."""
    
    def __init__(self, name: str, **kwargs):
        super().__init__(**kwargs)
        self._name = name
        self._teachers: Set['Teacher'] = set()
        self._students: List['Student'] = []
        self._major_courses: List[Course] = []
        self._minor_courses: List[Course] = []
        self._specializations: List['Specialization'] = []
    
    @property
    def name(self) -> str:
        return self._name
    
    @property
    def teachers(self) -> Set['Teacher']:
        return self._teachers.copy()
    
    @property
    def students(self) -> List['Student']:
        return self._students.copy()
    
    @property
    def major_courses(self) -> List[Course]:
        return self._major_courses.copy()
    
    @property
    def minor_courses(self) -> List[Course]:
        return self._minor_courses.copy()
    
    @property
    def specializations(self) -> List['Specialization']:
        return self._specializations.copy()
    
    def add_teacher(self, teacher: 'Teacher') -> None:
        self._teachers.add(teacher)
    
    def add_student(self, student: 'Student') -> None:
        if student not in self._students:
            self._students.append(student)
    
    def add_major_course(self, course: Course) -> None:
        self._major_courses.append(course)
    
    def add_minor_course(self, course: Course) -> None:
        self._minor_courses.append(course)
    
    def add_specialization(self, specialization: 'Specialization') -> None:
        if specialization not in self._specializations:
            self._specializations.append(specialization)
    
    def get_majors(self) -> List['Specialization']:
        return [s for s in self._specializations if s.type == SpecializationType.MAJOR]
    
    def get_minors(self) -> List['Specialization']:
        return [s for s in self._specializations if s.type == SpecializationType.MINOR]
    
    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._name,
            'majors': [s.name for s in self.get_majors()],
            'minors': [s.name for s in self.get_minors()],
            'teachers': len(self._teachers),
            'students': len(self._students),
        })
        return base_dict


class Department(AbstractEntity):
    """Department inside a faculty."""
    
    def __init__(self, name: str, faculty: Faculty, majors: Optional[List[Course]] = None,
                 minors: Optional[List[Course]] = None, **kwargs):
        super().__init__(**kwargs)
        self._name = name
        self._faculty = faculty
        self._majors: List[Course] = list(majors or [])
        self._minors: List[Course] = list(minors or [])
        self._teachers: List['Teacher'] = []
        self._students: List['Student'] = []
    
    @property
    def name(self) -> str:
        return self._name
    
    @property
    def faculty(self) -> Faculty:
        return self._faculty
    
    @property
    def majors(self) -> List[Course]:
        return self._majors.copy()
    
    @property
    def minors(self) -> List[Course]:
        return self._minors.copy()
    
    @property
    def teachers(self) -> List['Teacher']:
        return self._teachers.copy()
    
    @property
    def students(self) -> List['Student']:
        return self._students.copy()
    
    def add_major(self, course: Course) -> None:
        self._majors.append(course)
    
    def add_minor(self, course: Course) -> None:
        self._minors.append(course)
    
    def add_teacher(self, teacher: 'Teacher') -> None:
        if teacher not in self._teachers:
            self._teachers.append(teacher)
    
    def add_student(self, student: 'Student') -> None:
        if student not in self._students:
            self._students.append(student)


class Specialization(AbstractEntity):
    """A major or minor program offered by a faculty."""
    
    def __init__(self, name: str, specialization_type: SpecializationType, faculty: Faculty, **kwargs):
        super().__init__(**kwargs)
        self._name = name
        self._type = specialization_type
        self._faculty = faculty
        self._courses: List[Course] = []
        self._students: List['Student'] = []
        faculty.add_specialization(self)
    
    @property
    def name(self) -> str:
        return self._name
    
    @property
    def type(self) -> SpecializationType:
        return self._type
    
    @property
    def faculty(self) -> Faculty:
        return self._faculty
    
    @property
    def courses(self) -> List[Course]:
        return self._courses.copy()
    
    @property
    def students(self) -> List['Student']:
        return self._students.copy()
    
    def add_course(self, course: Course) -> None:
        if course not in self._courses:
            self._courses.append(course)
            if self._type == SpecializationType.MAJOR:
                self._faculty.add_major_course(course)
            else:
                self._faculty.add_minor_course(course)
    
    def add_student(self, student: 'Student') -> None:
        if student not in self._students:
            self._students.append(student)


class FacultyRegistry:
    """Explicitly owned set of faculties, keyed by case-insensitive name."""
    
    def __init__(self):
        self._faculties: Dict[str, Faculty] = {}
        self._lock = threading.RLock()
    
    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()
    
    def register(self, faculty: Faculty) -> Faculty:
        """Add an existing faculty."""
        with self._lock:
            key = self._key(faculty.name)
            if key in self._faculties:
                raise DuplicateEntityError(f"Faculty already registered: {faculty.name}")
            self._faculties[key] = faculty
            return faculty
    
    def create_faculty(self, name: str) -> Faculty:
        """Create a faculty and register it."""
        return self.register(Faculty(name))
    
    def get(self, name: str) -> Faculty:
        with self._lock:
            try:
                return self._faculties[self._key(name)]
            except KeyError:
                raise ResourceNotFoundError(f"Faculty not found: {name}")
    
    def remove(self, name: str) -> Faculty:
        with self._lock:
            try:
                return self._faculties.pop(self._key(name))
            except KeyError:
                raise ResourceNotFoundError(f"Faculty not found: {name}")
    
    def all(self) -> List[Faculty]:
        with self._lock:
            return list(self._faculties.values())
    
    def clear(self) -> None:
        """Drop every faculty."""
        with self._lock:
            self._faculties.clear()
    
    def __len__(self) -> int:
        return len(self._faculties)
    
    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._faculties
