"""
People in the academic records model: teachers and students.
"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, Optional, Set

from .academics import Course, Faculty, Specialization
from .entities import AbstractEntity
from .enums import GPAStatus, PersonType
from .gpa import GPACalculator, classify_gpa, convert_grade
from .interfaces import Schedulable
from .scheduling import WeeklyMeeting, any_time_conflict

logger = logging.getLogger(__name__)


class Person(AbstractEntity, Schedulable):
    """Base identity shared by students and teachers."""
    
    def __init__(self, name: str, role: PersonType, date_enrolled: Optional[date] = None, **kwargs):
        super().__init__(**kwargs)
        self._name = name
        self._role = role
        self._date_enrolled = date_enrolled or date.today()
        self._registered_courses: Set[Course] = set()
    
    @property
    def name(self) -> str:
        return self._name
    
    @property
    def role(self) -> PersonType:
        return self._role
    
    @property
    def date_enrolled(self) -> date:
        return self._date_enrolled
    
    @property
    def registered_courses(self) -> Set[Course]:
        return self._registered_courses.copy()
    
    def add_registered_course(self, course: Course) -> None:
        self._registered_courses.add(course)
        self.touch()
    
    def remove_registered_course(self, course: Course) -> None:
        self._registered_courses.discard(course)
        self.touch()
    
    def is_free_on(self, meetings: Iterable[WeeklyMeeting]) -> bool:
        """True if no meeting of a registered course overlaps any given meeting."""
        busy = (m for course in self._registered_courses for m in course.weekly_meetings)
        return not any_time_conflict(busy, meetings)
    
    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._name,
            'role': self._role.value,
            'date_enrolled': self._date_enrolled.isoformat(),
            'registered_courses': sorted(c.course_id for c in self._registered_courses),
        })
        return base_dict
    
    def __str__(self) -> str:
        return f"{self.id} {self._name}"


class Teacher(Person):
    """Teacher; registered courses are the courses currently assigned."""
    
    def __init__(self, name: str, faculty: Optional[Faculty] = None,
                 date_enrolled: Optional[date] = None, **kwargs):
        super().__init__(name, PersonType.TEACHER, date_enrolled, **kwargs)
        self._faculty = faculty
        if faculty is not None:
            faculty.add_teacher(self)
    
    @property
    def faculty(self) -> Optional[Faculty]:
        return self._faculty


class Student(Person):
    """Student with in-progress courses, graded courses and a derived GPA."""
    
    def __init__(self, name: str, major: Specialization, minor: Optional[Specialization] = None,
                 date_enrolled: Optional[date] = None, gpa_calculator: Optional[GPACalculator] = None,
                 **kwargs):
        super().__init__(name, PersonType.STUDENT, date_enrolled, **kwargs)
        self._major = major
        self._minor = minor
        self._faculty = major.faculty
        self._is_currently_registered = True
        self._completed_courses_grades: Dict[Course, float] = {}
        self._gpa_status: Optional[GPAStatus] = None
        self._gpa_calculator = gpa_calculator or GPACalculator()
        
        self._faculty.add_student(self)
        major.add_student(self)
        if minor is not None:
            minor.add_student(self)
    
    @property
    def major(self) -> Specialization:
        return self._major
    
    @property
    def minor(self) -> Optional[Specialization]:
        return self._minor
    
    @property
    def faculty(self) -> Faculty:
        return self._faculty
    
    @property
    def is_currently_registered(self) -> bool:
        return self._is_currently_registered
    
    @property
    def completed_courses_grades(self) -> Dict[Course, float]:
        return self._completed_courses_grades.copy()
    
    def use_gpa_calculator(self, calculator: GPACalculator) -> None:
        self._gpa_calculator = calculator
    
    def pre_requisites_check(self, course: Course) -> bool:
        """True if every prerequisite of ``course`` has been graded for this student."""
        return all(p in self._completed_courses_grades for p in course.prerequisites)
    
    def enter_course_grade(self, course: Course, letter_grade: str) -> bool:
        """Close a registered course with a letter grade.

        Returns False, without touching anything, when the student is not
        registered in the course.
        """
        if course not in self._registered_courses:
            logger.warning("%s is not registered in %s", self._name, course.course_name)
            return False
        
        self._completed_courses_grades[course] = convert_grade(letter_grade)
        self._registered_courses.discard(course)
        
        teacher = course.get_teacher()
        if teacher is not None:
            teacher.remove_registered_course(course)
        course.set_teacher(None)
        self.touch()
        return True
    
    def calculate_gpa(self) -> float:
        """Recompute the GPA from the completed courses and refresh the status."""
        gpa = self._gpa_calculator.calculate(self._completed_courses_grades)
        self._gpa_status = classify_gpa(gpa)
        return gpa
    
    def get_gpa_status(self) -> GPAStatus:
        self.calculate_gpa()
        return self._gpa_status
    
    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            'major': self._major.name,
            'minor': self._minor.name if self._minor else None,
            'faculty': self._faculty.name,
            'is_currently_registered': self._is_currently_registered,
            'completed_courses': {c.course_id: g for c, g in self._completed_courses_grades.items()},
        })
        return base_dict
