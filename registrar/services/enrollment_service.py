"""
Enrollment service: an in-memory catalog of the academic records model with
registration, grading and GPA queries on top of it.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.academics import Course, Faculty, FacultyRegistry, Specialization
from ..core.entities import Event
from ..core.enums import EventType, GPAStatus, SpecializationType
from ..core.exceptions import DuplicateEntityError, ResourceNotFoundError
from ..core.gpa import DEFAULT_THRESHOLD, GPACalculator
from ..core.interfaces import EventHandler
from ..core.people import Student, Teacher
from ..core.scheduling import WeeklyMeeting
from ..core.semester import RegistrationOutcome, Semester

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service for managing courses, people and semester registrations."""
    
    def __init__(self, gpa_workers: int = 4, gpa_threshold: int = DEFAULT_THRESHOLD,
                 registry: Optional[FacultyRegistry] = None):
        self._registry = registry or FacultyRegistry()
        self._specializations: Dict[str, Specialization] = {}
        self._courses: Dict[str, Course] = {}  # normalized course ID -> course
        self._students: Dict[str, Student] = {}
        self._teachers: Dict[str, Teacher] = {}
        self._semesters: Dict[str, Semester] = {}  # semester name -> semester
        self._outcomes: List[RegistrationOutcome] = []
        self._event_handlers: List[EventHandler] = []
        self._lock = threading.RLock()
        self._executor = ThreadPoolExecutor(max_workers=gpa_workers, thread_name_prefix="gpa")
        self._gpa_calculator = GPACalculator(threshold=gpa_threshold, executor=self._executor)
    
    @property
    def registry(self) -> FacultyRegistry:
        return self._registry
    
    def add_event_handler(self, handler: EventHandler) -> None:
        """Add an event handler."""
        with self._lock:
            self._event_handlers.append(handler)
    
    # Catalog
    
    def add_faculty(self, name: str) -> Faculty:
        with self._lock:
            return self._registry.create_faculty(name)
    
    def get_faculty(self, name: str) -> Faculty:
        return self._registry.get(name)
    
    def add_specialization(self, name: str, specialization_type: SpecializationType,
                           faculty_name: str) -> Specialization:
        with self._lock:
            key = name.strip().lower()
            if key in self._specializations:
                raise DuplicateEntityError(f"Specialization already exists: {name}")
            specialization = Specialization(name, specialization_type, self.get_faculty(faculty_name))
            self._specializations[key] = specialization
            return specialization
    
    def get_specialization(self, name: str) -> Specialization:
        return self._lookup(self._specializations, name.strip().lower(), "Specialization", name)
    
    def add_course(self, course_id: str, course_name: str, credit_hours: int, capacity: int,
                   meetings: Iterable[WeeklyMeeting] = (),
                   prerequisite_ids: Iterable[str] = ()) -> Course:
        with self._lock:
            key = course_id.strip().upper()
            if key in self._courses:
                raise DuplicateEntityError(f"Course already exists: {course_id}")
            prerequisites = [self.get_course(p) for p in prerequisite_ids]
            course = Course(course_id, course_name, credit_hours, capacity, meetings, prerequisites)
            self._courses[key] = course
            return course
    
    def get_course(self, course_id: str) -> Course:
        return self._lookup(self._courses, course_id.strip().upper(), "Course", course_id)
    
    def list_courses(self) -> List[Course]:
        with self._lock:
            return list(self._courses.values())
    
    def add_student(self, name: str, major_name: str, minor_name: Optional[str] = None,
                    date_enrolled: Optional[date] = None) -> Student:
        with self._lock:
            major = self.get_specialization(major_name)
            minor = self.get_specialization(minor_name) if minor_name else None
            student = Student(name, major, minor, date_enrolled=date_enrolled,
                              gpa_calculator=self._gpa_calculator)
            self._students[student.id] = student
            return student
    
    def get_student(self, student_id: str) -> Student:
        return self._lookup(self._students, student_id, "Student", student_id)
    
    def list_students(self) -> List[Student]:
        with self._lock:
            return list(self._students.values())
    
    def add_teacher(self, name: str, faculty_name: Optional[str] = None) -> Teacher:
        with self._lock:
            faculty = self.get_faculty(faculty_name) if faculty_name else None
            teacher = Teacher(name, faculty)
            self._teachers[teacher.id] = teacher
            return teacher
    
    def get_teacher(self, teacher_id: str) -> Teacher:
        return self._lookup(self._teachers, teacher_id, "Teacher", teacher_id)
    
    def add_semester(self, start_date: date, end_date: date) -> Semester:
        with self._lock:
            semester = Semester(start_date, end_date)
            if semester.semester_name in self._semesters:
                raise DuplicateEntityError(f"Semester already exists: {semester.semester_name}")
            self._semesters[semester.semester_name] = semester
            return semester
    
    def get_semester(self, semester_name: str) -> Semester:
        return self._lookup(self._semesters, semester_name, "Semester", semester_name)
    
    def _lookup(self, table: Dict[str, Any], key: str, kind: str, shown: str) -> Any:
        with self._lock:
            try:
                return table[key]
            except KeyError:
                raise ResourceNotFoundError(f"{kind} not found: {shown}")
    
    # Operations
    
    def register(self, semester_name: str, course_id: str, student_ids: Sequence[str],
                 teacher_id: str) -> RegistrationOutcome:
        """Register a catalog course into a semester for the given students."""
        semester = self.get_semester(semester_name)
        course = self.get_course(course_id)
        teacher = self.get_teacher(teacher_id)
        students = [self.get_student(s) for s in student_ids]
        
        outcome = semester.register(course, students, teacher)
        with self._lock:
            self._outcomes.append(outcome)
        
        self._publish_event(EventType.REGISTRATION, f"registration_{semester.semester_name}", {
            'semester': semester.semester_name,
            **outcome.to_dict(),
        })
        return outcome
    
    def enter_grade(self, student_id: str, course_id: str, letter_grade: str) -> bool:
        """Record a letter grade; False if the student is not registered in the course."""
        student = self.get_student(student_id)
        course = self.get_course(course_id)
        recorded = student.enter_course_grade(course, letter_grade)
        if recorded:
            self._publish_event(EventType.GRADING, f"grading_{student.id}", {
                'student_id': student.id,
                'course_id': course.course_id,
                'letter_grade': letter_grade,
            })
        return recorded
    
    def student_gpa(self, student_id: str) -> Tuple[float, GPAStatus]:
        student = self.get_student(student_id)
        gpa = student.calculate_gpa()
        return gpa, student.get_gpa_status()
    
    def _publish_event(self, event_type: EventType, stream_id: str, event_data: Dict[str, Any]) -> None:
        """Publish an event to all handlers."""
        event = Event(event_type=event_type, stream_id=stream_id, event_data=event_data)
        
        for handler in list(self._event_handlers):
            if handler.can_handle(event_type.value):
                try:
                    handler.handle_event(event)
                except Exception:
                    logger.exception("Error in event handler %s", handler.__class__.__name__)
    
    def get_statistics(self) -> Dict[str, Any]:
        """Get enrollment statistics."""
        with self._lock:
            return {
                'faculties': len(self._registry),
                'courses': len(self._courses),
                'students': len(self._students),
                'teachers': len(self._teachers),
                'semesters': len(self._semesters),
                'registrations': len(self._outcomes),
                'aborted_registrations': sum(1 for o in self._outcomes if o.aborted),
                'accepted_students': sum(len(o.accepted) for o in self._outcomes),
                'rejected_students': sum(len(o.rejected_students()) for o in self._outcomes),
                'event_handlers': len(self._event_handlers),
            }
    
    def shutdown(self) -> None:
        """Release the GPA worker pool."""
        self._executor.shutdown(wait=True)
        self._registry.clear()
