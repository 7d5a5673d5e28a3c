"""
REST API for the registrar using FastAPI.
"""

import threading
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from .. import __version__
from ..core.academics import Course
from ..core.enums import SpecializationType
from ..core.exceptions import (
    DuplicateEntityError, RegistrarException, ResourceNotFoundError, ValidationError
)
from ..core.people import Student, Teacher
from ..core.scheduling import WeeklyMeeting
from ..core.semester import RegistrationOutcome, Semester
from ..services import EnrollmentService


# Pydantic models for API
class FacultyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class FacultyResponse(BaseModel):
    id: str
    name: str
    majors: List[str] = []
    minors: List[str] = []


class SpecializationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: str = Field(..., pattern=r'^(major|minor)$')
    faculty: str = Field(..., min_length=1)


class SpecializationResponse(BaseModel):
    id: str
    name: str
    type: str
    faculty: str


class MeetingModel(BaseModel):
    day: str = Field(..., pattern=r'^(monday|tuesday|wednesday|thursday|friday|saturday|sunday)$')
    start_time: str = Field(..., pattern=r'^\d{1,2}:\d{2}$')
    end_time: str = Field(..., pattern=r'^\d{1,2}:\d{2}$')
    room: str = Field(..., min_length=1, max_length=50)


class CourseCreate(BaseModel):
    course_id: str = Field(..., min_length=1, max_length=20)
    course_name: str = Field(..., min_length=1, max_length=200)
    credit_hours: int = Field(..., ge=0, le=20)
    capacity: int = Field(..., ge=0, le=1000)
    meetings: List[MeetingModel] = []
    prerequisites: List[str] = []


class CourseResponse(BaseModel):
    id: str
    course_id: str
    course_name: str
    credit_hours: int
    capacity: int
    meetings: List[MeetingModel] = []
    prerequisites: List[str] = []
    roster: List[str] = []
    teacher_id: Optional[str] = None
    is_full: bool


class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    major: str = Field(..., min_length=1)
    minor: Optional[str] = None
    date_enrolled: Optional[date] = None


class StudentResponse(BaseModel):
    id: str
    name: str
    major: str
    minor: Optional[str] = None
    faculty: str
    date_enrolled: date
    registered_courses: List[str] = []
    completed_courses: Dict[str, float] = {}


class TeacherCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    faculty: Optional[str] = None


class TeacherResponse(BaseModel):
    id: str
    name: str
    faculty: Optional[str] = None
    registered_courses: List[str] = []


class SemesterCreate(BaseModel):
    start_date: date
    end_date: date


class SemesterResponse(BaseModel):
    semester_name: str
    start_date: date
    end_date: date
    weeks_number: int
    courses: List[str] = []
    students: List[str] = []
    teachers: List[str] = []


class RegistrationRequest(BaseModel):
    semester: str = Field(..., min_length=1)
    course_id: str = Field(..., min_length=1)
    teacher_id: str = Field(..., min_length=1)
    student_ids: List[str] = []


class RejectionModel(BaseModel):
    student_id: str
    reason: str


class RegistrationResponse(BaseModel):
    course_id: str
    success: bool
    aborted: Optional[str] = None
    accepted: List[str] = []
    rejected: List[RejectionModel] = []
    over_capacity: List[str] = []
    messages: List[str] = []


class GradeRequest(BaseModel):
    student_id: str = Field(..., min_length=1)
    course_id: str = Field(..., min_length=1)
    letter_grade: str = Field(..., min_length=1, max_length=2)


class GradeResponse(BaseModel):
    recorded: bool
    message: str


class GPAResponse(BaseModel):
    student_id: str
    gpa: float
    status: str


class StatisticsResponse(BaseModel):
    success: bool
    message: str
    statistics: Dict[str, Any]


def _http_error(error: RegistrarException) -> HTTPException:
    if isinstance(error, ResourceNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, DuplicateEntityError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=error.message)
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message)


class RegistrarRestAPI:
    """REST API over an EnrollmentService."""
    
    def __init__(self, enrollment_service: EnrollmentService):
        self._enrollment_service = enrollment_service
        self._lock = threading.RLock()
        
        self.app = FastAPI(
            title="Registrar API",
            description="University academic records and course registration",
            version=__version__,
            docs_url="/docs",
            redoc_url="/redoc"
        )
        
        self._setup_routes()
    
    def _setup_routes(self):
        """Setup API routes."""
        service = self._enrollment_service
        
        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "Registrar API",
                "version": __version__,
                "docs": "/docs"
            }
        
        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}
        
        @self.app.post("/faculties", response_model=FacultyResponse, status_code=status.HTTP_201_CREATED)
        async def create_faculty(data: FacultyCreate):
            """Create a faculty."""
            try:
                with self._lock:
                    faculty = service.add_faculty(data.name)
                    return FacultyResponse(id=faculty.id, name=faculty.name)
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.get("/faculties/{name}", response_model=FacultyResponse)
        async def get_faculty(name: str):
            """Get a faculty with its specializations."""
            try:
                faculty = service.get_faculty(name)
                return FacultyResponse(
                    id=faculty.id,
                    name=faculty.name,
                    majors=[s.name for s in faculty.get_majors()],
                    minors=[s.name for s in faculty.get_minors()],
                )
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.post("/specializations", response_model=SpecializationResponse,
                       status_code=status.HTTP_201_CREATED)
        async def create_specialization(data: SpecializationCreate):
            """Create a major or minor inside a faculty."""
            try:
                with self._lock:
                    specialization = service.add_specialization(
                        data.name, SpecializationType(data.type), data.faculty
                    )
                    return SpecializationResponse(
                        id=specialization.id,
                        name=specialization.name,
                        type=specialization.type.value,
                        faculty=specialization.faculty.name,
                    )
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.post("/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
        async def create_course(data: CourseCreate):
            """Create a course with its weekly meetings."""
            try:
                with self._lock:
                    meetings = [
                        WeeklyMeeting.from_strings(m.day, m.start_time, m.end_time, m.room)
                        for m in data.meetings
                    ]
                    course = service.add_course(
                        data.course_id, data.course_name, data.credit_hours, data.capacity,
                        meetings, data.prerequisites
                    )
                    return self._course_to_response(course)
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.get("/courses/{course_id}", response_model=CourseResponse)
        async def get_course(course_id: str):
            """Get a course by course ID."""
            try:
                return self._course_to_response(service.get_course(course_id))
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.get("/courses", response_model=List[CourseResponse])
        async def list_courses(skip: int = 0, limit: int = 100):
            """List all courses."""
            courses = service.list_courses()[skip:skip + limit]
            return [self._course_to_response(course) for course in courses]
        
        @self.app.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
        async def create_student(data: StudentCreate):
            """Create a student in a major (and optional minor)."""
            try:
                with self._lock:
                    student = service.add_student(data.name, data.major, data.minor, data.date_enrolled)
                    return self._student_to_response(student)
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.get("/students", response_model=List[StudentResponse])
        async def list_students(skip: int = 0, limit: int = 100):
            """List all students."""
            students = service.list_students()[skip:skip + limit]
            return [self._student_to_response(student) for student in students]
        
        @self.app.get("/students/{student_id}", response_model=StudentResponse)
        async def get_student(student_id: str):
            """Get a student by ID."""
            try:
                return self._student_to_response(service.get_student(student_id))
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.get("/students/{student_id}/gpa", response_model=GPAResponse)
        async def get_student_gpa(student_id: str):
            """Compute a student's GPA and standing."""
            try:
                gpa, gpa_status = service.student_gpa(student_id)
                return GPAResponse(student_id=student_id, gpa=gpa, status=gpa_status.value)
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.post("/teachers", response_model=TeacherResponse, status_code=status.HTTP_201_CREATED)
        async def create_teacher(data: TeacherCreate):
            """Create a teacher."""
            try:
                with self._lock:
                    return self._teacher_to_response(service.add_teacher(data.name, data.faculty))
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.get("/teachers/{teacher_id}", response_model=TeacherResponse)
        async def get_teacher(teacher_id: str):
            """Get a teacher by ID."""
            try:
                return self._teacher_to_response(service.get_teacher(teacher_id))
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.post("/semesters", response_model=SemesterResponse, status_code=status.HTTP_201_CREATED)
        async def create_semester(data: SemesterCreate):
            """Open a semester."""
            try:
                with self._lock:
                    return self._semester_to_response(service.add_semester(data.start_date, data.end_date))
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.get("/semesters/{semester_name}", response_model=SemesterResponse)
        async def get_semester(semester_name: str):
            """Get a semester by name, e.g. 'Fall - 2024'."""
            try:
                return self._semester_to_response(service.get_semester(semester_name))
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.post("/registrations", response_model=RegistrationResponse)
        async def register(data: RegistrationRequest):
            """Register a course into a semester for a list of students."""
            try:
                with self._lock:
                    outcome = service.register(data.semester, data.course_id, data.student_ids,
                                               data.teacher_id)
                    return self._outcome_to_response(outcome)
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.post("/grades", response_model=GradeResponse)
        async def enter_grade(data: GradeRequest):
            """Enter a letter grade for a registered course."""
            try:
                with self._lock:
                    recorded = service.enter_grade(data.student_id, data.course_id, data.letter_grade)
                    if recorded:
                        message = f"Grade {data.letter_grade} recorded for {data.course_id}"
                    else:
                        message = f"Student is not registered in {data.course_id}"
                    return GradeResponse(recorded=recorded, message=message)
            except RegistrarException as e:
                raise _http_error(e)
        
        @self.app.get("/statistics", response_model=StatisticsResponse)
        async def get_statistics():
            """Get system statistics."""
            return StatisticsResponse(
                success=True,
                message="Statistics retrieved successfully",
                statistics=service.get_statistics()
            )
    
    def _course_to_response(self, course: Course) -> CourseResponse:
        """Convert Course entity to response model."""
        data = course.to_dict()
        return CourseResponse(
            id=course.id,
            course_id=course.course_id,
            course_name=course.course_name,
            credit_hours=course.credit_hours,
            capacity=course.capacity,
            meetings=[MeetingModel(**m) for m in data['weekly_meetings']],
            prerequisites=data['prerequisites'],
            roster=data['roster'],
            teacher_id=data['teacher'],
            is_full=course.is_full,
        )
    
    def _student_to_response(self, student: Student) -> StudentResponse:
        """Convert Student entity to response model."""
        return StudentResponse(
            id=student.id,
            name=student.name,
            major=student.major.name,
            minor=student.minor.name if student.minor else None,
            faculty=student.faculty.name,
            date_enrolled=student.date_enrolled,
            registered_courses=sorted(c.course_id for c in student.registered_courses),
            completed_courses={c.course_id: g for c, g in student.completed_courses_grades.items()},
        )
    
    def _teacher_to_response(self, teacher: Teacher) -> TeacherResponse:
        return TeacherResponse(
            id=teacher.id,
            name=teacher.name,
            faculty=teacher.faculty.name if teacher.faculty else None,
            registered_courses=sorted(c.course_id for c in teacher.registered_courses),
        )
    
    def _semester_to_response(self, semester: Semester) -> SemesterResponse:
        return SemesterResponse(**semester.to_dict())
    
    def _outcome_to_response(self, outcome: RegistrationOutcome) -> RegistrationResponse:
        return RegistrationResponse(**outcome.to_dict())
