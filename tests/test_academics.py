"""
Tests for courses, faculties, departments, specializations and the faculty registry.
"""

import pytest

from registrar.core.academics import Course, Department, Faculty, FacultyRegistry, Specialization
from registrar.core.enums import SpecializationType
from registrar.core.exceptions import DuplicateEntityError, ResourceNotFoundError, ValidationError

from .conftest import make_course, meeting


class TestCourse:
    def test_roster_insert_ignores_capacity(self, make_student):
        course = make_course(capacity=1)
        alice, bob = make_student("Alice"), make_student("Bob")
        course.enroll_student(alice)
        assert not course.is_full
        course.enroll_student(bob)
        assert course.roster == [alice, bob]
        assert course.is_full

    def test_enrolling_twice_keeps_one_entry(self, make_student):
        course = make_course()
        alice = make_student()
        course.enroll_student(alice)
        course.enroll_student(alice)
        assert course.enrolled_count == 1

    def test_same_id_is_case_insensitive(self):
        assert make_course("cs101").same_id_as(make_course(" CS101"))
        assert not make_course("CS101").same_id_as(make_course("CS102"))

    def test_invalid_values(self):
        with pytest.raises(ValidationError):
            Course("CS1", "x", 3, -1)
        with pytest.raises(ValidationError):
            Course("CS1", "x", -3, 10)
        with pytest.raises(ValidationError):
            Course("  ", "x", 3, 10)

    def test_course_cannot_require_itself(self):
        course = make_course("CS101")
        with pytest.raises(ValidationError):
            course.add_prerequisite(course)
        with pytest.raises(ValidationError):
            course.add_prerequisite(make_course("cs101"))

    def test_teacher_assignment(self, teacher):
        course = make_course()
        assert course.get_teacher() is None
        course.set_teacher(teacher)
        assert course.teacher is teacher
        course.set_teacher(None)
        assert course.get_teacher() is None

    def test_to_dict(self):
        base = make_course("CS100")
        course = make_course("CS200", meetings=[meeting(day="tuesday"), meeting(day="monday")],
                             prerequisites=[base])
        course.add_weekly_meeting(meeting(day="friday"))
        data = course.to_dict()
        assert data['course_id'] == "CS200"
        assert data['prerequisites'] == ["CS100"]
        assert [m['day'] for m in data['weekly_meetings']] == ["friday", "monday", "tuesday"]
        assert data['teacher'] is None
        assert data['is_full'] is False

    def test_mutations_bump_version(self):
        course = make_course()
        version = course.version
        course.add_weekly_meeting(meeting(day="friday"))
        assert course.version == version + 1


class TestFacultyStructure:
    def test_specializations_are_split_by_type(self, faculty, major, minor):
        assert faculty.get_majors() == [major]
        assert faculty.get_minors() == [minor]

    def test_specialization_courses_feed_faculty_lists(self, faculty, major, minor):
        cs = make_course("CS101")
        math = make_course("MATH101")
        major.add_course(cs)
        minor.add_course(math)
        major.add_course(cs)
        assert major.courses == [cs]
        assert faculty.major_courses == [cs]
        assert faculty.minor_courses == [math]

    def test_students_join_faculty_and_specializations(self, faculty, major, minor):
        from registrar.core.people import Student

        student = Student("Alice", major, minor)
        assert faculty.students == [student]
        assert major.students == [student]
        assert minor.students == [student]
        assert student.faculty is faculty

    def test_teacher_joins_faculty(self, faculty, teacher):
        assert teacher in faculty.teachers

    def test_department_containers(self, faculty, teacher, make_student):
        intro = make_course("CS101")
        dept = Department("Computing", faculty, majors=[intro])
        dept.add_minor(make_course("MATH101"))
        dept.add_major(make_course("CS201"))
        dept.add_teacher(teacher)
        dept.add_teacher(teacher)
        alice = make_student()
        dept.add_student(alice)
        assert dept.faculty is faculty
        assert [c.course_id for c in dept.majors] == ["CS101", "CS201"]
        assert [c.course_id for c in dept.minors] == ["MATH101"]
        assert dept.teachers == [teacher]
        assert dept.students == [alice]

    def test_faculty_to_dict(self, faculty, major, minor):
        data = faculty.to_dict()
        assert data['name'] == "Science"
        assert data['majors'] == ["Computer Science"]
        assert data['minors'] == ["Mathematics"]


class TestFacultyRegistry:
    def test_register_and_lookup(self):
        registry = FacultyRegistry()
        science = registry.create_faculty("Science")
        assert registry.get("science") is science
        assert "SCIENCE" in registry
        assert len(registry) == 1

    def test_duplicate_names_rejected(self):
        registry = FacultyRegistry()
        registry.create_faculty("Science")
        with pytest.raises(DuplicateEntityError):
            registry.register(Faculty(" science "))

    def test_unknown_faculty(self):
        registry = FacultyRegistry()
        with pytest.raises(ResourceNotFoundError):
            registry.get("Arts")
        with pytest.raises(ResourceNotFoundError):
            registry.remove("Arts")

    def test_registries_are_independent(self):
        first, second = FacultyRegistry(), FacultyRegistry()
        first.create_faculty("Science")
        assert "Science" not in second

    def test_remove_and_clear(self):
        registry = FacultyRegistry()
        arts = registry.create_faculty("Arts")
        registry.create_faculty("Science")
        assert registry.remove("arts") is arts
        assert [f.name for f in registry.all()] == ["Science"]
        registry.clear()
        assert len(registry) == 0
