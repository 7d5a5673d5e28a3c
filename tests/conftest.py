# tests/conftest.py
from datetime import date

import pytest

from registrar.core.academics import Course, Faculty, Specialization
from registrar.core.enums import SpecializationType
from registrar.core.people import Student, Teacher
from registrar.core.scheduling import WeeklyMeeting
from registrar.core.semester import Semester


def meeting(day="monday", start="09:00", end="10:30", room="B-101"):
    return WeeklyMeeting.from_strings(day, start, end, room)


def make_course(course_id="CS101", capacity=30, credit_hours=3, meetings=None, prerequisites=()):
    if meetings is None:
        meetings = [meeting()]
    return Course(course_id, f"Course {course_id}", credit_hours, capacity, meetings, prerequisites)


@pytest.fixture
def faculty():
    return Faculty("Science")


@pytest.fixture
def major(faculty):
    return Specialization("Computer Science", SpecializationType.MAJOR, faculty)


@pytest.fixture
def minor(faculty):
    return Specialization("Mathematics", SpecializationType.MINOR, faculty)


@pytest.fixture
def teacher(faculty):
    return Teacher("Dr. Rivera", faculty)


@pytest.fixture
def make_student(major):
    def _make(name="Alice"):
        return Student(name, major)
    return _make


@pytest.fixture
def fall_2024():
    return Semester(date(2024, 9, 2), date(2024, 12, 13))
