"""
Registrar: academic records and course registration for a university.

Models faculties, departments, semesters, courses, students and teachers,
and registers students into courses subject to room, schedule and
prerequisite constraints.
"""

__version__ = "1.0.0"
__author__ = "Registrar Development Team"
__description__ = "University academic records and enrollment engine"
