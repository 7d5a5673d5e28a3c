"""
Tests for semester naming and the registration pipeline.
"""

import threading
from datetime import date

import pytest

from registrar.core.enums import RejectionReason, SemesterSeason
from registrar.core.exceptions import ConcurrencyError, ValidationError
from registrar.core.people import Teacher
from registrar.core.semester import Semester, season_for, weeks_between

from .conftest import make_course, meeting


class TestSemesterIdentity:
    def test_fall_naming_and_weeks(self, fall_2024):
        assert fall_2024.semester_name == "Fall - 2024"
        assert fall_2024.name == "Fall"
        assert fall_2024.weeks_number == 14
        assert fall_2024.is_fall and not fall_2024.is_spring and not fall_2024.is_summer
        assert str(fall_2024) == "Semester: Fall - 2024[from:2024-09-02, to:2024-12-13]"

    @pytest.mark.parametrize("month,season", [
        (1, SemesterSeason.SPRING),
        (6, SemesterSeason.SPRING),
        (7, SemesterSeason.SUMMER),
        (8, SemesterSeason.SUMMER),
        (9, SemesterSeason.FALL),
        (12, SemesterSeason.FALL),
    ])
    def test_season_by_start_month(self, month, season):
        assert season_for(date(2025, month, 1)) == season

    def test_weeks_are_whole_weeks(self):
        assert weeks_between(date(2025, 1, 6), date(2025, 1, 19)) == 1
        assert weeks_between(date(2025, 1, 6), date(2025, 1, 6)) == 0

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValidationError):
            Semester(date(2025, 5, 1), date(2025, 4, 1))

    def test_to_dict(self, fall_2024):
        data = fall_2024.to_dict()
        assert data['semester_name'] == "Fall - 2024"
        assert data['courses'] == []


class TestAbortingChecks:
    def test_duplicate_id_is_case_insensitive(self, fall_2024, teacher, make_student):
        fall_2024.register(make_course("CS101"), [make_student()], teacher)
        other_teacher = Teacher("Dr. Chen")
        duplicate = make_course("cs101", meetings=[meeting(day="friday", room="Z-1")])

        outcome = fall_2024.register(duplicate, [make_student("Bob")], other_teacher)

        assert outcome.aborted == RejectionReason.DUPLICATE_ID
        assert not outcome.success
        assert duplicate.roster == []
        assert len(fall_2024.courses) == 1
        assert other_teacher.registered_courses == set()

    def test_same_course_twice_is_rejected(self, fall_2024, teacher, make_student):
        course = make_course()
        alice = make_student()
        fall_2024.register(course, [alice], teacher)

        outcome = fall_2024.register(course, [make_student("Bob")], teacher)

        assert outcome.aborted == RejectionReason.DUPLICATE_ID
        assert course.roster == [alice]

    def test_room_conflict_aborts(self, fall_2024, teacher, make_student):
        fall_2024.register(make_course("CS101"), [make_student()], teacher)
        clash = make_course("MA101", meetings=[meeting(start="10:00", end="11:00", room="b-101 ")])

        outcome = fall_2024.register(clash, [make_student("Bob")], Teacher("Dr. Chen"))

        assert outcome.aborted == RejectionReason.ROOM_CONFLICT
        assert "conflict with room" in outcome.messages[0]
        assert clash.roster == []

    def test_same_room_different_time_is_fine(self, fall_2024, teacher, make_student):
        fall_2024.register(make_course("CS101"), [make_student()], teacher)
        later = make_course("MA101", meetings=[meeting(start="10:30", end="12:00")])

        outcome = fall_2024.register(later, [make_student("Bob")], Teacher("Dr. Chen"))

        assert outcome.success

    def test_teacher_conflict_aborts(self, fall_2024, teacher, make_student):
        fall_2024.register(make_course("CS101"), [make_student()], teacher)
        overlap = make_course("CS102", meetings=[meeting(start="10:00", end="11:30", room="B-201")])
        bob = make_student("Bob")

        outcome = fall_2024.register(overlap, [bob], teacher)

        assert outcome.aborted == RejectionReason.TEACHER_CONFLICT
        assert overlap.roster == []
        assert overlap.get_teacher() is None
        assert bob.registered_courses == set()


class TestStudentFilters:
    def test_missing_prerequisites_excluded(self, fall_2024, teacher, make_student):
        intro = make_course("CS100", meetings=[meeting(day="friday")])
        advanced = make_course("CS200", prerequisites=[intro])
        alice, bob = make_student(), make_student("Bob")
        alice.add_registered_course(intro)
        alice.enter_course_grade(intro, "B")

        outcome = fall_2024.register(advanced, [bob, alice], teacher)

        assert outcome.accepted == [alice]
        assert outcome.rejected == [(bob, RejectionReason.MISSING_PREREQUISITES)]
        assert advanced.roster == [alice]

    def test_prerequisites_checked_for_every_position(self, fall_2024, teacher, make_student):
        intro = make_course("CS100", meetings=[meeting(day="friday")])
        advanced = make_course("CS200", prerequisites=[intro])
        students = [make_student(f"S{i}") for i in range(4)]

        outcome = fall_2024.register(advanced, students, teacher)

        assert outcome.accepted == []
        assert outcome.rejected_students(RejectionReason.MISSING_PREREQUISITES) == students
        assert not outcome.success

    def test_schedule_conflict_excluded(self, fall_2024, teacher, make_student):
        alice, bob = make_student(), make_student("Bob")
        fall_2024.register(make_course("CS101"), [alice], teacher)
        overlapping = make_course("MA101", meetings=[meeting(start="10:00", end="11:00", room="M-1")])

        outcome = fall_2024.register(overlapping, [alice, bob], Teacher("Dr. Chen"))

        assert outcome.accepted == [bob]
        assert outcome.rejected_students(RejectionReason.SCHEDULE_CONFLICT) == [alice]
        assert overlapping.roster == [bob]

    def test_student_failing_both_filters_listed_once(self, fall_2024, teacher, make_student):
        alice = make_student()
        fall_2024.register(make_course("CS101"), [alice], teacher)
        intro = make_course("CS100", meetings=[meeting(day="friday")])
        advanced = make_course("CS200", prerequisites=[intro],
                               meetings=[meeting(start="10:00", end="11:00", room="M-1")])

        outcome = fall_2024.register(advanced, [alice], Teacher("Dr. Chen"))

        assert len(outcome.rejected) == 2
        assert outcome.rejected_students() == [alice]


class TestCapacity:
    def test_capacity_one_course_with_two_students(self, fall_2024, teacher, make_student):
        course = make_course("CS101", capacity=1)
        alice, bob = make_student("Alice"), make_student("Bob")

        outcome = fall_2024.register(course, [alice, bob], teacher)

        assert outcome.accepted == [alice]
        assert outcome.over_capacity == [bob]
        assert course.roster == [alice, bob]
        assert course.is_full
        assert fall_2024.students == {alice}
        assert course in alice.registered_courses
        assert course not in bob.registered_courses
        assert course in teacher.registered_courses
        assert course.get_teacher() is teacher
        assert fall_2024.courses == [course]
        assert fall_2024.teachers == {teacher}

    def test_input_order_is_commit_order(self, fall_2024, teacher, make_student):
        course = make_course("CS101", capacity=2)
        students = [make_student(name) for name in ("Carol", "Alice", "Bob")]

        outcome = fall_2024.register(course, students, teacher)

        assert outcome.accepted == students[:2]
        assert outcome.over_capacity == students[2:]

    def test_no_eligible_students_leaves_semester_untouched(self, fall_2024, teacher):
        course = make_course()

        outcome = fall_2024.register(course, [], teacher)

        assert outcome.aborted is None
        assert not outcome.success
        assert fall_2024.courses == []
        assert teacher.registered_courses == set()

    def test_outcome_to_dict(self, fall_2024, teacher, make_student):
        course = make_course("CS101", capacity=1)
        alice, bob = make_student("Alice"), make_student("Bob")
        data = fall_2024.register(course, [alice, bob], teacher).to_dict()
        assert data['success'] is True
        assert data['accepted'] == [alice.id]
        assert data['over_capacity'] == [bob.id]
        assert data['aborted'] is None


class TestLocking:
    def test_locked_is_reentrant(self, fall_2024, teacher, make_student):
        with fall_2024.locked() as semester:
            outcome = semester.register(make_course(), [make_student()], teacher)
        assert outcome.success

    def test_locked_times_out_while_held_elsewhere(self, fall_2024):
        holding = threading.Event()
        release = threading.Event()

        def hold():
            with fall_2024.locked():
                holding.set()
                release.wait(5)

        worker = threading.Thread(target=hold)
        worker.start()
        try:
            assert holding.wait(5)
            with pytest.raises(ConcurrencyError):
                with fall_2024.locked(timeout=0.05):
                    pass
        finally:
            release.set()
            worker.join()

    def test_concurrent_registrations_keep_ids_unique(self, fall_2024, make_student):
        results = []
        students = [make_student(f"S{i}") for i in range(8)]

        def register(i):
            course = make_course("CS101", meetings=[meeting(day="friday", room=f"R{i}")])
            results.append(fall_2024.register(course, [students[i]], Teacher(f"T{i}")))

        threads = [threading.Thread(target=register, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(1 for r in results if r.success) == 1
        assert sum(1 for r in results if r.aborted == RejectionReason.DUPLICATE_ID) == 7
        assert len(fall_2024.courses) == 1
