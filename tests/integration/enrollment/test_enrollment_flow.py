"""Integration tests for EnrollmentService with the SQLite store."""

from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from registrar.enrollment import (
    APPROVED,
    DROP_SUBJECT,
    ENROLL_SUBJECT,
    Course,
    EnrollmentService,
    Student,
)
from registrar.errors import ErrorKind, RegistrarError
from registrar.grading import AcademicStatus, CourseGrade, GradeCalculator
from registrar.state_store import StateStore


@pytest.fixture
def store() -> StateStore:
    s = StateStore(":memory:")
    yield s
    s.close()


@pytest.fixture
def notifier() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(store: StateStore, notifier: MagicMock) -> EnrollmentService:
    """EnrollmentService wired to real repositories and calculator."""
    return EnrollmentService(
        student_repository=store.students,
        course_repository=store.courses,
        notification_service=notifier,
        grade_calculator=GradeCalculator(),
    )


def _student(student_id: str, gpa: float, semester: int, status: AcademicStatus) -> Student:
    return Student(
        id=student_id,
        name=f"Student {student_id}",
        email=f"{student_id.lower()}@email.com",
        major="Computer Science",
        semester=semester,
        gpa=gpa,
        academic_status=status,
    )


@pytest.mark.integration
class TestEnrollmentFlow:
    """End-to-end enrollment workflows."""

    def test_enroll_persists_new_count(
        self,
        store: StateStore,
        service: EnrollmentService,
        notifier: MagicMock,
        active_student: Student,
        open_course: Course,
    ) -> None:
        store.add_student(active_student)
        store.add_course(open_course)

        enrollment = service.enroll_course("S001", "CS301")

        assert enrollment.status == APPROVED
        assert store.courses.find_by_course_code("CS301").enrolled_count == 31
        notifier.send_email.assert_called_once()
        assert notifier.send_email.call_args.args[1] == ENROLL_SUBJECT

    def test_drop_then_re_enroll(
        self,
        store: StateStore,
        service: EnrollmentService,
        notifier: MagicMock,
        active_student: Student,
        open_course: Course,
    ) -> None:
        store.add_student(active_student)
        store.add_course(open_course)

        service.enroll_course("S001", "CS301")
        service.drop_course("S001", "CS301")
        assert store.courses.find_by_course_code("CS301").enrolled_count == 30

        service.enroll_course("S001", "CS301")
        assert store.courses.find_by_course_code("CS301").enrolled_count == 31

        subjects = [c.args[1] for c in notifier.send_email.call_args_list]
        assert subjects == [ENROLL_SUBJECT, DROP_SUBJECT, ENROLL_SUBJECT]

    def test_fills_course_to_capacity(
        self, store: StateStore, service: EnrollmentService, notifier: MagicMock
    ) -> None:
        store.add_course(Course("IS201", "Systems Analysis", 3, capacity=2, enrolled_count=0))
        for student_id in ("S101", "S102", "S103"):
            store.add_student(_student(student_id, 3.0, 3, AcademicStatus.ACTIVE))

        service.enroll_course("S101", "IS201")
        service.enroll_course("S102", "IS201")
        with pytest.raises(RegistrarError) as exc_info:
            service.enroll_course("S103", "IS201")

        assert exc_info.value.kind is ErrorKind.COURSE_FULL
        assert store.courses.find_by_course_code("IS201").enrolled_count == 2
        assert notifier.send_email.call_count == 2

    def test_prerequisites_from_completion_records(
        self, store: StateStore, service: EnrollmentService, active_student: Student
    ) -> None:
        store.add_student(active_student)
        store.add_course(Course("CS101", "Programming", 3, 40))
        store.add_course(Course("CS201", "Data Structures", 3, 40, prerequisites=("CS101",)))

        with pytest.raises(RegistrarError) as exc_info:
            service.enroll_course("S001", "CS201")
        assert exc_info.value.kind is ErrorKind.PREREQUISITE_NOT_MET

        store.record_completion("S001", "CS101")
        service.enroll_course("S001", "CS201")

        assert store.courses.find_by_course_code("CS201").enrolled_count == 1

    def test_failed_gate_leaves_state_untouched(
        self,
        store: StateStore,
        service: EnrollmentService,
        notifier: MagicMock,
        open_course: Course,
    ) -> None:
        store.add_student(_student("S109", 1.2, 6, AcademicStatus.SUSPENDED))
        store.add_course(open_course)

        with pytest.raises(RegistrarError) as exc_info:
            service.enroll_course("S109", "CS301")

        assert exc_info.value.kind is ErrorKind.ENROLLMENT_REJECTED
        assert store.courses.find_by_course_code("CS301").enrolled_count == 30
        notifier.send_email.assert_not_called()

    def test_unknown_records(self, service: EnrollmentService, store: StateStore) -> None:
        with pytest.raises(RegistrarError) as exc_info:
            service.enroll_course("S404", "CS301")
        assert exc_info.value.kind is ErrorKind.STUDENT_NOT_FOUND

        store.add_student(_student("S110", 3.0, 3, AcademicStatus.ACTIVE))
        with pytest.raises(RegistrarError) as exc_info:
            service.drop_course("S110", "CS999")
        assert exc_info.value.kind is ErrorKind.COURSE_NOT_FOUND


@pytest.mark.integration
class TestStandingWorkflow:
    """GPA, status and credit limit computed together."""

    def test_grades_drive_status_and_credit_limit(
        self, store: StateStore, service: EnrollmentService
    ) -> None:
        calculator = service.grade_calculator
        grades = [
            CourseGrade("CS101", 4, 4.0),
            CourseGrade("CS102", 3, 3.0),
            CourseGrade("CS103", 2, 2.0),
            CourseGrade("CS104", 2, 1.0),
        ]
        gpa = calculator.calculate_gpa(grades)
        status = calculator.determine_academic_status(gpa, semester=5)
        store.add_student(_student("S111", gpa, 5, status))

        assert gpa == 2.82
        assert status is AcademicStatus.ACTIVE
        assert service.validate_credit_limit("S111", 21) is True
        assert service.validate_credit_limit("S111", 22) is False

    def test_status_update_written_back(self, store: StateStore, service: EnrollmentService) -> None:
        student = _student("S112", 3.0, 3, AcademicStatus.ACTIVE)
        store.add_student(student)

        new_gpa = service.grade_calculator.calculate_gpa([CourseGrade("CS101", 3, 1.5)])
        new_status = service.grade_calculator.determine_academic_status(new_gpa, student.semester)
        store.students.update(replace(student, gpa=new_gpa, academic_status=new_status))

        stored = store.students.find_by_id("S112")
        assert stored.academic_status is AcademicStatus.SUSPENDED
        assert service.validate_credit_limit("S112", 16) is False
