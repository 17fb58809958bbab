"""EnrollmentService - enrollment gates and course occupancy updates."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from registrar.enrollment.models import Enrollment
from registrar.errors import (
    ErrorKind,
    RegistrarError,
    course_not_found,
    student_not_found,
)
from registrar.grading import AcademicStatus, GradeCalculator
from registrar.logging import mask_email

if TYPE_CHECKING:
    from registrar.enrollment.interfaces import (
        CourseRepository,
        NotificationService,
        StudentRepository,
    )
    from registrar.enrollment.models import Course, Student

logger = logging.getLogger(__name__)

ENROLL_SUBJECT = "Enrollment Confirmation"
DROP_SUBJECT = "Course Drop Confirmation"


class EnrollmentService:
    """Runs the enroll, drop and credit-limit workflows.

    Every workflow reads its records from the repositories, checks its gates
    in a fixed order and only then writes an updated course snapshot back and
    notifies the student. A failed gate raises RegistrarError before anything
    is written or sent.

    The capacity check and the write-back are not atomic: concurrent enroll
    calls for the last seat can both succeed unless the course repository
    serializes updates itself.
    """

    def __init__(
        self,
        student_repository: StudentRepository,
        course_repository: CourseRepository,
        notification_service: NotificationService,
        grade_calculator: GradeCalculator | None = None,
    ) -> None:
        """Initialize the EnrollmentService.

        Args:
            student_repository: Source of student records.
            course_repository: Source and sink of course records.
            notification_service: Sends confirmations to students.
            grade_calculator: Grade rules. Defaults to the standard policy.
        """
        self.student_repository = student_repository
        self.course_repository = course_repository
        self.notification_service = notification_service
        self.grade_calculator = (
            grade_calculator if grade_calculator is not None else GradeCalculator()
        )

    def enroll_course(self, student_id: str, course_code: str) -> Enrollment:
        """Enroll a student in a course.

        Gates run in this order: student exists, student not suspended,
        course exists, course not full, prerequisites met.

        Args:
            student_id: The student's unique ID.
            course_code: The course's unique code.

        Returns:
            A new APPROVED Enrollment.

        Raises:
            RegistrarError: STUDENT_NOT_FOUND, ENROLLMENT_REJECTED,
                COURSE_NOT_FOUND, COURSE_FULL or PREREQUISITE_NOT_MET.
        """
        logger.info("Enrolling student %s in %s", student_id, course_code)

        student = self._get_student(student_id)
        if student.academic_status == AcademicStatus.SUSPENDED:
            raise self._reject(
                ErrorKind.ENROLLMENT_REJECTED,
                f"Student {student_id} is suspended and cannot enroll",
            )

        course = self._get_course(course_code)
        if course.is_full:
            # Must run before the prerequisite lookup
            raise self._reject(ErrorKind.COURSE_FULL, f"Course {course_code} is full")

        if not self.course_repository.is_prerequisite_met(student_id, course_code):
            raise self._reject(
                ErrorKind.PREREQUISITE_NOT_MET,
                f"Prerequisites not met for course {course_code}",
            )

        updated = replace(course, enrolled_count=course.enrolled_count + 1)
        self.course_repository.update(updated)

        enrollment = Enrollment(student_id=student_id, course_code=course_code)
        logger.info(
            "Enrollment %s approved (%s now %d/%d)",
            enrollment.id,
            course_code,
            updated.enrolled_count,
            updated.capacity,
        )

        self._notify(
            student,
            ENROLL_SUBJECT,
            f"Dear {student.name}, you have been enrolled in {course.name} ({course.code}).",
        )
        return enrollment

    def drop_course(self, student_id: str, course_code: str) -> None:
        """Drop a student from a course.

        Args:
            student_id: The student's unique ID.
            course_code: The course's unique code.

        Raises:
            RegistrarError: STUDENT_NOT_FOUND or COURSE_NOT_FOUND.
        """
        logger.info("Dropping student %s from %s", student_id, course_code)

        student = self._get_student(student_id)
        course = self._get_course(course_code)

        # No floor at zero
        updated = replace(course, enrolled_count=course.enrolled_count - 1)
        self.course_repository.update(updated)
        logger.info(
            "Dropped %s from %s (now %d/%d)",
            student_id,
            course_code,
            updated.enrolled_count,
            updated.capacity,
        )

        self._notify(
            student,
            DROP_SUBJECT,
            f"Dear {student.name}, you have dropped {course.name} ({course.code}).",
        )

    def validate_credit_limit(self, student_id: str, requested_credits: int) -> bool:
        """Check a credit load against the student's GPA-based limit.

        Returns:
            True if requested_credits does not exceed the limit.

        Raises:
            RegistrarError: STUDENT_NOT_FOUND, or INVALID_ARGUMENT if the stored
                GPA is out of range.
        """
        student = self._get_student(student_id)
        max_credits = self.grade_calculator.calculate_max_credits(student.gpa)
        logger.debug(
            "Credit limit for %s: requested=%d max=%d",
            student_id,
            requested_credits,
            max_credits,
        )
        return requested_credits <= max_credits

    def _get_student(self, student_id: str) -> Student:
        student = self.student_repository.find_by_id(student_id)
        if student is None:
            raise self._reject_error(student_not_found(student_id))
        return student

    def _get_course(self, course_code: str) -> Course:
        course = self.course_repository.find_by_course_code(course_code)
        if course is None:
            raise self._reject_error(course_not_found(course_code))
        return course

    def _reject(self, kind: ErrorKind, message: str) -> RegistrarError:
        return self._reject_error(RegistrarError(kind, message))

    def _reject_error(self, error: RegistrarError) -> RegistrarError:
        logger.warning("Rejected (%s): %s", error.kind.name, error.message)
        return error

    def _notify(self, student: Student, subject: str, message: str) -> None:
        logger.info("Sending '%s' to %s", subject, mask_email(student.email))
        self.notification_service.send_email(student.email, subject, message)
