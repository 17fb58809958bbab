"""Collaborator contracts consumed by the EnrollmentService."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from registrar.enrollment.models import Course, Student


class StudentRepository(Protocol):
    """Storage for student records."""

    def find_by_id(self, student_id: str) -> Student | None: ...

    def update(self, student: Student) -> None: ...

    def get_completed_courses(self, student_id: str) -> list[Course]: ...


class CourseRepository(Protocol):
    """Storage for course records and prerequisite lookups."""

    def find_by_course_code(self, course_code: str) -> Course | None: ...

    def update(self, course: Course) -> None: ...

    def is_prerequisite_met(self, student_id: str, course_code: str) -> bool: ...


class NotificationService(Protocol):
    """Outgoing notifications to students."""

    def send_email(self, email: str, subject: str, message: str) -> None: ...

    def send_sms(self, phone: str, message: str) -> None: ...
