"""Enrollment package - course registration workflows."""

from registrar.enrollment.interfaces import (
    CourseRepository,
    NotificationService,
    StudentRepository,
)
from registrar.enrollment.models import APPROVED, Course, Enrollment, Student
from registrar.enrollment.service import (
    DROP_SUBJECT,
    ENROLL_SUBJECT,
    EnrollmentService,
)

__all__ = [
    "APPROVED",
    "Course",
    "CourseRepository",
    "DROP_SUBJECT",
    "ENROLL_SUBJECT",
    "Enrollment",
    "EnrollmentService",
    "NotificationService",
    "Student",
    "StudentRepository",
]
