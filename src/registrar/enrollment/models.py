"""Data models for the Enrollment module."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

from registrar.grading.models import AcademicStatus

APPROVED = "APPROVED"


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Student:
    """A registered student.

    Attributes:
        id: The student's unique ID.
        name: Full name.
        email: Address that receives enrollment notifications.
        major: Program of study.
        semester: Current semester, starting at 1.
        gpa: Cumulative GPA on the 0.0-4.0 scale.
        academic_status: Current standing.
    """

    id: str
    name: str
    email: str
    major: str
    semester: int
    gpa: float
    academic_status: AcademicStatus = AcademicStatus.ACTIVE


@dataclass(frozen=True)
class Course:
    """A course offering.

    Attributes:
        code: Unique course code, e.g. "CS301".
        name: Display name.
        credits: Course weight.
        capacity: Maximum number of enrolled students.
        enrolled_count: Students currently enrolled.
        lecturer: Teaching lecturer.
        prerequisites: Codes of courses that must be completed first, in order.
    """

    code: str
    name: str
    credits: int
    capacity: int
    enrolled_count: int = 0
    lecturer: str = ""
    prerequisites: tuple[str, ...] = ()

    @property
    def is_full(self) -> bool:
        return self.enrolled_count >= self.capacity


@dataclass
class Enrollment:
    """Outcome of a successful enrollment request."""

    student_id: str
    course_code: str
    id: str = field(default_factory=generate_uuid)
    enrollment_date: datetime = field(default_factory=lambda: datetime.now(UTC))
    status: str = APPROVED
