"""Data models for grade evaluation."""

from dataclasses import dataclass
from enum import StrEnum


class AcademicStatus(StrEnum):
    """Academic standing of a student."""

    ACTIVE = "ACTIVE"
    PROBATION = "PROBATION"
    SUSPENDED = "SUSPENDED"


@dataclass(frozen=True)
class CourseGrade:
    """Grade earned in one course.

    Attributes:
        course_code: Code of the graded course.
        credits: Course weight.
        grade_point: Grade on the 0.0-4.0 scale. Checked by the calculator.
    """

    course_code: str
    credits: int
    grade_point: float
