"""Grading package - GPA, credit limits and academic status."""

from registrar.grading.calculator import GradeCalculator
from registrar.grading.models import AcademicStatus, CourseGrade

__all__ = [
    "AcademicStatus",
    "CourseGrade",
    "GradeCalculator",
]
