"""GradeCalculator - GPA, credit-limit and academic-status rules."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from registrar.config import GradingPolicy
from registrar.errors import invalid_argument
from registrar.grading.models import AcademicStatus, CourseGrade

MIN_GRADE_POINT = 0.0
MAX_GRADE_POINT = 4.0

_TWO_PLACES = Decimal("0.01")


class GradeCalculator:
    """Pure grade-evaluation rules.

    Holds no state besides the grading policy; every method depends only on
    its arguments. All input validation failures raise a RegistrarError of
    kind INVALID_ARGUMENT.
    """

    def __init__(self, policy: GradingPolicy | None = None) -> None:
        """Initialize the calculator.

        Args:
            policy: Thresholds to apply. Defaults to the standard policy.
        """
        self.policy = policy if policy is not None else GradingPolicy()

    def calculate_gpa(self, grades: Iterable[CourseGrade] | None) -> float:
        """Calculate the credit-weighted GPA.

        Args:
            grades: Course grades. None or empty yields 0.0.

        Returns:
            GPA rounded half-up to two decimal places.

        Raises:
            RegistrarError: INVALID_ARGUMENT if a grade point is outside 0.0-4.0.
        """
        if grades is None:
            return 0.0

        total_points = Decimal(0)
        total_credits = 0
        for grade in grades:
            if not MIN_GRADE_POINT <= grade.grade_point <= MAX_GRADE_POINT:
                raise invalid_argument(f"Invalid grade point: {grade.grade_point}")
            total_points += Decimal(str(grade.grade_point)) * grade.credits
            total_credits += grade.credits

        if total_credits == 0:
            return 0.0

        gpa = total_points / total_credits
        return float(gpa.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))

    def calculate_max_credits(self, gpa: float) -> int:
        """Get the credit limit a GPA allows.

        Raises:
            RegistrarError: INVALID_ARGUMENT if gpa is outside 0.0-4.0.
        """
        _check_gpa(gpa)

        for tier in self.policy.credit_tiers:
            if gpa >= tier.min_gpa:
                return tier.max_credits
        return self.policy.base_credits

    def determine_academic_status(self, gpa: float, semester: int) -> AcademicStatus:
        """Derive academic status from GPA and semester.

        Semesters 1-2 never suspend; later bands suspend below the
        probation floor.

        Raises:
            RegistrarError: INVALID_ARGUMENT if gpa is outside 0.0-4.0 or
                semester is below 1.
        """
        _check_gpa(gpa)
        if semester < 1:
            raise invalid_argument("Semester must be positive")

        thresholds = self.policy.thresholds_for(semester)
        if gpa >= thresholds.active_min:
            return AcademicStatus.ACTIVE
        if thresholds.probation_min is None or gpa >= thresholds.probation_min:
            return AcademicStatus.PROBATION
        return AcademicStatus.SUSPENDED


def _check_gpa(gpa: float) -> None:
    if not MIN_GRADE_POINT <= gpa <= MAX_GRADE_POINT:
        raise invalid_argument("GPA must be between 0 and 4.0")
