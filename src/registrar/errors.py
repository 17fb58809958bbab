"""Error taxonomy shared by the enrollment service and the grade calculator."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Closed set of failures raised by the registration core."""

    STUDENT_NOT_FOUND = "student_not_found"
    COURSE_NOT_FOUND = "course_not_found"
    COURSE_FULL = "course_full"
    PREREQUISITE_NOT_MET = "prerequisite_not_met"
    ENROLLMENT_REJECTED = "enrollment_rejected"
    INVALID_ARGUMENT = "invalid_argument"


class RegistrarError(Exception):
    """Failure raised by the registration core.

    Callers discriminate on ``kind`` instead of on exception subclasses::

        try:
            service.enroll_course(student_id, course_code)
        except RegistrarError as e:
            match e.kind:
                case ErrorKind.COURSE_FULL:
                    ...

    Attributes:
        kind: Which failure occurred.
        message: Human-readable description.
        cause: Underlying exception, if any. Also chained as ``__cause__``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def is_caller_error(self) -> bool:
        """True for contract violations, False for errors caused by stored data."""
        return self.kind is ErrorKind.INVALID_ARGUMENT

    def __repr__(self) -> str:
        return f"<RegistrarError(kind={self.kind.name}, message={self.message!r})>"


def student_not_found(student_id: str) -> RegistrarError:
    return RegistrarError(ErrorKind.STUDENT_NOT_FOUND, f"Student not found: {student_id}")


def course_not_found(course_code: str) -> RegistrarError:
    return RegistrarError(ErrorKind.COURSE_NOT_FOUND, f"Course not found: {course_code}")


def invalid_argument(message: str) -> RegistrarError:
    return RegistrarError(ErrorKind.INVALID_ARGUMENT, message)
