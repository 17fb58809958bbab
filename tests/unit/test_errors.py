"""Unit tests for the error taxonomy."""

import pytest

from registrar.errors import (
    ErrorKind,
    RegistrarError,
    course_not_found,
    invalid_argument,
    student_not_found,
)


@pytest.mark.unit
class TestRegistrarError:
    """Tests for RegistrarError."""

    def test_carries_kind_and_message(self) -> None:
        error = RegistrarError(ErrorKind.COURSE_FULL, "Course CS301 is full")

        assert error.kind is ErrorKind.COURSE_FULL
        assert error.message == "Course CS301 is full"
        assert str(error) == "Course CS301 is full"
        assert error.cause is None
        assert error.__cause__ is None

    def test_wraps_cause(self) -> None:
        cause = RuntimeError("database error")
        error = RegistrarError(ErrorKind.COURSE_NOT_FOUND, "CS999 not found", cause)

        assert error.cause is cause
        assert error.__cause__ is cause

    def test_is_raisable(self) -> None:
        with pytest.raises(RegistrarError) as exc_info:
            raise RegistrarError(ErrorKind.ENROLLMENT_REJECTED, "Student is suspended")

        assert exc_info.value.kind is ErrorKind.ENROLLMENT_REJECTED

    def test_only_invalid_argument_is_caller_error(self) -> None:
        for kind in ErrorKind:
            error = RegistrarError(kind, "x")
            assert error.is_caller_error is (kind is ErrorKind.INVALID_ARGUMENT)

    def test_kind_set_is_closed(self) -> None:
        assert {k.name for k in ErrorKind} == {
            "STUDENT_NOT_FOUND",
            "COURSE_NOT_FOUND",
            "COURSE_FULL",
            "PREREQUISITE_NOT_MET",
            "ENROLLMENT_REJECTED",
            "INVALID_ARGUMENT",
        }

    def test_repr(self) -> None:
        error = RegistrarError(ErrorKind.COURSE_FULL, "full")
        assert repr(error) == "<RegistrarError(kind=COURSE_FULL, message='full')>"


@pytest.mark.unit
class TestErrorConstructors:
    """Tests for the helper constructors."""

    def test_student_not_found(self) -> None:
        error = student_not_found("S404")
        assert error.kind is ErrorKind.STUDENT_NOT_FOUND
        assert "Student not found" in error.message
        assert "S404" in error.message

    def test_course_not_found(self) -> None:
        error = course_not_found("CS999")
        assert error.kind is ErrorKind.COURSE_NOT_FOUND
        assert "Course not found" in error.message

    def test_invalid_argument(self) -> None:
        error = invalid_argument("Semester must be positive")
        assert error.kind is ErrorKind.INVALID_ARGUMENT
        assert error.is_caller_error
