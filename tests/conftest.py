"""Shared pytest fixtures and configuration."""

import pytest

from registrar.enrollment import Course, Student
from registrar.grading import AcademicStatus


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def active_student() -> Student:
    """An ACTIVE third-semester student with a 3.5 GPA."""
    return Student(
        id="S001",
        name="John Doe",
        email="john@email.com",
        major="Computer Science",
        semester=3,
        gpa=3.5,
        academic_status=AcademicStatus.ACTIVE,
    )


@pytest.fixture
def open_course() -> Course:
    """A course with 10 free seats and no prerequisites."""
    return Course(
        code="CS301",
        name="Algorithm Design",
        credits=3,
        capacity=40,
        enrolled_count=30,
        lecturer="Dr. Smith",
    )
