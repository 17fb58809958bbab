"""Custom exceptions for State Store."""


class StateStoreError(Exception):
    """Base exception for State Store errors."""


class StudentNotFoundError(StateStoreError):
    """Student with given ID does not exist."""


class StudentExistsError(StateStoreError):
    """Student with given ID already exists."""


class CourseNotFoundError(StateStoreError):
    """Course with given code does not exist."""


class CourseExistsError(StateStoreError):
    """Course with given code already exists."""
