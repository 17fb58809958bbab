"""State Store - SQLite persistence for students and courses."""

from registrar.state_store.exceptions import (
    CourseExistsError,
    CourseNotFoundError,
    StateStoreError,
    StudentExistsError,
    StudentNotFoundError,
)
from registrar.state_store.store import CourseStore, StateStore, StudentStore

__all__ = [
    "CourseExistsError",
    "CourseNotFoundError",
    "CourseStore",
    "StateStore",
    "StateStoreError",
    "StudentExistsError",
    "StudentNotFoundError",
    "StudentStore",
]
