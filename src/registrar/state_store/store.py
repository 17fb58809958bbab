"""StateStore - SQLite-backed student and course repositories."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from registrar.enrollment.models import Course, Student
from registrar.grading.models import AcademicStatus
from registrar.state_store.database import Database
from registrar.state_store.exceptions import (
    CourseExistsError,
    CourseNotFoundError,
    StudentExistsError,
    StudentNotFoundError,
)
from registrar.state_store.models import (
    CompletedCourse,
    CoursePrerequisite,
    CourseRecord,
    StudentRecord,
)

logger = logging.getLogger(__name__)


def _to_student(record: StudentRecord) -> Student:
    return Student(
        id=record.id,
        name=record.name,
        email=record.email,
        major=record.major,
        semester=record.semester,
        gpa=record.gpa,
        academic_status=AcademicStatus(record.academic_status),
    )


def _to_course(record: CourseRecord) -> Course:
    return Course(
        code=record.code,
        name=record.name,
        credits=record.credits,
        capacity=record.capacity,
        enrolled_count=record.enrolled_count,
        lecturer=record.lecturer,
        prerequisites=record.prerequisite_codes,
    )


def _prerequisite_rows(codes: tuple[str, ...]) -> list[CoursePrerequisite]:
    return [
        CoursePrerequisite(prerequisite_code=code, position=position)
        for position, code in enumerate(codes)
    ]


class StudentStore:
    """Student repository backed by the State Store database."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_id(self, student_id: str) -> Student | None:
        """Get a student by ID, or None if absent."""
        with self._db.session_scope() as session:
            record = session.get(StudentRecord, student_id)
            return _to_student(record) if record is not None else None

    def update(self, student: Student) -> None:
        """Overwrite a stored student.

        Raises:
            StudentNotFoundError: If the student doesn't exist.
        """
        with self._db.session_scope() as session:
            record = session.get(StudentRecord, student.id)
            if record is None:
                raise StudentNotFoundError(f"Student with id '{student.id}' not found")

            record.name = student.name
            record.email = student.email
            record.major = student.major
            record.semester = student.semester
            record.gpa = student.gpa
            record.academic_status = AcademicStatus(student.academic_status).value

    def get_completed_courses(self, student_id: str) -> list[Course]:
        """List courses the student has completed, ordered by code."""
        with self._db.session_scope() as session:
            stmt = (
                select(CourseRecord)
                .join(CompletedCourse, CompletedCourse.course_code == CourseRecord.code)
                .where(CompletedCourse.student_id == student_id)
                .order_by(CourseRecord.code)
            )
            return [_to_course(record) for record in session.execute(stmt).scalars()]


class CourseStore:
    """Course repository backed by the State Store database.

    ``update`` overwrites the stored row as-is; it does not compare the
    previous enrolled count, so concurrent writers can lose updates.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_course_code(self, course_code: str) -> Course | None:
        """Get a course by code, or None if absent."""
        with self._db.session_scope() as session:
            record = session.get(CourseRecord, course_code)
            return _to_course(record) if record is not None else None

    def update(self, course: Course) -> None:
        """Overwrite a stored course, including its prerequisite list.

        Raises:
            CourseNotFoundError: If the course doesn't exist.
        """
        with self._db.session_scope() as session:
            record = session.get(CourseRecord, course.code)
            if record is None:
                raise CourseNotFoundError(f"Course with code '{course.code}' not found")

            record.name = course.name
            record.credits = course.credits
            record.capacity = course.capacity
            record.enrolled_count = course.enrolled_count
            record.lecturer = course.lecturer
            if record.prerequisite_codes != tuple(course.prerequisites):
                record.prerequisites = _prerequisite_rows(tuple(course.prerequisites))

    def is_prerequisite_met(self, student_id: str, course_code: str) -> bool:
        """Check whether the student completed every prerequisite of a course.

        Returns:
            True if the course has no prerequisites or all are completed.
            False for an unknown course.
        """
        with self._db.session_scope() as session:
            record = session.get(CourseRecord, course_code)
            if record is None:
                return False

            required = set(record.prerequisite_codes)
            if not required:
                return True

            stmt = select(CompletedCourse.course_code).where(
                CompletedCourse.student_id == student_id
            )
            completed = set(session.execute(stmt).scalars())
            missing = required - completed
            if missing:
                logger.debug(
                    "Student %s missing prerequisites for %s: %s",
                    student_id,
                    course_code,
                    sorted(missing),
                )
            return not missing


class StateStore:
    """SQLite storage for students, courses and completion records.

    ``students`` and ``courses`` are the repositories to hand to an
    EnrollmentService; the remaining methods seed and administer the data.
    """

    def __init__(self, db_path: str = "registrar.db") -> None:
        """Initialize State Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()
        self.students = StudentStore(self._db)
        self.courses = CourseStore(self._db)

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def add_student(self, student: Student) -> Student:
        """Insert a new student.

        Raises:
            StudentExistsError: If a student with the same ID exists.
        """
        try:
            with self._db.session_scope() as session:
                session.add(
                    StudentRecord(
                        id=student.id,
                        name=student.name,
                        email=student.email,
                        major=student.major,
                        semester=student.semester,
                        gpa=student.gpa,
                        academic_status=AcademicStatus(student.academic_status).value,
                    )
                )
        except IntegrityError as e:
            raise StudentExistsError(f"Student with id '{student.id}' already exists") from e
        return student

    def add_course(self, course: Course) -> Course:
        """Insert a new course with its prerequisites.

        Raises:
            CourseExistsError: If a course with the same code exists.
        """
        try:
            with self._db.session_scope() as session:
                record = CourseRecord(
                    code=course.code,
                    name=course.name,
                    credits=course.credits,
                    capacity=course.capacity,
                    enrolled_count=course.enrolled_count,
                    lecturer=course.lecturer,
                )
                record.prerequisites = _prerequisite_rows(tuple(course.prerequisites))
                session.add(record)
        except IntegrityError as e:
            raise CourseExistsError(f"Course with code '{course.code}' already exists") from e
        return course

    def record_completion(self, student_id: str, course_code: str) -> None:
        """Mark a course as completed by a student. Repeat calls are no-ops.

        Raises:
            StudentNotFoundError: If the student doesn't exist.
            CourseNotFoundError: If the course doesn't exist.
        """
        with self._db.session_scope() as session:
            if session.get(StudentRecord, student_id) is None:
                raise StudentNotFoundError(f"Student with id '{student_id}' not found")
            if session.get(CourseRecord, course_code) is None:
                raise CourseNotFoundError(f"Course with code '{course_code}' not found")

            stmt = select(CompletedCourse).where(
                CompletedCourse.student_id == student_id,
                CompletedCourse.course_code == course_code,
            )
            if session.execute(stmt).scalar_one_or_none() is not None:
                return

            session.add(CompletedCourse(student_id=student_id, course_code=course_code))
        logger.info("Recorded completion of %s by %s", course_code, student_id)
