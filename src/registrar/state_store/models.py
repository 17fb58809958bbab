"""SQLAlchemy models for State Store."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class StudentRecord(Base):
    """Stored student."""

    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    major: Mapped[str] = mapped_column(String(255), nullable=False)
    semester: Mapped[int] = mapped_column(Integer, nullable=False)
    gpa: Mapped[float] = mapped_column(Float, nullable=False)
    academic_status: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    completions: Mapped[list[CompletedCourse]] = relationship(
        "CompletedCourse", back_populates="student", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<StudentRecord(id={self.id!r}, status={self.academic_status!r})>"


class CourseRecord(Base):
    """Stored course with its occupancy."""

    __tablename__ = "courses"

    code: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    credits: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    enrolled_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    lecturer: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    prerequisites: Mapped[list[CoursePrerequisite]] = relationship(
        "CoursePrerequisite",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CoursePrerequisite.position",
        lazy="selectin",
    )

    @property
    def prerequisite_codes(self) -> tuple[str, ...]:
        return tuple(p.prerequisite_code for p in self.prerequisites)

    def __repr__(self) -> str:
        return (
            f"<CourseRecord(code={self.code!r}, "
            f"enrolled={self.enrolled_count}/{self.capacity})>"
        )


class CoursePrerequisite(Base):
    """One prerequisite of a course, kept in declaration order."""

    __tablename__ = "course_prerequisites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    course_code: Mapped[str] = mapped_column(
        String(50), ForeignKey("courses.code"), nullable=False
    )
    # Not a foreign key: a prerequisite may be declared before it is offered
    prerequisite_code: Mapped[str] = mapped_column(String(50), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    course: Mapped[CourseRecord] = relationship("CourseRecord", back_populates="prerequisites")


class CompletedCourse(Base):
    """A course a student has passed."""

    __tablename__ = "completed_courses"
    __table_args__ = (UniqueConstraint("student_id", "course_code"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    student_id: Mapped[str] = mapped_column(
        String(50), ForeignKey("students.id"), nullable=False
    )
    course_code: Mapped[str] = mapped_column(
        String(50), ForeignKey("courses.code"), nullable=False
    )
    completed_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    student: Mapped[StudentRecord] = relationship("StudentRecord", back_populates="completions")
