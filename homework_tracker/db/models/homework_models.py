# /homework-tracker/homework_tracker/db/models/homework_models.py

"""
This module defines the SQLAlchemy ORM models for the `Class`, `Student` and
`HomeworkRecord` entities of the relational backend.

Both foreign keys are declared `ON DELETE CASCADE`, so deleting a class row
removes its students and their homework records inside the storage engine
itself. The ORM relationships use `passive_deletes=True` to leave that work
to the database.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database import Base


class Class(Base):
    """SQLAlchemy model representing a class (a named cohort of students)."""
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, index=True)
    description = Column(String, nullable=True)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    students = relationship(
        "Student",
        back_populates="class_",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Student(Base):
    """SQLAlchemy model representing a single student within a Class."""
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    grade = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    parent_phone = Column(String, nullable=True)
    note = Column(String, nullable=True)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    class_ = relationship("Class", back_populates="students")
    homework_records = relationship(
        "HomeworkRecord",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class HomeworkRecord(Base):
    """
    SQLAlchemy model representing one homework status for one student on one
    date. The (student_id, date) pair is unique.
    """
    __tablename__ = "homework_records"
    __table_args__ = (UniqueConstraint("student_id", "date", name="uq_homework_student_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(String, nullable=False, index=True)
    status = Column(String, nullable=False)
    note = Column(String, nullable=True)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    student = relationship("Student", back_populates="homework_records")
