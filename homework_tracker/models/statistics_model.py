# /homework-tracker/homework_tracker/models/statistics_model.py

"""
Derived, never-stored statistics computed by the aggregation engine for a
single calendar month.
"""

from pydantic import BaseModel, Field


class ClassMonthlyStat(BaseModel):
    """Status counts of every record of one class within a month."""
    classId: int
    className: str
    total: int = Field(..., description="Sum of the four status counts.")
    done: int = 0
    partial: int = 0
    notDone: int = 0
    absent: int = 0


class StudentMonthlyStat(BaseModel):
    """Status counts and weighted completion rate of one student within a month."""
    studentId: int
    studentName: str
    className: str
    total: int
    done: int = 0
    partial: int = 0
    notDone: int = 0
    absent: int = 0
    completionRate: int = Field(
        ...,
        description="round(100 * (done + 0.5 * partial) / total), rounded half up.",
    )


class MonthlySummary(BaseModel):
    """Status counts of every class added together for one month."""
    total: int = 0
    done: int = 0
    partial: int = 0
    notDone: int = 0
    absent: int = 0
    doneRate: int = Field(
        0,
        description="round(100 * done / total), rounded half up; 0 when there are no records.",
    )
