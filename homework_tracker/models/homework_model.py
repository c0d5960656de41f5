# /homework-tracker/homework_tracker/models/homework_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from .student_model import Student


class HomeworkStatus(str, Enum):
    """The closed set of homework-completion states."""
    DONE = "done"
    PARTIAL = "partial"
    NOT_DONE = "not_done"
    ABSENT = "absent"


class HomeworkRecordSave(BaseModel):
    """The payload used to record a status for one student on one date."""
    status: HomeworkStatus
    note: Optional[str] = Field(default=None)


class HomeworkRecord(BaseModel):
    """One status observation for one student on one date."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    studentId: int
    date: str = Field(..., description="Calendar date in YYYY-MM-DD form, no timezone.")
    status: HomeworkStatus
    note: Optional[str] = Field(default=None)
    createdAt: str
    updatedAt: str


class StudentDailyRecord(BaseModel):
    """A row of the per-class daily homework sheet."""
    student: Student
    record: Optional[HomeworkRecord] = None

