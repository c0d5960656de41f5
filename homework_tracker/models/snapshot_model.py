# /homework-tracker/homework_tracker/models/snapshot_model.py

from typing import List

from pydantic import BaseModel, Field

from .class_model import ClassGroup
from .homework_model import HomeworkRecord
from .student_model import Student


class StorageSnapshot(BaseModel):
    """
    The whole persisted state of the ephemeral backend: the three entity
    collections plus the next-id counters.
    """
    classes: List[ClassGroup] = Field(default_factory=list)
    students: List[Student] = Field(default_factory=list)
    homeworkRecords: List[HomeworkRecord] = Field(default_factory=list)
    nextClassId: int = 1
    nextStudentId: int = 1
    nextRecordId: int = 1
