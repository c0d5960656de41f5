# /homework-tracker/homework_tracker/models/student_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

# --- Model Definitions ---

class StudentBase(BaseModel):
    """
    The base model for a Student. Contains the editable fields common to
    create, update and read operations.
    """
    name: str = Field(..., description="The full name of the student.")
    grade: Optional[str] = Field(default=None, description="School grade, e.g. 'Middle 1'.")
    phone: Optional[str] = Field(default=None)
    parentPhone: Optional[str] = Field(default=None, description="Guardian's phone number.")
    note: Optional[str] = Field(default=None)

class StudentFields(StudentBase):
    """The student fields accepted by the API; the class comes from the URL."""
    pass

class StudentCreate(StudentBase):
    """A new student, without id or timestamps."""
    classId: int = Field(..., description="The ID of the class this student belongs to.")

class StudentUpdate(StudentCreate):
    """A full replacement of an existing student's editable fields."""
    id: int

class Student(StudentUpdate):
    """
    The full representation of a Student resource, as it is stored by the
    backends and returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    createdAt: str
    updatedAt: str
