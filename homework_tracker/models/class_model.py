# /homework-tracker/homework_tracker/models/class_model.py

# --- Core Imports ---
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

# --- Model Definitions ---

class ClassBase(BaseModel):
    """Fields shared by the create payload and the stored class."""
    name: str = Field(..., description="The display name of the class, e.g. 'Math A'.")
    description: Optional[str] = Field(default=None, description="An optional free-text description.")

class ClassCreate(ClassBase):
    """The payload used to create or rename a class."""
    pass

class ClassGroup(ClassBase):
    """
    The full representation of a class, as stored by either backend and
    returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="The backend-assigned identifier of the class.")
    createdAt: str
    updatedAt: str
