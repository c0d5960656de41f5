# /homework-tracker/homework_tracker/models/dashboard_model.py

# --- Core Imports ---
from typing import List

from pydantic import BaseModel, Field

from .class_model import ClassGroup

# --- Model Definition ---

class DashboardSummary(BaseModel):
    """
    Defines the data contract for the response of the dashboard summary endpoint.
    This model specifies the exact shape of the data shown on the home screen.
    """

    classCount: int = Field(
        ...,
        description="The total number of classes.",
        examples=[2]
    )

    studentCount: int = Field(
        ...,
        description="The total number of students across all classes.",
        examples=[4]
    )

    recentClasses: List[ClassGroup] = Field(
        default_factory=list,
        description="The first few classes in name order, for quick access."
    )
