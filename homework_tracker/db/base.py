# /homework-tracker/homework_tracker/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# By importing them all here, we ensure that Base.metadata knows about every
# table before `create_all` runs.

from .database import Base
from .models.homework_models import Class, Student, HomeworkRecord

__all__ = ["Base", "Class", "Student", "HomeworkRecord"]
