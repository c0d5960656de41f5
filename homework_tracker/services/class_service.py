# /homework-tracker/homework_tracker/services/class_service.py

"""
This service module is the business logic layer for classes and students.

It validates caller input (required names must not be blank) before handing
the request to the storage contract, and reads the stored entity back so
the API can return the full resource. The backends themselves accept any
string they are given.
"""

from typing import List, Optional

from ..core.exceptions import ClassNotFoundError, StudentNotFoundError, ValidationFailureError
from ..models import class_model, student_model
from .storage_contract import HomeworkStorage


def require_text(value: Optional[str], field: str) -> str:
    """Rejects missing, empty or whitespace-only required fields."""
    if value is None or not value.strip():
        raise ValidationFailureError(field, "must not be empty")
    return value.strip()


# --- Class Operations ---

async def get_class(class_id: int, storage: HomeworkStorage) -> class_model.ClassGroup:
    for class_group in await storage.get_classes():
        if class_group.id == class_id:
            return class_group
    raise ClassNotFoundError(class_id)


async def create_class(class_data: class_model.ClassCreate, storage: HomeworkStorage) -> class_model.ClassGroup:
    name = require_text(class_data.name, "name")
    class_id = await storage.create_class(name, class_data.description)
    return await get_class(class_id, storage)


async def update_class(
    class_id: int, class_update: class_model.ClassCreate, storage: HomeworkStorage
) -> class_model.ClassGroup:
    name = require_text(class_update.name, "name")
    await storage.update_class(class_id, name, class_update.description)
    return await get_class(class_id, storage)


async def delete_class(class_id: int, storage: HomeworkStorage) -> None:
    await storage.delete_class(class_id)


# --- Student Operations ---

async def get_students(class_id: int, storage: HomeworkStorage) -> List[student_model.Student]:
    return await storage.get_students_by_class(class_id)


async def list_students(storage: HomeworkStorage, class_id: Optional[int] = None) -> List[student_model.Student]:
    """Every student in name order, or only the students of one class."""
    if class_id is None:
        return await storage.get_all_students()
    return await storage.get_students_by_class(class_id)


async def get_student(student_id: int, storage: HomeworkStorage) -> student_model.Student:
    for student in await storage.get_all_students():
        if student.id == student_id:
            return student
    raise StudentNotFoundError(student_id)


async def add_student_to_class(
    class_id: int, student_data: student_model.StudentFields, storage: HomeworkStorage
) -> student_model.Student:
    fields = student_data.model_dump()
    fields["name"] = require_text(student_data.name, "name")
    student_id = await storage.create_student(student_model.StudentCreate(classId=class_id, **fields))
    return await get_student(student_id, storage)


async def update_student(
    student_id: int, student_update: student_model.StudentCreate, storage: HomeworkStorage
) -> student_model.Student:
    fields = student_update.model_dump()
    fields["name"] = require_text(student_update.name, "name")
    await storage.update_student(student_model.StudentUpdate(id=student_id, **fields))
    return await get_student(student_id, storage)


async def delete_student(student_id: int, storage: HomeworkStorage) -> None:
    await storage.delete_student(student_id)
