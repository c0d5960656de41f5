# /homework-tracker/homework_tracker/services/homework_service.py

"""
Business logic for daily homework checks.

The per-class batch fetch (`get_homework_records_by_class_and_date`) is an
optional backend capability. `get_class_records_for_date` uses it when the
backend has it and otherwise asks for each student's record one by one; the
result is the same either way.
"""

import logging
from datetime import date as date_type
from typing import List, Optional

from ..core.exceptions import ValidationFailureError
from ..models import homework_model, student_model
from .storage_contract import HomeworkStorage

logger = logging.getLogger(__name__)


def require_iso_date(value: str, field: str = "date") -> str:
    """Accepts only real calendar dates written as YYYY-MM-DD."""
    try:
        parsed = date_type.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationFailureError(field, f"'{value}' is not a YYYY-MM-DD date") from None
    if parsed.isoformat() != value:
        raise ValidationFailureError(field, f"'{value}' is not a YYYY-MM-DD date")
    return value


async def record_homework(
    student_id: int,
    date: str,
    payload: homework_model.HomeworkRecordSave,
    storage: HomeworkStorage,
) -> homework_model.HomeworkRecord:
    """Saves (or overwrites) the student's status for the date and returns the stored record."""
    require_iso_date(date)
    await storage.save_homework_record(student_id, date, payload.status, payload.note)
    return await storage.get_homework_record(student_id, date)


async def get_student_history(
    student_id: int,
    storage: HomeworkStorage,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> List[homework_model.HomeworkRecord]:
    if start_date:
        require_iso_date(start_date, "start")
    if end_date:
        require_iso_date(end_date, "end")
    return await storage.get_homework_records(student_id, start_date, end_date)


async def get_class_records_for_date(
    class_id: int, date: str, storage: HomeworkStorage
) -> List[homework_model.HomeworkRecord]:
    """All existing records of a class's students for one date, ordered by student id."""
    batch_fetch = getattr(storage, "get_homework_records_by_class_and_date", None)
    if batch_fetch is not None:
        return await batch_fetch(class_id, date)

    logger.debug("Backend %s has no batch fetch, reading records per student", storage.name)
    records = []
    for student in await storage.get_students_by_class(class_id):
        record = await storage.get_homework_record(student.id, date)
        if record is not None:
            records.append(record)
    return sorted(records, key=lambda r: r.studentId)


async def get_daily_sheet(
    class_id: int, date: str, storage: HomeworkStorage
) -> List[homework_model.StudentDailyRecord]:
    """
    Pairs every student of the class (in name order) with their record for
    the date, or None when nothing has been recorded yet.
    """
    require_iso_date(date)
    students: List[student_model.Student] = await storage.get_students_by_class(class_id)
    records = {r.studentId: r for r in await get_class_records_for_date(class_id, date, storage)}
    return [
        homework_model.StudentDailyRecord(student=student, record=records.get(student.id))
        for student in students
    ]
