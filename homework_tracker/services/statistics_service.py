# /homework-tracker/homework_tracker/services/statistics_service.py

"""
Monthly statistics as the statistics screen asks for them: optionally
narrowed to one class, plus a single summary row for the whole selection.

Student statistics are filtered by the class a student belongs to now,
so a student who changed classes during the month is reported under
the current class only.
"""

from typing import List, Optional

from ..models import statistics_model
from . import aggregation
from .storage_contract import HomeworkStorage


async def get_class_statistics(
    storage: HomeworkStorage, year: int, month: int, class_id: Optional[int] = None
) -> List[statistics_model.ClassMonthlyStat]:
    stats = await storage.get_monthly_stats(year, month)
    if class_id is None:
        return stats
    return [stat for stat in stats if stat.classId == class_id]


async def get_student_statistics(
    storage: HomeworkStorage, year: int, month: int, class_id: Optional[int] = None
) -> List[statistics_model.StudentMonthlyStat]:
    stats = await storage.get_student_stats(year, month)
    if class_id is None:
        return stats
    member_ids = {student.id for student in await storage.get_students_by_class(class_id)}
    return [stat for stat in stats if stat.studentId in member_ids]


async def get_monthly_summary(
    storage: HomeworkStorage, year: int, month: int, class_id: Optional[int] = None
) -> statistics_model.MonthlySummary:
    """Totals of the (optionally class-filtered) per-class statistics."""
    stats = await get_class_statistics(storage, year, month, class_id)
    return aggregation.summarize_class_stats(stats)
