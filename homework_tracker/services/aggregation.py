# /homework-tracker/homework_tracker/services/aggregation.py

"""
The aggregation engine: pure functions that turn raw homework records into
monthly per-class and per-student statistics.

Nothing here is cached. Every call recomputes its result from the records it
is given, so the output always reflects the current state of the backend
that supplied them. Groups appear in the order of their first matching
record, which is also the order the relational backend produces with its
`ORDER BY min(id)` clause.
"""

import calendar
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from ..models.class_model import ClassGroup
from ..models.homework_model import HomeworkRecord, HomeworkStatus
from ..models.statistics_model import ClassMonthlyStat, MonthlySummary, StudentMonthlyStat
from ..models.student_model import Student

# Maps each stored status value to its field name on the stat models.
STATUS_FIELDS: Dict[str, str] = {
    HomeworkStatus.DONE.value: "done",
    HomeworkStatus.PARTIAL.value: "partial",
    HomeworkStatus.NOT_DONE.value: "notDone",
    HomeworkStatus.ABSENT.value: "absent",
}

_FRAME_COLUMNS = ["studentId", "studentName", "classId", "className", "status"]


def month_date_range(year: int, month: int) -> Tuple[str, str]:
    """
    Returns the inclusive (first day, last day) bounds of a calendar month as
    `YYYY-MM-DD` strings, which compare lexicographically in date order.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    prefix = f"{year:04d}-{month:02d}"
    return f"{prefix}-01", f"{prefix}-{last_day:02d}"


def completion_rate(done: int, partial: int, total: int) -> int:
    """
    Weighted completion percentage, counting partial completion as half credit.

    Computes round(100 * (done + 0.5 * partial) / total) in exact integer
    arithmetic with halves rounded up, e.g. 12.5 -> 13.
    """
    if total <= 0:
        return 0
    numerator = 100 * (2 * done + partial)
    denominator = 2 * total
    return (2 * numerator + denominator) // (2 * denominator)


def done_rate(done: int, total: int) -> int:
    """Share of fully completed records as a whole percentage, halves rounded up."""
    if total <= 0:
        return 0
    return (200 * done + total) // (2 * total)


def rank_by_completion(stats: Iterable[StudentMonthlyStat]) -> List[StudentMonthlyStat]:
    """Sorts ascending by completion rate; ties keep their incoming order."""
    return sorted(stats, key=lambda stat: stat.completionRate)


def _monthly_frame(
    records: Iterable[HomeworkRecord],
    students: Iterable[Student],
    classes: Iterable[ClassGroup],
    year: int,
    month: int,
) -> pd.DataFrame:
    """
    Collects the month's records whose student and class both still exist
    into a flat DataFrame, one row per record, in record order.
    """
    start_date, end_date = month_date_range(year, month)
    students_by_id = {student.id: student for student in students}
    classes_by_id = {class_group.id: class_group for class_group in classes}

    rows = []
    for record in records:
        if not start_date <= record.date <= end_date:
            continue
        student = students_by_id.get(record.studentId)
        if student is None:
            continue
        class_group = classes_by_id.get(student.classId)
        if class_group is None:
            continue
        rows.append({
            "studentId": student.id,
            "studentName": student.name,
            "classId": class_group.id,
            "className": class_group.name,
            "status": HomeworkStatus(record.status).value,
        })
    return pd.DataFrame(rows, columns=_FRAME_COLUMNS)


def _tally(frame: pd.DataFrame, key: str) -> pd.DataFrame:
    """
    Counts each status per `key`, one row per key in first-appearance order
    and one column per entry of STATUS_FIELDS.
    """
    order = frame[key].drop_duplicates().tolist()
    return (
        pd.crosstab(frame[key], frame["status"])
        .reindex(index=order, columns=list(STATUS_FIELDS), fill_value=0)
    )


def _status_counts(row: pd.Series) -> Dict[str, int]:
    return {field: int(row[status]) for status, field in STATUS_FIELDS.items()}


def compute_class_monthly_stats(
    records: Iterable[HomeworkRecord],
    students: Iterable[Student],
    classes: Iterable[ClassGroup],
    year: int,
    month: int,
) -> List[ClassMonthlyStat]:
    """
    Groups the month's records by the owning student's class. Classes without
    a matching record are omitted rather than reported with zero counts.
    """
    frame = _monthly_frame(records, students, classes, year, month)
    if frame.empty:
        return []

    class_names = frame.drop_duplicates("classId").set_index("classId")["className"]
    stats = []
    for class_id, row in _tally(frame, "classId").iterrows():
        counts = _status_counts(row)
        stats.append(ClassMonthlyStat(
            classId=int(class_id),
            className=str(class_names.at[class_id]),
            total=sum(counts.values()),
            **counts,
        ))
    return stats


def compute_student_monthly_stats(
    records: Iterable[HomeworkRecord],
    students: Iterable[Student],
    classes: Iterable[ClassGroup],
    year: int,
    month: int,
) -> List[StudentMonthlyStat]:
    """
    Groups the month's records by student and ranks the result so that the
    students with the lowest completion rate come first.
    """
    frame = _monthly_frame(records, students, classes, year, month)
    if frame.empty:
        return []

    labels = frame.drop_duplicates("studentId").set_index("studentId")
    stats = []
    for student_id, row in _tally(frame, "studentId").iterrows():
        counts = _status_counts(row)
        total = sum(counts.values())
        stats.append(StudentMonthlyStat(
            studentId=int(student_id),
            studentName=str(labels.at[student_id, "studentName"]),
            className=str(labels.at[student_id, "className"]),
            total=total,
            completionRate=completion_rate(counts["done"], counts["partial"], total),
            **counts,
        ))
    return rank_by_completion(stats)


def summarize_class_stats(stats: Iterable[ClassMonthlyStat]) -> MonthlySummary:
    """Adds up per-class counts into one monthly total."""
    frame = pd.DataFrame(
        [stat.model_dump(include={"total", *STATUS_FIELDS.values()}) for stat in stats],
        columns=["total", *STATUS_FIELDS.values()],
    )
    totals = {column: int(value) for column, value in frame.sum().items()}
    return MonthlySummary(**totals, doneRate=done_rate(totals["done"], totals["total"]))
