# /homework-tracker/homework_tracker/services/database_helpers/homework_repository_memory.py

"""
The ephemeral backend: the storage contract implemented over in-process
dictionaries, made durable by snapshotting the whole state to a key-value
slot after every mutation.

There is no database here to enforce referential integrity, so this module
reproduces the relational schema's rules by hand:

- deleting a class deletes its students, and deleting a student deletes its
  homework records (the ON DELETE CASCADE foreign keys);
- students may only reference existing classes and records may only
  reference existing students (the foreign keys themselves);
- at most one record exists per (studentId, date); saving again updates that
  record in place (the UNIQUE constraint plus ON CONFLICT DO UPDATE).

Reads never modify state and never write the snapshot.
"""

import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from ...config import SNAPSHOT_KEY
from ...core.exceptions import ClassNotFoundError, StudentNotFoundError
from ...models import class_model, homework_model, statistics_model, student_model
from ...models.snapshot_model import StorageSnapshot
from .. import aggregation
from .clock import today, utc_timestamp
from .sample_data import EPHEMERAL_SAMPLE_CLASS, EPHEMERAL_SAMPLE_STUDENT, random_recent_statuses
from .snapshot_store import FileSnapshotStore

logger = logging.getLogger(__name__)


class HomeworkRepositoryMemory:
    name = "ephemeral"

    def __init__(
        self,
        snapshot_store: FileSnapshotStore,
        snapshot_key: str = SNAPSHOT_KEY,
        seed_sample_data: bool = True,
    ):
        self.snapshot_store = snapshot_store
        self.snapshot_key = snapshot_key
        self._classes: Dict[int, class_model.ClassGroup] = {}
        self._students: Dict[int, student_model.Student] = {}
        self._records: Dict[int, homework_model.HomeworkRecord] = {}
        self._next_class_id = 1
        self._next_student_id = 1
        self._next_record_id = 1

        if not self._load_snapshot():
            if seed_sample_data:
                self._insert_sample_data()
            self._save_snapshot()

    # --- Snapshot Persistence ---

    def to_snapshot(self) -> StorageSnapshot:
        return StorageSnapshot(
            classes=list(self._classes.values()),
            students=list(self._students.values()),
            homeworkRecords=list(self._records.values()),
            nextClassId=self._next_class_id,
            nextStudentId=self._next_student_id,
            nextRecordId=self._next_record_id,
        )

    def _save_snapshot(self) -> None:
        self.snapshot_store.set(self.snapshot_key, self.to_snapshot().model_dump_json())

    def _load_snapshot(self) -> bool:
        """
        Restores state from the snapshot slot. Returns False when the slot is
        empty or unreadable, in which case the caller starts from scratch.
        """
        raw = self.snapshot_store.get(self.snapshot_key)
        if raw is None:
            return False
        try:
            snapshot = StorageSnapshot.model_validate_json(raw)
        except ValidationError as e:
            logger.error("Discarding unreadable snapshot %r: %s", self.snapshot_key, e)
            return False

        self._classes = {c.id: c for c in snapshot.classes}
        self._students = {s.id: s for s in snapshot.students}
        self._records = {r.id: r for r in snapshot.homeworkRecords}
        # Counters never fall behind the ids already handed out.
        self._next_class_id = max(snapshot.nextClassId, max(self._classes, default=0) + 1)
        self._next_student_id = max(snapshot.nextStudentId, max(self._students, default=0) + 1)
        self._next_record_id = max(snapshot.nextRecordId, max(self._records, default=0) + 1)
        logger.info(
            "Loaded snapshot %r: %d classes, %d students, %d records",
            self.snapshot_key, len(self._classes), len(self._students), len(self._records),
        )
        return True

    def _insert_sample_data(self) -> None:
        class_id = self._add_class(EPHEMERAL_SAMPLE_CLASS["name"], EPHEMERAL_SAMPLE_CLASS["description"])
        student_id = self._add_student(student_model.StudentCreate(classId=class_id, **EPHEMERAL_SAMPLE_STUDENT))
        for sample in random_recent_statuses(today()):
            self._upsert_record(student_id, sample["date"], sample["status"], "")
        logger.info("Seeded ephemeral storage with sample data")

    async def close(self) -> None:
        # State is already durable after every mutation.
        pass

    # --- Internal Mutators (no snapshot write) ---

    def _add_class(self, name: str, description: Optional[str]) -> int:
        now = utc_timestamp()
        new_class = class_model.ClassGroup(
            id=self._next_class_id, name=name, description=description, createdAt=now, updatedAt=now
        )
        self._next_class_id += 1
        self._classes[new_class.id] = new_class
        return new_class.id

    def _add_student(self, student: student_model.StudentCreate) -> int:
        now = utc_timestamp()
        new_student = student_model.Student(
            **student.model_dump(include=set(student_model.StudentCreate.model_fields)),
            id=self._next_student_id,
            createdAt=now,
            updatedAt=now,
        )
        self._next_student_id += 1
        self._students[new_student.id] = new_student
        return new_student.id

    def _remove_student(self, student_id: int) -> None:
        for record_id in [r.id for r in self._records.values() if r.studentId == student_id]:
            del self._records[record_id]
        self._students.pop(student_id, None)

    def _find_record(self, student_id: int, date: str) -> Optional[homework_model.HomeworkRecord]:
        return next(
            (r for r in self._records.values() if r.studentId == student_id and r.date == date),
            None,
        )

    def _upsert_record(
        self, student_id: int, date: str, status: homework_model.HomeworkStatus, note: Optional[str]
    ) -> homework_model.HomeworkRecord:
        now = utc_timestamp()
        existing = self._find_record(student_id, date)
        if existing is not None:
            existing.status = homework_model.HomeworkStatus(status)
            existing.note = note
            existing.updatedAt = now
            return existing
        new_record = homework_model.HomeworkRecord(
            id=self._next_record_id,
            studentId=student_id,
            date=date,
            status=status,
            note=note,
            createdAt=now,
            updatedAt=now,
        )
        self._next_record_id += 1
        self._records[new_record.id] = new_record
        return new_record

    # --- Class Methods ---

    async def get_classes(self) -> List[class_model.ClassGroup]:
        ordered = sorted(self._classes.values(), key=lambda c: (c.name, c.id))
        return [c.model_copy() for c in ordered]

    async def create_class(self, name: str, description: Optional[str] = None) -> int:
        class_id = self._add_class(name, description)
        self._save_snapshot()
        return class_id

    async def update_class(self, class_id: int, name: str, description: Optional[str] = None) -> None:
        existing = self._classes.get(class_id)
        if existing is None:
            raise ClassNotFoundError(class_id)
        existing.name = name
        existing.description = description
        existing.updatedAt = utc_timestamp()
        self._save_snapshot()

    async def delete_class(self, class_id: int) -> None:
        for student_id in [s.id for s in self._students.values() if s.classId == class_id]:
            self._remove_student(student_id)
        self._classes.pop(class_id, None)
        self._save_snapshot()

    # --- Student Methods ---

    async def get_students_by_class(self, class_id: int) -> List[student_model.Student]:
        members = [s for s in self._students.values() if s.classId == class_id]
        return [s.model_copy() for s in sorted(members, key=lambda s: (s.name, s.id))]

    async def get_all_students(self) -> List[student_model.Student]:
        ordered = sorted(self._students.values(), key=lambda s: (s.name, s.id))
        return [s.model_copy() for s in ordered]

    async def create_student(self, student: student_model.StudentCreate) -> int:
        if student.classId not in self._classes:
            raise ClassNotFoundError(student.classId)
        student_id = self._add_student(student)
        self._save_snapshot()
        return student_id

    async def update_student(self, student: student_model.StudentUpdate) -> None:
        existing = self._students.get(student.id)
        if existing is None:
            raise StudentNotFoundError(student.id)
        if student.classId not in self._classes:
            raise ClassNotFoundError(student.classId)
        existing.classId = student.classId
        existing.name = student.name
        existing.grade = student.grade
        existing.phone = student.phone
        existing.parentPhone = student.parentPhone
        existing.note = student.note
        existing.updatedAt = utc_timestamp()
        self._save_snapshot()

    async def delete_student(self, student_id: int) -> None:
        self._remove_student(student_id)
        self._save_snapshot()

    # --- Homework Record Methods ---

    async def get_homework_record(self, student_id: int, date: str) -> Optional[homework_model.HomeworkRecord]:
        record = self._find_record(student_id, date)
        return record.model_copy() if record else None

    async def get_homework_records(
        self, student_id: int, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[homework_model.HomeworkRecord]:
        records = [r for r in self._records.values() if r.studentId == student_id]
        if start_date:
            records = [r for r in records if r.date >= start_date]
        if end_date:
            records = [r for r in records if r.date <= end_date]
        return [r.model_copy() for r in sorted(records, key=lambda r: r.date, reverse=True)]

    async def save_homework_record(
        self,
        student_id: int,
        date: str,
        status: homework_model.HomeworkStatus,
        note: Optional[str] = None,
    ) -> int:
        if student_id not in self._students:
            raise StudentNotFoundError(student_id)
        record = self._upsert_record(student_id, date, status, note)
        self._save_snapshot()
        logger.debug("Saved homework record %s (student=%s, date=%s, status=%s)", record.id, student_id, date, record.status.value)
        return record.id

    async def get_homework_records_by_class_and_date(
        self, class_id: int, date: str
    ) -> List[homework_model.HomeworkRecord]:
        """Batch fetch of one class's records for a single date, ordered by student id."""
        member_ids = {s.id for s in self._students.values() if s.classId == class_id}
        records = [r for r in self._records.values() if r.date == date and r.studentId in member_ids]
        return [r.model_copy() for r in sorted(records, key=lambda r: r.studentId)]

    # --- Statistics Methods ---

    async def get_monthly_stats(self, year: int, month: int) -> List[statistics_model.ClassMonthlyStat]:
        return aggregation.compute_class_monthly_stats(
            self._records.values(), self._students.values(), self._classes.values(), year, month
        )

    async def get_student_stats(self, year: int, month: int) -> List[statistics_model.StudentMonthlyStat]:
        return aggregation.compute_student_monthly_stats(
            self._records.values(), self._students.values(), self._classes.values(), year, month
        )
