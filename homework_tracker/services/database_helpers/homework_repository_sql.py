# /homework-tracker/homework_tracker/services/database_helpers/homework_repository_sql.py

"""
The relational backend: the storage contract implemented over SQLAlchemy,
normally on SQLite. PostgreSQL also works; other dialects are rejected at
`initialize()` because they lack `INSERT ... ON CONFLICT`.

Referential integrity lives in the schema. Both foreign keys cascade on
delete, so `delete_class` and `delete_student` are single DELETE statements
and the storage engine removes the dependent rows. The (student_id, date)
uniqueness constraint backs `save_homework_record`, which is one
`INSERT ... ON CONFLICT DO UPDATE` statement that keeps the existing row id.

The backend owns exactly one session for its whole lifetime. Every method
raises `NotInitializedError` until `initialize()` has completed.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import case, func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ...core.exceptions import (
    BackendUnavailableError,
    ClassNotFoundError,
    NotInitializedError,
    StudentNotFoundError,
)
from ...db.base import Base, Class, HomeworkRecord, Student
from ...db.database import create_session_factory, create_storage_engine
from ...models import class_model, homework_model, statistics_model, student_model
from ...models.homework_model import HomeworkStatus
from .. import aggregation
from .clock import utc_timestamp
from .sample_data import RELATIONAL_SAMPLE_CLASSES, RELATIONAL_SAMPLE_STUDENTS

logger = logging.getLogger(__name__)


# --- Row Mappers ---

def _to_class(row: Class) -> class_model.ClassGroup:
    return class_model.ClassGroup(
        id=row.id,
        name=row.name,
        description=row.description,
        createdAt=row.created_at,
        updatedAt=row.updated_at,
    )


def _to_student(row: Student) -> student_model.Student:
    return student_model.Student(
        id=row.id,
        classId=row.class_id,
        name=row.name,
        grade=row.grade,
        phone=row.phone,
        parentPhone=row.parent_phone,
        note=row.note,
        createdAt=row.created_at,
        updatedAt=row.updated_at,
    )


def _to_record(row: HomeworkRecord) -> homework_model.HomeworkRecord:
    return homework_model.HomeworkRecord(
        id=row.id,
        studentId=row.student_id,
        date=row.date,
        status=row.status,
        note=row.note,
        createdAt=row.created_at,
        updatedAt=row.updated_at,
    )


# Dialects whose INSERT supports ON CONFLICT DO UPDATE.
UPSERT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


def upsert_insert_for(dialect_name: str):
    """Returns the INSERT construct with upsert support for a database dialect."""
    try:
        return UPSERT_INSERTS[dialect_name]
    except KeyError:
        raise BackendUnavailableError(
            f"Dialect '{dialect_name}' has no INSERT ... ON CONFLICT support"
        ) from None


def _status_count(status: HomeworkStatus):
    return func.sum(case((HomeworkRecord.status == status.value, 1), else_=0))


class HomeworkRepositorySQL:
    name = "relational"

    def __init__(self, database_url: str, seed_sample_data: bool = True):
        self.database_url = database_url
        self.seed_sample_data = seed_sample_data
        self._engine: Optional[Engine] = None
        self._session: Optional[Session] = None
        self._upsert_insert = None

    # --- Lifecycle ---

    async def initialize(self) -> None:
        """
        Opens the connection, creates the schema and seeds sample data into an
        empty store. Any failure is reported as BackendUnavailableError.
        """
        try:
            self._engine = create_storage_engine(self.database_url)
            self._upsert_insert = upsert_insert_for(self._engine.dialect.name)
            Base.metadata.create_all(bind=self._engine)
            self._session = create_session_factory(self._engine)()
            if self.seed_sample_data:
                self._insert_sample_data()
        except Exception as e:
            self._release()
            raise BackendUnavailableError(f"Relational store at {self.database_url} is unavailable: {e}") from e
        logger.info("Relational storage initialized at %s", self.database_url)

    async def close(self) -> None:
        self._release()

    def _release(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def _insert_sample_data(self) -> None:
        db = self._session
        if db.query(func.count(Class.id)).scalar():
            return
        now = utc_timestamp()
        classes = [
            Class(name=sample["name"], description=sample["description"], created_at=now, updated_at=now)
            for sample in RELATIONAL_SAMPLE_CLASSES
        ]
        db.add_all(classes)
        db.flush()
        for sample in RELATIONAL_SAMPLE_STUDENTS:
            db.add(Student(
                class_id=classes[sample["class_index"]].id,
                name=sample["name"],
                grade=sample["grade"],
                phone=sample["phone"],
                created_at=now,
                updated_at=now,
            ))
        db.commit()
        logger.info("Seeded relational storage with %d sample classes", len(classes))

    @property
    def db(self) -> Session:
        if self._session is None:
            raise NotInitializedError(self.name)
        return self._session

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        db = self.db
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise

    # --- Class Methods ---

    async def get_classes(self) -> List[class_model.ClassGroup]:
        rows = self.db.query(Class).order_by(Class.name, Class.id).all()
        return [_to_class(row) for row in rows]

    async def create_class(self, name: str, description: Optional[str] = None) -> int:
        now = utc_timestamp()
        with self._transaction() as db:
            new_class = Class(name=name, description=description, created_at=now, updated_at=now)
            db.add(new_class)
            db.flush()
            class_id = new_class.id
        return class_id

    async def update_class(self, class_id: int, name: str, description: Optional[str] = None) -> None:
        with self._transaction() as db:
            db_class = db.get(Class, class_id)
            if db_class is None:
                raise ClassNotFoundError(class_id)
            db_class.name = name
            db_class.description = description
            db_class.updated_at = utc_timestamp()

    async def delete_class(self, class_id: int) -> None:
        # The ON DELETE CASCADE foreign keys remove students and their records.
        with self._transaction() as db:
            db.query(Class).filter(Class.id == class_id).delete(synchronize_session=False)

    # --- Student Methods ---

    async def get_students_by_class(self, class_id: int) -> List[student_model.Student]:
        rows = (
            self.db.query(Student)
            .filter(Student.class_id == class_id)
            .order_by(Student.name, Student.id)
            .all()
        )
        return [_to_student(row) for row in rows]

    async def get_all_students(self) -> List[student_model.Student]:
        rows = self.db.query(Student).order_by(Student.name, Student.id).all()
        return [_to_student(row) for row in rows]

    async def create_student(self, student: student_model.StudentCreate) -> int:
        now = utc_timestamp()
        with self._transaction() as db:
            if db.get(Class, student.classId) is None:
                raise ClassNotFoundError(student.classId)
            new_student = Student(
                class_id=student.classId,
                name=student.name,
                grade=student.grade,
                phone=student.phone,
                parent_phone=student.parentPhone,
                note=student.note,
                created_at=now,
                updated_at=now,
            )
            db.add(new_student)
            db.flush()
            student_id = new_student.id
        return student_id

    async def update_student(self, student: student_model.StudentUpdate) -> None:
        with self._transaction() as db:
            db_student = db.get(Student, student.id)
            if db_student is None:
                raise StudentNotFoundError(student.id)
            if db.get(Class, student.classId) is None:
                raise ClassNotFoundError(student.classId)
            db_student.class_id = student.classId
            db_student.name = student.name
            db_student.grade = student.grade
            db_student.phone = student.phone
            db_student.parent_phone = student.parentPhone
            db_student.note = student.note
            db_student.updated_at = utc_timestamp()

    async def delete_student(self, student_id: int) -> None:
        with self._transaction() as db:
            db.query(Student).filter(Student.id == student_id).delete(synchronize_session=False)

    # --- Homework Record Methods ---

    async def get_homework_record(self, student_id: int, date: str) -> Optional[homework_model.HomeworkRecord]:
        row = (
            self.db.query(HomeworkRecord)
            .filter(HomeworkRecord.student_id == student_id, HomeworkRecord.date == date)
            .first()
        )
        return _to_record(row) if row else None

    async def get_homework_records(
        self, student_id: int, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[homework_model.HomeworkRecord]:
        query = self.db.query(HomeworkRecord).filter(HomeworkRecord.student_id == student_id)
        if start_date:
            query = query.filter(HomeworkRecord.date >= start_date)
        if end_date:
            query = query.filter(HomeworkRecord.date <= end_date)
        rows = query.order_by(HomeworkRecord.date.desc()).all()
        return [_to_record(row) for row in rows]

    async def save_homework_record(
        self,
        student_id: int,
        date: str,
        status: HomeworkStatus,
        note: Optional[str] = None,
    ) -> int:
        status_value = HomeworkStatus(status).value
        now = utc_timestamp()
        with self._transaction() as db:
            if db.get(Student, student_id) is None:
                raise StudentNotFoundError(student_id)
            stmt = self._upsert_insert(HomeworkRecord).values(
                student_id=student_id,
                date=date,
                status=status_value,
                note=note,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=[HomeworkRecord.student_id, HomeworkRecord.date],
                set_={
                    "status": stmt.excluded.status,
                    "note": stmt.excluded.note,
                    "updated_at": stmt.excluded.updated_at,
                },
            )
            db.execute(stmt)
            record_id = (
                db.query(HomeworkRecord.id)
                .filter(HomeworkRecord.student_id == student_id, HomeworkRecord.date == date)
                .scalar()
            )
        logger.debug("Saved homework record %s (student=%s, date=%s, status=%s)", record_id, student_id, date, status_value)
        return record_id

    # --- Statistics Methods ---

    async def get_monthly_stats(self, year: int, month: int) -> List[statistics_model.ClassMonthlyStat]:
        start_date, end_date = aggregation.month_date_range(year, month)
        rows = (
            self.db.query(
                Class.id,
                Class.name,
                func.count(HomeworkRecord.id),
                _status_count(HomeworkStatus.DONE),
                _status_count(HomeworkStatus.PARTIAL),
                _status_count(HomeworkStatus.NOT_DONE),
                _status_count(HomeworkStatus.ABSENT),
            )
            .select_from(HomeworkRecord)
            .join(Student, HomeworkRecord.student_id == Student.id)
            .join(Class, Student.class_id == Class.id)
            .filter(HomeworkRecord.date.between(start_date, end_date))
            .group_by(Class.id, Class.name)
            .order_by(func.min(HomeworkRecord.id))
            .all()
        )
        return [
            statistics_model.ClassMonthlyStat(
                classId=class_id,
                className=class_name,
                total=total,
                done=done,
                partial=partial,
                notDone=not_done,
                absent=absent,
            )
            for class_id, class_name, total, done, partial, not_done, absent in rows
        ]

    async def get_student_stats(self, year: int, month: int) -> List[statistics_model.StudentMonthlyStat]:
        start_date, end_date = aggregation.month_date_range(year, month)
        rows = (
            self.db.query(
                Student.id,
                Student.name,
                Class.name,
                func.count(HomeworkRecord.id),
                _status_count(HomeworkStatus.DONE),
                _status_count(HomeworkStatus.PARTIAL),
                _status_count(HomeworkStatus.NOT_DONE),
                _status_count(HomeworkStatus.ABSENT),
            )
            .select_from(HomeworkRecord)
            .join(Student, HomeworkRecord.student_id == Student.id)
            .join(Class, Student.class_id == Class.id)
            .filter(HomeworkRecord.date.between(start_date, end_date))
            .group_by(Student.id, Student.name, Class.name)
            .order_by(func.min(HomeworkRecord.id))
            .all()
        )
        stats = [
            statistics_model.StudentMonthlyStat(
                studentId=student_id,
                studentName=student_name,
                className=class_name,
                total=total,
                done=done,
                partial=partial,
                notDone=not_done,
                absent=absent,
                completionRate=aggregation.completion_rate(done, partial, total),
            )
            for student_id, student_name, class_name, total, done, partial, not_done, absent in rows
        ]
        return aggregation.rank_by_completion(stats)
