# /homework-tracker/homework_tracker/services/storage_contract.py

"""
The storage contract shared by the relational and ephemeral backends.

Callers (the service layer and the API routers) depend only on this
protocol. Both backends must behave identically for every operation listed
here, including ordering, upsert identity and cascade deletion.

`get_homework_records_by_class_and_date` is deliberately not part of the
protocol: it is an optional batch capability, see
`homework_service.get_class_records_for_date`.
"""

from typing import List, Optional, Protocol

from ..models.class_model import ClassGroup
from ..models.homework_model import HomeworkRecord, HomeworkStatus
from ..models.statistics_model import ClassMonthlyStat, StudentMonthlyStat
from ..models.student_model import Student, StudentCreate, StudentUpdate


class HomeworkStorage(Protocol):
    name: str

    # --- Class Methods ---
    async def get_classes(self) -> List[ClassGroup]: ...
    async def create_class(self, name: str, description: Optional[str] = None) -> int: ...
    async def update_class(self, class_id: int, name: str, description: Optional[str] = None) -> None: ...
    async def delete_class(self, class_id: int) -> None: ...

    # --- Student Methods ---
    async def get_students_by_class(self, class_id: int) -> List[Student]: ...
    async def get_all_students(self) -> List[Student]: ...
    async def create_student(self, student: StudentCreate) -> int: ...
    async def update_student(self, student: StudentUpdate) -> None: ...
    async def delete_student(self, student_id: int) -> None: ...

    # --- Homework Record Methods ---
    async def get_homework_record(self, student_id: int, date: str) -> Optional[HomeworkRecord]: ...
    async def get_homework_records(
        self, student_id: int, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[HomeworkRecord]: ...
    async def save_homework_record(
        self, student_id: int, date: str, status: HomeworkStatus, note: Optional[str] = None
    ) -> int: ...

    # --- Statistics Methods ---
    async def get_monthly_stats(self, year: int, month: int) -> List[ClassMonthlyStat]: ...
    async def get_student_stats(self, year: int, month: int) -> List[StudentMonthlyStat]: ...

    async def close(self) -> None: ...
