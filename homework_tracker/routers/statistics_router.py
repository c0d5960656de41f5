# /homework-tracker/homework_tracker/routers/statistics_router.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from ..models import statistics_model
from ..services import statistics_service
from ..services.storage_contract import HomeworkStorage
from ..services.storage_service import get_storage

router = APIRouter()


@router.get("/classes", response_model=List[statistics_model.ClassMonthlyStat], summary="Get Monthly Statistics per Class")
async def get_class_statistics(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    classId: Optional[int] = Query(default=None, description="Only this class."),
    storage: HomeworkStorage = Depends(get_storage),
):
    return await statistics_service.get_class_statistics(storage, year, month, class_id=classId)


@router.get(
    "/students",
    response_model=List[statistics_model.StudentMonthlyStat],
    summary="Get Monthly Statistics per Student",
    description="Students are ordered by completion rate, lowest first.",
)
async def get_student_statistics(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    classId: Optional[int] = Query(default=None, description="Only students currently in this class."),
    storage: HomeworkStorage = Depends(get_storage),
):
    return await statistics_service.get_student_statistics(storage, year, month, class_id=classId)


@router.get("/summary", response_model=statistics_model.MonthlySummary, summary="Get the Monthly Totals")
async def get_monthly_summary(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    classId: Optional[int] = Query(default=None, description="Only this class."),
    storage: HomeworkStorage = Depends(get_storage),
):
    return await statistics_service.get_monthly_summary(storage, year, month, class_id=classId)
