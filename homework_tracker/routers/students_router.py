# /homework-tracker/homework_tracker/routers/students_router.py

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import List, Optional

from ..models import homework_model, student_model
from ..services import class_service, homework_service
from ..services.storage_contract import HomeworkStorage
from ..services.storage_service import get_storage

router = APIRouter()

# --- STUDENT COLLECTION ENDPOINT (/api/students) ---

@router.get("", response_model=List[student_model.Student], summary="Get All Students")
async def get_all_students(
    classId: Optional[int] = Query(default=None, description="Only the students of this class."),
    storage: HomeworkStorage = Depends(get_storage),
):
    return await class_service.list_students(storage, class_id=classId)

# --- INDIVIDUAL STUDENT ENDPOINTS (/api/students/{student_id}) ---

@router.put("/{student_id}", response_model=student_model.Student, summary="Update a Student")
async def update_student_details(student_id: int, student_update: student_model.StudentCreate, storage: HomeworkStorage = Depends(get_storage)):
    return await class_service.update_student(student_id=student_id, student_update=student_update, storage=storage)

@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student and Their Records")
async def delete_student(student_id: int, storage: HomeworkStorage = Depends(get_storage)):
    await class_service.delete_student(student_id=student_id, storage=storage)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- HOMEWORK RECORD ENDPOINTS ---

@router.get("/{student_id}/homework", response_model=List[homework_model.HomeworkRecord], summary="Get a Student's Homework History")
async def get_homework_history(
    student_id: int,
    start: Optional[str] = Query(default=None, description="Inclusive lower bound, YYYY-MM-DD."),
    end: Optional[str] = Query(default=None, description="Inclusive upper bound, YYYY-MM-DD."),
    storage: HomeworkStorage = Depends(get_storage),
):
    return await homework_service.get_student_history(student_id, storage, start_date=start, end_date=end)

@router.get("/{student_id}/homework/{date}", response_model=homework_model.HomeworkRecord, summary="Get a Student's Homework Record for a Date")
async def get_homework_record(student_id: int, date: str, storage: HomeworkStorage = Depends(get_storage)):
    record = await storage.get_homework_record(student_id, date)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No homework record for student {student_id} on {date}")
    return record

@router.put("/{student_id}/homework/{date}", response_model=homework_model.HomeworkRecord, summary="Record a Student's Homework Status")
async def save_homework_record(student_id: int, date: str, payload: homework_model.HomeworkRecordSave, storage: HomeworkStorage = Depends(get_storage)):
    return await homework_service.record_homework(student_id=student_id, date=date, payload=payload, storage=storage)
