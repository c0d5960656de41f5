# /homework-tracker/homework_tracker/routers/classes_router.py

from fastapi import APIRouter, Depends, Response, status
from typing import List

from ..models import class_model, homework_model, student_model
from ..services import class_service, homework_service
from ..services.storage_contract import HomeworkStorage
from ..services.storage_service import get_storage

router = APIRouter()

# --- CLASS COLLECTION ENDPOINTS (/api/classes) ---

@router.get("", response_model=List[class_model.ClassGroup], summary="Get All Classes")
async def get_all_classes(storage: HomeworkStorage = Depends(get_storage)):
    return await storage.get_classes()

@router.post("", response_model=class_model.ClassGroup, status_code=status.HTTP_201_CREATED, summary="Create a New Class")
async def create_new_class(class_create: class_model.ClassCreate, storage: HomeworkStorage = Depends(get_storage)):
    return await class_service.create_class(class_data=class_create, storage=storage)

# --- INDIVIDUAL CLASS RESOURCE ENDPOINTS (/api/classes/{class_id}) ---

@router.put("/{class_id}", response_model=class_model.ClassGroup, summary="Update a Class")
async def update_class_details(class_id: int, class_update: class_model.ClassCreate, storage: HomeworkStorage = Depends(get_storage)):
    return await class_service.update_class(class_id=class_id, class_update=class_update, storage=storage)

@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Class and Everything in It")
async def delete_class(class_id: int, storage: HomeworkStorage = Depends(get_storage)):
    await class_service.delete_class(class_id=class_id, storage=storage)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# --- STUDENT SUB-RESOURCE ENDPOINTS ---

@router.get("/{class_id}/students", response_model=List[student_model.Student], summary="Get the Students of a Class")
async def get_class_students(class_id: int, storage: HomeworkStorage = Depends(get_storage)):
    return await class_service.get_students(class_id=class_id, storage=storage)

@router.post("/{class_id}/students", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Add a Student to a Class")
async def add_student(class_id: int, student_create: student_model.StudentFields, storage: HomeworkStorage = Depends(get_storage)):
    return await class_service.add_student_to_class(class_id=class_id, student_data=student_create, storage=storage)

# --- DAILY HOMEWORK SHEET ---

@router.get("/{class_id}/homework/{date}", response_model=List[homework_model.StudentDailyRecord], summary="Get a Class's Homework Sheet for a Date")
async def get_daily_sheet(class_id: int, date: str, storage: HomeworkStorage = Depends(get_storage)):
    return await homework_service.get_daily_sheet(class_id=class_id, date=date, storage=storage)
