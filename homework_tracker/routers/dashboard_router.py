# /homework-tracker/homework_tracker/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
from ..services import dashboard_service
from ..services.storage_contract import HomeworkStorage
from ..services.storage_service import get_storage
from ..models.dashboard_model import DashboardSummary

# --- APIRouter Instance ---
router = APIRouter()

# --- Endpoint Definition ---
@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Retrieves the class and student counts shown on the home screen."
)
async def get_dashboard_summary(storage: HomeworkStorage = Depends(get_storage)):
    """
    This is the "thin" router layer: it receives the request, takes the
    storage backend from dependency injection and delegates to the service.
    """
    return await dashboard_service.get_summary_data(storage=storage)
