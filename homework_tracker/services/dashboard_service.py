# /homework-tracker/homework_tracker/services/dashboard_service.py

# --- Core Imports ---
import logging

from ..models.dashboard_model import DashboardSummary
from .storage_contract import HomeworkStorage

logger = logging.getLogger(__name__)

RECENT_CLASS_LIMIT = 3

# --- Core Public Function ---

async def get_summary_data(storage: HomeworkStorage) -> DashboardSummary:
    """
    Calculates the dashboard summary statistics from the storage backend.

    Args:
        storage: The backend selected at startup, provided by dependency injection.

    Returns:
        A DashboardSummary with the class and student counts and the first
        few classes in name order.
    """
    try:
        all_classes = await storage.get_classes()
        all_students = await storage.get_all_students()
        return DashboardSummary(
            classCount=len(all_classes),
            studentCount=len(all_students),
            recentClasses=all_classes[:RECENT_CLASS_LIMIT],
        )
    except Exception:
        logger.exception("Error calculating dashboard summary")
        # Re-raise the exception to be handled as a 500 error in the router layer.
        raise
