# /homework-tracker/homework_tracker/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Application-specific Imports ---
from .config import get_settings
from .core.exceptions import NotFoundError, NotInitializedError, ValidationFailureError
from .routers import classes_router, dashboard_router, statistics_router, students_router
from .services.storage_service import select_storage

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at startup: the backend chosen here serves the whole process.
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.state.storage = await select_storage(settings)
    logger.info("Homework tracker started with %s storage", app.state.storage.name)
    yield
    # Runs once at shutdown.
    await app.state.storage.close()


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Homework Tracker API",
    description="Classes, students and daily homework completion with monthly statistics.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error Mapping ---
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(ValidationFailureError)
async def validation_failure_handler(request: Request, exc: ValidationFailureError):
    return JSONResponse(status_code=422, content={"detail": str(exc), "field": exc.field})


@app.exception_handler(NotInitializedError)
async def not_initialized_handler(request: Request, exc: NotInitializedError):
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


# --- API Router Inclusion ---
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(statistics_router.router, prefix="/api/statistics", tags=["Statistics"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root(request: Request):
    """A simple health check endpoint reporting the active storage backend."""
    return {"status": "Homework tracker is running!", "version": app.version, "storage": request.app.state.storage.name}
