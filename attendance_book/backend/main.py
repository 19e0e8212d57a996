# attendance_book/backend/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from pathlib import Path
import logging

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .config.config import settings
from .api import absences, professors, students
from .api.utilities.limiter import limiter
from .db.attendance_files import AttendanceFiles
from .db.record_store import RecordStore
from .errors import BadRequestError, NotFoundError, SnapshotWriteError, StorageError
from .logging.logging_config import setup_logging

logger = logging.getLogger(__name__)

from fastapi.middleware.cors import CORSMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Runs on startup and shutdown: configures logging and builds the stores
    shared by every request.
    """
    setup_logging()
    app.state.limiter = limiter

    store_root = Path(settings.STORE_ROOT)
    data_dir = store_root / settings.DATA_DIR_NAME
    data_dir.mkdir(parents=True, exist_ok=True)

    app.state.record_store = RecordStore(root=store_root)
    app.state.attendance_files = AttendanceFiles(data_dir=data_dir)
    logger.info(f"Attendance book started. Store root: '{store_root.resolve()}'.")

    yield

    logger.info("Attendance book shutting down.")


app = FastAPI(
    title="Attendance Book API",
    description="Professors, students and per-day attendance snapshots stored as JSON files.",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Error mapping ---

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})

@app.exception_handler(BadRequestError)
async def bad_request_handler(request: Request, exc: BadRequestError):
    return JSONResponse(status_code=400, content={"error": str(exc)})

@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    if isinstance(exc, SnapshotWriteError):
        return JSONResponse(status_code=500, content={"success": False, "message": str(exc)})
    return JSONResponse(status_code=500, content={"error": str(exc)})

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Missing or ill-typed fields are the client's fault: 400 instead of FastAPI's 422.
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )

app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(students.router)
app.include_router(professors.router)
app.include_router(absences.router)

@app.get("/health", tags=["System"])
def health_check():
    """Simple liveness probe."""
    return {"status": "ok", "message": "Attendance book is running."}


def run():
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)

if __name__ == "__main__":
    run()
