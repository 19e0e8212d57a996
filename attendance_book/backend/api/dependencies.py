#attendance_book/backend/api/dependencies.py
from fastapi import Request, Depends

from ..db.attendance_files import AttendanceFiles
from ..db.record_store import RecordStore
from ..services.attendance_service import AttendanceService


def get_record_store(request: Request) -> RecordStore:
    """
    Returns the RecordStore created in the application lifespan.
    """
    return request.app.state.record_store

def get_attendance_files(request: Request) -> AttendanceFiles:
    """
    Returns the AttendanceFiles layer created in the application lifespan.
    """
    return request.app.state.attendance_files


def get_attendance_service(
    record_store: RecordStore = Depends(get_record_store),
    attendance_files: AttendanceFiles = Depends(get_attendance_files)
) -> AttendanceService:
    """
    Builds a fresh AttendanceService for every request.

    The stores themselves are shared (they own the per-file locks); only the
    thin service object is per request, so handlers stay stateless.
    """
    return AttendanceService(record_store=record_store, attendance_files=attendance_files)
