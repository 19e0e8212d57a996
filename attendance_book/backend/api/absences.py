from fastapi import APIRouter, Depends, Request
from typing import Any, List

from ..services.attendance_service import AttendanceService
from .schemas.attendance import AbsenceUpdateRequest, SnapshotWriteResponse
from .dependencies import get_attendance_service
from .utilities.limiter import limiter, DEFAULT_LIMIT

router = APIRouter(tags=["Absences"])


@router.post("/absent", response_model=SnapshotWriteResponse, summary="Apply absence flags to the full student list for a date")
@limiter.limit(DEFAULT_LIMIT)
def mark_absent(request: Request, update_request: AbsenceUpdateRequest, service: AttendanceService = Depends(get_attendance_service)):
    file_name = service.mark_absent(
        date=update_request.currentDate,
        professor_id=update_request.choosedProfessor,
        updates=update_request.students,
    )
    return SnapshotWriteResponse(file=file_name)

@router.get("/absence/{professor_id}/{date}", response_model=List[Any], summary="Get the attendance snapshot of a professor for a date")
@limiter.limit(DEFAULT_LIMIT)
def get_absence(request: Request, professor_id: int, date: str, service: AttendanceService = Depends(get_attendance_service)):
    return service.get_absence(professor_id=professor_id, date=date)

@router.post("/absence/update", response_model=SnapshotWriteResponse, summary="Overwrite the attendance snapshot of a professor for a date")
@limiter.limit(DEFAULT_LIMIT)
def update_absence(request: Request, update_request: AbsenceUpdateRequest, service: AttendanceService = Depends(get_attendance_service)):
    file_name = service.update_absence(
        date=update_request.currentDate,
        professor_id=update_request.choosedProfessor,
        entries=update_request.students,
    )
    return SnapshotWriteResponse(file=file_name)
