from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import StreamingResponse
from typing import List

from ..services.attendance_service import AttendanceService, ProfessorWithCount
from .schemas.attendance import DownloadAllRequest, DownloadRequest
from .schemas.people import PersonCreateRequest, CreatedResponse
from .dependencies import get_attendance_service
from .utilities.limiter import limiter, DEFAULT_LIMIT
from .utilities.responses import content_disposition

router = APIRouter(tags=["Professors"])


@router.get("/professors", response_model=List[ProfessorWithCount], summary="List professors with their number of recorded sessions")
@limiter.limit(DEFAULT_LIMIT)
def list_professors(request: Request, service: AttendanceService = Depends(get_attendance_service)):
    return service.list_professors_with_counts()

@router.post("/create/professor", response_model=CreatedResponse, summary="Register a new professor")
@limiter.limit(DEFAULT_LIMIT)
def create_professor(request: Request, create_request: PersonCreateRequest, service: AttendanceService = Depends(get_attendance_service)):
    service.create_professor(first_name=create_request.FirstName, last_name=create_request.LastName)
    return CreatedResponse()

# --- Session history & exports ---

@router.get("/lists/{professor_id}", response_model=List[str], summary="List a professor's snapshot files, newest first")
@limiter.limit(DEFAULT_LIMIT)
def list_sessions(request: Request, professor_id: int, service: AttendanceService = Depends(get_attendance_service)):
    return service.list_sessions(professor_id)

@router.post("/download", summary="Download one session as CSV")
@limiter.limit(DEFAULT_LIMIT)
def download_session(request: Request, download_request: DownloadRequest, service: AttendanceService = Depends(get_attendance_service)):
    file_name, csv_text = service.export_session_csv(download_request.id, download_request.element)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": content_disposition(file_name)},
    )

@router.post("/download-all", summary="Download every session of a professor as a zip of CSV files")
@limiter.limit("10/minute")
def download_all_sessions(request: Request, download_request: DownloadAllRequest, service: AttendanceService = Depends(get_attendance_service)):
    file_name, chunks = service.export_all_sessions(download_request.id)
    return StreamingResponse(
        chunks,
        media_type="application/zip",
        headers={"Content-Disposition": content_disposition(file_name)},
    )
