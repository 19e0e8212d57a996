from fastapi import APIRouter, Depends, Request
from typing import List

from ..models.records import Student
from ..services.attendance_service import AttendanceService
from .schemas.people import PersonCreateRequest, CreatedResponse
from .dependencies import get_attendance_service
from .utilities.limiter import limiter, DEFAULT_LIMIT

router = APIRouter(tags=["Students"])


@router.get("/students", response_model=List[Student], summary="List every registered student")
@limiter.limit(DEFAULT_LIMIT)
def list_students(request: Request, service: AttendanceService = Depends(get_attendance_service)):
    return service.list_students()

@router.post("/create/student", response_model=CreatedResponse, summary="Register a new student")
@limiter.limit(DEFAULT_LIMIT)
def create_student(request: Request, create_request: PersonCreateRequest, service: AttendanceService = Depends(get_attendance_service)):
    service.create_student(first_name=create_request.FirstName, last_name=create_request.LastName)
    return CreatedResponse()
