from pydantic import BaseModel, Field
from typing import List

from ...models.records import AttendanceEntry

class AbsenceUpdateRequest(BaseModel):
    """Request body of /absent and /absence/update."""
    currentDate: str = Field(..., min_length=1, description="Session date, used as the snapshot file name, e.g. '2024-01-01'.")
    choosedProfessor: int = Field(..., description="Id of the professor holding the session.")
    students: List[AttendanceEntry] = Field(default_factory=list, description="Students with their isAbsent flag.")

class SnapshotWriteResponse(BaseModel):
    """Response model after a snapshot was saved."""
    success: bool = True
    file: str = Field(description="Name of the snapshot file that was written.")

class DownloadAllRequest(BaseModel):
    id: int

class DownloadRequest(BaseModel):
    id: int
    element: str = Field(..., min_length=1, description="A file name as returned by /lists/{id}.")
