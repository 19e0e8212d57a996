# attendance_book/backend/models/records.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class Professor(BaseModel):
    """
    A professor entry of professors.json.
    """
    id: int = Field(..., ge=1, description="Unique identifier, assigned on creation and never reused")
    nom: str = Field(..., description="Last name")
    prenom: str = Field(..., description="First name")

    @property
    def full_name(self) -> str:
        """The "{nom} {prenom}" key that names the professor's snapshot directory."""
        return f"{self.nom} {self.prenom}"

class Student(BaseModel):
    """
    A student entry of students.json.
    """
    id: int = Field(..., ge=1)
    nom: str
    prenom: str
    is_absent: bool = Field(False, alias="isAbsent")

    model_config = ConfigDict(populate_by_name=True)

class AttendanceEntry(BaseModel):
    """
    One line of an attendance snapshot as sent by the client. Only ``id`` is
    required; unset fields are left out when the snapshot is stored.
    """
    id: int
    nom: Optional[str] = None
    prenom: Optional[str] = None
    is_absent: bool = Field(False, alias="isAbsent")

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> dict:
        """JSON-ready dict holding only the fields the client actually sent."""
        return self.model_dump(by_alias=True, exclude_unset=True)
