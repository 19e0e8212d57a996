from pydantic import BaseModel, Field

class PersonCreateRequest(BaseModel):
    """Request body for registering a professor or a student."""
    FirstName: str = Field(..., min_length=1)
    LastName: str = Field(..., min_length=1)

class CreatedResponse(BaseModel):
    success: bool = True
