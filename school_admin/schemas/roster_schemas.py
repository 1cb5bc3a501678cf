# school_admin/schemas/roster_schemas.py
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class RosterEntry(BaseModel):
    """A student as listed for a class, from either the local store or the external roster."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class StudentListResponse(BaseModel):
    count: int = Field(..., description="Size of the merged roster before pagination")
    students: List[RosterEntry]
