# school_admin/routers/students.py
from fastapi import APIRouter, Depends, Query

from ..core.database import get_uow
from ..core.exceptions import ValidationError
from ..core.unit_of_work import UnitOfWork
from ..schemas.roster_schemas import StudentListResponse
from ..services.external_roster_gateway import ExternalRosterGateway
from ..services.roster_service import RosterService
from ..utils.pagination import DEFAULT_LIMIT, DEFAULT_OFFSET

router = APIRouter(prefix="/api", tags=["Students"])


def get_roster_gateway() -> ExternalRosterGateway:
    return ExternalRosterGateway()


@router.get("/class//students", include_in_schema=False)
async def get_students_without_class_code():
    raise ValidationError("Class code is required")


@router.get("/class/{class_code}/students", response_model=StudentListResponse)
async def get_students(
    class_code: str,
    offset: int = Query(DEFAULT_OFFSET, description="Index of the first student to return"),
    limit: int = Query(DEFAULT_LIMIT, description="Maximum number of students to return"),
    uow: UnitOfWork = Depends(get_uow),
    gateway: ExternalRosterGateway = Depends(get_roster_gateway)
):
    """List a class's students, merging local enrollments with the external roster"""
    service = RosterService(uow, gateway=gateway)
    return await service.list_students(class_code, offset=offset, limit=limit)
