# school_admin/routers/classes.py
from fastapi import APIRouter, Depends, Response, status

from ..core.database import get_uow
from ..core.unit_of_work import UnitOfWork
from ..schemas.class_schemas import ClassNameUpdate
from ..services.class_service import ClassService

router = APIRouter(prefix="/api", tags=["Classes"])


@router.put("/class/{class_code}", status_code=status.HTTP_204_NO_CONTENT)
async def update_class_name(
    class_code: str,
    payload: ClassNameUpdate,
    uow: UnitOfWork = Depends(get_uow)
):
    """Rename a class, identified by its code"""
    await ClassService(uow).rename_class(class_code, payload.class_name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
