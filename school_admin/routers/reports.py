# school_admin/routers/reports.py
from fastapi import APIRouter, Depends

from ..core.database import get_uow
from ..core.unit_of_work import UnitOfWork
from ..schemas.report_schemas import WorkloadReport
from ..services.workload_service import WorkloadService

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.get("/workload", response_model=WorkloadReport)
async def get_workload_report(uow: UnitOfWork = Depends(get_uow)):
    """Distinct class count per subject for every teacher with enrollments"""
    return await WorkloadService(uow).build_report()
