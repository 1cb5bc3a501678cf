# school_admin/routers/data_import.py
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from ..core.database import get_uow
from ..core.exceptions import ValidationError
from ..core.unit_of_work import UnitOfWork
from ..services.csv_processor import CSVProcessor
from ..services.reconciliation_service import ReconciliationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Data Import"])


@router.post("/upload", status_code=status.HTTP_204_NO_CONTENT)
async def upload_import_file(
    data: Optional[UploadFile] = File(None),
    uow: UnitOfWork = Depends(get_uow)
):
    """
    Apply a CSV of teacher/student/class/subject rows as one atomic batch.
    Rows with toDelete "1" or "true" remove their enrollment instead.
    """
    logger.info("Upload request received")

    if data is None:
        logger.warning("No file in request")
        raise ValidationError("No file uploaded")

    path = await CSVProcessor.save_upload(data)
    try:
        rows = CSVProcessor.read_import_rows(path)
        await ReconciliationService(uow).apply_batch(rows)
    finally:
        CSVProcessor.remove_file(path)
        await data.close()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
