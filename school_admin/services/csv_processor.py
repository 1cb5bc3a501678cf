# school_admin/services/csv_processor.py
import os
import uuid
import logging
import pandas as pd
from typing import List
from fastapi import UploadFile
from pydantic import ValidationError as PydanticValidationError

from ..core.config import settings
from ..core.exceptions import ValidationError
from ..schemas.import_schemas import ImportRow

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class CSVProcessor:
    @staticmethod
    async def save_upload(file: UploadFile, upload_dir: str = None, max_size: int = None) -> str:
        """
        Spool an uploaded file to disk and return its path.
        Files larger than `max_size` bytes are rejected and never left on disk.
        """
        upload_dir = upload_dir or settings.upload_dir
        max_size = max_size if max_size is not None else settings.max_upload_size
        os.makedirs(upload_dir, exist_ok=True)

        extension = os.path.splitext(file.filename or "")[1]
        path = os.path.join(upload_dir, f"data-{uuid.uuid4().hex}{extension}")

        written = 0
        try:
            with open(path, "wb") as target:
                while True:
                    chunk = await file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_size:
                        raise ValidationError(f"File too large. Maximum size is {max_size} bytes")
                    target.write(chunk)
        except Exception:
            CSVProcessor.remove_file(path)
            raise

        logger.info(f"File received: {file.filename}, size: {written} bytes")
        return path

    @staticmethod
    def remove_file(path: str) -> None:
        """Delete a temporary upload; a failure here is logged, not raised."""
        try:
            os.remove(path)
            logger.info(f"Cleaned up temporary file: {path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to cleanup file: {path} ({e})")

    @staticmethod
    def read_import_rows(path: str) -> List[ImportRow]:
        """
        Parse an import CSV into ImportRow records, in file order.
        Returns an empty list for a file with no data rows.
        """
        try:
            # Every cell stays the string as sent: delete flags must not be coerced or trimmed
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            return []
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise ValidationError(f"Failed to process CSV: {str(e)}")

        df.columns = df.columns.str.strip()

        rows = []
        validation_errors = []
        for index, record in enumerate(df.to_dict(orient="records")):
            try:
                rows.append(ImportRow.model_validate(record))
            except PydanticValidationError as e:
                fields = sorted({str(error["loc"][0]) for error in e.errors() if error.get("loc")})
                # +2 for header and 0-based index
                validation_errors.append(f"row {index + 2}: invalid {', '.join(fields) or 'data'}")

        if validation_errors:
            raise ValidationError("Invalid CSV rows: " + "; ".join(validation_errors[:10]))

        return rows
