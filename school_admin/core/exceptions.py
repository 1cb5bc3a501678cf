# school_admin/core/exceptions.py
"""Custom exceptions for the school administration service."""
from enum import IntEnum
from typing import Optional


class ErrorCodes(IntEnum):
    """Error codes that do not map one-to-one onto an HTTP status."""
    MALFORMED_JSON_ERROR_CODE = 88
    RUNTIME_ERROR_CODE = 99


class SchoolAdminException(Exception):
    """Base exception for the school administration service."""
    def __init__(self, message: str, status_code: int = 500, error_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code if error_code is not None else status_code
        super().__init__(self.message)


class ValidationError(SchoolAdminException):
    """Raised for malformed input, before the store is touched."""
    def __init__(self, message: str):
        super().__init__(message, 400)


class EmptyBatchError(ValidationError):
    """Raised when an import batch has no rows."""
    def __init__(self, message: str = "CSV file is empty"):
        super().__init__(message)


class NotFoundError(SchoolAdminException):
    """Raised when a well-formed natural key refers to nothing."""
    def __init__(self, message: str):
        super().__init__(message, 404)


class ReconciliationError(SchoolAdminException):
    """Raised when an import batch is rolled back; no row of it was applied."""
    def __init__(self, message: str, row_count: int = 0):
        self.row_count = row_count
        super().__init__(f"{message} ({row_count} rows, none applied)", 500)


class UpstreamError(SchoolAdminException):
    """Raised inside the external roster gateway when the remote source fails."""
    def __init__(self, message: str):
        super().__init__(message, 502)
