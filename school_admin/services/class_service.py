# school_admin/services/class_service.py
from typing import Any, Optional
import logging

from ..core.exceptions import ValidationError
from ..core.unit_of_work import UnitOfWork
from .base_service import NaturalKeyService
from ..models.class_model import ClassModel

logger = logging.getLogger(__name__)


def require_class_code(class_code: Optional[str]) -> str:
    """Strip and return the class code, rejecting blank values."""
    if not class_code or not class_code.strip():
        raise ValidationError("Class code is required")
    return class_code.strip()


class ClassService(NaturalKeyService[ClassModel]):
    natural_key = "code"

    def __init__(self, uow: UnitOfWork):
        super().__init__(ClassModel, uow)

    async def rename_class(self, class_code: str, class_name: Any) -> ClassModel:
        """Set a class's display name to the stripped `class_name`."""
        class_code = require_class_code(class_code)

        if not isinstance(class_name, str) or not class_name.strip():
            raise ValidationError("className is required and must be a non-empty string")

        logger.info(f"Updating class name for class code: {class_code}")

        async with self.uow.transaction():
            class_obj = await self.get_by_natural_key(class_code)
            # Unknown codes are reported as bad input on this endpoint
            if not class_obj:
                raise ValidationError(f"Class with code '{class_code}' not found")
            await self.update_fields(class_obj, {"name": class_name.strip()})

        logger.info(f"Successfully updated class name for class code: {class_code}")
        return class_obj
