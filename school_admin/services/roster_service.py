# school_admin/services/roster_service.py
import asyncio
import logging
from typing import Iterable, List, Optional

from ..core.config import settings
from ..core.exceptions import NotFoundError
from ..core.unit_of_work import UnitOfWork
from ..schemas.roster_schemas import RosterEntry, StudentListResponse
from ..utils.pagination import DEFAULT_LIMIT, DEFAULT_OFFSET, Paginator
from ..utils.sorting import natural_sort_key
from .class_service import ClassService, require_class_code
from .external_roster_gateway import ExternalRosterGateway
from .student_service import StudentService

logger = logging.getLogger(__name__)


def merge_and_sort(internal: Iterable[RosterEntry], external: Iterable[RosterEntry]) -> List[RosterEntry]:
    """Concatenate both sources and order by name, then email.

    The two id spaces are assumed disjoint: the same person present in both
    sources is listed twice.
    """
    merged = [*internal, *external]
    return sorted(merged, key=lambda entry: (natural_sort_key(entry.name), natural_sort_key(entry.email)))


def paginate(entries: List[RosterEntry], offset: int, limit: int) -> StudentListResponse:
    return StudentListResponse(count=len(entries), students=Paginator.slice(entries, offset, limit))


class RosterService:
    def __init__(self, uow: UnitOfWork, gateway: Optional[ExternalRosterGateway] = None):
        self.uow = uow
        self.classes = ClassService(uow)
        self.students = StudentService(uow)
        self.gateway = gateway or ExternalRosterGateway()

    async def get_internal_students(self, class_id: int) -> List[RosterEntry]:
        students = await self.students.get_by_class(class_id)
        return [RosterEntry.model_validate(student) for student in students]

    async def list_students(
        self,
        class_code: str,
        offset: int = DEFAULT_OFFSET,
        limit: int = DEFAULT_LIMIT,
    ) -> StudentListResponse:
        class_code = require_class_code(class_code)
        Paginator.validate_window(offset, limit)

        class_obj = await self.classes.get_by_natural_key(class_code)
        if not class_obj:
            raise NotFoundError(f"Class with code '{class_code}' not found")

        logger.info(
            f"Fetching students for class {class_code} (id: {class_obj.id}) with offset={offset}, limit={limit}"
        )

        # External pagination is meaningless before the merge, so fetch everything
        external_task = asyncio.ensure_future(
            self.gateway.fetch_students(class_code, 0, settings.external_fetch_limit)
        )
        try:
            internal = await self.get_internal_students(class_obj.id)
        except Exception:
            external_task.cancel()
            raise
        external = await external_task

        response = paginate(merge_and_sort(internal, external), offset, limit)
        logger.info(f"Returning {len(response.students)} students out of {response.count} total")
        return response
