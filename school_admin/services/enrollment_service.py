# school_admin/services/enrollment_service.py
from typing import List, Tuple
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ..core.unit_of_work import UnitOfWork
from .base_service import BaseService
from ..models.enrollment import Enrollment


class EnrollmentService(BaseService[Enrollment]):
    def __init__(self, uow: UnitOfWork):
        super().__init__(Enrollment, uow)

    @staticmethod
    def _edge(teacher_id: int, subject_id: int, student_id: int, class_id: int) -> dict:
        return {
            "teacher_id": teacher_id,
            "subject_id": subject_id,
            "student_id": student_id,
            "class_id": class_id,
        }

    async def ensure(self, teacher_id: int, subject_id: int, student_id: int, class_id: int) -> Tuple[Enrollment, bool]:
        """Find or create the edge. An existing edge is left as is: its foreign keys are its identity."""
        return await self.find_or_create(self._edge(teacher_id, subject_id, student_id, class_id))

    async def remove(self, teacher_id: int, subject_id: int, student_id: int, class_id: int) -> int:
        """Delete the edge if present; a missing edge is a no-op."""
        return await self.delete_where(**self._edge(teacher_id, subject_id, student_id, class_id))

    async def get_all_with_teacher_and_subject(self) -> List[Enrollment]:
        """Every enrollment with its teacher and subject loaded eagerly."""
        stmt = (
            select(self.model)
            .options(selectinload(self.model.teacher), selectinload(self.model.subject))
            .order_by(self.model.id)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()
