# school_admin/services/student_service.py
from typing import List
from sqlalchemy import select

from ..core.unit_of_work import UnitOfWork
from .base_service import NaturalKeyService
from ..models.enrollment import Enrollment
from ..models.student import Student


class StudentService(NaturalKeyService[Student]):
    natural_key = "email"

    def __init__(self, uow: UnitOfWork):
        super().__init__(Student, uow)

    async def get_by_class(self, class_id: int) -> List[Student]:
        """Students reached through the class's enrollments, each listed once."""
        stmt = (
            select(self.model)
            .join(Enrollment, Enrollment.student_id == self.model.id)
            .where(Enrollment.class_id == class_id)
            .order_by(Enrollment.id)
        )
        result = await self.db.execute(stmt)

        students = {}
        for student in result.scalars():
            students.setdefault(student.id, student)
        return list(students.values())
