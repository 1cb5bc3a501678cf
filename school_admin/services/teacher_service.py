# school_admin/services/teacher_service.py
from ..core.unit_of_work import UnitOfWork
from .base_service import NaturalKeyService
from ..models.teacher import Teacher


class TeacherService(NaturalKeyService[Teacher]):
    natural_key = "email"

    def __init__(self, uow: UnitOfWork):
        super().__init__(Teacher, uow)
