# school_admin/services/subject_service.py
from ..core.unit_of_work import UnitOfWork
from .base_service import NaturalKeyService
from ..models.subject import Subject


class SubjectService(NaturalKeyService[Subject]):
    natural_key = "code"

    def __init__(self, uow: UnitOfWork):
        super().__init__(Subject, uow)
