# school_admin/services/reconciliation_service.py
"""Apply an import batch as entity upserts plus enrollment edges, atomically.

The batch is normalized first (see `row_normalizer`), then applied in two
passes inside one transaction:

1. Entity resolution: every teacher, student, class and subject is found by
   its natural key or created, and its display name overwritten. The resolved
   id of each natural key is kept in a per-batch lookup table.
2. Enrollment resolution: every row's four ids are read back from the lookup
   tables and the enrollment edge is created or deleted.

Any failure rolls the whole batch back.
"""
from datetime import datetime
from typing import Dict, List, Sequence
import logging

from ..core.exceptions import EmptyBatchError, ReconciliationError
from ..core.unit_of_work import UnitOfWork
from ..schemas.import_schemas import ImportRow, ReconciliationResult
from .row_normalizer import normalize_rows
from .teacher_service import TeacherService
from .student_service import StudentService
from .class_service import ClassService
from .subject_service import SubjectService
from .enrollment_service import EnrollmentService

logger = logging.getLogger(__name__)

DELETE_FLAG_VALUES = ("1", "true")


def is_delete_flag(value: str) -> bool:
    """Only the exact literals "1" and "true" request a deletion."""
    return value in DELETE_FLAG_VALUES


class ReconciliationService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.teachers = TeacherService(uow)
        self.students = StudentService(uow)
        self.classes = ClassService(uow)
        self.subjects = SubjectService(uow)
        self.enrollments = EnrollmentService(uow)

    async def apply_batch(self, rows: Sequence[ImportRow]) -> ReconciliationResult:
        if not rows:
            raise EmptyBatchError()

        start_time = datetime.now()
        normalized = normalize_rows(rows)

        try:
            async with self.uow.transaction():
                teacher_ids, student_ids, class_ids, subject_ids = await self._resolve_entities(normalized)
                created, deleted = await self._resolve_enrollments(
                    normalized, teacher_ids, student_ids, class_ids, subject_ids
                )
        except ReconciliationError:
            raise
        except Exception as e:
            logger.error(f"Error processing import batch: {e}")
            raise ReconciliationError(f"Import batch rolled back: {e}", row_count=len(rows)) from e

        result = ReconciliationResult(
            rows_processed=len(normalized),
            teachers_resolved=len(teacher_ids),
            students_resolved=len(student_ids),
            classes_resolved=len(class_ids),
            subjects_resolved=len(subject_ids),
            enrollments_created=created,
            enrollments_deleted=deleted,
        )
        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"Successfully processed {result.rows_processed} rows in {processing_time:.3f}s "
            f"({created} enrollments created, {deleted} deleted)"
        )
        return result

    async def _resolve_entities(self, rows: List[ImportRow]):
        teacher_ids: Dict[str, int] = {}
        student_ids: Dict[str, int] = {}
        class_ids: Dict[str, int] = {}
        subject_ids: Dict[str, int] = {}

        for row in rows:
            teacher = await self.teachers.upsert(row.teacher_email, row.teacher_name)
            teacher_ids.setdefault(row.teacher_email, teacher.id)

            student = await self.students.upsert(row.student_email, row.student_name)
            student_ids.setdefault(row.student_email, student.id)

            class_obj = await self.classes.upsert(row.class_code, row.class_name)
            class_ids.setdefault(row.class_code, class_obj.id)

            subject = await self.subjects.upsert(row.subject_code, row.subject_name)
            subject_ids.setdefault(row.subject_code, subject.id)

        return teacher_ids, student_ids, class_ids, subject_ids

    async def _resolve_enrollments(
        self,
        rows: List[ImportRow],
        teacher_ids: Dict[str, int],
        student_ids: Dict[str, int],
        class_ids: Dict[str, int],
        subject_ids: Dict[str, int],
    ):
        created = 0
        deleted = 0

        for row in rows:
            teacher_id = teacher_ids.get(row.teacher_email)
            student_id = student_ids.get(row.student_email)
            class_id = class_ids.get(row.class_code)
            subject_id = subject_ids.get(row.subject_code)

            if teacher_id is None or student_id is None or class_id is None or subject_id is None:
                raise ReconciliationError("Failed to resolve entity IDs", row_count=len(rows))

            if is_delete_flag(row.to_delete):
                deleted += await self.enrollments.remove(teacher_id, subject_id, student_id, class_id)
            else:
                _, was_created = await self.enrollments.ensure(teacher_id, subject_id, student_id, class_id)
                if was_created:
                    created += 1

        return created, deleted
