# school_admin/services/workload_service.py
import logging
from typing import Dict, Iterable

from ..core.unit_of_work import UnitOfWork
from ..models.enrollment import Enrollment
from ..schemas.report_schemas import SubjectWorkload, WorkloadReport
from .enrollment_service import EnrollmentService

logger = logging.getLogger(__name__)


def aggregate_workload(enrollments: Iterable[Enrollment]) -> WorkloadReport:
    """Count distinct classes per (teacher name, subject).

    Enrollments without a loaded teacher or subject are skipped. Teachers and
    subjects keep the order in which they first appear.
    """
    # teacher name -> subject id -> (subject, class ids)
    workload: Dict[str, Dict[int, tuple]] = {}

    for enrollment in enrollments:
        teacher = enrollment.teacher
        subject = enrollment.subject
        if teacher is None or subject is None:
            continue

        teacher_subjects = workload.setdefault(teacher.name, {})
        _, classes = teacher_subjects.setdefault(subject.id, (subject, set()))
        classes.add(enrollment.class_id)

    report: WorkloadReport = {}
    for teacher_name, teacher_subjects in workload.items():
        report[teacher_name] = [
            SubjectWorkload(
                subject_code=subject.code,
                subject_name=subject.name,
                number_of_classes=len(classes),
            )
            for subject, classes in teacher_subjects.values()
        ]
    return report


class WorkloadService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.enrollments = EnrollmentService(uow)

    async def build_report(self) -> WorkloadReport:
        logger.info("Generating workload report")
        enrollments = await self.enrollments.get_all_with_teacher_and_subject()
        report = aggregate_workload(enrollments)
        logger.info(f"Workload report generated for {len(report)} teachers")
        return report
