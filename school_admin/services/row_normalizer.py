# school_admin/services/row_normalizer.py
"""Canonicalize display names across an import batch.

When a batch edits the same entity more than once (a name correction appended
further down the file, say), the value from the row closest to the end of the
batch applies to every row sharing that natural key.
"""
from typing import Dict, List, Sequence

from ..schemas.import_schemas import ImportRow


def normalize_rows(rows: Sequence[ImportRow]) -> List[ImportRow]:
    teacher_names: Dict[str, str] = {}
    student_names: Dict[str, str] = {}
    class_names: Dict[str, str] = {}
    subject_names: Dict[str, str] = {}

    # Backward scan: the first value seen for a key is the last one in the batch
    for index in range(len(rows) - 1, -1, -1):
        row = rows[index]
        teacher_names.setdefault(row.teacher_email, row.teacher_name)
        student_names.setdefault(row.student_email, row.student_name)
        class_names.setdefault(row.class_code, row.class_name)
        subject_names.setdefault(row.subject_code, row.subject_name)

    # Forward rewrite, original order preserved
    return [
        row.model_copy(update={
            "teacher_name": teacher_names[row.teacher_email],
            "student_name": student_names[row.student_email],
            "class_name": class_names[row.class_code],
            "subject_name": subject_names[row.subject_code],
        })
        for row in rows
    ]
