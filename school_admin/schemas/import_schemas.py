# school_admin/schemas/import_schemas.py
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints

StrippedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
NaturalKey = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ImportRow(BaseModel):
    """One record of an import batch; resolves four entities and one enrollment edge."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    teacher_email: NaturalKey = Field(..., alias="teacherEmail")
    teacher_name: StrippedStr = Field(..., alias="teacherName")
    student_email: NaturalKey = Field(..., alias="studentEmail")
    student_name: StrippedStr = Field(..., alias="studentName")
    class_code: NaturalKey = Field(..., alias="classCode")
    # CSV exports spell the header "classname"
    class_name: StrippedStr = Field(
        ...,
        validation_alias=AliasChoices("className", "classname", "class_name"),
        serialization_alias="className",
    )
    subject_code: NaturalKey = Field(..., alias="subjectCode")
    subject_name: StrippedStr = Field(..., alias="subjectName")
    # Kept verbatim: "true " is not a delete flag
    to_delete: str = Field(default="", alias="toDelete")


class ReconciliationResult(BaseModel):
    rows_processed: int
    teachers_resolved: int
    students_resolved: int
    classes_resolved: int
    subjects_resolved: int
    enrollments_created: int = 0
    enrollments_deleted: int = 0
