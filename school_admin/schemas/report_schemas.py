# school_admin/schemas/report_schemas.py
from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field


class SubjectWorkload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subject_code: str = Field(..., alias="subjectCode")
    subject_name: str = Field(..., alias="subjectName")
    number_of_classes: int = Field(..., alias="numberOfClasses")


WorkloadReport = Dict[str, List[SubjectWorkload]]
