# school_admin/schemas/class_schemas.py
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class ClassNameUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Type checked by ClassService so every bad value gets the same message
    class_name: Optional[Any] = Field(default=None, alias="className")
