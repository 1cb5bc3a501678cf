# school_admin/models/__init__.py
"""Import all models here so Base.metadata knows every table."""
from .base import Base

from .teacher import Teacher
from .student import Student
from .class_model import ClassModel
from .subject import Subject
from .enrollment import Enrollment

__all__ = [
    "Base",
    "Teacher",
    "Student",
    "ClassModel",
    "Subject",
    "Enrollment",
]
