# school_admin/models/class_model.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import Base


class ClassModel(Base):
    __tablename__ = "classes"

    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)

    # Relationships
    enrollments = relationship("Enrollment", back_populates="class_ref")
