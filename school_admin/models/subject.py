# school_admin/models/subject.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import Base


class Subject(Base):
    __tablename__ = "subjects"

    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)

    # Relationships
    enrollments = relationship("Enrollment", back_populates="subject")
