# school_admin/models/teacher.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import Base


class Teacher(Base):
    __tablename__ = "teachers"

    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)

    # Relationships
    enrollments = relationship("Enrollment", back_populates="teacher")
