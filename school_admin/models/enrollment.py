# school_admin/models/enrollment.py
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class Enrollment(Base):
    """Four-way edge; the (teacher, subject, student, class) tuple is its identity."""
    __tablename__ = "enrollments"

    # Foreign Keys
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("teacher_id", "subject_id", "student_id", "class_id", name="unique_enrollment"),
    )

    # Relationships
    teacher = relationship("Teacher", back_populates="enrollments")
    subject = relationship("Subject", back_populates="enrollments")
    student = relationship("Student", back_populates="enrollments")
    class_ref = relationship("ClassModel", back_populates="enrollments")
