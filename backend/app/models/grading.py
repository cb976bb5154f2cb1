# app/models/grading.py

import uuid
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    String,
    Date,
    ForeignKey,
    Numeric,
    Text,
    Uuid,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ExamMark(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "exam_marks"
    __table_args__ = (
        UniqueConstraint("exam_id", "student_id", name="uq_exam_marks_exam_student"),
    )

    exam_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exams.id", ondelete="CASCADE"), nullable=False
    )
    student_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True
    )
    marks_obtained: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    grade: Mapped[Optional[str]] = mapped_column(String)
    remarks: Mapped[Optional[str]] = mapped_column(Text)
    recorded_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("teachers.id", ondelete="SET NULL")
    )


class StudentGPA(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "student_gpas"
    __table_args__ = (
        UniqueConstraint("student_id", "term_id", name="uq_student_gpas_student_term"),
    )

    student_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    term_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("terms.id"), nullable=False
    )
    academic_year_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("academic_years.id"), nullable=False, index=True
    )
    gpa: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)
    cgpa: Mapped[Optional[Decimal]] = mapped_column(Numeric(4, 2))
    total_credit_units: Mapped[Optional[int]] = mapped_column()
    subject_count: Mapped[Optional[int]] = mapped_column()


class ReportCard(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "report_cards"
    __table_args__ = (
        UniqueConstraint(
            "student_id",
            "class_id",
            "term_id",
            "academic_year_id",
            name="uq_report_cards_student_class_term_year",
        ),
    )

    student_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False
    )
    class_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("classes.id"), nullable=False
    )
    term_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("terms.id"), nullable=False
    )
    academic_year_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("academic_years.id"), nullable=False
    )
    gpa: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)
    cgpa: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)
    remarks: Mapped[Optional[str]] = mapped_column(Text)
    issued_date: Mapped[date] = mapped_column(Date, nullable=False)
    format: Mapped[str] = mapped_column(String, default="Digital", nullable=False)
