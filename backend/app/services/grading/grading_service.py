# backend/app/services/grading/grading_service.py
"""
Service for exam marks, GPA and report cards.

Marks are stored as entered; letter grades, statistics and GPA work on the
percentage of each exam's total marks so that exams out of 50 and out of 100
are graded on the same table. All numeric decisions are delegated to the
academic core's GradeAggregator and ReportAssembler.
"""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from academic_core.config import AcademicCoreConfig, to_decimal
from academic_core.core.grading import (
    GPARecord,
    GPAStatistics,
    GradeAggregator,
    ScoredRecord,
    Summary,
    TierShare,
)
from academic_core.core.reports import PerformanceReport, ReportAssembler
from academic_core.exceptions import OutOfRangeError, UnknownGradeError

from ...core.exceptions import DataProcessingError, DuplicateRecordError
from ...models import (
    ClassRoom,
    Exam,
    ExamMark,
    ExamStatus,
    ReportCard,
    Student,
    StudentGPA,
    Subject,
)
from ..data_management import CoreDataService
from ..data_retrieval import DataRetrievalService

logger = logging.getLogger(__name__)

GROUP_BY_OPTIONS = ("class", "subject")


class GradingService:
    """Grades marks and derives GPA, CGPA and report cards from them."""

    def __init__(
        self,
        session: AsyncSession,
        grading_config: Optional[AcademicCoreConfig] = None,
        report_format: str = "Digital",
    ):
        self.session = session
        self.aggregator = GradeAggregator(grading_config)
        self.assembler = ReportAssembler(self.aggregator)
        self.report_format = report_format
        self.data = CoreDataService(session)
        self.retrieval = DataRetrievalService(session)

    # --- Grading helpers ---
    def _percentage(self, marks: Any, total_marks: Any) -> Decimal:
        """Marks rescaled to the grade table's ``max_score``."""
        max_score = self.aggregator.grade_table.max_score
        return to_decimal(marks) * max_score / to_decimal(total_marks)

    def grade_mark(self, exam: Exam, marks: Any, grade: Optional[str] = None) -> str:
        """
        Validate ``marks`` against the exam's total and return the letter grade.
        A supplied grade is kept when it exists in the grade table.
        """
        value = to_decimal(marks)
        total = to_decimal(exam.total_marks)
        if value < 0 or value > total:
            raise OutOfRangeError("marks_obtained", value, 0, total)
        if grade:
            if self.aggregator.grade_table.band_for_letter(grade) is None:
                raise UnknownGradeError(grade)
            return grade
        return self.aggregator.grade_for(self._percentage(value, total))

    # --- Exam marks ---
    async def create_mark(self, data: Dict[str, Any]) -> ExamMark:
        exam = await self.retrieval.get_entity_or_404("exam", data["exam_id"])
        await self.retrieval.get_entity_or_404("student", data["student_id"])
        values = dict(data)
        values["grade"] = self.grade_mark(exam, data["marks_obtained"], data.get("grade"))
        return await self.data.create("exam_mark", values)

    async def update_mark(self, mark_id: UUID, data: Dict[str, Any]) -> ExamMark:
        mark = await self.retrieval.get_entity_or_404("exam_mark", mark_id)
        values = dict(data)
        if "marks_obtained" in data or "grade" in data:
            exam = await self.retrieval.get_entity_or_404("exam", mark.exam_id)
            marks = data.get("marks_obtained")
            if marks is None:
                marks = mark.marks_obtained
            values["marks_obtained"] = marks
            values["grade"] = self.grade_mark(exam, marks, data.get("grade"))
        return await self.data.update("exam_mark", mark_id, values)

    async def bulk_create_marks(
        self,
        exam_id: UUID,
        items: Sequence[Dict[str, Any]],
        recorded_by: Optional[UUID] = None,
    ) -> List[ExamMark]:
        """
        Record marks for many students of one exam. Every row is validated
        before anything is written; one bad row rejects the whole batch.
        """
        exam = await self.retrieval.get_entity_or_404("exam", exam_id)

        student_ids = [item["student_id"] for item in items]
        repeated = {sid for sid in student_ids if student_ids.count(sid) > 1}
        if repeated:
            raise DuplicateRecordError(
                "The same student appears more than once in the batch",
                entity_type="exam_mark",
                context={"student_ids": sorted(str(sid) for sid in repeated)},
            )

        found = set(
            (
                await self.session.execute(
                    select(Student.id).where(Student.id.in_(student_ids))
                )
            )
            .scalars()
            .all()
        )
        missing = [str(sid) for sid in student_ids if sid not in found]
        if missing:
            raise DataProcessingError(
                f"{len(missing)} student(s) not found",
                phase="validation",
                entity_type="exam_mark",
                validation_errors=[{"student_id": sid} for sid in missing],
            )

        existing = (
            (
                await self.session.execute(
                    select(ExamMark.student_id).where(
                        ExamMark.exam_id == exam_id,
                        ExamMark.student_id.in_(student_ids),
                    )
                )
            )
            .scalars()
            .all()
        )
        if existing:
            raise DuplicateRecordError(
                f"{len(existing)} student(s) already have marks for this exam",
                entity_type="exam_mark",
                context={"student_ids": sorted(str(sid) for sid in existing)},
            )

        rows = []
        for item in items:
            rows.append(
                {
                    "exam_id": exam_id,
                    "student_id": item["student_id"],
                    "marks_obtained": item["marks_obtained"],
                    "grade": self.grade_mark(
                        exam, item["marks_obtained"], item.get("grade")
                    ),
                    "remarks": item.get("remarks"),
                    "recorded_by": recorded_by,
                }
            )
        created = await self.data.create_many("exam_mark", rows)
        logger.info(f"Recorded {len(created)} marks for exam {exam_id}")
        return created

    async def check_total_marks(self, exam_id: UUID, total_marks: Any) -> None:
        """Refuse a new exam total below the highest mark already recorded."""
        stmt = select(func.max(ExamMark.marks_obtained)).where(
            ExamMark.exam_id == exam_id
        )
        highest = (await self.session.execute(stmt)).scalar_one_or_none()
        if highest is not None and to_decimal(highest) > to_decimal(total_marks):
            raise DataProcessingError(
                f"total_marks {total_marks} is below the highest recorded mark {highest}",
                phase="validation",
                entity_type="exam",
                context={"highest_mark": str(highest)},
            )

    async def regrade_exam(self, exam: Exam) -> int:
        """Re-derive every stored grade of ``exam`` from its current total."""
        stmt = select(ExamMark).where(ExamMark.exam_id == exam.id)
        marks = list((await self.session.execute(stmt)).scalars().all())
        for mark in marks:
            mark.grade = self.grade_mark(exam, mark.marks_obtained)
        await self.session.commit()
        logger.info(f"Regraded {len(marks)} marks for exam {exam.id}")
        return len(marks)

    # --- Statistics ---
    async def _mark_rows(
        self, filters: Optional[Dict[str, Any]] = None, group_by: Optional[str] = None
    ) -> List[Tuple[Any, ...]]:
        filters = filters or {}
        stmt = select(ExamMark, Exam).join(Exam, ExamMark.exam_id == Exam.id)
        if group_by == "class":
            stmt = stmt.add_columns(ClassRoom.name).join(
                ClassRoom, Exam.class_id == ClassRoom.id
            )
        elif group_by == "subject":
            stmt = stmt.add_columns(Subject.name).join(
                Subject, Exam.subject_id == Subject.id
            )

        for key in ("exam_id", "class_id", "subject_id", "term_id"):
            value = filters.get(key)
            if value is None:
                continue
            column = ExamMark.exam_id if key == "exam_id" else getattr(Exam, key)
            stmt = stmt.where(column == value)
        if filters.get("start_date"):
            stmt = stmt.where(Exam.exam_date >= filters["start_date"])
        if filters.get("end_date"):
            stmt = stmt.where(Exam.exam_date <= filters["end_date"])

        return list((await self.session.execute(stmt)).all())

    def _scored(self, mark: ExamMark, exam: Exam, weight: Any = None) -> ScoredRecord:
        return ScoredRecord(
            subject_id=exam.subject_id,
            marks=self._percentage(mark.marks_obtained, exam.total_marks),
            grade=mark.grade,
            weight=weight,
        )

    async def mark_statistics(self, filters: Optional[Dict[str, Any]] = None) -> Summary:
        rows = await self._mark_rows(filters)
        return self.aggregator.summarize([self._scored(mark, exam) for mark, exam in rows])

    async def performance_report(
        self, group_by: str, filters: Optional[Dict[str, Any]] = None
    ) -> PerformanceReport:
        if group_by not in GROUP_BY_OPTIONS:
            raise DataProcessingError(
                f"Cannot group by '{group_by}'; expected one of {', '.join(GROUP_BY_OPTIONS)}",
                phase="reporting",
            )
        groups: Dict[str, List[ScoredRecord]] = defaultdict(list)
        for mark, exam, group_name in await self._mark_rows(filters, group_by):
            groups[group_name].append(self._scored(mark, exam))
        return self.assembler.performance_report(groups)

    # --- GPA ---
    async def _term_records(self, student_id: UUID, term_id: UUID) -> List[ScoredRecord]:
        """One weighted record per mark of the student's non-cancelled exams."""
        stmt = (
            select(ExamMark, Exam, Subject.credit_units)
            .join(Exam, ExamMark.exam_id == Exam.id)
            .join(Subject, Exam.subject_id == Subject.id)
            .where(
                ExamMark.student_id == student_id,
                Exam.term_id == term_id,
                Exam.status != ExamStatus.cancelled,
            )
        )
        rows = (await self.session.execute(stmt)).all()
        return [self._scored(mark, exam, credit_units) for mark, exam, credit_units in rows]

    async def _gpa_history(
        self, student_id: UUID, academic_year_id: UUID
    ) -> List[StudentGPA]:
        stmt = select(StudentGPA).where(
            StudentGPA.student_id == student_id,
            StudentGPA.academic_year_id == academic_year_id,
        )
        return list((await self.session.execute(stmt)).scalars().all())

    @staticmethod
    def _gpa_records(rows: Sequence[StudentGPA]) -> List[GPARecord]:
        return [GPARecord(row.term_id, row.academic_year_id, row.gpa) for row in rows]

    async def _upsert_gpa(
        self,
        student_id: UUID,
        term_id: UUID,
        academic_year_id: UUID,
        gpa: Decimal,
        cgpa: Decimal,
        records: Sequence[ScoredRecord],
    ) -> StudentGPA:
        graded = {
            record.subject_id: record.weight or 1
            for record in records
            if record.grade or record.marks is not None
        }
        values = {
            "student_id": student_id,
            "term_id": term_id,
            "academic_year_id": academic_year_id,
            "gpa": gpa,
            "cgpa": cgpa,
            "total_credit_units": int(sum(graded.values())),
            "subject_count": len(graded),
        }
        stmt = select(StudentGPA).where(
            StudentGPA.student_id == student_id,
            StudentGPA.term_id == term_id,
        )
        existing = (await self.session.execute(stmt)).scalar_one_or_none()
        if existing is None:
            return await self.data.create("student_gpa", values)
        return await self.data.update("student_gpa", existing.id, values)

    async def compute_term_gpa(self, student_id: UUID, term_id: UUID) -> StudentGPA:
        """
        Compute and store the student's GPA for a term, together with the
        CGPA of the term's academic year including the new value.
        """
        await self.retrieval.get_entity_or_404("student", student_id)
        term = await self.retrieval.get_entity_or_404("term", term_id)
        year_id = term.academic_year_id

        records = await self._term_records(student_id, term_id)
        report = self.assembler.term_report(student_id, term_id, year_id, records)

        history = [
            record
            for record in self._gpa_records(await self._gpa_history(student_id, year_id))
            if record.term_id != term_id
        ]
        history.append(report.gpa_record)
        year = self.assembler.year_report(student_id, year_id, history)

        gpa_row = await self._upsert_gpa(
            student_id, term_id, year_id, report.gpa, year.cgpa, records
        )
        logger.info(
            f"Student {student_id} term {term_id}: gpa={report.gpa} cgpa={year.cgpa}"
        )
        return gpa_row

    async def cgpa(self, student_id: UUID, academic_year_id: UUID) -> Dict[str, Any]:
        await self.retrieval.get_entity_or_404("student", student_id)
        await self.retrieval.get_entity_or_404("academic_year", academic_year_id)
        rows = await self._gpa_history(student_id, academic_year_id)
        year = self.assembler.year_report(
            student_id, academic_year_id, self._gpa_records(rows)
        )
        return {
            "student_id": student_id,
            "academic_year_id": academic_year_id,
            "cgpa": year.cgpa,
            "term_count": year.term_count,
            "remark": year.remark.label,
            "remark_message": year.remark.message,
        }

    async def _stored_gpas(
        self, term_id: Optional[UUID] = None, academic_year_id: Optional[UUID] = None
    ) -> List[Decimal]:
        stmt = select(StudentGPA.gpa)
        if term_id:
            stmt = stmt.where(StudentGPA.term_id == term_id)
        if academic_year_id:
            stmt = stmt.where(StudentGPA.academic_year_id == academic_year_id)
        return list((await self.session.execute(stmt)).scalars().all())

    async def gpa_distribution(
        self, term_id: Optional[UUID] = None, academic_year_id: Optional[UUID] = None
    ) -> List[TierShare]:
        return self.aggregator.gpa_distribution(
            await self._stored_gpas(term_id, academic_year_id)
        )

    async def gpa_statistics(
        self, term_id: Optional[UUID] = None, academic_year_id: Optional[UUID] = None
    ) -> GPAStatistics:
        return self.aggregator.gpa_statistics(
            await self._stored_gpas(term_id, academic_year_id)
        )

    async def performers(
        self,
        term_id: UUID,
        limit: int = 10,
        lowest: bool = False,
    ) -> List[Dict[str, Any]]:
        """Students with the highest (or lowest) stored GPA for a term."""
        order = StudentGPA.gpa.asc() if lowest else StudentGPA.gpa.desc()
        stmt = (
            select(StudentGPA, Student)
            .join(Student, StudentGPA.student_id == Student.id)
            .where(StudentGPA.term_id == term_id)
            .order_by(order, Student.last_name, Student.first_name)
            .limit(limit)
        )
        rows = (await self.session.execute(stmt)).all()
        return [
            {
                "student_id": student.id,
                "student_name": student.full_name,
                "admission_number": student.admission_number,
                "gpa": gpa_row.gpa,
                "cgpa": gpa_row.cgpa,
            }
            for gpa_row, student in rows
        ]

    # --- Report cards ---
    async def generate_report_card(
        self,
        student_id: UUID,
        class_id: UUID,
        term_id: UUID,
        issued_on: Optional[date] = None,
    ) -> Tuple[ReportCard, Summary, bool]:
        """
        Create the report card for a student's term, or return the one already
        issued. The third element tells whether a new card was written.
        """
        await self.retrieval.get_entity_or_404("student", student_id)
        await self.retrieval.get_entity_or_404("class", class_id)
        term = await self.retrieval.get_entity_or_404("term", term_id)
        year_id = term.academic_year_id

        records = await self._term_records(student_id, term_id)

        stmt = select(ReportCard).where(
            ReportCard.student_id == student_id,
            ReportCard.class_id == class_id,
            ReportCard.term_id == term_id,
            ReportCard.academic_year_id == year_id,
        )
        existing = (await self.session.execute(stmt)).scalar_one_or_none()
        if existing is not None:
            logger.debug(f"Report card {existing.id} already issued")
            return existing, self.aggregator.summarize(records), False

        prior = self._gpa_records(await self._gpa_history(student_id, year_id))
        draft = self.assembler.report_card(
            student_id,
            class_id,
            term_id,
            year_id,
            records,
            prior_gpa_records=prior,
            issued_on=issued_on,
        )

        await self._upsert_gpa(
            student_id, term_id, year_id, draft.gpa, draft.cgpa, records
        )
        card = await self.data.create(
            "report_card",
            {
                "student_id": student_id,
                "class_id": class_id,
                "term_id": term_id,
                "academic_year_id": year_id,
                "gpa": draft.gpa,
                "cgpa": draft.cgpa,
                "remarks": draft.remarks,
                "issued_date": draft.issued_date,
                "format": self.report_format,
            },
        )
        return card, draft.summary, True

    async def report_cards_for_student(self, student_id: UUID) -> List[ReportCard]:
        await self.retrieval.get_entity_or_404("student", student_id)
        stmt = (
            select(ReportCard)
            .where(ReportCard.student_id == student_id)
            .order_by(ReportCard.issued_date.desc(), ReportCard.created_at.desc())
        )
        return list((await self.session.execute(stmt)).scalars().all())
