# academic_core/core/reports.py

"""
Report assembly.
Combines grade summaries, GPA and CGPA into the objects the web layer
persists (GPA records, report cards, performance reports). No algorithm of
its own: errors are the aggregator's, empty inputs give its documented
defaults.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Hashable, List, Mapping, Optional, Sequence

from .grading import GPARecord, GradeAggregator, ScoredRecord, Summary
from ..config import RemarkTier, get_logger

logger = get_logger("reports")


@dataclass
class TermReport:
    student_id: Hashable
    summary: Summary
    gpa_record: GPARecord

    @property
    def gpa(self) -> Decimal:
        return self.gpa_record.gpa


@dataclass
class YearReport:
    student_id: Hashable
    academic_year_id: Hashable
    cgpa: Decimal
    remark: RemarkTier
    term_count: int

    @property
    def has_terms(self) -> bool:
        return self.term_count > 0


@dataclass
class ReportCardDraft:
    student_id: Hashable
    class_id: Hashable
    term_id: Hashable
    academic_year_id: Hashable
    gpa: Decimal
    cgpa: Decimal
    remarks: str
    remark_label: str
    issued_date: date
    summary: Summary
    format: str = "Digital"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PerformanceReport:
    overall: Summary
    groups: Dict[str, Summary] = field(default_factory=dict)


class ReportAssembler:
    """Builds report objects from scored records and GPA history."""

    def __init__(self, aggregator: Optional[GradeAggregator] = None):
        self.aggregator = aggregator or GradeAggregator()

    def term_report(
        self,
        student_id: Hashable,
        term_id: Hashable,
        academic_year_id: Hashable,
        records: Sequence[ScoredRecord],
    ) -> TermReport:
        summary = self.aggregator.summarize(records)
        gpa = self.aggregator.term_gpa(records)
        return TermReport(
            student_id=student_id,
            summary=summary,
            gpa_record=GPARecord(
                term_id=term_id, academic_year_id=academic_year_id, gpa=gpa
            ),
        )

    def year_report(
        self,
        student_id: Hashable,
        academic_year_id: Hashable,
        gpa_records: Sequence[GPARecord],
    ) -> YearReport:
        in_year = [r for r in gpa_records if r.academic_year_id == academic_year_id]
        cgpa = self.aggregator.cgpa(in_year)
        return YearReport(
            student_id=student_id,
            academic_year_id=academic_year_id,
            cgpa=cgpa,
            remark=self.aggregator.remark_for(cgpa),
            term_count=len(in_year),
        )

    def report_card(
        self,
        student_id: Hashable,
        class_id: Hashable,
        term_id: Hashable,
        academic_year_id: Hashable,
        records: Sequence[ScoredRecord],
        prior_gpa_records: Sequence[GPARecord] = (),
        issued_on: Optional[date] = None,
    ) -> ReportCardDraft:
        """
        Term GPA from this term's records; CGPA over the year's terms with
        this term's freshly computed GPA replacing any stored value for it.
        The remark follows the term GPA.
        """
        term = self.term_report(student_id, term_id, academic_year_id, records)
        history: List[GPARecord] = [
            r for r in prior_gpa_records if r.term_id != term_id
        ]
        history.append(term.gpa_record)
        cgpa = self.aggregator.cgpa(history, academic_year_id=academic_year_id)
        remark = self.aggregator.remark_for(term.gpa)

        logger.debug(
            f"Report card for student {student_id} term {term_id}: "
            f"gpa={term.gpa} cgpa={cgpa}"
        )
        return ReportCardDraft(
            student_id=student_id,
            class_id=class_id,
            term_id=term_id,
            academic_year_id=academic_year_id,
            gpa=term.gpa,
            cgpa=cgpa,
            remarks=remark.message or remark.label,
            remark_label=remark.label,
            issued_date=issued_on or date.today(),
            summary=term.summary,
        )

    def performance_report(
        self, groups: Mapping[str, Sequence[ScoredRecord]]
    ) -> PerformanceReport:
        """Per-group summaries (by class, by subject) plus the overall summary."""
        everything: List[ScoredRecord] = [
            record for records in groups.values() for record in records
        ]
        # validate everything up front so a bad mark in any group fails the report
        overall = self.aggregator.summarize(everything)
        return PerformanceReport(
            overall=overall,
            groups={
                key: self.aggregator.summarize(records)
                for key, records in groups.items()
            },
        )
