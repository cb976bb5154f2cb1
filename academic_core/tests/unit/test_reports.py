# academic_core/tests/unit/test_reports.py

"""
Tests for report assembly.
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from academic_core.core.grading import GPARecord, ScoredRecord
from academic_core.core.reports import ReportAssembler
from academic_core.exceptions import OutOfRangeError


@pytest.fixture
def assembler():
    return ReportAssembler()


@pytest.fixture
def student_id():
    return uuid4()


class TestTermReport:
    def test_summary_and_gpa(self, assembler, student_id):
        records = [
            ScoredRecord(subject_id="math", marks=95),
            ScoredRecord(subject_id="english", marks=65),
        ]

        report = assembler.term_report(student_id, "t1", "y1", records)

        assert report.summary.count == 2
        assert report.summary.pass_rate == Decimal("100.00")
        # (4.0 + 2.8) / 2
        assert report.gpa == Decimal("3.40")
        assert report.gpa_record.term_id == "t1"
        assert report.gpa_record.academic_year_id == "y1"

    def test_empty_term(self, assembler, student_id):
        report = assembler.term_report(student_id, "t1", "y1", [])
        assert report.summary.is_empty
        assert report.gpa == Decimal("0.00")


class TestYearReport:
    def test_only_counts_terms_in_year(self, assembler, student_id):
        records = [
            GPARecord("t1", "y1", "3.2"),
            GPARecord("t2", "y1", "3.6"),
            GPARecord("t3", "y1", "3.9"),
            GPARecord("t9", "y0", "1.0"),
        ]

        report = assembler.year_report(student_id, "y1", records)

        assert report.cgpa == Decimal("3.57")
        assert report.term_count == 3
        assert report.remark.label == "Good"

    def test_no_terms(self, assembler, student_id):
        report = assembler.year_report(student_id, "y1", [])
        assert not report.has_terms
        assert report.cgpa == Decimal("0.00")


class TestReportCard:
    def test_cgpa_includes_current_term(self, assembler, student_id):
        prior = [GPARecord("t1", "y1", "3.0")]
        records = [ScoredRecord(subject_id="math", grade="A")]  # 3.6

        card = assembler.report_card(
            student_id,
            "class-1",
            "t2",
            "y1",
            records,
            prior_gpa_records=prior,
            issued_on=date(2024, 4, 1),
        )

        assert card.gpa == Decimal("3.60")
        assert card.cgpa == Decimal("3.30")
        assert card.remark_label == "Good"
        assert card.remarks.startswith("Good performance")
        assert card.format == "Digital"
        assert card.issued_date == date(2024, 4, 1)

    def test_stale_gpa_for_same_term_is_replaced(self, assembler, student_id):
        prior = [GPARecord("t1", "y1", "1.0")]
        records = [ScoredRecord(subject_id="math", grade="A+")]

        card = assembler.report_card(student_id, "c", "t1", "y1", records, prior)

        assert card.cgpa == Decimal("4.00")
        assert card.remark_label == "Outstanding"

    def test_invalid_marks_propagate(self, assembler, student_id):
        with pytest.raises(OutOfRangeError):
            assembler.report_card(
                student_id, "c", "t1", "y1", [ScoredRecord(subject_id="x", marks=150)]
            )

    def test_to_dict(self, assembler, student_id):
        card = assembler.report_card(student_id, "c", "t1", "y1", [])
        payload = card.to_dict()
        assert payload["format"] == "Digital"
        assert payload["summary"]["count"] == 0


class TestPerformanceReport:
    def test_groups_and_overall(self, assembler):
        report = assembler.performance_report(
            {
                "JSS1": [ScoredRecord("math", marks=90), ScoredRecord("math", marks=30)],
                "JSS2": [ScoredRecord("math", marks=60)],
            }
        )

        assert report.overall.count == 3
        assert report.overall.pass_count == 2
        assert report.groups["JSS1"].pass_rate == Decimal("50.00")
        assert report.groups["JSS2"].average == Decimal("60.00")

    def test_bad_mark_in_any_group_fails(self, assembler):
        with pytest.raises(OutOfRangeError):
            assembler.performance_report(
                {"a": [ScoredRecord("x", marks=50)], "b": [ScoredRecord("y", marks=-5)]}
            )

    def test_no_groups(self, assembler):
        report = assembler.performance_report({})
        assert report.overall.is_empty
        assert report.groups == {}
