# academic_core/core/grading.py

"""
Academic score aggregation.
Derives letter grades from marks, term GPA from subject grades, CGPA from term
GPAs and summary statistics from collections of scores.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Hashable, Iterable, List, Optional, Sequence

from ..config import (
    AcademicCoreConfig,
    GradeThresholdTable,
    RemarkTable,
    RemarkTier,
    config as default_config,
    get_logger,
    to_decimal,
)
from ..exceptions import OutOfRangeError, UnknownGradeError

logger = get_logger("grading")

ZERO = Decimal("0")


@dataclass(frozen=True)
class ScoredRecord:
    subject_id: Hashable
    marks: Optional[Decimal] = None
    grade: Optional[str] = None
    weight: Optional[Decimal] = None

    def __post_init__(self):
        if self.marks is not None:
            object.__setattr__(self, "marks", to_decimal(self.marks))
        if self.weight is not None:
            object.__setattr__(self, "weight", to_decimal(self.weight))


@dataclass(frozen=True)
class GPARecord:
    term_id: Hashable
    academic_year_id: Hashable
    gpa: Decimal

    def __post_init__(self):
        object.__setattr__(self, "gpa", to_decimal(self.gpa))


@dataclass
class Summary:
    """
    Aggregate view over a collection of scored records.

    ``count`` is the number of records considered; a ``count`` of zero marks
    the documented empty default (pass rate 0, no average/highest/lowest).
    """

    count: int = 0
    pass_count: int = 0
    fail_count: int = 0
    pass_rate: Decimal = ZERO
    average: Optional[Decimal] = None
    highest: Optional[Decimal] = None
    lowest: Optional[Decimal] = None
    grade_distribution: Dict[str, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TierShare:
    label: str
    count: int
    percentage: Decimal


@dataclass
class GPAStatistics:
    total: int = 0
    average: Decimal = ZERO
    highest: Optional[Decimal] = None
    lowest: Optional[Decimal] = None


class GradeAggregator:
    """
    Pure grading functions configured once with a grade and remark table.

    Every public method validates its whole input before computing anything,
    so an ``OutOfRangeError`` never comes with a partial result.
    """

    def __init__(self, config: Optional[AcademicCoreConfig] = None):
        self.config = config or default_config

    @property
    def grade_table(self) -> GradeThresholdTable:
        return self.config.grade_table

    @property
    def remark_table(self) -> RemarkTable:
        return self.config.remark_table

    def _round(self, value: Decimal) -> Decimal:
        return value.quantize(self.config.quantum, rounding=ROUND_HALF_UP)

    # --- Validation ---
    def validate_marks(self, marks: Any, table: Optional[GradeThresholdTable] = None):
        table = table or self.grade_table
        value = to_decimal(marks)
        if value < 0 or value > table.max_score:
            raise OutOfRangeError("marks", value, 0, table.max_score)
        return value

    def validate_gpa(self, gpa: Any, maximum: Optional[Decimal] = None) -> Decimal:
        maximum = self.config.max_gpa if maximum is None else maximum
        value = to_decimal(gpa)
        if value < 0 or value > maximum:
            raise OutOfRangeError("gpa", value, 0, maximum)
        return value

    # --- Letter grades ---
    def grade_for(self, marks: Any, table: Optional[GradeThresholdTable] = None) -> str:
        """Return the letter of the highest band whose minimum the marks reach."""
        table = table or self.grade_table
        value = self.validate_marks(marks, table)
        for band in table.bands:
            if band.min_score <= value:
                return band.letter
        # unreachable: the lowest band starts at 0 and negatives are rejected
        raise OutOfRangeError("marks", value, 0, table.max_score)

    def _resolve_grade(
        self, record: ScoredRecord, table: GradeThresholdTable
    ) -> Optional[str]:
        if record.grade:
            return record.grade
        if record.marks is not None:
            return self.grade_for(record.marks, table)
        return None

    # --- Summaries ---
    def summarize(
        self,
        records: Sequence[ScoredRecord],
        table: Optional[GradeThresholdTable] = None,
    ) -> Summary:
        """
        Count, pass/fail split, pass rate, average/highest/lowest marks and a
        per-letter distribution. Records without marks are counted but do not
        feed the mark statistics; a record with neither marks nor grade fails.
        """
        table = table or self.grade_table
        for record in records:
            if record.marks is not None:
                self.validate_marks(record.marks, table)

        count = len(records)
        if count == 0:
            return Summary()

        grades = [self._resolve_grade(record, table) for record in records]
        pass_count = sum(1 for grade in grades if table.is_passing(grade))
        marks = [record.marks for record in records if record.marks is not None]

        summary = Summary(
            count=count,
            pass_count=pass_count,
            fail_count=count - pass_count,
            pass_rate=self._round(Decimal(pass_count * 100) / Decimal(count)),
            grade_distribution=dict(
                Counter(grade for grade in grades if grade is not None)
            ),
        )
        if marks:
            summary.average = self._round(sum(marks, ZERO) / Decimal(len(marks)))
            summary.highest = max(marks)
            summary.lowest = min(marks)
        return summary

    # --- GPA ---
    def term_gpa(
        self,
        records: Sequence[ScoredRecord],
        table: Optional[GradeThresholdTable] = None,
    ) -> Decimal:
        """
        Weighted mean of grade points for one term. Weight defaults to 1
        (credit units when supplied). Records with neither marks nor grade are
        left out; no graded records gives 0.
        """
        table = table or self.grade_table
        for record in records:
            if record.marks is not None:
                self.validate_marks(record.marks, table)
            if record.weight is not None and record.weight <= 0:
                raise OutOfRangeError(
                    "weight", record.weight, message="weight must be positive"
                )
            if record.grade and table.band_for_letter(record.grade) is None:
                raise UnknownGradeError(record.grade)

        total_points = ZERO
        total_weight = ZERO
        for record in records:
            grade = self._resolve_grade(record, table)
            if grade is None:
                continue
            band = table.band_for_letter(grade)
            weight = record.weight if record.weight is not None else Decimal(1)
            total_points += band.grade_point * weight
            total_weight += weight

        if total_weight == 0:
            return self._round(ZERO)
        return self._round(total_points / total_weight)

    def cgpa(
        self,
        records: Iterable[GPARecord],
        academic_year_id: Optional[Hashable] = None,
    ) -> Decimal:
        """
        Mean GPA across the records in scope, rounded. Returns 0 for an empty
        scope; callers that need to tell "no terms yet" from a real zero should
        check the record count.
        """
        scoped = [
            record
            for record in records
            if academic_year_id is None or record.academic_year_id == academic_year_id
        ]
        for record in scoped:
            self.validate_gpa(record.gpa)
        if not scoped:
            return self._round(ZERO)
        total = sum((record.gpa for record in scoped), ZERO)
        return self._round(total / Decimal(len(scoped)))

    def remark_for(
        self, gpa: Any, table: Optional[RemarkTable] = None
    ) -> RemarkTier:
        table = table or self.remark_table
        value = self.validate_gpa(gpa, table.max_gpa)
        for tier in table.tiers:
            if tier.min_gpa <= value:
                return tier
        raise OutOfRangeError("gpa", value, 0, table.max_gpa)

    def gpa_distribution(
        self, gpas: Sequence[Any], table: Optional[RemarkTable] = None
    ) -> List[TierShare]:
        """Count and share of GPAs per remark tier, highest tier first."""
        table = table or self.remark_table
        values = [self.validate_gpa(gpa, table.max_gpa) for gpa in gpas]
        counts = Counter(self.remark_for(value, table).label for value in values)
        total = len(values)
        return [
            TierShare(
                label=tier.label,
                count=counts.get(tier.label, 0),
                percentage=(
                    self._round(Decimal(counts.get(tier.label, 0) * 100) / total)
                    if total
                    else self._round(ZERO)
                ),
            )
            for tier in table.tiers
        ]

    def gpa_statistics(self, gpas: Sequence[Any]) -> GPAStatistics:
        values = [self.validate_gpa(gpa) for gpa in gpas]
        if not values:
            return GPAStatistics(average=self._round(ZERO))
        return GPAStatistics(
            total=len(values),
            average=self._round(sum(values, ZERO) / Decimal(len(values))),
            highest=max(values),
            lowest=min(values),
        )


_aggregator = GradeAggregator()


def grade_for(marks: Any, table: Optional[GradeThresholdTable] = None) -> str:
    return _aggregator.grade_for(marks, table)


def summarize(
    records: Sequence[ScoredRecord], table: Optional[GradeThresholdTable] = None
) -> Summary:
    return _aggregator.summarize(records, table)


def cgpa(
    records: Iterable[GPARecord], academic_year_id: Optional[Hashable] = None
) -> Decimal:
    return _aggregator.cgpa(records, academic_year_id)


def remark_for(gpa: Any, table: Optional[RemarkTable] = None) -> RemarkTier:
    return _aggregator.remark_for(gpa, table)
