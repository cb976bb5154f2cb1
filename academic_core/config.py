# academic_core/config.py

"""
Configuration module for the academic core.
Grading policy (grade bands, remark tiers, GPA ceiling) is plain configuration
supplied to the core at call time; changing policy means supplying a different
table, not changing code.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from decimal import Decimal
import logging


def to_decimal(value: Any) -> Decimal:
    """Coerce ints, floats, strings and Decimals to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class GradeBand:
    """One row of a grade threshold table."""

    min_score: Decimal
    letter: str
    grade_point: Decimal
    is_passing: bool = True

    def __post_init__(self):
        object.__setattr__(self, "min_score", to_decimal(self.min_score))
        object.__setattr__(self, "grade_point", to_decimal(self.grade_point))


@dataclass(frozen=True)
class GradeThresholdTable:
    """
    Ordered minimum-score -> letter grade mapping.

    Bands are stored highest threshold first regardless of the order they are
    supplied in, so lookups can stop at the first band whose minimum is met.
    The lowest band must start at zero so every valid mark receives a grade.
    """

    bands: Tuple[GradeBand, ...]
    max_score: Decimal = Decimal("100")

    def __post_init__(self):
        if not self.bands:
            raise ValueError("A grade table needs at least one band")
        ordered = tuple(sorted(self.bands, key=lambda b: b.min_score, reverse=True))
        thresholds = [band.min_score for band in ordered]
        if len(set(thresholds)) != len(thresholds):
            raise ValueError("Grade thresholds must be unique")
        letters = [band.letter for band in ordered]
        if len(set(letters)) != len(letters):
            raise ValueError("Grade letters must be unique")
        if ordered[-1].min_score != 0:
            raise ValueError("The lowest grade band must start at 0")
        max_score = to_decimal(self.max_score)
        if ordered[0].min_score > max_score:
            raise ValueError("A grade threshold exceeds the table's max score")
        object.__setattr__(self, "bands", ordered)
        object.__setattr__(self, "max_score", max_score)

    @property
    def letters(self) -> List[str]:
        return [band.letter for band in self.bands]

    @property
    def failing_letters(self) -> List[str]:
        return [band.letter for band in self.bands if not band.is_passing]

    def band_for_letter(self, letter: str) -> Optional[GradeBand]:
        for band in self.bands:
            if band.letter == letter:
                return band
        return None

    def is_passing(self, letter: Optional[str]) -> bool:
        """Unknown or missing letters never count as a pass."""
        if not letter:
            return False
        band = self.band_for_letter(letter)
        return band is not None and band.is_passing

    def rank(self, letter: str) -> int:
        """Position of a letter from the bottom of the table (0 = lowest)."""
        return len(self.bands) - 1 - self.letters.index(letter)

    @classmethod
    def from_mapping(
        cls,
        thresholds: Dict[Any, str],
        grade_points: Optional[Dict[str, Any]] = None,
        failing: Sequence[str] = ("F",),
        max_score: Any = 100,
    ) -> "GradeThresholdTable":
        """Build a table from the compact ``{90: "A+", 80: "A", ...}`` form."""
        grade_points = grade_points or {}
        bands = tuple(
            GradeBand(
                min_score=to_decimal(minimum),
                letter=letter,
                grade_point=to_decimal(grade_points.get(letter, 0)),
                is_passing=letter not in failing,
            )
            for minimum, letter in thresholds.items()
        )
        return cls(bands=bands, max_score=to_decimal(max_score))

    @classmethod
    def from_dicts(
        cls, rows: List[Dict[str, Any]], max_score: Any = 100
    ) -> "GradeThresholdTable":
        """Build a table from JSON-style rows (settings, database rows)."""
        bands = tuple(
            GradeBand(
                min_score=row["min_score"],
                letter=row["letter"],
                grade_point=row.get("grade_point", 0),
                is_passing=row.get("is_passing", True),
            )
            for row in rows
        )
        return cls(bands=bands, max_score=to_decimal(max_score))


@dataclass(frozen=True)
class RemarkTier:
    """A coarse performance category derived from GPA."""

    min_gpa: Decimal
    label: str
    message: str = ""

    def __post_init__(self):
        object.__setattr__(self, "min_gpa", to_decimal(self.min_gpa))


@dataclass(frozen=True)
class RemarkTable:
    """Ordered GPA -> remark tiers, evaluated highest first."""

    tiers: Tuple[RemarkTier, ...]
    max_gpa: Decimal = Decimal("4.0")

    def __post_init__(self):
        if not self.tiers:
            raise ValueError("A remark table needs at least one tier")
        ordered = tuple(sorted(self.tiers, key=lambda t: t.min_gpa, reverse=True))
        if ordered[-1].min_gpa != 0:
            raise ValueError("The lowest remark tier must start at 0")
        object.__setattr__(self, "tiers", ordered)
        object.__setattr__(self, "max_gpa", to_decimal(self.max_gpa))

    @classmethod
    def from_dicts(
        cls, rows: List[Dict[str, Any]], max_gpa: Any = "4.0"
    ) -> "RemarkTable":
        tiers = tuple(
            RemarkTier(
                min_gpa=row["min_gpa"],
                label=row["label"],
                message=row.get("message", ""),
            )
            for row in rows
        )
        return cls(tiers=tiers, max_gpa=to_decimal(max_gpa))


DEFAULT_GRADE_TABLE = GradeThresholdTable.from_mapping(
    {90: "A+", 80: "A", 70: "B+", 60: "B", 50: "C+", 40: "C", 0: "F"},
    grade_points={
        "A+": "4.0",
        "A": "3.6",
        "B+": "3.2",
        "B": "2.8",
        "C+": "2.4",
        "C": "2.0",
        "F": "0.0",
    },
    failing=("F",),
)

DEFAULT_REMARK_TABLE = RemarkTable(
    tiers=(
        RemarkTier(
            "3.8",
            "Outstanding",
            "Outstanding performance! Keep up the excellent work.",
        ),
        RemarkTier(
            "3.0",
            "Good",
            "Good performance. Continue to work hard and improve further.",
        ),
        RemarkTier(
            "2.0",
            "Satisfactory",
            "Satisfactory performance. Focus on areas that need improvement.",
        ),
        RemarkTier(
            "0",
            "Needs improvement",
            "Performance needs improvement. Please seek additional support and work harder.",
        ),
    ),
    max_gpa=Decimal("4.0"),
)


@dataclass
class AcademicCoreConfig:
    """Main configuration for the academic core"""

    grade_table: GradeThresholdTable = field(
        default_factory=lambda: DEFAULT_GRADE_TABLE
    )
    remark_table: RemarkTable = field(default_factory=lambda: DEFAULT_REMARK_TABLE)

    # Decimal places for pass rates, averages, GPA and CGPA
    decimal_places: int = 2

    enable_logging: bool = True
    log_level: str = "INFO"

    @property
    def max_gpa(self) -> Decimal:
        return self.remark_table.max_gpa

    @property
    def quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.decimal_places)


# Global configuration instance
config = AcademicCoreConfig()


def get_logger(name: str) -> logging.Logger:
    """Get configured logger for the academic core"""
    logger = logging.getLogger(f"academic_core.{name}")
    if config.enable_logging and not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, config.log_level))
    return logger
