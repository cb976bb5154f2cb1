# backend/app/tests/unit/test_settings.py

from decimal import Decimal

import pytest

from app.config import Settings, get_settings, validate_settings
from app.core.exceptions import (
    DataProcessingError,
    EntityNotFoundError,
    SchedulingConflictError,
)


class TestSettings:
    def test_testing_environment_is_selected(self):
        settings = get_settings()

        assert type(settings).__name__ == "TestingSettings"
        assert settings.DATABASE_URL.startswith("sqlite")

    def test_comma_separated_origins(self):
        settings = Settings(CORS_ORIGINS="http://a.test, http://b.test,")

        assert settings.CORS_ORIGINS == ["http://a.test", "http://b.test"]

    def test_default_grading_policy(self):
        config = Settings().grading_config()

        assert config.grade_table.letters[0] == "A+"
        assert config.max_gpa == Decimal("4.0")
        assert config.decimal_places == 2

    def test_grading_policy_from_json(self):
        settings = Settings(
            GRADE_BANDS='[{"min_score": 0, "letter": "F", "is_passing": false},'
            ' {"min_score": 10, "letter": "P", "grade_point": 5}]',
            MAX_SCORE=20,
            REMARK_TIERS=[{"min_gpa": 0, "label": "Any"}],
            MAX_GPA=5,
        )

        config = settings.grading_config()

        assert config.grade_table.letters == ["P", "F"]
        assert config.grade_table.max_score == Decimal("20")
        assert config.max_gpa == Decimal("5")

    def test_validate_settings_reports_issues(self):
        settings = Settings(
            DEFAULT_PAGE_SIZE=500,
            GRADE_BANDS=[{"min_score": 50, "letter": "P"}],
        )

        issues = validate_settings(settings)

        assert "DEFAULT_PAGE_SIZE must not exceed MAX_PAGE_SIZE" in issues
        assert any(issue.startswith("Invalid grading policy") for issue in issues)

    def test_sqlite_is_refused_in_production(self):
        settings = Settings(ENVIRONMENT="production", DATABASE_URL="sqlite:///x.db")

        assert "SQLite is not supported in production" in validate_settings(settings)

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            Settings(MAX_PAGE_SIZE=0)


class TestAppErrors:
    def test_not_found_message_and_context(self):
        error = EntityNotFoundError("academic_year", "abc")

        assert error.message == "Academic year abc not found"
        body = error.to_dict()["error"]
        assert body["code"] == "entity_not_found"
        assert body["status_code"] == 404
        assert body["context"] == {"entity_type": "academic_year", "entity_id": "abc"}

    def test_conflict_error_carries_conflicts(self):
        error = SchedulingConflictError(
            conflicts=[{"resource_type": "class"}], entity_type="exam"
        )

        body = error.to_dict()["error"]
        assert body["conflicts"] == [{"resource_type": "class"}]
        assert body["context"]["conflict_count"] == 1

    def test_processing_error_lists_validation_errors(self):
        error = DataProcessingError(
            "bad rows", phase="validation", validation_errors=[{"row": 2}]
        ).with_context(batch="b1", ignored=None)

        body = error.to_dict()["error"]
        assert body["validation_errors"] == [{"row": 2}]
        assert body["context"] == {"phase": "validation", "batch": "b1"}
        assert "DataProcessingError(data_processing_error)" in str(error)
