"""
Unit tests for exception hierarchy.

Tests the csv-insights exception classes and error handling mechanisms.
"""

import pytest
from csv_insights.core.exceptions import (
    CsvInsightsException,
    ErrorSeverity,
    ConfigError,
    YAMLSizeError,
    ConfigValidationError,
    DataLoadError,
    FileNotFoundError,
    ParseError,
    EmptyInputError,
    ParseTimeoutError,
    ProfilerError,
    ColumnNotFoundError
)


@pytest.mark.unit
class TestErrorSeverity:
    """Test error severity enum."""

    def test_severity_values(self):
        """Test that all severity levels exist."""
        assert ErrorSeverity.FATAL.value == "fatal"
        assert ErrorSeverity.CRITICAL.value == "critical"
        assert ErrorSeverity.RECOVERABLE.value == "recoverable"
        assert ErrorSeverity.WARNING.value == "warning"


@pytest.mark.unit
class TestCsvInsightsException:
    """Test base exception class."""

    def test_basic_exception(self):
        """Test basic exception creation."""
        exc = CsvInsightsException("Test error")

        assert str(exc) == "Test error"
        assert exc.message == "Test error"
        assert exc.severity == ErrorSeverity.RECOVERABLE
        assert exc.details == {}
        assert exc.original_exception is None

    def test_exception_with_original(self):
        """Test exception wrapping another exception."""
        original = ValueError("Original error")
        exc = CsvInsightsException("Wrapped error", original_exception=original)

        assert exc.original_exception is original

    def test_exception_serialization(self):
        """Test to_dict() serialization."""
        exc = CsvInsightsException(
            "Test error",
            severity=ErrorSeverity.CRITICAL,
            details={'column': 'price'},
            original_exception=ValueError("Original")
        )

        assert exc.to_dict() == {
            'type': 'CsvInsightsException',
            'message': 'Test error',
            'severity': 'critical',
            'details': {'column': 'price'},
            'original_error': 'Original'
        }


@pytest.mark.unit
class TestConfigErrors:
    """Test configuration errors."""

    def test_config_error_is_fatal(self):
        """Test that configuration errors stop all processing."""
        exc = ConfigError("Bad config", field="insights")

        assert exc.severity == ErrorSeverity.FATAL
        assert exc.field == "insights"
        assert exc.details == {'field': 'insights'}

    def test_yaml_size_error(self):
        """Test YAML size error details."""
        exc = YAMLSizeError("Too large", file_size=2000, max_size=1000)

        assert isinstance(exc, ConfigError)
        assert exc.details['file_size'] == 2000
        assert exc.details['max_size'] == 1000

    def test_config_validation_error(self):
        """Test config validation error details."""
        exc = ConfigValidationError(
            "Invalid value",
            field="profiler.numeric_ratio",
            expected="number in (0, 1]",
            actual="1.5"
        )

        assert isinstance(exc, ConfigError)
        assert exc.field == "profiler.numeric_ratio"
        assert exc.details['expected'] == "number in (0, 1]"
        assert exc.details['actual'] == "1.5"


@pytest.mark.unit
class TestDataLoadErrors:
    """Test data loading errors."""

    def test_data_load_error_is_critical(self):
        """Test that load errors are critical and keep their source."""
        exc = DataLoadError("Cannot read", source="sales.csv", line_number=4)

        assert exc.severity == ErrorSeverity.CRITICAL
        assert exc.source == "sales.csv"
        assert exc.line_number == 4
        assert exc.details == {'source': 'sales.csv', 'line_number': 4}

    def test_file_not_found(self):
        """Test package FileNotFoundError."""
        exc = FileNotFoundError("missing.csv")

        assert isinstance(exc, DataLoadError)
        assert exc.source == "missing.csv"
        assert "missing.csv" in exc.message

    def test_parse_error_field_counts(self):
        """Test parse error carries expected and actual field counts."""
        exc = ParseError(
            "Row has 4 fields, expected 3",
            source="sales.csv",
            line_number=3,
            expected_fields=3,
            actual_fields=4
        )

        assert isinstance(exc, DataLoadError)
        assert exc.line_number == 3
        assert exc.expected_fields == 3
        assert exc.actual_fields == 4
        assert exc.details['expected_fields'] == 3
        assert exc.details['actual_fields'] == 4

    def test_empty_input_keeps_columns(self):
        """Test empty input error reports the header it found."""
        exc = EmptyInputError("orders.csv", columns=["id", "total"])

        assert isinstance(exc, DataLoadError)
        assert exc.columns == ["id", "total"]
        assert exc.details['columns'] == ["id", "total"]
        assert "id, total" in exc.message

    def test_empty_input_without_columns(self):
        """Test empty input error for completely empty text."""
        exc = EmptyInputError("<text>")

        assert exc.columns == []

    def test_parse_timeout(self):
        """Test parse timeout error."""
        exc = ParseTimeoutError("big.csv", timeout=2.5)

        assert isinstance(exc, DataLoadError)
        assert exc.timeout == 2.5
        assert "2.5s" in exc.message


@pytest.mark.unit
class TestProfilerErrors:
    """Test profiler errors."""

    def test_profiler_error_is_recoverable(self):
        """Test profiler errors leave the dataset usable."""
        exc = ProfilerError("Failed", operation="statistics", column="city")

        assert exc.severity == ErrorSeverity.RECOVERABLE
        assert exc.details == {'operation': 'statistics', 'column': 'city'}

    def test_column_not_found(self):
        """Test column not found lists the available columns."""
        exc = ColumnNotFoundError("email", ["id", "name"])

        assert isinstance(exc, ProfilerError)
        assert "email" in exc.message
        assert exc.details['available_columns'] == ["id", "name"]
