"""
csv-insights Exception Hierarchy.

This module defines the exception hierarchy for csv-insights, providing clear
categorization of errors and standardized error handling across the parsing,
profiling and reporting components.

Exception Severity Levels:
    - FATAL: Stop all processing immediately (bad configuration)
    - CRITICAL: Stop processing this input (unreadable or malformed CSV)
    - RECOVERABLE: The request failed but the dataset remains usable
    - WARNING: Non-critical issue, log and continue
"""

from typing import Optional, Dict, Any, List
from enum import Enum


class ErrorSeverity(Enum):
    """
    Classify error severity for handling decisions.

    Attributes:
        FATAL: Unrecoverable error, stop all processing
        CRITICAL: Input-level error, no dataset is produced
        RECOVERABLE: Request-level error, the current dataset is unaffected
        WARNING: Non-critical issue, log and continue
    """
    FATAL = "fatal"
    CRITICAL = "critical"
    RECOVERABLE = "recoverable"
    WARNING = "warning"


class CsvInsightsException(Exception):
    """
    Base exception for all csv-insights errors with enhanced context.

    All csv-insights exceptions inherit from this base class, providing:
    - Severity classification for handling decisions
    - Structured details dictionary for logging/reporting
    - Original exception preservation for debugging
    - Serialization support for JSON/dict output

    Attributes:
        message (str): Human-readable error message
        severity (ErrorSeverity): Error severity level
        details (Dict[str, Any]): Additional context (line number, column name, etc.)
        original_exception (Optional[Exception]): Original exception if wrapping

    Example:
        >>> try:
        ...     dataset = profiler.profile_text(text)
        ... except csv.Error as e:
        ...     raise CsvInsightsException(
        ...         "Data processing failed",
        ...         severity=ErrorSeverity.CRITICAL,
        ...         details={'source': 'sales.csv'},
        ...         original_exception=e
        ...     )
    """

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.RECOVERABLE,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize csv-insights exception.

        Args:
            message: Human-readable error description
            severity: Error severity level (default: RECOVERABLE)
            details: Additional context dictionary
            original_exception: Original exception if this wraps another error
        """
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.details = details or {}
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize exception to dictionary for logging/reporting.

        Returns:
            Dictionary containing exception details suitable for JSON serialization

        Example:
            >>> exc = CsvInsightsException("Test error", details={'column': 'price'})
            >>> exc.to_dict()
            {
                'type': 'CsvInsightsException',
                'message': 'Test error',
                'severity': 'recoverable',
                'details': {'column': 'price'},
                'original_error': None
            }
        """
        return {
            'type': self.__class__.__name__,
            'message': self.message,
            'severity': self.severity.value,
            'details': self.details,
            'original_error': str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Configuration Errors (Fatal)
# ============================================================================

class ConfigError(CsvInsightsException):
    """
    Configuration file errors (fatal - stop all processing).

    Raised when:
    - Configuration file not found
    - Invalid YAML syntax
    - Invalid configuration structure

    Attributes:
        field (Optional[str]): Specific config field that caused error

    Example:
        >>> raise ConfigError(
        ...     "Section 'insights' must be a mapping",
        ...     field="insights"
        ... )
    """

    def __init__(self, message: str, field: Optional[str] = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            field: Specific config field that failed (optional)
        """
        super().__init__(
            message,
            severity=ErrorSeverity.FATAL,
            details={'field': field} if field else {}
        )
        self.field = field


class YAMLSizeError(ConfigError):
    """
    YAML file too large.

    Raised when the configuration file exceeds the maximum allowed size.

    Example:
        >>> raise YAMLSizeError(
        ...     "Config file exceeds 1MB limit",
        ...     file_size=1500000,
        ...     max_size=1048576
        ... )
    """

    def __init__(self, message: str, file_size: Optional[int] = None, max_size: Optional[int] = None):
        """
        Initialize YAML size error.

        Args:
            message: Error description
            file_size: Actual file size in bytes
            max_size: Maximum allowed size in bytes
        """
        super().__init__(message)
        self.details.update({
            'file_size': file_size,
            'max_size': max_size
        })


class ConfigValidationError(ConfigError):
    """
    Configuration is valid YAML but does not match the expected structure.

    Example:
        >>> raise ConfigValidationError(
        ...     "Invalid value for 'numeric_ratio'",
        ...     field="profiler.numeric_ratio",
        ...     expected="number between 0 and 1",
        ...     actual="1.5"
        ... )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None
    ):
        """
        Initialize config validation error.

        Args:
            message: Error description
            field: Config field that failed validation
            expected: Expected value or type
            actual: Actual value found
        """
        super().__init__(message, field)
        self.details.update({
            'expected': expected,
            'actual': actual
        })


# ============================================================================
# Data Loading Errors (Critical)
# ============================================================================

class DataLoadError(CsvInsightsException):
    """
    Data loading errors (critical - no dataset is produced).

    Raised when:
    - Data file not found
    - File cannot be decoded as UTF-8
    - CSV text is malformed or has no data rows

    Attributes:
        source (str): File path or dataset name that failed to load
        line_number (Optional[int]): Line number where error occurred

    Example:
        >>> raise DataLoadError(
        ...     "Failed to decode file as UTF-8",
        ...     source="customers.csv"
        ... )
    """

    def __init__(
        self,
        message: str,
        source: str,
        line_number: Optional[int] = None,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize data load error.

        Args:
            message: Error description
            source: File path or dataset name being loaded
            line_number: Specific line number if applicable
            original_exception: Original exception from the reader
        """
        super().__init__(
            message,
            severity=ErrorSeverity.CRITICAL,
            details={'source': source, 'line_number': line_number},
            original_exception=original_exception
        )
        self.source = source
        self.line_number = line_number


class FileNotFoundError(DataLoadError):
    """
    Data file not found at specified path.

    Example:
        >>> raise FileNotFoundError("customers.csv")
    """

    def __init__(self, file_path: str):
        """
        Initialize file not found error.

        Args:
            file_path: Expected file path
        """
        super().__init__(f"File not found: {file_path}", file_path)


class ParseError(DataLoadError):
    """
    Malformed CSV structure. The whole parse fails.

    Raised when a data row has a different number of fields than the header,
    or when the row splitter rejects the text (unbalanced quotes, etc.).

    Example:
        >>> raise ParseError(
        ...     "Row 3 has 4 fields, expected 3",
        ...     source="sales.csv",
        ...     line_number=3,
        ...     expected_fields=3,
        ...     actual_fields=4
        ... )
    """

    def __init__(
        self,
        message: str,
        source: str,
        line_number: Optional[int] = None,
        expected_fields: Optional[int] = None,
        actual_fields: Optional[int] = None,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize parse error.

        Args:
            message: Error description
            source: File path or dataset name
            line_number: Physical line (1-based) of the offending row
            expected_fields: Field count of the header
            actual_fields: Field count of the offending row
            original_exception: Original csv module error, if any
        """
        super().__init__(message, source, line_number, original_exception)
        self.details.update({
            'expected_fields': expected_fields,
            'actual_fields': actual_fields
        })
        self.expected_fields = expected_fields
        self.actual_fields = actual_fields


class EmptyInputError(DataLoadError):
    """
    Input has no data rows.

    Raised for completely empty text and for a header without any data rows.
    The header columns found (possibly none) are kept in ``columns``.

    Example:
        >>> raise EmptyInputError("orders.csv", columns=["id", "total"])
    """

    def __init__(self, source: str, columns: Optional[List[str]] = None):
        """
        Initialize empty input error.

        Args:
            source: File path or dataset name
            columns: Header column names found before the data ran out
        """
        columns = list(columns or [])
        message = f"No data rows found in {source}"
        if columns:
            message += f" (header: {', '.join(columns)})"

        super().__init__(message, source)
        self.details['columns'] = columns
        self.columns = columns


class ParseTimeoutError(DataLoadError):
    """
    Asynchronous parse did not finish within the requested timeout.

    Example:
        >>> raise ParseTimeoutError("big.csv", timeout=30.0)
    """

    def __init__(self, source: str, timeout: float):
        """
        Initialize parse timeout error.

        Args:
            source: File path being parsed
            timeout: Timeout in seconds that elapsed
        """
        super().__init__(f"Parsing {source} did not finish within {timeout:g}s", source)
        self.details['timeout'] = timeout
        self.timeout = timeout


# ============================================================================
# Profiler Errors (Recoverable)
# ============================================================================

class ProfilerError(CsvInsightsException):
    """
    Profiling errors.

    Raised when a profiling request cannot be served for the given dataset.

    Example:
        >>> raise ProfilerError(
        ...     "Statistics requested for a non-numerical column",
        ...     operation="statistics",
        ...     column="city"
        ... )
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        column: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize profiler error.

        Args:
            message: Error description
            operation: Profiling operation that failed
            column: Column being profiled
            original_exception: Original exception
        """
        super().__init__(
            message,
            severity=ErrorSeverity.RECOVERABLE,
            details={
                'operation': operation,
                'column': column
            },
            original_exception=original_exception
        )


class ColumnNotFoundError(ProfilerError):
    """
    Requested column does not exist in the dataset.

    Example:
        >>> raise ColumnNotFoundError(
        ...     column="email",
        ...     available_columns=["customer_id", "name", "phone"]
        ... )
    """

    def __init__(self, column: str, available_columns: list, operation: Optional[str] = None):
        """
        Initialize column not found error.

        Args:
            column: Column that's missing
            available_columns: List of available columns
            operation: Operation that looked the column up
        """
        super().__init__(
            f"Column '{column}' not found in data. Available: {', '.join(available_columns)}",
            operation=operation,
            column=column
        )
        self.details['available_columns'] = list(available_columns)
