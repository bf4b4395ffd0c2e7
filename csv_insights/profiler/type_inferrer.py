"""
Type Inferrer - Cell Coercion and Column Type Classification.

This module turns raw CSV strings into tagged cell values and classifies a
column's semantic type from the kinds of its non-null cells.

Architecture:
    ValueCoercer applies a fixed priority to every raw cell:
    1. Empty string -> null
    2. Numeric parse (stripped text parses as a finite float) -> number
    3. Date parse (text contains an accepted date shape AND parses as a
       valid calendar date) -> date
    4. Anything else -> text, kept exactly as read

    TypeInferrer then classifies the column from the coerced cells:
    numbers > 80% -> numerical, dates > 80% -> datetime, few distinct
    values -> categorical, otherwise text.

Design Decisions:
    - Comparisons against the ratios are strict: exactly 80% numbers is NOT
      numerical.
    - "nan" and "inf" parse as floats but are not finite; they stay text.
    - Date shapes are pre-compiled; the calendar check uses pandas with an
      explicit format so impossible dates such as 2024-02-30 are rejected.
    - A column with no non-null values is text (no ratio is computed).

Usage:
    coercer = ValueCoercer()
    cell = coercer.coerce("2024-01-15")        # CellValue(kind=DATE, ...)
    inferrer = TypeInferrer()
    semantic_type = inferrer.classify(non_null_cells, unique_count)
"""

import logging
import math
import re
from datetime import datetime
from typing import Dict, Optional, Sequence

import pandas as pd

from csv_insights.core.constants import (
    DATE_PATTERNS,
    NUMERIC_TYPE_RATIO,
    DATETIME_TYPE_RATIO,
    CATEGORICAL_MAX_UNIQUE,
    CATEGORICAL_UNIQUE_RATIO,
)
from csv_insights.profiler.profile_result import CellKind, CellValue, SemanticType

logger = logging.getLogger(__name__)

# Formats tried for US-style dates; ISO dates go through pandas' ISO8601 parser
US_DATE_FORMATS = [
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
]


class ValueCoercer:
    """
    Coerce raw CSV strings into tagged cell values.

    Results are memoised per raw string, so repeated values in a column are
    coerced once and always map to the same cell.

    Example:
        >>> coercer = ValueCoercer()
        >>> coercer.coerce(" 42 ").kind
        <CellKind.NUMBER: 'number'>
        >>> coercer.coerce("01/15/2024").kind
        <CellKind.DATE: 'date'>
        >>> coercer.coerce("").kind
        <CellKind.NULL: 'null'>
    """

    def __init__(self):
        """Initialize the coercer."""
        self._iso_regex = re.compile(DATE_PATTERNS[0])
        self._us_regex = re.compile(DATE_PATTERNS[1])
        self._cache: Dict[str, CellValue] = {}

    def coerce(self, raw: Optional[str]) -> CellValue:
        """
        Coerce one raw cell.

        Args:
            raw: Raw cell text (None is treated as empty)

        Returns:
            Tagged CellValue
        """
        if raw is None or raw == "":
            return CellValue.null()

        cached = self._cache.get(raw)
        if cached is not None:
            return cached

        cell = self._coerce_uncached(raw)
        self._cache[raw] = cell
        return cell

    def _coerce_uncached(self, raw: str) -> CellValue:
        stripped = raw.strip()

        number = self._parse_number(stripped)
        if number is not None:
            return CellValue.number(number)

        date = self._parse_date(stripped)
        if date is not None:
            return CellValue.date(date)

        return CellValue.text(raw)

    @staticmethod
    def _parse_number(value: str) -> Optional[float]:
        """Parse a finite float, or return None."""
        # float() accepts digit separators ("1_000"); CSV data does not
        if not value or "_" in value:
            return None
        try:
            number = float(value)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return number

    def _parse_date(self, value: str) -> Optional[datetime]:
        """Parse a calendar date in one of the accepted shapes, or return None."""
        if self._iso_regex.search(value):
            formats = ["ISO8601"]
        elif self._us_regex.search(value):
            formats = US_DATE_FORMATS
        else:
            return None

        for fmt in formats:
            try:
                parsed = pd.to_datetime(value, format=fmt)
            except (ValueError, TypeError, OverflowError):
                continue
            if pd.isna(parsed):
                continue
            if parsed.tzinfo is not None:
                parsed = parsed.tz_convert(None)
            return parsed.to_pydatetime()

        logger.debug(f"Value {value!r} has a date shape but is not a valid date")
        return None


def coerce_value(raw: Optional[str]) -> CellValue:
    """Coerce a single raw string (convenience wrapper, no memoisation across calls)."""
    return ValueCoercer().coerce(raw)


class TypeInferrer:
    """
    Classify a column's semantic type from its coerced non-null cells.

    Attributes:
        numeric_ratio: Share of numbers a column must exceed to be numerical
        datetime_ratio: Share of dates a column must exceed to be datetime
        categorical_max_unique: Absolute cap on distinct values for categorical
        categorical_unique_ratio: Relative cap (share of non-null count)

    Example:
        >>> inferrer = TypeInferrer()
        >>> cells = [CellValue.number(1), CellValue.number(2)]
        >>> inferrer.classify(cells, unique_count=2)
        <SemanticType.NUMERICAL: 'numerical'>
    """

    def __init__(
        self,
        numeric_ratio: float = NUMERIC_TYPE_RATIO,
        datetime_ratio: float = DATETIME_TYPE_RATIO,
        categorical_max_unique: int = CATEGORICAL_MAX_UNIQUE,
        categorical_unique_ratio: float = CATEGORICAL_UNIQUE_RATIO
    ):
        """
        Initialize the type inferrer.

        Args:
            numeric_ratio: Numerical threshold (strict)
            datetime_ratio: Datetime threshold (strict)
            categorical_max_unique: Maximum distinct values for categorical
            categorical_unique_ratio: Maximum distinct/non-null ratio for categorical
        """
        self.numeric_ratio = numeric_ratio
        self.datetime_ratio = datetime_ratio
        self.categorical_max_unique = categorical_max_unique
        self.categorical_unique_ratio = categorical_unique_ratio

    def classify(self, values: Sequence[CellValue], unique_count: int) -> SemanticType:
        """
        Classify a column.

        Args:
            values: The column's non-null cells
            unique_count: Number of distinct values among them

        Returns:
            Inferred SemanticType
        """
        n = len(values)
        if n == 0:
            return SemanticType.TEXT

        numeric_count = sum(1 for cell in values if cell.kind is CellKind.NUMBER)
        if numeric_count > n * self.numeric_ratio:
            return SemanticType.NUMERICAL

        date_count = sum(1 for cell in values if cell.kind is CellKind.DATE)
        if date_count > n * self.datetime_ratio:
            return SemanticType.DATETIME

        if unique_count <= min(self.categorical_max_unique, n * self.categorical_unique_ratio):
            return SemanticType.CATEGORICAL

        return SemanticType.TEXT
