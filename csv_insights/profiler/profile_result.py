"""
Data structures for storing parsing and profiling results.

Contains the tagged cell value produced by the parser, the per-column
descriptor produced by the profiler, the immutable Dataset that ties them
together, and the StatisticsSummary produced for numerical columns.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Any, Optional, Tuple, Mapping

import numpy as np
import pandas as pd

from csv_insights.core.constants import DEFAULT_PREVIEW_ROWS
from csv_insights.core.exceptions import ColumnNotFoundError


def convert_numpy_types(obj):
    """
    Recursively convert numpy types to Python native types for JSON serialization.

    Args:
        obj: Any object that might contain numpy types

    Returns:
        Object with numpy types converted to Python types
    """
    if isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {key: convert_numpy_types(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [convert_numpy_types(item) for item in obj]
    elif isinstance(obj, tuple):
        return tuple(convert_numpy_types(item) for item in obj)
    else:
        return obj


class CellKind(Enum):
    """Tag of a coerced cell value."""
    NUMBER = "number"
    DATE = "date"
    TEXT = "text"
    NULL = "null"


@dataclass(frozen=True)
class CellValue:
    """
    A single coerced cell: a kind tag plus its payload.

    Payloads are a finite float for NUMBER, a naive datetime for DATE, the raw
    string for TEXT and None for NULL. Two cells are equal when both kind and
    payload are equal, so the text "1" and the number 1.0 are distinct.

    Attributes:
        kind: Cell kind tag
        value: Payload for the kind
    """
    kind: CellKind
    value: Any = None

    @classmethod
    def number(cls, value: float) -> "CellValue":
        return cls(CellKind.NUMBER, float(value))

    @classmethod
    def date(cls, value: datetime) -> "CellValue":
        return cls(CellKind.DATE, value)

    @classmethod
    def text(cls, value: str) -> "CellValue":
        return cls(CellKind.TEXT, value)

    @classmethod
    def null(cls) -> "CellValue":
        return cls(CellKind.NULL, None)

    @property
    def is_null(self) -> bool:
        return self.kind is CellKind.NULL

    def to_python(self) -> Any:
        """Return the payload in a JSON-friendly form (dates as ISO strings)."""
        if self.kind is CellKind.DATE:
            return self.value.isoformat()
        if self.kind is CellKind.NUMBER and self.value.is_integer():
            return int(self.value)
        return self.value

    def __str__(self) -> str:
        if self.kind is CellKind.NULL:
            return ""
        if self.kind is CellKind.NUMBER:
            return str(int(self.value)) if self.value.is_integer() else repr(self.value)
        if self.kind is CellKind.DATE:
            return self.value.isoformat(sep=" ") if (
                self.value.hour or self.value.minute or self.value.second
            ) else self.value.date().isoformat()
        return self.value


# A parsed row: column name -> coerced cell
Record = Mapping[str, CellValue]


class SemanticType(Enum):
    """Inferred domain meaning of a column."""
    NUMERICAL = "numerical"
    CATEGORICAL = "categorical"
    DATETIME = "datetime"
    TEXT = "text"


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Profile of a single column.

    Attributes:
        name: Column name (unique within the dataset)
        type: Inferred semantic type
        unique_count: Distinct non-null values
        null_count: Null cells (empty strings coerce to null)
        non_null_count: Non-null cells; null_count + non_null_count == row count
        sample_values: Up to 10 distinct non-null values in first-seen order
    """
    name: str
    type: SemanticType
    unique_count: int
    null_count: int
    non_null_count: int
    sample_values: Tuple[CellValue, ...] = ()

    @property
    def cardinality(self) -> float:
        """Ratio of distinct to non-null values (0.0 for an all-null column)."""
        return self.unique_count / self.non_null_count if self.non_null_count > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "type": self.type.value,
            "unique_count": self.unique_count,
            "null_count": self.null_count,
            "non_null_count": self.non_null_count,
            "sample_values": [value.to_python() for value in self.sample_values],
        }


@dataclass(frozen=True)
class Dataset:
    """
    Immutable result of parsing and profiling one CSV input.

    Built atomically by DataProfiler; never updated afterwards. A new upload
    produces a new Dataset.

    Attributes:
        name: Dataset name (file name for files)
        records: Rows in source order, each a read-only column -> cell mapping
        columns: Column descriptors in header order
        created_at: When the dataset was built
    """
    name: str
    records: Tuple[Record, ...]
    columns: Tuple[ColumnDescriptor, ...]
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def build(
        cls,
        name: str,
        records: List[Dict[str, CellValue]],
        columns: List[ColumnDescriptor],
        created_at: Optional[datetime] = None
    ) -> "Dataset":
        """Freeze mutable records/columns into a Dataset."""
        return cls(
            name=name,
            records=tuple(MappingProxyType(dict(record)) for record in records),
            columns=tuple(columns),
            created_at=created_at or datetime.now(),
        )

    @property
    def row_count(self) -> int:
        return len(self.records)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def column(self, name: str) -> ColumnDescriptor:
        """
        Look up a column descriptor by name.

        Raises:
            ColumnNotFoundError: If the dataset has no such column
        """
        for column in self.columns:
            if column.name == name:
                return column
        raise ColumnNotFoundError(name, self.column_names, operation="column_lookup")

    def columns_of_type(self, semantic_type: SemanticType) -> List[ColumnDescriptor]:
        return [column for column in self.columns if column.type is semantic_type]

    def column_values(self, name: str) -> List[CellValue]:
        """All cells of a column in row order, nulls included."""
        self.column(name)
        return [record[name] for record in self.records]

    def numeric_values(self, name: str) -> List[float]:
        """Numeric payloads of a column in row order; other kinds are skipped."""
        return [
            cell.value for cell in self.column_values(name)
            if cell.kind is CellKind.NUMBER
        ]

    def preview(self, n: int = DEFAULT_PREVIEW_ROWS) -> List[Record]:
        """First ``n`` records, for a data preview table."""
        return list(self.records[:max(n, 0)])

    def to_dataframe(self) -> pd.DataFrame:
        """Return the records as a pandas DataFrame of plain payloads."""
        return pd.DataFrame(
            [{name: record[name].value for name in self.column_names} for record in self.records],
            columns=self.column_names,
        )

    def to_dict(self, include_records: bool = False) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        result = {
            "name": self.name,
            "row_count": self.row_count,
            "column_count": self.column_count,
            "created_at": self.created_at.isoformat(),
            "columns": [column.to_dict() for column in self.columns],
        }
        if include_records:
            result["records"] = [
                {name: record[name].to_python() for name in self.column_names}
                for record in self.records
            ]
        return result


@dataclass(frozen=True)
class StatisticsSummary:
    """
    Descriptive statistics for one numerical column.

    ``mean``, ``median`` and ``std_dev`` are rounded to 2 decimals for display;
    ``raw_mean``, ``raw_median`` and ``raw_std_dev`` keep full precision for
    derived calculations such as skewness. ``min``, ``max``, ``q25`` and
    ``q75`` are actual values from the data and are never rounded.

    A summary with ``count == 0`` means the column had no numeric values;
    every other field is then None.
    """
    count: int = 0
    mean: Optional[float] = None
    median: Optional[float] = None
    mode: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    std_dev: Optional[float] = None
    q25: Optional[float] = None
    q75: Optional[float] = None
    raw_mean: Optional[float] = None
    raw_median: Optional[float] = None
    raw_std_dev: Optional[float] = None

    @classmethod
    def empty(cls) -> "StatisticsSummary":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def iqr(self) -> Optional[float]:
        """Interquartile range (q75 - q25)."""
        if self.is_empty:
            return None
        return self.q75 - self.q25

    def to_dict(self) -> Dict[str, Any]:
        """Convert display values to dictionary representation."""
        return convert_numpy_types({
            "count": self.count,
            "mean": self.mean,
            "median": self.median,
            "mode": self.mode,
            "min": self.min,
            "max": self.max,
            "std_dev": self.std_dev,
            "q25": self.q25,
            "q75": self.q75,
        })
