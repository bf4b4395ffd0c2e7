"""
csv-insights: automated CSV profiling, statistics and insights.

Parses CSV text into typed records, infers a semantic type for every
column, computes descriptive statistics for numerical columns and turns the
results into plain-language insights.

Key Components:
- DataProfiler: CSV text/file -> immutable Dataset
- StatisticsCalculator: descriptive statistics per numerical column
- InsightEngine: ordered, rule-based insights for a Dataset
- AnalysisConfig: tunable thresholds (YAML or dict)
"""

__version__ = "0.1.0"

from csv_insights.core.config import AnalysisConfig
from csv_insights.profiler.engine import DataProfiler
from csv_insights.profiler.insight_engine import (
    Insight,
    InsightEngine,
    InsightKind,
    InsightSeverity,
    generate_insights,
    summarize_insights,
)
from csv_insights.profiler.profile_result import (
    CellKind,
    CellValue,
    ColumnDescriptor,
    Dataset,
    SemanticType,
    StatisticsSummary,
)
from csv_insights.profiler.statistics_calculator import StatisticsCalculator


def parse_csv_data(text: str, name: str = "dataset") -> Dataset:
    """Parse and profile CSV text with default settings."""
    return DataProfiler().profile_text(text, name=name)


def load_csv_file(file_path: str) -> Dataset:
    """Parse and profile a CSV file with default settings."""
    return DataProfiler().profile_file(file_path)


__all__ = [
    '__version__',
    'AnalysisConfig',
    'CellKind',
    'CellValue',
    'ColumnDescriptor',
    'DataProfiler',
    'Dataset',
    'Insight',
    'InsightEngine',
    'InsightKind',
    'InsightSeverity',
    'SemanticType',
    'StatisticsCalculator',
    'StatisticsSummary',
    'generate_insights',
    'load_csv_file',
    'parse_csv_data',
    'summarize_insights',
]
