"""
Rule-based insight engine for profiled datasets.

Walks a Dataset and its per-column statistics and emits an ordered list of
human-readable findings: overview, distribution shape, outliers,
cardinality, missing data, correlation opportunities and size
recommendations.

Architecture:
    Dataset + statistics lookup -> rule families (fixed order) -> Insights

Insights carry no presentation data; callers map kind/severity to their own
visual treatment.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
import logging

from csv_insights.core.config import AnalysisConfig
from csv_insights.core.constants import (
    SKEWNESS_THRESHOLD,
    OUTLIER_IQR_MULTIPLIER,
    HIGH_CARDINALITY_RATIO,
    CATEGORIES_MAX_UNIQUE,
    CATEGORIES_SAMPLE_SIZE,
    LARGE_DATASET_ROWS,
)
from csv_insights.profiler.insight_templates import (
    SKEWNESS_DESCRIPTIONS,
    MEAN_DIRECTION,
    format_fixed,
    format_list,
    format_number,
    render_template,
)
from csv_insights.profiler.profile_result import (
    ColumnDescriptor,
    Dataset,
    SemanticType,
    StatisticsSummary,
)
from csv_insights.profiler.statistics_calculator import StatisticsCalculator

logger = logging.getLogger(__name__)


class InsightKind(Enum):
    """Kinds of insight, one per rule family."""
    OVERVIEW = "overview"
    DISTRIBUTION = "distribution"
    OUTLIERS = "outliers"
    CARDINALITY = "cardinality"
    CATEGORIES = "categories"
    QUALITY = "quality"
    CORRELATION = "correlation"
    RECOMMENDATION = "recommendation"


class InsightSeverity(Enum):
    """Insight severity levels."""
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    ERROR = "error"


# =============================================================================
# INSIGHT MODEL
# =============================================================================

@dataclass(frozen=True)
class Insight:
    """
    A single finding about a dataset.

    Attributes:
        kind: Rule family that produced the insight
        title: Short headline
        body: Explanatory text
        severity: Severity level
        column: Column the insight concerns (None for dataset-level insights)
    """
    kind: InsightKind
    title: str
    body: str
    severity: InsightSeverity
    column: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "kind": self.kind.value,
            "title": self.title,
            "body": self.body,
            "severity": self.severity.value,
            "column": self.column,
        }


# =============================================================================
# CONFIGURABLE THRESHOLDS
# =============================================================================

@dataclass
class InsightThresholds:
    """
    Configurable thresholds for insight rules.

    The defaults reproduce the standard rule set.
    """
    # Distribution: |skewness| below this is approximately normal
    skew_threshold: float = SKEWNESS_THRESHOLD

    # Outliers: Tukey fence multiplier
    outlier_iqr_multiplier: float = OUTLIER_IQR_MULTIPLIER

    # Categorical: unique/non-null above this = identifier-like
    high_cardinality_ratio: float = HIGH_CARDINALITY_RATIO
    categories_max_unique: int = CATEGORIES_MAX_UNIQUE
    categories_sample_size: int = CATEGORIES_SAMPLE_SIZE

    # Size: more rows than this = large dataset
    large_dataset_rows: int = LARGE_DATASET_ROWS

    @classmethod
    def from_config(cls, config: AnalysisConfig) -> "InsightThresholds":
        """Take the insight settings from an AnalysisConfig."""
        return cls(**{name: getattr(config, name) for name in asdict(cls())})


# =============================================================================
# INSIGHT ENGINE
# =============================================================================

class InsightEngine:
    """
    Generates insights for a Dataset.

    Rule families run in a fixed order, which is also the display order:
    overview, per-numerical-column distribution and outliers,
    per-categorical-column cardinality or categories, missing data,
    correlation opportunity, large-dataset recommendation.

    generate() is a pure function of its inputs and never raises for data
    reasons; inapplicable rules simply emit nothing.
    """

    def __init__(
        self,
        thresholds: Optional[InsightThresholds] = None,
        calculator: Optional[StatisticsCalculator] = None
    ):
        """
        Initialize insight engine.

        Args:
            thresholds: Custom thresholds (uses defaults if None)
            calculator: Statistics calculator (a new one if None)
        """
        self.thresholds = thresholds or InsightThresholds()
        self.calculator = calculator or StatisticsCalculator()

    def generate(
        self,
        dataset: Dataset,
        statistics: Optional[Mapping[str, StatisticsSummary]] = None
    ) -> List[Insight]:
        """
        Generate the full, ordered insight list for a dataset.

        Args:
            dataset: Profiled dataset
            statistics: Column name -> StatisticsSummary lookup; computed with
                StatisticsCalculator.calculate_all when None. Numerical columns
                missing from the lookup are computed on demand.

        Returns:
            Ordered list of Insights
        """
        if statistics is None:
            statistics = self.calculator.calculate_all(dataset)

        insights: List[Insight] = [self._overview(dataset)]

        for column in dataset.columns_of_type(SemanticType.NUMERICAL):
            values = dataset.numeric_values(column.name)
            summary = statistics.get(column.name)
            if summary is None:
                summary = self.calculator.calculate(values)
            insights.extend(self._analyze_numerical(column, values, summary))

        for column in dataset.columns_of_type(SemanticType.CATEGORICAL):
            insights.extend(self._analyze_categorical(column))

        insights.extend(self._analyze_missing_data(dataset))
        insights.extend(self._analyze_correlation(dataset))
        insights.extend(self._analyze_size(dataset))

        logger.debug(f"Generated {len(insights)} insight(s) for {dataset.name}")
        return insights

    def _overview(self, dataset: Dataset) -> Insight:
        """Dataset overview; always emitted."""
        return self._build(
            InsightKind.OVERVIEW,
            InsightSeverity.INFO,
            {
                "rows": dataset.row_count,
                "columns": dataset.column_count,
                "numerical": len(dataset.columns_of_type(SemanticType.NUMERICAL)),
                "categorical": len(dataset.columns_of_type(SemanticType.CATEGORICAL)),
            },
        )

    def _analyze_numerical(
        self,
        column: ColumnDescriptor,
        values: List[float],
        summary: StatisticsSummary
    ) -> List[Insight]:
        """Distribution and outlier insights for one numerical column."""
        if summary.is_empty:
            return []

        insights = []

        skewness = self.calculator.pearson_skewness(summary)
        shape = self.calculator.classify_skewness(skewness, self.thresholds.skew_threshold)

        if summary.mean > summary.median:
            direction = MEAN_DIRECTION["above"]
        elif summary.mean < summary.median:
            direction = MEAN_DIRECTION["below"]
        else:
            direction = MEAN_DIRECTION["equal"]

        insights.append(self._build(
            InsightKind.DISTRIBUTION,
            InsightSeverity.INFO,
            {
                "column": column.name,
                "shape": SKEWNESS_DESCRIPTIONS[shape],
                "mean": format_number(summary.mean),
                "median": format_number(summary.median),
                "direction": direction,
                "min": format_number(summary.min),
                "max": format_number(summary.max),
                "std_dev": format_number(summary.std_dev),
            },
            column=column.name,
        ))

        multiplier = self.thresholds.outlier_iqr_multiplier
        outliers = self.calculator.find_outliers(values, summary, multiplier)
        if outliers:
            lower_bound, upper_bound = self.calculator.outlier_bounds(summary, multiplier)
            insights.append(self._build(
                InsightKind.OUTLIERS,
                InsightSeverity.WARNING,
                {
                    "column": column.name,
                    "count": len(outliers),
                    "percentage": format_fixed(100 * len(outliers) / len(values), 1),
                    "lower": format_fixed(lower_bound, 2),
                    "upper": format_fixed(upper_bound, 2),
                },
                column=column.name,
            ))

        return insights

    def _analyze_categorical(self, column: ColumnDescriptor) -> List[Insight]:
        """
        Cardinality warning or categories summary for one categorical column.

        The branches are exclusive. A column that is neither identifier-like
        nor small enough to list gets no insight.
        """
        if column.non_null_count == 0:
            return []

        unique_ratio = column.unique_count / column.non_null_count

        if unique_ratio > self.thresholds.high_cardinality_ratio:
            return [self._build(
                InsightKind.CARDINALITY,
                InsightSeverity.WARNING,
                {
                    "column": column.name,
                    "unique": column.unique_count,
                    "total": column.non_null_count,
                    "percentage": format_fixed(unique_ratio * 100, 1),
                },
                column=column.name,
            )]

        if column.unique_count <= self.thresholds.categories_max_unique:
            limit = self.thresholds.categories_sample_size
            return [self._build(
                InsightKind.CATEGORIES,
                InsightSeverity.INFO,
                {
                    "column": column.name,
                    "unique": column.unique_count,
                    "samples": format_list(column.sample_values[:limit]),
                    "more": "..." if len(column.sample_values) > limit else "",
                },
                column=column.name,
            )]

        return []

    def _analyze_missing_data(self, dataset: Dataset) -> List[Insight]:
        """One warning listing every column that has nulls."""
        columns_with_nulls = [column for column in dataset.columns if column.null_count > 0]
        if not columns_with_nulls:
            return []

        return [self._build(
            InsightKind.QUALITY,
            InsightSeverity.WARNING,
            {
                "count": len(columns_with_nulls),
                "details": ", ".join(
                    f"{column.name} ({column.null_count} missing)" for column in columns_with_nulls
                ),
            },
        )]

    def _analyze_correlation(self, dataset: Dataset) -> List[Insight]:
        """Correlation opportunity when there are two or more numerical columns."""
        numerical = dataset.columns_of_type(SemanticType.NUMERICAL)
        if len(numerical) < 2:
            return []

        return [self._build(
            InsightKind.CORRELATION,
            InsightSeverity.INFO,
            {
                "count": len(numerical),
                "names": ", ".join(column.name for column in numerical),
            },
        )]

    def _analyze_size(self, dataset: Dataset) -> List[Insight]:
        """Recommendation for large datasets."""
        if dataset.row_count <= self.thresholds.large_dataset_rows:
            return []

        return [self._build(
            InsightKind.RECOMMENDATION,
            InsightSeverity.SUCCESS,
            {"rows": dataset.row_count},
        )]

    @staticmethod
    def _build(
        kind: InsightKind,
        severity: InsightSeverity,
        data: Dict[str, Any],
        column: Optional[str] = None
    ) -> Insight:
        title, body = render_template(kind.value, data)
        return Insight(kind=kind, title=title, body=body, severity=severity, column=column)


# =============================================================================
# SUMMARY
# =============================================================================

def summarize_insights(insights: List[Insight], dataset: Dataset) -> Dict[str, int]:
    """
    Headline counts for an insight list.

    Args:
        insights: Insights generated for the dataset
        dataset: The dataset they describe

    Returns:
        Dict with total, warnings, recommendations and data_quality (share
        of columns without missing values, as a whole percentage)
    """
    complete_columns = sum(1 for column in dataset.columns if column.null_count == 0)
    data_quality = (
        int(format_fixed(100 * complete_columns / dataset.column_count, 0))
        if dataset.column_count else 0
    )

    return {
        "total": len(insights),
        "warnings": sum(1 for insight in insights if insight.severity is InsightSeverity.WARNING),
        "recommendations": sum(
            1 for insight in insights if insight.kind is InsightKind.RECOMMENDATION
        ),
        "data_quality": data_quality,
    }


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def generate_insights(
    dataset: Dataset,
    statistics: Optional[Mapping[str, StatisticsSummary]] = None,
    thresholds: Optional[InsightThresholds] = None
) -> List[Insight]:
    """
    Generate insights for a dataset (convenience function).

    Args:
        dataset: Profiled dataset
        statistics: Optional precomputed statistics lookup
        thresholds: Optional custom thresholds

    Returns:
        Ordered list of Insights
    """
    engine = InsightEngine(thresholds)
    return engine.generate(dataset, statistics)
