"""
Statistics Calculator - Descriptive Statistics for Numerical Columns.

This module computes the fixed statistics bundle shown for every numerical
column and the derived measures the insight engine relies on.

Architecture:
    StatisticsCalculator is responsible for:
    1. Descriptive statistics (count, mean, median, mode, min, max, std, quartiles)
    2. The per-dataset statistics lookup (one summary per numerical column)
    3. IQR outlier fences and outlier extraction
    4. Pearson's second skewness coefficient

Design Decisions:
    - Values are sorted once; every statistic reads the sorted copy
    - Standard deviation is the population form (divide by n)
    - Quartiles use the nearest-rank method: sorted[floor(n * p)], no interpolation
    - Mode ties resolve to the smallest value
    - Display values round half away from zero on the exact binary value; raw
      values are kept so skewness is never computed from rounded inputs
    - No values is not an error: the summary is empty (count == 0)

Usage:
    calculator = StatisticsCalculator()
    summary = calculator.calculate([1, 2, 3, 4, 5])
    lookup = calculator.calculate_all(dataset)
    lower, upper = calculator.outlier_bounds(summary)
"""

import logging
import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Tuple

import numpy as np

from csv_insights.core.constants import (
    DISPLAY_DECIMALS,
    OUTLIER_IQR_MULTIPLIER,
    Q25_POSITION,
    Q75_POSITION,
    SKEWNESS_THRESHOLD,
)
from csv_insights.profiler.profile_result import Dataset, SemanticType, StatisticsSummary

logger = logging.getLogger(__name__)

# Wide enough for every digit of any finite double plus the display decimals
_DISPLAY_CONTEXT = Context(prec=400)


def round_display(value: float, decimals: int = DISPLAY_DECIMALS) -> float:
    """
    Round for display, half away from zero.

    The exact binary value is rounded, so 1.005 (stored as 1.00499...) gives
    1.0 while 0.125 (exact) gives 0.13.

    Args:
        value: Value to round
        decimals: Decimal places

    Returns:
        Rounded float
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_DISPLAY_CONTEXT))


class StatisticsCalculator:
    """
    Descriptive statistics for numerical columns.

    Example:
        >>> calculator = StatisticsCalculator()
        >>> summary = calculator.calculate([1, 2, 3, 4, 5])
        >>> summary.mean, summary.median, summary.std_dev, summary.q25, summary.q75
        (3.0, 3.0, 1.41, 2.0, 4.0)
    """

    def calculate(self, values: Iterable[float]) -> StatisticsSummary:
        """
        Calculate the statistics bundle for a sequence of numbers.

        Args:
            values: Numbers in any order; non-finite values are ignored

        Returns:
            StatisticsSummary (empty when there are no finite values)
        """
        array = np.asarray(list(values), dtype=np.float64)
        array = array[np.isfinite(array)]
        n = len(array)

        if n == 0:
            return StatisticsSummary.empty()

        sorted_values = np.sort(array)

        mean = float(np.mean(sorted_values))
        if n % 2 == 0:
            median = float((sorted_values[n // 2 - 1] + sorted_values[n // 2]) / 2)
        else:
            median = float(sorted_values[n // 2])

        # np.unique returns ascending values, and argmax picks the first
        # maximum, so ties go to the smallest value
        unique_values, counts = np.unique(sorted_values, return_counts=True)
        mode = float(unique_values[int(np.argmax(counts))])

        std_dev = float(np.std(sorted_values))

        q25 = float(sorted_values[math.floor(n * Q25_POSITION)])
        q75 = float(sorted_values[math.floor(n * Q75_POSITION)])

        return StatisticsSummary(
            count=n,
            mean=round_display(mean),
            median=round_display(median),
            mode=mode,
            min=float(sorted_values[0]),
            max=float(sorted_values[-1]),
            std_dev=round_display(std_dev),
            q25=q25,
            q75=q75,
            raw_mean=mean,
            raw_median=median,
            raw_std_dev=std_dev,
        )

    def calculate_column(self, dataset: Dataset, column: str) -> StatisticsSummary:
        """
        Calculate statistics for one column's numeric values.

        Args:
            dataset: Source dataset
            column: Column name

        Returns:
            StatisticsSummary (empty when the column holds no numbers)

        Raises:
            ColumnNotFoundError: If the column does not exist
        """
        return self.calculate(dataset.numeric_values(column))

    def calculate_all(self, dataset: Dataset) -> Dict[str, StatisticsSummary]:
        """
        Calculate statistics for every numerical column.

        Args:
            dataset: Source dataset

        Returns:
            Column name -> StatisticsSummary, in column order
        """
        lookup = {
            column.name: self.calculate_column(dataset, column.name)
            for column in dataset.columns_of_type(SemanticType.NUMERICAL)
        }
        logger.debug(f"Calculated statistics for {len(lookup)} numerical column(s) of {dataset.name}")
        return lookup

    @staticmethod
    def outlier_bounds(
        summary: StatisticsSummary,
        multiplier: float = OUTLIER_IQR_MULTIPLIER
    ) -> Tuple[float, float]:
        """
        Tukey fence for a summary.

        Args:
            summary: Non-empty statistics summary
            multiplier: IQR multiplier

        Returns:
            (lower_bound, upper_bound); values strictly outside are outliers
        """
        iqr = summary.q75 - summary.q25
        return summary.q25 - multiplier * iqr, summary.q75 + multiplier * iqr

    def find_outliers(
        self,
        values: Iterable[float],
        summary: StatisticsSummary,
        multiplier: float = OUTLIER_IQR_MULTIPLIER
    ) -> List[float]:
        """
        Values strictly outside the IQR fence, in input order.

        Args:
            values: The values the summary was calculated from
            summary: Their statistics summary
            multiplier: IQR multiplier

        Returns:
            Outlier values (empty for an empty summary)
        """
        if summary.is_empty:
            return []
        lower_bound, upper_bound = self.outlier_bounds(summary, multiplier)
        return [value for value in values if value < lower_bound or value > upper_bound]

    @staticmethod
    def pearson_skewness(summary: StatisticsSummary) -> float:
        """
        Pearson's second skewness coefficient, 3 * (mean - median) / std.

        Uses the unrounded mean, median and standard deviation. A zero
        standard deviation (all values equal) gives 0.0.

        Args:
            summary: Non-empty statistics summary

        Returns:
            Skewness estimate
        """
        if summary.is_empty or not summary.raw_std_dev:
            return 0.0
        return 3 * (summary.raw_mean - summary.raw_median) / summary.raw_std_dev

    @staticmethod
    def classify_skewness(skewness: float, threshold: float = SKEWNESS_THRESHOLD) -> str:
        """
        Classify a skewness estimate.

        Returns:
            'normal' when |skewness| < threshold, 'right' when skewness >=
            threshold, otherwise 'left'
        """
        if abs(skewness) < threshold:
            return "normal"
        if skewness >= threshold:
            return "right"
        return "left"
