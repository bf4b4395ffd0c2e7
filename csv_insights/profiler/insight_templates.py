"""
Insight templates and narratives for dataset insights.

This module contains all text templates used by the insight engine.
Separated from logic for easier maintenance.

Templates use Python string formatting with named placeholders. Numbers are
pre-formatted by the helpers below before rendering, so templates only ever
receive strings and integers.
"""

from typing import Any, Dict, Iterable, Tuple

from csv_insights.profiler.statistics_calculator import round_display


# =============================================================================
# NUMBER FORMATTING
# =============================================================================

def format_number(value: float) -> str:
    """Format a number the way it is displayed: 3.0 -> '3', 2.5 -> '2.5'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_fixed(value: float, decimals: int) -> str:
    """Format with a fixed number of decimals, rounding half away from zero."""
    return f"{round_display(value, decimals):.{decimals}f}"


def format_list(values: Iterable[Any]) -> str:
    """Comma-separated list of values."""
    return ", ".join(str(value) for value in values)


# =============================================================================
# DISTRIBUTION SHAPES
# =============================================================================

SKEWNESS_DESCRIPTIONS: Dict[str, str] = {
    "normal": "approximately normal distribution",
    "right": "right-skewed distribution (tail extends to the right)",
    "left": "left-skewed distribution (tail extends to the left)",
}

# Mean compared with median
MEAN_DIRECTION: Dict[str, str] = {
    "above": "exceeds",
    "below": "is below",
    "equal": "equals",
}


# =============================================================================
# INSIGHT TEMPLATES - one title/body pair per insight kind
# =============================================================================

INSIGHT_TEMPLATES: Dict[str, Dict[str, str]] = {
    "overview": {
        "title": "Dataset Overview",
        "body": (
            "Your dataset contains {rows} records with {columns} features. "
            "The data includes {numerical} numerical columns and {categorical} categorical columns, "
            "providing a good mix for comprehensive analysis."
        ),
    },
    "distribution": {
        "title": "{column} Distribution",
        "body": (
            "Column '{column}' shows a {shape}. "
            "The mean ({mean}) {direction} the median ({median}), "
            "with values ranging from {min} to {max}. "
            "Standard deviation is {std_dev}."
        ),
    },
    "outliers": {
        "title": "{column} Outliers Detected",
        "body": (
            "Found {count} potential outliers ({percentage}% of data) in '{column}'. "
            "These values fall outside the range [{lower}, {upper}]. "
            "Consider investigating these data points."
        ),
    },
    "cardinality": {
        "title": "High Cardinality in {column}",
        "body": (
            "Column '{column}' has very high cardinality with {unique} unique values "
            "out of {total} records ({percentage}%). "
            "This might indicate the column is more like an identifier than a true categorical variable."
        ),
    },
    "categories": {
        "title": "{column} Categories",
        "body": (
            "Column '{column}' contains {unique} distinct categories: {samples}{more}. "
            "This is well-suited for categorical analysis and visualization."
        ),
    },
    "quality": {
        "title": "Missing Data Detected",
        "body": (
            "{count} columns contain missing values: {details}. "
            "Consider data imputation or removal strategies."
        ),
    },
    "correlation": {
        "title": "Correlation Analysis Opportunity",
        "body": (
            "With {count} numerical columns ({names}), you can explore relationships between "
            "variables using correlation analysis and scatter plots. "
            "This may reveal interesting patterns and dependencies in your data."
        ),
    },
    "recommendation": {
        "title": "Large Dataset Recommendations",
        "body": (
            "With {rows} rows, your dataset is substantial enough for advanced analytics. "
            "Consider implementing data sampling for faster visualization, clustering analysis "
            "for pattern discovery, or time-series analysis if temporal columns are present."
        ),
    },
}


# =============================================================================
# TEMPLATE RENDERING
# =============================================================================

def render_template(kind: str, data: Dict[str, Any]) -> Tuple[str, str]:
    """
    Render the title and body for an insight kind.

    Args:
        kind: Insight kind (key of INSIGHT_TEMPLATES)
        data: Template variable values

    Returns:
        (title, body) tuple
    """
    template = INSIGHT_TEMPLATES.get(kind)
    if not template:
        return kind, f"[Template not found: {kind}]"

    try:
        return template["title"].format(**data), template["body"].format(**data)
    except KeyError as e:
        return template["title"], f"[Template rendering error: missing key {e}]"
