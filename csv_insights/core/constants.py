"""
csv-insights Constants.

This module defines the thresholds, limits and defaults used throughout
csv-insights. The defaults reproduce the analysis rules of the browser tool
the library grew out of; AnalysisConfig can override most of them.
"""

# ============================================================================
# Parser Constants
# ============================================================================

# Delimiters considered by auto-detection
CANDIDATE_DELIMITERS: str = ',\t|;'

# Fallback delimiter when detection fails
DEFAULT_DELIMITER: str = ','

# Number of characters sampled for delimiter detection
DELIMITER_SAMPLE_SIZE: int = 8192

# Encoding for CSV files (utf-8-sig tolerates a leading BOM)
DEFAULT_ENCODING: str = 'utf-8-sig'

# Accepted date shapes. A value must contain one of these AND be a valid
# calendar date before it is coerced to a date.
DATE_PATTERNS: list = [
    r'\d{4}-\d{2}-\d{2}',  # ISO date (2024-01-15)
    r'\d{2}/\d{2}/\d{4}',  # US date (01/15/2024)
]


# ============================================================================
# Column Profiler Constants
# ============================================================================

# A column is numerical when MORE than this share of non-null values are numbers
NUMERIC_TYPE_RATIO: float = 0.8

# A column is datetime when MORE than this share of non-null values are dates
DATETIME_TYPE_RATIO: float = 0.8

# Categorical when unique_count <= min(CATEGORICAL_MAX_UNIQUE, n * CATEGORICAL_UNIQUE_RATIO)
CATEGORICAL_MAX_UNIQUE: int = 10
CATEGORICAL_UNIQUE_RATIO: float = 0.5

# Distinct sample values kept per column
MAX_SAMPLE_VALUES: int = 10

# Rows shown by Dataset.preview()
DEFAULT_PREVIEW_ROWS: int = 10


# ============================================================================
# Statistics Constants
# ============================================================================

# Decimal places for display values (mean, median, std_dev, outlier bounds)
DISPLAY_DECIMALS: int = 2

# Nearest-rank quartile positions
Q25_POSITION: float = 0.25
Q75_POSITION: float = 0.75


# ============================================================================
# Insight Constants
# ============================================================================

# |skewness| below this is approximately normal
SKEWNESS_THRESHOLD: float = 0.5

# IQR multiplier for outlier detection (Tukey's fence)
# Outliers are values < Q1 - 1.5×IQR or > Q3 + 1.5×IQR
OUTLIER_IQR_MULTIPLIER: float = 1.5

# unique/non-null ratio above which a categorical column looks like an identifier
HIGH_CARDINALITY_RATIO: float = 0.8

# Categorical columns with at most this many categories get a summary insight
CATEGORIES_MAX_UNIQUE: int = 10

# Sample categories listed in the summary insight
CATEGORIES_SAMPLE_SIZE: int = 5

# Datasets with MORE rows than this get the large-dataset recommendation
LARGE_DATASET_ROWS: int = 1000


# ============================================================================
# Configuration Limits
# ============================================================================

# Maximum YAML configuration file size (1MB)
MAX_YAML_FILE_SIZE: int = 1024 * 1024
