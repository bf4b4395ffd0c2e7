"""Configuration parsing and validation."""

import yaml
import os
from typing import Dict, Any, Optional
from pathlib import Path
from csv_insights.core.exceptions import (
    ConfigError,
    YAMLSizeError,
    ConfigValidationError
)
from csv_insights.core.constants import (
    MAX_YAML_FILE_SIZE,
    DEFAULT_ENCODING,
    NUMERIC_TYPE_RATIO,
    DATETIME_TYPE_RATIO,
    CATEGORICAL_MAX_UNIQUE,
    CATEGORICAL_UNIQUE_RATIO,
    MAX_SAMPLE_VALUES,
    SKEWNESS_THRESHOLD,
    OUTLIER_IQR_MULTIPLIER,
    HIGH_CARDINALITY_RATIO,
    CATEGORIES_MAX_UNIQUE,
    CATEGORIES_SAMPLE_SIZE,
    LARGE_DATASET_ROWS,
)


# Schema: section -> key -> (kind, default). Kinds: 'ratio' (0 < x <= 1),
# 'positive' (float > 0), 'count' (int >= 1), 'size' (int >= 0),
# 'delimiter' (single character or None), 'text' (non-empty string).
CONFIG_SCHEMA: Dict[str, Dict[str, tuple]] = {
    "parser": {
        "delimiter": ("delimiter", None),
        "encoding": ("text", DEFAULT_ENCODING),
    },
    "profiler": {
        "numeric_ratio": ("ratio", NUMERIC_TYPE_RATIO),
        "datetime_ratio": ("ratio", DATETIME_TYPE_RATIO),
        "categorical_max_unique": ("count", CATEGORICAL_MAX_UNIQUE),
        "categorical_unique_ratio": ("ratio", CATEGORICAL_UNIQUE_RATIO),
        "sample_values_limit": ("count", MAX_SAMPLE_VALUES),
    },
    "insights": {
        "skew_threshold": ("positive", SKEWNESS_THRESHOLD),
        "outlier_iqr_multiplier": ("positive", OUTLIER_IQR_MULTIPLIER),
        "high_cardinality_ratio": ("ratio", HIGH_CARDINALITY_RATIO),
        "categories_max_unique": ("count", CATEGORIES_MAX_UNIQUE),
        "categories_sample_size": ("count", CATEGORIES_SAMPLE_SIZE),
        "large_dataset_rows": ("size", LARGE_DATASET_ROWS),
    },
}


class AnalysisConfig:
    """
    Tunable settings for parsing, profiling and insight generation.

    Every setting has a default, so ``AnalysisConfig()`` reproduces the
    standard analysis exactly. Settings are exposed as attributes named
    after their key (``config.numeric_ratio``, ``config.delimiter``, ...).

    Example YAML:

        parser:
          delimiter: ";"
        insights:
          large_dataset_rows: 5000
    """

    MAX_YAML_FILE_SIZE = MAX_YAML_FILE_SIZE

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        """
        Initialize from configuration dictionary.

        Args:
            config_dict: Nested dictionary of sections; missing keys use defaults

        Raises:
            ConfigValidationError: If a section, key or value is invalid
        """
        self.raw_config = config_dict or {}
        self._parse_config()

    @classmethod
    def from_dict(cls, config_dict: Optional[Dict[str, Any]]) -> "AnalysisConfig":
        """Build a configuration from an already-parsed dictionary."""
        return cls(config_dict)

    @classmethod
    def from_yaml(cls, config_path: str) -> "AnalysisConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            AnalysisConfig instance

        Raises:
            ConfigError: If file not found or invalid
            YAMLSizeError: If file exceeds size limit
            ConfigValidationError: If the structure does not match the schema
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        file_size = os.path.getsize(config_file)
        if file_size > cls.MAX_YAML_FILE_SIZE:
            raise YAMLSizeError(
                f"Configuration file too large: {file_size:,} bytes. "
                f"Maximum allowed: {cls.MAX_YAML_FILE_SIZE:,} bytes",
                file_size=file_size,
                max_size=cls.MAX_YAML_FILE_SIZE
            )

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse YAML file: {str(e)}")
        except UnicodeDecodeError as e:
            raise ConfigError(f"Invalid file encoding (expected UTF-8): {str(e)}")

        return cls(config_dict)

    def _parse_config(self) -> None:
        """Validate the raw dictionary and populate attributes."""
        if not isinstance(self.raw_config, dict):
            raise ConfigValidationError(
                "Configuration must be a mapping of sections",
                expected="mapping",
                actual=type(self.raw_config).__name__
            )

        unknown_sections = set(self.raw_config) - set(CONFIG_SCHEMA)
        if unknown_sections:
            raise ConfigValidationError(
                f"Unknown configuration section(s): {', '.join(sorted(map(str, unknown_sections)))}",
                field=sorted(map(str, unknown_sections))[0],
                expected=", ".join(CONFIG_SCHEMA)
            )

        for section, keys in CONFIG_SCHEMA.items():
            values = self.raw_config.get(section) or {}
            if not isinstance(values, dict):
                raise ConfigValidationError(
                    f"Section '{section}' must be a mapping",
                    field=section,
                    expected="mapping",
                    actual=type(values).__name__
                )

            unknown_keys = set(values) - set(keys)
            if unknown_keys:
                first = sorted(map(str, unknown_keys))[0]
                raise ConfigValidationError(
                    f"Unknown key '{first}' in section '{section}'",
                    field=f"{section}.{first}",
                    expected=", ".join(keys)
                )

            for key, (kind, default) in keys.items():
                value = values.get(key, default)
                setattr(self, key, self._validate_value(f"{section}.{key}", kind, value))

    @staticmethod
    def _validate_value(field: str, kind: str, value: Any) -> Any:
        """Check one value against its kind, returning the normalized value."""
        if kind == "delimiter":
            if value is None:
                return None
            if isinstance(value, str):
                value = value.encode().decode("unicode_escape") if value.startswith("\\") else value
                if len(value) == 1 and value not in ('"', "\n", "\r"):
                    return value
            raise ConfigValidationError(
                f"Invalid delimiter for '{field}'",
                field=field, expected="single character", actual=repr(value)
            )

        if kind == "text":
            if isinstance(value, str) and value.strip():
                return value
            raise ConfigValidationError(
                f"Invalid value for '{field}'",
                field=field, expected="non-empty string", actual=repr(value)
            )

        # Numeric kinds; bool is an int subclass and never a valid number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigValidationError(
                f"Invalid value for '{field}'",
                field=field, expected="number", actual=repr(value)
            )

        if kind == "ratio" and 0 < value <= 1:
            return float(value)
        if kind == "positive" and value > 0:
            return float(value)
        if kind == "count" and isinstance(value, int) and value >= 1:
            return value
        if kind == "size" and isinstance(value, int) and value >= 0:
            return value

        expected = {
            "ratio": "number in (0, 1]",
            "positive": "number > 0",
            "count": "integer >= 1",
            "size": "integer >= 0",
        }[kind]
        raise ConfigValidationError(
            f"Invalid value for '{field}'",
            field=field, expected=expected, actual=repr(value)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the effective configuration (defaults included)."""
        return {
            section: {key: getattr(self, key) for key in keys}
            for section, keys in CONFIG_SCHEMA.items()
        }

    def __repr__(self) -> str:
        return f"AnalysisConfig({self.to_dict()!r})"
