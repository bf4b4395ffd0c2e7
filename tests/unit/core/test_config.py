"""
Unit tests for AnalysisConfig.

Tests defaults, dictionary and YAML loading, and validation failures.
"""

import pytest
import yaml

from csv_insights.core.config import AnalysisConfig, CONFIG_SCHEMA
from csv_insights.core.exceptions import ConfigError, ConfigValidationError, YAMLSizeError


@pytest.mark.unit
class TestDefaults:
    """Test default configuration."""

    def test_defaults_match_standard_analysis(self):
        """Test that an empty config reproduces the standard thresholds."""
        config = AnalysisConfig()

        assert config.delimiter is None
        assert config.encoding == "utf-8-sig"
        assert config.numeric_ratio == 0.8
        assert config.datetime_ratio == 0.8
        assert config.categorical_max_unique == 10
        assert config.categorical_unique_ratio == 0.5
        assert config.sample_values_limit == 10
        assert config.skew_threshold == 0.5
        assert config.outlier_iqr_multiplier == 1.5
        assert config.high_cardinality_ratio == 0.8
        assert config.categories_max_unique == 10
        assert config.categories_sample_size == 5
        assert config.large_dataset_rows == 1000

    def test_to_dict_has_every_section(self):
        """Test to_dict exposes every schema key."""
        result = AnalysisConfig().to_dict()

        assert set(result) == set(CONFIG_SCHEMA)
        for section, keys in CONFIG_SCHEMA.items():
            assert set(result[section]) == set(keys)

    def test_none_is_defaults(self):
        """Test None behaves like an empty mapping."""
        assert AnalysisConfig.from_dict(None).to_dict() == AnalysisConfig().to_dict()


@pytest.mark.unit
class TestFromDict:
    """Test dictionary configuration."""

    def test_partial_override(self):
        """Test overriding a single key keeps other defaults."""
        config = AnalysisConfig.from_dict({"insights": {"large_dataset_rows": 5000}})

        assert config.large_dataset_rows == 5000
        assert config.skew_threshold == 0.5

    def test_escaped_tab_delimiter(self):
        """Test an escaped tab is decoded."""
        config = AnalysisConfig.from_dict({"parser": {"delimiter": "\\t"}})

        assert config.delimiter == "\t"

    def test_integer_ratio_normalized(self):
        """Test integer ratios become floats."""
        config = AnalysisConfig.from_dict({"profiler": {"numeric_ratio": 1}})

        assert config.numeric_ratio == 1.0
        assert isinstance(config.numeric_ratio, float)

    def test_round_trip(self):
        """Test to_dict output is accepted by from_dict."""
        config = AnalysisConfig.from_dict({
            "parser": {"delimiter": ";"},
            "profiler": {"sample_values_limit": 3},
        })

        assert AnalysisConfig.from_dict(config.to_dict()).to_dict() == config.to_dict()


@pytest.mark.unit
class TestValidation:
    """Test configuration validation failures."""

    def test_unknown_section(self):
        """Test unknown sections are rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            AnalysisConfig.from_dict({"charts": {}})

        assert exc_info.value.field == "charts"

    def test_unknown_key(self):
        """Test unknown keys are rejected with a dotted field name."""
        with pytest.raises(ConfigValidationError) as exc_info:
            AnalysisConfig.from_dict({"insights": {"colour": "red"}})

        assert exc_info.value.field == "insights.colour"

    def test_not_a_mapping(self):
        """Test a top-level list is rejected."""
        with pytest.raises(ConfigValidationError):
            AnalysisConfig.from_dict(["parser"])

    def test_section_not_a_mapping(self):
        """Test a section must be a mapping."""
        with pytest.raises(ConfigValidationError):
            AnalysisConfig.from_dict({"profiler": [1, 2]})

    @pytest.mark.parametrize("section,key,value", [
        ("profiler", "numeric_ratio", 1.5),
        ("profiler", "numeric_ratio", 0),
        ("profiler", "categorical_max_unique", 0),
        ("profiler", "sample_values_limit", 2.5),
        ("insights", "skew_threshold", -1),
        ("insights", "large_dataset_rows", -1),
        ("insights", "categories_sample_size", True),
        ("insights", "outlier_iqr_multiplier", "wide"),
        ("parser", "delimiter", ",,"),
        ("parser", "delimiter", '"'),
        ("parser", "encoding", ""),
    ])
    def test_invalid_values(self, section, key, value):
        """Test out-of-range and wrongly typed values."""
        with pytest.raises(ConfigValidationError) as exc_info:
            AnalysisConfig.from_dict({section: {key: value}})

        assert exc_info.value.field == f"{section}.{key}"

    def test_validation_error_is_config_error(self):
        """Test validation errors can be caught as ConfigError."""
        with pytest.raises(ConfigError):
            AnalysisConfig.from_dict({"profiler": {"numeric_ratio": 2}})


@pytest.mark.unit
class TestFromYaml:
    """Test YAML configuration files."""

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML file."""
        config_file = tmp_path / "insights.yaml"
        config_file.write_text(yaml.safe_dump({
            "parser": {"delimiter": ";"},
            "insights": {"skew_threshold": 1.0, "large_dataset_rows": 50},
        }))

        config = AnalysisConfig.from_yaml(str(config_file))

        assert config.delimiter == ";"
        assert config.skew_threshold == 1.0
        assert config.large_dataset_rows == 50

    def test_empty_yaml_is_defaults(self, tmp_path):
        """Test an empty file gives the defaults."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        assert AnalysisConfig.from_yaml(str(config_file)).to_dict() == AnalysisConfig().to_dict()

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            AnalysisConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML raises ConfigError."""
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("insights: [unclosed\n")

        with pytest.raises(ConfigError, match="Failed to parse YAML"):
            AnalysisConfig.from_yaml(str(config_file))

    def test_file_too_large(self, tmp_path, monkeypatch):
        """Test the size limit is enforced before parsing."""
        monkeypatch.setattr(AnalysisConfig, "MAX_YAML_FILE_SIZE", 10)
        config_file = tmp_path / "big.yaml"
        config_file.write_text("insights:\n  large_dataset_rows: 5000\n")

        with pytest.raises(YAMLSizeError) as exc_info:
            AnalysisConfig.from_yaml(str(config_file))

        assert exc_info.value.details['max_size'] == 10
