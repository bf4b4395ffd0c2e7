"""
Tests for the csv-insights command line.

Runs the Click commands in-process with CliRunner.
"""

import json
import time

import pytest
from click.testing import CliRunner

from csv_insights import __version__
from csv_insights.cli import cli
from csv_insights.profiler.engine import DataProfiler


SALES_CSV = (
    "region,units,price\n"
    "North,10,2.5\n"
    "South,12,2.5\n"
    "North,9,3.75\n"
    "South,11,3.75\n"
    "North,250,4.1\n"
    "South,10,2.5\n"
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def sales_file(tmp_path):
    path = tmp_path / "sales.csv"
    path.write_text(SALES_CSV, encoding="utf-8")
    return path


@pytest.mark.integration
class TestAnalyzeCommand:
    """Test the analyze command."""

    def test_analyze(self, runner, sales_file):
        """Test a successful analysis prints profile, statistics and insights."""
        result = runner.invoke(cli, ["analyze", str(sales_file), "--no-color"])

        assert result.exit_code == 0, result.output
        assert "Columns (3)" in result.output
        assert "Numerical Statistics" in result.output
        assert "Dataset Overview" in result.output
        assert "units Outliers Detected" in result.output
        assert "Analysis Summary" in result.output
        assert "Analysis complete" in result.output
        assert "\x1b[" not in result.output

    def test_preview(self, runner, sales_file):
        """Test the data preview."""
        result = runner.invoke(cli, ["analyze", str(sales_file), "--no-color", "--preview", "2"])

        assert result.exit_code == 0, result.output
        assert "Data Preview (first 2 of 6 rows)" in result.output

    def test_json_output(self, runner, sales_file, tmp_path):
        """Test the JSON export is valid and complete."""
        output = tmp_path / "out" / "sales.json"

        result = runner.invoke(cli, ["analyze", str(sales_file), "--no-color", "-j", str(output)])

        assert result.exit_code == 0, result.output
        report = json.loads(output.read_text(encoding="utf-8"))
        assert report["dataset"]["row_count"] == 6
        assert list(report["statistics"]) == ["units", "price"]
        assert report["insights"][0]["kind"] == "overview"
        assert report["summary"]["data_quality"] == 100

    def test_json_output_unwritable(self, runner, sales_file, tmp_path):
        """Test an unwritable JSON path exits with status 1."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        result = runner.invoke(
            cli, ["analyze", str(sales_file), "--no-color", "-j", str(blocker / "sales.json")]
        )

        assert result.exit_code == 1
        assert "Error writing output" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_delimiter_option(self, runner, tmp_path):
        """Test an explicit delimiter."""
        path = tmp_path / "pipes.csv"
        path.write_text("a|b\n1|x\n2|y\n", encoding="utf-8")

        result = runner.invoke(cli, ["analyze", str(path), "--no-color", "-d", "|"])

        assert result.exit_code == 0, result.output
        assert "Columns (2)" in result.output

    def test_config_option(self, runner, sales_file, tmp_path):
        """Test thresholds from a YAML config."""
        config = tmp_path / "insights.yaml"
        config.write_text("insights:\n  large_dataset_rows: 3\n", encoding="utf-8")

        result = runner.invoke(cli, ["analyze", str(sales_file), "--no-color", "-c", str(config)])

        assert result.exit_code == 0, result.output
        assert "Large Dataset Recommendations" in result.output

    def test_malformed_csv(self, runner, tmp_path):
        """Test a ragged file exits with status 1."""
        path = tmp_path / "bad.csv"
        path.write_text("a,b\n1,2\n3,4,5\n", encoding="utf-8")

        result = runner.invoke(cli, ["analyze", str(path), "--no-color"])

        assert result.exit_code == 1
        assert "Error parsing file" in result.output

    def test_empty_csv(self, runner, tmp_path):
        """Test a header-only file exits with status 1."""
        path = tmp_path / "empty.csv"
        path.write_text("a,b\n", encoding="utf-8")

        result = runner.invoke(cli, ["analyze", str(path), "--no-color"])

        assert result.exit_code == 1
        assert "No data rows found" in result.output

    def test_missing_file(self, runner, tmp_path):
        """Test a missing file exits with status 1."""
        result = runner.invoke(cli, ["analyze", str(tmp_path / "nope.csv"), "--no-color"])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_timeout(self, runner, sales_file, monkeypatch):
        """Test --timeout gives up on a slow parse."""
        def slow_profile(self, file_path):
            time.sleep(1.5)

        monkeypatch.setattr(DataProfiler, "profile_file", slow_profile)

        start = time.monotonic()
        result = runner.invoke(cli, ["analyze", str(sales_file), "--no-color", "--timeout", "0.05"])
        elapsed = time.monotonic() - start

        assert result.exit_code == 1
        assert "Parsing timed out after 0.05s" in result.output
        assert elapsed < 1.0

    def test_invalid_config(self, runner, sales_file, tmp_path):
        """Test an invalid config exits with status 2."""
        config = tmp_path / "bad.yaml"
        config.write_text("profiler:\n  numeric_ratio: 3\n", encoding="utf-8")

        result = runner.invoke(cli, ["analyze", str(sales_file), "--no-color", "-c", str(config)])

        assert result.exit_code == 2
        assert "Configuration error" in result.output


@pytest.mark.unit
class TestVersionCommand:
    """Test version output."""

    def test_version(self, runner):
        """Test the version command."""
        result = runner.invoke(cli, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_option(self, runner):
        """Test the --version option."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
