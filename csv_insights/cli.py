"""
Command-line interface for csv-insights.

Provides commands for:
- Analyzing a CSV file (column profile, statistics, insights)
- Exporting the analysis as JSON
"""

import asyncio
import sys
import time

import click

from csv_insights import __version__
from csv_insights.core.config import AnalysisConfig
from csv_insights.core.constants import DEFAULT_PREVIEW_ROWS
from csv_insights.core.exceptions import (
    ConfigError,
    DataLoadError,
    EmptyInputError,
    FileNotFoundError,
    ParseError,
    ParseTimeoutError,
)
from csv_insights.core.logging_config import setup_logging, get_logger
from csv_insights.core.pretty_output import PrettyOutput as po
from csv_insights.profiler.engine import DataProfiler
from csv_insights.profiler.insight_engine import InsightEngine, InsightThresholds, summarize_insights
from csv_insights.profiler.insight_templates import format_list, format_number
from csv_insights.profiler.json_utils import build_report, write_json_report
from csv_insights.profiler.statistics_calculator import StatisticsCalculator

logger = get_logger(__name__)

# Sample values shown per column in the column table
COLUMN_TABLE_SAMPLES = 3


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    csv-insights - Automated CSV profiling and insights.

    Parses a CSV file, infers the type of every column, computes descriptive
    statistics for numerical columns and explains what it found.
    """
    pass


@cli.command()
@click.argument('file_path', type=click.Path(dir_okay=False))
@click.option('--delimiter', '-d', default=None,
              help='Column delimiter (overrides config; auto-detected by default). Use "\\t" for tab.')
@click.option('--config', '-c', 'config_file', type=click.Path(dir_okay=False),
              help='YAML file with parser, profiler and insight settings')
@click.option('--json-output', '-j', help='Path for JSON analysis output')
@click.option('--preview', '-p', type=click.IntRange(min=0), default=0, show_default=True,
              help=f'Show the first N rows (try {DEFAULT_PREVIEW_ROWS})')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), default=None,
              help='Give up parsing after this many seconds')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default='WARNING', help='Logging level')
@click.option('--log-file', type=click.Path(), help='Optional log file path')
@click.option('--no-color', is_flag=True, help='Disable colored output')
def analyze(file_path, delimiter, config_file, json_output, preview, timeout, log_level, log_file, no_color):
    """
    Analyze a CSV file.

    FILE_PATH: Path to the CSV file (first row is the header)

    Examples:

    \b
    # Basic analysis
    csv-insights analyze sales.csv

    \b
    # Semicolon-separated file with a JSON export
    csv-insights analyze sales.csv -d ";" -j sales_insights.json

    \b
    # Custom thresholds and a data preview
    csv-insights analyze sales.csv -c insights.yaml --preview 10
    """
    po.configure(color=not no_color)
    setup_logging(level=log_level, log_file=log_file)
    logger.info(f"Starting analysis: {file_path}")

    try:
        config = AnalysisConfig.from_yaml(config_file) if config_file else AnalysisConfig()
        if delimiter:
            overrides = config.to_dict()
            overrides["parser"]["delimiter"] = delimiter
            config = AnalysisConfig.from_dict(overrides)
            logger.info(f"Using delimiter: {config.delimiter!r}")
        logger.debug(f"Effective configuration: {config.to_dict()}")

        po.header("CSV INSIGHTS")
        po.task_start(f"Analyzing {file_path}")

        start_time = time.time()
        dataset = asyncio.run(DataProfiler(config).profile_file_async(file_path, timeout=timeout))

        calculator = StatisticsCalculator()
        statistics = calculator.calculate_all(dataset)
        engine = InsightEngine(InsightThresholds.from_config(config), calculator)
        insights = engine.generate(dataset, statistics)
        summary = summarize_insights(insights, dataset)
        duration = time.time() - start_time

        po.profile_summary(dataset.row_count, dataset.column_count, summary["data_quality"], duration)

        _print_columns(dataset)
        _print_statistics(statistics)
        if preview:
            _print_preview(dataset, preview)
        _print_insights(insights, summary)

        if json_output:
            report = build_report(dataset, statistics, insights, preview_rows=preview or None)
            path = write_json_report(report, json_output)
            po.blank_line()
            po.subsection("Output Files")
            po.output_file("JSON", path)

        po.blank_line()
        po.success("Analysis complete")

    except ConfigError as e:
        po.blank_line()
        po.error(f"Configuration error: {e.message}")
        sys.exit(2)

    except FileNotFoundError as e:
        po.blank_line()
        po.error(f"File not found: {e.source}")
        sys.exit(1)

    except EmptyInputError as e:
        po.blank_line()
        po.error(f"No data rows found in {e.source}")
        if e.columns:
            po.info(f"Header columns: {', '.join(e.columns)}", indent=3)
        sys.exit(1)

    except ParseError as e:
        po.blank_line()
        po.error("Error parsing file:")
        click.echo(f"   {e.message}", err=True)
        if e.expected_fields is not None:
            po.blank_line()
            po.info("Tip: Try specifying the delimiter with -d option:")
            click.echo(f"   csv-insights analyze {file_path} -d \";\"")
            click.echo(f"   csv-insights analyze {file_path} -d \"\\t\"  # for tabs")
        sys.exit(1)

    except ParseTimeoutError as e:
        po.blank_line()
        po.error(f"Parsing timed out after {e.timeout}s: {e.source}")
        sys.exit(1)

    except DataLoadError as e:
        po.blank_line()
        po.error("Error loading file:")
        click.echo(f"   {e.message}", err=True)
        sys.exit(1)

    except OSError as e:
        po.blank_line()
        po.error(f"Error writing output: {e}")
        sys.exit(1)

    sys.exit(0)


def _print_columns(dataset):
    po.section(f"Columns ({dataset.column_count})")
    rows = [
        (
            column.name,
            column.type.value,
            column.unique_count,
            column.null_count,
            format_list(column.sample_values[:COLUMN_TABLE_SAMPLES]),
        )
        for column in dataset.columns
    ]
    po.compact_table(["Column", "Type", "Unique", "Nulls", "Samples"], rows)


def _print_statistics(statistics):
    if not statistics:
        return

    po.section("Numerical Statistics")
    rows = []
    for name, summary in statistics.items():
        if summary.is_empty:
            rows.append((name, 0) + ("-",) * 8)
            continue
        rows.append((
            name,
            summary.count,
            format_number(summary.mean),
            format_number(summary.median),
            format_number(summary.mode),
            format_number(summary.min),
            format_number(summary.max),
            format_number(summary.std_dev),
            format_number(summary.q25),
            format_number(summary.q75),
        ))
    po.compact_table(
        ["Column", "Count", "Mean", "Median", "Mode", "Min", "Max", "Std Dev", "Q25", "Q75"],
        rows
    )


def _print_preview(dataset, n):
    records = dataset.preview(n)
    po.section(f"Data Preview (first {len(records)} of {dataset.row_count} rows)")
    po.compact_table(
        dataset.column_names,
        [tuple(str(record[name]) for name in dataset.column_names) for record in records]
    )


def _print_insights(insights, summary):
    po.section(f"Insights ({summary['total']})")
    for insight in insights:
        po.insight(insight.title, insight.body, insight.severity.value)
        po.blank_line()

    po.subsection("Analysis Summary")
    po.metric("Total insights", summary["total"])
    po.metric("Warnings", summary["warnings"], color=po.WARNING if summary["warnings"] else None)
    po.metric("Recommendations", summary["recommendations"])
    po.metric("Data quality", f"{summary['data_quality']}%")


@cli.command()
def version():
    """Display version information."""
    click.echo(f"csv-insights v{__version__}")
    click.echo("Automated CSV profiling, statistics and insights")


if __name__ == '__main__':
    cli()
