"""
Integration test for the full analysis pipeline.

Parses a realistic CSV file, profiles it, computes statistics and generates
insights, checking the results end to end.
"""

import pytest

from csv_insights import (
    AnalysisConfig,
    DataProfiler,
    InsightEngine,
    InsightKind,
    SemanticType,
    StatisticsCalculator,
    load_csv_file,
    parse_csv_data,
    summarize_insights
)
from csv_insights.profiler.insight_engine import InsightThresholds


ORDERS_CSV = (
    "date,region,product,units,price,notes\n"
    "2024-01-05,North,Widget,10,2.50,first order\n"
    "2024-01-06,South,Widget,12,2.50,\n"
    "2024-01-07,North,Gadget,9,3.75,repeat\n"
    "2024-01-08,East,Gadget,11,3.75,\n"
    "2024-01-09,South,Widget,10,2.50,bulk\n"
    "2024-01-10,North,Gizmo,250,4.10,\n"
    "2024-01-11,East,Widget,13,2.50,promo\n"
    "2024-01-12,South,Gadget,10,3.75,\n"
)


@pytest.mark.integration
class TestPipeline:
    """End-to-end tests from CSV file to insights."""

    @pytest.fixture
    def orders_file(self, tmp_path):
        """Write the orders sample to disk."""
        path = tmp_path / "orders.csv"
        path.write_text(ORDERS_CSV, encoding="utf-8")
        return path

    @pytest.fixture
    def dataset(self, orders_file):
        return load_csv_file(str(orders_file))

    def test_profile(self, dataset):
        """Test dataset shape and column types."""
        assert dataset.name == "orders.csv"
        assert dataset.row_count == 8
        assert [c.type for c in dataset.columns] == [
            SemanticType.DATETIME,
            SemanticType.CATEGORICAL,
            SemanticType.CATEGORICAL,
            SemanticType.NUMERICAL,
            SemanticType.NUMERICAL,
            SemanticType.TEXT,
        ]
        assert dataset.column("notes").null_count == 4

    def test_statistics(self, dataset):
        """Test statistics for the numerical columns."""
        statistics = StatisticsCalculator().calculate_all(dataset)

        units = statistics["units"]
        assert units.count == 8
        assert units.median == 10.5
        assert units.mode == 10
        assert (units.q25, units.q75) == (10, 13)
        assert units.max == 250

        price = statistics["price"]
        assert price.mean == 3.17
        assert price.mode == 2.5

    def test_insights(self, dataset):
        """Test the ordered insight list and its summary."""
        insights = InsightEngine().generate(dataset)

        assert [i.kind for i in insights] == [
            InsightKind.OVERVIEW,
            InsightKind.DISTRIBUTION,
            InsightKind.OUTLIERS,
            InsightKind.DISTRIBUTION,
            InsightKind.CATEGORIES,
            InsightKind.CATEGORIES,
            InsightKind.QUALITY,
            InsightKind.CORRELATION,
        ]
        assert insights[0].body.startswith("Your dataset contains 8 records with 6 features.")
        assert "2 numerical columns and 2 categorical columns" in insights[0].body
        assert "Found 1 potential outliers (12.5% of data) in 'units'" in insights[2].body
        assert "[5.50, 17.50]" in insights[2].body
        assert "notes (4 missing)" in insights[6].body
        assert "(units, price)" in insights[7].body

        assert summarize_insights(insights, dataset) == {
            "total": 8,
            "warnings": 2,
            "recommendations": 0,
            "data_quality": 83,
        }

    def test_configured_pipeline(self, orders_file):
        """Test config flows through profiling and insights."""
        config = AnalysisConfig.from_dict({
            "profiler": {"categorical_unique_ratio": 0.1},
            "insights": {"outlier_iqr_multiplier": 100, "large_dataset_rows": 5},
        })

        dataset = DataProfiler(config).profile_file(str(orders_file))
        insights = InsightEngine(InsightThresholds.from_config(config)).generate(dataset)

        assert not dataset.columns_of_type(SemanticType.CATEGORICAL)
        kinds = [i.kind for i in insights]
        assert InsightKind.OUTLIERS not in kinds
        assert kinds[-1] is InsightKind.RECOMMENDATION

    def test_repeatable(self, orders_file):
        """Test analysing the same file twice gives the same insights."""
        first = InsightEngine().generate(load_csv_file(str(orders_file)))
        second = InsightEngine().generate(load_csv_file(str(orders_file)))

        assert first == second

    def test_very_large_values(self):
        """Test a column of very large numbers runs through the whole pipeline."""
        dataset = parse_csv_data("x\n1e27\n2e27\n3e27\n")

        insights = InsightEngine().generate(dataset)

        assert dataset.columns[0].type is SemanticType.NUMERICAL
        assert [i.kind for i in insights][:2] == [InsightKind.OVERVIEW, InsightKind.DISTRIBUTION]
        assert summarize_insights(insights, dataset)["total"] == len(insights)
