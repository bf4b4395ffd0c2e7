"""
JSON serialization utilities for analysis results.

Handles numpy types, cell values, enums and other non-standard JSON types
so that datasets, statistics and insights can be exported to JSON.
"""

import json
import math
from datetime import datetime, date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
import pandas as pd

from csv_insights.profiler.insight_engine import Insight, summarize_insights
from csv_insights.profiler.profile_result import CellValue, Dataset, StatisticsSummary


class InsightsJSONEncoder(json.JSONEncoder):
    """
    Custom JSON encoder for analysis results.

    Converts:
    - numpy int/float/bool types -> Python int/float/bool
    - numpy arrays -> Python lists
    - pandas Timestamp, datetime and date -> ISO format string
    - CellValue -> its plain payload
    - Enum -> its value
    - NaN/inf -> null
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.integer):
            return int(obj)

        if isinstance(obj, np.floating):
            if np.isnan(obj) or np.isinf(obj):
                return None
            return float(obj)

        if isinstance(obj, np.bool_):
            return bool(obj)

        if isinstance(obj, np.ndarray):
            return obj.tolist()

        if isinstance(obj, pd.Timestamp):
            return obj.isoformat()

        if isinstance(obj, (datetime, date)):
            return obj.isoformat()

        if isinstance(obj, CellValue):
            return obj.to_python()

        if isinstance(obj, Enum):
            return obj.value

        if isinstance(obj, set):
            return list(obj)

        return super().default(obj)


def convert_to_json_serializable(obj: Any) -> Any:
    """
    Recursively convert an object to JSON-serializable types.

    Args:
        obj: Object to convert

    Returns:
        JSON-serializable version of object
    """
    if obj is None:
        return None

    if isinstance(obj, np.integer):
        return int(obj)

    # Python floats too: json would otherwise emit NaN/Infinity
    if isinstance(obj, (float, np.floating)):
        if math.isnan(obj) or math.isinf(obj):
            return None
        return float(obj)

    if isinstance(obj, np.bool_):
        return bool(obj)

    if isinstance(obj, np.ndarray):
        return [convert_to_json_serializable(item) for item in obj.tolist()]

    if isinstance(obj, pd.Timestamp):
        return obj.isoformat()

    if isinstance(obj, (datetime, date)):
        return obj.isoformat()

    if isinstance(obj, CellValue):
        return obj.to_python()

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, Mapping):
        return {
            str(key): convert_to_json_serializable(value)
            for key, value in obj.items()
        }

    if isinstance(obj, (list, tuple, set)):
        return [convert_to_json_serializable(item) for item in obj]

    return obj


def build_report(
    dataset: Dataset,
    statistics: Mapping[str, StatisticsSummary],
    insights: List[Insight],
    preview_rows: Optional[int] = None
) -> Dict[str, Any]:
    """
    Assemble the JSON export for one analysis.

    Args:
        dataset: Profiled dataset
        statistics: Column name -> StatisticsSummary lookup
        insights: Generated insights
        preview_rows: Include the first N records as a preview (omitted if None)

    Returns:
        JSON-serializable dictionary
    """
    report = {
        "dataset": dataset.to_dict(),
        "statistics": {name: summary.to_dict() for name, summary in statistics.items()},
        "insights": [insight.to_dict() for insight in insights],
        "summary": summarize_insights(insights, dataset),
    }
    if preview_rows is not None:
        report["preview"] = [
            {name: record[name] for name in dataset.column_names}
            for record in dataset.preview(preview_rows)
        ]
    return convert_to_json_serializable(report)


def safe_json_dumps(obj: Any, **kwargs) -> str:
    """
    Serialize an object to a JSON string using the custom encoder.

    Args:
        obj: Object to serialize
        **kwargs: Additional arguments to pass to json.dumps

    Returns:
        JSON string
    """
    kwargs.setdefault("cls", InsightsJSONEncoder)
    kwargs.setdefault("indent", 2)
    return json.dumps(obj, **kwargs)


def write_json_report(report: Dict[str, Any], output_path: str) -> Path:
    """
    Write a report to a JSON file, creating parent directories.

    Args:
        report: Report from build_report (or any serializable object)
        output_path: Destination path

    Returns:
        Path that was written
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report, f, cls=InsightsJSONEncoder, indent=2)
    return path
