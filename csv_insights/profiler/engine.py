"""
Data profiler engine.

Parses CSV input into an immutable Dataset: coerced records plus one
ColumnDescriptor per column (null/unique counts, sample values and the
inferred semantic type).
"""

import asyncio
import logging
import threading
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from csv_insights.core.config import AnalysisConfig
from csv_insights.core.exceptions import ParseTimeoutError
from csv_insights.loaders.csv_loader import CSVLoader
from csv_insights.profiler.profile_result import (
    CellValue,
    ColumnDescriptor,
    Dataset,
)
from csv_insights.profiler.type_inferrer import TypeInferrer

logger = logging.getLogger(__name__)


def _run_in_daemon_thread(loop, func, *args) -> asyncio.Future:
    """
    Run func(*args) on a daemon thread and settle a future on loop.

    Unlike an executor thread, an abandoned daemon thread is never joined,
    neither by asyncio.run nor at interpreter exit.
    """
    future = loop.create_future()

    def settle(result, error):
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)

    def target():
        try:
            result, error = func(*args), None
        except Exception as e:
            result, error = None, e
        try:
            loop.call_soon_threadsafe(settle, result, error)
        except RuntimeError:
            # Loop closed after the caller gave up
            logger.debug(f"Discarded result of abandoned {func.__name__} call")

    threading.Thread(target=target, name="csv-insights-parse", daemon=True).start()
    return future


class DataProfiler:
    """
    Builds Datasets from CSV text or files.

    The profiler is stateless between calls: every profile_* method returns a
    new Dataset and keeps no reference to it.

    Example:
        >>> profiler = DataProfiler()
        >>> dataset = profiler.profile_text("price,city\\n10,Oslo\\n12,Rome\\n")
        >>> [c.type.value for c in dataset.columns]
        ['numerical', 'text']
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize the profiler.

        Args:
            config: Analysis settings (defaults when None)
        """
        self.config = config or AnalysisConfig()
        self.type_inferrer = TypeInferrer(
            numeric_ratio=self.config.numeric_ratio,
            datetime_ratio=self.config.datetime_ratio,
            categorical_max_unique=self.config.categorical_max_unique,
            categorical_unique_ratio=self.config.categorical_unique_ratio,
        )

    def _loader(self) -> CSVLoader:
        return CSVLoader(delimiter=self.config.delimiter, encoding=self.config.encoding)

    def profile_column(self, name: str, values: Sequence[CellValue]) -> ColumnDescriptor:
        """
        Profile one column.

        Args:
            name: Column name
            values: Every cell of the column in row order, nulls included

        Returns:
            ColumnDescriptor for the column
        """
        non_null = [cell for cell in values if not cell.is_null]

        # dict preserves first-seen order and gives value-equality de-duplication
        distinct: Dict[CellValue, None] = dict.fromkeys(non_null)
        unique_count = len(distinct)
        sample_values = tuple(list(distinct)[:self.config.sample_values_limit])

        semantic_type = self.type_inferrer.classify(non_null, unique_count)
        logger.debug(
            f"Column '{name}': type={semantic_type.value}, unique={unique_count}, "
            f"nulls={len(values) - len(non_null)}"
        )

        return ColumnDescriptor(
            name=name,
            type=semantic_type,
            unique_count=unique_count,
            null_count=len(values) - len(non_null),
            non_null_count=len(non_null),
            sample_values=sample_values,
        )

    def profile_records(
        self,
        name: str,
        header: List[str],
        records: List[Dict[str, CellValue]]
    ) -> Dataset:
        """
        Profile already-parsed records.

        Args:
            name: Dataset name
            header: Column names in source order
            records: Coerced records keyed by every header name

        Returns:
            Immutable Dataset
        """
        columns = [
            self.profile_column(column, [record[column] for record in records])
            for column in header
        ]
        return Dataset.build(name=name, records=records, columns=columns, created_at=datetime.now())

    def profile_text(self, text: str, name: str = "dataset") -> Dataset:
        """
        Parse and profile CSV text.

        Args:
            text: Raw CSV text with a header row
            name: Dataset name

        Returns:
            Immutable Dataset

        Raises:
            ParseError: If the CSV structure is malformed
            EmptyInputError: If there are no data rows
        """
        start_time = time.time()
        table = self._loader().parse_text(text, source=name)
        dataset = self.profile_records(name, table.header, table.records)
        logger.debug(
            f"Profiled {name}: {dataset.row_count} rows, {dataset.column_count} columns "
            f"in {time.time() - start_time:.3f}s"
        )
        return dataset

    def profile_file(self, file_path: str) -> Dataset:
        """
        Parse and profile a CSV file.

        Args:
            file_path: Path to the CSV file

        Returns:
            Immutable Dataset named after the file

        Raises:
            FileNotFoundError: If the file does not exist
            DataLoadError: If the file cannot be read, parsed or has no rows
        """
        loader = self._loader()
        text = loader.read_file(file_path)
        return self.profile_text(text, name=Path(file_path).name)

    async def profile_file_async(self, file_path: str, timeout: Optional[float] = None) -> Dataset:
        """
        Parse and profile a CSV file without blocking the event loop.

        The caller is suspended until the Dataset is complete or the parse
        fails; no partial result is ever produced. On timeout the caller
        resumes at once and the daemon parse thread's result is discarded.

        Args:
            file_path: Path to the CSV file
            timeout: Optional limit in seconds

        Returns:
            Immutable Dataset named after the file

        Raises:
            ParseTimeoutError: If the timeout elapses first
            DataLoadError: Any error profile_file raises
        """
        future = _run_in_daemon_thread(asyncio.get_running_loop(), self.profile_file, file_path)
        if timeout is None:
            return await future
        try:
            return await asyncio.wait_for(future, timeout=timeout)
        except asyncio.TimeoutError:
            logger.debug(f"Parse of {file_path} abandoned after {timeout}s")
            raise ParseTimeoutError(str(file_path), timeout)
