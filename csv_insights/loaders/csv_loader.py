"""CSV loader: splits delimited text into records of coerced cell values."""

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from csv_insights.core.constants import (
    CANDIDATE_DELIMITERS,
    DEFAULT_DELIMITER,
    DELIMITER_SAMPLE_SIZE,
    DEFAULT_ENCODING,
)
from csv_insights.core.exceptions import (
    DataLoadError,
    EmptyInputError,
    FileNotFoundError,
    ParseError,
)
from csv_insights.profiler.profile_result import CellValue
from csv_insights.profiler.type_inferrer import ValueCoercer

logger = logging.getLogger(__name__)


def detect_delimiter(sample: str) -> str:
    """
    Auto-detect the delimiter used in a CSV sample.

    Args:
        sample: Leading portion of the CSV text

    Returns:
        Detected delimiter character, defaults to ',' if detection fails
    """
    try:
        sniffer = csv.Sniffer()
        dialect = sniffer.sniff(sample, delimiters=CANDIDATE_DELIMITERS)
        return dialect.delimiter
    except csv.Error:
        return DEFAULT_DELIMITER


@dataclass
class ParsedTable:
    """
    Output of the row-splitting and coercion step.

    Attributes:
        header: Unique column names in source order
        records: One dict per data row, keyed by every header name
        delimiter: Delimiter that was used
    """
    header: List[str]
    records: List[Dict[str, CellValue]] = field(default_factory=list)
    delimiter: str = DEFAULT_DELIMITER


class CSVLoader:
    """
    Loader for CSV and delimited text with strict row-width checking.

    The first non-empty row is the header. Every data row must have exactly
    as many fields as the header; otherwise the whole parse fails with
    ParseError and nothing is returned. Each cell is coerced exactly once.

    Example:
        >>> loader = CSVLoader()
        >>> table = loader.parse_text("a,b\\n1,x\\n")
        >>> table.header
        ['a', 'b']
    """

    def __init__(self, delimiter: Optional[str] = None, encoding: str = DEFAULT_ENCODING):
        """
        Initialize CSVLoader.

        Args:
            delimiter: Column delimiter; auto-detected when None
            encoding: Encoding used by read_file
        """
        self.delimiter = delimiter
        self.encoding = encoding

    def read_file(self, file_path: str) -> str:
        """
        Read a CSV file as text.

        Args:
            file_path: Path to the CSV file

        Returns:
            File content with any UTF-8 BOM removed

        Raises:
            FileNotFoundError: If the path does not exist
            DataLoadError: If the file cannot be read or decoded
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(str(file_path))

        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise DataLoadError(
                f"Encoding error in {file_path}: cannot decode file with {self.encoding} encoding",
                source=str(file_path),
                original_exception=e
            )
        except OSError as e:
            raise DataLoadError(
                f"Error reading CSV file {file_path}: {str(e)}",
                source=str(file_path),
                original_exception=e
            )

    def parse_text(self, text: str, source: str = "<text>") -> ParsedTable:
        """
        Split CSV text into coerced records.

        Args:
            text: Raw CSV text, header row first
            source: Name used in error messages

        Returns:
            ParsedTable with unique header names and coerced records

        Raises:
            ParseError: If a row's field count differs from the header or
                the text is not valid CSV
            EmptyInputError: If there are no data rows
        """
        if text.startswith("\ufeff"):
            text = text[1:]

        if not text.strip():
            raise EmptyInputError(source)

        delimiter = self.delimiter or detect_delimiter(text[:DELIMITER_SAMPLE_SIZE])
        if self.delimiter is None and delimiter != DEFAULT_DELIMITER:
            logger.debug(f"Auto-detected delimiter {delimiter!r} for {source}")

        reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)
        coercer = ValueCoercer()

        header: Optional[List[str]] = None
        records: List[Dict[str, CellValue]] = []

        while True:
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as e:
                raise ParseError(
                    f"CSV parsing error in {source} at line {reader.line_num}: {str(e)}",
                    source=source,
                    line_number=reader.line_num,
                    original_exception=e
                )

            if not row:
                continue

            if header is None:
                header = self._unique_header(row, source)
                continue

            if len(row) != len(header):
                raise ParseError(
                    f"CSV parsing error in {source}: row at line {reader.line_num} has "
                    f"{len(row)} fields, expected {len(header)}",
                    source=source,
                    line_number=reader.line_num,
                    expected_fields=len(header),
                    actual_fields=len(row)
                )

            records.append({name: coercer.coerce(value) for name, value in zip(header, row)})

        if not records:
            raise EmptyInputError(source, columns=header)

        return ParsedTable(header=header, records=records, delimiter=delimiter)

    @staticmethod
    def _unique_header(row: List[str], source: str) -> List[str]:
        """Suffix repeated header names with _1, _2, ... so every name is unique."""
        header: List[str] = []
        seen = set(row)
        used = set()
        for name in row:
            if name not in used:
                header.append(name)
                used.add(name)
                continue

            suffix = 1
            while f"{name}_{suffix}" in used or f"{name}_{suffix}" in seen:
                suffix += 1
            renamed = f"{name}_{suffix}"
            logger.debug(f"Duplicate column {name!r} in {source} renamed to {renamed!r}")
            header.append(renamed)
            used.add(renamed)
        return header
