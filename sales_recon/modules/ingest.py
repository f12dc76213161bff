# -*- coding: utf-8 -*-
"""Read the four input tables (delimited text or spreadsheet) into raw rows.

Handles the two container formats the exports come in:
1. Delimited text (.csv/.txt): UTF-8 with latin-1 fallback, ';' when the
   header line contains one and ',' otherwise
2. Spreadsheet workbook (.xlsx/.xlsm): first sheet, date cells as datetime

Every table becomes a list of RawRow dicts keyed by trimmed header names,
with empty cells as None. Anything that prevents reading a file at all is
an IngestionError naming the file; bad individual values are left for the
value parsers to default.
"""

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

logger = logging.getLogger(__name__)

RawRow = Dict[str, Any]

# ============================================================================
# CONFIGURATION
# ============================================================================

DELIMITED = "delimited"
WORKBOOK = "workbook"

FORMAT_BY_SUFFIX = {
    ".csv": DELIMITED,
    ".txt": DELIMITED,
    ".xlsx": WORKBOOK,
    ".xlsm": WORKBOOK,
}

ENCODINGS = ["utf-8-sig", "latin1"]


class IngestionError(Exception):
    """A source file could not be read as a table."""

    def __init__(self, source_name: str, path: Path, reason: str):
        self.source_name = source_name
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to read {source_name} file {self.path.name}: {reason}")


@dataclass(frozen=True)
class TableSource:
    """One input table: logical name, file path and optional declared format."""

    name: str
    path: Path
    format: Optional[str] = None


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def resolve_format(source: TableSource) -> str:
    """Return the declared format, or infer it from the file suffix."""
    if source.format:
        if source.format not in (DELIMITED, WORKBOOK):
            raise IngestionError(
                source.name, source.path, f"unknown format {source.format!r}"
            )
        return source.format

    table_format = FORMAT_BY_SUFFIX.get(Path(source.path).suffix.lower())
    if table_format is None:
        raise IngestionError(
            source.name, source.path, f"unsupported file type {Path(source.path).suffix!r}"
        )
    return table_format


def decode_text(source: TableSource) -> str:
    """Read a text file, trying UTF-8 first and latin-1 as fallback."""
    try:
        raw = Path(source.path).read_bytes()
    except OSError as e:
        raise IngestionError(source.name, source.path, str(e)) from e

    for encoding in ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            logger.debug(f"{Path(source.path).name}: not {encoding}, trying next")
            continue

    raise IngestionError(source.name, source.path, "could not decode file contents")


def detect_delimiter(text: str) -> str:
    """Use ';' when the header line contains one, ',' otherwise."""
    first_line = text.splitlines()[0] if text else ""
    return ";" if ";" in first_line else ","


def dataframe_to_rows(df: pd.DataFrame) -> List[RawRow]:
    """Convert a DataFrame to RawRow dicts with trimmed headers and None for NaN."""
    df = df.copy()
    df.columns = [str(col).strip() for col in df.columns]
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict(orient="records")


# ============================================================================
# READERS
# ============================================================================


def read_delimited(source: TableSource) -> List[RawRow]:
    """Read a delimited text file into raw rows.

    Raises:
        IngestionError: If the file is missing, empty or malformed
    """
    text = decode_text(source)
    if not text.strip():
        raise IngestionError(source.name, source.path, "file is empty")

    delimiter = detect_delimiter(text)
    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            dtype=str,
            index_col=False,
            keep_default_na=False,
            na_values=[""],
        )
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise IngestionError(source.name, source.path, f"invalid delimited file: {e}") from e

    logger.debug(f"{Path(source.path).name}: delimiter {delimiter!r}")
    return dataframe_to_rows(df)


def read_workbook(source: TableSource) -> List[RawRow]:
    """Read the first sheet of a spreadsheet workbook into raw rows.

    Raises:
        IngestionError: If the workbook is missing or cannot be parsed
    """
    if not Path(source.path).exists():
        raise IngestionError(source.name, source.path, "file not found")

    try:
        df = pd.read_excel(source.path, sheet_name=0, dtype=object, engine="openpyxl")
    except Exception as e:
        raise IngestionError(source.name, source.path, f"invalid workbook: {e}") from e

    return dataframe_to_rows(df)


def read_table(source: TableSource) -> List[RawRow]:
    """Read one input table in its declared (or inferred) format.

    Args:
        source: Table to read

    Returns:
        List of RawRow dicts in file order

    Raises:
        IngestionError: On any structural read failure
    """
    table_format = resolve_format(source)
    if table_format == WORKBOOK:
        rows = read_workbook(source)
    else:
        rows = read_delimited(source)

    logger.info(f"Loaded {source.name}: {len(rows)} rows from {Path(source.path).name}")
    return rows


def ingest_tables(
    sources: Dict[str, TableSource], max_workers: Optional[int] = None
) -> Dict[str, List[RawRow]]:
    """Read several independent tables concurrently.

    Args:
        sources: Table name -> TableSource
        max_workers: Thread pool size (default: one thread per table)

    Returns:
        Table name -> raw rows, in the order of ``sources``

    Raises:
        IngestionError: The first failure, in ``sources`` order
    """
    if not sources:
        return {}

    with ThreadPoolExecutor(max_workers=max_workers or len(sources)) as executor:
        futures = {name: executor.submit(read_table, source) for name, source in sources.items()}
        return {name: future.result() for name, future in futures.items()}
