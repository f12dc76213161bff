# -*- coding: utf-8 -*-
"""Locale-aware value parsing for raw sales, client and product cells.

Source tables arrive as delimited text or spreadsheet exports, so the same
logical value may show up as a native date, a spreadsheet serial number, a
Brazilian-formatted string ("1.234,56", "25/12/2024") or an international one
("1234.56"). Every function here is total: unparseable input falls back to a
deterministic default (None for dates, 0 for numbers, "" or a caller-supplied
default for text) instead of raising, so one bad cell never aborts a batch.
"""

import logging
import math
import numbers
import re
from datetime import date, datetime
from typing import Any, Optional

import pandas as pd

logger = logging.getLogger(__name__)

# ============================================================================
# CONFIGURATION
# ============================================================================

# Spreadsheet serial 25569 is 1970-01-01 (serials count days from 1899-12-30)
SPREADSHEET_EPOCH_OFFSET_DAYS = 25569

STRICT_DATE_PATTERN = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
CURRENCY_PREFIX_PATTERN = re.compile(r"^\s*R\$\s*", re.IGNORECASE)
LEADING_INTEGER_PATTERN = re.compile(r"^[+-]?\d+")
TIME_COMPONENT_PATTERN = re.compile(r"\d{1,2}:\d{2}")

TRUE_FLAGS = {"S", "SIM", "Y", "YES", "TRUE", "VERDADEIRO", "1", "X", "BLOQUEADO"}


# ============================================================================
# HELPERS
# ============================================================================


def is_missing(value: Any) -> bool:
    """Return True for None, NaN, NaT and pandas NA scalars."""
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _to_naive_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, pd.Timestamp):
        if value is pd.NaT or pd.isna(value):
            return None
        if value.tzinfo is not None:
            value = value.tz_localize(None)
        return value.to_pydatetime()
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return datetime(value.year, value.month, value.day)


def _parse_serial_date(serial: float) -> Optional[datetime]:
    try:
        timestamp = pd.to_datetime(serial - SPREADSHEET_EPOCH_OFFSET_DAYS, unit="D")
    except (ValueError, OverflowError, TypeError):
        return None
    return _to_naive_datetime(timestamp)


def _parse_date_text(text: str) -> Optional[datetime]:
    match = STRICT_DATE_PATTERN.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            return datetime(year, month, day)
        except ValueError:
            logger.debug(f"Invalid calendar date {text!r}, trying generic parser")

    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, OverflowError, TypeError):
        return None
    if is_missing(parsed):
        return None
    return _to_naive_datetime(parsed)


# ============================================================================
# PUBLIC API
# ============================================================================


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a date cell into a naive datetime.

    Accepts:
    - Native dates (datetime, date, pandas Timestamp)
    - Spreadsheet serial numbers: 45000 -> 2023-03-15
    - Text in strict DD/MM/YYYY form: "25/12/2024" -> 2024-12-25 00:00
    - Any other date text pandas can parse: "2024-03-01"

    Args:
        value: Raw cell value

    Returns:
        Parsed datetime, or None for empty, falsy or unparseable input
    """
    if is_missing(value) or not value:
        return None

    if isinstance(value, (datetime, date)):
        return _to_naive_datetime(value)

    if _is_number(value):
        return _parse_serial_date(float(value))

    text = str(value).strip()
    if not text:
        return None
    return _parse_date_text(text)


def parse_locale_number(value: Any) -> float:
    """Parse a number written with either decimal convention.

    Whichever of ',' and '.' appears last is the decimal separator; the other
    one is dropped as a thousands separator:
    - "1.234,56" -> 1234.56
    - "1,234.56" -> 1234.56
    - "R$ 10,50" -> 10.5
    - "abc" / "" -> 0

    Args:
        value: Raw cell value (numbers are returned unchanged)

    Returns:
        Parsed number, 0 when the value is empty or not numeric
    """
    if is_missing(value):
        return 0.0
    if _is_number(value):
        return value

    text = CURRENCY_PREFIX_PATTERN.sub("", str(value)).strip()
    if not text:
        return 0.0

    last_comma = text.rfind(",")
    last_dot = text.rfind(".")
    if last_comma > last_dot:
        text = text.replace(".", "").replace(",", ".")
    elif last_dot > last_comma:
        text = text.replace(",", "")

    try:
        number = float(text)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_int(value: Any) -> int:
    """Parse the leading base-10 integer of a cell ("12 un" -> 12, "" -> 0)."""
    if is_missing(value):
        return 0
    if _is_number(value):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return 0

    match = LEADING_INTEGER_PATTERN.match(str(value).strip())
    return int(match.group()) if match else 0


def clean_code(value: Any) -> str:
    """Normalize an identifier cell to text.

    Spreadsheet readers hand back integer-like identifiers as floats, so
    1002.0 becomes "1002".
    """
    if is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def clean_text(value: Any, default: str = "") -> str:
    """Strip a text cell, returning default when it is empty."""
    if is_missing(value):
        return default
    text = str(value).strip()
    return text if text else default


def date_portion(value: Any) -> str:
    """Keep only the date part of a value that carries a time component.

    "15/03/2023 10:22:00" -> "15/03/2023"; values without a time are
    returned trimmed and unchanged.
    """
    if is_missing(value):
        return ""
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")

    text = str(value).strip()
    if TIME_COMPONENT_PATTERN.search(text):
        return re.split(r"[\sT]", text, maxsplit=1)[0]
    return text


def parse_flag(value: Any) -> bool:
    """Interpret a yes/no cell ("S", "Sim", "X", 1, True...)."""
    if is_missing(value):
        return False
    if isinstance(value, bool):
        return value
    if _is_number(value):
        return value != 0
    return str(value).strip().upper() in TRUE_FLAGS
