# -*- coding: utf-8 -*-
"""Column checks for the ingested input tables.

Compares each table's headers with the columns the pipeline reads and logs
what is missing. Missing columns are not fatal: the affected fields fall back
to their defaults (None dates, 0 numbers, "N/A" text), so these checks only
make a silently defaulted run visible in the log.

Usage:
    from sales_recon.pipeline.validation import validate_table

    missing = validate_table(rows, "sales", "vendas.csv")
"""

import logging
from typing import Any, Dict, List, Optional

from sales_recon.modules.catalog.pack_index import (
    PACK_QUANTITY_COLUMN,
    PRODUCT_CODE_COLUMN,
)
from sales_recon.modules.clients.client_index import (
    CLIENT_CODE_COLUMN,
    LAST_PURCHASE_COLUMN,
    ROUTING_CODE_COLUMNS,
)
from sales_recon.modules.sales.columns import SALES_COLUMNS

logger = logging.getLogger(__name__)


EXPECTED_SCHEMAS = {
    "sales": {"required_columns": SALES_COLUMNS},
    "historical_sales": {"required_columns": SALES_COLUMNS},
    "clients": {
        "required_columns": [CLIENT_CODE_COLUMN, *ROUTING_CODE_COLUMNS, LAST_PURCHASE_COLUMN],
    },
    "products": {"required_columns": [PRODUCT_CODE_COLUMN, PACK_QUANTITY_COLUMN]},
}


def _table_columns(rows: List[Dict[str, Any]]) -> List[str]:
    columns: List[str] = []
    for row in rows:
        for column in row:
            if column not in columns:
                columns.append(column)
    return columns


def _check_required_columns(
    rows: List[Dict[str, Any]], source_name: str, schema: Dict
) -> List[str]:
    """Return the required columns absent from the table's headers."""
    present = set(_table_columns(rows))
    missing = [col for col in schema.get("required_columns", []) if col not in present]
    if missing:
        logger.warning(f"{source_name} missing expected columns: {missing}")
    return missing


def _check_not_empty(rows: List[Dict[str, Any]], source_name: str) -> bool:
    if not rows:
        logger.warning(f"{source_name}: no data rows")
        return False
    return True


def validate_table(
    rows: List[Dict[str, Any]], table_name: str, source_name: Optional[str] = None
) -> List[str]:
    """Check an ingested table against its expected columns.

    Args:
        rows: Raw rows of the table.
        table_name: One of "sales", "historical_sales", "clients", "products".
        source_name: Name used in log messages (default: table_name).

    Returns:
        List of missing column names (empty when all are present, or when
        the table has no rows to check).

    Raises:
        ValueError: If table_name is not a recognized table.
    """
    if table_name not in EXPECTED_SCHEMAS:
        raise ValueError(f"Unknown table: {table_name}")

    source_name = source_name or table_name
    if not _check_not_empty(rows, source_name):
        return []
    return _check_required_columns(rows, source_name, EXPECTED_SCHEMAS[table_name])
