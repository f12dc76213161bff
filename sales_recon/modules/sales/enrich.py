# -*- coding: utf-8 -*-
"""Join raw sales rows with clients, products and the correction rules.

Module: sales
Raw source: Vendas (current period) and Vendas histórico (historical)
Pipeline stage: raw sales rows → EnrichedSalesRecord

This module:
1. Resolves the row's client (display fields default to "N/A" when unknown)
2. Applies the correction rules (vendor, supervisor, RCA, order date)
3. Parses quantity (integer), sale value and net weight (locale numbers)
4. Expresses the quantity in master packs (quantity / pack size)

Current and historical sales go through exactly the same logic and never
interact with each other.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sales_recon.modules.catalog.pack_index import get_pack_size
from sales_recon.modules.clients.client_index import ClientRecord
from sales_recon.modules.constants import NOT_AVAILABLE
from sales_recon.modules.lineage import DataLineage
from sales_recon.modules.sales.columns import (
    CLIENT_CODE_COLUMN,
    DESCRIPTION_COLUMN,
    NET_WEIGHT_COLUMN,
    PRODUCT_CODE_COLUMN,
    QUANTITY_COLUMN,
    SALE_VALUE_COLUMN,
    STATUS_COLUMN,
    SUPPLIER_CODE_COLUMN,
    SUPPLIER_COLUMN,
    SUPPLIER_NOTE_COLUMN,
)
from sales_recon.modules.sales.rules import RuleResolution, resolve_row
from sales_recon.utils.value_parsing import (
    clean_code,
    clean_text,
    parse_int,
    parse_locale_number,
)

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_UNKNOWN_CLIENT = "defaulted: unknown client"


@dataclass(frozen=True)
class EnrichedSalesRecord:
    """One reconciled sales line."""

    order_id: str
    vendor: str
    supervisor: str
    routing_code: str
    product_code: str
    description: str
    supplier: str
    supplier_note: str
    supplier_code: str
    client_code: str
    client_name: str
    client_city: str
    client_neighborhood: str
    quantity_sold: int
    sale_value: float
    net_weight: float
    order_date: Optional[datetime]
    exit_date: Optional[datetime]
    status: str
    master_pack_quantity: float


def build_record(
    row: Dict[str, Any],
    client_code: str,
    client: Optional[ClientRecord],
    resolution: RuleResolution,
    pack_index: Dict[str, int],
) -> EnrichedSalesRecord:
    """Assemble the enriched record from a row and its resolved parts."""
    product_code = clean_code(row.get(PRODUCT_CODE_COLUMN))
    quantity_sold = parse_int(row.get(QUANTITY_COLUMN))

    return EnrichedSalesRecord(
        order_id=resolution.order_id,
        vendor=resolution.vendor,
        supervisor=resolution.supervisor,
        routing_code=resolution.routing_code,
        product_code=product_code,
        description=clean_text(row.get(DESCRIPTION_COLUMN)),
        supplier=clean_text(row.get(SUPPLIER_COLUMN)),
        supplier_note=clean_text(row.get(SUPPLIER_NOTE_COLUMN)),
        supplier_code=clean_code(row.get(SUPPLIER_CODE_COLUMN)),
        client_code=client_code,
        client_name=client.display_name if client else NOT_AVAILABLE,
        client_city=client.city if client else NOT_AVAILABLE,
        client_neighborhood=client.neighborhood if client else NOT_AVAILABLE,
        quantity_sold=quantity_sold,
        sale_value=parse_locale_number(row.get(SALE_VALUE_COLUMN)),
        net_weight=parse_locale_number(row.get(NET_WEIGHT_COLUMN)),
        order_date=resolution.order_date,
        exit_date=resolution.exit_date,
        status=clean_text(row.get(STATUS_COLUMN)),
        master_pack_quantity=quantity_sold / get_pack_size(pack_index, product_code),
    )


def _enrich(
    row: Dict[str, Any],
    client_index: Dict[str, ClientRecord],
    pack_index: Dict[str, int],
) -> Tuple[EnrichedSalesRecord, RuleResolution, bool]:
    client_code = clean_code(row.get(CLIENT_CODE_COLUMN))
    client = client_index.get(client_code)
    resolution = resolve_row(row, client)
    record = build_record(row, client_code, client, resolution, pack_index)
    return record, resolution, client is not None


def enrich_row(
    row: Dict[str, Any],
    client_index: Dict[str, ClientRecord],
    pack_index: Dict[str, int],
) -> EnrichedSalesRecord:
    """Enrich a single raw sales row.

    Args:
        row: Raw sales row
        client_index: Client code -> ClientRecord
        pack_index: Product code -> units per master pack

    Returns:
        EnrichedSalesRecord
    """
    record, _, _ = _enrich(row, client_index, pack_index)
    return record


def enrich_rows(
    rows: Iterable[Dict[str, Any]],
    client_index: Dict[str, ClientRecord],
    pack_index: Dict[str, int],
    lineage: Optional[DataLineage] = None,
    table_name: str = "sales",
) -> List[EnrichedSalesRecord]:
    """Enrich every row of a sales table, in input order.

    Args:
        rows: Raw sales rows
        client_index: Client code -> ClientRecord
        pack_index: Product code -> units per master pack
        lineage: Optional audit trail receiving one entry per row
        table_name: Source table name recorded in the audit trail

    Returns:
        List of EnrichedSalesRecord, one per input row
    """
    records: List[EnrichedSalesRecord] = []
    unknown_clients = 0

    for row_idx, row in enumerate(rows):
        record, resolution, client_found = _enrich(row, client_index, pack_index)
        records.append(record)

        if not client_found:
            unknown_clients += 1
        if lineage is not None:
            lineage.track(
                source_table=table_name,
                source_row=row_idx,
                order_id=record.order_id,
                status=STATUS_SUCCESS if client_found else STATUS_UNKNOWN_CLIENT,
                rules_applied=resolution.applied_rules,
            )

    logger.info(f"Enriched {len(records)} {table_name} rows")
    if unknown_clients:
        logger.warning(
            f"{unknown_clients} {table_name} rows reference unknown clients "
            f"(client fields set to {NOT_AVAILABLE})"
        )
    return records
