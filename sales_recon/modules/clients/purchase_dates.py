# -*- coding: utf-8 -*-
"""Bring each client's last purchase date up to date from current sales.

Module: clients
Pipeline stage: enriched current sales + client index → client index (in place)

The client table's "Última Compra" column lags behind the sales export. For
every client with at least one dated sale, the latest order date wins when
it is newer than the recorded date, or when the recorded date is missing or
unreadable. Must run after all current rows are enriched and before the
client list is exported.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable

from sales_recon.modules.clients.client_index import ClientRecord
from sales_recon.modules.sales.enrich import EnrichedSalesRecord
from sales_recon.utils.value_parsing import parse_date

logger = logging.getLogger(__name__)


def latest_order_dates(records: Iterable[EnrichedSalesRecord]) -> Dict[str, datetime]:
    """Track the latest order date per client code."""
    latest: Dict[str, datetime] = {}
    for record in records:
        if not record.client_code or record.order_date is None:
            continue
        current = latest.get(record.client_code)
        if current is None or record.order_date > current:
            latest[record.client_code] = record.order_date
    return latest


def update_last_purchase_dates(
    records: Iterable[EnrichedSalesRecord], client_index: Dict[str, ClientRecord]
) -> int:
    """Update ClientRecord.last_purchase in place.

    The comparison baseline is the client's recorded date, not the tracked
    maximum.

    Args:
        records: Enriched current-period sales records
        client_index: Client code -> ClientRecord (mutated)

    Returns:
        Number of clients whose last purchase date changed
    """
    latest = latest_order_dates(records)
    updated = 0

    for code, client in client_index.items():
        candidate = latest.get(code)
        if candidate is None:
            continue
        recorded = parse_date(client.last_purchase)
        if recorded is None or recorded < candidate:
            client.last_purchase = candidate
            updated += 1

    logger.info(
        f"Updated last purchase date for {updated} of {len(client_index)} clients"
    )
    return updated
