# -*- coding: utf-8 -*-
"""Aggregate enriched sales lines into one row per order.

Module: sales
Pipeline stage: enriched current sales → OrderAggregate

Merge semantics per order id:
- quantity_sold, sale_value, net_weight: summed over the order's lines
- supplier notes: distinct non-empty notes, in first-seen order
- every other field: taken from the first line of the order

Lines without an order id are dropped. Orders come out in the order their
id was first seen.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Dict, Iterable, List

from sales_recon.modules.sales.enrich import EnrichedSalesRecord

logger = logging.getLogger(__name__)

SUPPLIER_NOTES_SEPARATOR = ", "


@dataclass(frozen=True)
class OrderAggregate(EnrichedSalesRecord):
    """First line of an order with summed totals and its supplier notes."""

    supplier_notes: List[str] = field(default_factory=list)
    supplier_notes_text: str = ""


class OrderAccumulator:
    """Running totals for one order id."""

    def __init__(self, first: EnrichedSalesRecord):
        self.first = first
        self.quantity_sold = 0
        self.sale_value = 0.0
        self.net_weight = 0.0
        self.supplier_notes: Dict[str, None] = {}
        self.line_count = 0

    def add(self, record: EnrichedSalesRecord) -> None:
        self.quantity_sold += int(record.quantity_sold)
        self.sale_value += float(record.sale_value)
        self.net_weight += float(record.net_weight)
        if record.supplier_note:
            self.supplier_notes.setdefault(record.supplier_note, None)
        self.line_count += 1

    def to_aggregate(self) -> OrderAggregate:
        notes = list(self.supplier_notes)
        base = {f.name: getattr(self.first, f.name) for f in fields(EnrichedSalesRecord)}
        base.update(
            quantity_sold=self.quantity_sold,
            sale_value=self.sale_value,
            net_weight=self.net_weight,
        )
        return OrderAggregate(
            **base,
            supplier_notes=notes,
            supplier_notes_text=SUPPLIER_NOTES_SEPARATOR.join(notes),
        )


def aggregate_orders(records: Iterable[EnrichedSalesRecord]) -> List[OrderAggregate]:
    """Group enriched lines by order id.

    Args:
        records: Enriched current-period sales records

    Returns:
        List of OrderAggregate in first-seen order of order ids
    """
    accumulators: Dict[str, OrderAccumulator] = {}
    dropped = 0

    for record in records:
        if not record.order_id:
            dropped += 1
            continue
        accumulator = accumulators.get(record.order_id)
        if accumulator is None:
            accumulator = accumulators[record.order_id] = OrderAccumulator(record)
        accumulator.add(record)

    if dropped:
        logger.warning(f"Dropped {dropped} sales lines without an order id")
    line_count = sum(a.line_count for a in accumulators.values())
    logger.info(f"Aggregated {line_count} lines into {len(accumulators)} orders")
    return [accumulator.to_aggregate() for accumulator in accumulators.values()]
