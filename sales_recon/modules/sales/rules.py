# -*- coding: utf-8 -*-
"""Business correction rules for one sales row.

Module: sales
Pipeline stage: raw sales row + resolved client → vendor/supervisor/RCA/date

Rules run in a fixed order and later rules may override earlier ones:
1. supervisor_name_fix: rewrite known misspelled supervisor names
2. counter_sale: unify "BALCAO"/"BALCÃO" to "BALCÃO"
3. brand_override: counter sales to AMERICANAS clients → VD AMERICANAS / 1001
4. order_prefix_override: orders numbered 120... → VD HIAGO / HIAGO ASSUNCAO / 1002
5. order_date_correction: an order date from an earlier month than the exit
   date is replaced by the exit date

Rules only look at the row itself and the already-built client record. The
single cross-row fact (orders 120... imply the client's RCA) is collected
up front by build_routing_overrides() and fed to the client index.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from sales_recon.modules.clients.client_index import ClientRecord
from sales_recon.modules.constants import (
    BRAND_ROUTING_CODE,
    BRAND_VENDOR,
    COUNTER_SUPERVISOR,
    COUNTER_SUPERVISOR_SPELLINGS,
    ORDER_PREFIX,
    ORDER_PREFIX_ROUTING_CODE,
    ORDER_PREFIX_SUPERVISOR,
    ORDER_PREFIX_VENDOR,
    SUPERVISOR_NAME_FIXES,
)
from sales_recon.modules.sales.columns import (
    CLIENT_CODE_COLUMN,
    EXIT_DATE_COLUMN,
    ORDER_DATE_COLUMN,
    ORDER_ID_COLUMN,
    ROUTING_CODE_COLUMN,
    SUPERVISOR_COLUMN,
    VENDOR_COLUMN,
)
from sales_recon.utils.value_parsing import clean_code, clean_text, parse_date

logger = logging.getLogger(__name__)


@dataclass
class RuleResolution:
    """Working state of the rules for one row, plus the rules that fired."""

    order_id: str
    vendor: str
    supervisor: str
    routing_code: str
    order_date: Optional[datetime]
    exit_date: Optional[datetime]
    applied_rules: List[str] = field(default_factory=list)


Rule = Callable[[RuleResolution, Optional[ClientRecord]], bool]


# ============================================================================
# ROUTING OVERRIDES (first pass over current sales)
# ============================================================================


def build_routing_overrides(sales_rows: Iterable[Dict[str, Any]]) -> Dict[str, str]:
    """Collect client code → RCA implied by the order numbering scheme.

    Args:
        sales_rows: Raw rows of the current sales table

    Returns:
        Dict of client code -> routing code
    """
    overrides: Dict[str, str] = {}
    for row in sales_rows:
        order_id = clean_code(row.get(ORDER_ID_COLUMN))
        client_code = clean_code(row.get(CLIENT_CODE_COLUMN))
        if client_code and order_id.startswith(ORDER_PREFIX):
            overrides[client_code] = ORDER_PREFIX_ROUTING_CODE

    logger.info(f"Derived {len(overrides)} client routing overrides from orders")
    return overrides


# ============================================================================
# RULES
# ============================================================================


def fix_supervisor_name(
    resolution: RuleResolution, client: Optional[ClientRecord]
) -> bool:
    fixed = SUPERVISOR_NAME_FIXES.get(resolution.supervisor.upper())
    if fixed is None:
        return False
    resolution.supervisor = fixed
    return True


def unify_counter_sale(
    resolution: RuleResolution, client: Optional[ClientRecord]
) -> bool:
    if resolution.supervisor.upper() not in COUNTER_SUPERVISOR_SPELLINGS:
        return False
    if resolution.supervisor == COUNTER_SUPERVISOR:
        return False
    resolution.supervisor = COUNTER_SUPERVISOR
    return True


def apply_brand_override(
    resolution: RuleResolution, client: Optional[ClientRecord]
) -> bool:
    if resolution.supervisor != COUNTER_SUPERVISOR:
        return False
    if client is None or not client.has_brand():
        return False
    resolution.vendor = BRAND_VENDOR
    resolution.routing_code = BRAND_ROUTING_CODE
    return True


def apply_order_prefix_override(
    resolution: RuleResolution, client: Optional[ClientRecord]
) -> bool:
    if not resolution.order_id.startswith(ORDER_PREFIX):
        return False
    resolution.vendor = ORDER_PREFIX_VENDOR
    resolution.supervisor = ORDER_PREFIX_SUPERVISOR
    resolution.routing_code = ORDER_PREFIX_ROUTING_CODE
    return True


def correct_order_date(
    resolution: RuleResolution, client: Optional[ClientRecord]
) -> bool:
    """Replace an order date whose month lags the exit (shipping) month."""
    order_date, exit_date = resolution.order_date, resolution.exit_date
    if order_date is None or exit_date is None:
        return False
    if (order_date.year, order_date.month) >= (exit_date.year, exit_date.month):
        return False
    resolution.order_date = exit_date
    return True


# Order matters: order_prefix_override must run after the supervisor rules
RULES: List[Tuple[str, Rule]] = [
    ("supervisor_name_fix", fix_supervisor_name),
    ("counter_sale", unify_counter_sale),
    ("brand_override", apply_brand_override),
    ("order_prefix_override", apply_order_prefix_override),
    ("order_date_correction", correct_order_date),
]


# ============================================================================
# PUBLIC API
# ============================================================================


def start_resolution(
    row: Dict[str, Any], client: Optional[ClientRecord]
) -> RuleResolution:
    """Read the identity and date fields the rules work on.

    Clients whose routing codes were promoted (order override or brand) start
    from their primary RCA. Otherwise the row's own RCA wins, and rows without
    one inherit the client's primary RCA.
    """
    routing_code = clean_code(row.get(ROUTING_CODE_COLUMN))
    if client is not None and (client.routing_promoted or not routing_code):
        routing_code = client.primary_routing_code

    return RuleResolution(
        order_id=clean_code(row.get(ORDER_ID_COLUMN)),
        vendor=clean_text(row.get(VENDOR_COLUMN)),
        supervisor=clean_text(row.get(SUPERVISOR_COLUMN)),
        routing_code=routing_code,
        order_date=parse_date(row.get(ORDER_DATE_COLUMN)),
        exit_date=parse_date(row.get(EXIT_DATE_COLUMN)),
    )


def resolve_row(
    row: Dict[str, Any],
    client: Optional[ClientRecord],
    rules: Optional[List[Tuple[str, Rule]]] = None,
) -> RuleResolution:
    """Apply the correction rules, in order, to one raw sales row.

    Args:
        row: Raw sales row
        client: Client record for the row's client code (None if unknown)
        rules: Rule list to apply (default: RULES)

    Returns:
        RuleResolution with resolved vendor, supervisor, RCA and order date
    """
    resolution = start_resolution(row, client)
    for name, rule in rules if rules is not None else RULES:
        if rule(resolution, client):
            resolution.applied_rules.append(name)
    return resolution
