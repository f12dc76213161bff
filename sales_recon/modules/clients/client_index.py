# -*- coding: utf-8 -*-
"""Build the client index from the client reference table (Clientes).

Module: clients
Raw source: Clientes (one row per client, RCA routing columns)
Pipeline stage: raw client rows + routing overrides → Dict[code, ClientRecord]

This module:
1. Skips rows with an empty client code
2. Collects the two RCA columns into an ordered, de-duplicated list
3. Keeps only the date part of registration timestamps
4. Defaults display/contact/status fields to "N/A"
5. Promotes routing codes implied by sales (override index) and by the
   AMERICANAS brand to the front of the list

The override index must be complete before this runs: it is derived from
the current sales table (see sales/rules.py) and consumed here.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from sales_recon.modules.constants import (
    BRAND_ROUTING_CODE,
    BRAND_TOKEN,
    NOT_AVAILABLE,
)
from sales_recon.utils.value_parsing import (
    clean_code,
    clean_text,
    date_portion,
    parse_date,
    parse_flag,
)

# ============================================================================
# CONFIGURATION
# ============================================================================

CLIENT_CODE_COLUMN = "Código Cliente"
ROUTING_CODE_COLUMNS = ["RCA 1", "RCA 2"]

COLUMN_MAPPING = {
    "Fantasia": "display_name",
    "Razão Social": "legal_name",
    "Cidade": "city",
    "Bairro": "neighborhood",
    "Endereço": "address",
    "Número": "number",
    "Complemento": "complement",
    "CEP": "zip_code",
    "Telefone": "phone",
    "E-mail": "email",
}

REGISTRATION_DATE_COLUMN = "Data Cadastro"
LAST_PURCHASE_COLUMN = "Última Compra"
BLOCKED_COLUMN = "Bloqueado"

logger = logging.getLogger(__name__)


@dataclass
class ClientRecord:
    """One client from the reference table.

    ``last_purchase`` is the recorded date as a datetime, or the raw text when
    it cannot be parsed, until the purchase-date reconciler updates it.
    ``routing_promoted`` is set when an order override or the brand rule moved
    a routing code to the front; sales rows of such clients start from
    ``primary_routing_code`` instead of their own RCA.
    """

    code: str
    routing_codes: List[str] = field(default_factory=list)
    display_name: str = NOT_AVAILABLE
    legal_name: str = NOT_AVAILABLE
    city: str = NOT_AVAILABLE
    neighborhood: str = NOT_AVAILABLE
    address: str = NOT_AVAILABLE
    number: str = NOT_AVAILABLE
    complement: str = NOT_AVAILABLE
    zip_code: str = NOT_AVAILABLE
    phone: str = NOT_AVAILABLE
    email: str = NOT_AVAILABLE
    registration_date: str = ""
    last_purchase: Any = None
    blocked: bool = False
    routing_promoted: bool = False

    @property
    def primary_routing_code(self) -> str:
        return self.routing_codes[0] if self.routing_codes else ""

    def has_brand(self, token: str = BRAND_TOKEN) -> bool:
        return token in self.legal_name.upper()


def collect_routing_codes(row: Dict[str, Any]) -> List[str]:
    """Read the RCA columns into an ordered list without duplicates."""
    codes: List[str] = []
    for column in ROUTING_CODE_COLUMNS:
        code = clean_code(row.get(column))
        if code and code not in codes:
            codes.append(code)
    return codes


def promote_routing_code(codes: List[str], code: str) -> List[str]:
    """Move (or insert) a routing code to the front of the list."""
    return [code] + [existing for existing in codes if existing != code]


def build_client_record(
    row: Dict[str, Any], routing_overrides: Optional[Dict[str, str]] = None
) -> Optional[ClientRecord]:
    """Build one ClientRecord from a raw row, or None if it has no code."""
    code = clean_code(row.get(CLIENT_CODE_COLUMN))
    if not code:
        return None

    fields = {
        attribute: clean_text(row.get(column), NOT_AVAILABLE)
        for column, attribute in COLUMN_MAPPING.items()
    }
    raw_last_purchase = row.get(LAST_PURCHASE_COLUMN)
    last_purchase = parse_date(raw_last_purchase)
    if last_purchase is None and clean_text(raw_last_purchase):
        last_purchase = clean_text(raw_last_purchase)

    client = ClientRecord(
        code=code,
        routing_codes=collect_routing_codes(row),
        registration_date=date_portion(row.get(REGISTRATION_DATE_COLUMN)),
        last_purchase=last_purchase,
        blocked=parse_flag(row.get(BLOCKED_COLUMN)),
        **fields,
    )

    if routing_overrides and code in routing_overrides:
        client.routing_codes = promote_routing_code(
            client.routing_codes, routing_overrides[code]
        )
        client.routing_promoted = True
    if client.has_brand():
        client.routing_codes = promote_routing_code(
            client.routing_codes, BRAND_ROUTING_CODE
        )
        client.routing_promoted = True

    return client


def build_client_index(
    rows: Iterable[Dict[str, Any]],
    routing_overrides: Optional[Dict[str, str]] = None,
) -> Dict[str, ClientRecord]:
    """Index clients by code (last row wins on duplicate codes).

    Args:
        rows: Raw client rows
        routing_overrides: Client code -> routing code implied by sales orders

    Returns:
        Dict of client code -> ClientRecord
    """
    client_index: Dict[str, ClientRecord] = {}
    skipped = 0
    duplicates = 0

    for row in rows:
        client = build_client_record(row, routing_overrides)
        if client is None:
            skipped += 1
            continue
        if client.code in client_index:
            duplicates += 1
        client_index[client.code] = client

    if skipped:
        logger.warning(f"Skipped {skipped} client rows without {CLIENT_CODE_COLUMN}")
    if duplicates:
        logger.warning(f"{duplicates} duplicate client codes (kept last occurrence)")
    overridden = sum(
        1 for code in (routing_overrides or {}) if code in client_index
    )
    logger.info(
        f"Indexed {len(client_index)} clients ({overridden} with routing overrides)"
    )
    return client_index
