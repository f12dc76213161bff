# -*- coding: utf-8 -*-
"""Build the master-pack lookup from the product reference table.

Module: catalog
Raw source: Produtos (one row per product)
Pipeline stage: raw product rows → ProductPackIndex

Each product has a "units per master pack" figure used to express sold
quantities in master packs. Missing, invalid or non-positive figures count
as 1 so the downstream division is always defined.
"""

import logging
from typing import Any, Dict, Iterable

from sales_recon.utils.value_parsing import clean_code, parse_int

# ============================================================================
# CONFIGURATION
# ============================================================================

PRODUCT_CODE_COLUMN = "Código Produto"
PACK_QUANTITY_COLUMN = "Qtd. Caixa Master"

DEFAULT_PACK_SIZE = 1

logger = logging.getLogger(__name__)


def normalize_pack_size(value: Any) -> int:
    """Coerce a raw pack quantity to a positive integer (default 1)."""
    size = parse_int(value)
    return size if size > 0 else DEFAULT_PACK_SIZE


def build_pack_index(rows: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    """Map product code to units per master pack.

    Rows without a product code are skipped; a repeated code keeps the last
    row's value.

    Args:
        rows: Raw product rows

    Returns:
        Dict of product code -> positive pack size
    """
    pack_index: Dict[str, int] = {}
    skipped = 0

    for row in rows:
        code = clean_code(row.get(PRODUCT_CODE_COLUMN))
        if not code:
            skipped += 1
            continue
        pack_index[code] = normalize_pack_size(row.get(PACK_QUANTITY_COLUMN))

    if skipped:
        logger.warning(f"Skipped {skipped} product rows without {PRODUCT_CODE_COLUMN}")
    logger.info(f"Indexed pack sizes for {len(pack_index)} products")
    return pack_index


def get_pack_size(pack_index: Dict[str, int], product_code: str) -> int:
    """Look up a product's pack size, falling back to 1."""
    return pack_index.get(product_code, DEFAULT_PACK_SIZE)
