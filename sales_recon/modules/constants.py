# -*- coding: utf-8 -*-
"""Business constants shared by the client index and the sales rules.

These encode known data-quality quirks of the sales exports: a misspelled
supervisor, two spellings of the counter-sale account, a retail brand whose
counter sales belong to a dedicated channel, and an order numbering range
that belongs to a single salesperson.
"""

# Supervisor spellings rewritten to their canonical form
SUPERVISOR_NAME_FIXES = {
    "OSÉAS SANTOS OL": "OSEIAS SANTOS OL",
}

# Counter sales ("balcão") show up with and without the accent
COUNTER_SUPERVISOR = "BALCÃO"
COUNTER_SUPERVISOR_SPELLINGS = {"BALCÃO", "BALCAO"}

# Clients whose legal name carries the brand are served by a dedicated channel
BRAND_TOKEN = "AMERICANAS"
BRAND_VENDOR = "VD AMERICANAS"
BRAND_ROUTING_CODE = "1001"

# Orders numbered 120... are always placed by the same salesperson
ORDER_PREFIX = "120"
ORDER_PREFIX_VENDOR = "VD HIAGO"
ORDER_PREFIX_SUPERVISOR = "HIAGO ASSUNCAO"
ORDER_PREFIX_ROUTING_CODE = "1002"

# Placeholder for display fields of unknown or incomplete clients
NOT_AVAILABLE = "N/A"
