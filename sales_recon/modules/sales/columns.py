# -*- coding: utf-8 -*-
"""Column names of the sales exports (current and historical share them)."""

ORDER_ID_COLUMN = "Pedido"
VENDOR_COLUMN = "Vendedor"
SUPERVISOR_COLUMN = "Supervisor"
ROUTING_CODE_COLUMN = "RCA"
CLIENT_CODE_COLUMN = "Código Cliente"
PRODUCT_CODE_COLUMN = "Código Produto"
DESCRIPTION_COLUMN = "Descrição"
SUPPLIER_COLUMN = "Fornecedor"
SUPPLIER_NOTE_COLUMN = "Obs. Fornecedor"
SUPPLIER_CODE_COLUMN = "Código Fornecedor"
QUANTITY_COLUMN = "Qtd. Vendida"
SALE_VALUE_COLUMN = "Valor Venda"
NET_WEIGHT_COLUMN = "Peso Líquido"
ORDER_DATE_COLUMN = "Data Pedido"
EXIT_DATE_COLUMN = "Data Saída"
STATUS_COLUMN = "Status"

SALES_COLUMNS = [
    ORDER_ID_COLUMN,
    VENDOR_COLUMN,
    SUPERVISOR_COLUMN,
    ROUTING_CODE_COLUMN,
    CLIENT_CODE_COLUMN,
    PRODUCT_CODE_COLUMN,
    DESCRIPTION_COLUMN,
    SUPPLIER_COLUMN,
    SUPPLIER_NOTE_COLUMN,
    SUPPLIER_CODE_COLUMN,
    QUANTITY_COLUMN,
    SALE_VALUE_COLUMN,
    NET_WEIGHT_COLUMN,
    ORDER_DATE_COLUMN,
    EXIT_DATE_COLUMN,
    STATUS_COLUMN,
]
