# -*- coding: utf-8 -*-
"""Output layouts for the four result tables.

Each template lists its columns in output order: the header written to the
file, the record attribute it comes from, its data type and the Excel number
format applied in the XLSX workbook.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class ColumnSpec:
    """Specification for a single output column."""

    name: str  # Header in the output file (e.g., "Pedido")
    attribute: str  # Record attribute (e.g., "order_id")
    data_type: str  # "text", "number", "date", "list", "flag"
    format_code: Optional[str] = None  # Excel format code (e.g., "#,##0.00")


DATE_FORMAT = "%d/%m/%Y"
EXCEL_DATE_FORMAT = "dd/mm/yyyy"
INTEGER_FORMAT = "#,##0"
DECIMAL_FORMAT = "#,##0.00"
WEIGHT_FORMAT = "#,##0.000"


class SalesTemplate:
    """Enriched sales lines (Vendas)."""

    SHEET_NAME = "Vendas"
    FILE_STEM = "vendas_enriquecidas"

    COLUMNS: List[ColumnSpec] = [
        ColumnSpec("Pedido", "order_id", "text"),
        ColumnSpec("Vendedor", "vendor", "text"),
        ColumnSpec("Supervisor", "supervisor", "text"),
        ColumnSpec("RCA", "routing_code", "text"),
        ColumnSpec("Código Produto", "product_code", "text"),
        ColumnSpec("Descrição", "description", "text"),
        ColumnSpec("Fornecedor", "supplier", "text"),
        ColumnSpec("Obs. Fornecedor", "supplier_note", "text"),
        ColumnSpec("Código Fornecedor", "supplier_code", "text"),
        ColumnSpec("Código Cliente", "client_code", "text"),
        ColumnSpec("Cliente", "client_name", "text"),
        ColumnSpec("Cidade", "client_city", "text"),
        ColumnSpec("Bairro", "client_neighborhood", "text"),
        ColumnSpec("Qtd. Vendida", "quantity_sold", "number", INTEGER_FORMAT),
        ColumnSpec("Valor Venda", "sale_value", "number", DECIMAL_FORMAT),
        ColumnSpec("Peso Líquido", "net_weight", "number", WEIGHT_FORMAT),
        ColumnSpec("Data Pedido", "order_date", "date", EXCEL_DATE_FORMAT),
        ColumnSpec("Data Saída", "exit_date", "date", EXCEL_DATE_FORMAT),
        ColumnSpec("Status", "status", "text"),
        ColumnSpec("Qtd. Caixa Master", "master_pack_quantity", "number", DECIMAL_FORMAT),
    ]


class HistoricalSalesTemplate(SalesTemplate):
    """Enriched historical sales lines (same layout as current sales)."""

    SHEET_NAME = "Histórico"
    FILE_STEM = "vendas_historico_enriquecidas"


class OrderTemplate:
    """One row per order with summed totals (Pedidos)."""

    SHEET_NAME = "Pedidos"
    FILE_STEM = "pedidos"

    COLUMNS: List[ColumnSpec] = [
        col for col in SalesTemplate.COLUMNS if col.attribute != "supplier_note"
    ] + [
        ColumnSpec("Obs. Fornecedores", "supplier_notes_text", "text"),
    ]


class ClientTemplate:
    """Reconciled client list (Clientes)."""

    SHEET_NAME = "Clientes"
    FILE_STEM = "clientes"

    COLUMNS: List[ColumnSpec] = [
        ColumnSpec("Código Cliente", "code", "text"),
        ColumnSpec("RCAs", "routing_codes", "list"),
        ColumnSpec("Fantasia", "display_name", "text"),
        ColumnSpec("Razão Social", "legal_name", "text"),
        ColumnSpec("Cidade", "city", "text"),
        ColumnSpec("Bairro", "neighborhood", "text"),
        ColumnSpec("Endereço", "address", "text"),
        ColumnSpec("Número", "number", "text"),
        ColumnSpec("Complemento", "complement", "text"),
        ColumnSpec("CEP", "zip_code", "text"),
        ColumnSpec("Telefone", "phone", "text"),
        ColumnSpec("E-mail", "email", "text"),
        ColumnSpec("Data Cadastro", "registration_date", "text"),
        ColumnSpec("Última Compra", "last_purchase", "date", EXCEL_DATE_FORMAT),
        ColumnSpec("Bloqueado", "blocked", "flag"),
    ]


TEMPLATES = {
    "sales": SalesTemplate,
    "historical_sales": HistoricalSalesTemplate,
    "orders": OrderTemplate,
    "clients": ClientTemplate,
}
