# -*- coding: utf-8 -*-
"""Write pipeline results to CSV files and/or one XLSX workbook.

Output tables (one CSV each, or one sheet each in resultado.xlsx):
- vendas_enriquecidas: enriched current sales lines
- vendas_historico_enriquecidas: enriched historical sales lines
- pedidos: order aggregates
- clientes: reconciled client list

Rows keep the pipeline's order, and nothing time-dependent is written, so
identical inputs produce identical files.
"""

import logging
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Sequence

import pandas as pd

from sales_recon.export.templates import DATE_FORMAT, TEMPLATES, ColumnSpec
from sales_recon.utils.xlsx_formatting import XLSXFormatter

if TYPE_CHECKING:
    from sales_recon.pipeline.orchestrator import PipelineResult

logger = logging.getLogger(__name__)

WORKBOOK_FILENAME = "resultado.xlsx"
LIST_SEPARATOR = ", "
SUPPORTED_FORMATS = ("csv", "xlsx")


def format_value(value: Any, col_spec: ColumnSpec) -> Any:
    """Convert a record attribute to its output cell value."""
    if col_spec.data_type == "list":
        return LIST_SEPARATOR.join(value or [])
    if col_spec.data_type == "flag":
        return "S" if value else "N"
    if value is None:
        return ""
    return value


def records_to_dataframe(records: Iterable[Any], template) -> pd.DataFrame:
    """Lay out records as a DataFrame with the template's headers and order.

    Args:
        records: Dataclass records (EnrichedSalesRecord, OrderAggregate, ClientRecord)
        template: Output template with COLUMNS definitions

    Returns:
        DataFrame with one column per ColumnSpec, in template order
    """
    rows = [
        [format_value(getattr(record, col.attribute), col) for col in template.COLUMNS]
        for record in records
    ]
    return pd.DataFrame(rows, columns=[col.name for col in template.COLUMNS], dtype=object)


def _format_dates_for_csv(df: pd.DataFrame, template) -> pd.DataFrame:
    df = df.copy()
    for col in template.COLUMNS:
        if col.data_type == "date":
            df[col.name] = df[col.name].map(
                lambda v: v.strftime(DATE_FORMAT) if isinstance(v, date) else v
            )
    return df


def write_csv(df: pd.DataFrame, template, output_dir: Path) -> Path:
    """Write one result table as CSV (dates as DD/MM/YYYY)."""
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"{template.FILE_STEM}.csv"
    _format_dates_for_csv(df, template).to_csv(output_path, index=False, encoding="utf-8")
    logger.info(f"Saved {len(df)} rows to: {output_path}")
    return output_path


def export_tables(
    tables: Dict[str, Sequence[Any]],
    output_dir: Path,
    formats: Sequence[str] = SUPPORTED_FORMATS,
) -> List[Path]:
    """Export named result tables.

    Args:
        tables: Table name ("sales", "historical_sales", "orders", "clients") -> records
        output_dir: Directory for the output files
        formats: Any of "csv", "xlsx"

    Returns:
        Paths of the written files

    Raises:
        ValueError: On an unknown table name or format
    """
    unknown_formats = [fmt for fmt in formats if fmt not in SUPPORTED_FORMATS]
    if unknown_formats:
        raise ValueError(f"Unsupported export formats: {unknown_formats}")
    unknown_tables = [name for name in tables if name not in TEMPLATES]
    if unknown_tables:
        raise ValueError(f"Unknown result tables: {unknown_tables}")

    output_dir = Path(output_dir)
    frames = [
        (records_to_dataframe(records, TEMPLATES[name]), TEMPLATES[name])
        for name, records in tables.items()
    ]

    written: List[Path] = []
    if "csv" in formats:
        for df, template in frames:
            written.append(write_csv(df, template, output_dir))
    if "xlsx" in formats:
        workbook_path = output_dir / WORKBOOK_FILENAME
        XLSXFormatter.write_xlsx(frames, workbook_path)
        written.append(workbook_path)
    return written


def export_result(
    result: "PipelineResult",
    output_dir: Path,
    formats: Sequence[str] = SUPPORTED_FORMATS,
) -> List[Path]:
    """Export the four sequences of a pipeline result."""
    logger.info("=" * 70)
    logger.info(f"Exporting results to {output_dir} ({', '.join(formats)})")
    return export_tables(
        {
            "sales": result.sales,
            "historical_sales": result.historical_sales,
            "orders": result.orders,
            "clients": result.clients,
        },
        output_dir,
        formats,
    )
