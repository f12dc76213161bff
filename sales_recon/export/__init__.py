"""Result export: CSV files and the formatted XLSX workbook."""

from sales_recon.export.exporter import export_result, export_tables, records_to_dataframe

__all__ = ["export_result", "export_tables", "records_to_dataframe"]
