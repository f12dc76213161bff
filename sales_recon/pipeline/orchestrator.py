#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sales Reconciliation Pipeline Orchestrator

Workflow:
1. Ingest: Read sales, clients, products and historical sales concurrently
2. Index: Build the product pack index, then routing overrides from current
   sales, then the client index
3. Enrich: Apply correction rules to current and historical sales lines
4. Reconcile: Update client last purchase dates from current sales
5. Aggregate: Roll current sales lines up into one row per order
6. Export: Write CSV files and/or the XLSX workbook (CLI only)

Run with: python -m sales_recon.pipeline.orchestrator [--config pipeline.toml]
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from tqdm import tqdm

from sales_recon.export.exporter import export_result
from sales_recon.modules.catalog.pack_index import build_pack_index
from sales_recon.modules.clients.client_index import ClientRecord, build_client_index
from sales_recon.modules.clients.purchase_dates import update_last_purchase_dates
from sales_recon.modules.ingest import IngestionError, TableSource, ingest_tables
from sales_recon.modules.lineage import DataLineage
from sales_recon.modules.sales.enrich import EnrichedSalesRecord, enrich_rows
from sales_recon.modules.sales.orders import OrderAggregate, aggregate_orders
from sales_recon.modules.sales.rules import build_routing_overrides
from sales_recon.pipeline.validation import validate_table
from sales_recon.utils.path_config import PathConfig

logger = logging.getLogger(__name__)

# === CONFIGURATION ===

TABLE_NAMES = ["sales", "clients", "products", "historical_sales"]

FORMAT_CHOICES = {
    "csv": ["csv"],
    "xlsx": ["xlsx"],
    "both": ["csv", "xlsx"],
}


# === TYPES ===


@dataclass(frozen=True)
class ProgressEvent:
    """Stage label and completion percentage (0-100)."""

    label: str
    percent: int


@dataclass(frozen=True)
class PipelineSources:
    """The four input tables of one run."""

    sales: TableSource
    clients: TableSource
    products: TableSource
    historical_sales: TableSource

    def as_dict(self) -> Dict[str, TableSource]:
        return {name: getattr(self, name) for name in TABLE_NAMES}


@dataclass
class PipelineResult:
    """Everything one run produces."""

    sales: List[EnrichedSalesRecord]
    historical_sales: List[EnrichedSalesRecord]
    orders: List[OrderAggregate]
    clients: List[ClientRecord]
    lineage: DataLineage = field(default_factory=DataLineage)


class PipelineError(Exception):
    """A run failed and produced no result."""


ProgressCallback = Callable[[ProgressEvent], None]


# === PIPELINE ===


def _notify(on_progress: Optional[ProgressCallback], label: str, percent: int) -> None:
    logger.debug(f"[{percent:3d}%] {label}")
    if on_progress is not None:
        on_progress(ProgressEvent(label, percent))


def run_pipeline(
    sources: PipelineSources,
    on_progress: Optional[ProgressCallback] = None,
) -> PipelineResult:
    """Run one full reconciliation over the four input tables.

    Args:
        sources: Input tables
        on_progress: Optional callback receiving ProgressEvent values with
            non-decreasing percentages

    Returns:
        PipelineResult with enriched sales, historical sales, orders and
        the reconciled client list

    Raises:
        PipelineError: If any input table cannot be read
    """
    logger.info("=" * 70)
    logger.info("STARTING SALES RECONCILIATION")
    logger.info("=" * 70)

    try:
        tables = ingest_tables(sources.as_dict())
    except IngestionError as e:
        logger.error(str(e))
        raise PipelineError(str(e)) from e

    for name, table_source in sources.as_dict().items():
        validate_table(tables[name], name, Path(table_source.path).name)
    _notify(on_progress, "Tables loaded", 10)

    pack_index = build_pack_index(tables["products"])
    _notify(on_progress, "Product index built", 30)

    routing_overrides = build_routing_overrides(tables["sales"])
    client_index = build_client_index(tables["clients"], routing_overrides)
    _notify(on_progress, "Client index built", 50)

    lineage = DataLineage()
    sales = enrich_rows(
        tables["sales"], client_index, pack_index, lineage, table_name="sales"
    )
    historical_sales = enrich_rows(
        tables["historical_sales"],
        client_index,
        pack_index,
        lineage,
        table_name="historical_sales",
    )
    _notify(on_progress, "Sales enriched", 70)

    update_last_purchase_dates(sales, client_index)
    _notify(on_progress, "Purchase dates reconciled", 80)

    orders = aggregate_orders(sales)
    _notify(on_progress, "Orders aggregated", 90)

    result = PipelineResult(
        sales=sales,
        historical_sales=historical_sales,
        orders=orders,
        clients=list(client_index.values()),
        lineage=lineage,
    )

    summary = lineage.summary()
    logger.info("=" * 70)
    logger.info(
        f"Rows: {summary['total']} total, {summary['success']} success, "
        f"{summary['defaulted']} defaulted ({summary['success_rate']:.1f}%)"
    )
    for rule_name, count in sorted(lineage.rule_counts().items()):
        logger.info(f"  {rule_name}: {count} rows")
    logger.info(
        f"Result: {len(sales)} sales, {len(historical_sales)} historical, "
        f"{len(orders)} orders, {len(result.clients)} clients"
    )
    logger.info("=" * 70)

    _notify(on_progress, "Done", 100)
    return result


def execute_pipeline(
    sources: PipelineSources,
    on_progress: Optional[ProgressCallback],
    on_result: Callable[[PipelineResult], None],
    on_error: Callable[[str], None],
) -> bool:
    """Run the pipeline and deliver exactly one result or one error message.

    Returns:
        True if on_result was called, False if on_error was called
    """
    try:
        result = run_pipeline(sources, on_progress)
    except PipelineError as e:
        on_error(str(e))
        return False

    on_result(result)
    return True


# === CONFIGURATION HELPERS ===


def sources_from_config(
    path_config: PathConfig, overrides: Optional[Dict[str, Optional[Path]]] = None
) -> PipelineSources:
    """Build PipelineSources from pipeline.toml, with optional file overrides.

    An overridden file has its format inferred from its suffix.

    Raises:
        KeyError: If a table is neither configured nor overridden
    """
    overrides = overrides or {}
    resolved = {}
    for name in TABLE_NAMES:
        override = overrides.get(name)
        if override is not None:
            resolved[name] = TableSource(name, Path(override))
        else:
            resolved[name] = TableSource(
                name,
                path_config.get_source_path(name),
                path_config.get_source_format(name),
            )
    return PipelineSources(**resolved)


class TqdmProgress:
    """Render ProgressEvent values on a tqdm bar (0-100)."""

    def __init__(self, disable: bool = False):
        self.bar = tqdm(total=100, desc="Reconciling", unit="%", disable=disable)
        self.position = 0

    def __call__(self, event: ProgressEvent) -> None:
        self.bar.set_description(event.label)
        self.bar.update(event.percent - self.position)
        self.position = event.percent

    def close(self) -> None:
        self.bar.close()


# === CLI ===


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sales reconciliation: Ingest → Enrich → Aggregate → Export"
    )
    parser.add_argument("--config", type=Path, help="Path to pipeline.toml")
    parser.add_argument("--sales", type=Path, help="Current sales file")
    parser.add_argument("--clients", type=Path, help="Clients file")
    parser.add_argument("--products", type=Path, help="Products file")
    parser.add_argument("--historical", type=Path, help="Historical sales file")
    parser.add_argument("--output-dir", type=Path, help="Output directory")
    parser.add_argument(
        "--format",
        choices=sorted(FORMAT_CHOICES),
        help="Output format (default: from config)",
    )
    parser.add_argument(
        "--no-lineage",
        action="store_true",
        default=False,
        help="Do not save the row audit trail",
    )
    parser.add_argument(
        "--verbose", action="store_true", default=False, help="Debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)-8s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        path_config = PathConfig(args.config)
        sources = sources_from_config(
            path_config,
            {
                "sales": args.sales,
                "clients": args.clients,
                "products": args.products,
                "historical_sales": args.historical,
            },
        )
    except (FileNotFoundError, KeyError) as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    output_dir = args.output_dir or path_config.output_dir
    formats = FORMAT_CHOICES[args.format] if args.format else path_config.export_formats()
    save_lineage = path_config.lineage_enabled() and not args.no_lineage

    def on_result(result: PipelineResult) -> None:
        export_result(result, output_dir, formats)
        if save_lineage:
            result.lineage.save(output_dir)

    def on_error(message: str) -> None:
        logger.error(f"Pipeline failed: {message}")

    progress = TqdmProgress()
    try:
        success = execute_pipeline(sources, progress, on_result, on_error)
    finally:
        progress.close()

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
