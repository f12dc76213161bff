# -*- coding: utf-8 -*-
"""Row-level audit trail for enriched sales rows.

Module: lineage
Purpose: Record what happened to every sales row of a run

This module provides the DataLineage class for tracking:
- Source table and row index
- Order id of the resulting record
- Status (success or the field that had to be defaulted)
- The correction rules that fired for the row
"""

import csv
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

FIELDNAMES = ["source_table", "source_row", "order_id", "status", "rules_applied"]


class DataLineage:
    """Track row-level enrichment outcomes for one pipeline run.

    Entries live in memory; save() writes them to CSV when the caller wants
    an audit file next to the exported results.
    """

    def __init__(self, timestamp: Optional[str] = None):
        """Initialize lineage tracker.

        Args:
            timestamp: Run identifier used in the saved file name
                (default: current time as YYYYmmdd_HHMMSS)
        """
        self.entries: List[Dict] = []
        self.timestamp = timestamp or datetime.now().strftime("%Y%m%d_%H%M%S")

    def track(
        self,
        source_table: str,
        source_row: int,
        order_id: str,
        status: str,
        rules_applied: Optional[List[str]] = None,
    ) -> None:
        """Track a single enriched row.

        Args:
            source_table: Name of the source table (e.g., "sales")
            source_row: Row index in the source table (0-based)
            order_id: Order id of the enriched record
            status: "success" or "defaulted: <reason>"
            rules_applied: Names of the correction rules that fired
        """
        self.entries.append(
            {
                "source_table": source_table,
                "source_row": source_row,
                "order_id": order_id,
                "status": status,
                "rules_applied": ";".join(rules_applied or []),
            }
        )

    def save(self, output_dir: Path) -> Optional[Path]:
        """Save lineage entries to CSV file.

        Args:
            output_dir: Directory where the lineage CSV is written

        Returns:
            Path to saved lineage CSV file, or None when there is nothing to save
        """
        if not self.entries:
            logger.warning("No lineage entries to save")
            return None

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        lineage_filepath = output_dir / f"lineage_{self.timestamp}.csv"

        try:
            with open(lineage_filepath, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
                writer.writeheader()
                writer.writerows(self.entries)
        except OSError as e:
            logger.error(f"Failed to save lineage: {e}")
            raise

        logger.info(f"Lineage saved to: {lineage_filepath}")
        return lineage_filepath

    def summary(self) -> Dict:
        """Get summary statistics of lineage.

        Returns:
            Dict with keys: total, success, defaulted, success_rate
        """
        total = len(self.entries)
        success = sum(1 for entry in self.entries if entry["status"] == "success")
        defaulted = total - success

        return {
            "total": total,
            "success": success,
            "defaulted": defaulted,
            "success_rate": (success / total * 100) if total > 0 else 0,
        }

    def rule_counts(self) -> Dict[str, int]:
        """Count how many rows each correction rule fired on."""
        counts: Counter = Counter()
        for entry in self.entries:
            if entry["rules_applied"]:
                counts.update(entry["rules_applied"].split(";"))
        return dict(counts)
