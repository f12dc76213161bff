# -*- coding: utf-8 -*-
"""Test data lineage tracking module.

Tests the DataLineage class for the row audit trail.
"""

import csv

from sales_recon.modules.lineage import FIELDNAMES, DataLineage


class TestDataLineageInitialization:
    """Test DataLineage initialization."""

    def test_explicit_timestamp(self):
        lineage = DataLineage(timestamp="20240101_000000")
        assert lineage.timestamp == "20240101_000000"
        assert lineage.entries == []

    def test_default_timestamp(self):
        lineage = DataLineage()
        assert len(lineage.timestamp) == len("YYYYmmdd_HHMMSS")


class TestDataLineageTracking:
    """Test lineage tracking functionality."""

    def test_track_success(self):
        lineage = DataLineage(timestamp="t")
        lineage.track(
            source_table="sales",
            source_row=0,
            order_id="500",
            status="success",
        )
        assert lineage.entries == [
            {
                "source_table": "sales",
                "source_row": 0,
                "order_id": "500",
                "status": "success",
                "rules_applied": "",
            }
        ]

    def test_track_rules_joined(self):
        lineage = DataLineage(timestamp="t")
        lineage.track(
            "sales", 3, "1205551", "success", ["supervisor_name_fix", "order_prefix_override"]
        )
        assert (
            lineage.entries[0]["rules_applied"]
            == "supervisor_name_fix;order_prefix_override"
        )


class TestDataLineageSummary:
    """Test summary and rule counts."""

    def test_summary(self):
        lineage = DataLineage(timestamp="t")
        lineage.track("sales", 0, "1", "success")
        lineage.track("sales", 1, "2", "success")
        lineage.track("sales", 2, "3", "defaulted: unknown client")
        lineage.track("sales", 3, "4", "success")

        summary = lineage.summary()

        assert summary["total"] == 4
        assert summary["success"] == 3
        assert summary["defaulted"] == 1
        assert summary["success_rate"] == 75.0

    def test_summary_empty(self):
        summary = DataLineage(timestamp="t").summary()
        assert summary["total"] == 0
        assert summary["success_rate"] == 0

    def test_rule_counts(self):
        lineage = DataLineage(timestamp="t")
        lineage.track("sales", 0, "1", "success", ["counter_sale", "brand_override"])
        lineage.track("sales", 1, "2", "success", ["counter_sale"])
        lineage.track("sales", 2, "3", "success")

        assert lineage.rule_counts() == {"counter_sale": 2, "brand_override": 1}


class TestDataLineageSave:
    """Test writing the audit trail."""

    def test_save_csv(self, tmp_path):
        lineage = DataLineage(timestamp="20240101_000000")
        lineage.track("sales", 0, "500", "success", ["counter_sale"])

        path = lineage.save(tmp_path / "out")

        assert path == tmp_path / "out" / "lineage_20240101_000000.csv"
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert list(rows[0].keys()) == FIELDNAMES
        assert rows[0]["order_id"] == "500"
        assert rows[0]["rules_applied"] == "counter_sale"

    def test_save_empty_returns_none(self, tmp_path, caplog):
        with caplog.at_level("WARNING"):
            assert DataLineage(timestamp="t").save(tmp_path) is None
        assert "No lineage entries" in caplog.text
