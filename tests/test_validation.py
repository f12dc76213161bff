# -*- coding: utf-8 -*-
"""Tests for input column checks."""

import pytest

from sales_recon.modules.sales.columns import SALES_COLUMNS
from sales_recon.pipeline.validation import EXPECTED_SCHEMAS, validate_table


class TestValidateTable:
    """Test validate_table."""

    def test_all_columns_present(self):
        rows = [{column: "" for column in SALES_COLUMNS}]
        assert validate_table(rows, "sales") == []

    def test_missing_columns_warned(self, caplog):
        rows = [{"Código Produto": "P1"}]
        with caplog.at_level("WARNING"):
            missing = validate_table(rows, "products", "produtos.csv")

        assert missing == ["Qtd. Caixa Master"]
        assert "produtos.csv missing expected columns" in caplog.text

    def test_empty_table_warned(self, caplog):
        with caplog.at_level("WARNING"):
            assert validate_table([], "clients") == []
        assert "clients: no data rows" in caplog.text

    def test_unknown_table(self):
        with pytest.raises(ValueError, match="Unknown table"):
            validate_table([], "inventory")

    def test_schemas_cover_all_tables(self):
        assert set(EXPECTED_SCHEMAS) == {"sales", "historical_sales", "clients", "products"}
