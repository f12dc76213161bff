# -*- coding: utf-8 -*-
"""Test last purchase date reconciliation."""

from dataclasses import replace
from datetime import datetime

from sales_recon.modules.clients.client_index import ClientRecord
from sales_recon.modules.clients.purchase_dates import (
    latest_order_dates,
    update_last_purchase_dates,
)
from sales_recon.modules.sales.enrich import EnrichedSalesRecord

BASE_RECORD = EnrichedSalesRecord(
    order_id="500",
    vendor="VD CARLOS",
    supervisor="MARCIO LIMA",
    routing_code="10",
    product_code="P1",
    description="",
    supplier="",
    supplier_note="",
    supplier_code="",
    client_code="C1",
    client_name="Mercado Sol",
    client_city="Recife",
    client_neighborhood="Boa Viagem",
    quantity_sold=1,
    sale_value=1.0,
    net_weight=1.0,
    order_date=None,
    exit_date=None,
    status="",
    master_pack_quantity=1.0,
)


def sale(client_code, order_date):
    return replace(BASE_RECORD, client_code=client_code, order_date=order_date)


class TestLatestOrderDates:
    """Test latest_order_dates."""

    def test_maximum_per_client(self):
        records = [
            sale("C1", datetime(2024, 5, 1)),
            sale("C1", datetime(2024, 6, 10)),
            sale("C2", datetime(2024, 2, 1)),
        ]
        assert latest_order_dates(records) == {
            "C1": datetime(2024, 6, 10),
            "C2": datetime(2024, 2, 1),
        }

    def test_skips_empty_client_and_missing_dates(self):
        records = [sale("", datetime(2024, 5, 1)), sale("C1", None)]
        assert latest_order_dates(records) == {}


class TestUpdateLastPurchaseDates:
    """Test update_last_purchase_dates."""

    def test_later_sales_update_recorded_date(self):
        index = {"C1": ClientRecord(code="C1", last_purchase="01/01/2024")}
        records = [sale("C1", datetime(2024, 5, 1)), sale("C1", datetime(2024, 6, 10))]

        updated = update_last_purchase_dates(records, index)

        assert updated == 1
        assert index["C1"].last_purchase == datetime(2024, 6, 10)

    def test_client_without_sales_unchanged(self):
        index = {"C2": ClientRecord(code="C2", last_purchase="01/01/2024")}

        updated = update_last_purchase_dates([sale("C1", datetime(2024, 5, 1))], index)

        assert updated == 0
        assert index["C2"].last_purchase == "01/01/2024"

    def test_recorded_date_newer_than_sales(self):
        index = {"C1": ClientRecord(code="C1", last_purchase=datetime(2024, 12, 1))}

        updated = update_last_purchase_dates([sale("C1", datetime(2024, 6, 10))], index)

        assert updated == 0
        assert index["C1"].last_purchase == datetime(2024, 12, 1)

    def test_missing_recorded_date(self):
        index = {"C1": ClientRecord(code="C1", last_purchase=None)}

        update_last_purchase_dates([sale("C1", datetime(2024, 6, 10))], index)

        assert index["C1"].last_purchase == datetime(2024, 6, 10)

    def test_unparseable_recorded_date(self):
        index = {"C1": ClientRecord(code="C1", last_purchase="sem compra")}

        update_last_purchase_dates([sale("C1", datetime(2024, 6, 10))], index)

        assert index["C1"].last_purchase == datetime(2024, 6, 10)

    def test_sales_for_unindexed_clients_ignored(self):
        index = {}
        assert update_last_purchase_dates([sale("C9", datetime(2024, 6, 10))], index) == 0
        assert index == {}
