# -*- coding: utf-8 -*-
"""Test the client index (routing codes, defaults, overrides)."""

from datetime import datetime

from sales_recon.modules.clients.client_index import (
    ClientRecord,
    build_client_index,
    build_client_record,
    collect_routing_codes,
    promote_routing_code,
)


def client_row(**overrides):
    row = {
        "Código Cliente": "C1",
        "RCA 1": "10",
        "RCA 2": "20",
        "Fantasia": "Mercado Bom Preço",
        "Razão Social": "Bom Preço Comércio LTDA",
        "Cidade": "Recife",
        "Bairro": "Boa Viagem",
        "Data Cadastro": "15/03/2023 10:22:00",
        "Última Compra": "01/01/2024",
        "Bloqueado": "N",
    }
    row.update(overrides)
    return row


class TestRoutingCodes:
    """Test routing code collection and promotion."""

    def test_collect_ordered(self):
        assert collect_routing_codes({"RCA 1": "10", "RCA 2": "20"}) == ["10", "20"]

    def test_collect_deduplicates(self):
        assert collect_routing_codes({"RCA 1": "10", "RCA 2": 10.0}) == ["10"]

    def test_collect_skips_empty(self):
        assert collect_routing_codes({"RCA 1": None, "RCA 2": "20"}) == ["20"]

    def test_promote_existing(self):
        assert promote_routing_code(["10", "20"], "20") == ["20", "10"]

    def test_promote_new(self):
        assert promote_routing_code(["10"], "1002") == ["1002", "10"]


class TestBuildClientRecord:
    """Test build_client_record."""

    def test_fields(self):
        client = build_client_record(client_row())

        assert client.code == "C1"
        assert client.routing_codes == ["10", "20"]
        assert client.primary_routing_code == "10"
        assert client.display_name == "Mercado Bom Preço"
        assert client.city == "Recife"
        assert client.last_purchase == datetime(2024, 1, 1)
        assert client.blocked is False
        assert client.routing_promoted is False

    def test_registration_date_keeps_date_part(self):
        assert build_client_record(client_row()).registration_date == "15/03/2023"

    def test_missing_fields_default_to_not_available(self):
        client = build_client_record({"Código Cliente": "C9"})

        assert client.display_name == "N/A"
        assert client.legal_name == "N/A"
        assert client.email == "N/A"
        assert client.routing_codes == []
        assert client.primary_routing_code == ""
        assert client.last_purchase is None

    def test_empty_code_returns_none(self):
        assert build_client_record(client_row(**{"Código Cliente": "  "})) is None

    def test_override_promoted(self):
        client = build_client_record(client_row(), {"C1": "1002"})
        assert client.routing_codes == ["1002", "10", "20"]
        assert client.routing_promoted is True

    def test_brand_code_promoted(self):
        client = build_client_record(
            client_row(**{"Razão Social": "Lojas Americanas S.A."})
        )
        assert client.routing_codes == ["1001", "10", "20"]
        assert client.routing_promoted is True

    def test_brand_applied_after_override(self):
        client = build_client_record(
            client_row(**{"Razão Social": "LOJAS AMERICANAS SA"}), {"C1": "1002"}
        )
        assert client.routing_codes == ["1001", "1002", "10", "20"]

    def test_last_purchase_iso_text(self):
        client = build_client_record(client_row(**{"Última Compra": "2024-02-10"}))
        assert client.last_purchase == datetime(2024, 2, 10)

    def test_last_purchase_serial(self):
        client = build_client_record(client_row(**{"Última Compra": 45000}))
        assert client.last_purchase == datetime(2023, 3, 15)

    def test_unparseable_last_purchase_kept_as_text(self):
        client = build_client_record(client_row(**{"Última Compra": " sem compra "}))
        assert client.last_purchase == "sem compra"

    def test_blocked_flag(self):
        assert build_client_record(client_row(Bloqueado="S")).blocked is True


class TestBuildClientIndex:
    """Test build_client_index."""

    def test_index_by_code(self):
        index = build_client_index(
            [client_row(), client_row(**{"Código Cliente": "C2"})]
        )
        assert list(index) == ["C1", "C2"]
        assert isinstance(index["C1"], ClientRecord)

    def test_last_row_wins(self, caplog):
        rows = [client_row(Cidade="Recife"), client_row(Cidade="Olinda")]
        with caplog.at_level("WARNING"):
            index = build_client_index(rows)

        assert index["C1"].city == "Olinda"
        assert "duplicate client codes" in caplog.text

    def test_skips_rows_without_code(self):
        index = build_client_index([client_row(**{"Código Cliente": None})])
        assert index == {}

    def test_overrides_only_touch_listed_clients(self):
        index = build_client_index(
            [client_row(), client_row(**{"Código Cliente": "C2"})], {"C2": "1002"}
        )
        assert index["C1"].routing_codes == ["10", "20"]
        assert index["C2"].routing_codes == ["1002", "10", "20"]
