import json

import pytest
import requests

from parcel_extractor import schemas
from parcel_extractor.errors import SchemaValidationError


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.exceptions.HTTPError(f"{self.status}")

    def json(self):
        return self.payload


def test_schema_name_for():
    assert schemas.schema_name_for("tax_2024.json") == "tax.json"
    assert schemas.schema_name_for("person_3.json") == "person.json"
    assert schemas.schema_name_for("property.json") == "property.json"
    assert schemas.schema_name_for("relationship_sales_deed_1.json") is None
    assert schemas.schema_name_for("deed_1.json") is None


def test_load_schemas_caches_each_schema(monkeypatch, tmp_path):
    monkeypatch.setattr(schemas, "fetch_schema_from_ipfs", lambda cid: {"title": cid})

    loaded = schemas.load_schemas_from_ipfs(schemas_dir=str(tmp_path))

    assert set(loaded) == set(schemas.SCHEMA_CIDS)
    assert loaded["lot.json"] == {"title": schemas.SCHEMA_CIDS["lot.json"]}
    assert json.loads((tmp_path / "lot.json").read_text()) == loaded["lot.json"]


def test_load_schemas_gives_up_on_missing_schema(monkeypatch):
    monkeypatch.setattr(schemas, "fetch_schema_from_ipfs", lambda cid: None)

    assert schemas.load_schemas_from_ipfs() is None


def test_fetch_schema_tries_next_gateway(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append(url)
        if url.startswith("https://bad.example/"):
            raise requests.exceptions.ConnectionError("down")
        return FakeResponse({"type": "object"})

    monkeypatch.setenv("IPFS_GATEWAYS", "https://bad.example, https://good.example/ipfs")
    monkeypatch.setattr(schemas.requests, "get", fake_get)

    assert schemas.fetch_schema_from_ipfs("cid123") == {"type": "object"}
    assert calls == ["https://bad.example/cid123", "https://good.example/ipfs/cid123"]


def test_fetch_schema_gives_up(monkeypatch):
    monkeypatch.setenv("IPFS_GATEWAYS", "https://bad.example")
    monkeypatch.setattr(schemas.requests, "get", lambda url, timeout: FakeResponse({}, status=500))

    assert schemas.fetch_schema_from_ipfs("cid123") is None


def test_fetch_county_data_group_cid(monkeypatch):
    monkeypatch.setattr(
        schemas.requests, "get",
        lambda url, timeout: FakeResponse({"County": {"ipfsCid": "bafycounty"}}),
    )
    assert schemas.fetch_county_data_group_cid() == "bafycounty"


def test_validate_data_dir(tmp_path):
    tax_schema = {
        "type": "object",
        "properties": {"tax_year": {"type": "integer"}},
        "required": ["tax_year"],
    }
    (tmp_path / "tax_2024.json").write_text(json.dumps({"tax_year": 2024}))
    (tmp_path / "relationship_property_tax_2024.json").write_text("{}")

    assert schemas.validate_data_dir(str(tmp_path), {"tax.json": tax_schema}) == 1

    (tmp_path / "tax_2025.json").write_text(json.dumps({"tax_year": "2025"}))
    with pytest.raises(SchemaValidationError) as excinfo:
        schemas.validate_data_dir(str(tmp_path), {"tax.json": tax_schema})
    assert excinfo.value.errors[0].startswith("tax_2025.json: tax_year:")
