import json

from parcel_extractor.relationships import build_relationship_files, create_county_data_group


def _touch(folder, *names):
    for name in names:
        (folder / name).write_text("{}")


def test_property_relationships_are_built(tmp_path):
    _touch(
        tmp_path,
        "property.json",
        "address.json",
        "lot.json",
        "tax_2024.json",
        "tax_2025.json",
        "sales_1.json",
        "person_1.json",
        "company_1.json",
        "mailing_address.json",
        "relationship_sales_person_1.json",
    )

    files, errors = build_relationship_files(str(tmp_path))

    assert errors == []
    assert "relationship_sales_person_1.json" in files
    assert "relationship_person_1_property.json" in files
    assert "relationship_property_tax_2025.json" in files
    assert "relationship_property_address.json" in files
    assert not any("mailing_address" in f for f in files)
    rel = json.loads((tmp_path / "relationship_property_lot.json").read_text())
    assert rel == {"from": {"/": "./property.json"}, "to": {"/": "./lot.json"}}


def test_missing_property_is_an_error(tmp_path):
    _touch(tmp_path, "address.json")

    files, errors = build_relationship_files(str(tmp_path))

    assert files == []
    assert errors == ["No property.json file found"]


def test_county_data_group_slots():
    group = create_county_data_group([
        "relationship_property_address.json",
        "relationship_property_tax_2024.json",
        "relationship_property_tax_2025.json",
        "relationship_person_1_property.json",
        "relationship_sales_deed_1.json",
        "relationship_something_else.json",
    ])
    relationships = group["relationships"]

    assert group["label"] == "County"
    assert relationships["property_has_address"] == {"/": "./relationship_property_address.json"}
    assert len(relationships["property_has_tax"]) == 2
    assert relationships["person_has_property"] == [{"/": "./relationship_person_1_property.json"}]
    assert relationships["sales_history_has_deed"] == [{"/": "./relationship_sales_deed_1.json"}]
    assert relationships["property_has_lot"] is None
