import json

from parcel_extractor.parties import PartyWriter

SOURCE = {"request_identifier": "R1"}


def _person(first, last, middle=None):
    return {
        "type": "person",
        "first_name": first,
        "last_name": last,
        "middle_name": middle,
        "prefix_name": None,
        "suffix_name": None,
    }


def _load(path):
    with open(path) as f:
        return json.load(f)


def test_write_all_links_sale_buyers_and_current_owners(tmp_path):
    owners_by_date = {
        "2020-01-01": [_person("JOHN", "SMITH")],
        "current": [_person("JOHN", "SMITH"), {"type": "company", "name": "ACME LLC"}],
    }
    writer = PartyWriter(owners_by_date, SOURCE, str(tmp_path))

    counters = writer.write_all(["2020-01-01"])

    assert counters == {"person": 1, "company": 1}
    person = _load(tmp_path / "person_1.json")
    assert person["first_name"] == "John"
    assert person["last_name"] == "Smith"
    assert person["request_identifier"] == "R1"
    assert _load(tmp_path / "company_1.json")["name"] == "ACME LLC"
    assert _load(tmp_path / "relationship_sales_person_1.json") == {
        "from": {"/": "./sales_1.json"},
        "to": {"/": "./person_1.json"},
    }
    assert _load(tmp_path / "relationship_sales_company_1.json")["to"] == {"/": "./company_1.json"}


def test_people_are_merged_across_dates(tmp_path):
    owners_by_date = {
        "2010-06-01": [_person("JANE", "DOE")],
        "unknown_date_1": [_person("JANE", "DOE", "Q")],
        "current": [],
    }
    writer = PartyWriter(owners_by_date, SOURCE, str(tmp_path))

    assert writer.write_people() == 1
    assert _load(tmp_path / "person_1.json")["middle_name"] == "Q"


def test_unusable_person_names_are_dropped(tmp_path):
    writer = PartyWriter({"current": [_person("J0HN", "SMITH")]}, SOURCE, str(tmp_path))

    assert writer.write_people() == 0
    assert writer.file_for(_person("J0HN", "SMITH")) is None


def test_sales_without_date_are_not_linked(tmp_path):
    writer = PartyWriter({"current": []}, SOURCE, str(tmp_path))
    writer.write_all([None])

    assert not list(tmp_path.glob("relationship_sales_*"))


def test_mailing_address_links_current_owners(tmp_path):
    owners_by_date = {"current": [_person("ANN", "LEE"), {"type": "company", "name": "LEE FARMS LLC"}]}
    writer = PartyWriter(owners_by_date, SOURCE, str(tmp_path))
    writer.write_all([])

    assert writer.link_mailing_address() == 2
    assert _load(tmp_path / "relationship_person_has_mailing_address_1.json") == {
        "from": {"/": "./person_1.json"},
        "to": {"/": "./mailing_address.json"},
    }
    assert _load(tmp_path / "relationship_company_has_mailing_address_2.json")["from"] == {
        "/": "./company_1.json"
    }
