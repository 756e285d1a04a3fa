import json

import pytest
from bs4 import BeautifulSoup

from parcel_extractor.main import assemble_county_data_group
from parcel_extractor.owners import resolve_owners
from parcel_extractor.counties.duval import (
    data_extractor,
    layout_extractor,
    owner_processor,
    structure_extractor,
    utility_extractor,
)
from parcel_extractor.counties.duval.classification import property_type, property_usage_type, structure_form

PARCEL = "012345-0000"


def _load(path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def extracted(duval_parcel, monkeypatch):
    monkeypatch.chdir(duval_parcel)
    for script in (owner_processor, structure_extractor, utility_extractor, layout_extractor, data_extractor):
        script.main()
    return duval_parcel


def test_current_owner_took_title_at_latest_sale(extracted):
    owner_data = _load(extracted / "owners" / "owner_data.json")
    owners_by_date = owner_data[f"property_{PARCEL}"]["owners_by_date"]

    assert list(owners_by_date) == ["2019-07-01", "current"]
    owner = owners_by_date["current"][0]
    assert (owner["first_name"], owner["middle_name"], owner["last_name"]) == ("JOHN", "A", "SMITH")


def test_property(extracted):
    prop = _load(extracted / "data" / "property.json")

    assert prop["parcel_identifier"] == PARCEL
    assert prop["property_type"] == "Building"
    assert prop["property_usage_type"] == "Residential"
    assert prop["structure_form"] == "SingleFamilyDetached"
    assert prop["property_structure_built_year"] == 1995
    assert prop["property_legal_description_text"] == "RIVERSIDE PLAT 12-2S-26E; LOT 7 BLK 2"
    assert prop["livable_floor_area"] == "2100"
    assert prop["number_of_units"] == 1
    assert prop["number_of_units_type"] == "One"
    assert prop["zoning"] == "RLD-60"
    assert prop["subdivision"] == "00123 RIVERSIDE"


def test_address_fills_city_from_page(extracted):
    address = _load(extracted / "data" / "address.json")

    assert address["street_number"] == "1234"
    assert address["street_name"] == "RIVERSIDE"
    assert address["street_suffix_type"] == "Ave"
    assert address["city_name"] == "JACKSONVILLE"
    assert address["state_code"] == "FL"
    assert address["postal_code"] == "32204"
    assert address["county_name"] == "Duval"
    assert address["lot"] == "7"
    assert (address["section"], address["township"], address["range"]) == ("12", "2S", "26E")
    assert _load(extracted / "data" / "lot.json")["lot_area_sqft"] == 8712


def test_sales_skip_zero_price_and_map_deeds(extracted):
    data = extracted / "data"

    assert sorted(p.name for p in data.glob("sales_*.json")) == ["sales_1.json", "sales_2.json"]
    assert _load(data / "sales_1.json")["purchase_price_amount"] == 310000.0
    assert _load(data / "deed_1.json")["deed_type"] == "Warranty Deed"
    assert _load(data / "deed_2.json")["deed_type"] == "Quitclaim Deed"

    file_1 = _load(data / "file_1.json")
    assert file_1["document_type"] == "ConveyanceDeedWarrantyDeed"
    assert file_1["name"] == "19000-00123"
    assert file_1["original_url"] == "http://oncore.duvalclerk.com/OnCoreWeb/Search.aspx?bk=19000&pg=123"
    assert _load(data / "file_2.json")["document_type"] == "ConveyanceDeedQuitClaimDeed"
    assert _load(data / "relationship_deed_file_2.json") == {
        "from": {"/": "./deed_2.json"},
        "to": {"/": "./file_2.json"},
    }

    tax_map = _load(data / "file_taxmap.json")
    assert tax_map["document_type"] == "PropertyImage"
    assert tax_map["original_url"] == "https://maps.coj.net/MapImage.ashx?re=0123450000"


def test_only_complete_value_columns_become_taxes(extracted):
    data = extracted / "data"

    assert sorted(p.name for p in data.glob("tax_*.json")) == ["tax_2024.json"]
    tax = _load(data / "tax_2024.json")
    assert tax["property_market_value_amount"] == 260000.0
    assert tax["property_assessed_value_amount"] == 240000.0
    assert tax["property_taxable_value_amount"] == 190000.0


def test_owner_linked_to_latest_sale(extracted):
    data = extracted / "data"

    assert _load(data / "person_1.json")["first_name"] == "John"
    assert [p.name for p in data.glob("relationship_sales_person_*.json")] == ["relationship_sales_person_1.json"]
    assert _load(data / "relationship_sales_person_1.json") == {
        "from": {"/": "./sales_1.json"},
        "to": {"/": "./person_1.json"},
    }


def test_structure_and_utility(extracted):
    structure = _load(extracted / "data" / "structure_1.json")
    assert structure["exterior_wall_material_primary"] == "Fiber Cement Siding"
    assert structure["exterior_wall_material_secondary"] == "Wood Siding"
    assert structure["roof_design_type"] == "Gable"
    assert structure["roof_material_type"] == "Composition"
    assert structure["interior_wall_surface_material_primary"] == "Drywall"
    assert structure["flooring_material_primary"] == "Carpet"
    assert structure["flooring_material_secondary"] == "Ceramic Tile"
    assert structure["number_of_stories"] == 2
    assert structure["finished_base_area"] == 1500
    assert structure["finished_upper_story_area"] == 600

    utility = _load(extracted / "data" / "utility_1.json")
    assert utility["heating_system_type"] == "Central"
    assert utility["heating_fuel_type"] == "Electric"
    assert utility["cooling_system_type"] == "CentralAir"
    assert utility["hvac_condensing_unit_present"] == "Yes"


def test_layouts_by_floor(extracted):
    data = extracted / "data"
    layouts = [_load(data / f"layout_{i}.json") for i in range(1, 9)]

    assert [(l["space_type"], l["floor_level"]) for l in layouts] == [
        ("Living Area", "1st Floor"),
        ("Living Area", "2nd Floor"),
        ("Primary Bedroom", "1st Floor"),
        ("Bedroom", "2nd Floor"),
        ("Bedroom", "2nd Floor"),
        ("Primary Bathroom", "1st Floor"),
        ("Full Bathroom", "2nd Floor"),
        ("Half Bathroom / Powder Room", "1st Floor"),
    ]
    assert layouts[0]["size_square_feet"] == 1500
    assert not (data / "layout_9.json").exists()


def test_county_data_group(extracted):
    relationships = assemble_county_data_group()["relationships"]

    assert len(relationships["property_has_file"]) == 3
    assert len(relationships["sales_history_has_deed"]) == 2
    assert len(relationships["deed_has_file"]) == 2
    assert relationships["property_has_lot"] == {"/": "./relationship_property_lot.json"}
    assert relationships["person_has_property"] == [{"/": "./relationship_person_1_property.json"}]
    assert relationships["layout_has_layout"] is None


def test_care_of_and_address_lines_are_not_owners():
    soup = BeautifulSoup(
        '<div id="ownerName"><h2><span>C/O JANE DOE</span></h2></div>'
        '<span id="ctl00_cphBody_repeaterOwnerInformation_ctl00_lblOwnerName">C/O JANE DOE</span>',
        "html.parser",
    )
    invalid = []

    assert owner_processor.current_owner_strings(soup, invalid) == []
    assert {"raw": "C/O JANE DOE", "reason": "care_of_entry"} in invalid

    invalid = []
    assert owner_processor.clean_owner_string("ACME CO", invalid) == "ACME CO"
    assert owner_processor.clean_owner_string("JONES, MARY ET AL", invalid) == "MARY JONES"
    assert invalid == []


@pytest.mark.parametrize("use, building_type, heated, expected", [
    ("0400 Condominium", "CONDO UNIT", 900, ("Unit", "Residential", "ApartmentUnit")),
    ("0000 Vacant Res < 20 Ac", None, None, ("LandParcel", "TransitionalProperty", None)),
    ("0200 Mobile Home", "MOBILE HOME", 0, ("ManufacturedHome", "Residential", "ManufacturedHomeOnLand")),
    ("8500 Hospital Public", None, 50000, ("Building", "PublicHospital", None)),
])
def test_classification(use, building_type, heated, expected):
    assert (
        property_type(heated, use, building_type),
        property_usage_type(use),
        structure_form(use, building_type),
    ) == expected


def test_composite_owner_keeps_shared_surname():
    invalid = []
    cleaned = owner_processor.clean_owner_string("SMITH, JOHN & JANE", invalid)

    assert cleaned == "JOHN SMITH & JANE SMITH"
    owners = resolve_owners([cleaned], invalid)
    assert [(o["first_name"], o["last_name"]) for o in owners] == [("JOHN", "SMITH"), ("JANE", "SMITH")]
    assert invalid == []
