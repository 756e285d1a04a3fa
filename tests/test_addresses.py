from parcel_extractor.addresses import (
    parse_city_state_zip,
    parse_full_address,
    parse_lot,
    parse_section_township_range,
)


def test_parse_full_address():
    parts = parse_full_address("123 N MAIN ST, TALLAHASSEE, FL 32301-1234")

    assert parts["street_number"] == "123"
    assert parts["street_pre_directional_text"] == "N"
    assert parts["street_name"] == "MAIN"
    assert parts["street_suffix_type"] == "St"
    assert parts["city_name"] == "TALLAHASSEE"
    assert parts["state_code"] == "FL"
    assert parts["postal_code"] == "32301"
    assert parts["plus_four_postal_code"] == "1234"


def test_parse_full_address_with_unit_and_post_directional():
    parts = parse_full_address("45 Ocean Boulevard SE Unit 4B, Crawfordville, FL 32327")

    assert parts["unit_identifier"] == "4B"
    assert parts["street_post_directional_text"] == "SE"
    assert parts["street_suffix_type"] == "Blvd"
    assert parts["street_name"] == "OCEAN"
    assert parts["plus_four_postal_code"] is None


def test_parse_full_address_empty():
    parts = parse_full_address(None)
    assert set(parts.values()) == {None}


def test_parse_city_state_zip():
    assert parse_city_state_zip("JACKSONVILLE BEACH FL 32250-") == {
        "city_name": "JACKSONVILLE BEACH",
        "state_code": "FL",
        "postal_code": "32250",
    }
    assert parse_city_state_zip("FL")["city_name"] is None


def test_parse_section_township_range():
    assert parse_section_township_range("12/3S/1W") == {
        "section": "12", "township": "3S", "range": "1W",
    }
    assert parse_section_township_range("LOT 3 SEC 12-2S-26E") == {
        "section": "12", "township": "2S", "range": "26E",
    }
    assert parse_section_township_range("no data")["section"] is None


def test_parse_lot():
    assert parse_lot(["SUBDIVISION A", "LOT 5 BLK 3"]) == "5"
    assert parse_lot(["ACREAGE"]) is None
