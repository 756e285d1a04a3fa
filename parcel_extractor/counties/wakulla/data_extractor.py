import os
import re
import logging

from parcel_extractor.addresses import parse_section_township_range
from parcel_extractor.deeds import map_instrument_to_deed_type, parse_book_page
from parcel_extractor.errors import UnknownEnumValueError
from parcel_extractor.output import (
    DATA_DIR,
    OWNERS_DIR,
    load_seed,
    load_unnormalized_address,
    read_input_html,
    read_json,
    remove_matching,
    source_info,
    write_data,
    write_relationship,
)
from parcel_extractor.owners import property_key
from parcel_extractor.parsing import acres_to_sqft, parse_int, units_type
from parcel_extractor.parties import PartyWriter
from parcel_extractor.records import read_staged, write_layouts, write_structures, write_utilities

from parcel_extractor.counties.wakulla import qpublic
from parcel_extractor.counties.wakulla.use_codes import lookup_use_code

logger = logging.getLogger(__name__)

COUNTY_NAME = "Wakulla"


def number_of_units(buildings):
    """Units implied by building types like DUPLEX/3-PLEX/QUDPLEX"""
    total = 0
    for building in buildings:
        building_type = (building.get("Type") or "").upper()
        if "QUDPLEX" in building_type:
            total += 4
            continue
        match = re.search(r"(\d+)-?PLEX", building_type)
        if match:
            total += int(match.group(1))
    return total or None


def built_year(buildings):
    years = [parse_int(b.get("Actual Year Built")) for b in buildings]
    years = [y for y in years if y]
    return min(years) if years else None


def write_property(soup, parcel_id, source):
    use = lookup_use_code(qpublic.property_use(soup))
    buildings = qpublic.buildings(soup)
    units = number_of_units(buildings)

    write_data("property.json", {
        **source,
        "parcel_identifier": parcel_id or "",
        "property_legal_description_text": qpublic.legal_description(soup),
        "property_structure_built_year": built_year(buildings),
        "subdivision": None,
        "number_of_units": units,
        "number_of_units_type": units_type(units),
        "zoning": None,
        **use,
    })


def write_lot(soup, source):
    write_data("lot.json", {
        **source,
        "lot_type": None,
        "lot_length_feet": None,
        "lot_width_feet": None,
        "lot_area_sqft": acres_to_sqft(qpublic.acreage(soup)),
        "landscaping_features": None,
        "view": None,
        "fencing_type": None,
        "fence_height": None,
        "fence_length": None,
        "driveway_material": None,
        "driveway_condition": None,
        "lot_condition_issues": None,
    })


def write_sales(sales, source):
    """sales_N/deed_N/file_N with their links; returns sale dates in file order"""
    for pattern in (r"sales_\d+\.json", r"deed_\d+\.json", r"file_\d+\.json",
                    r"relationship_(deed_file|sales_deed)_\d+\.json"):
        remove_matching(pattern)

    sale_dates = []
    for i, sale in enumerate(sales, start=1):
        write_data(f"sales_{i}.json", {
            **source,
            "ownership_transfer_date": sale["date"],
            "purchase_price_amount": sale["price"],
        })

        book, page = parse_book_page(sale["book_page"])
        write_data(f"deed_{i}.json", {
            **source,
            "deed_type": map_instrument_to_deed_type(sale["instrument"]),
            "book": book,
            "page": page,
        })
        write_data(f"file_{i}.json", {
            **source,
            "document_type": "Title",
            "file_format": None,
            "ipfs_url": None,
            "name": f"Deed {book}/{page}" if book and page else "Deed Document",
            "original_url": sale["link"],
        })
        write_relationship(f"relationship_sales_deed_{i}.json", f"sales_{i}.json", f"deed_{i}.json")
        write_relationship(f"relationship_deed_file_{i}.json", f"deed_{i}.json", f"file_{i}.json")
        sale_dates.append(sale["date"])
    return sale_dates


def write_taxes(soup, source):
    remove_matching(r"tax_\d+\.json")
    valuations = qpublic.valuations(soup)
    for year, values in valuations.items():
        write_data(f"tax_{year}.json", {
            **source,
            "tax_year": int(year),
            "property_assessed_value_amount": values.get("assessed") or 0,
            "property_market_value_amount": values.get("market") or 0,
            "property_building_amount": values.get("building"),
            "property_land_amount": values.get("land"),
            "property_taxable_value_amount": values.get("taxable") or 0,
            "monthly_tax_amount": None,
            "period_end_date": None,
            "period_start_date": None,
            "first_year_building_on_tax_roll": None,
            "first_year_on_tax_roll": None,
            "yearly_tax_amount": None,
        })
    return len(valuations)


def write_address(soup, unnormalized, source):
    county_name = (unnormalized.get("county_jurisdiction") or "").strip() or COUNTY_NAME
    write_data("address.json", {
        **source,
        "county_name": county_name,
        "unnormalized_address": (unnormalized.get("full_address") or "").strip() or None,
        **parse_section_township_range(qpublic.sec_twp_rng(soup)),
    })
    write_data("geometry.json", {
        **source,
        "latitude": unnormalized.get("latitude"),
        "longitude": unnormalized.get("longitude"),
    })
    write_relationship("relationship_address_has_geometry.json", "address.json", "geometry.json")


def write_parties(parcel_id, sale_dates, mailing, source):
    if mailing:
        write_data("mailing_address.json", {**source, "unnormalized_address": mailing})

    owner_data = read_json(os.path.join(OWNERS_DIR, "owner_data.json"))
    if not owner_data:
        logger.info("No owner data, skipping persons and companies")
        return None

    owners_by_date = (owner_data.get(property_key(parcel_id)) or {}).get("owners_by_date") or {}
    writer = PartyWriter(owners_by_date, source)
    writer.write_all(sale_dates)

    if mailing:
        writer.link_mailing_address()
    return writer


def extract(soup, seed, unnormalized):
    parcel_id = qpublic.parcel_id(soup) or seed.get("parcel_id")
    source = source_info(seed)

    write_property(soup, parcel_id, source)
    write_lot(soup, source)
    sale_dates = write_sales(qpublic.sales(soup), source)
    write_taxes(soup, source)
    write_parties(parcel_id, sale_dates, qpublic.mailing_address(soup), source)

    layouts = read_staged("layout_data.json", parcel_id, "layouts")
    write_structures(read_staged("structure_data.json", parcel_id, "structures"), layouts, source)
    write_utilities(read_staged("utilities_data.json", parcel_id, "utilities"), layouts, source)
    write_layouts(layouts, source)

    write_address(soup, unnormalized, source)
    return parcel_id


def main():
    os.makedirs(DATA_DIR, exist_ok=True)
    soup = qpublic.load_soup(read_input_html())
    try:
        parcel_id = extract(soup, load_seed(), load_unnormalized_address())
    except UnknownEnumValueError as e:
        write_data("error.json", e.to_dict())
        logger.error(f"Extraction error: {e}")
        raise
    logger.info(f"Extraction complete for {parcel_id}")


if __name__ == "__main__":
    main()
