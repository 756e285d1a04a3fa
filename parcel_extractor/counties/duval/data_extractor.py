import os
import logging

from parcel_extractor.addresses import (
    parse_city_state_zip,
    parse_full_address,
    parse_lot,
    parse_section_township_range,
)
from parcel_extractor.deeds import file_document_type, map_deed_description
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
from parcel_extractor.parsing import parse_int, units_type
from parcel_extractor.parties import PartyWriter
from parcel_extractor.records import read_staged, write_layouts, write_structures, write_utilities

from parcel_extractor.counties.duval import page
from parcel_extractor.counties.duval.classification import property_type, property_usage_type, structure_form

logger = logging.getLogger(__name__)

COUNTY_NAME = "Duval"


def write_property(soup, parcel_id, legal_rows, source):
    use = page.property_use(soup)
    building_type = page.building_type(soup)
    heated = page.area_for(page.building_areas(soup), r"^total$", "heated")
    units = page.attribute_number(page.building_attributes(soup), r"rooms\s*/\s*units")
    heated_text = str(int(round(heated))) if heated is not None else None

    write_data("property.json", {
        **source,
        "parcel_identifier": parcel_id or "",
        "property_type": property_type(heated, use, building_type),
        "property_structure_built_year": parse_int(page.year_built(soup)),
        "property_effective_built_year": None,
        "property_legal_description_text": "; ".join(legal_rows) or None,
        "number_of_units": int(units) if units is not None else None,
        "number_of_units_type": units_type(units),
        "structure_form": structure_form(use, building_type),
        "property_usage_type": property_usage_type(use),
        "livable_floor_area": heated_text,
        "area_under_air": heated_text,
        "subdivision": page.subdivision(soup),
        "total_area": page.total_area(soup),
        "zoning": page.zoning(soup),
    })


def section_township_range(legal_rows):
    """Section/township/range from the first legal row that carries one"""
    for row in legal_rows:
        trs = parse_section_township_range(row)
        if trs["section"]:
            return trs
    return parse_section_township_range("")


def write_address(soup, unnormalized, legal_rows, source):
    parts = parse_full_address(unnormalized.get("full_address"))
    from_page = parse_city_state_zip(page.site_address_line2(soup))
    for key in ("city_name", "state_code", "postal_code"):
        parts[key] = parts[key] or from_page[key]

    write_data("address.json", {
        **source,
        **parts,
        "county_name": COUNTY_NAME,
        "country_code": "US",
        "latitude": unnormalized.get("latitude"),
        "longitude": unnormalized.get("longitude"),
        "lot": parse_lot(legal_rows),
        "block": None,
        "municipality_name": None,
        "route_number": None,
        **section_township_range(legal_rows),
    })


def write_lot(soup, source):
    write_data("lot.json", {
        **source,
        "lot_type": None,
        "lot_length_feet": None,
        "lot_width_feet": None,
        "lot_area_sqft": parse_int(page.total_area(soup)),
        "landscaping_features": None,
        "view": None,
        "fencing_type": None,
        "fence_height": None,
        "fence_length": None,
        "driveway_material": None,
        "driveway_condition": None,
        "lot_condition_issues": None,
    })


def write_sales(soup, source):
    """sales_N plus deed_N/file_N where the instrument and book link allow"""
    for pattern in (r"sales_\d+\.json", r"deed_\d+\.json", r"file_(\d+|taxmap)\.json",
                    r"relationship_(deed_file|sales_deed)_\d+\.json"):
        remove_matching(pattern)

    sale_dates = []
    for i, sale in enumerate(page.sales(soup), start=1):
        write_data(f"sales_{i}.json", {
            **source,
            "ownership_transfer_date": sale["date"],
            "purchase_price_amount": sale["price"],
        })
        sale_dates.append(sale["date"])

        deed_type = map_deed_description(sale["instrument"])
        if deed_type:
            write_data(f"deed_{i}.json", {**source, "deed_type": deed_type})
            write_relationship(f"relationship_sales_deed_{i}.json", f"sales_{i}.json", f"deed_{i}.json")

        if sale["link"]:
            write_data(f"file_{i}.json", {
                **source,
                "document_type": file_document_type(deed_type),
                "file_format": "txt",
                "name": sale["book_page"] or f"BookPage_{i}",
                "original_url": sale["link"],
                "ipfs_url": None,
            })
            if deed_type:
                write_relationship(f"relationship_deed_file_{i}.json", f"deed_{i}.json", f"file_{i}.json")

    tax_map = page.tax_map_url(soup)
    if tax_map:
        write_data("file_taxmap.json", {
            **source,
            "document_type": "PropertyImage",
            "file_format": "png",
            "name": "Tax Map",
            "original_url": tax_map,
            "ipfs_url": None,
        })
    return sale_dates


def write_taxes(soup, source):
    remove_matching(r"tax_\d+\.json")
    written = 0
    for year, values in page.valuations(soup).items():
        if values["market"] is None or values["assessed"] is None:
            continue
        write_data(f"tax_{year}.json", {
            **source,
            "tax_year": year,
            "property_assessed_value_amount": values["assessed"],
            "property_market_value_amount": values["market"],
            "property_building_amount": values["building"],
            "property_land_amount": values["land"],
            "property_taxable_value_amount": values["taxable"] if values["taxable"] is not None else values["assessed"],
            "monthly_tax_amount": None,
            "period_end_date": None,
            "period_start_date": None,
            "yearly_tax_amount": None,
            "first_year_building_on_tax_roll": None,
            "first_year_on_tax_roll": None,
        })
        written += 1
    return written


def write_parties(parcel_id, sale_dates, source):
    owner_data = read_json(os.path.join(OWNERS_DIR, "owner_data.json"))
    if not owner_data:
        logger.info("No owner data, skipping persons and companies")
        return None
    owners_by_date = (owner_data.get(property_key(parcel_id)) or {}).get("owners_by_date") or {}
    writer = PartyWriter(owners_by_date, source)
    writer.write_all(sale_dates)
    return writer


def extract(soup, seed, unnormalized):
    parcel_id = page.parcel_id(soup) or seed.get("parcel_id")
    source = source_info(seed)
    legal_rows = page.legal_rows(soup)

    write_property(soup, parcel_id, legal_rows, source)
    write_address(soup, unnormalized, legal_rows, source)
    write_lot(soup, source)
    sale_dates = write_sales(soup, source)
    write_taxes(soup, source)
    write_parties(parcel_id, sale_dates, source)

    layouts = read_staged("layout_data.json", parcel_id, "layouts")
    write_structures(read_staged("structure_data.json", parcel_id, "structures"), layouts, source)
    write_utilities(read_staged("utilities_data.json", parcel_id, "utilities"), layouts, source)
    write_layouts(layouts, source)
    return parcel_id


def main():
    os.makedirs(DATA_DIR, exist_ok=True)
    soup = page.load_soup(read_input_html())
    parcel_id = extract(soup, load_seed(), load_unnormalized_address())
    logger.info(f"Extraction complete for {parcel_id}")


if __name__ == "__main__":
    main()
