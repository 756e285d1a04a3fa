import logging

from parcel_extractor.output import load_seed, read_input_html
from parcel_extractor.parsing import parse_int, parse_number
from parcel_extractor.records import add_layout, add_room_layouts, living_area_overrides, write_staged

from parcel_extractor.counties.wakulla import qpublic

logger = logging.getLogger(__name__)


def layouts_for_building(layouts, building, building_number):
    """Append the Building layout for one building followed by its rooms"""
    heated = parse_number(qpublic.building_value(building, "Heated Area", "Living Area", "Total Living Area"))
    total = parse_number(qpublic.building_value(building, "Total Area", "Gross Area", "Total Under Roof"))
    stories = parse_int(qpublic.building_value(building, "Stories"))

    add_layout(
        layouts,
        "Building",
        building_number=building_number,
        built_year=parse_int(qpublic.building_value(building, "Actual Year Built")),
        total_area_sq_ft=round(total) if total else None,
        heated_area_sq_ft=round(heated) if heated else None,
        livable_area_sq_ft=round(heated) if heated else None,
        floor_level=None,
    )

    if heated:
        add_layout(
            layouts,
            "Living Area",
            building_number=building_number,
            floor_level="1st Floor" if stories else None,
            **living_area_overrides(heated),
        )

    add_room_layouts(
        layouts,
        parse_number(qpublic.building_value(building, "Bedrooms", "Beds")),
        parse_number(qpublic.building_value(building, "Bathrooms", "Baths")),
        stories,
        building_number=building_number,
    )
    return layouts


def build_layouts(buildings):
    layouts = []
    for building_number, building in enumerate(buildings, start=1):
        layouts_for_building(layouts, building, building_number)
    return layouts


def main():
    soup = qpublic.load_soup(read_input_html())
    parcel_id = qpublic.parcel_id(soup) or load_seed().get("parcel_id")

    layouts = build_layouts(qpublic.buildings(soup))
    write_staged("layout_data.json", parcel_id, "layouts", layouts)
    logger.info(f"Staged {len(layouts)} layouts for {parcel_id}")


if __name__ == "__main__":
    main()
