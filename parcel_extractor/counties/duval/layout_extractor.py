import logging

from parcel_extractor.output import load_seed, read_input_html
from parcel_extractor.records import add_layout, add_room_layouts, living_area_overrides, write_staged

from parcel_extractor.counties.duval import page

logger = logging.getLogger(__name__)


def build_layouts(soup):
    attributes = page.building_attributes(soup)
    bedrooms = page.attribute_number(attributes, r"^bedrooms$")
    baths = page.attribute_number(attributes, r"^baths$")
    stories = page.attribute_number(attributes, r"^stories$")
    stories = int(round(stories)) if stories is not None else None

    areas = page.building_areas(soup)
    base_heated = page.area_for(areas, r"^base area$", "heated")
    upper_heated = page.area_for(areas, r"finished upper story", "heated")
    total_heated = page.area_for(areas, r"^total$", "heated")

    layouts = []
    if base_heated and base_heated > 0:
        add_layout(layouts, "Living Area",
                   floor_level="1st Floor" if stories else None,
                   **living_area_overrides(base_heated))
    if upper_heated and upper_heated > 0:
        add_layout(layouts, "Living Area",
                   floor_level="2nd Floor" if stories and stories > 1 else "1st Floor",
                   **living_area_overrides(upper_heated))
    if not layouts and total_heated and total_heated > 0:
        add_layout(layouts, "Living Area",
                   floor_level="1st Floor" if stories else None,
                   **living_area_overrides(total_heated))

    return add_room_layouts(layouts, bedrooms, baths, stories)


def main():
    soup = page.load_soup(read_input_html())
    parcel_id = page.parcel_id(soup) or load_seed().get("parcel_id")

    layouts = build_layouts(soup)
    write_staged("layout_data.json", parcel_id, "layouts", layouts)
    logger.info(f"Staged {len(layouts)} layouts for {parcel_id}")


if __name__ == "__main__":
    main()
