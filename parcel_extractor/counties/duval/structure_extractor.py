import re
import logging

from parcel_extractor.output import load_seed, read_input_html
from parcel_extractor.records import empty_structure, write_staged

from parcel_extractor.counties.duval import page

logger = logging.getLogger(__name__)


def _int_or_none(value):
    return int(round(value)) if value is not None else None


def apply_element(rec, element, detail, flooring):
    """Map one Element/Detail row of the building elements grid onto rec"""
    element = element.lower()

    if "roof struct" in element:
        # A detail naming both shapes is a gable roof with hipped sections
        if re.search(r"gable", detail, re.IGNORECASE):
            rec["roof_design_type"] = "Gable"
        elif re.search(r"hip", detail, re.IGNORECASE):
            rec["roof_design_type"] = "Hip"

    elif "roofing cover" in element:
        if re.search(r"asph|comp\s*shng", detail, re.IGNORECASE):
            rec["roof_material_type"] = "Composition"
            rec["roof_covering_material"] = "Architectural Asphalt Shingle"
        elif re.search(r"metal", detail, re.IGNORECASE):
            rec["roof_material_type"] = "Metal"
            rec["roof_covering_material"] = "Metal Standing Seam"

    elif "exterior wall" in element:
        if re.search(r"horizontal\s+lap", detail, re.IGNORECASE):
            rec["exterior_wall_material_primary"] = rec["exterior_wall_material_primary"] or "Fiber Cement Siding"
        if re.search(r"vertical\s+sheet", detail, re.IGNORECASE):
            if rec["exterior_wall_material_primary"]:
                rec["exterior_wall_material_secondary"] = "Wood Siding"
            else:
                rec["exterior_wall_material_primary"] = "Wood Siding"
        if re.search(r"stucco", detail, re.IGNORECASE):
            rec["exterior_wall_material_primary"] = rec["exterior_wall_material_primary"] or "Stucco"
        if re.search(r"brick", detail, re.IGNORECASE):
            rec["exterior_wall_material_primary"] = rec["exterior_wall_material_primary"] or "Brick"

    elif "interior wall" in element:
        if re.search(r"drywall", detail, re.IGNORECASE):
            rec["interior_wall_surface_material_primary"] = "Drywall"
        elif re.search(r"plaster", detail, re.IGNORECASE):
            rec["interior_wall_surface_material_primary"] = "Plaster"

    elif "int flooring" in element:
        if re.search(r"carpet", detail, re.IGNORECASE):
            flooring.append("Carpet")
        if re.search(r"tile", detail, re.IGNORECASE):
            flooring.append("Ceramic Tile")
        if re.search(r"hardwood|wood", detail, re.IGNORECASE):
            flooring.append("Solid Hardwood")


def build_structure(soup):
    rec = empty_structure(structure_index=1, building_number=None)

    attributes = page.building_attributes(soup)
    rec["number_of_stories"] = _int_or_none(page.attribute_number(attributes, r"stories"))

    areas = page.building_areas(soup)
    rec["finished_base_area"] = _int_or_none(page.area_for(areas, r"^base area$", "gross"))
    rec["finished_upper_story_area"] = _int_or_none(page.area_for(areas, r"finished upper story", "gross"))

    flooring = []
    for element, detail in page.building_elements(soup):
        if detail:
            apply_element(rec, element, detail, flooring)

    distinct = list(dict.fromkeys(flooring))
    rec["flooring_material_primary"] = distinct[0] if distinct else None
    rec["flooring_material_secondary"] = distinct[1] if len(distinct) > 1 else None

    building_type = page.building_type(soup)
    if building_type and "townhouse" in building_type.lower():
        rec["attachment_type"] = "Attached"
    return rec


def main():
    soup = page.load_soup(read_input_html())
    parcel_id = page.parcel_id(soup) or load_seed().get("parcel_id")

    write_staged("structure_data.json", parcel_id, "structures", [build_structure(soup)])
    logger.info(f"Staged structure record for {parcel_id}")


if __name__ == "__main__":
    main()
