import logging

from parcel_extractor.output import load_seed, read_input_html
from parcel_extractor.parsing import match_keywords, parse_int, parse_number
from parcel_extractor.records import empty_structure, write_staged

from parcel_extractor.counties.wakulla import qpublic

logger = logging.getLogger(__name__)

EXTERIOR_PRIMARY_RULES = [
    (("BRK",), "Brick"),
    (("BRICK",), "Brick"),
    (("NATURAL", "STONE"), "Natural Stone"),
    (("MANUFACTURED", "STONE"), "Manufactured Stone"),
    (("STONE",), "Natural Stone"),
    (("STUC",), "Stucco"),
    (("VINYL",), "Vinyl Siding"),
    (("CEDAR",), "Wood Siding"),
    (("WOOD",), "Wood Siding"),
    (("FIBER", "CEMENT"), "Fiber Cement Siding"),
    (("METAL",), "Metal Siding"),
    (("BLOCK",), "Concrete Block"),
    (("CONCRETE",), "Concrete Block"),
    (("EIFS",), "EIFS"),
    (("LOG",), "Log"),
    (("ADOBE",), "Adobe"),
    (("PRECAST",), "Precast Concrete"),
    (("CURTAIN",), "Curtain Wall"),
    (("BD/BATTEN",), "Wood Siding"),
]

EXTERIOR_SECONDARY_RULES = [
    (("BRK",), "Brick Accent"),
    (("BRICK",), "Brick Accent"),
    (("STONE",), "Stone Accent"),
    (("WOOD",), "Wood Trim"),
    (("TRIM",), "Wood Trim"),
    (("METAL",), "Metal Trim"),
    (("STUC",), "Stucco Accent"),
    (("VINYL",), "Vinyl Accent"),
    (("DECORATIVE",), "Decorative Block"),
    (("BLOCK",), "Decorative Block"),
]

# Every matching rule contributes; the first surface found is used
INTERIOR_PRIMARY_RULES = [
    (("DRYWALL",), "Drywall"),
    (("SHEETROCK",), "Drywall"),
    (("PLASTER",), "Plaster"),
    (("WOOD",), "Wood Paneling"),
    (("PANEL",), "Wood Paneling"),
    (("BRICK",), "Exposed Brick"),
    (("BLOCK",), "Exposed Block"),
    (("WAINSCOT",), "Wainscoting"),
    (("SHIPLAP",), "Shiplap"),
    (("BOARD", "BATTEN"), "Board and Batten"),
    (("TILE",), "Tile"),
    (("STONE",), "Stone Veneer"),
    (("METAL",), "Metal Panels"),
    (("GLASS",), "Glass Panels"),
    (("CONCRETE",), "Concrete"),
]

INTERIOR_SECONDARY_RULES = [
    (("WAINSCOT",), "Wainscoting"),
    (("CHAIR", "RAIL"), "Chair Rail"),
    (("CROWN",), "Crown Molding"),
    (("BASE",), "Baseboards"),
    (("WOOD", "TRIM"), "Wood Trim"),
    (("STONE",), "Stone Accent"),
    (("TILE",), "Tile Accent"),
    (("METAL",), "Metal Accent"),
    (("GLASS",), "Glass Insert"),
    (("PANEL",), "Decorative Panels"),
    (("FEATURE",), "Feature Wall Material"),
]

FLOORING_PRIMARY_RULES = [
    (("SOLID", "HARDWOOD"), "Solid Hardwood"),
    (("ENGINEERED", "HARDWOOD"), "Engineered Hardwood"),
    (("LAMINATE",), "Laminate"),
    (("LVP",), "Luxury Vinyl Plank"),
    (("LUXURY", "VINYL"), "Luxury Vinyl Plank"),
    (("VINYL",), "Sheet Vinyl"),
    (("CERAMIC", "TILE"), "Ceramic Tile"),
    (("PORCELAIN", "TILE"), "Porcelain Tile"),
    (("NATURAL", "STONE"), "Natural Stone Tile"),
    (("STONE", "TILE"), "Natural Stone Tile"),
    (("CARPET",), "Carpet"),
    (("AREA", "RUG"), "Area Rugs"),
    (("CONCRETE",), "Polished Concrete"),
    (("BAMBOO",), "Bamboo"),
    (("CORK",), "Cork"),
    (("LINOLEUM",), "Linoleum"),
    (("TERRAZZO",), "Terrazzo"),
    (("EPOXY",), "Epoxy Coating"),
    (("HARDWOOD",), "Solid Hardwood"),
    (("CERAMIC",), "Ceramic Tile"),
    (("STONE",), "Natural Stone Tile"),
    (("V C TILE",), "Sheet Vinyl"),
]

FLOORING_SECONDARY_RULES = [
    (("SOLID", "HARDWOOD"), "Solid Hardwood"),
    (("ENGINEERED", "HARDWOOD"), "Engineered Hardwood"),
    (("LAMINATE",), "Laminate"),
    (("LVP",), "Luxury Vinyl Plank"),
    (("LUXURY", "VINYL"), "Luxury Vinyl Plank"),
    (("CERAMIC", "TILE"), "Ceramic Tile"),
    (("CARPET",), "Carpet"),
    (("AREA", "RUG"), "Area Rugs"),
    (("TRANSITION", "STRIP"), "Transition Strips"),
    (("HARDWOOD",), "Solid Hardwood"),
    (("CERAMIC",), "Ceramic Tile"),
]

# Most specific covering first
ROOF_COVERING_RULES = [
    (("EPDM",), "EPDM Membrane"),
    (("TPO",), "TPO Membrane"),
    (("WOOD", "SHINGLE"), "Wood Shingle"),
    (("WOOD", "SHAKE"), "Wood Shake"),
    (("SLATE",), "Natural Slate"),
    (("CONCRETE", "TILE"), "Concrete Tile"),
    (("CLAY", "TILE"), "Clay Tile"),
    (("METAL", "STANDING"), "Metal Standing Seam"),
    (("METAL", "RIB"), "Metal Standing Seam"),
    (("METAL", "CORRUGATED"), "Metal Corrugated"),
    (("3-TAB", "SHINGLE"), "3-Tab Asphalt Shingle"),
    (("SHINGLE",), "Architectural Asphalt Shingle"),
    (("SHNGL",), "Architectural Asphalt Shingle"),
]

ROOF_STRUCTURE_RULES = [
    (("CONCRETE BEAM",), "Concrete Beam"),
    (("STEEL TRUSS",), "Steel Truss"),
    (("WOOD RAFTER",), "Wood Rafter"),
    (("WOOD TRUSS",), "Wood Truss"),
]

ROOF_DESIGN_RULES = [
    (("SHED",), "Shed"),
    (("GAMBREL",), "Gambrel"),
    (("MANSARD",), "Mansard"),
    (("FLAT",), "Flat"),
    (("HIP",), "Hip"),
    (("GABLE",), "Gable"),
]

# frame keyword -> (primary framing, interior wall structure)
FRAME_RULES = [
    (("CONCRETE",), ("Poured Concrete", "Concrete Block")),
    (("MASONRY",), ("Masonry", "Concrete Block")),
    (("STEEL",), ("Steel Frame", "Steel Frame")),
    (("WOOD",), ("Wood Frame", "Wood Frame")),
]

BASE_AREA_LABELS = ("Heated Area", "Living Area", "Total Living Area", "Gross Area")


def split_tokens(value):
    return [t.strip() for t in (value or "").split(";") if t.strip()]


def all_matches(tokens, rules):
    found = []
    for token in tokens:
        upper = token.upper()
        for keywords, value in rules:
            if all(k in upper for k in keywords) and value not in found:
                found.append(value)
    return found


def structure_from_building(building, building_number):
    rec = empty_structure(building_number=building_number, structure_index=building_number)

    exterior = split_tokens(building.get("Exterior Walls"))
    if exterior:
        rec["exterior_wall_material_primary"] = match_keywords(exterior[0], EXTERIOR_PRIMARY_RULES)
        if len(exterior) > 1:
            rec["exterior_wall_material_secondary"] = match_keywords(exterior[1], EXTERIOR_SECONDARY_RULES)

    interior = split_tokens(building.get("Interior Walls"))
    primary_surfaces = all_matches(interior, INTERIOR_PRIMARY_RULES)
    secondary_surfaces = all_matches(interior, INTERIOR_SECONDARY_RULES)
    if primary_surfaces:
        rec["interior_wall_surface_material_primary"] = primary_surfaces[0]
    if secondary_surfaces:
        rec["interior_wall_surface_material_secondary"] = secondary_surfaces[0]

    flooring = split_tokens(building.get("Floor Cover"))
    if flooring:
        rec["flooring_material_primary"] = match_keywords(flooring[0], FLOORING_PRIMARY_RULES)
        if len(flooring) > 1:
            rec["flooring_material_secondary"] = match_keywords(flooring[1], FLOORING_SECONDARY_RULES)

    roof = " ".join(v for v in (building.get("Roof Cover"), building.get("Roof Type")) if v)
    if roof:
        rec["roof_covering_material"] = match_keywords(roof, ROOF_COVERING_RULES)
        rec["roof_structure_material"] = match_keywords(roof, ROOF_STRUCTURE_RULES)
        rec["roof_design_type"] = match_keywords(roof, ROOF_DESIGN_RULES)

    frame = match_keywords(building.get("Frame Type"), FRAME_RULES)
    if frame:
        framing, wall_structure = frame
        rec["primary_framing_material"] = framing
        rec["interior_wall_structure_material"] = wall_structure
        rec["interior_wall_structure_material_primary"] = wall_structure

    rec["number_of_stories"] = parse_int(building.get("Stories"))

    for label in BASE_AREA_LABELS:
        area = parse_number(building.get(label))
        if area is not None:
            rec["finished_base_area"] = int(round(area))
            break
    return rec


def build_structures(buildings):
    structures = [structure_from_building(b, i) for i, b in enumerate(buildings, start=1)]
    if not structures:
        structures.append(empty_structure(building_number=None, structure_index=1))
    return structures


def main():
    soup = qpublic.load_soup(read_input_html())
    parcel_id = qpublic.parcel_id(soup) or load_seed().get("parcel_id")

    structures = build_structures(qpublic.buildings(soup))
    write_staged("structure_data.json", parcel_id, "structures", structures)
    logger.info(f"Staged {len(structures)} structure records for {parcel_id}")


if __name__ == "__main__":
    main()
