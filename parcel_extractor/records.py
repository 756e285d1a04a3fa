"""Structure, utility and layout documents.

Both counties stage these under owners/ as {"property_<id>": {...}} and
the data extractors copy them into data/ with source info attached.
"""

import logging

from .output import (
    OWNERS_DIR,
    write_owners_file,
    DATA_DIR,
    read_json,
    write_data,
    write_relationship,
    remove_matching,
)
from .owners import property_key

logger = logging.getLogger(__name__)

STRUCTURE_FIELDS = [
    "architectural_style_type",
    "attachment_type",
    "ceiling_condition",
    "ceiling_height_average",
    "ceiling_insulation_type",
    "ceiling_structure_material",
    "ceiling_surface_material",
    "exterior_door_installation_date",
    "exterior_door_material",
    "exterior_wall_condition",
    "exterior_wall_condition_primary",
    "exterior_wall_condition_secondary",
    "exterior_wall_insulation_type",
    "exterior_wall_insulation_type_primary",
    "exterior_wall_insulation_type_secondary",
    "exterior_wall_material_primary",
    "exterior_wall_material_secondary",
    "finished_base_area",
    "finished_basement_area",
    "finished_upper_story_area",
    "flooring_condition",
    "flooring_material_primary",
    "flooring_material_secondary",
    "foundation_condition",
    "foundation_material",
    "foundation_repair_date",
    "foundation_type",
    "foundation_waterproofing",
    "gutters_condition",
    "gutters_material",
    "interior_door_material",
    "interior_wall_condition",
    "interior_wall_finish_primary",
    "interior_wall_finish_secondary",
    "interior_wall_structure_material",
    "interior_wall_structure_material_primary",
    "interior_wall_structure_material_secondary",
    "interior_wall_surface_material_primary",
    "interior_wall_surface_material_secondary",
    "number_of_stories",
    "primary_framing_material",
    "roof_age_years",
    "roof_condition",
    "roof_covering_material",
    "roof_date",
    "roof_design_type",
    "roof_material_type",
    "roof_structure_material",
    "roof_underlayment_type",
    "secondary_framing_material",
    "siding_installation_date",
    "structural_damage_indicators",
    "subfloor_material",
    "unfinished_base_area",
    "unfinished_basement_area",
    "unfinished_upper_story_area",
    "window_frame_material",
    "window_glazing_type",
    "window_installation_date",
    "window_operation_type",
    "window_screen_material",
]

UTILITY_FIELDS = [
    "cooling_system_type",
    "heating_system_type",
    "heating_fuel_type",
    "public_utility_type",
    "sewer_type",
    "water_source_type",
    "plumbing_system_type",
    "plumbing_system_type_other_description",
    "electrical_panel_capacity",
    "electrical_wiring_type",
    "hvac_condensing_unit_present",
    "electrical_wiring_type_other_description",
    "solar_panel_present",
    "solar_panel_type",
    "solar_panel_type_other_description",
    "smart_home_features",
    "smart_home_features_other_description",
    "hvac_unit_condition",
    "solar_inverter_visible",
    "hvac_unit_issues",
]

LAYOUT_FIELDS = [
    "space_type",
    "space_index",
    "floor_level",
    "building_number",
    "built_year",
    "total_area_sq_ft",
    "livable_area_sq_ft",
    "heated_area_sq_ft",
    "area_under_air_sq_ft",
    "size_square_feet",
    "flooring_material_type",
    "has_windows",
    "window_design_type",
    "window_material_type",
    "window_treatment_type",
    "is_finished",
    "furnished",
    "paint_condition",
    "flooring_wear",
    "clutter_level",
    "visible_damage",
    "countertop_material",
    "cabinet_style",
    "fixture_finish_quality",
    "design_style",
    "natural_light_quality",
    "decor_elements",
    "pool_type",
    "pool_equipment",
    "spa_type",
    "safety_features",
    "view_type",
    "lighting_features",
    "condition_issues",
    "is_exterior",
    "pool_condition",
    "pool_surface_type",
    "pool_water_quality",
    "bathroom_renovation_date",
    "kitchen_renovation_date",
    "flooring_installation_date",
]



def empty_structure(**overrides):
    record = dict.fromkeys(STRUCTURE_FIELDS)
    record.update(overrides)
    return record


def empty_utility(**overrides):
    record = dict.fromkeys(UTILITY_FIELDS)
    record.update(solar_panel_present=False, solar_inverter_visible=False)
    record.update(overrides)
    return record


def empty_layout(space_type, space_index, **overrides):
    record = dict.fromkeys(LAYOUT_FIELDS)
    record.update(space_type=space_type, space_index=space_index, is_finished=True, is_exterior=False)
    record.update(overrides)
    return record


def resolve_floor_level(index, story_count):
    if not story_count or story_count <= 0:
        return None
    if story_count == 1:
        return "1st Floor"
    return "1st Floor" if index == 0 else "2nd Floor"


def add_layout(layouts, space_type, **overrides):
    layouts.append(empty_layout(space_type, len(layouts) + 1, **overrides))
    return layouts[-1]


def living_area_overrides(size):
    size = round(size)
    return {
        "size_square_feet": size,
        "heated_area_sq_ft": size,
        "area_under_air_sq_ft": size,
        "livable_area_sq_ft": size,
    }


def add_room_layouts(layouts, bedrooms, baths, stories=None, **overrides):
    """Append bedroom and bathroom layouts.

    The first bedroom and first full bath are the primary ones; a
    fractional .5 in `baths` adds one half bathroom.
    """
    bedrooms = max(0, int(round(bedrooms or 0)))
    baths = float(baths or 0)
    full_baths = int(baths)
    has_half = baths - full_baths >= 0.5

    for i in range(bedrooms):
        add_layout(
            layouts,
            "Primary Bedroom" if i == 0 else "Bedroom",
            floor_level=resolve_floor_level(i, stories),
            **overrides,
        )
    for i in range(full_baths):
        add_layout(
            layouts,
            "Primary Bathroom" if i == 0 else "Full Bathroom",
            floor_level=resolve_floor_level(i, stories),
            **overrides,
        )
    if has_half:
        add_layout(
            layouts,
            "Half Bathroom / Powder Room",
            floor_level=resolve_floor_level(0, stories),
            **overrides,
        )
    return layouts


def write_staged(name, parcel_id, key, items, owners_dir=OWNERS_DIR):
    """Write owners/<name> as {"property_<id>": {key: items}}"""
    write_owners_file(name, {property_key(parcel_id): {key: items}}, owners_dir)


def read_staged(name, parcel_id, key, owners_dir=OWNERS_DIR):
    """Items staged under owners/<name>, [] when the file or entry is absent"""
    staged = read_json(f"{owners_dir}/{name}")
    if not staged:
        return []
    return (staged.get(property_key(parcel_id)) or {}).get(key) or []


def _public(record, fields):
    return {field: record.get(field) for field in fields}


def _building_layout_file(layouts, building_number):
    for i, layout in enumerate(layouts, start=1):
        if layout.get("space_type") == "Building" and layout.get("building_number") == building_number:
            return f"layout_{i}.json"
    return None


def write_layouts(layouts, source, data_dir=DATA_DIR):
    """Write layout_N.json and link Building layouts to the rooms they hold"""
    remove_matching(r"layout_\d+\.json", data_dir)
    remove_matching(r"relationship_layout_\d+_has_layout_\d+\.json", data_dir)

    for i, layout in enumerate(layouts, start=1):
        document = {**source, **_public(layout, LAYOUT_FIELDS)}
        document["space_index"] = layout.get("space_index") or i
        write_data(f"layout_{i}.json", document, data_dir)

    for i, layout in enumerate(layouts, start=1):
        if layout.get("space_type") != "Building":
            continue
        building_number = layout.get("building_number")
        for j, sub_layout in enumerate(layouts, start=1):
            if sub_layout.get("space_type") == "Building" or sub_layout.get("building_number") != building_number:
                continue
            write_relationship(
                f"relationship_layout_{building_number}_has_layout_{j}.json",
                f"layout_{i}.json",
                f"layout_{j}.json",
                data_dir,
            )
    return len(layouts)


def _write_building_items(items, prefix, fields, layouts, source, data_dir):
    remove_matching(rf"{prefix}_\d+\.json", data_dir)
    remove_matching(rf"relationship_layout_\d+_has_{prefix}_\d+\.json", data_dir)

    for i, item in enumerate(items, start=1):
        index = item.get(f"{prefix}_index") or i
        write_data(f"{prefix}_{index}.json", {**source, **_public(item, fields)}, data_dir)

        building_number = item.get("building_number")
        layout_file = _building_layout_file(layouts, building_number) if building_number else None
        if layout_file:
            write_relationship(
                f"relationship_layout_{building_number}_has_{prefix}_{index}.json",
                layout_file,
                f"{prefix}_{index}.json",
                data_dir,
            )
    return len(items)


def write_structures(structures, layouts, source, data_dir=DATA_DIR):
    """Write structure_N.json, linked to their building layout when one exists"""
    return _write_building_items(structures, "structure", STRUCTURE_FIELDS, layouts, source, data_dir)


def write_utilities(utilities, layouts, source, data_dir=DATA_DIR):
    return _write_building_items(utilities, "utility", UTILITY_FIELDS, layouts, source, data_dir)
