import os
import re
import logging
from typing import Dict, Any, List

from .output import write_relationship, ref

logger = logging.getLogger(__name__)

# Entities linked directly from property.json, in the order they are written
PROPERTY_ENTITIES = [
    "address",
    "lot",
    "tax",
    "sales",
    "layout",
    "flood_storm_information",
    "structure",
    "utility",
    "file",
]

# Relationship files the county scripts write themselves, keyed by data group slot
SCRIPT_RELATIONSHIPS = [
    (re.compile(r"relationship_sales_person_\d+\.json"), "sales_history_has_person"),
    (re.compile(r"relationship_sales_company_\d+\.json"), "sales_history_has_company"),
    (re.compile(r"relationship_sales_deed_\d+\.json"), "sales_history_has_deed"),
    (re.compile(r"relationship_deed_file_\d+\.json"), "deed_has_file"),
    (re.compile(r"relationship_layout_\d+_has_layout_\d+\.json"), "layout_has_layout"),
    (re.compile(r"relationship_layout_\d+_has_structure_\d+\.json"), "layout_has_structure"),
    (re.compile(r"relationship_layout_\d+_has_utility_\d+\.json"), "layout_has_utility"),
    (re.compile(r"relationship_address_has_geometry\.json"), "address_has_geometry"),
    (re.compile(r"relationship_person_has_mailing_address_\d+\.json"), "person_has_mailing_address"),
    (re.compile(r"relationship_company_has_mailing_address_\d+\.json"), "company_has_mailing_address"),
]

# Slots that hold a single reference rather than a list when only one file exists
SINGLE_SLOTS = {
    "property_has_address",
    "property_has_lot",
    "property_has_flood_storm_information",
    "address_has_geometry",
}

DATA_GROUP_KEYS = [
    "person_has_property",
    "company_has_property",
    "property_has_address",
    "property_has_lot",
    "property_has_tax",
    "property_has_sales_history",
    "property_has_layout",
    "property_has_flood_storm_information",
    "property_has_file",
    "property_has_structure",
    "property_has_utility",
    "sales_history_has_person",
    "sales_history_has_company",
    "sales_history_has_deed",
    "deed_has_file",
    "layout_has_layout",
    "layout_has_structure",
    "layout_has_utility",
    "address_has_geometry",
    "person_has_mailing_address",
    "company_has_mailing_address",
]

_PROPERTY_SLOTS = {
    "address": "property_has_address",
    "lot": "property_has_lot",
    "tax": "property_has_tax",
    "sales": "property_has_sales_history",
    "layout": "property_has_layout",
    "flood_storm_information": "property_has_flood_storm_information",
    "structure": "property_has_structure",
    "utility": "property_has_utility",
    "file": "property_has_file",
}


def _entity_files(json_files, entity):
    """Data files of one entity type: 'tax.json', 'tax_2024.json', never 'tax_foo_bar'"""
    pattern = re.compile(rf"{re.escape(entity)}(_\w+)?\.json")
    return sorted(
        (f for f in json_files if pattern.fullmatch(f) and not f.startswith("relationship_")),
        key=_natural_key,
    )


def _natural_key(name):
    return [int(part) if part.isdigit() else part for part in re.split(r"(\d+)", name)]


def build_relationship_files(folder_path: str) -> tuple[List[str], List[str]]:
    """
    Build property relationship files for the data documents in folder_path
    Returns: (relationship_files, errors)
    """
    relationship_files = []
    errors = []

    json_files = sorted(f for f in os.listdir(folder_path) if f.endswith(".json"))

    for name in json_files:
        if any(pattern.fullmatch(name) for pattern, _ in SCRIPT_RELATIONSHIPS):
            relationship_files.append(name)

    if "property.json" not in json_files:
        error_msg = "No property.json file found"
        logger.error(error_msg)
        errors.append(error_msg)
        return relationship_files, errors

    property_file = "property.json"

    for owner_kind in ("person", "company"):
        for owner_file in _entity_files(json_files, owner_kind):
            rel_filename = f"relationship_{owner_file[:-len('.json')]}_property.json"
            write_relationship(rel_filename, owner_file, property_file, folder_path)
            relationship_files.append(rel_filename)

    for entity in PROPERTY_ENTITIES:
        for entity_file in _entity_files(json_files, entity):
            suffix = entity_file[len(entity):-len(".json")]
            rel_filename = f"relationship_property_{entity}{suffix}.json"
            write_relationship(rel_filename, property_file, entity_file, folder_path)
            relationship_files.append(rel_filename)

    logger.info(f"Built {len(relationship_files)} relationship files in {folder_path}")
    return relationship_files, errors


def _slot_for(rel_file):
    for pattern, slot in SCRIPT_RELATIONSHIPS:
        if pattern.fullmatch(rel_file):
            return slot

    match = re.fullmatch(r"relationship_(person|company)_\w+_property\.json", rel_file)
    if match:
        return f"{match.group(1)}_has_property"

    for entity in PROPERTY_ENTITIES:
        if re.fullmatch(rf"relationship_property_{entity}(_\w+)?\.json", rel_file):
            return _PROPERTY_SLOTS[entity]
    return None


def create_county_data_group(relationship_files: List[str]) -> Dict[str, Any]:
    """
    Create the county data group structure based on relationship files
    """
    grouped = {key: [] for key in DATA_GROUP_KEYS}
    for rel_file in relationship_files:
        slot = _slot_for(rel_file)
        if slot is None:
            logger.warning(f"Unrecognized relationship file {rel_file}, not referenced")
            continue
        grouped[slot].append(ref(rel_file))

    relationships = {}
    for key in DATA_GROUP_KEYS:
        refs = grouped[key]
        if not refs:
            relationships[key] = None
        elif key in SINGLE_SLOTS and len(refs) == 1:
            relationships[key] = refs[0]
        else:
            relationships[key] = refs

    return {"label": "County", "relationships": relationships}
