"""Property classification derived from the Duval property use and building type text.

Duval publishes free-text use descriptions rather than a closed code list,
so the fields are inferred from keywords instead of a lookup table.
"""

import re

STRUCTURE_FORM_RULES = [
    (r"townhouse|rowhouse|row house", "TownhouseRowhouse"),
    (r"duplex", "Duplex"),
    (r"triplex", "Triplex"),
    (r"quad|fourplex|4-plex", "Quadplex"),
    (r"loft", "Loft"),
    (r"apartment|condo", "ApartmentUnit"),
    (r"semi-det|semi detached", "SingleFamilySemiDetached"),
    (r"manufactured|mobile", "ManufacturedHomeOnLand"),
    (r"multi.*10|10.*multi", "MultiFamilyMoreThan10"),
    (r"multi.*5|5.*multi", "MultiFamily5Plus"),
    (r"multi", "MultiFamilyLessThan10"),
    (r"single family", "SingleFamilyDetached"),
]

USAGE_RULES = [
    (r"agric|farm|orchard|grove|timber|hay|grazing|poultry|crop", "Agricultural"),
    (r"industrial|manufactur|warehouse", "Industrial"),
    (r"office", "OfficeBuilding"),
    (r"retail|store|commercial|shopping", "RetailStore"),
    (r"church", "Church"),
    (r"public school", "PublicSchool"),
    (r"school", "PrivateSchool"),
    (r"hotel|motel", "Hotel"),
    (r"golf", "GolfCourse"),
    (r"club|lodge", "ClubsLodges"),
    (r"utility", "Utility"),
    (r"residential|single family|townhouse|duplex|triplex|quad|multi|condo|apartment|mobile home", "Residential"),
    (r"vacant|transitional", "TransitionalProperty"),
]


def _first_match(text, rules, default=None):
    for pattern, value in rules:
        if re.search(pattern, text):
            return value
    return default


def structure_form(property_use, building_type):
    source = f"{property_use or ''} {building_type or ''}".lower().strip()
    if not source:
        return None
    return _first_match(source, STRUCTURE_FORM_RULES)


def property_usage_type(property_use):
    if not property_use:
        return "Unknown"
    text = property_use.lower()
    if "hospital" in text:
        return "PublicHospital" if "public" in text else "PrivateHospital"
    return _first_match(text, USAGE_RULES, "Unknown")


def property_type(heated_area, property_use, building_type):
    use = (property_use or "").lower()
    if heated_area and heated_area > 0:
        if re.search(r"condo|apartment|unit", use) or "unit" in (building_type or "").lower():
            return "Unit"
        return "Building"
    source = f"{use} {(building_type or '').lower()}"
    if re.search(r"manufactured|mobile", source):
        return "ManufacturedHome"
    if re.search(r"vacant|land|lot", source):
        return "LandParcel"
    return "Building"
