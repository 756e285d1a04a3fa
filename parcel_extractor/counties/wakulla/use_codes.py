"""Wakulla property use descriptions mapped to property classification fields"""

import re

from parcel_extractor.errors import UnknownEnumValueError

FIELDS = (
    "property_usecode",
    "ownership_estate_type",
    "build_status",
    "structure_form",
    "property_usage_type",
    "property_type",
)

USE_CODES = [
    ("<10 MULTI-FAM", "FeeSimple", "Improved", "MultiFamilyLessThan10", "Residential", "Building"),
    ("BORROW PIT", "FeeSimple", "VacantLand", None, "OpenStorage", "LandParcel"),
    ("BREWERY", "FeeSimple", "Improved", None, "LightManufacturing", "Building"),
    ("BUILD SUPPLY", "FeeSimple", "Improved", None, "WholesaleOutlet", "Building"),
    ("BUILDING SALES", "FeeSimple", "Improved", None, "Commercial", "Building"),
    ("CANAL/WATER WAY", "FeeSimple", "VacantLand", None, "RiversLakes", "LandParcel"),
    ("CAR/BOAT WASH", "FeeSimple", "Improved", None, "ServiceStation", "Building"),
    ("CHURCHES", "FeeSimple", "Improved", None, "Church", "Building"),
    ("CLUBS/LODGES/HALLS", "FeeSimple", "Improved", None, "ClubsLodges", "Building"),
    ("COLLEGES", "FeeSimple", "Improved", None, "CulturalOrganization", "Building"),
    ("COMM W/XFOB", "FeeSimple", "Improved", None, "Commercial", "Building"),
    ("COMMON AREA", "FeeSimple", "VacantLand", None, "ResidentialCommonElementsAreas", "LandParcel"),
    ("COMMUNITY SHOPPING", "FeeSimple", "Improved", None, "ShoppingCenterCommunity", "Building"),
    ("CONDOMINIA", "Condominium", "Improved", "ApartmentUnit", "Residential", "Unit"),
    ("CONV & GAS", "FeeSimple", "Improved", None, "ServiceStation", "Building"),
    ("CONV STORE", "FeeSimple", "Improved", None, "RetailStore", "Building"),
    ("COUNTY", "FeeSimple", "Improved", None, "GovernmentProperty", "Building"),
    ("COUNTY PARK", "FeeSimple", "VacantLand", None, "ForestParkRecreation", "LandParcel"),
    ("CROPLAND CLASS 1", "FeeSimple", "VacantLand", None, "DrylandCropland", "LandParcel"),
    ("DAY CARE FACILITY", "FeeSimple", "Improved", None, "PrivateSchool", "Building"),
    ("DENTAL OFFICE", "FeeSimple", "Improved", None, "MedicalOffice", "Building"),
    ("DRIVE THRU REST", "FeeSimple", "Improved", None, "Restaurant", "Building"),
    ("DRUG STORE", "FeeSimple", "Improved", None, "RetailStore", "Building"),
    ("DUPLEX", "FeeSimple", "Improved", "Duplex", "Residential", "Building"),
    ("ELECTRIC", "FeeSimple", "Improved", None, "Utility", "Building"),
    ("FEDERAL", "FeeSimple", "Improved", None, "GovernmentProperty", "Building"),
    ("FINANCIAL", "FeeSimple", "Improved", None, "FinancialInstitution", "Building"),
    ("FITNESS CENTER", "FeeSimple", "Improved", None, "Recreational", "Building"),
    ("FOREST, PARKS, REC", "FeeSimple", "VacantLand", None, "ForestParkRecreation", "LandParcel"),
    ("FUEL STORAGE", "FeeSimple", "Improved", None, "OpenStorage", "LandParcel"),
    ("GOLF COURSES", "FeeSimple", "Improved", None, "GolfCourse", "LandParcel"),
    ("GROC STORE", "FeeSimple", "Improved", None, "Supermarket", "Building"),
    ("HEADER RECORD", None, None, None, "ReferenceParcel", "LandParcel"),
    ("HEAVY MANUFACTURE", "FeeSimple", "Improved", None, "HeavyManufacturing", "Building"),
    ("HOMES FOR THE AGED", "FeeSimple", "Improved", None, "HomesForAged", "Building"),
    ("HOTELS AND MOTELS", "FeeSimple", "Improved", None, "Hotel", "Building"),
    ("IMPRVD AG NON RES", "FeeSimple", "Improved", None, "Agricultural", "LandParcel"),
    ("IMPRVD AG RES", "FeeSimple", "Improved", None, "Agricultural", "LandParcel"),
    ("JUNK YARD", "FeeSimple", "Improved", None, "OpenStorage", "LandParcel"),
    ("LIGHT MANUFACTURE", "FeeSimple", "Improved", None, "LightManufacturing", "Building"),
    ("MARINA OPS", "FeeSimple", "Improved", None, "TransportationTerminal", "Building"),
    ("MARSH", "FeeSimple", "VacantLand", None, "Conservation", "LandParcel"),
    ("MEDICAL BLDG", "FeeSimple", "Improved", None, "MedicalOffice", "Building"),
    ("MH Storage", "FeeSimple", "Improved", None, "OpenStorage", "LandParcel"),
    ("MINERAL PROCESSING", "FeeSimple", "Improved", None, "MineralProcessing", "Building"),
    ("MINI WAREHOUSE", "FeeSimple", "Improved", None, "Warehouse", "Building"),
    ("MINING", "FeeSimple", "VacantLand", None, "MineralProcessing", "LandParcel"),
    ("MISCELLANEOUS", "FeeSimple", "Improved", None, "Residential", "Building"),
    ("MIX/STOR/OFFIC/RESID", "FeeSimple", "Improved", None, "Commercial", "Building"),
    ("MOBILE HOME", "FeeSimple", "Improved", "ManufacturedHomeOnLand", "Residential", "ManufacturedHome"),
    ("MORTUARY/CEMETARY", "FeeSimple", "Improved", None, "MortuaryCemetery", "LandParcel"),
    ("MULTI-FAMILY 10+", "FeeSimple", "Improved", "MultiFamilyMoreThan10", "Residential", "Building"),
    ("MUNI WATER", "FeeSimple", "Improved", None, "Utility", "Building"),
    ("MUNICIPAL", "FeeSimple", "Improved", None, "GovernmentProperty", "Building"),
    ("NBHD CONV STORE", "FeeSimple", "Improved", None, "RetailStore", "Building"),
    ("NIGHTCLUB/BARS", "FeeSimple", "Improved", None, "Entertainment", "Building"),
    ("NO AG ACREAGE", "FeeSimple", "VacantLand", None, "TransitionalProperty", "LandParcel"),
    ("NON-PROFIT SERVICE", "FeeSimple", "Improved", None, "NonProfitCharity", "Building"),
    ("OFFICE BUILDING", "FeeSimple", "Improved", None, "OfficeBuilding", "Building"),
    ("OPEN STORAGE", "FeeSimple", "Improved", None, "OpenStorage", "LandParcel"),
    ("ORCHARDS, GROVES", "FeeSimple", "VacantLand", None, "OrchardGroves", "LandParcel"),
    ("ORNAMENTALS,MISC", "FeeSimple", "VacantLand", None, "Ornamentals", "LandParcel"),
    ("PACKING PLANTS", "FeeSimple", "Improved", None, "PackingPlant", "Building"),
    ("PARKING/MH PARK", "FeeSimple", "Improved", None, "MobileHomePark", "LandParcel"),
    ("PASTURELAND 1", "FeeSimple", "VacantLand", None, "GrazingLand", "LandParcel"),
    ("PASTURELAND 2", "FeeSimple", "VacantLand", None, "GrazingLand", "LandParcel"),
    ("PLANT NURSERY", "FeeSimple", "Improved", None, "NurseryGreenhouse", "LandParcel"),
    ("POND", "FeeSimple", "VacantLand", None, "RiversLakes", "LandParcel"),
    ("POULTRY,BEES,FISH", "FeeSimple", "VacantLand", None, "Poultry", "LandParcel"),
    ("PRIVATE ROADWAY", "FeeSimple", "VacantLand", None, "TransportationTerminal", "LandParcel"),
    ("PRIVATE SCHOOLS", "FeeSimple", "Improved", None, "PrivateSchool", "Building"),
    ("PROFESSIONAL BLDG", "FeeSimple", "Improved", None, "OfficeBuilding", "Building"),
    ("PROPANE", "FeeSimple", "Improved", None, "ServiceStation", "Building"),
    ("PUBLIC SCHOOLS", "FeeSimple", "Improved", None, "PublicSchool", "Building"),
    ("REC AND PARK LAND", "FeeSimple", "VacantLand", None, "Recreational", "LandParcel"),
    ("REPAIR SERVICE", "FeeSimple", "Improved", None, "AutoSalesRepair", "Building"),
    ("RES COMMON ELMTS", "FeeSimple", "VacantLand", None, "ResidentialCommonElementsAreas", "LandParcel"),
    ("RESTAURANTS/CAFE", "FeeSimple", "Improved", None, "Restaurant", "Building"),
    ("RIGHTS-OF-WAY", "RightOfWay", "VacantLand", None, "TransportationTerminal", "LandParcel"),
    ("RIVERS LAKES SUBMERGED LAND", "FeeSimple", "VacantLand", None, "RiversLakes", "LandParcel"),
    ("RV PARK/CAMPGROUND", "FeeSimple", "Improved", None, "Recreational", "LandParcel"),
    ("RV/BOAT STORAGE", "FeeSimple", "Improved", None, "OpenStorage", "LandParcel"),
    ("SERVICE STATION", "FeeSimple", "Improved", None, "ServiceStation", "Building"),
    ("SEWER", "FeeSimple", "Improved", None, "Utility", "Building"),
    ("SFR SALVAGE", "FeeSimple", "VacantLand", None, "OpenStorage", "LandParcel"),
    ("SFR/DCA/MOD", "FeeSimple", "Improved", "SingleFamilyDetached", "Residential", "Building"),
    ("SINGLE FAMILY", "FeeSimple", "Improved", "SingleFamilyDetached", "Residential", "Building"),
    ("SRV SHP/TERMINAL", "FeeSimple", "Improved", None, "TransportationTerminal", "Building"),
    ("STATE", "FeeSimple", "Improved", None, "GovernmentProperty", "Building"),
    ("STATE TIITF", "FeeSimple", "VacantLand", None, "GovernmentProperty", "LandParcel"),
    ("STORES, 1 STORY", "FeeSimple", "Improved", None, "RetailStore", "Building"),
    ("SUPERMARKET", "FeeSimple", "Improved", None, "Supermarket", "Building"),
    ("SWAMP", "FeeSimple", "VacantLand", None, "Conservation", "LandParcel"),
    ("TELE/CABLE", "FeeSimple", "Improved", None, "TelecommunicationsFacility", "Building"),
    ("TIMBERLAND 70-79", "FeeSimple", "VacantLand", None, "TimberLand", "LandParcel"),
    ("TIMBERLAND 80-89", "FeeSimple", "VacantLand", None, "TimberLand", "LandParcel"),
    ("TIMBERLAND 90+", "FeeSimple", "VacantLand", None, "TimberLand", "LandParcel"),
    ("TIMBERLAND MIXED", "FeeSimple", "VacantLand", None, "TimberLand", "LandParcel"),
    ("TOWNHOUSE", "FeeSimple", "Improved", "TownhouseRowhouse", "Residential", "Building"),
    ("TRANSIT TERMINALS", "FeeSimple", "Improved", None, "TransportationTerminal", "Building"),
    ("TWR TRANSMISSION", "FeeSimple", "Improved", None, "TelecommunicationsFacility", "LandParcel"),
    ("UTILITIES", "FeeSimple", "Improved", None, "Utility", "Building"),
    ("VAC INSTITUTIONAL", "FeeSimple", "VacantLand", None, "NonProfitCharity", "LandParcel"),
    ("VAC RES / WXFOBS", "FeeSimple", "VacantLand", None, "Residential", "LandParcel"),
    ("VACANT COMMERCIAL", "FeeSimple", "VacantLand", None, "Commercial", "LandParcel"),
    ("VACANT INDUSTRIAL", "FeeSimple", "VacantLand", None, "Industrial", "LandParcel"),
    ("VACANT RESIDENTIAL", "FeeSimple", "VacantLand", None, "Residential", "LandParcel"),
    ("VEH REPAIR", "FeeSimple", "Improved", None, "AutoSalesRepair", "Building"),
    ("VEH SALE/REPAIR", "FeeSimple", "Improved", None, "AutoSalesRepair", "Building"),
    ("VET OFFICE", "FeeSimple", "Improved", None, "MedicalOffice", "Building"),
    ("WALMART", "FeeSimple", "Improved", None, "RetailStore", "Building"),
    ("WAREHOUSE-DIST", "FeeSimple", "Improved", None, "Warehouse", "Building"),
    ("WAREHOUSE-STORAGE", "FeeSimple", "Improved", None, "Warehouse", "Building"),
    ("WASTELAND/DUMPS", "FeeSimple", "VacantLand", None, "Conservation", "LandParcel"),
    ("WATER/ELEC", "FeeSimple", "Improved", None, "Utility", "Building"),
    ("WATERWORKS", "FeeSimple", "Improved", None, "Utility", "Building"),
]


def normalize_use_code(value):
    """Upper-cased, single-spaced, without a trailing code like '(8200)'"""
    text = re.sub(r"\s+", " ", str(value or "")).strip().upper()
    return re.sub(r"\s*\(\s*\d+\s*\)$", "", text)


def _candidates(code):
    """Matching rows per rule, loosest rule last"""
    keyed = [(normalize_use_code(row[0]), row) for row in USE_CODES]
    yield [row for key, row in keyed if key == code]
    # Longest entry first among those the page value starts with
    yield sorted((row for key, row in keyed if code.startswith(key)), key=lambda r: -len(r[0]))
    yield [row for key, row in keyed if key.startswith(code)]
    stripped = re.sub(r"\s*\d+$", "", code)
    if stripped and stripped != code:
        yield [row for key, row in keyed if key == stripped]


def lookup_use_code(use_code):
    """Classification fields for a Property Use value.

    Each rule is tried against the whole table before the next one, so an
    exact match always wins over a looser prefix match.  When the page value
    extends several entries, the longest of them wins.
    """
    code = normalize_use_code(use_code)
    if code:
        for rows in _candidates(code):
            if rows:
                return dict(zip(FIELDS[1:], rows[0][1:]))
    raise UnknownEnumValueError(use_code, "property.property_usage_type")
