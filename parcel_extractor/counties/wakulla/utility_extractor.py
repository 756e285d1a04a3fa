import logging

from parcel_extractor.output import load_seed, read_input_html
from parcel_extractor.parsing import match_keywords
from parcel_extractor.records import empty_utility, write_staged

from parcel_extractor.counties.wakulla import qpublic

logger = logging.getLogger(__name__)

COOLING_RULES = [
    (("CENTRAL",), "CentralAir"),
    (("DUCTED",), "CentralAir"),
    (("WINDOW",), "WindowAirConditioner"),
    (("DUCTLESS",), "Ductless"),
    (("MINI SPLIT",), "Ductless"),
    (("ELECTRIC",), "Electric"),
    (("CEILING FAN",), "CeilingFan"),
    (("WHOLE HOUSE FAN",), "WholeHouseFan"),
    (("GEOTHERMAL",), "GeothermalCooling"),
    (("HYBRID",), "Hybrid"),
    (("ZONED",), "Zoned"),
]

HEATING_RULES = [
    (("ELECTRIC FURNACE",), "ElectricFurnace"),
    (("GAS FURNACE",), "GasFurnace"),
    (("HEAT PUMP",), "HeatPump"),
    (("AIR DUCTED",), "Central"),
    (("CENTRAL",), "Central"),
    (("FORCED", "DUCT"), "Central"),
    (("DUCTLESS",), "Ductless"),
    (("RADIANT",), "Radiant"),
    (("SOLAR",), "Solar"),
    (("BASEBOARD",), "Baseboard"),
    (("ELECTRIC",), "Electric"),
    (("GAS",), "Gas"),
]

HEATING_FUEL_RULES = [
    (("GAS",), "NaturalGas"),
    (("ELECTRIC",), "Electric"),
    (("HEAT PUMP",), "Electric"),
]

SEWER_RULES = [
    (("SEPTIC",), "Septic"),
    (("PUBLIC",), "Public"),
    (("MUNICIPAL",), "Public"),
    (("SANITARY",), "Sanitary"),
    (("COMBINED",), "Combined"),
]

WATER_RULES = [
    (("WELL",), "Well"),
    (("AQUIFER",), "Aquifer"),
    (("PUBLIC",), "Public"),
    (("MUNICIPAL",), "Public"),
]

PLUMBING_RULES = [
    (("COPPER",), "Copper"),
    (("PEX",), "PEX"),
    (("PVC",), "PVC"),
    (("GALVANIZED",), "GalvanizedSteel"),
    (("CAST IRON",), "CastIron"),
]

WIRING_RULES = [
    (("COPPER",), "Copper"),
    (("ALUMINUM",), "Aluminum"),
    (("KNOB", "TUBE"), "KnobAndTube"),
]


def shared_services(features):
    """Sewer and water source from the first extra feature that names one"""
    services = {"sewer_type": None, "water_source_type": None}
    for feature in features:
        description = feature.get("description")
        if not services["sewer_type"]:
            services["sewer_type"] = match_keywords(description, SEWER_RULES)
        if not services["water_source_type"]:
            services["water_source_type"] = match_keywords(description, WATER_RULES)
    return services


def utility_from_building(building, index, building_number, services):
    heat = building.get("Heat")
    cooling = match_keywords(building.get("Air Conditioning"), COOLING_RULES)
    return empty_utility(
        utility_index=index,
        building_number=building_number,
        cooling_system_type=cooling,
        heating_system_type=match_keywords(heat, HEATING_RULES),
        heating_fuel_type=match_keywords(heat, HEATING_FUEL_RULES),
        plumbing_system_type=match_keywords(building.get("Plumbing"), PLUMBING_RULES),
        electrical_wiring_type=match_keywords(building.get("Electrical"), WIRING_RULES),
        hvac_condensing_unit_present="Yes" if cooling == "CentralAir" else None,
        **services,
    )


def build_utilities(buildings, features):
    services = shared_services(features)
    utilities = [utility_from_building(b, i, i, services) for i, b in enumerate(buildings, start=1)]
    if not utilities:
        utilities.append(utility_from_building({}, 1, None, services))
    return utilities


def main():
    soup = qpublic.load_soup(read_input_html())
    parcel_id = qpublic.parcel_id(soup) or load_seed().get("parcel_id")

    utilities = build_utilities(qpublic.buildings(soup), qpublic.extra_features(soup))
    write_staged("utilities_data.json", parcel_id, "utilities", utilities)
    logger.info(f"Staged {len(utilities)} utility records for {parcel_id}")


if __name__ == "__main__":
    main()
