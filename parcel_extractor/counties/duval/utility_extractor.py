import logging

from parcel_extractor.output import load_seed, read_input_html
from parcel_extractor.parsing import match_keywords
from parcel_extractor.records import empty_utility, write_staged

from parcel_extractor.counties.duval import page

logger = logging.getLogger(__name__)

HEATING_RULES = [
    (("FORCED", "DUCT"), "Central"),
    (("HEAT PUMP",), "HeatPump"),
    (("HEATPUMP",), "HeatPump"),
]

HEATING_FUEL_RULES = [
    (("ELECTRIC",), "Electric"),
    (("GAS",), "NaturalGas"),
]

COOLING_RULES = [
    (("CENTRAL",), "CentralAir"),
    (("WINDOW",), "WindowAirConditioner"),
    (("DUCTLESS",), "Ductless"),
    (("MINI SPLIT",), "Ductless"),
]


def build_utility(soup):
    elements = page.building_elements(soup)
    cooling = match_keywords(page.element_detail(elements, "Air Cond"), COOLING_RULES)
    return empty_utility(
        utility_index=1,
        building_number=None,
        heating_system_type=match_keywords(page.element_detail(elements, "Heating Type"), HEATING_RULES),
        heating_fuel_type=match_keywords(page.element_detail(elements, "Heating Fuel"), HEATING_FUEL_RULES),
        cooling_system_type=cooling,
        hvac_condensing_unit_present="Yes" if cooling == "CentralAir" else None,
    )


def main():
    soup = page.load_soup(read_input_html())
    parcel_id = page.parcel_id(soup) or load_seed().get("parcel_id")

    write_staged("utilities_data.json", parcel_id, "utilities", [build_utility(soup)])
    logger.info(f"Staged utility record for {parcel_id}")


if __name__ == "__main__":
    main()
