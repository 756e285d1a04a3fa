"""Readers for the Duval County Property Appraiser parcel page"""

import re

from bs4 import BeautifulSoup

from parcel_extractor.parsing import clean_text, text_or_none, clean_money, to_iso_date, parse_number

PREFIX = "ctl00_cphBody_"
BUILDING_PREFIX = PREFIX + "repeaterBuilding_ctl00_"

CLERK_URL = "http://oncore.duvalclerk.com"
MAPS_URL = "https://maps.coj.net"

# Certified roll and the roll in progress, by id suffix
VALUE_COLUMNS = {"Certified": 2024, "InProgress": 2025}

VALUE_IDS = {
    "building": "lblBuildingValue",
    "land": "lblLandValueMarket",
    "market": "lblJustMarketValue",
    "assessed": "lblAssessedValueA10",
    "taxable": "lblTaxableValue",
}


def load_soup(html):
    return BeautifulSoup(html, "html.parser")


def span_text(soup, element_id):
    el = soup.find(id=element_id)
    return text_or_none(el.get_text()) if el else None


def grid_rows(soup, element_id, min_cells=1):
    """Cell texts of every row of a grid after its header row"""
    table = soup.find(id=element_id)
    if not table:
        return []
    rows = []
    for tr in table.find_all("tr")[1:]:
        tds = tr.find_all("td")
        if len(tds) >= min_cells:
            rows.append([clean_text(td.get_text()) for td in tds])
    return rows


def parcel_id(soup):
    direct = span_text(soup, PREFIX + "lblRealEstateNumber")
    if direct:
        return direct
    for tr in soup.find_all("tr"):
        th = tr.find("th")
        td = tr.find("td")
        if th and td and re.match(r"^re\s*#", clean_text(th.get_text()), re.IGNORECASE):
            value = clean_text(td.get_text())
            if value:
                return value
    return None


def property_use(soup):
    return span_text(soup, PREFIX + "lblPropertyUse")


def subdivision(soup):
    return span_text(soup, PREFIX + "lblSubdivision")


def total_area(soup):
    return span_text(soup, PREFIX + "lblTotalArea1")


def legal_rows(soup):
    return [row[1] for row in grid_rows(soup, PREFIX + "gridLegal", 2) if row[1]]


def zoning(soup):
    value = None
    for row in grid_rows(soup, PREFIX + "gridLand", 10):
        value = row[3] or value
    return value


def year_built(soup):
    return span_text(soup, BUILDING_PREFIX + "lblYearBuilt")


def building_type(soup):
    return span_text(soup, BUILDING_PREFIX + "lblBuildingType")


def building_areas(soup):
    """Rows of the building area grid as {type, gross, heated, effective}"""
    areas = []
    for row in grid_rows(soup, BUILDING_PREFIX + "gridBuildingArea", 4):
        areas.append({
            "type": row[0],
            "gross": parse_number(row[1]),
            "heated": parse_number(row[2]),
            "effective": parse_number(row[3]),
        })
    return areas


def area_for(areas, pattern, column):
    for area in areas:
        if re.search(pattern, area["type"] or "", re.IGNORECASE):
            return area[column]
    return None


def building_attributes(soup):
    """{attribute name: code} from the building attributes grid"""
    return {row[0]: row[1] for row in grid_rows(soup, BUILDING_PREFIX + "gridBuildingAttributes", 2) if row[0]}


def attribute_number(attributes, pattern):
    for name, code in attributes.items():
        if re.search(pattern, name, re.IGNORECASE):
            return parse_number(code)
    return None


def building_elements(soup):
    """(element, detail) pairs from the building elements grid"""
    return [(row[0], row[2]) for row in grid_rows(soup, BUILDING_PREFIX + "gridBuildingElements", 3) if row[0]]


def element_detail(elements, name):
    for element, detail in elements:
        if element.lower() == name.lower():
            return detail
    return None


def _absolute(url, base):
    return url if url.startswith("http") else f"{base}{url}"


def sales(soup):
    """Sales history rows with a positive price; the rest are not market sales"""
    table = soup.find(id=PREFIX + "gridSalesHistory")
    if not table:
        return []
    result = []
    for tr in table.find_all("tr")[1:]:
        tds = tr.find_all("td")
        if len(tds) < 4:
            continue
        price = clean_money(tds[2].get_text())
        if price is None or price <= 0:
            continue
        anchor = tds[0].find("a", href=True)
        result.append({
            "book_page": text_or_none(tds[0].get_text()),
            "link": _absolute(anchor["href"].strip(), CLERK_URL) if anchor else None,
            "date": to_iso_date(tds[1].get_text()),
            "price": price,
            "instrument": text_or_none(tds[3].get_text()),
        })
    return result


def sale_dates(soup):
    """Every parsable sale date in the history grid, sorted and unique"""
    dates = {to_iso_date(row[1]) for row in grid_rows(soup, PREFIX + "gridSalesHistory", 2)}
    return sorted(d for d in dates if d)


def valuations(soup):
    """{year: {building, land, market, assessed, taxable}} for each value column"""
    by_year = {}
    for suffix, year in VALUE_COLUMNS.items():
        by_year[year] = {
            key: clean_money(span_text(soup, f"{PREFIX}{element_id}{suffix}"))
            for key, element_id in VALUE_IDS.items()
        }
    return by_year


def site_address_line2(soup):
    return span_text(soup, PREFIX + "lblPrimarySiteAddressLine2")


def tax_map_url(soup):
    img = soup.find(id=PREFIX + "imgGISImageFound")
    src = img.get("src") if img else None
    return _absolute(src.strip(), MAPS_URL) if src else None


def owner_candidates(soup):
    """Raw strings that may hold owner names, in page order"""
    candidates = []

    def add(text):
        text = clean_text(text).strip(":-– ")
        if text and len(text) <= 200 and text not in candidates:
            candidates.append(text)

    header = soup.select_one("#ownerName h2 span")
    if header:
        add(header.get_text())
    for el in soup.find_all(True):
        marker = " ".join([el.get("id") or ""] + list(el.get("class") or []))
        if "owner" in marker.lower():
            add(el.get_text())
    for el in soup.select("#ownerName .data li span"):
        add(el.get_text())
    return candidates


def fallback_owner(soup):
    return span_text(soup, PREFIX + "repeaterOwnerInformation_ctl00_lblOwnerName")
