"""Readers for the Wakulla qPublic parcel page"""

import re

from bs4 import BeautifulSoup

from parcel_extractor.parsing import clean_text, text_or_none, to_iso_date, clean_money, parse_number

PARCEL_SELECTOR = "#ctlBodyPane_ctl01_ctl01_dynamicSummaryData_rptrDynamicColumns_ctl00_pnlSingleValue"
SUMMARY_ROWS_SELECTOR = "#ctlBodyPane_ctl01_ctl01_dynamicSummaryData_divSummary table tbody tr"
SALES_ROWS_SELECTOR = "#ctlBodyPane_ctl08_ctl01_grdSales tbody tr"
VALUATION_TABLE_SELECTOR = "#ctlBodyPane_ctl11_ctl01_grdValuation_grdYearData"
EXTRA_FEATURES_ROWS_SELECTOR = "#ctlBodyPane_ctl06_ctl01_grdSales_grdFlat tbody tr"
CURRENT_OWNER_SELECTOR = "[id*='rptOwner'][id*='lnkUpmSearchLinkSuppressed_lblSearch']"
MAILING_ADDRESS_SELECTOR = "#ctlBodyPane_ctl02_ctl01_rptOwner_ctl00_lblOwnerAddress"

VALUE_LABELS = {
    "building value": "building",
    "land value": "land",
    "just (market) value": "market",
    "assessed value": "assessed",
    "taxable value": "taxable",
}


def load_soup(html):
    return BeautifulSoup(html, "html.parser")


def _row_label_value(tr):
    label_el = tr.select_one("th strong") or tr.select_one("td strong")
    value_el = tr.select_one("td span")
    return clean_text(label_el.get_text() if label_el else ""), clean_text(value_el.get_text() if value_el else "")


def parcel_id(soup):
    el = soup.select_one(PARCEL_SELECTOR)
    return text_or_none(el.get_text()) if el else None


def summary_value(soup, label_contains):
    """Value of the first summary row whose label contains label_contains"""
    needle = label_contains.lower()
    for tr in soup.select(SUMMARY_ROWS_SELECTOR):
        label, value = _row_label_value(tr)
        if needle in label.lower():
            return value or None
    return None


def legal_description(soup):
    return summary_value(soup, "tax description")


def property_use(soup):
    return summary_value(soup, "property use")


def acreage(soup):
    return parse_number(summary_value(soup, "acreage"))


def sec_twp_rng(soup):
    return summary_value(soup, "sec/twp/rng")


def sales(soup):
    """Rows of the sales grid, newest first as the page lists them"""
    rows = []
    for tr in soup.select(SALES_ROWS_SELECTOR):
        tds = tr.find_all("td")
        if len(tds) < 3:
            continue

        def cell(i):
            return clean_text(tds[i].get_text()) if i < len(tds) else ""

        link = None
        book_page = ""
        if len(tds) > 3:
            anchor = tds[3].find("a", href=True)
            link = anchor["href"].strip() if anchor else None
            book_page = clean_text(tds[3].get_text().replace("opens in a new tab", ""))

        raw_date = cell(0)
        rows.append({
            "date": to_iso_date(raw_date),
            "raw_date": raw_date,
            "price": clean_money(cell(1)),
            "instrument": cell(2) or None,
            "book_page": book_page or None,
            "link": link,
            "qualification": cell(4) or None,
            "reason": cell(5) or None,
            "vacant_improved": cell(6) or None,
            "grantor": cell(7) or None,
            "grantee": cell(8) or None,
        })
    return rows


def valuations(soup):
    """{year: {building, land, market, assessed, taxable}} from the valuation grid"""
    table = soup.select_one(VALUATION_TABLE_SELECTOR)
    if not table:
        return {}

    years = []
    for th in table.select("thead th.value-column"):
        match = re.search(r"(\d{4})", th.get_text())
        if match:
            years.append(match.group(1))

    by_year = {year: {} for year in years}
    for tr in table.select("tbody tr"):
        th = tr.find("th")
        key = VALUE_LABELS.get(clean_text(th.get_text()).lower()) if th else None
        if not key:
            continue
        for year, td in zip(years, tr.select("td.value-column")):
            by_year[year][key] = clean_money(td.get_text())
    return by_year


def extra_features(soup):
    features = []
    for tr in soup.select(EXTRA_FEATURES_ROWS_SELECTOR):
        cells = tr.find_all(["th", "td"])
        if len(cells) < 2:
            continue
        features.append({
            "code": clean_text(cells[0].get_text()) or None,
            "description": clean_text(cells[1].get_text()) or None,
        })
    return features


def current_owners(soup):
    names = []
    for el in soup.select(CURRENT_OWNER_SELECTOR):
        name = clean_text(el.get_text())
        if name and name not in names:
            names.append(name)
    return names


def mailing_address(soup):
    """Owner mailing address with <br> line breaks joined by ', '"""
    el = soup.select_one(MAILING_ADDRESS_SELECTOR)
    if not el:
        return None
    lines = [clean_text(line) for line in el.get_text("\n").split("\n")]
    return ", ".join(line for line in lines if line) or None


def _buildings_section(soup):
    for section in soup.find_all("section"):
        title = section.select_one(".module-header .title") or section.select_one(".title")
        if title and clean_text(title.get_text()) == "Buildings":
            return section
    return None


def buildings(soup):
    """One {label: value} dict per building block"""
    section = _buildings_section(soup)
    if not section:
        return []

    result = []
    for block in section.select(".block-row"):
        building = {}
        for column in block.select(".two-column-blocks"):
            for tr in column.select("table tbody tr"):
                label, value = _row_label_value(tr)
                if label:
                    building[label] = value
        if building:
            result.append(building)
    return result


def building_value(building, *labels):
    """First non-empty value among labels, compared case-insensitively"""
    lowered = {k.lower(): v for k, v in building.items()}
    for label in labels:
        value = lowered.get(label.lower())
        if value:
            return value
    return None
