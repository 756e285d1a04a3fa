import re
import logging

from parcel_extractor.output import load_seed, read_input_html, write_owners_file
from parcel_extractor.owners import build_owners_by_date, build_owner_data, reorder_composite
from parcel_extractor.parsing import clean_text

from parcel_extractor.counties.duval import page

logger = logging.getLogger(__name__)

# Section labels that share owner-ish ids and classes on the page
PAGE_LABELS = [
    "mailing address",
    "primary site address",
    "official record book",
    "tile #",
    "value summary",
    "legal desc",
    "land & legal",
    "buildings",
    "traversing data",
    "note",
    "exemptions",
    "sales history",
]

OWNER_HEADINGS = {"owner", "owners", "owner(s)", "owner name", "owner's name"}

CARE_OF = re.compile(r"\bc/o\b|^care of\b", re.IGNORECASE)
ALIAS = re.compile(r"\b(aka|fka)\b", re.IGNORECASE)
ET_AL = re.compile(r"\bet\s*al\b\.?", re.IGNORECASE)
ADDRESS_WORDS = re.compile(r"\b(st|street|ave|avenue|blvd|road|rd|ct|court|ln|lane|dr|drive|fl|zip)\b", re.IGNORECASE)


def is_page_label(text):
    lower = text.lower()
    if lower.rstrip(":") in OWNER_HEADINGS:
        return True
    return any(label in lower for label in PAGE_LABELS) or bool(re.search(r"\$|\d{2,}", text))


def clean_owner_string(raw, invalid):
    """Owner text ready for name parsing, or None when it is not an owner"""
    text = clean_text(raw)
    if not text:
        return None
    if CARE_OF.search(text):
        invalid.append({"raw": text, "reason": "care_of_entry"})
        return None
    if re.search(r"\d", text) and ADDRESS_WORDS.search(text):
        invalid.append({"raw": text, "reason": "address_like_string"})
        return None
    text = clean_text(ALIAS.sub(" ", text))
    text = clean_text(ET_AL.sub(" ", text))
    return reorder_composite(text) or None


def current_owner_strings(soup, invalid):
    owners = []
    for raw in page.owner_candidates(soup):
        if is_page_label(raw):
            continue
        cleaned = clean_owner_string(raw, invalid)
        if cleaned and cleaned not in owners:
            owners.append(cleaned)

    if not owners:
        fallback = clean_owner_string(page.fallback_owner(soup), invalid)
        if fallback:
            owners.append(fallback)
    return owners


def main():
    soup = page.load_soup(read_input_html())
    parcel_id = page.parcel_id(soup) or load_seed().get("parcel_id")

    invalid = []
    current = current_owner_strings(soup, invalid)

    # The page only names today's owners; they took title at the latest sale
    dates = page.sale_dates(soup)
    grantees_by_date = {dates[-1]: list(current)} if dates and current else {}

    owners_by_date = build_owners_by_date(grantees_by_date, [], current, invalid)
    write_owners_file("owner_data.json", build_owner_data(parcel_id, owners_by_date, invalid))


if __name__ == "__main__":
    main()
