import re
import datetime


DATE_PATTERNS = [
    '%m/%d/%Y',  # 03/24/2025
    '%m-%d-%Y',
    '%Y-%m-%d',
    '%Y/%m/%d',
    '%B %d, %Y',  # March 24, 2025
    '%b %d, %Y',  # Mar 24, 2025
    '%d %B %Y',
    '%d %b %Y',
]

UNITS_TYPES = {1: "One", 2: "Two", 3: "Three", 4: "Four"}


def clean_text(value):
    """Collapse whitespace (including non-breaking spaces) and trim"""
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value).replace("\u00a0", " ")).strip()


def text_or_none(value):
    text = clean_text(value)
    return text or None


def clean_money(value):
    """Parse a currency string like '$1,234.50' into a float rounded to cents"""
    if value is None:
        return None
    s = re.sub(r"[$,\s]", "", str(value))
    if s in ("", "-"):
        return None
    try:
        return round(float(s), 2)
    except ValueError:
        return None


def to_iso_date(value):
    """Convert M/D/YYYY (and a few other layouts) to YYYY-MM-DD"""
    text = clean_text(value)
    if not text:
        return None

    match = re.fullmatch(r"(\d{1,2})/(\d{1,2})/(\d{4})", text)
    if match:
        month, day, year = match.groups()
        try:
            return datetime.date(int(year), int(month), int(day)).isoformat()
        except ValueError:
            return None

    for pattern in DATE_PATTERNS:
        try:
            return datetime.datetime.strptime(text, pattern).strftime('%Y-%m-%d')
        except ValueError:
            continue

    # Last resort: a date embedded in surrounding text
    match = re.search(r"(\d{1,2})/(\d{1,2})/(\d{4})", text)
    if match:
        month, day, year = match.groups()
        try:
            return datetime.date(int(year), int(month), int(day)).isoformat()
        except ValueError:
            return None
    return None


def is_iso_date(value):
    return bool(re.fullmatch(r"\d{4}-\d{2}-\d{2}", value or ""))


def parse_number(value):
    """Strip everything but digits, '.', and '-' and return a float"""
    if value is None:
        return None
    numeric = re.sub(r"[^0-9.\-]", "", str(value))
    if not numeric:
        return None
    try:
        return float(numeric)
    except ValueError:
        return None


def parse_int(value):
    number = parse_number(value)
    if number is None:
        return None
    return int(round(number))


def acres_to_sqft(acres):
    if not acres or acres <= 0:
        return None
    return round(acres * 43560)


def units_type(count):
    number = parse_number(count)
    if number is None or number <= 0:
        return None
    return UNITS_TYPES.get(int(round(number)))


def match_keywords(text, rules):
    """Value of the first (keywords, value) rule whose keywords all occur in text"""
    upper = clean_text(text).upper()
    if not upper:
        return None
    for keywords, value in rules:
        if all(k in upper for k in keywords):
            return value
    return None
