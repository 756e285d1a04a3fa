"""Owner, grantor and grantee name parsing.

Raw names scraped from appraiser pages come in many shapes: joint owners
joined with '&', trustee and estate noise, honorifics, generational
suffixes, and company names that look like people.  The helpers here turn
each raw string into either a person or a company record, and collect the
strings that cannot be classified as invalid owners instead of failing.
"""

import re
import logging

from .parsing import clean_text, is_iso_date

logger = logging.getLogger(__name__)

PERSON_PREFIX_VALUES = [
    "Mr.", "Mrs.", "Ms.", "Miss", "Mx.", "Dr.", "Prof.", "Rev.", "Fr.", "Sr.",
    "Br.", "Capt.", "Col.", "Maj.", "Lt.", "Sgt.", "Hon.", "Judge", "Rabbi",
    "Imam", "Sheikh", "Sir", "Dame",
]

PERSON_SUFFIX_VALUES = [
    "Jr.", "Sr.", "II", "III", "IV", "PhD", "MD", "Esq.", "JD", "LLM", "MBA",
    "RN", "DDS", "DVM", "CFA", "CPA", "PE", "PMP", "Emeritus", "Ret.",
]

PREFIX_ALIASES = {
    "CAPTAIN": "Capt.",
    "COLONEL": "Col.",
    "MAJOR": "Maj.",
    "LIEUTENANT": "Lt.",
    "SERGEANT": "Sgt.",
    "DOCTOR": "Dr.",
    "PROFESSOR": "Prof.",
    "FATHER": "Fr.",
    "BROTHER": "Br.",
    "HONORABLE": "Hon.",
    "HONOR": "Hon.",
    "SHEIK": "Sheikh",
}

SUFFIX_ALIASES = {
    "JUNIOR": "Jr.",
    "JNR": "Jr.",
    "SENIOR": "Sr.",
    "SNR": "Sr.",
    "ESQUIRE": "Esq.",
    "RETIRED": "Ret.",
}

COMPANY_KEYWORDS = [
    # entity types
    "inc", "corp", "co", "llc", "l.l.c", "ltd", "lp", "llp", "plc", "pllc", "pc",
    "pa", "pllp", "lllp", "rlp", "rllp", "incorporated", "corporation",
    "company", "limited", "partnership", "professional",
    # trusts and estates
    "trust", "tr", "estate", "foundation", "fund", "endowment", "charity",
    "charitable",
    # financial
    "bank", "banking", "credit", "union", "financial", "finance", "investment",
    "investments", "insurance", "mutual", "savings", "loan", "mortgage",
    "capital", "ventures", "venture",
    # business structures
    "holdings", "holding", "group", "partners", "associates", "association",
    "alliance", "consortium", "syndicate", "cooperative", "coop", "collective",
    "joint",
    # services and industry
    "solutions", "services", "consulting", "management", "development",
    "enterprises", "systems", "technologies", "tech", "software", "hardware",
    "networks", "communications", "construction", "builders", "contractors",
    "realty", "real estate", "properties", "manufacturing", "industries",
    "industrial", "productions", "operations", "logistics", "transportation",
    "shipping", "freight", "delivery", "warehouse", "distribution",
    # institutions
    "church", "chapel", "cathedral", "parish", "ministry", "ministries",
    "mission", "school", "college", "university", "institute", "academy",
    "education", "learning", "hospital", "medical", "health", "healthcare",
    "clinic", "center", "centre",
    # government
    "government", "federal", "state", "county", "city", "municipal",
    "authority", "agency", "department", "bureau", "commission", "board",
    "district", "administration", "clerk", "court",
    # organizations
    "club", "society", "organization", "org", "league", "federation", "council",
    # commercial
    "retail", "wholesale", "trading", "imports", "exports", "sales",
    "marketing", "energy", "oil", "gas", "electric", "power", "utilities",
    "water", "sewer", "media", "broadcasting", "publishing", "entertainment",
    "studios",
    # professional services
    "law", "legal", "attorneys", "lawyers", "accounting", "cpa", "engineering",
    "architects",
]

NOISE_PATTERNS = [
    r"\bET\s*AL\b",
    r"\bETAL\b",
    r"\bET\s*UX\b",
    r"\bET\s*VIR\b",
    r"\bET\s+UXOR\b",
    r"\bTRUSTEES?\b",
    r"\bTTEES?\b",
    r"\bU/A\b",
    r"\bU/D/T\b",
    r"\bAKA\b",
    r"\bA/K/A\b",
    r"\bFBO\b",
    r"\bC/O\b",
    r"\b\d{1,3}%\s*INTEREST\b",
    r"%\s*INTEREST\b",
    r"\b\d{1,3}%",
    r"\bJR\b\.?",
    r"\bSR\b\.?",
]

COMPANY_SUFFIX = r"(?:LLC|L\.L\.C|INC|CORP|CO|COMPANY|LTD|TRUST|LP|LLP|PLC|PLLC)"

PROPERTY_STATUS_TERMS = {
    "improved", "vacant", "unimproved", "residential", "commercial", "industrial",
}

NAME_PATTERN = re.compile(r"^[A-Z][a-z]*([ \-',.][A-Za-z][a-z]*)*$")
MIDDLE_NAME_PATTERN = re.compile(r"^[A-Z][a-zA-Z\s\-',.]*$")


def _normalize_affix(token):
    return re.sub(r"[^A-Za-z]", "", token or "").upper()


def _build_affix_lookup(values, aliases):
    lookup = {}
    for value in values:
        lookup[_normalize_affix(value)] = value
    for alias, canonical in aliases.items():
        lookup[_normalize_affix(alias)] = canonical
    return lookup


PREFIX_LOOKUP = _build_affix_lookup(PERSON_PREFIX_VALUES, PREFIX_ALIASES)
SUFFIX_LOOKUP = _build_affix_lookup(PERSON_SUFFIX_VALUES, SUFFIX_ALIASES)

_COMPANY_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(kw) for kw in COMPANY_KEYWORDS) + r")\b",
    re.IGNORECASE,
)


def normalize_name(value):
    return clean_text(value).lower()


def format_name(name):
    """Capitalize a first or last name; None when it is not a clean name"""
    if not name:
        return None
    formatted = name[0].upper() + name[1:].lower()
    return formatted if NAME_PATTERN.match(formatted) else None


def format_middle_name(name):
    if not name:
        return None
    formatted = name[0].upper() + name[1:]
    return formatted if MIDDLE_NAME_PATTERN.match(formatted) else None


def extract_prefix_suffix(raw):
    """Split one leading honorific and one trailing suffix off a raw name.

    Returns (prefix, suffix, remaining_name) where prefix and suffix are the
    canonical spellings ("Dr.", "Jr.") or None.
    """
    tokens = clean_text(raw).replace(",", " ").split()
    if not tokens:
        return None, None, ""

    prefix = None
    first = _normalize_affix(tokens[0])
    if first and first in PREFIX_LOOKUP:
        prefix = PREFIX_LOOKUP[first]
        tokens.pop(0)

    suffix = None
    if tokens:
        last = _normalize_affix(tokens[-1])
        if last and last in SUFFIX_LOOKUP:
            suffix = SUFFIX_LOOKUP[last]
            tokens.pop()

    return prefix, suffix, " ".join(tokens)


def clean_raw_name(raw):
    """Strip estate/trustee noise and stray joiners from a raw owner string"""
    s = clean_text(raw)
    if not s:
        return ""
    for pattern in NOISE_PATTERNS:
        s = re.sub(pattern, " ", s, flags=re.IGNORECASE)
    s = clean_text(re.sub(r"[(),]", " ", s))
    s = re.sub(r"^(&|and)\s+", "", s, flags=re.IGNORECASE)
    s = re.sub(r"\s+(&|and)$", "", s, flags=re.IGNORECASE).strip()

    # "ACME LLC 2" -> "ACME LLC"
    match = re.match(rf"^(.*?\b{COMPANY_SUFFIX}\b)\s+\d{{1,3}}$", s, re.IGNORECASE)
    if match:
        s = match.group(1).strip()
    return s


def clean_invalid_chars(raw):
    """Keep only letters and name punctuation, trimmed of edge punctuation"""
    name = re.sub(r"\([^)]*\)", "", clean_text(raw))
    name = re.sub(r"[^A-Za-z\-', .]", "", name).strip()
    return name.strip("-', .")


def is_company_name(name):
    return bool(_COMPANY_RE.search(name or ""))


def split_composite_names(name):
    normalized = clean_text(name)
    if not normalized:
        return []
    parts = re.split(r"\s*&\s*|\s+and\s+", normalized, flags=re.IGNORECASE)
    return [p.strip() for p in parts if p.strip()]


def reorder_last_first(name):
    """Turn 'LAST, FIRST M' into 'FIRST M LAST'; other shapes pass through"""
    text = clean_text(name)
    if "," not in text:
        return text
    last, rest = [clean_text(p) for p in text.split(",", 1)]
    if not last or not rest:
        return clean_text(text.replace(",", " "))
    return f"{rest} {last}"


def reorder_composite(name):
    """Reorder each part of 'LAST, FIRST & FIRST' so every part keeps the surname.

    A bare given name after the first part shares the leading surname; a
    part with two or more words is taken as a full name of its own.
    """
    text = clean_text(name)
    if "," not in text or is_company_name(text):
        return text
    last, rest = [clean_text(p) for p in text.split(",", 1)]
    parts = split_composite_names(rest)
    if not last or not parts:
        return reorder_last_first(text)

    names = [f"{parts[0]} {last}"]
    for part in parts[1:]:
        if "," in part:
            names.append(reorder_last_first(part))
        elif len(part.split()) == 1:
            names.append(f"{part} {last}")
        else:
            names.append(part)
    return " & ".join(names)


def classify_owner(raw):
    """Classify a single (non-composite) name.

    Returns (owner, None) on success or (None, reason) when the string
    cannot be turned into a company or a person with first and last name.
    """
    prefix, suffix, remaining = extract_prefix_suffix(raw)
    cleaned = clean_raw_name(remaining)
    if not cleaned:
        return None, "empty_after_clean"

    if is_company_name(cleaned):
        return {"type": "company", "name": cleaned}, None

    tokens = cleaned.split()
    if len(tokens) < 2:
        return None, "person_missing_last_name"

    first = clean_invalid_chars(tokens[0])
    last = clean_invalid_chars(tokens[-1])
    middle = clean_invalid_chars(" ".join(tokens[1:-1]))
    if not first or not last:
        return None, "person_missing_first_or_last"

    return {
        "type": "person",
        "first_name": first,
        "last_name": last,
        "middle_name": middle or None,
        "prefix_name": prefix,
        "suffix_name": suffix,
    }, None


def owner_key(owner):
    if owner["type"] == "company":
        return f"company:{normalize_name(owner['name'])}"
    middle = normalize_name(owner.get("middle_name")) if owner.get("middle_name") else ""
    return (
        f"person:{normalize_name(owner['first_name'])}|{middle}|"
        f"{normalize_name(owner['last_name'])}"
    )


def dedupe_owners(owners):
    seen = set()
    unique = []
    for owner in owners:
        key = owner_key(owner)
        if key not in seen:
            seen.add(key)
            unique.append(owner)
    return unique


def resolve_owners(raw_strings, invalid):
    """Classify every raw owner string, appending failures to `invalid`"""
    owners = []
    for raw in raw_strings:
        if clean_text(raw).lower() in PROPERTY_STATUS_TERMS:
            continue
        parts = split_composite_names(raw)
        if not parts:
            invalid.append({"raw": raw, "reason": "unparseable_or_empty"})
            continue
        for part in parts:
            owner, reason = classify_owner(part)
            if owner:
                owners.append(owner)
            else:
                invalid.append({"raw": part, "reason": reason or "invalid_owner"})
    return dedupe_owners(owners)


def _order_owners_by_date(owners_by_date):
    ordered = {}
    for key in sorted(k for k in owners_by_date if is_iso_date(k)):
        ordered[key] = owners_by_date[key]
    for key in owners_by_date:
        if re.fullmatch(r"unknown_date_\d+", key):
            ordered[key] = owners_by_date[key]
    if "current" in owners_by_date:
        ordered["current"] = owners_by_date["current"]
    return ordered


def build_owners_by_date(grantees_by_date, grantors, current, invalid):
    """Group owners by acquisition date.

    grantees_by_date maps ISO sale dates to raw grantee strings.  Grantors
    that never show up as a grantee are earlier owners whose purchase date
    is unknown; they are kept under an unknown_date_N bucket.
    """
    owners_by_date = {}
    for date in sorted(grantees_by_date):
        owners = resolve_owners(grantees_by_date[date], invalid)
        if owners:
            owners_by_date[date] = owners

    if grantors:
        grantee_keys = {
            owner_key(owner) for owners in owners_by_date.values() for owner in owners
        }
        placeholders = []
        for raw in grantors:
            for part in split_composite_names(raw):
                owner, reason = classify_owner(part)
                if owner is None:
                    invalid.append({"raw": part, "reason": reason or "invalid_owner"})
                elif owner_key(owner) not in grantee_keys:
                    placeholders.append(part)
        unknown_owners = resolve_owners(placeholders, invalid)
        if unknown_owners:
            index = 1
            while f"unknown_date_{index}" in owners_by_date:
                index += 1
            owners_by_date[f"unknown_date_{index}"] = unknown_owners

    owners_by_date["current"] = resolve_owners(current, invalid)
    return _order_owners_by_date(owners_by_date)


def dedupe_invalid_owners(invalid):
    seen = set()
    unique = []
    for item in invalid:
        key = f"{normalize_name(item['raw'])}|{item['reason']}"
        if key not in seen:
            seen.add(key)
            unique.append({"raw": item["raw"], "reason": item["reason"]})
    return unique


def property_key(parcel_id):
    return f"property_{parcel_id or 'unknown_id'}"


def build_owner_data(parcel_id, owners_by_date, invalid):
    """Assemble the owners/owner_data.json document"""
    logger.info(
        f"Resolved owners for {parcel_id}: "
        f"{sum(len(v) for v in owners_by_date.values())} entries, {len(invalid)} invalid"
    )
    return {
        property_key(parcel_id): {"owners_by_date": owners_by_date},
        "invalid_owners": dedupe_invalid_owners(invalid),
    }
