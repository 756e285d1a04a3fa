import re

from .parsing import clean_text

# USPS street suffixes, long and abbreviated forms -> schema spelling
STREET_SUFFIXES = {
    'ALLEY': 'Aly', 'ALY': 'Aly',
    'AVENUE': 'Ave', 'AVE': 'Ave', 'AV': 'Ave',
    'BEND': 'Bnd', 'BND': 'Bnd',
    'BOULEVARD': 'Blvd', 'BLVD': 'Blvd',
    'CAUSEWAY': 'Cswy', 'CSWY': 'Cswy',
    'CIRCLE': 'Cir', 'CIR': 'Cir',
    'CIRCLES': 'Cirs', 'CIRS': 'Cirs',
    'COVE': 'Cv', 'CV': 'Cv',
    'COURT': 'Ct', 'CT': 'Ct',
    'CENTER': 'Ctr', 'CTR': 'Ctr',
    'CENTERS': 'Ctrs', 'CTRS': 'Ctrs',
    'CANYON': 'Cyn', 'CYN': 'Cyn',
    'CREEK': 'Crk', 'CRK': 'Crk',
    'CROSSING': 'Xing', 'XING': 'Xing',
    'DRIVE': 'Dr', 'DR': 'Dr',
    'DRIVES': 'Drs', 'DRS': 'Drs',
    'EXPRESSWAY': 'Expy', 'EXPY': 'Expy',
    'FREEWAY': 'Fwy', 'FWY': 'Fwy',
    'GREEN': 'Grn', 'GRN': 'Grn',
    'GREENS': 'Grns', 'GRNS': 'Grns',
    'GROVE': 'Grv', 'GRV': 'Grv',
    'GROVES': 'Grvs', 'GRVS': 'Grvs',
    'HIGHWAY': 'Hwy', 'HWY': 'Hwy',
    'HILL': 'Hl', 'HL': 'Hl',
    'HILLS': 'Hls', 'HLS': 'Hls',
    'HOLLOW': 'Holw', 'HOLW': 'Holw',
    'JUNCTION': 'Jct', 'JCT': 'Jct',
    'JUNCTIONS': 'Jcts', 'JCTS': 'Jcts',
    'LANE': 'Ln', 'LN': 'Ln',
    'LOOP': 'Loop',
    'MALL': 'Mall',
    'MEADOW': 'Mdw', 'MDW': 'Mdw',
    'MEADOWS': 'Mdws', 'MDWS': 'Mdws',
    'MEWS': 'Mews',
    'MILL': 'Ml', 'ML': 'Ml',
    'MANORS': 'Mnrs', 'MNRS': 'Mnrs',
    'MOUNT': 'Mt', 'MT': 'Mt',
    'MOUNTAIN': 'Mtn', 'MTN': 'Mtn',
    'MOUNTAINS': 'Mtns', 'MTNS': 'Mtns',
    'OVERPASS': 'Opas', 'OPAS': 'Opas',
    'ORCHARD': 'Orch', 'ORCH': 'Orch',
    'OVAL': 'Oval',
    'PARK': 'Park',
    'PARKWAY': 'Pkwy', 'PKWY': 'Pkwy',
    'PASS': 'Pass',
    'PATH': 'Path',
    'PIKE': 'Pike',
    'PLACE': 'Pl', 'PL': 'Pl',
    'PLAIN': 'Pln', 'PLN': 'Pln',
    'PLAINS': 'Plns', 'PLNS': 'Plns',
    'PLAZA': 'Plz', 'PLZ': 'Plz',
    'POINT': 'Pt', 'PT': 'Pt',
    'POINTS': 'Pts', 'PTS': 'Pts',
    'PINE': 'Pne', 'PNE': 'Pne',
    'PINES': 'Pnes', 'PNES': 'Pnes',
    'RADIAL': 'Radl', 'RADL': 'Radl',
    'ROAD': 'Rd', 'RD': 'Rd',
    'RIDGE': 'Rdg', 'RDG': 'Rdg',
    'RIDGES': 'Rdgs', 'RDGS': 'Rdgs',
    'RIVER': 'Riv', 'RIV': 'Riv',
    'ROW': 'Row',
    'ROUTE': 'Rte', 'RTE': 'Rte',
    'RUN': 'Run',
    'SHOAL': 'Shl', 'SHL': 'Shl',
    'SHOALS': 'Shls', 'SHLS': 'Shls',
    'SHORE': 'Shr', 'SHR': 'Shr',
    'SHORES': 'Shrs', 'SHRS': 'Shrs',
    'SUMMIT': 'Smt', 'SMT': 'Smt',
    'SQUARE': 'Sq', 'SQ': 'Sq',
    'SQUARES': 'Sqs', 'SQS': 'Sqs',
    'STREET': 'St', 'ST': 'St',
    'STATION': 'Sta', 'STA': 'Sta',
    'STRAVENUE': 'Stra', 'STRA': 'Stra',
    'STREAM': 'Strm', 'STRM': 'Strm',
    'TERRACE': 'Ter', 'TER': 'Ter',
    'TURNPIKE': 'Tpke', 'TPKE': 'Tpke',
    'TRAIL': 'Trl', 'TRL': 'Trl',
    'TRACE': 'Trce', 'TRCE': 'Trce',
    'UNION': 'Un', 'UN': 'Un',
    'VISTA': 'Vis', 'VIS': 'Vis',
    'VALLEY': 'Vly', 'VLY': 'Vly',
    'VALLEYS': 'Vlys', 'VLYS': 'Vlys',
    'VIA': 'Via',
    'VILLE': 'Vl', 'VL': 'Vl',
    'VILLAGES': 'Vlgs', 'VLGS': 'Vlgs',
    'VIEWS': 'Vws', 'VWS': 'Vws',
    'WALK': 'Walk',
    'WALL': 'Wall',
    'WAY': 'Way',
}

DIRECTIONALS = {
    'NORTH': 'N', 'SOUTH': 'S', 'EAST': 'E', 'WEST': 'W',
    'NORTHEAST': 'NE', 'NORTHWEST': 'NW', 'SOUTHEAST': 'SE', 'SOUTHWEST': 'SW',
    'N': 'N', 'S': 'S', 'E': 'E', 'W': 'W',
    'NE': 'NE', 'NW': 'NW', 'SE': 'SE', 'SW': 'SW',
}


def normalize_suffix(token):
    if not token:
        return None
    return STREET_SUFFIXES.get(token.strip().rstrip('.').upper())


def parse_full_address(full_address):
    """Split '123 N MAIN ST, CITY, FL 32000-1234' into schema address parts"""
    result = {
        'street_number': None,
        'street_name': None,
        'street_suffix_type': None,
        'street_pre_directional_text': None,
        'street_post_directional_text': None,
        'unit_identifier': None,
        'city_name': None,
        'state_code': None,
        'postal_code': None,
        'plus_four_postal_code': None,
    }
    if not full_address:
        return result

    parts = [p.strip() for p in re.split(r"\s*,\s*", clean_text(full_address))]
    line1, city, state_zip = None, None, None
    if len(parts) >= 3:
        line1, city, state_zip = parts[0], parts[1], " ".join(parts[2:])
    elif len(parts) == 2:
        line1, state_zip = parts
    else:
        line1 = parts[0]

    if line1:
        line1 = line1.upper()
        unit_match = re.search(r"\s+(?:#|UNIT|APT|STE)\s*(\S+)$", line1)
        if unit_match:
            result['unit_identifier'] = unit_match.group(1)
            line1 = line1[:unit_match.start()]
        tokens = line1.split()

        if len(tokens) >= 2 and re.fullmatch(r"\d+[A-Z]?", tokens[0]):
            result['street_number'] = tokens.pop(0)
        if len(tokens) >= 2 and tokens[0] in DIRECTIONALS:
            result['street_pre_directional_text'] = DIRECTIONALS[tokens.pop(0)]
        if len(tokens) >= 2 and tokens[-1] in DIRECTIONALS:
            result['street_post_directional_text'] = DIRECTIONALS[tokens.pop()]
        if len(tokens) >= 2 and normalize_suffix(tokens[-1]):
            result['street_suffix_type'] = normalize_suffix(tokens.pop())
        result['street_name'] = " ".join(tokens) or None

    if city:
        result['city_name'] = city.upper()
    if state_zip:
        match = re.match(r"^([A-Za-z]{2})\s+(\d{5})(?:-(\d{4}))?$", state_zip)
        if match:
            result['state_code'] = match.group(1).upper()
            result['postal_code'] = match.group(2)
            result['plus_four_postal_code'] = match.group(3)
    return result


def parse_city_state_zip(line):
    """'JACKSONVILLE FL 32256-' -> city, state, 5-digit zip"""
    empty = {'city_name': None, 'state_code': None, 'postal_code': None}
    cleaned = clean_text(line).rstrip('-').strip()
    tokens = cleaned.split()
    if len(tokens) < 3:
        return empty
    return {
        'city_name': " ".join(tokens[:-2]).upper(),
        'state_code': tokens[-2].upper(),
        'postal_code': tokens[-1][:5],
    }


def parse_section_township_range(text):
    """Read section/township/range from '12/3S/4W' or '12-3S-4E' forms"""
    value = clean_text(text)
    match = re.search(r"(\d{1,2})\s*[/-]\s*(\d+)\s*([NS]?)\s*[/-]\s*(\d+)\s*([EW]?)", value, re.IGNORECASE)
    if not match:
        return {'section': None, 'township': None, 'range': None}
    section, township, t_dir, range_, r_dir = match.groups()
    return {
        'section': section,
        'township': township + t_dir.upper(),
        'range': range_ + r_dir.upper(),
    }


def parse_lot(legal_rows):
    for row in legal_rows:
        match = re.search(r"\bLOT\s+(\S+)", row or "", re.IGNORECASE)
        if match:
            return match.group(1)
    return None
