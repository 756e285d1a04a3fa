import re

from .parsing import clean_text

MISCELLANEOUS = "Miscellaneous"

# Instrument codes and spelled-out names as they appear in sales grids
DEED_TYPES = {
    "WD": "Warranty Deed",
    "WARRANTY DEED": "Warranty Deed",
    "SW": "Special Warranty Deed",
    "SPECIAL WARRANTY DEED": "Special Warranty Deed",
    "QC": "Quitclaim Deed",
    "QUIT-CLAIM DEED": "Quitclaim Deed",
    "QUITCLAIM DEED": "Quitclaim Deed",
    "GD": "Grant Deed",
    "GRANT DEED": "Grant Deed",
    "BS": "Bargain and Sale Deed",
    "BARGAIN AND SALE DEED": "Bargain and Sale Deed",
    "LBD": "Lady Bird Deed",
    "LADY BIRD DEED": "Lady Bird Deed",
    "TOD": "Transfer on Death Deed",
    "TRANSFER ON DEATH DEED": "Transfer on Death Deed",
    "SD": "Sheriff's Deed",
    "SHERIFF'S DEED": "Sheriff's Deed",
    "SHERIFFS DEED": "Sheriff's Deed",
    "TX": "Tax Deed",
    "TD": "Tax Deed",
    "TAX DEED": "Tax Deed",
    "TRUSTEE'S DEED": "Trustee's Deed",
    "TRUSTEES DEED": "Trustee's Deed",
    "PRD": "Personal Representative Deed",
    "PERSONAL REPRESENTATIVE DEED": "Personal Representative Deed",
    "CD": "Correction Deed",
    "CORRECTION DEED": "Correction Deed",
    "DEED IN LIEU OF FORECLOSURE": "Deed in Lieu of Foreclosure",
    "LED": "Life Estate Deed",
    "LIFE ESTATE DEED": "Life Estate Deed",
    "JTD": "Joint Tenancy Deed",
    "JOINT TENANCY DEED": "Joint Tenancy Deed",
    "TCD": "Tenancy in Common Deed",
    "TENANCY IN COMMON DEED": "Tenancy in Common Deed",
    "CPD": "Community Property Deed",
    "COMMUNITY PROPERTY DEED": "Community Property Deed",
    "GIFT DEED": "Gift Deed",
    "ITD": "Interspousal Transfer Deed",
    "INTERSPOUSAL TRANSFER DEED": "Interspousal Transfer Deed",
    "WILD DEED": "Wild Deed",
    "SMD": "Special Master's Deed",
    "SPECIAL MASTER'S DEED": "Special Master's Deed",
    "SPECIAL MASTERS DEED": "Special Master's Deed",
    "COD": "Court Order Deed",
    "COURT ORDER DEED": "Court Order Deed",
    "CFD": "Contract for Deed",
    "CONTRACT FOR DEED": "Contract for Deed",
    "QTD": "Quiet Title Deed",
    "QUIET TITLE DEED": "Quiet Title Deed",
    "AD": "Administrator's Deed",
    "ADMINISTRATOR'S DEED": "Administrator's Deed",
    "ADMINISTRATORS DEED": "Administrator's Deed",
    "GUARDIAN'S DEED": "Guardian's Deed",
    "GUARDIANS DEED": "Guardian's Deed",
    "RD": "Receiver's Deed",
    "RECEIVER'S DEED": "Receiver's Deed",
    "RECEIVERS DEED": "Receiver's Deed",
    "ROW": "Right of Way Deed",
    "RIGHT OF WAY DEED": "Right of Way Deed",
    "VPD": "Vacation of Plat Deed",
    "VACATION OF PLAT DEED": "Vacation of Plat Deed",
    "AOC": "Assignment of Contract",
    "ASSIGNMENT OF CONTRACT": "Assignment of Contract",
    "ROC": "Release of Contract",
    "RELEASE OF CONTRACT": "Release of Contract",
}

FILE_DOCUMENT_TYPES = {
    "Warranty Deed": "ConveyanceDeedWarrantyDeed",
    "Quitclaim Deed": "ConveyanceDeedQuitClaimDeed",
}


def map_instrument_to_deed_type(instrument):
    """Exact lookup of an instrument code; unknown codes are Miscellaneous"""
    if not instrument:
        return MISCELLANEOUS
    return DEED_TYPES.get(clean_text(instrument).upper(), MISCELLANEOUS)


def map_deed_description(description):
    """Classify a free-text instrument description, None when unrecognized"""
    if not description:
        return None
    text = clean_text(description).lower()
    if "special warranty" in text:
        return "Special Warranty Deed"
    if "warranty" in text:
        return "Warranty Deed"
    if "quit" in text:
        return "Quitclaim Deed"
    return DEED_TYPES.get(text.upper())


def file_document_type(deed_type):
    return FILE_DOCUMENT_TYPES.get(deed_type, "ConveyanceDeed")


def parse_book_page(value):
    """'1234/567' -> ('1234', '567')"""
    match = re.fullmatch(r"(\d+)\s*[/-]\s*(\d+)", clean_text(value))
    if not match:
        return None, None
    return match.group(1), match.group(2)
