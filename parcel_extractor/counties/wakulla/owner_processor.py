import logging

from parcel_extractor.output import load_seed, read_input_html, write_owners_file
from parcel_extractor.owners import build_owners_by_date, build_owner_data

from parcel_extractor.counties.wakulla import qpublic

logger = logging.getLogger(__name__)


def collect_sale_parties(sales):
    """Grantees keyed by ISO sale date, plus the grantors of dated sales.

    A row without a parsable date contributes no owners at all.
    """
    grantees_by_date = {}
    grantors = []
    for sale in sales:
        if not sale.get("date"):
            continue
        if sale.get("grantor"):
            grantors.append(sale["grantor"])
        if not sale.get("grantee"):
            continue
        grantees_by_date.setdefault(sale["date"], []).append(sale["grantee"])
    return grantees_by_date, grantors


def main():
    soup = qpublic.load_soup(read_input_html())
    parcel_id = qpublic.parcel_id(soup) or load_seed().get("parcel_id")

    # Rows without the grantor/grantee columns carry no owners
    sales = [s for s in qpublic.sales(soup) if s.get("grantor") is not None or s.get("grantee") is not None]
    grantees_by_date, grantors = collect_sale_parties(sales)

    invalid = []
    owners_by_date = build_owners_by_date(grantees_by_date, grantors, qpublic.current_owners(soup), invalid)
    write_owners_file("owner_data.json", build_owner_data(parcel_id, owners_by_date, invalid))


if __name__ == "__main__":
    main()
