"""Person and company documents and their links to sales and mailing address"""

import logging

from .owners import format_name, format_middle_name, NAME_PATTERN, MIDDLE_NAME_PATTERN
from .output import write_data, write_relationship, remove_matching, DATA_DIR

logger = logging.getLogger(__name__)


def _person_key(first, last):
    return f"{(first or '').strip().upper()}|{(last or '').strip().upper()}"


class PartyWriter:
    """Writes person_N/company_N files for every owner in owners_by_date.

    Persons are merged on first and last name across all date buckets so a
    buyer who later sells appears once.  Index lookups go through the same
    keys, which keeps sales links pointing at the written files.
    """

    def __init__(self, owners_by_date, source, data_dir=DATA_DIR):
        self.owners_by_date = owners_by_date or {}
        self.source = source
        self.data_dir = data_dir
        self.person_index = {}
        self.company_index = {}

    def _merged_people(self):
        merged = {}
        for owners in self.owners_by_date.values():
            for owner in owners or []:
                if owner.get("type") != "person":
                    continue
                key = _person_key(owner.get("first_name"), owner.get("last_name"))
                if key not in merged:
                    merged[key] = dict(owner)
                elif not merged[key].get("middle_name") and owner.get("middle_name"):
                    merged[key]["middle_name"] = owner["middle_name"]
        return merged

    def write_people(self):
        remove_matching(r"person_\d+\.json", self.data_dir)
        count = 0
        for key, person in self._merged_people().items():
            first = format_name(person.get("first_name"))
            last = format_name(person.get("last_name"))
            if not first or not last or not NAME_PATTERN.match(first) or not NAME_PATTERN.match(last):
                logger.warning(f"Dropping person with unusable name: {person}")
                continue
            middle = format_middle_name(person.get("middle_name"))
            if middle and not MIDDLE_NAME_PATTERN.match(middle):
                middle = None

            count += 1
            self.person_index[key] = count
            write_data(f"person_{count}.json", {
                **self.source,
                "birth_date": None,
                "first_name": first,
                "middle_name": middle,
                "last_name": last,
                "prefix_name": person.get("prefix_name"),
                "suffix_name": person.get("suffix_name"),
                "us_citizenship_status": None,
                "veteran_status": None,
            }, self.data_dir)
        return count

    def write_companies(self):
        remove_matching(r"company_\d+\.json", self.data_dir)
        names = []
        for owners in self.owners_by_date.values():
            for owner in owners or []:
                name = (owner.get("name") or "").strip()
                if owner.get("type") == "company" and name and name not in names:
                    names.append(name)
        for i, name in enumerate(names, start=1):
            self.company_index[name] = i
            write_data(f"company_{i}.json", {**self.source, "name": name}, self.data_dir)
        return len(names)

    def file_for(self, owner):
        """person_N.json/company_N.json written for an owner, or None"""
        if owner.get("type") == "person":
            index = self.person_index.get(_person_key(owner.get("first_name"), owner.get("last_name")))
            return f"person_{index}.json" if index else None
        index = self.company_index.get((owner.get("name") or "").strip())
        return f"company_{index}.json" if index else None

    def link_sales(self, sale_dates):
        """Link sales_i.json to the owners that acquired the parcel on that date.

        sale_dates is the list of ISO dates in sales file order.  Current
        owners not already tied to the most recent sale are linked to
        sales_1.json.
        """
        remove_matching(r"relationship_sales_(person|company)_\d+\.json", self.data_dir)
        counters = {"person": 0, "company": 0}

        def link(sale_file, owner):
            target = self.file_for(owner)
            if not target:
                return
            kind = "person" if owner["type"] == "person" else "company"
            counters[kind] += 1
            write_relationship(
                f"relationship_sales_{kind}_{counters[kind]}.json", sale_file, target, self.data_dir
            )

        for i, date in enumerate(sale_dates, start=1):
            for owner in self.owners_by_date.get(date, []) if date else []:
                link(f"sales_{i}.json", owner)

        if sale_dates:
            linked = {self.file_for(o) for o in self.owners_by_date.get(sale_dates[0], []) if sale_dates[0]}
            for owner in self.owners_by_date.get("current", []):
                if self.file_for(owner) not in linked:
                    link("sales_1.json", owner)
        return counters

    def link_mailing_address(self, mailing_file="mailing_address.json"):
        remove_matching(r"relationship_(person|company)_has_mailing_address_\d+\.json", self.data_dir)
        count = 0
        for owner in self.owners_by_date.get("current", []):
            target = self.file_for(owner)
            if not target:
                continue
            count += 1
            kind = "person" if owner["type"] == "person" else "company"
            write_relationship(
                f"relationship_{kind}_has_mailing_address_{count}.json", target, mailing_file, self.data_dir
            )
        return count

    def write_all(self, sale_dates):
        self.write_people()
        self.write_companies()
        return self.link_sales(sale_dates)
