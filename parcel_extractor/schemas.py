import os
import re
import json
import logging

import backoff
import requests
from jsonschema import validate, ValidationError

from .errors import SchemaValidationError

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_URL = "https://lexicon.elephant.xyz/json-schemas/schema-manifest.json"

DEFAULT_GATEWAYS = [
    "https://ipfs.io/ipfs/",
    "https://gateway.pinata.cloud/ipfs/",
    "https://cloudflare-ipfs.com/ipfs/",
    "https://dweb.link/ipfs/",
    "https://ipfs.infura.io/ipfs/",
]

SCHEMA_CIDS = {
    "person.json": "bafkreiajbdqn32mgb3s52xkrvzzwer7oit3gma6bpetzfcmkldxgy5di7m",
    "company.json": "bafkreibnw5zonrappj3prexq7p376njvvawqqzfde222qytsl2jsbst3da",
    "property.json": "bafkreih6x76aedhs7lqjk5uq4zskmfs33agku62b4flpq5s5pa6aek2gga",
    "address.json": "bafkreid5icxhvf6qmmwzok6pnxlgxmqahddbngykwtdaqbcqznjfqh2tve",
    "tax.json": "bafkreibnk4xl6jwgxfeumim6cqpi66ngabzxlxljyhwhuziksbz7buau54",
    "lot.json": "bafkreichj2jpejog35oqwxlbxv2i7mi4vfec5njoreppya3grnukf7rdy4",
    "sales.json": "bafkreicdvzuuymrsyn6wpbo5ossj3q3xcdwiyiniwg7bkmpvbfxtikjv5a",
    "layout.json": "bafkreiegxxnvwnhmrrighkvqikulfi54a7jv7gndnar6zju722wfxzk6xm",
    "flood_storm_information.json": "bafkreidh7s2pk26qtob2iiznkvdb6hqr75weybo5p67erq23e53rsfbnuy",
    "structure.json": "bafkreictnk74jkby6q64d3vm6h57s6vr5x65p2wzubpwvwsjil2254okhi",
    "utility.json": "bafkreib3wrmiwqyi34xdengoyud4aplz5rbsjs6vag4eic4n7ohturx6xq",
}


def request_timeout():
    return float(os.getenv("REQUEST_TIMEOUT", "10"))


def ipfs_gateways():
    configured = os.getenv("IPFS_GATEWAYS")
    if not configured:
        return list(DEFAULT_GATEWAYS)
    return [g.strip().rstrip("/") + "/" for g in configured.split(",") if g.strip()]


def fetch_schema_from_ipfs(cid):
    """Fetch schema from IPFS using the provided CID, trying each gateway in turn."""
    for gateway in ipfs_gateways():
        try:
            url = f"{gateway}{cid}"
            logger.info(f"Trying to fetch {cid} from {gateway}")
            response = requests.get(url, timeout=request_timeout())
            response.raise_for_status()
            return response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"Error fetching from {gateway}: {e}")
            continue

    logger.error(f"Failed to fetch schema from IPFS CID {cid} from all gateways")
    return None


@backoff.on_exception(
    backoff.expo,
    (requests.exceptions.RequestException, ConnectionError, TimeoutError, json.JSONDecodeError),
    max_tries=3,
    max_time=120,
    on_backoff=lambda details: logger.warning(
        f"County CID fetch failed, retrying in {details['wait']:.1f}s (attempt {details['tries']})"),
    on_giveup=lambda details: logger.error(f"County CID fetch failed after {details['tries']} attempts")
)
def fetch_county_data_group_cid():
    """Fetch the county data group CID from the schema manifest"""
    manifest_url = os.getenv("SCHEMA_MANIFEST_URL", DEFAULT_MANIFEST_URL)

    logger.info(f"Fetching schema manifest from: {manifest_url}")
    response = requests.get(manifest_url, timeout=request_timeout())
    response.raise_for_status()
    manifest_data = response.json()

    if "County" not in manifest_data:
        raise ValueError("County entry not found in schema manifest")

    county_cid = manifest_data["County"]["ipfsCid"]
    logger.info(f"Found County data group CID: {county_cid}")
    return county_cid


def load_schemas_from_ipfs(schemas_dir=None):
    """Load all schemas from IPFS, optionally caching them under schemas_dir.

    Returns the schemas keyed by data file name, or None when any schema
    cannot be fetched.
    """
    schemas = {}

    if schemas_dir:
        os.makedirs(schemas_dir, exist_ok=True)

    for filename, cid in SCHEMA_CIDS.items():
        logger.info(f"Fetching schema for {filename} from IPFS...")
        schema = fetch_schema_from_ipfs(cid)
        if not schema:
            logger.error(f"Failed to load schema for {filename}")
            return None

        schemas[filename] = schema

        if schemas_dir:
            schema_path = os.path.join(schemas_dir, filename)
            with open(schema_path, "w", encoding="utf-8") as f:
                json.dump(schema, f, indent=2)
            logger.info(f"Saved schema to {schema_path}")

    return schemas


def schema_name_for(filename):
    """'tax_2024.json' -> 'tax.json'; None for files without a known schema"""
    if filename.startswith("relationship_"):
        return None
    base = re.sub(r"(_\d+)+\.json$", ".json", filename)
    return base if base in SCHEMA_CIDS else None


def validate_data_dir(data_dir, schemas):
    """Validate every data document that has a schema; raise on any failure"""
    errors = []
    checked = 0
    for filename in sorted(os.listdir(data_dir)):
        schema_name = schema_name_for(filename)
        if not schema_name or schema_name not in schemas:
            continue
        with open(os.path.join(data_dir, filename), "r", encoding="utf-8") as f:
            document = json.load(f)
        try:
            validate(instance=document, schema=schemas[schema_name])
            checked += 1
        except ValidationError as e:
            path = "/".join(str(p) for p in e.absolute_path)
            errors.append(f"{filename}: {path}: {e.message}")

    if errors:
        for error in errors:
            logger.error(f"Schema validation error: {error}")
        raise SchemaValidationError(errors)

    logger.info(f"Validated {checked} documents in {data_dir}")
    return checked
