import os
import re
import sys
import json
import time
import shutil
import zipfile
import logging
import importlib.util
from urllib.parse import urlparse, parse_qs

import pandas as pd

from .errors import CountyNotFoundError

LOCAL_DIR = os.path.dirname(__file__)
COUNTIES_DIR = os.path.join(LOCAL_DIR, "counties")

# Execution order of the per-county scripts
REQUIRED_SCRIPTS = [
    "owner_processor",
    "structure_extractor",
    "utility_extractor",
    "layout_extractor",
    "data_extractor",
]

SEED_COLUMNS = ["parcel_id", "address", "method", "url", "county", "headers", "multiValueQueryString", "json"]

logger = logging.getLogger(__name__)


def configure_logging(log_dir=None):
    """Log INFO and above to logs/workflow_<epoch>.log; only CRITICAL reaches stdout"""
    log_dir = log_dir or os.getenv("LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)

    log_file_path = os.path.join(log_dir, f"workflow_{int(time.time())}.log")

    file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    ))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.CRITICAL)

    logging.basicConfig(level=logging.INFO, handlers=[file_handler, console_handler], force=True)
    return log_file_path


def print_running(node_name):
    """Print running status"""
    print(f"🔄 RUNNING: {node_name}")
    logger.info(f"RUNNING: {node_name}")


def print_status(message):
    print(f"STATUS: {message}")
    logger.info(f"STATUS: {message}")


def print_completed(node_name, success=True):
    status = "✅ COMPLETED" if success else "❌ FAILED"
    print(f"{status}: {node_name}")
    logger.info(f"COMPLETED: {node_name} - Success: {success}")


def is_empty_value(value):
    """Check if a value is empty, None, or whitespace"""
    if value is None:
        return True
    if isinstance(value, str):
        return len(value.strip()) == 0
    return False


def cleanup_owners_directory(base_dir="."):
    """Recreate empty owners/ and data/ directories under base_dir"""
    for dir_name in ("owners", "data"):
        dir_path = os.path.join(base_dir, dir_name)
        if os.path.exists(dir_path):
            shutil.rmtree(dir_path)
            logger.info(f"Cleaned up existing {dir_name} directory: {dir_path}")
        os.makedirs(dir_path, exist_ok=True)
        logger.info(f"Created fresh {dir_name} directory: {dir_path}")


def county_name_variations(county_name):
    name = str(county_name).strip()
    variations = [
        name.lower(),
        name,
        name.title(),
        name.upper(),
        name.replace(" ", ""),
        name.lower().replace(" ", ""),
        name.lower().replace(" ", "_"),
    ]
    unique = []
    for variation in variations:
        if variation and variation not in unique:
            unique.append(variation)
    return unique


def read_county_jurisdiction(base_dir="."):
    path = os.path.join(base_dir, "unnormalized_address.json")
    if not os.path.exists(path):
        raise CountyNotFoundError("unnormalized_address.json not found and no county given")
    with open(path, "r", encoding="utf-8") as f:
        address_data = json.load(f)
    county_name = str(address_data.get("county_jurisdiction") or "").strip()
    if not county_name:
        raise CountyNotFoundError("'county_jurisdiction' missing from unnormalized_address.json")
    logger.info(f"Found county_jurisdiction: {county_name}")
    return county_name


def import_county_scripts(county_name, counties_dir=COUNTIES_DIR):
    """Load the five county scripts as modules, keyed by script name"""
    for variation in county_name_variations(county_name):
        county_path = os.path.join(counties_dir, variation)
        if not os.path.isdir(county_path):
            continue

        logger.info(f"Found county directory: {county_path}")
        modules = {}
        missing_scripts = []
        for script_name in REQUIRED_SCRIPTS:
            script_path = os.path.join(county_path, f"{script_name}.py")
            if not os.path.exists(script_path):
                logger.warning(f"Script not found: {script_path}")
                missing_scripts.append(script_name)
                continue

            module_name = f"county_{script_name}"
            spec = importlib.util.spec_from_file_location(module_name, script_path)
            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            spec.loader.exec_module(module)
            modules[script_name] = module
            logger.info(f"Imported: {script_name}.py")

        if missing_scripts:
            raise CountyNotFoundError(
                f"County {variation} is missing scripts: {', '.join(missing_scripts)}"
            )
        return modules

    tried = ", ".join(county_name_variations(county_name))
    raise CountyNotFoundError(f"No county directory under {counties_dir} for '{county_name}' (tried {tried})")


def extract_input_zip(input_zip, work_dir):
    """Unpack the input ZIP, flattening a single top-level folder if present"""
    os.makedirs(work_dir, exist_ok=True)
    with zipfile.ZipFile(input_zip, "r") as zip_ref:
        for member in zip_ref.infolist():
            if member.is_dir():
                continue
            target = os.path.join(work_dir, os.path.basename(member.filename))
            with zip_ref.open(member) as src, open(target, "wb") as dst:
                shutil.copyfileobj(src, dst)
            logger.info(f"Extracted {member.filename}")
    return work_dir


def zip_directory(source_dir, output_zip_path):
    """Write every file under source_dir into output_zip_path; returns the file count"""
    if not os.path.isdir(source_dir):
        raise FileNotFoundError(f"No directory found to zip: {source_dir}")

    with zipfile.ZipFile(output_zip_path, "w", zipfile.ZIP_DEFLATED) as zip_ref:
        for root, dirs, files in os.walk(source_dir):
            for file in sorted(files):
                file_path = os.path.join(root, file)
                archive_path = os.path.relpath(file_path, source_dir)
                zip_ref.write(file_path, archive_path)
                logger.info(f"Added to ZIP: {archive_path}")

    with zipfile.ZipFile(output_zip_path, "r") as zip_ref:
        file_count = len(zip_ref.namelist())
    print_status(f"Created output ZIP: {os.path.basename(output_zip_path)} with {file_count} files")
    return file_count


def extract_query_params_and_base_url(url):
    """Extract base URL (including hash-routing path) and query parameters.
       Parses both regular ?query and ?query inside the fragment (after #)."""
    if is_empty_value(url):
        return None, None

    parsed = urlparse(url)
    base_url = f"{parsed.scheme}://{parsed.netloc}{parsed.path}"

    params = {}
    if parsed.query:
        for k, v in parse_qs(parsed.query, keep_blank_values=True).items():
            params[k] = v[0] if len(v) == 1 else v

    if parsed.fragment:
        frag_path, _, frag_query = parsed.fragment.partition("?")
        base_url = f"{base_url}#{frag_path}" if frag_path else f"{base_url}#"

        if frag_query:
            for k, v in parse_qs(frag_query, keep_blank_values=True).items():
                if k in params:
                    existing = params[k] if isinstance(params[k], list) else [params[k]]
                    merged = existing + v
                    params[k] = merged if len(merged) > 1 else merged[0]
                else:
                    params[k] = v[0] if len(v) == 1 else v

    return base_url, params


def parse_multi_value_query_string(query_string_value):
    """
    Parse a multiValueQueryString cell written either as JSON or as a Python dict literal
    """
    if query_string_value is None or pd.isna(query_string_value) or is_empty_value(query_string_value):
        return None

    query_string_str = str(query_string_value).strip()

    try:
        return json.loads(query_string_str)
    except (json.JSONDecodeError, ValueError):
        pass

    try:
        import ast
        return ast.literal_eval(query_string_str)
    except (ValueError, SyntaxError):
        pass

    logger.warning(f"Could not parse multiValueQueryString: {query_string_str[:100]}...")
    return None


def _parse_json_cell(value, label):
    if is_empty_value(value):
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        logger.warning(f"Invalid {label} JSON format, ignoring {label}")
        return None


def create_parcel_folder(
    parcel_id, address, method, url, county, headers=None, multi_value_query_string=None, json_body=None,
    output_dir="output",
):
    """Write the four seed documents for one parcel under output_dir/<parcel>"""
    clean_parcel_id = re.sub(r"[^\w\-_]", "_", str(parcel_id))
    folder_name = os.path.join(output_dir, clean_parcel_id)
    os.makedirs(folder_name, exist_ok=True)

    # Query parameters come from the multiValueQueryString column, never from the URL
    base_url, _ = extract_query_params_and_base_url(url)

    unnormalized_address_data = {
        "full_address": address if not is_empty_value(address) else None,
        "source_http_request": {
            "method": method if not is_empty_value(method) else None,
            "url": base_url if not is_empty_value(base_url) else None,
            "multiValueQueryString": multi_value_query_string or {},
        },
        "county_jurisdiction": county if not is_empty_value(county) else None,
        "request_identifier": parcel_id if not is_empty_value(parcel_id) else None,
    }

    if headers:
        unnormalized_address_data["source_http_request"]["headers"] = headers
    if json_body:
        unnormalized_address_data["source_http_request"]["json"] = json_body

    property_seed_data = {
        "parcel_id": parcel_id if not is_empty_value(parcel_id) else None,
        "source_http_request": dict(unnormalized_address_data["source_http_request"]),
        "request_identifier": unnormalized_address_data["request_identifier"],
    }

    relationship_data = {
        "from": {"/": "./property_seed.json"},
        "to": {"/": "./unnormalized_address.json"},
    }

    root_schema = {
        "label": "Seed",
        "relationships": {
            "property_seed": {"/": "./relationship_property_to_address.json"}
        },
    }

    files_to_create = [
        ("unnormalized_address.json", unnormalized_address_data),
        ("property_seed.json", property_seed_data),
        ("relationship_property_to_address.json", relationship_data),
        ("seed_data_group.json", root_schema),
    ]
    for filename, data_obj in files_to_create:
        with open(os.path.join(folder_name, filename), "w", encoding="utf-8") as f:
            json.dump(data_obj, f, indent=2, ensure_ascii=False)

    return folder_name, unnormalized_address_data, property_seed_data


def process_csv_to_seed_folders(csv_file_path, output_dir="output"):
    """Turn a one-row seed CSV into a seed folder; returns the folder path"""
    if not os.path.exists(csv_file_path):
        raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

    if os.path.exists(output_dir):
        shutil.rmtree(output_dir)
    os.makedirs(output_dir, exist_ok=True)

    df = pd.read_csv(csv_file_path, dtype=str, keep_default_na=False)
    if len(df) == 0:
        raise ValueError("CSV file is empty - no data rows found")
    if len(df) > 1:
        raise ValueError(f"CSV file contains {len(df)} rows - only 1 row (1 property) is allowed")
    print_status("CSV validation passed - processing 1 property")

    row = {column: str(df.iloc[0].get(column, "") or "").strip() for column in SEED_COLUMNS}
    if is_empty_value(row["parcel_id"]):
        raise ValueError("parcel_id is required but not provided")

    folder_name, _, _ = create_parcel_folder(
        row["parcel_id"],
        row["address"],
        row["method"] or "GET",
        row["url"],
        row["county"],
        _parse_json_cell(row["headers"], "headers"),
        parse_multi_value_query_string(row["multiValueQueryString"]),
        _parse_json_cell(row["json"], "json"),
        output_dir=output_dir,
    )
    logger.info(f"Created seed files for parcel ID {row['parcel_id']} in {folder_name}")
    return folder_name
