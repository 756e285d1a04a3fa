import os
import json
import logging
import tempfile

from dotenv import load_dotenv

from .errors import ExtractionError
from .relationships import build_relationship_files, create_county_data_group
from .schemas import fetch_county_data_group_cid, load_schemas_from_ipfs, validate_data_dir
from .utils import (
    REQUIRED_SCRIPTS,
    cleanup_owners_directory,
    extract_input_zip,
    import_county_scripts,
    print_completed,
    print_running,
    print_status,
    process_csv_to_seed_folders,
    read_county_jurisdiction,
    zip_directory,
)

# Try to load .env from multiple locations
for env_path in [".env", os.path.expanduser("~/.env")]:
    if os.path.exists(env_path):
        load_dotenv(dotenv_path=env_path)
        break
else:
    load_dotenv()

logger = logging.getLogger(__name__)


def run_county_scripts(modules):
    """Run the county scripts in order in the current directory; stop at the first failure"""
    for script_name in REQUIRED_SCRIPTS:
        print_running(script_name)
        try:
            modules[script_name].main()
        except Exception:
            logger.exception(f"Script {script_name} failed")
            print_completed(script_name, success=False)
            raise
        print_completed(script_name)


def assemble_county_data_group(data_dir="data"):
    """Write the property relationship files and county_data_group.json"""
    relationship_files, errors = build_relationship_files(data_dir)
    if errors:
        raise ExtractionError("; ".join(errors))

    county_data = create_county_data_group(relationship_files)
    with open(os.path.join(data_dir, "county_data_group.json"), "w", encoding="utf-8") as f:
        json.dump(county_data, f, indent=2, ensure_ascii=False)
    logger.info(f"Wrote county data group with {len(relationship_files)} relationship files")
    return county_data


def validate_output(data_dir="data"):
    county_cid = fetch_county_data_group_cid()
    print_status(f"County CID retrieved: {county_cid}")

    schemas = load_schemas_from_ipfs(schemas_dir="schemas")
    if not schemas:
        raise ExtractionError("Failed to load schemas from IPFS")
    checked = validate_data_dir(data_dir, schemas)
    print_status(f"Validated {checked} documents against their schemas")


def run_transform(input_zip, output_zip=None, county=None, validate=False, work_dir=None):
    """Extract input_zip, run the county scripts and zip the resulting data/ directory"""
    input_zip = os.path.abspath(input_zip)
    if not output_zip:
        output_zip = os.path.splitext(os.path.basename(input_zip))[0] + "_transformed.zip"
    output_zip = os.path.abspath(output_zip)

    work_dir = os.path.abspath(work_dir or tempfile.mkdtemp(prefix="parcel_extractor_"))
    print_status(f"Extracting {os.path.basename(input_zip)} into {work_dir}")
    extract_input_zip(input_zip, work_dir)

    original_dir = os.getcwd()
    os.chdir(work_dir)
    try:
        cleanup_owners_directory()
        county_name = county or read_county_jurisdiction()
        modules = import_county_scripts(county_name)
        print_status(f"Running {len(modules)} scripts for {county_name}")

        run_county_scripts(modules)
        assemble_county_data_group()

        if validate:
            validate_output()

        zip_directory("data", output_zip)
    finally:
        os.chdir(original_dir)

    logger.info(f"Transform finished: {output_zip}")
    return output_zip


def run_seed(seed_csv, output_zip=None):
    folder = process_csv_to_seed_folders(seed_csv)
    print_status(f"Created seed folder {folder}")
    output_zip = output_zip or "seed_output.zip"
    zip_directory(os.path.dirname(folder), output_zip)
    return output_zip


def main(args):
    """Dispatch parsed CLI arguments to the seed or transform workflow"""
    if getattr(args, "seed", False):
        run_seed(args.seed_csv, args.output_zip)
    elif getattr(args, "transform", False):
        run_transform(
            args.input_zip,
            args.output_zip,
            county=getattr(args, "county", None),
            validate=getattr(args, "validate", False),
        )
    else:
        raise ExtractionError("Nothing to do: pass --transform or --seed")
