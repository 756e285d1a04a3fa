#!/usr/bin/env python3
"""CLI entry point for parcel-extractor"""

import sys
import argparse

from .main import main as run_workflow
from .utils import configure_logging


def build_parser():
    parser = argparse.ArgumentParser(description="Parcel Extractor")
    parser.add_argument("--transform", action="store_true",
                        help="Run the county scripts against an input ZIP and zip the data/ output")
    parser.add_argument("--input-zip", type=str,
                        help="ZIP holding input.html (or <parcel>.html), property_seed.json and unnormalized_address.json")
    parser.add_argument("--output-zip", type=str,
                        help="Output ZIP filename (e.g., my_output.zip). If not specified, auto-generates based on input.")
    parser.add_argument("--county", type=str,
                        help="County directory to use instead of county_jurisdiction from unnormalized_address.json")
    parser.add_argument("--validate", action="store_true",
                        help="Validate data files against schemas fetched from IPFS")
    parser.add_argument("--seed", action="store_true", help="Build a seed folder from a one-row CSV")
    parser.add_argument("--seed-csv", type=str, help="Seed CSV path used with --seed")
    parser.add_argument("--log-dir", type=str, help="Directory for workflow log files (default: $LOG_DIR or logs)")
    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.transform and not args.input_zip:
        parser.error("--transform requires --input-zip")
    if args.seed and not args.seed_csv:
        parser.error("--seed requires --seed-csv")

    configure_logging(args.log_dir)

    try:
        run_workflow(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
