"""Per-county parcel page extraction into normalized JSON documents."""

__version__ = "0.1.0"
