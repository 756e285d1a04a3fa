import os
import re
import json
import logging

logger = logging.getLogger(__name__)

DATA_DIR = "data"
OWNERS_DIR = "owners"


def read_json(path):
    """Load a JSON file, None when the file is absent"""
    if not os.path.exists(path):
        logger.info(f"{path} not found, skipping")
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(path, obj):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)


def write_data(name, obj, data_dir=DATA_DIR):
    write_json(os.path.join(data_dir, name), obj)
    logger.info(f"Wrote {data_dir}/{name}")


def write_owners_file(name, obj, owners_dir=OWNERS_DIR):
    write_json(os.path.join(owners_dir, name), obj)
    logger.info(f"Wrote {owners_dir}/{name}")


def ref(filename):
    return {"/": f"./{filename}"}


def relationship(from_file, to_file):
    return {"from": ref(from_file), "to": ref(to_file)}


def write_relationship(name, from_file, to_file, data_dir=DATA_DIR):
    write_data(name, relationship(from_file, to_file), data_dir)


def remove_matching(pattern, data_dir=DATA_DIR):
    """Delete files left behind by an earlier run whose names match `pattern`"""
    if not os.path.isdir(data_dir):
        return
    for name in os.listdir(data_dir):
        if re.fullmatch(pattern, name):
            os.remove(os.path.join(data_dir, name))


def source_info(seed):
    """source_http_request/request_identifier block copied onto every document"""
    seed = seed or {}
    request = seed.get("source_http_request") or {}
    return {
        "source_http_request": {
            "method": request.get("method") or "GET",
            "url": request.get("url"),
            "multiValueQueryString": request.get("multiValueQueryString"),
        },
        "request_identifier": seed.get("request_identifier") or seed.get("parcel_id") or "",
    }


def load_seed():
    return read_json("property_seed.json") or {}


def load_unnormalized_address():
    return read_json("unnormalized_address.json") or {}


def read_input_html():
    """Read input.html, or the single <parcel>.html in the working directory"""
    if os.path.exists("input.html"):
        path = "input.html"
    else:
        candidates = sorted(f for f in os.listdir(".") if f.endswith(".html"))
        if not candidates:
            raise FileNotFoundError("input.html not found in working directory")
        path = candidates[0]
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        return f.read()
