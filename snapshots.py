#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Zone stake collector for Cosmos-SDK zones, with progress & debug logging.

For every zone in the zone list it fetches, strictly one zone at a time:
  - GET <base>status               -> total_validator_num, bonded/not-bonded tokens
  - GET <base>staking/validators   -> [{moniker, tokens}, ...]

A zone whose status request fails is dropped. A zone whose validator request
fails is kept without a 'validators' key. Token amounts are Python ints.

Logging:
  - INFO: high-level progress, always printed to stdout
  - DEBUG: detailed steps, enabled with env DEBUG=1
"""

import os, sys, json, time
import datetime as dt
from typing import Dict, Any, List, Optional, Callable, Iterable
import requests

# ----------------------------- configuration --------------------------------
UA = {"User-Agent": "zone-security-thresholds/1.0"}
API_TEMPLATE = os.environ.get("ZT_API_TEMPLATE", "https://api-{id}.cosmostation.io/v1/")
TIMEOUT = float(os.environ.get("ZT_TIMEOUT", "30"))
COOLDOWN = float(os.environ.get("ZT_COOLDOWN", "1.0"))
ZONES_FILE = os.environ.get("ZT_ZONES_FILE", os.path.join(os.path.dirname(os.path.abspath(__file__)), "zones.json"))
DEBUG = os.environ.get("DEBUG", "0") == "1"

# ----------------------------- logging helpers ------------------------------
def log(level: str, msg: str):
    ts = dt.datetime.now(dt.timezone.utc).replace(tzinfo=None).isoformat(timespec="seconds") + "Z"
    print(f"[{ts}] {level} {msg}")

def dbg(msg: str):
    if DEBUG:
        log("DEBUG", msg)

# ----------------------------- HTTP helpers ---------------------------------
_session = requests.Session()
_session.headers.update(UA)

def http_get_json(url: str, session: Optional[requests.Session] = None, timeout: float = TIMEOUT) -> Any:
    """Single GET, no retries. Raises requests.RequestException on any failure."""
    s = session or _session
    dbg(f"GET {url}")
    r = s.get(url, timeout=timeout)
    dbg(f" <- {r.status_code} {r.reason}")
    r.raise_for_status()
    try:
        return r.json()
    except ValueError as e:
        raise requests.RequestException(f"invalid JSON from {url}: {e}") from e

def zone_base_url(zone: Dict[str, Any], template: str = API_TEMPLATE) -> str:
    return template.format(**zone)

# ----------------------------- zone list ------------------------------------
def load_zones(path: str = ZONES_FILE) -> List[Dict[str, str]]:
    try:
        with open(path, encoding="utf-8") as f:
            zones = json.load(f)
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Cannot read zone list {path}: {e}") from e
    if not isinstance(zones, list):
        raise RuntimeError(f"Zone list {path} must be a JSON array of {{id, name}} objects")
    out = []
    for z in zones:
        if not isinstance(z, dict) or "id" not in z or "name" not in z:
            raise RuntimeError(f"Zone list {path}: bad entry {z!r}")
        out.append({"id": str(z["id"]), "name": str(z["name"])})
    return out

def select_zones(zones: Iterable[Dict[str, str]], only: Optional[set] = None, skip: Optional[set] = None) -> List[Dict[str, str]]:
    skip = skip or set()
    selected = []
    for z in zones:
        if only is not None and z["id"] not in only:
            continue
        if z["id"] in skip:
            continue
        selected.append(z)
    return selected

# ----------------------------- fetchers -------------------------------------
def parse_amount(v: Any) -> int:
    # unsigned decimal string only: no floats, signs, spaces or underscores
    if not isinstance(v, str) or not (v.isascii() and v.isdigit()):
        raise ValueError(f"not a decimal token amount: {v!r}")
    return int(v)

def parse_validator(d: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(d, dict) or not isinstance(d.get("moniker"), str):
        raise ValueError(f"validator without a string moniker: {str(d)[:200]}")
    return {"moniker": d["moniker"], "tokens": parse_amount(d["tokens"])}

def fetch_zone_status(zone: Dict[str, Any], base: str, session=None, timeout: float = TIMEOUT) -> Dict[str, Any]:
    j = http_get_json(base + "status", session=session, timeout=timeout)
    n = int(j["total_validator_num"])
    if n < 0:
        raise ValueError(f"negative total_validator_num: {n}")
    return {
        "zone": zone,
        "total_validator_num": n,
        "bonded_tokens": parse_amount(j["bonded_tokens"]),
        "not_bonded_tokens": parse_amount(j["not_bonded_tokens"]),
    }

def fetch_zone_validators(base: str, session=None, timeout: float = TIMEOUT) -> List[Dict[str, Any]]:
    j = http_get_json(base + "staking/validators", session=session, timeout=timeout)
    if not isinstance(j, list):
        raise ValueError(f"validator set is not a list: {str(j)[:200]}")
    return [parse_validator(d) for d in j]

# ----------------------------- collector ------------------------------------
FETCH_ERRORS = (requests.RequestException, KeyError, TypeError, ValueError)

def collect_zones(zones: List[Dict[str, Any]],
                  session=None,
                  template: Optional[str] = None,
                  cooldown: float = COOLDOWN,
                  timeout: float = TIMEOUT,
                  sleep: Optional[Callable[[float], None]] = None) -> List[Dict[str, Any]]:
    """
    Drain `zones` (popped from the end) sequentially and return one snapshot
    per zone whose status request succeeded, in processing order.
    """
    total = len(zones)
    out: List[Dict[str, Any]] = []
    while zones:
        zone = zones.pop()
        log("INFO", f"Progress: zone {total - len(zones)}/{total} → retrieving data for {zone['name']}")
        base = zone_base_url(zone, template or API_TEMPLATE)

        try:
            snap = fetch_zone_status(zone, base, session=session, timeout=timeout)
        except FETCH_ERRORS as e:
            log("ERROR", f"[ERR] {zone['name']}: status {base}status: {e}")
            continue

        try:
            snap["validators"] = fetch_zone_validators(base, session=session, timeout=timeout)
        except FETCH_ERRORS as e:
            log("ERROR", f"[ERR] {zone['name']}: validators {base}staking/validators: {e}")
            out.append(snap)
            continue

        out.append(snap)
        log("INFO", f"[OK] {zone['name']} validators={len(snap['validators'])} bonded_tokens={snap['bonded_tokens']}")
        dbg(f"cooling down {cooldown:.1f}s")
        (sleep or time.sleep)(cooldown)

    dropped = total - len(out)
    if dropped:
        log("WARN", f"Collected {len(out)}/{total} zones; {dropped} dropped after status failures.")
    else:
        log("INFO", f"Collected {len(out)}/{total} zones.")
    return out

# --- CLI glue ---
if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Fetch raw zone snapshots into the snapshot cache file")
    parser.add_argument("--zones", default=ZONES_FILE, help="zone list JSON file")
    parser.add_argument("--out", default=os.environ.get("ZT_DATA_FILE", "zonesdata.json"), help="snapshot file to write")
    parser.add_argument("--only", help="comma-separated zone ids to fetch (e.g. 'cosmos,osmosis')", default=None)
    parser.add_argument("--skip", help="comma-separated zone ids to skip", default=None)
    args = parser.parse_args()

    only = set(x.strip() for x in args.only.split(",")) if args.only else None
    skip = set(x.strip() for x in args.skip.split(",")) if args.skip else set()

    try:
        selected = select_zones(load_zones(args.zones), only, skip)
    except RuntimeError as e:
        log("ERROR", str(e))
        sys.exit(1)

    from snapshot_cache import save_snapshots
    save_snapshots(args.out, collect_zones(selected))
