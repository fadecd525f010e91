#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Flat-file cache of raw zone snapshots.

Stake amounts are arbitrary-size ints in memory and decimal strings on disk,
so nothing goes through a float on the way in or out.
"""

import os, json
from typing import Dict, Any, List

from snapshots import log, dbg, parse_amount, parse_validator

DATA_FILE = os.environ.get("ZT_DATA_FILE", "zonesdata.json")

INT_FIELDS = ("bonded_tokens", "not_bonded_tokens")

class CacheError(RuntimeError):
    pass

# ----------------------------- codec ----------------------------------------
def encode_snapshot(snap: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(snap)
    for k in INT_FIELDS:
        out[k] = str(snap[k])
    if "validators" in snap:
        out["validators"] = [{"moniker": v["moniker"], "tokens": str(v["tokens"])} for v in snap["validators"]]
    return out

def decode_snapshot(raw: Dict[str, Any]) -> Dict[str, Any]:
    zone = raw["zone"]
    if not isinstance(zone, dict) or not all(isinstance(zone.get(k), str) for k in ("id", "name")):
        raise ValueError(f"zone must have string id and name: {zone!r}")
    n = raw["total_validator_num"]
    if not isinstance(n, int) or isinstance(n, bool) or n < 0:
        raise ValueError(f"bad total_validator_num: {n!r}")
    out = dict(raw)
    for k in INT_FIELDS:
        out[k] = parse_amount(raw[k])
    if "validators" in raw:
        if not isinstance(raw["validators"], list):
            raise ValueError("validators is not a list")
        out["validators"] = [parse_validator(v) for v in raw["validators"]]
    return out

def encode_snapshots(snaps: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [encode_snapshot(s) for s in snaps]

def decode_snapshots(raw: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [decode_snapshot(s) for s in raw]

# ----------------------------- file ops -------------------------------------
def cache_exists(path: str = DATA_FILE) -> bool:
    return os.path.isfile(path)

def load_snapshots(path: str = DATA_FILE) -> List[Dict[str, Any]]:
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        raise CacheError(f"Cannot read snapshot cache {path}: {e}") from e
    if not isinstance(raw, list):
        raise CacheError(f"Snapshot cache {path} is not a JSON array")
    try:
        snaps = decode_snapshots(raw)
    except (KeyError, TypeError, ValueError) as e:
        raise CacheError(f"Malformed snapshot in {path}: {e!r}") from e
    dbg(f"Loaded {len(snaps)} snapshots from {path}")
    return snaps

def save_snapshots(path: str, snaps: List[Dict[str, Any]]) -> bool:
    try:
        doc = json.dumps(encode_snapshots(snaps), indent=2, ensure_ascii=False)
        with open(path, "w", encoding="utf-8") as f:
            f.write(doc)
    except (OSError, TypeError, ValueError, KeyError) as e:
        log("ERROR", f"Failed to save zone snapshots to {path}: {e}")
        return False
    log("INFO", f"Zones data is saved locally: {path}")
    return True
