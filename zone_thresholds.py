#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
zone_thresholds.py — how many validators it takes to compromise each zone.

Cache-or-fetch: when the snapshot file exists it is used as-is and no request
is made; otherwise every zone is fetched (sequentially, ~1s apart) and the
snapshot file is written for the next run. Either way the quorum report is
printed and written to CSV.

Config via env (with sensible defaults), overridable on the command line:
  ZT_ZONES_FILE=./zones.json
  ZT_DATA_FILE=zonesdata.json
  ZT_CSV_FILE=zones-security-thresholds.csv
  ZT_API_TEMPLATE=https://api-{id}.cosmostation.io/v1/
  ZT_TIMEOUT=30   ZT_COOLDOWN=1.0
  DEBUG=1 to see request-level logs
"""

import os, sys, argparse
from typing import Dict, Any, List, Optional

from snapshots import log, load_zones, select_zones, collect_zones, ZONES_FILE
from snapshot_cache import cache_exists, load_snapshots, save_snapshots, DATA_FILE
from shares import InvalidInput
from quorum import analyze_zone, resolve_threshold, LIVENESS_THRESHOLD
import report

CSV_FILE = os.environ.get("ZT_CSV_FILE", "zones-security-thresholds.csv")

def get_snapshots(zones: List[Dict[str, str]], data_file: str, session=None) -> List[Dict[str, Any]]:
    if cache_exists(data_file):
        log("INFO", f"Previously generated data file detected ({data_file}), using it instead of fetching data …")
        return load_snapshots(data_file)

    log("INFO", f"Collecting zones data for {len(zones)} zones …")
    snaps = collect_zones(list(zones), session=session)
    if not save_snapshots(data_file, snaps):
        log("WARN", "Continuing without a snapshot cache.")
    return snaps

def analyze(snaps: List[Dict[str, Any]], threshold: float, sort: bool = True) -> List[Dict[str, Any]]:
    results, failed = [], []
    for snap in snaps:
        try:
            results.append(analyze_zone(snap, threshold, sort=sort))
        except InvalidInput as e:
            log("ERROR", f"[ERR] {e}")
            failed.append(snap["zone"]["name"])
    if failed:
        log("WARN", f"Zones left out of the report: {failed}")
    return results

def run(zones: List[Dict[str, str]],
        data_file: str = DATA_FILE,
        csv_file: str = CSV_FILE,
        threshold: float = LIVENESS_THRESHOLD,
        summary_file: Optional[str] = None,
        session=None,
        sort: bool = True) -> List[Dict[str, Any]]:
    snaps = get_snapshots(zones, data_file, session=session)
    log("INFO", f"Analyzing {len(snaps)} zones at threshold={threshold}% (sort={'on' if sort else 'off'})")
    results = analyze(snaps, threshold, sort=sort)
    report.emit(results, csv_file, summary_file)
    return results

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Number of validators that could compromise each zone")
    ap.add_argument("--zones", default=ZONES_FILE, help="zone list JSON file")
    ap.add_argument("--data", default=DATA_FILE, help="snapshot cache file")
    ap.add_argument("--csv", default=CSV_FILE, help="quorum members CSV output")
    ap.add_argument("--summary", default="", help="optional per-zone summary CSV output")
    ap.add_argument("--threshold", default="liveness", help="'liveness' (33.33), 'safety' (66.66) or a percentage")
    ap.add_argument("--only", default=None, help="comma-separated zone ids to run")
    ap.add_argument("--skip", default=None, help="comma-separated zone ids to skip")
    ap.add_argument("--no-sort", action="store_true", help="walk validators in API order instead of by share")
    ap.add_argument("--refresh", action="store_true", help="delete the snapshot cache first and fetch fresh data")
    args = ap.parse_args(argv)

    try:
        threshold = resolve_threshold(args.threshold)
    except ValueError as e:
        ap.error(str(e))

    only = set(x.strip() for x in args.only.split(",")) if args.only else None
    skip = set(x.strip() for x in args.skip.split(",")) if args.skip else set()

    try:
        zones = select_zones(load_zones(args.zones), only, skip)
        if args.refresh and cache_exists(args.data):
            os.remove(args.data)
            log("INFO", f"Removed snapshot cache {args.data}")
        run(zones, args.data, args.csv, threshold, args.summary or None, sort=not args.no_sort)
    except (RuntimeError, OSError) as e:
        log("ERROR", str(e))
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
