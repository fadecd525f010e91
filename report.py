#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Console and CSV output for collusion quorum results.

Outputs:
  - console: per-zone quorum members, then zones ranked by threshold_count
  - <csv>:     Zone,Staker,Share  (one row per quorum member, CRLF lines)
  - <summary>: zone_id,zone,threshold_count,members,member_share
"""

from typing import Dict, Any, List
import pandas as pd

from snapshots import log

CSV_HEADER = "Zone,Staker,Share"

def format_share(share: float) -> str:
    # three decimals, last one cut off: 12.3456 -> "12.34"
    return f"{share:.3f}"[:-1]

def print_zone_report(result: Dict[str, Any]):
    zone = result["zone"]
    print("")
    print(f"\nNumber of validators required to compromise {zone['name']}: {result['threshold_count']} \n")
    for m in result["members"]:
        print(f" - {m['staker'].strip():.<33} {format_share(m['share']):>5} %")

def ranked(results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(results, key=lambda r: r["threshold_count"])

def print_summary(results: List[Dict[str, Any]]):
    print("\n\n\n Number of validators that could compromise security:\n")
    for r in ranked(results):
        print(f" {(r['zone']['name'] + ':'):<18} {r['threshold_count']:>2}")
    print("")

def csv_rows(results: List[Dict[str, Any]]) -> List[str]:
    rows = [CSV_HEADER]
    for r in results:
        for m in r["members"]:
            staker = m["staker"].strip().replace(",", ";")
            rows.append(f"{r['zone']['name']},{staker},{format_share(m['share'])}")
    return rows

def write_csv(path: str, results: List[Dict[str, Any]]):
    # unquoted fields, CRLF between rows, no trailing newline
    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write("\r\n".join(csv_rows(results)))
    log("INFO", f"Wrote quorum members: {path}")

def summary_frame(results: List[Dict[str, Any]]) -> pd.DataFrame:
    rows = [{
        "zone_id": r["zone"]["id"],
        "zone": r["zone"]["name"],
        "threshold_count": r["threshold_count"],
        "members": len(r["members"]),
        "member_share": round(sum(m["share"] for m in r["members"]), 6),
    } for r in results]
    df = pd.DataFrame(rows, columns=["zone_id", "zone", "threshold_count", "members", "member_share"])
    return df.sort_values("threshold_count", kind="stable").reset_index(drop=True)

def write_summary_csv(path: str, results: List[Dict[str, Any]]):
    summary_frame(results).to_csv(path, index=False)
    log("INFO", f"Wrote summary: {path}")

def emit(results: List[Dict[str, Any]], csv_file: str, summary_file: str = None):
    for r in results:
        print_zone_report(r)
    print_summary(results)
    write_csv(csv_file, results)
    if summary_file:
        write_summary_csv(summary_file, results)
