#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Collusion quorum: the greedy walk over validator shares until a BFT
threshold is crossed.

For the classes of faults that can occur on Tendermint, see
https://blog.cosmos.network/the-4-classes-of-faults-on-mainnet-bfabfbd2726c
"""

from typing import Dict, Any, List, Optional

from shares import compute_shares

LIVENESS_THRESHOLD = 33.33
SAFETY_THRESHOLD = 66.66
THRESHOLDS = {"liveness": LIVENESS_THRESHOLD, "safety": SAFETY_THRESHOLD}

# shares below this (in percent) never join a quorum
NEGLIGIBLE_SHARE = 0.01

def resolve_threshold(raw) -> float:
    key = str(raw).strip().lower()
    if key in THRESHOLDS:
        return THRESHOLDS[key]
    try:
        thr = float(key)
    except ValueError:
        raise ValueError(f"threshold must be 'liveness', 'safety' or a percentage, got {raw!r}")
    if not 0.0 < thr <= 100.0:
        raise ValueError(f"threshold percentage out of range (0, 100]: {thr}")
    return thr

def rank_shares(shares: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(shares, key=lambda s: s["percentage_share"], reverse=True)

def compute_quorum(shares: List[Dict[str, Any]], threshold: float, zone: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Walk `shares` in the given order (expected descending), adding each
    non-negligible share until the cumulative total reaches `threshold`.

    threshold_count is the number of positions walked, negligible entries
    included, so it can exceed len(members).
    """
    cumulative = 0.0
    i = 0
    members = []
    while cumulative < threshold and i < len(shares):
        share = shares[i]["percentage_share"]
        if share < NEGLIGIBLE_SHARE:
            i += 1
            continue
        cumulative += share
        members.append({"staker": shares[i]["moniker"], "share": share})
        i += 1
    return {"zone": zone, "threshold_count": i, "members": members}

def analyze_zone(snap: Dict[str, Any], threshold: float, sort: bool = True) -> Dict[str, Any]:
    shares = compute_shares(snap)
    if sort:
        shares = rank_shares(shares)
    return compute_quorum(shares, threshold, zone=snap["zone"])
