#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Per-validator percentage shares of a zone's bonded stake.
"""

from typing import Dict, Any, List

from snapshots import dbg

class InvalidInput(ValueError):
    pass

def compute_shares(snap: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    percentage_share = tokens / bonded_tokens * 100, input order kept.

    int / int is a correctly rounded true division, so stake amounts far
    beyond 2**53 lose nothing before the final float.
    A snapshot without 'validators' (validator fetch failed) yields [].
    """
    name = snap["zone"]["name"]
    bonded = snap["bonded_tokens"]
    if bonded <= 0:
        raise InvalidInput(f"{name}: bonded_tokens={bonded}, cannot compute shares")

    vals = snap.get("validators")
    if vals is None:
        dbg(f"{name}: no validator set in snapshot, treating as empty")
        vals = []

    out = []
    for v in vals:
        out.append({
            "moniker": v["moniker"],
            "tokens": v["tokens"],
            "percentage_share": (v["tokens"] / bonded) * 100,
        })
    dbg(f"{name}: shares={len(out)} sum={share_sum(out):.9f}")
    return out

def share_sum(shares: List[Dict[str, Any]]) -> float:
    return sum(s["percentage_share"] for s in shares)
