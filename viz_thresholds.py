#!/usr/bin/env python3
# -*- coding: utf-8 -*-
import os, sys, argparse
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

def load_summary(path):
    if not os.path.exists(path):
        print(f"[WARN] summary CSV not found: {path}", file=sys.stderr)
        return None
    df = pd.read_csv(path)
    df["threshold_count"] = pd.to_numeric(df["threshold_count"], errors="coerce")
    return df.dropna(subset=["threshold_count"]).sort_values("threshold_count", kind="stable")

def plot_threshold_bar(summary, title, out_png):
    if summary.empty: return False
    plt.figure()
    plt.bar(summary["zone"], summary["threshold_count"])
    plt.xlabel("Zone")
    plt.ylabel("Validators needed to collude")
    plt.title(title)
    plt.xticks(rotation=30, ha="right")
    plt.grid(True, axis="y", linestyle="--", alpha=0.4)
    plt.tight_layout()
    plt.savefig(out_png, dpi=160)
    plt.close()
    return True

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--summary", required=True, help="summary CSV written by zone_thresholds.py --summary")
    ap.add_argument("--out", default="", help="output PNG (default: next to the summary CSV)")
    ap.add_argument("--title", default="Validators required to compromise each zone")
    args = ap.parse_args(argv)

    df = load_summary(args.summary)
    if df is None:
        return 0
    out_png = args.out or os.path.splitext(args.summary)[0] + ".png"
    if plot_threshold_bar(df, args.title, out_png):
        print(f"[OK] Chart written to: {out_png}")
    else:
        print("[WARN] summary CSV has no zones; nothing to plot", file=sys.stderr)
    return 0

if __name__ == "__main__":
    sys.exit(main())
