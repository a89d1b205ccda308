#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Interactive DCF undervaluation screener.

Reads the free-cash-flow workbook, the perpetual growth-rate workbook and the
market-value CSV named in the configuration, values every company with
complete data and prints the ranking:

  Intrinsic = Σ FCF_t / (1+r)^t  (t = 1..10)
            + [FCF_10 × (1+g) / (r − g)] / (1+r)^10
  Adjusted  = Intrinsic × (1 − margin of safety)
  Undervalued if Adjusted > market value
"""

import sys
from typing import Optional

import pandas as pd

from dcf_screener.pipeline import compute_valuations
from dcf_screener.utils import InvalidParameterError, ValuationFailedError
from dcf_screener.utils.config import DEFAULT_DESIRED_RETURN, DEFAULT_MARGIN_OF_SAFETY


# ----------------------------- prompt helpers -----------------------------
def prompt_str(msg: str, default: Optional[str] = None) -> str:
    try:
        s = input(f"{msg}{' [' + default + ']' if default is not None else ''}: ").strip()
    except EOFError:
        s = ""
    return s if s else (default or "")

def prompt_float(msg: str, default: float, low: float, high: float, low_inclusive: bool) -> float:
    """Prompt until the value is in range; Enter keeps the default."""
    while True:
        try:
            s = input(f"{msg} [default {default:.4f}]: ").strip()
        except EOFError:
            return default
        if s == "":
            return default
        try:
            v = float(s)
        except ValueError:
            print("Invalid number.")
            continue
        above_low = v >= low if low_inclusive else v > low
        if above_low and v < high:
            return v
        print(f"Value must be in {'[' if low_inclusive else '('}{low}, {high}).")


# ----------------------------------- main -----------------------------------
def main():
    print("\n--- Enter screening inputs (decimals; press Enter to use default) ---")
    desired_return = prompt_float("Desired return (discount rate)", DEFAULT_DESIRED_RETURN, -1.0, float("inf"), False)
    margin_of_safety = prompt_float("Margin of safety", DEFAULT_MARGIN_OF_SAFETY, 0.0, 1.0, True)

    try:
        run = compute_valuations(desired_return, margin_of_safety)
    except (InvalidParameterError, ValuationFailedError) as e:
        print(f"Valuation failed: {e.message}")
        sys.exit(1)

    print("\n--- Ranking ---")
    if not run.results:
        print("No company had complete data.")
    else:
        table = pd.DataFrame(run.results)
        table["undervalued"] = table["undervalued"].map({True: "Yes", False: "No"})
        print(table.to_string(index=False, float_format=lambda x: f"{x:,.2f}"))

    if run.skipped:
        print(f"\n--- Skipped ({len(run.skipped)}) ---")
        for s in run.skipped:
            print(f"{s.company}: {s.reason.value} {s.detail}".rstrip())

    if run.results:
        save = prompt_str("\nSave ranking to CSV? (y/n)", "n").lower() in ("y", "yes", "1")
        if save:
            outp = prompt_str("Output CSV path", "dcf_ranking_output.csv")
            pd.DataFrame(run.results).to_csv(outp, index=False)
            print(f"Saved: {outp}")

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
