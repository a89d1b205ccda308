#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Ranking module: presentation rounding, undervalued classification and
ordering of valued companies.
"""

from typing import Any, Dict, Iterable, List

def build_result(company: str, adjusted_value: float, market_value: float) -> Dict[str, Any]:
    """
    Result row for one company. Both values are rounded to 2 decimals and the
    undervalued flag compares the rounded values (equal is not undervalued).
    """
    intrinsic = round(float(adjusted_value), 2)
    market = round(float(market_value), 2)
    return {
        "company": company,
        "intrinsic_value": intrinsic,
        "market_value": market,
        "undervalued": intrinsic > market,
    }

def rank_valuations(results: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Sort by intrinsic value, highest first; ties keep their input order."""
    # sorted() is stable, reverse=True included
    return sorted(results, key=lambda r: r["intrinsic_value"], reverse=True)
