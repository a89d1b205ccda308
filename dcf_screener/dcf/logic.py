#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DCF valuation engine: core financial logic for intrinsic value computation.
Discounts an explicit free-cash-flow horizon, adds a perpetuity-growth
terminal value, and applies a margin of safety.
"""

from typing import Any, Dict, Sequence
import numpy as np

from ..utils import (
    get_logger, InvalidParameterError, NonFiniteValuationError, UndefinedFormulaError,
)

logger = get_logger(__name__)

def present_value(cash_flows: Sequence[float], discount_rate: float) -> float:
    """
    Sum of cash flows discounted at (1 + r)^t for t = 1..N.

    Args:
        cash_flows: Free cash flows for periods 1..N
        discount_rate: Required return (decimal)

    Returns:
        Present value of the explicit horizon
    """
    flows = np.asarray(cash_flows, dtype=float)
    periods = np.arange(1, len(flows) + 1)
    with np.errstate(over="ignore", invalid="ignore"):
        return float(np.sum(flows / (1.0 + discount_rate) ** periods))

def terminal_value(final_cash_flow: float, discount_rate: float, growth_rate: float) -> float:
    """
    Gordon-growth value at t=N of all flows after the horizon: CF_N × (1+g) / (r − g).

    Raises:
        UndefinedFormulaError: If r ≤ g
    """
    if discount_rate <= growth_rate:
        raise UndefinedFormulaError(discount_rate, growth_rate)
    return final_cash_flow * (1.0 + growth_rate) / (discount_rate - growth_rate)

def apply_margin_of_safety(value: float, margin_of_safety: float) -> float:
    """Haircut intrinsic value by the margin of safety, which must be in [0, 1)."""
    if not (0.0 <= margin_of_safety < 1.0):
        raise InvalidParameterError("margin_of_safety", margin_of_safety, "must be in [0, 1)")
    return value * (1.0 - margin_of_safety)

def run_dcf(
    cash_flows: Sequence[float],
    discount_rate: float,
    growth_rate: float,
    margin_of_safety: float = 0.0,
) -> Dict[str, Any]:
    """
    Run DCF valuation over an explicit cash-flow horizon.

    Args:
        cash_flows: Free cash flows for periods 1..N
        discount_rate: Required return (decimal)
        growth_rate: Perpetual growth rate after period N (decimal)
        margin_of_safety: Fractional haircut on intrinsic value

    Returns:
        Dict with PV of the horizon, terminal value (undiscounted and PV),
        intrinsic value and margin-adjusted value

    Raises:
        ValueError: If no cash flows are given
        UndefinedFormulaError: If r ≤ g
        NonFiniteValuationError: If the value overflows to inf or NaN
    """
    n = len(cash_flows)
    if n == 0:
        raise ValueError("At least one cash flow is required.")

    sum_pv_fcf = present_value(cash_flows, discount_rate)

    # ===== Terminal Value =====
    tv_tn = terminal_value(float(cash_flows[-1]), discount_rate, growth_rate)
    with np.errstate(over="ignore", invalid="ignore"):
        pv_tv = float(tv_tn / np.float64(1.0 + discount_rate) ** n)

    intrinsic = sum_pv_fcf + pv_tv
    if not np.isfinite(intrinsic):
        raise NonFiniteValuationError(intrinsic)
    adjusted = apply_margin_of_safety(intrinsic, margin_of_safety)

    logger.debug(
        f"DCF computed: intrinsic value {intrinsic:.2f} "
        f"(PV(FCF)={sum_pv_fcf:.2f}, PV(TV)={pv_tv:.2f}), adjusted {adjusted:.2f}"
    )

    return {
        "periods": n,
        "sum_pv_fcf": sum_pv_fcf,
        "terminal_value": tv_tn,
        "pv_terminal_value": pv_tv,
        "intrinsic_value": intrinsic,
        "adjusted_value": adjusted,
    }

def valuate(
    cash_flows: Sequence[float],
    discount_rate: float,
    growth_rate: float,
    margin_of_safety: float,
) -> float:
    """Margin-adjusted intrinsic value for one company."""
    return run_dcf(cash_flows, discount_rate, growth_rate, margin_of_safety)["adjusted_value"]
