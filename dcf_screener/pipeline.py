#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Valuation pipeline: load -> match -> valuate -> rank, once per request.

Per-company problems become skips on the diagnostics channel. Anything else
that goes wrong aborts the request with a single ValuationFailedError.
"""

import math
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from .data.loader import DataSources, Datasets, load_datasets
from .data.matcher import MatchedCompany, match_companies
from .dcf.logic import valuate
from .dcf.ranking import build_result, rank_valuations
from .utils import (
    get_logger, Diagnostics, SkipReason, SkippedCompany,
    InvalidParameterError, NonFiniteValuationError, UndefinedFormulaError,
    ValuationFailedError,
)

logger = get_logger(__name__)


class ValuationRun(NamedTuple):
    results: List[Dict[str, Any]]
    skipped: List[SkippedCompany]


def validate_parameters(desired_return: float, margin_of_safety: float) -> None:
    """
    Validate request inputs.

    Raises:
        InvalidParameterError: If desired return is not a finite number above -1
            or margin of safety is outside [0, 1)
    """
    if not isinstance(desired_return, (int, float)) or isinstance(desired_return, bool) \
            or not math.isfinite(desired_return) or desired_return <= -1:
        raise InvalidParameterError("desired_return", desired_return, "must be a finite number > -1")
    if not isinstance(margin_of_safety, (int, float)) or isinstance(margin_of_safety, bool) \
            or not math.isfinite(margin_of_safety) or not (0 <= margin_of_safety < 1):
        raise InvalidParameterError("margin_of_safety", margin_of_safety, "must be in [0, 1)")


def value_companies(
    companies: Sequence[MatchedCompany],
    desired_return: float,
    margin_of_safety: float,
    diagnostics: Diagnostics,
) -> List[Dict[str, Any]]:
    """Valuate every matched company, skipping those where r ≤ g or the value overflows."""
    results = []
    for c in companies:
        try:
            adjusted = valuate(c.free_cash_flows, desired_return, c.growth_rate, margin_of_safety)
        except UndefinedFormulaError as e:
            diagnostics.skip(c.company, SkipReason.UNDEFINED_FORMULA, e.message)
            continue
        except NonFiniteValuationError as e:
            diagnostics.skip(c.company, SkipReason.NON_FINITE_VALUE, e.message)
            continue
        results.append(build_result(c.company, adjusted, c.market_value))
    return results


def compute_valuations(
    desired_return: float,
    margin_of_safety: float,
    datasets: Optional[Datasets] = None,
    sources: Optional[DataSources] = None,
    on_missing_source: Optional[str] = None,
    duplicates: Optional[str] = None,
) -> ValuationRun:
    """
    Rank companies by margin-adjusted DCF value against market value.

    Args:
        desired_return: Discount rate (decimal)
        margin_of_safety: Fractional haircut on intrinsic value, in [0, 1)
        datasets: Pre-loaded tables; loaded from `sources` when None
        sources: File locations; configuration defaults when None
        on_missing_source: "skip" or "fail" for absent sheets
        duplicates: "first" or "fail" for repeated company names

    Returns:
        ValuationRun with ranked results and skipped companies

    Raises:
        InvalidParameterError: Bad desired return or margin of safety
        ValuationFailedError: Any load, join or valuation failure
    """
    validate_parameters(desired_return, margin_of_safety)
    logger.info(
        f"Computing valuations: desired_return={desired_return}, "
        f"margin_of_safety={margin_of_safety}"
    )

    diagnostics = Diagnostics(logger)
    try:
        if datasets is None:
            datasets = load_datasets(sources, on_missing_source)
        matched = match_companies(
            datasets.cash_flows, datasets.growth_rates, datasets.market_values,
            diagnostics, duplicates,
        )
        results = rank_valuations(
            value_companies(matched, desired_return, margin_of_safety, diagnostics)
        )
    except Exception as e:
        logger.error(f"Valuation failed: {type(e).__name__}: {e}", exc_info=True)
        raise ValuationFailedError(f"{type(e).__name__}: {e}") from e

    logger.info(f"Valued {len(results)} companies, skipped {len(diagnostics)}")
    return ValuationRun(results, list(diagnostics))
