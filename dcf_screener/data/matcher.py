#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Company matching module: joins free-cash-flow, growth-rate and market-value
records on the exact company name and coerces their fields to numbers.

Companies with incomplete or unparseable data are skipped and reported on the
diagnostics channel; they never abort the join.
"""

from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..utils import (
    get_logger, Diagnostics, SkipReason, DuplicateCompanyError, MalformedNumericError,
)
from ..utils.config import (
    COMPANY_COLUMN, FCF_COLUMNS, RATE_COLUMN, MARKET_VALUE_COLUMN,
    DUPLICATE_POLICY, DUPLICATE_POLICIES,
)

logger = get_logger(__name__)


class MatchedCompany(NamedTuple):
    company: str
    free_cash_flows: Tuple[float, ...]
    growth_rate: float
    market_value: float


def parse_number(value: Any, field: Optional[str] = None) -> float:
    """
    Coerce a raw cell to a finite float.

    Native numbers pass through; strings are coerced with pandas (surrounding
    whitespace allowed). Booleans, blanks, NaN and infinities are rejected.

    Raises:
        MalformedNumericError
    """
    if value is None or isinstance(value, (bool, np.bool_)) or not pd.api.types.is_scalar(value):
        raise MalformedNumericError(value, field)

    if isinstance(value, str):
        value = value.strip()
    number = float(pd.to_numeric(value, errors="coerce"))

    if not np.isfinite(number):
        raise MalformedNumericError(value, field)
    return number


def parse_market_value(value: Any) -> float:
    """Parse a market value, dropping thousands-separator commas ("1,234.5" -> 1234.5)."""
    if isinstance(value, str):
        value = value.replace(",", "")
    return parse_number(value, MARKET_VALUE_COLUMN)


def index_by_company(
    records: Sequence[Dict[str, Any]], source: str, duplicates: str = DUPLICATE_POLICY
) -> Dict[Any, Dict[str, Any]]:
    """
    Build a company-name lookup for one table.

    Args:
        records: Raw table rows
        source: Table name, for messages
        duplicates: "first" keeps the first row per company, "fail" raises

    Raises:
        DuplicateCompanyError under the "fail" policy
    """
    if duplicates not in DUPLICATE_POLICIES:
        raise ValueError(f"duplicates must be one of {DUPLICATE_POLICIES}, got {duplicates!r}")

    index: Dict[Any, Dict[str, Any]] = {}
    for record in records:
        name = record.get(COMPANY_COLUMN)
        if name is None:
            continue
        if name in index:
            if duplicates == "fail":
                raise DuplicateCompanyError(source, name)
            logger.warning(f"Duplicate company '{name}' in {source} data; keeping first row")
            continue
        index[name] = record
    return index


def match_companies(
    cash_flows: Sequence[Dict[str, Any]],
    growth_rates: Sequence[Dict[str, Any]],
    market_values: Sequence[Dict[str, Any]],
    diagnostics: Optional[Diagnostics] = None,
    duplicates: Optional[str] = None,
) -> List[MatchedCompany]:
    """
    Join the three tables on company name.

    Returns:
        One MatchedCompany per cash-flow row with complete, parseable data and
        a match in both lookup tables, in cash-flow order
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    duplicates = duplicates or DUPLICATE_POLICY

    rates_by_company = index_by_company(growth_rates, "growth rate", duplicates)
    values_by_company = index_by_company(market_values, "market value", duplicates)

    matched: List[MatchedCompany] = []
    for row_no, record in enumerate(cash_flows, start=1):
        name = record.get(COMPANY_COLUMN)
        if name is None:
            diagnostics.skip(f"<row {row_no}>", SkipReason.MISSING_COMPANY_NAME)
            continue
        logger.debug(f"Processing company: {name}")

        missing = [col for col in FCF_COLUMNS if col not in record]
        if missing:
            diagnostics.skip(name, SkipReason.MISSING_CASH_FLOW, ", ".join(missing))
            continue

        try:
            flows = tuple(parse_number(record[col], col) for col in FCF_COLUMNS)
        except MalformedNumericError as e:
            diagnostics.skip(name, SkipReason.MALFORMED_NUMERIC, e.message)
            continue

        rate_row = rates_by_company.get(name)
        if rate_row is None or RATE_COLUMN not in rate_row:
            diagnostics.skip(name, SkipReason.MISSING_GROWTH_RATE)
            continue
        try:
            growth_rate = parse_number(rate_row[RATE_COLUMN], RATE_COLUMN)
        except MalformedNumericError as e:
            diagnostics.skip(name, SkipReason.MALFORMED_NUMERIC, e.message)
            continue

        value_row = values_by_company.get(name)
        if value_row is None or MARKET_VALUE_COLUMN not in value_row:
            diagnostics.skip(name, SkipReason.MISSING_MARKET_VALUE)
            continue
        try:
            market_value = parse_market_value(value_row[MARKET_VALUE_COLUMN])
        except MalformedNumericError as e:
            diagnostics.skip(name, SkipReason.MALFORMED_NUMERIC, e.message)
            continue

        matched.append(MatchedCompany(str(name), flows, growth_rate, market_value))

    logger.info(f"Matched {len(matched)} of {len(cash_flows)} companies")
    return matched
