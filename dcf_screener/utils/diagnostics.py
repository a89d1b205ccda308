#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Diagnostics channel: collects the companies dropped during a valuation run
and why, so callers can inspect skips without scraping console output.
"""

from enum import Enum
from typing import Iterator, List, NamedTuple, Optional
import logging

from .logger import get_logger


class SkipReason(str, Enum):
    MISSING_COMPANY_NAME = "missing_company_name"
    MISSING_CASH_FLOW = "missing_cash_flow"
    MALFORMED_NUMERIC = "malformed_numeric"
    MISSING_GROWTH_RATE = "missing_growth_rate"
    MISSING_MARKET_VALUE = "missing_market_value"
    UNDEFINED_FORMULA = "undefined_formula"
    NON_FINITE_VALUE = "non_finite_value"


class SkippedCompany(NamedTuple):
    company: str
    reason: SkipReason
    detail: str = ""


class Diagnostics:
    """Per-request collector of skipped companies."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger(__name__)
        self.skipped: List[SkippedCompany] = []

    def skip(self, company: str, reason: SkipReason, detail: str = "") -> None:
        entry = SkippedCompany(str(company), reason, detail)
        self.skipped.append(entry)
        self.logger.warning(f"Skipping {entry.company}: {reason.value} {detail}".rstrip())

    def reasons_for(self, company: str) -> List[SkipReason]:
        return [s.reason for s in self.skipped if s.company == company]

    def __iter__(self) -> Iterator[SkippedCompany]:
        return iter(self.skipped)

    def __len__(self) -> int:
        return len(self.skipped)
