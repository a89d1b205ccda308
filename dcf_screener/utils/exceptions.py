#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exception classes for the valuation pipeline.

Request-level errors (unreadable dataset, duplicate keys under a strict join,
bad parameters) abort the whole request. Per-company errors (malformed numbers,
r <= g, overflow) are caught inside the pipeline and turned into skips.
"""

from typing import Any, Dict, Optional


class ScreenerError(Exception):
    """Base exception with an error code and structured details."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class DatasetUnavailableError(ScreenerError):
    """Raised when a required dataset cannot be read at all."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Dataset {path} is unavailable: {reason}",
            error_code="DATASET_UNAVAILABLE",
            details={"path": path, "reason": reason},
        )


class DuplicateCompanyError(ScreenerError):
    """Raised when a lookup table repeats a company under the strict join policy."""

    def __init__(self, source: str, company: str):
        super().__init__(
            message=f"Duplicate company '{company}' in {source} data",
            error_code="DUPLICATE_COMPANY",
            details={"source": source, "company": company},
        )


class InvalidParameterError(ScreenerError, ValueError):
    """Raised when desired return or margin of safety is out of range."""

    def __init__(self, name: str, value: Any, constraint: str):
        super().__init__(
            message=f"Invalid {name}={value!r}: {constraint}",
            error_code="INVALID_PARAMETER",
            details={"name": name, "value": value, "constraint": constraint},
        )


class MalformedNumericError(ScreenerError, ValueError):
    """Raised when a field cannot be read as a finite number."""

    def __init__(self, value: Any, field: Optional[str] = None):
        where = f" in '{field}'" if field else ""
        super().__init__(
            message=f"Not a finite number{where}: {value!r}",
            error_code="MALFORMED_NUMERIC",
            details={"value": repr(value), "field": field},
        )


class UndefinedFormulaError(ScreenerError, ValueError):
    """Raised when the terminal-value denominator (r - g) is not positive."""

    def __init__(self, discount_rate: float, growth_rate: float):
        super().__init__(
            message=(
                f"Discount rate ({discount_rate}) must exceed perpetual growth "
                f"rate ({growth_rate})"
            ),
            error_code="UNDEFINED_FORMULA",
            details={"discount_rate": discount_rate, "growth_rate": growth_rate},
        )


class NonFiniteValuationError(ScreenerError, ValueError):
    """Raised when a valuation overflows to an infinite or NaN value."""

    def __init__(self, value: float):
        super().__init__(
            message=f"Intrinsic value is not finite: {value}",
            error_code="NON_FINITE_VALUE",
            details={"value": repr(value)},
        )


class ValuationFailedError(ScreenerError):
    """Generic failure of a valuation request."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Valuation request failed: {reason}",
            error_code="VALUATION_FAILED",
            details={"reason": reason},
        )
