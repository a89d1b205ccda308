"""Configuration, logging, errors and diagnostics."""

from .logger import get_logger
from .exceptions import (
    ScreenerError, DatasetUnavailableError, DuplicateCompanyError,
    InvalidParameterError, MalformedNumericError, NonFiniteValuationError,
    UndefinedFormulaError, ValuationFailedError,
)
from .diagnostics import Diagnostics, SkipReason, SkippedCompany

__all__ = [
    "get_logger", "Diagnostics", "SkipReason", "SkippedCompany",
    "ScreenerError", "DatasetUnavailableError", "DuplicateCompanyError",
    "InvalidParameterError", "MalformedNumericError", "NonFiniteValuationError",
    "UndefinedFormulaError", "ValuationFailedError",
]
