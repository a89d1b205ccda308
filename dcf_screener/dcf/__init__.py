"""DCF valuation engine and ranking."""

from .logic import (
    present_value, terminal_value, apply_margin_of_safety, run_dcf, valuate
)
from .ranking import build_result, rank_valuations

__all__ = [
    "present_value", "terminal_value", "apply_margin_of_safety", "run_dcf", "valuate",
    "build_result", "rank_valuations",
]
