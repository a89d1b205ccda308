"""DCF Undervaluation Screener - Modular Architecture

Modules:
  - dcf_screener.data: Dataset loading and company matching
  - dcf_screener.dcf: DCF valuation engine and ranking
  - dcf_screener.pipeline: Load -> match -> valuate -> rank
  - dcf_screener.utils: Configuration, logging, errors, diagnostics
  - dcf_screener.api: FastAPI server
"""

from . import dcf, data, utils
from .pipeline import compute_valuations, ValuationRun

__all__ = ["dcf", "data", "utils", "compute_valuations", "ValuationRun"]
