#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastAPI service for the DCF undervaluation screener.

Endpoints:
  POST /calculate     {"desiredReturn": 0.10, "marginOfSafety": 0.25}
  GET  /valuations    ?desired_return=0.10&margin_of_safety=0.25
  GET  /health

Behavior:
  - Load the cash-flow, growth-rate and market-value tables per request
  - Value every fully matched company and rank by adjusted intrinsic value
  - Companies with missing or unusable data are skipped, not errors
  - Any other failure is a single 500 "Internal Server Error"
"""

import os
from datetime import date
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field

from ..data.loader import DataSources, default_sources
from ..pipeline import compute_valuations, ValuationRun
from ..utils import get_logger, InvalidParameterError, ValuationFailedError
from ..utils.config import (
    API_HOST, API_PORT, API_RELOAD, STATIC_DIR,
    DEFAULT_DESIRED_RETURN, DEFAULT_MARGIN_OF_SAFETY,
)

logger = get_logger(__name__)

SERVICE_NAME = "DCF Screener API"
SERVICE_VERSION = "1.0.0"

# ============================================================================
# FastAPI App Setup
# ============================================================================

app = FastAPI(
    title=SERVICE_NAME,
    description="Rank companies by margin-adjusted DCF value against market value",
    version=SERVICE_VERSION,
)


# ============================================================================
# Pydantic Models
# ============================================================================


class CalculateRequest(BaseModel):
    """Valuation request body."""

    model_config = ConfigDict(populate_by_name=True)

    desired_return: float = Field(
        ..., gt=-1, alias="desiredReturn",
        description="Discount rate (decimal, e.g., 0.10 = 10%)",
    )
    margin_of_safety: float = Field(
        ..., ge=0, lt=1, alias="marginOfSafety",
        description="Haircut on intrinsic value (decimal, e.g., 0.25 = 25%)",
    )


class ValuationResult(BaseModel):
    """One ranked company."""

    model_config = ConfigDict(populate_by_name=True)

    company: str = Field(..., alias="Company")
    intrinsic_value: float = Field(
        ..., alias="IntrinsicValue", description="Margin-adjusted intrinsic value (2 dp)"
    )
    market_value: float = Field(..., alias="MarketValue", description="Market value (2 dp)")
    undervalued: bool = Field(..., alias="Undervalued")


class SkippedCompanyResponse(BaseModel):
    """A company left out of the ranking."""

    company: str
    reason: str
    detail: str = ""


class ValuationReport(BaseModel):
    """Ranked results plus the companies that were skipped."""

    desired_return: float
    margin_of_safety: float
    valuation_date: date
    results: List[ValuationResult]
    skipped: List[SkippedCompanyResponse]


class ErrorDetail(BaseModel):
    """Error response detail."""

    error_code: str
    error_message: str
    timestamp: str = Field(default_factory=lambda: date.today().isoformat())


# ============================================================================
# Dependencies
# ============================================================================


def get_sources() -> DataSources:
    """Data file locations (override in tests)."""
    return default_sources()


# ============================================================================
# Helper Functions
# ============================================================================


def _run(desired_return: float, margin_of_safety: float, sources: DataSources) -> ValuationRun:
    """Run the pipeline and map its errors to HTTP responses."""
    try:
        return compute_valuations(desired_return, margin_of_safety, sources=sources)
    except InvalidParameterError as e:
        logger.error(f"Invalid parameters: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)
    except ValuationFailedError as e:
        logger.error(f"Error: {e.message}")
        raise HTTPException(status_code=500, detail="Internal Server Error")


def _to_results(run: ValuationRun) -> List[ValuationResult]:
    return [ValuationResult(**row) for row in run.results]


# ============================================================================
# API Endpoints
# ============================================================================


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@app.post(
    "/calculate",
    response_model=List[ValuationResult],
    tags=["Valuation"],
    summary="Rank companies by adjusted intrinsic value",
    responses={
        200: {"description": "Valuation successful"},
        400: {"description": "Invalid parameters"},
        500: {"description": "Internal server error"},
    },
)
def calculate(req: CalculateRequest, sources: DataSources = Depends(get_sources)):
    """
    Value every company with complete data and return them ranked.

    **Example:**
    ```
    POST /calculate
    {"desiredReturn": 0.10, "marginOfSafety": 0.25}
    ```
    """
    logger.info(
        f"=== CALCULATE REQUEST === desired_return={req.desired_return}, "
        f"margin_of_safety={req.margin_of_safety}"
    )
    run = _run(req.desired_return, req.margin_of_safety, sources)
    return _to_results(run)


@app.get("/valuations", response_model=ValuationReport, tags=["Valuation"])
def valuations(
    desired_return: float = Query(
        DEFAULT_DESIRED_RETURN, gt=-1, description="Discount rate (decimal)"
    ),
    margin_of_safety: float = Query(
        DEFAULT_MARGIN_OF_SAFETY, ge=0, lt=1, description="Margin of safety (decimal)"
    ),
    sources: DataSources = Depends(get_sources),
):
    """
    Same ranking as POST /calculate, plus the skipped companies and why.

    Example:
        GET /valuations?desired_return=0.10&margin_of_safety=0.25
    """
    run = _run(desired_return, margin_of_safety, sources)
    return ValuationReport(
        desired_return=desired_return,
        margin_of_safety=margin_of_safety,
        valuation_date=date.today(),
        results=_to_results(run),
        skipped=[
            SkippedCompanyResponse(company=s.company, reason=s.reason.value, detail=s.detail)
            for s in run.skipped
        ],
    )


# ============================================================================
# Exception Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions with structured response."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            **ErrorDetail(
                error_code=f"HTTP_{exc.status_code}",
                error_message=str(exc.detail),
            ).model_dump(),
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle unexpected exceptions with structured response."""
    logger.error(f"Unhandled exception: {type(exc).__name__}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal Server Error",
            **ErrorDetail(
                error_code="INTERNAL_ERROR",
                error_message="Internal Server Error",
            ).model_dump(),
        },
    )


# ============================================================================
# Front end
# ============================================================================

if os.path.isdir(STATIC_DIR):
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")
else:
    @app.get("/", include_in_schema=False)
    def root():
        """Redirect to docs."""
        return RedirectResponse("/docs")


# ============================================================================
# Main
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server is running on http://{API_HOST}:{API_PORT}")
    uvicorn.run(
        "dcf_screener.api.api:app" if API_RELOAD else app,
        host=API_HOST, port=API_PORT, reload=API_RELOAD,
    )
