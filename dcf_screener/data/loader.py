#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data loading module: spreadsheet and delimited-text readers for the three
valuation inputs (free cash flows, perpetual growth rates, market values).
Each table is returned as a list of raw records keyed by header name.
"""

from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

import pandas as pd

from ..utils import get_logger, DatasetUnavailableError
from ..utils.config import (
    CASH_FLOW_FILE, CASH_FLOW_SHEET, GROWTH_RATE_FILE, GROWTH_RATE_SHEET,
    MARKET_VALUE_FILE, MARKET_VALUE_SHEET, ON_MISSING_SOURCE, SOURCE_POLICIES,
    EXCEL_SUFFIXES, DELIMITED_SUFFIXES,
)

logger = get_logger(__name__)

Record = Dict[str, Any]


class DataSources(NamedTuple):
    cash_flow_path: str
    growth_rate_path: str
    market_value_path: str
    cash_flow_sheet: Optional[str] = None
    growth_rate_sheet: Optional[str] = None
    market_value_sheet: Optional[str] = None


class Datasets(NamedTuple):
    cash_flows: List[Record]
    growth_rates: List[Record]
    market_values: List[Record]


def default_sources() -> DataSources:
    """Data sources as named by the environment configuration."""
    return DataSources(
        cash_flow_path=CASH_FLOW_FILE,
        growth_rate_path=GROWTH_RATE_FILE,
        market_value_path=MARKET_VALUE_FILE,
        cash_flow_sheet=CASH_FLOW_SHEET,
        growth_rate_sheet=GROWTH_RATE_SHEET,
        market_value_sheet=MARKET_VALUE_SHEET,
    )


def _frame_to_records(df: pd.DataFrame) -> List[Record]:
    """Convert rows to dicts, leaving out empty cells entirely."""
    records = []
    for row in df.to_dict(orient="records"):
        records.append({
            str(k): v for k, v in row.items()
            if not (v is None or (isinstance(v, float) and pd.isna(v)))
        })
    return records


def read_excel_sheet(
    path: str, sheet_name: Optional[str], on_missing_source: str = ON_MISSING_SOURCE
) -> List[Record]:
    """
    Read one named sheet of a workbook.

    Args:
        path: Workbook path
        sheet_name: Sheet to read (first sheet if None)
        on_missing_source: "skip" returns [] when the sheet is absent, "fail" raises

    Returns:
        List of records, one per data row

    Raises:
        DatasetUnavailableError if the workbook cannot be read, or the sheet is
        absent under the "fail" policy
    """
    if on_missing_source not in SOURCE_POLICIES:
        raise ValueError(f"on_missing_source must be one of {SOURCE_POLICIES}, got {on_missing_source!r}")

    logger.info(f"Reading workbook: {path}")
    try:
        with pd.ExcelFile(path) as workbook:
            logger.debug(f"Workbook sheets: {workbook.sheet_names}")
            if sheet_name is None:
                sheet_name = workbook.sheet_names[0]
            if sheet_name not in workbook.sheet_names:
                if on_missing_source == "fail":
                    raise DatasetUnavailableError(path, f"sheet '{sheet_name}' not found")
                logger.error(f"Sheet {sheet_name} not found in file {path}")
                return []
            df = workbook.parse(sheet_name)
    except DatasetUnavailableError:
        raise
    except FileNotFoundError as e:
        raise DatasetUnavailableError(path, "file not found") from e
    except Exception as e:
        raise DatasetUnavailableError(path, f"{type(e).__name__}: {e}") from e

    records = _frame_to_records(df)
    logger.info(f"Loaded {len(records):,} rows from {path} [{sheet_name}]")
    return records


def read_delimited(path: str, sep: Optional[str] = None) -> List[Record]:
    """
    Read a delimited text file whose header row names the fields.
    Values are kept as strings so formatted numbers reach the matcher untouched.
    """
    if sep is None:
        sep = DELIMITED_SUFFIXES.get(Path(path).suffix.lower(), ",")

    try:
        df = pd.read_csv(
            path, sep=sep, dtype=str, keep_default_na=False, encoding="utf-8-sig"
        )
    except FileNotFoundError as e:
        raise DatasetUnavailableError(path, "file not found") from e
    except pd.errors.EmptyDataError:
        logger.warning(f"Delimited file is empty: {path}")
        return []
    except Exception as e:
        raise DatasetUnavailableError(path, f"{type(e).__name__}: {e}") from e

    records = df.to_dict(orient="records")
    logger.info(f"Loaded {len(records):,} rows from CSV: {path}")
    return records


def load_table(
    path: str, sheet_name: Optional[str] = None, on_missing_source: str = ON_MISSING_SOURCE
) -> List[Record]:
    """Read a table, picking the reader from the file suffix."""
    suffix = Path(path).suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return read_excel_sheet(path, sheet_name, on_missing_source)
    if suffix in DELIMITED_SUFFIXES:
        return read_delimited(path, DELIMITED_SUFFIXES[suffix])
    raise DatasetUnavailableError(path, f"unsupported file type '{suffix}'")


def load_datasets(
    sources: Optional[DataSources] = None, on_missing_source: Optional[str] = None
) -> Datasets:
    """
    Load all three valuation inputs.
    Returns only after every table is fully read.
    """
    sources = sources or default_sources()
    policy = on_missing_source or ON_MISSING_SOURCE

    cash_flows = load_table(sources.cash_flow_path, sources.cash_flow_sheet, policy)
    growth_rates = load_table(sources.growth_rate_path, sources.growth_rate_sheet, policy)
    market_values = load_table(sources.market_value_path, sources.market_value_sheet, policy)

    logger.debug(f"Free Cash Flow Data: {cash_flows}")
    logger.debug(f"Perpetual Growth Rates: {growth_rates}")
    logger.debug(f"Market Values: {market_values}")

    return Datasets(cash_flows, growth_rates, market_values)
