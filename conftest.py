#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared fixtures: small cash-flow / growth-rate / market-value tables written
to a temporary directory in the same formats the service reads in production.
"""

import numpy as np
import pandas as pd
import pytest

from dcf_screener.data.loader import DataSources
from dcf_screener.utils.config import FCF_COLUMNS

# 100 per year at r=0.10, g=0.02 is worth ~1106.02 before the margin of safety
FLAT_100 = [100.0] * 10


def cash_flow_row(company, flows):
    return {"Company": company, **dict(zip(FCF_COLUMNS, flows))}


@pytest.fixture
def cash_flow_rows():
    gamma = [100.0] * 10
    gamma[6] = np.nan  # Year 7 FCF left blank
    return [
        cash_flow_row("Beta", [50.0] * 10),
        cash_flow_row("Alpha", FLAT_100),
        cash_flow_row("Gamma", gamma),
        cash_flow_row("Delta", FLAT_100),
        cash_flow_row("Epsilon", FLAT_100),
        cash_flow_row("Zeta", FLAT_100),
    ]


@pytest.fixture
def growth_rate_rows():
    return [
        {"Company": "Alpha", "Rate": 0.02},
        {"Company": "Beta", "Rate": 0.02},
        {"Company": "Gamma", "Rate": 0.02},
        {"Company": "Epsilon", "Rate": 0.02},
        {"Company": "Zeta", "Rate": 0.12},
    ]


@pytest.fixture
def market_value_rows():
    return [
        {"Company": "Alpha", "MarketValue": "1,000.00"},
        {"Company": "Beta", "MarketValue": "600"},
        {"Company": "Gamma", "MarketValue": "10"},
        {"Company": "Delta", "MarketValue": "10"},
        {"Company": "Zeta", "MarketValue": "10"},
    ]


@pytest.fixture
def data_files(tmp_path, cash_flow_rows, growth_rate_rows, market_value_rows):
    """Write the three tables to disk and return their DataSources."""
    cash_flow_path = tmp_path / "companies_full_list.xlsx"
    growth_rate_path = tmp_path / "perpetual_growth_rate.xlsx"
    market_value_path = tmp_path / "ftse250_companies.csv"

    pd.DataFrame(cash_flow_rows).to_excel(cash_flow_path, sheet_name="Sheet1", index=False)
    pd.DataFrame(growth_rate_rows).to_excel(growth_rate_path, sheet_name="Sheet1", index=False)
    pd.DataFrame(market_value_rows).to_csv(market_value_path, index=False)

    return DataSources(
        cash_flow_path=str(cash_flow_path),
        growth_rate_path=str(growth_rate_path),
        market_value_path=str(market_value_path),
        cash_flow_sheet="Sheet1",
        growth_rate_sheet="Sheet1",
    )
