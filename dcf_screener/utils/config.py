#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration module: centralize all environment variables and defaults.
Supports easy overrides without modifying code.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# ========== DATA FILE PATHS ==========
BASE_DIR = Path(__file__).parent.parent.parent.resolve()
DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR)))

CASH_FLOW_FILE = os.getenv("CASH_FLOW_FILE", str(DATA_DIR / "companies_full_list.xlsx"))
CASH_FLOW_SHEET = os.getenv("CASH_FLOW_SHEET", "Sheet1")

GROWTH_RATE_FILE = os.getenv("GROWTH_RATE_FILE", str(DATA_DIR / "perpetual_growth_rate.xlsx"))
GROWTH_RATE_SHEET = os.getenv("GROWTH_RATE_SHEET", "Sheet1")

MARKET_VALUE_FILE = os.getenv("MARKET_VALUE_FILE", str(DATA_DIR / "ftse250_companies.csv"))
MARKET_VALUE_SHEET = os.getenv("MARKET_VALUE_SHEET") or None  # only used for spreadsheets

# ========== SOURCE POLICIES ==========
# "skip": a named sheet that is not in the workbook loads as an empty table
# "fail": a missing sheet aborts the request
ON_MISSING_SOURCE = os.getenv("ON_MISSING_SOURCE", "skip").lower()

# "first": duplicate company names keep the first record
# "fail": duplicate company names abort the request
DUPLICATE_POLICY = os.getenv("DUPLICATE_POLICY", "first").lower()

SOURCE_POLICIES = ("skip", "fail")
DUPLICATE_POLICIES = ("first", "fail")

# ========== DCF DEFAULTS ==========
# Fixed input contract: the cash-flow table has exactly Year 1..Year 10 columns
FORECAST_YEARS = 10

DEFAULT_DESIRED_RETURN = float(os.getenv("DEFAULT_DESIRED_RETURN", "0.10"))
DEFAULT_MARGIN_OF_SAFETY = float(os.getenv("DEFAULT_MARGIN_OF_SAFETY", "0.25"))

# ========== LOGGING CONFIGURATION ==========
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s [%(levelname)s] %(name)s: %(message)s")

# ========== API CONFIGURATION ==========
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", os.getenv("PORT", "8080")))
API_RELOAD = os.getenv("API_RELOAD", "False").lower() == "true"
STATIC_DIR = os.getenv("STATIC_DIR", str(BASE_DIR / "public"))

# ========== COLUMN LABELS ==========
COMPANY_COLUMN = "Company"
RATE_COLUMN = "Rate"
MARKET_VALUE_COLUMN = "MarketValue"
FCF_COLUMNS = [f"Year {i} FCF" for i in range(1, FORECAST_YEARS + 1)]

EXCEL_SUFFIXES = (".xlsx", ".xlsm")
DELIMITED_SUFFIXES = {".csv": ",", ".txt": ",", ".tsv": "\t"}

if __name__ == "__main__":
    print("=" * 60)
    print("Configuration Summary")
    print("=" * 60)
    print(f"Cash flows: {CASH_FLOW_FILE} [{CASH_FLOW_SHEET}]")
    print(f"Growth rates: {GROWTH_RATE_FILE} [{GROWTH_RATE_SHEET}]")
    print(f"Market values: {MARKET_VALUE_FILE}")
    print(f"On missing source: {ON_MISSING_SOURCE}")
    print(f"Duplicate policy: {DUPLICATE_POLICY}")
    print(f"Forecast years: {FORECAST_YEARS}")
    print(f"Log Level: {LOG_LEVEL}")
    print(f"API: {API_HOST}:{API_PORT}")
    print("=" * 60)
