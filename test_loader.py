#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for the dataset readers (dcf_screener/data/loader.py).
"""

import pandas as pd
import pytest

from dcf_screener.data.loader import (
    Datasets, load_datasets, load_table, read_delimited, read_excel_sheet,
)
from dcf_screener.utils import DatasetUnavailableError


def test_excel_sheet_rows_drop_blank_cells(data_files):
    rows = read_excel_sheet(data_files.cash_flow_path, "Sheet1")
    assert [r["Company"] for r in rows] == ["Beta", "Alpha", "Gamma", "Delta", "Epsilon", "Zeta"]
    assert rows[1]["Year 10 FCF"] == 100
    gamma = rows[2]
    assert "Year 7 FCF" not in gamma
    assert "Year 6 FCF" in gamma


def test_missing_sheet_skip_returns_empty(data_files):
    assert read_excel_sheet(data_files.cash_flow_path, "NoSuchSheet", "skip") == []


def test_missing_sheet_fail_raises(data_files):
    with pytest.raises(DatasetUnavailableError) as excinfo:
        read_excel_sheet(data_files.cash_flow_path, "NoSuchSheet", "fail")
    assert excinfo.value.error_code == "DATASET_UNAVAILABLE"


def test_unknown_source_policy_rejected(data_files):
    with pytest.raises(ValueError):
        read_excel_sheet(data_files.cash_flow_path, "Sheet1", "ignore")


def test_first_sheet_when_unnamed(data_files):
    rows = read_excel_sheet(data_files.growth_rate_path, None)
    assert rows[0] == {"Company": "Alpha", "Rate": 0.02}


def test_missing_workbook_raises(tmp_path):
    with pytest.raises(DatasetUnavailableError):
        read_excel_sheet(str(tmp_path / "absent.xlsx"), "Sheet1")


def test_corrupt_workbook_raises(tmp_path):
    path = tmp_path / "corrupt.xlsx"
    path.write_text("this is not a workbook")
    with pytest.raises(DatasetUnavailableError):
        read_excel_sheet(str(path), "Sheet1")


def test_csv_values_stay_strings(data_files):
    rows = read_delimited(data_files.market_value_path)
    assert rows[0] == {"Company": "Alpha", "MarketValue": "1,000.00"}
    assert rows[1]["MarketValue"] == "600"


def test_csv_with_bom_and_blank_values(tmp_path):
    path = tmp_path / "values.csv"
    path.write_text('\ufeffCompany,MarketValue\nAcme,"1,234,567.89"\nBlank,\n', encoding="utf-8")
    rows = read_delimited(str(path))
    assert rows == [
        {"Company": "Acme", "MarketValue": "1,234,567.89"},
        {"Company": "Blank", "MarketValue": ""},
    ]


def test_tsv_dispatch(tmp_path):
    path = tmp_path / "rates.tsv"
    path.write_text("Company\tRate\nAcme\t0.02\n")
    assert load_table(str(path)) == [{"Company": "Acme", "Rate": "0.02"}]


def test_empty_csv_is_empty_table(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    assert read_delimited(str(path)) == []


def test_missing_csv_raises(tmp_path):
    with pytest.raises(DatasetUnavailableError):
        read_delimited(str(tmp_path / "absent.csv"))


def test_unsupported_suffix_raises(tmp_path):
    with pytest.raises(DatasetUnavailableError):
        load_table(str(tmp_path / "values.json"))


def test_legacy_xls_is_unsupported(tmp_path):
    path = tmp_path / "values.xls"
    path.write_bytes(b"\xd0\xcf\x11\xe0")
    with pytest.raises(DatasetUnavailableError) as excinfo:
        load_table(str(path))
    assert "unsupported file type '.xls'" in excinfo.value.message


def test_excel_market_values(tmp_path):
    path = tmp_path / "values.xlsx"
    pd.DataFrame([{"Company": "Acme", "MarketValue": "1,500"}]).to_excel(
        path, sheet_name="Values", index=False
    )
    assert load_table(str(path), "Values") == [{"Company": "Acme", "MarketValue": "1,500"}]


def test_load_datasets_reads_all_three(data_files):
    datasets = load_datasets(data_files, "skip")
    assert isinstance(datasets, Datasets)
    assert len(datasets.cash_flows) == 6
    assert len(datasets.growth_rates) == 5
    assert len(datasets.market_values) == 5


def test_load_datasets_missing_sheet_policy(data_files):
    sources = data_files._replace(growth_rate_sheet="Rates")
    assert load_datasets(sources, "skip").growth_rates == []
    with pytest.raises(DatasetUnavailableError):
        load_datasets(sources, "fail")
