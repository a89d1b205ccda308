"""Data loading and company matching modules."""

from .loader import (
    DataSources, Datasets, default_sources, read_excel_sheet, read_delimited,
    load_table, load_datasets,
)
from .matcher import (
    MatchedCompany, parse_number, parse_market_value, index_by_company, match_companies
)

__all__ = [
    "DataSources", "Datasets", "default_sources", "read_excel_sheet", "read_delimited",
    "load_table", "load_datasets",
    "MatchedCompany", "parse_number", "parse_market_value", "index_by_company",
    "match_companies",
]
