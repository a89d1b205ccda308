#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for result rounding, classification and ordering (dcf_screener/dcf/ranking.py).
"""

from dcf_screener.dcf.ranking import build_result, rank_valuations


def test_values_rounded_to_two_decimals():
    row = build_result("Acme", 1106.016789, 999.999)
    assert row == {
        "company": "Acme",
        "intrinsic_value": 1106.02,
        "market_value": 1000.0,
        "undervalued": True,
    }


def test_undervalued_is_strict():
    assert build_result("A", 100.0, 99.99)["undervalued"] is True
    assert build_result("B", 100.0, 100.0)["undervalued"] is False
    assert build_result("C", 99.99, 100.0)["undervalued"] is False
    # equal after rounding is not undervalued
    assert build_result("D", 100.004, 100.0)["undervalued"] is False


def test_sorted_descending():
    rows = [build_result(n, v, 1.0) for n, v in [("A", 5.0), ("B", 50.0), ("C", 0.5), ("D", 25.0)]]
    ranked = rank_valuations(rows)
    assert [r["company"] for r in ranked] == ["B", "D", "A", "C"]
    values = [r["intrinsic_value"] for r in ranked]
    assert all(a >= b for a, b in zip(values, values[1:]))


def test_ties_keep_input_order():
    rows = [
        build_result("First", 10.0, 1.0),
        build_result("Top", 20.0, 1.0),
        build_result("Second", 10.0, 1.0),
        build_result("Third", 10.001, 1.0),  # rounds to a tie
    ]
    ranked = rank_valuations(rows)
    assert [r["company"] for r in ranked] == ["Top", "First", "Second", "Third"]


def test_rank_does_not_mutate_input():
    rows = [build_result("A", 1.0, 1.0), build_result("B", 2.0, 1.0)]
    rank_valuations(rows)
    assert [r["company"] for r in rows] == ["A", "B"]


def test_empty_ranking():
    assert rank_valuations([]) == []
