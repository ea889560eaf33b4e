"""Tests for the summary table."""

from decimal import Decimal

import pytest

from attribution.processing import compute_attribution
from attribution.report import build_summary, format_amount
from attribution.schema import SUMMARY_COLUMNS
from tests.events import exposure, sale


@pytest.fixture
def result():
    return compute_attribution([
        exposure("U1", "2024-01-01 08:00:00", "beta"),
        exposure("U2", "2024-01-01 08:00:00", "alpha"),
        exposure("U3", "2024-01-01 08:00:00", "beta"),
        sale("U1", "2024-01-01 09:00:00", "10"),
        sale("U1", "2024-01-01 09:30:00", "2.5"),
        sale("U3", "2024-01-01 10:00:00", "0.125"),
        sale("U2", "2024-01-01 11:00:00", "100.00"),
        sale("U4", "2024-01-01 11:00:00", "8.00"),
        sale("U4", "2024-01-01 12:00:00", "1.00"),
    ])


def test_overall_first_then_sorted_dimensions(result):
    summary = build_summary(result)

    assert list(summary.columns) == SUMMARY_COLUMNS
    assert summary.values.tolist() == [
        ["overall", "overall", 3, "112.62"],
        ["alpha", "alpha", 1, "100.00"],
        ["beta", "beta", 2, "12.62"],
    ]


def test_unsorted_keeps_first_attribution_order(result):
    summary = build_summary(result, sort_dimensions=False)
    assert summary["dimension"].tolist() == ["overall", "beta", "alpha"]


def test_unattributed_row_is_opt_in(result):
    assert "unattributed" not in build_summary(result)["dimension"].tolist()

    summary = build_summary(result, include_unattributed=True)
    assert summary.values.tolist()[-1] == ["unattributed", "unattributed", 1, "9.00"]


def test_no_sales_still_has_overall_row():
    summary = build_summary(compute_attribution([]))
    assert summary.values.tolist() == [["overall", "overall", 0, "0.00"]]


@pytest.mark.parametrize("amount, text", [
    (Decimal("0"), "0.00"),
    (Decimal("50"), "50.00"),
    (Decimal("1E+2"), "100.00"),
    (Decimal("0.125"), "0.12"),
    (Decimal("0.135"), "0.14"),
    (Decimal("1234567.891"), "1234567.89"),
    (Decimal("1e30"), "1000000000000000000000000000000.00"),
    (Decimal("123456789012345678901234567890.125"), "123456789012345678901234567890.12"),
])
def test_format_amount(amount, text):
    assert format_amount(amount) == text
