"""Render attribution aggregates as a summary table."""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Context, Decimal, localcontext

import pandas as pd

from .processing import AMOUNT_PRECISION, AttributionResult
from .schema import OVERALL_KEY, SUMMARY_COLUMNS, UNATTRIBUTED_KEY

CENTS = Decimal("0.01")


def format_amount(amount: Decimal) -> str:
    """Format an amount with exactly two decimal places."""
    with localcontext(Context(prec=AMOUNT_PRECISION)):
        return str(amount.quantize(CENTS, rounding=ROUND_HALF_EVEN))


def build_summary(
    result: AttributionResult,
    sort_dimensions: bool = True,
    include_unattributed: bool = False,
) -> pd.DataFrame:
    """
    Build the summary table: `overall` first, then one row per exposure value.

    Args:
        result: Output of compute_attribution.
        sort_dimensions: Sort exposure rows by value. When False they keep
            the order in which each value first received a sale.
        include_unattributed: Append an `unattributed` row with the distinct
            unattributed purchasers and their sale total.

    Returns:
        DataFrame with columns dimension, value, num_purchases, total_sales.
        num_purchases counts distinct purchasers, not sales.
    """
    rows = [{
        "dimension": OVERALL_KEY,
        "value": OVERALL_KEY,
        "num_purchases": result.overall.num_purchases,
        "total_sales": format_amount(result.overall.total_sales),
    }]

    keys = list(result.dimensions)
    if sort_dimensions:
        keys = sorted(keys)

    for key in keys:
        agg = result.dimensions[key]
        rows.append({
            "dimension": key,
            "value": key,
            "num_purchases": agg.num_purchases,
            "total_sales": format_amount(agg.total_sales),
        })

    if include_unattributed:
        rows.append({
            "dimension": UNATTRIBUTED_KEY,
            "value": UNATTRIBUTED_KEY,
            "num_purchases": len(result.unattributed.purchasers),
            "total_sales": format_amount(result.unattributed.total_sales),
        })

    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
