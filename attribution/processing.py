"""Last-touch attribution of sales to the most recent prior exposure."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Context, Decimal, Inexact, InvalidOperation, Overflow, localcontext
from typing import Dict, Iterable, Optional, Set, Union

import pandas as pd

from .exceptions import InvalidAmount
from .schema import OVERALL_KEY, Event, EventKind
from .timeline import iter_events

# Totals stay exact: Inexact is trapped instead of rounding.
AMOUNT_PRECISION = 80
MAX_AMOUNT_DIGITS = 36
AMOUNT_CONTEXT = Context(prec=AMOUNT_PRECISION, traps=[InvalidOperation, Inexact, Overflow])


@dataclass
class DimensionAggregate:
    """Attributed performance of one exposure value."""
    key: str
    purchasers: Set[str] = field(default_factory=set)
    total_sales: Decimal = Decimal("0")

    @property
    def num_purchases(self) -> int:
        return len(self.purchasers)

    def add_sale(self, user_id: str, amount: Decimal) -> None:
        self.purchasers.add(user_id)
        self.total_sales += amount


@dataclass
class UnattributedTally:
    """Sales with no qualifying prior exposure."""
    sales: int = 0
    purchasers: Set[str] = field(default_factory=set)
    total_sales: Decimal = Decimal("0")


@dataclass
class AttributionResult:
    overall: DimensionAggregate
    dimensions: Dict[str, DimensionAggregate]
    unattributed: UnattributedTally


def parse_amount(text: str, source: Optional[str] = None, row: Optional[int] = None) -> Decimal:
    """Parse a sale amount as a finite, non-negative Decimal."""
    try:
        amount = Decimal(text)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmount(f"invalid sale amount {text!r}", source, row) from exc

    if not amount.is_finite() or amount < 0:
        raise InvalidAmount(f"invalid sale amount {text!r}", source, row)
    if amount.adjusted() >= MAX_AMOUNT_DIGITS:
        raise InvalidAmount(
            f"sale amount {text!r} exceeds {MAX_AMOUNT_DIGITS} integer digits", source, row
        )
    return amount


def compute_attribution(events: Union[pd.DataFrame, Iterable[Event]]) -> AttributionResult:
    """
    Attribute every sale to the seller's most recent exposure.

    Walks the timeline once. An exposure overwrites the user's last exposure
    value; an empty exposure value clears it. A sale from a user with no
    current exposure is counted as unattributed and contributes to no
    aggregate, `overall` included.

    Args:
        events: Merged timeline, either as the DataFrame from merge_timeline
            or as Event records already in chronological order.

    Returns:
        AttributionResult with the overall aggregate, per-exposure aggregates
        keyed by exposure value (in first-attribution order) and the
        unattributed tally.

    Raises:
        InvalidAmount: A sale amount cannot be parsed, or a total could not
            be kept exact.
    """
    if isinstance(events, pd.DataFrame):
        events = iter_events(events)

    last_exposure: Dict[str, Optional[str]] = {}
    overall = DimensionAggregate(key=OVERALL_KEY)
    dimensions: Dict[str, DimensionAggregate] = {}
    unattributed = UnattributedTally()
    attributed_sales = 0

    with localcontext(AMOUNT_CONTEXT):
        for event in events:
            if event.kind is EventKind.EXPOSURE:
                last_exposure[event.user_id] = event.payload or None
                continue

            amount = parse_amount(event.payload, event.source, event.row)
            exposure = last_exposure.get(event.user_id)

            try:
                if exposure is None:
                    unattributed.sales += 1
                    unattributed.purchasers.add(event.user_id)
                    unattributed.total_sales += amount
                    continue

                overall.add_sale(event.user_id, amount)

                dimension = dimensions.get(exposure)
                if dimension is None:
                    dimension = dimensions[exposure] = DimensionAggregate(key=exposure)
                dimension.add_sale(event.user_id, amount)
            except Inexact as exc:
                raise InvalidAmount(
                    f"sale amount {event.payload!r} cannot be added exactly "
                    f"within {AMOUNT_PRECISION} digits",
                    event.source,
                    event.row,
                ) from exc
            attributed_sales += 1

    logging.info(
        f"Attributed {attributed_sales} sales to {len(dimensions)} exposure values; "
        f"{unattributed.sales} sales had no prior exposure"
    )
    return AttributionResult(overall=overall, dimensions=dimensions, unattributed=unattributed)
