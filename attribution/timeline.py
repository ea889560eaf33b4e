"""Merge exposure and sale logs into one chronological timeline."""

from __future__ import annotations

import logging
from typing import Iterator

import pandas as pd

from .schema import EVENT_COLUMNS, Event, EventKind


def merge_timeline(exposures: pd.DataFrame, sales: pd.DataFrame) -> pd.DataFrame:
    """
    Concatenate exposures then sales and sort by timestamp.

    The sort is stable: events sharing a timestamp keep their concatenation
    order, so a same-second exposure is seen before a sale from the same
    user. Attribution in the tie case depends on this.
    """
    frames = [df for df in (exposures, sales) if not df.empty]
    if not frames:
        return pd.DataFrame(columns=EVENT_COLUMNS)

    combined = pd.concat(frames, ignore_index=True)
    timeline = combined.sort_values("timestamp", kind="stable").reset_index(drop=True)

    logging.debug(
        f"Merged timeline: {len(exposures)} exposures + {len(sales)} sales = {len(timeline)} events"
    )
    return timeline


def iter_events(timeline: pd.DataFrame) -> Iterator[Event]:
    """Yield the timeline rows as Event records, in order."""
    for rec in timeline.itertuples(index=False):
        yield Event(
            user_id=rec.user_id,
            timestamp=pd.Timestamp(rec.timestamp).to_pydatetime(),
            kind=EventKind(rec.kind),
            payload=rec.value,
            source=rec.source,
            row=int(rec.row),
        )
