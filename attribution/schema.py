"""Event schema for exposure and sale logs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .exceptions import MalformedInput


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

EVENT_COLUMNS = ["user_id", "timestamp", "kind", "value", "source", "row"]
SUMMARY_COLUMNS = ["dimension", "value", "num_purchases", "total_sales"]

OVERALL_KEY = "overall"
UNATTRIBUTED_KEY = "unattributed"


class EventKind(str, Enum):
    EXPOSURE = "exposure"
    SALE = "sale"


@dataclass(frozen=True)
class Event:
    """
    One exposure or sale from an input log.

    For exposures `payload` is the exposure value (ad / creative id); for
    sales it is the amount as it appeared in the source.
    """

    user_id: str
    timestamp: datetime
    kind: EventKind
    payload: str
    source: Optional[str] = None
    row: Optional[int] = None


def parse_timestamp(
    text: str,
    source: Optional[str] = None,
    row: Optional[int] = None,
    fmt: str = TIMESTAMP_FORMAT,
) -> datetime:
    """
    Parse a `YYYY-MM-DD HH:MM:SS` timestamp, raising MalformedInput otherwise.

    strptime accepts unpadded fields ("2024-1-1 9:00:00"), so the parsed value
    must also format back to the exact input text.
    """
    try:
        parsed = datetime.strptime(text, fmt)
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"invalid timestamp {text!r}, expected {fmt}", source, row) from exc

    if parsed.strftime(fmt) != text:
        raise MalformedInput(f"invalid timestamp {text!r}, expected {fmt}", source, row)
    return parsed
