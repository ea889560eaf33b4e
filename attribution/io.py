"""I/O helpers for the attribution pipeline."""

from __future__ import annotations

import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from .exceptions import MalformedInput, SinkUnavailable, SourceUnavailable
from .schema import EVENT_COLUMNS, TIMESTAMP_FORMAT, EventKind, parse_timestamp

FIELDS_PER_ROW = 3


def load_events(
    path: Union[str, Path],
    kind: Union[EventKind, str],
    source_name: Optional[str] = None,
    timestamp_format: str = TIMESTAMP_FORMAT,
) -> pd.DataFrame:
    """
    Load an exposure or sale log into an event DataFrame.

    The first row is a header and is discarded. Every other non-blank row must
    hold exactly (user_id, timestamp, value). Values are kept verbatim: no
    whitespace trimming and no NA coercion, so an empty exposure value stays "".

    Args:
        path: CSV file to read.
        kind: Event kind every row of this source represents.
        source_name: Label used in error messages (defaults to the path).
        timestamp_format: strptime format for the timestamp column.

    Returns:
        DataFrame with columns user_id, timestamp, kind, value, source, row
        in file order. `row` is the 1-based line number in the file.

    Raises:
        SourceUnavailable: The file cannot be opened, read or decoded.
        MalformedInput: Missing header, wrong field count or bad timestamp.
    """
    kind = EventKind(kind)
    source = source_name or str(path)

    records = []
    try:
        with open(path, newline="", encoding="utf-8") as handle:
            reader = csv.reader(handle)
            if next(reader, None) is None:
                raise MalformedInput("missing header row", source)

            for fields in reader:
                if not fields:
                    continue

                line = reader.line_num
                if len(fields) != FIELDS_PER_ROW:
                    raise MalformedInput(
                        f"expected {FIELDS_PER_ROW} fields, found {len(fields)}", source, line
                    )

                user_id, ts_text, value = fields
                records.append({
                    "user_id": user_id,
                    "timestamp": parse_timestamp(ts_text, source, line, timestamp_format),
                    "kind": kind.value,
                    "value": value,
                    "source": source,
                    "row": line,
                })
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceUnavailable(f"cannot read input: {exc}", source) from exc
    except csv.Error as exc:
        raise MalformedInput(f"unreadable CSV: {exc}", source) from exc

    frame = pd.DataFrame.from_records(records, columns=EVENT_COLUMNS)
    frame["timestamp"] = pd.to_datetime(frame["timestamp"])
    frame["row"] = frame["row"].astype("int64")

    logging.info(f"Loaded {len(frame)} {kind.value} events from {source}")
    return frame


def write_summary(summary: pd.DataFrame, path: Union[str, Path]) -> str:
    """
    Write the summary table as CSV, all or nothing.

    The table goes to a temporary file next to `path` and is moved into place
    with os.replace once fully written, so a failed run never leaves a partial
    summary behind.

    Returns:
        The path written, as a string.

    Raises:
        SinkUnavailable: The directory or file cannot be created or written.
    """
    out_path = Path(path)
    tmp_name = None
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{out_path.name}.", suffix=".tmp", dir=out_path.parent
        )
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as handle:
            summary.to_csv(handle, index=False, lineterminator="\n")
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, out_path)
    except OSError as exc:
        raise SinkUnavailable(f"cannot write output: {exc}", str(out_path)) from exc
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)

    logging.info(f"Saved summary: {summary.shape} -> {out_path}")
    return str(out_path)
