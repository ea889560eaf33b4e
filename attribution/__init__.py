"""
Last-Touch Sales Attribution

Credits each sale to the most recent ad exposure its buyer saw, then
summarizes distinct purchasers and sales per exposure value.

Main components:
- io.py: Loading event logs, writing the summary
- timeline.py: Stable chronological merge of exposures and sales
- processing.py: The attribution pass
- report.py: Summary table
- run_pipeline.py: CLI entry point

Quick start:
    from attribution import (
        load_events, merge_timeline, compute_attribution, build_summary,
    )

    exposures = load_events("ad_exposures.csv", "exposure")
    sales = load_events("sales_data.csv", "sale")
    result = compute_attribution(merge_timeline(exposures, sales))
    summary = build_summary(result)
"""

from .config import PipelineConfig, default_config
from .exceptions import (
    AttributionError,
    InvalidAmount,
    MalformedInput,
    SinkUnavailable,
    SourceUnavailable,
)
from .io import load_events, write_summary
from .processing import (
    AttributionResult,
    DimensionAggregate,
    UnattributedTally,
    compute_attribution,
    parse_amount,
)
from .report import build_summary, format_amount
from .schema import Event, EventKind, parse_timestamp
from .timeline import iter_events, merge_timeline

__all__ = [
    # Config
    "PipelineConfig",
    "default_config",
    # Errors
    "AttributionError",
    "InvalidAmount",
    "MalformedInput",
    "SinkUnavailable",
    "SourceUnavailable",
    # Schema
    "Event",
    "EventKind",
    "parse_timestamp",
    # I/O
    "load_events",
    "write_summary",
    # Timeline
    "merge_timeline",
    "iter_events",
    # Attribution
    "AttributionResult",
    "DimensionAggregate",
    "UnattributedTally",
    "compute_attribution",
    "parse_amount",
    # Report
    "build_summary",
    "format_amount",
]

__version__ = "1.0.0"
