#!/usr/bin/env python3
"""
Last-Touch Attribution Pipeline - Main Entry Point

Credits each sale to the most recent ad exposure the same user saw before
it, then summarizes purchasers and sales per exposure value.

Usage:
    # Default file names in the current directory:
    python -m attribution.run_pipeline

    # Explicit paths:
    python -m attribution.run_pipeline --exposures data/ad_exposures.csv \\
        --sales data/sales_data.csv --output results/summary.csv

Output:
    - summary.csv: dimension,value,num_purchases,total_sales
"""

import argparse
import logging
import sys
from typing import Optional, Tuple

import pandas as pd

from attribution.config import PipelineConfig
from attribution.exceptions import AttributionError
from attribution.io import load_events, write_summary
from attribution.processing import AttributionResult, compute_attribution
from attribution.report import build_summary
from attribution.schema import EventKind
from attribution.timeline import merge_timeline
from attribution.utils import setup_logging


# ============================================================
# Data Loading
# ============================================================

def load_inputs(config: PipelineConfig) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Load the exposure and sale logs.

    Returns:
        Tuple of (exposures_df, sales_df)
    """
    logging.info(f"Loading exposures from {config.exposures_path}")
    exposures = load_events(
        config.exposures_path,
        EventKind.EXPOSURE,
        timestamp_format=config.timestamp_format,
    )

    logging.info(f"Loading sales from {config.sales_path}")
    sales = load_events(
        config.sales_path,
        EventKind.SALE,
        timestamp_format=config.timestamp_format,
    )

    return exposures, sales


# ============================================================
# Pipeline
# ============================================================

def run_pipeline(config: PipelineConfig) -> Tuple[pd.DataFrame, AttributionResult]:
    """
    Run the full attribution pipeline and write the summary.

    Nothing is written unless every stage succeeds.

    Returns:
        Tuple of (summary_df, attribution result)
    """
    logging.info("Starting last-touch attribution pipeline")

    # === Step 1: Load both logs ===
    exposures, sales = load_inputs(config)

    # === Step 2: Merge into one timeline ===
    timeline = merge_timeline(exposures, sales)

    # === Step 3: Attribute sales ===
    result = compute_attribution(timeline)

    # === Step 4: Emit summary ===
    summary = build_summary(
        result,
        sort_dimensions=config.sort_dimensions,
        include_unattributed=config.include_unattributed,
    )
    write_summary(summary, config.output_path)

    return summary, result


# ============================================================
# CLI
# ============================================================

def parse_args(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(
        description="Last-Touch Sales Attribution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read ad_exposures.csv and sales_data.csv, write summary.csv:
  python -m attribution.run_pipeline

  # Custom locations, also report sales with no prior exposure:
  python -m attribution.run_pipeline --exposures data/ad_exposures.csv \\
      --sales data/sales_data.csv -o results/summary.csv --include-unattributed

Environment variables (overridden by flags):
  ATTRIBUTION_EXPOSURES_PATH, ATTRIBUTION_SALES_PATH, ATTRIBUTION_OUTPUT_PATH,
  ATTRIBUTION_SORT_DIMENSIONS, ATTRIBUTION_INCLUDE_UNATTRIBUTED, LOG_LEVEL, LOG_FILE
        """
    )

    parser.add_argument("--exposures", help="Exposure log CSV (user_id,timestamp,exposure)")
    parser.add_argument("--sales", help="Sales log CSV (user_id,timestamp,amount)")
    parser.add_argument("--output", "-o", help="Summary CSV to write")

    parser.add_argument("--no-sort", action="store_true",
                        help="Keep first-attribution order instead of sorting dimensions")
    parser.add_argument("--include-unattributed", action="store_true",
                        help="Append a row for sales with no prior exposure")

    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging")
    parser.add_argument("--log-file", metavar="PATH",
                        help="Also write log messages to this file")

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """Environment-backed config with CLI flags applied on top."""
    config = PipelineConfig.from_env()

    if args.exposures:
        config.exposures_path = args.exposures
    if args.sales:
        config.sales_path = args.sales
    if args.output:
        config.output_path = args.output
    if args.no_sort:
        config.sort_dimensions = False
    if args.include_unattributed:
        config.include_unattributed = True
    if args.verbose:
        config.log_level = "DEBUG"
    if args.log_file:
        config.log_file = args.log_file

    return config


def main(argv: Optional[list] = None):
    args = parse_args(argv)
    config = build_config(args)

    setup_logging(level=config.log_level, log_file=config.log_file)
    logging.debug(f"Config: {config.to_dict()}")

    try:
        summary, result = run_pipeline(config)
    except AttributionError as e:
        logging.error(f"Pipeline failed: {e}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print("ATTRIBUTION COMPLETED")
    print("=" * 60)
    print(f"\nPurchasers attributed: {result.overall.num_purchases}")
    print(f"Exposure values credited: {len(result.dimensions)}")
    print(f"Sales with no prior exposure: {result.unattributed.sales}")
    print(f"\nSummary saved to: {config.output_path} ({len(summary)} rows)")


if __name__ == "__main__":
    main()
