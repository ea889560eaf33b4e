#!/usr/bin/env python3
"""
Sample Data Generator for the Last-Touch Attribution Pipeline

This script generates sample exposure and sale logs to test the pipeline
end-to-end.

Usage:
    pip install -e ".[samples]"
    python scripts/generate_sample_data.py --output-dir ./data

Output:
    - data/ad_exposures.csv
    - data/sales_data.csv
"""

import argparse
import os
from datetime import datetime

import numpy as np
import pandas as pd

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def generate_sample_data(
    output_dir: str = "./data",
    num_users: int = 200,
    num_exposures: int = 1000,
    num_sales: int = 300,
    num_days: int = 30,
    seed: int = 42,
):
    """Generate sample exposure and sale logs."""
    rng = np.random.default_rng(seed)

    os.makedirs(output_dir, exist_ok=True)

    start = datetime(2024, 1, 1)
    span_seconds = num_days * 24 * 60 * 60

    users = [f"U{i:04d}" for i in range(num_users)]
    creatives = [f"creative_{c}" for c in "ABCDEFGH"]

    def random_timestamps(n):
        offsets = rng.integers(0, span_seconds, size=n)
        stamps = pd.Timestamp(start) + pd.to_timedelta(offsets, unit="s")
        return stamps.strftime(TIMESTAMP_FORMAT)

    # ============================================================
    # Generate Exposures
    # ============================================================
    exposures_df = pd.DataFrame({
        "user_id": rng.choice(users, size=num_exposures),
        "timestamp": random_timestamps(num_exposures),
        "exposure": rng.choice(creatives, size=num_exposures),
    })
    exposures_path = os.path.join(output_dir, "ad_exposures.csv")
    exposures_df.to_csv(exposures_path, index=False, lineterminator="\n")
    print(f"Generated {len(exposures_df)} exposures -> {exposures_path}")

    # ============================================================
    # Generate Sales
    # ============================================================
    # Part of the buyers never saw an ad, so some sales stay unattributed
    amounts = np.round(rng.gamma(shape=2.0, scale=30.0, size=num_sales), 2)
    sales_df = pd.DataFrame({
        "user_id": rng.choice(users + [f"N{i:04d}" for i in range(num_users // 10)], size=num_sales),
        "timestamp": random_timestamps(num_sales),
        "amount": [f"{a:.2f}" for a in amounts],
    })
    sales_path = os.path.join(output_dir, "sales_data.csv")
    sales_df.to_csv(sales_path, index=False, lineterminator="\n")
    print(f"Generated {len(sales_df)} sales -> {sales_path}")

    # ============================================================
    # Summary
    # ============================================================
    print("\n" + "=" * 60)
    print("SAMPLE DATA GENERATED SUCCESSFULLY")
    print("=" * 60)
    print(f"\nOutput directory: {output_dir}")
    print(f"\nNext steps:")
    print(f"  python -m attribution.run_pipeline --exposures {exposures_path} \\")
    print(f"      --sales {sales_path} --output ./results/summary.csv")

    return exposures_df, sales_df


def main():
    parser = argparse.ArgumentParser(
        description="Generate sample data for the Last-Touch Attribution Pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default sample data:
  python scripts/generate_sample_data.py --output-dir ./data

  # Generate larger dataset:
  python scripts/generate_sample_data.py --output-dir ./data --num-users 5000 --num-exposures 50000
        """
    )

    parser.add_argument("--output-dir", "-o", default="./data",
                        help="Output directory for generated files")
    parser.add_argument("--num-users", type=int, default=200,
                        help="Number of exposed users")
    parser.add_argument("--num-exposures", type=int, default=1000,
                        help="Number of exposure events")
    parser.add_argument("--num-sales", type=int, default=300,
                        help="Number of sale events")
    parser.add_argument("--num-days", type=int, default=30,
                        help="Days covered by the logs")
    parser.add_argument("--seed", type=int, default=42,
                        help="Random seed for reproducibility")

    args = parser.parse_args()

    generate_sample_data(
        output_dir=args.output_dir,
        num_users=args.num_users,
        num_exposures=args.num_exposures,
        num_sales=args.num_sales,
        num_days=args.num_days,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
