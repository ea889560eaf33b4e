"""
Shared fixtures for attribution pipeline tests.
"""

import pytest


EXPOSURE_HEADER = "user_id,timestamp,exposure"
SALES_HEADER = "user_id,timestamp,amount"


@pytest.fixture
def write_csv(tmp_path):
    """Write a CSV file under tmp_path from a header and raw row strings."""
    def _write(name, header, rows):
        path = tmp_path / name
        lines = [header] + list(rows) if header is not None else list(rows)
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def exposures_csv(write_csv):
    return write_csv("ad_exposures.csv", EXPOSURE_HEADER, [
        "U1,2024-01-01 10:00:00,A",
        "U3,2024-01-01 08:00:00,A",
        "U3,2024-01-01 09:00:00,B",
    ])


@pytest.fixture
def sales_csv(write_csv):
    return write_csv("sales_data.csv", SALES_HEADER, [
        "U1,2024-01-01 11:00:00,50.00",
        "U2,2024-01-01 09:00:00,30.00",
        "U3,2024-01-01 12:00:00,10.00",
    ])

