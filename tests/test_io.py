"""Tests for loading event logs and writing the summary."""

import os

import pandas as pd
import pytest

from attribution.exceptions import MalformedInput, SinkUnavailable, SourceUnavailable
from attribution.io import load_events, write_summary
from attribution.schema import EVENT_COLUMNS, EventKind


class TestLoadEvents:
    def test_loads_rows_in_file_order(self, exposures_csv):
        df = load_events(exposures_csv, EventKind.EXPOSURE)

        assert list(df.columns) == EVENT_COLUMNS
        assert df["user_id"].tolist() == ["U1", "U3", "U3"]
        assert df["value"].tolist() == ["A", "A", "B"]
        assert (df["kind"] == "exposure").all()
        assert df["timestamp"].iloc[0] == pd.Timestamp("2024-01-01 10:00:00")
        # header is line 1
        assert df["row"].tolist() == [2, 3, 4]

    def test_accepts_kind_as_string(self, sales_csv):
        df = load_events(sales_csv, "sale")
        assert (df["kind"] == "sale").all()
        assert df["value"].tolist() == ["50.00", "30.00", "10.00"]

    def test_header_only_gives_empty_frame(self, write_csv):
        path = write_csv("empty.csv", "user_id,timestamp,exposure", [])
        df = load_events(path, EventKind.EXPOSURE)
        assert df.empty
        assert list(df.columns) == EVENT_COLUMNS

    def test_empty_exposure_value_kept_verbatim(self, write_csv):
        path = write_csv("exp.csv", "user_id,timestamp,exposure", [
            "U1,2024-01-01 10:00:00,",
            "U2,2024-01-01 10:00:00,NA",
        ])
        df = load_events(path, EventKind.EXPOSURE)
        assert df["value"].tolist() == ["", "NA"]

    def test_blank_lines_skipped(self, write_csv):
        path = write_csv("exp.csv", "user_id,timestamp,exposure", [
            "U1,2024-01-01 10:00:00,A",
            "",
            "U2,2024-01-01 11:00:00,B",
        ])
        df = load_events(path, EventKind.EXPOSURE)
        assert df["user_id"].tolist() == ["U1", "U2"]
        assert df["row"].tolist() == [2, 4]

    def test_quoted_value_with_comma(self, write_csv):
        path = write_csv("exp.csv", "user_id,timestamp,exposure", [
            'U1,2024-01-01 10:00:00,"spring, v2"',
        ])
        df = load_events(path, EventKind.EXPOSURE)
        assert df["value"].tolist() == ["spring, v2"]

    @pytest.mark.parametrize("row", [
        "U1,2024-01-01 10:00:00",
        "U1,2024-01-01 10:00:00,A,extra",
        "U1",
    ])
    def test_wrong_field_count(self, write_csv, row):
        path = write_csv("exp.csv", "user_id,timestamp,exposure", [
            "U0,2024-01-01 09:00:00,A",
            row,
        ])
        with pytest.raises(MalformedInput) as excinfo:
            load_events(path, EventKind.EXPOSURE, source_name="exposures")

        assert excinfo.value.source == "exposures"
        assert excinfo.value.row == 3
        assert "exposures, line 3" in str(excinfo.value)

    @pytest.mark.parametrize("ts", [
        "2024-01-01T10:00:00",
        "2024-01-01 10:00",
        "2024-1-1 10:00:00",
        "2024-01-01 10:00:00Z",
        "2024-02-30 10:00:00",
        "not a date",
    ])
    def test_bad_timestamp(self, write_csv, ts):
        path = write_csv("sales.csv", "user_id,timestamp,amount", [f"U1,{ts},5.00"])
        with pytest.raises(MalformedInput, match="invalid timestamp"):
            load_events(path, EventKind.SALE)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceUnavailable):
            load_events(tmp_path / "missing.csv", EventKind.SALE)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.csv"
        path.write_bytes(b"user_id,timestamp,amount\n\xff\xfe,2024-01-01 10:00:00,1\n")
        with pytest.raises(SourceUnavailable):
            load_events(path, EventKind.SALE)

    def test_file_without_header(self, write_csv):
        path = write_csv("nothing.csv", None, [])
        with pytest.raises(MalformedInput, match="missing header"):
            load_events(path, EventKind.EXPOSURE)

    def test_unknown_kind(self, exposures_csv):
        with pytest.raises(ValueError):
            load_events(exposures_csv, "click")


class TestWriteSummary:
    def _summary(self):
        return pd.DataFrame(
            [["overall", "overall", 1, "50.00"], ["A", "A", 1, "50.00"]],
            columns=["dimension", "value", "num_purchases", "total_sales"],
        )

    def test_writes_csv(self, tmp_path):
        out = tmp_path / "summary.csv"
        written = write_summary(self._summary(), out)

        assert written == str(out)
        assert out.read_text(encoding="utf-8") == (
            "dimension,value,num_purchases,total_sales\n"
            "overall,overall,1,50.00\n"
            "A,A,1,50.00\n"
        )

    def test_creates_parent_directory(self, tmp_path):
        out = tmp_path / "results" / "nested" / "summary.csv"
        write_summary(self._summary(), out)
        assert out.exists()

    def test_replaces_existing_file(self, tmp_path):
        out = tmp_path / "summary.csv"
        out.write_text("stale\n")
        write_summary(self._summary(), out)
        assert out.read_text().startswith("dimension,")

    def test_unwritable_target_leaves_nothing_behind(self, tmp_path):
        # a directory in place of the output file makes os.replace fail
        out = tmp_path / "summary.csv"
        out.mkdir()

        with pytest.raises(SinkUnavailable):
            write_summary(self._summary(), out)

        assert os.listdir(tmp_path) == ["summary.csv"]
        assert out.is_dir()
