"""Unit tests for FieldNormalizer."""

from datetime import datetime, timedelta

import polars as pl
import pytest

from src.common.config import settings
from src.criteria import FieldNormalizationError, UnknownUnit
from src.normalization import FieldNormalizer, normalize_records


class TestNormalizeRecords:
    """Test in-place record normalization."""

    def test_matching_fields_replaced(self, sample_records):
        """Test registered fields become canonical values."""
        summary = normalize_records(sample_records)

        trail_a, trail_b, crate = sample_records
        assert trail_a["distance"] == 1500.0
        assert trail_a["duration"] == 5400.0
        assert trail_a["color"] == 0x00ff80
        assert trail_b["distance"] == pytest.approx(4828.032)
        assert trail_b["mass"] == 2500.0
        assert crate["mass"] == pytest.approx(4535.924)
        assert crate["letter"] == 66
        assert crate["element"] == 31.0

        assert summary.total_records == 3
        assert summary.fields_normalized == 8
        assert summary.failed_fields == 0
        assert summary.errors == []

    def test_unregistered_fields_untouched(self, sample_records):
        """Test fields without criteria keep their values."""
        normalize_records(sample_records)
        assert [r["name"] for r in sample_records] == ["Trail A", "Trail B", "Crate"]

    def test_number_fields_untouched(self, sample_records):
        """Test criteria without sanitize leave the field alone."""
        normalize_records(sample_records)
        assert sample_records[1]["number"] == "42"

    def test_empty_collection(self):
        summary = normalize_records([])
        assert summary.total_records == 0
        assert summary.fields_normalized == 0


class TestErrorPolicy:
    """Test per-field isolation versus fail-fast."""

    def test_failure_is_isolated(self):
        """Test a bad field is recorded and the pass continues."""
        records = [{"distance": "5 parsecs", "letter": "x"}, {"distance": "2km"}]
        summary = FieldNormalizer(fail_fast=False).normalize_records(records)

        assert records[0]["distance"] == "5 parsecs"
        assert records[0]["letter"] == 88
        assert records[1]["distance"] == 2000.0
        assert summary.failed_fields == 1
        assert summary.fields_normalized == 2

        error = summary.errors[0]
        assert error.record_index == 0
        assert error.field == "distance"
        assert error.value == "5 parsecs"
        assert isinstance(error.cause, UnknownUnit)

    def test_fail_fast_aborts_pass(self):
        """Test the first failure stops the pass."""
        records = [{"mass": "heavy"}, {"mass": "2kg"}]
        with pytest.raises(FieldNormalizationError, match="Record 0, field 'mass'") as exc_info:
            FieldNormalizer(fail_fast=True).normalize_records(records)

        assert exc_info.value.record_index == 0
        assert records[1]["mass"] == "2kg"

    def test_fail_fast_from_settings(self, monkeypatch):
        """Test the default policy comes from configuration."""
        monkeypatch.setattr(settings.criteria, "fail_fast", True)
        with pytest.raises(FieldNormalizationError):
            normalize_records([{"color": "nope"}])

    def test_non_string_value_is_recorded(self):
        """Test unexpected value types are isolated like parse errors."""
        summary = normalize_records([{"color": 123}], fail_fast=False)
        assert summary.failed_fields == 1
        assert isinstance(summary.errors[0].cause, TypeError)


class TestNormalizeFrame:
    """Test DataFrame normalization."""

    def test_columns_normalized(self):
        """Test criteria columns are converted and others kept."""
        df = pl.DataFrame({
            "distance": ["1.5km", None, "2 feet"],
            "label": ["a", "b", "c"],
            "number": ["1", "2", "3"],
        })
        result, summary = FieldNormalizer().normalize_frame(df)

        assert result.schema["distance"] == pl.Float64
        values = result["distance"].to_list()
        assert values[0] == 1500.0
        assert values[1] is None
        assert values[2] == pytest.approx(0.6096)
        assert result["label"].to_list() == ["a", "b", "c"]
        assert result["number"].to_list() == ["1", "2", "3"]
        assert summary.total_records == 3
        assert summary.fields_normalized == 2

    def test_original_frame_unchanged(self):
        df = pl.DataFrame({"mass": ["2kg"]})
        FieldNormalizer().normalize_frame(df)
        assert df["mass"].to_list() == ["2kg"]

    def test_failed_cells_become_null(self):
        """Test isolated failures leave nulls."""
        df = pl.DataFrame({"mass": ["2kg", "heavy"]})
        result, summary = FieldNormalizer(fail_fast=False).normalize_frame(df)
        assert result["mass"].to_list() == [2000.0, None]
        assert summary.failed_fields == 1
        assert summary.errors[0].record_index == 1

    def test_typed_columns(self, registry, fixed_now):
        """Test dates and letters get their own dtypes."""
        df = pl.DataFrame({"date": ["d+1", "2024-01-15"], "letter": ["a", "b"]})
        result, _ = FieldNormalizer(registry).normalize_frame(df)

        assert result.schema["letter"] == pl.Int64
        assert result["letter"].to_list() == [65, 66]
        assert result["date"].to_list() == [fixed_now + timedelta(days=1), datetime(2024, 1, 15)]

    def test_no_matching_columns(self):
        df = pl.DataFrame({"label": ["a"]})
        result, summary = FieldNormalizer().normalize_frame(df)
        assert result.equals(df)
        assert summary.fields_normalized == 0
