"""
Schemas & Canonicalization
File: tests/unit/test_canonical_json.py

Purpose: Unit tests for canonical JSON serialization.
These tests ensure structured content produces the same leaf digest
across runs regardless of key order or timezone representation.
"""

import math
from datetime import datetime, timedelta, timezone
from enum import Enum

import pytest
from pydantic import BaseModel, ConfigDict

from bloomtree.schemas import (
    CanonicalizationException,
    canonical_equals,
    canonicalize_value,
    dumps_canonical,
    format_datetime_canonical,
)


# =============================================================================
# Test Fixtures
# =============================================================================


class SampleEnum(str, Enum):
    """Sample enum for testing."""
    OPTION_A = "option_a"
    OPTION_B = "option_b"


class SampleModel(BaseModel):
    """Sample Pydantic model for testing."""
    model_config = ConfigDict(extra="forbid")

    name: str
    value: int
    optional_field: str | None = None


@pytest.fixture
def sample_datetime_utc() -> datetime:
    """A UTC-aware datetime."""
    return datetime(2026, 1, 27, 21, 35, 0, tzinfo=timezone.utc)


# =============================================================================
# Deterministic Ordering
# =============================================================================


class TestDeterministicOrdering:
    """Tests for deterministic JSON key ordering."""

    def test_dict_keys_sorted(self):
        """Keys should be sorted alphabetically in output."""
        data = {"zebra": 1, "apple": 2, "mango": 3}
        assert dumps_canonical(data) == '{"apple":2,"mango":3,"zebra":1}'

    def test_nested_dict_keys_sorted(self):
        data = {"outer": {"z": 1, "a": 2}, "inner": {"y": 3, "b": 4}}
        assert dumps_canonical(data) == '{"inner":{"b":4,"y":3},"outer":{"a":2,"z":1}}'

    def test_list_order_preserved(self):
        assert dumps_canonical([3, 1, 2]) == "[3,1,2]"

    def test_canonical_equals_ignores_key_order(self):
        assert canonical_equals({"a": 1, "b": 2}, {"b": 2, "a": 1})
        assert not canonical_equals({"a": 1}, {"a": 2})


# =============================================================================
# Value Types
# =============================================================================


class TestValueTypes:
    """Tests for canonicalize_value() type handling."""

    def test_none_fields_dropped(self):
        assert dumps_canonical({"a": 1, "b": None}) == '{"a":1}'

    def test_datetime_utc_z_suffix(self, sample_datetime_utc):
        assert format_datetime_canonical(sample_datetime_utc) == "2026-01-27T21:35:00Z"

    def test_datetime_offset_converted(self, sample_datetime_utc):
        offset = datetime(2026, 1, 27, 16, 35, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert format_datetime_canonical(offset) == format_datetime_canonical(sample_datetime_utc)

    def test_naive_datetime_treated_as_utc(self, sample_datetime_utc):
        naive = datetime(2026, 1, 27, 21, 35, 0)
        assert canonicalize_value(naive) == canonicalize_value(sample_datetime_utc)

    def test_microseconds_kept(self):
        dt = datetime(2026, 1, 27, 21, 35, 0, 123456, tzinfo=timezone.utc)
        assert format_datetime_canonical(dt) == "2026-01-27T21:35:00.123456Z"

    def test_enum_uses_value(self):
        assert canonicalize_value(SampleEnum.OPTION_B) == "option_b"

    def test_bytes_as_hex(self):
        assert canonicalize_value(b"\xde\xad") == "dead"

    def test_pydantic_model(self):
        model = SampleModel(name="x", value=3)
        assert dumps_canonical(model) == '{"name":"x","value":3}'

    def test_model_equals_dict(self):
        assert canonical_equals(SampleModel(name="x", value=3), {"value": 3, "name": "x"})

    def test_non_ascii_preserved(self):
        assert dumps_canonical({"k": "héllo"}) == '{"k":"héllo"}'


# =============================================================================
# Rejections
# =============================================================================


class TestRejections:
    """Values without a canonical form raise CanonicalizationException."""

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_floats(self, value):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"x": value})
        assert exc_info.value.details["path"] == "x"

    def test_unsupported_type(self):
        with pytest.raises(CanonicalizationException, match="Cannot canonicalize"):
            dumps_canonical({"items": [object()]})

    def test_set_rejected(self):
        with pytest.raises(CanonicalizationException):
            canonicalize_value({1, 2})
