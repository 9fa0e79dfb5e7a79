"""Tests for hex object id generation."""

from datetime import datetime, timezone

import pytest

from core.ids import generate_object_id, object_id_timestamp
from core.validation.types import FieldType


class TestGenerateObjectId:
    def test_shape(self) -> None:
        oid = generate_object_id()
        assert len(oid) == 24
        assert oid == oid.lower()
        assert FieldType.ID.matches(oid)

    def test_unique(self) -> None:
        ids = {generate_object_id() for _ in range(1000)}
        assert len(ids) == 1000

    def test_same_process_shares_random_segment(self) -> None:
        first, second = generate_object_id(), generate_object_id()
        assert first[8:18] == second[8:18]

    def test_timestamp_round_trip(self) -> None:
        oid = generate_object_id(timestamp=1_700_000_000)
        assert object_id_timestamp(oid) == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)

    def test_sorted_by_time(self) -> None:
        assert generate_object_id(timestamp=1_000) < generate_object_id(timestamp=2_000)


class TestObjectIdTimestamp:
    def test_wrong_length(self) -> None:
        with pytest.raises(ValueError):
            object_id_timestamp("abc")

    def test_not_hex(self) -> None:
        with pytest.raises(ValueError):
            object_id_timestamp("z" * 24)
