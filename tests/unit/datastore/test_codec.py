"""Tests for the document JSON codec."""

import json
from datetime import UTC, date, datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID

from clientele.datastore import codec


class Colour(str, Enum):
    RED = "red"


class TestEncode:
    """Tests for encoding."""

    def test_datetime_is_fixed_width_utc(self) -> None:
        value = datetime(2024, 3, 1, 10, 0, tzinfo=timezone(timedelta(hours=1)))
        assert codec.encode_datetime(value) == "2024-03-01T09:00:00.000000+00:00"

    def test_naive_datetime_taken_as_utc(self) -> None:
        assert codec.encode_datetime(datetime(2024, 3, 1)) == (
            "2024-03-01T00:00:00.000000+00:00"
        )

    def test_bare_datetime_value(self) -> None:
        encoded = codec.encode(datetime(2024, 3, 1, tzinfo=UTC))
        assert json.loads(encoded) == "2024-03-01T00:00:00.000000+00:00"

    def test_other_types(self) -> None:
        encoded = codec.encode(
            {
                "day": date(2024, 3, 1),
                "uuid": UUID("12345678-1234-5678-1234-567812345678"),
                "amount": Decimal("1.5"),
                "colour": Colour.RED,
            }
        )
        assert json.loads(encoded) == {
            "day": "2024-03-01",
            "uuid": "12345678-1234-5678-1234-567812345678",
            "amount": 1.5,
            "colour": "red",
        }

    def test_encoded_datetimes_sort_chronologically(self) -> None:
        # 01:00 UTC and 01:30 UTC on the 2nd
        earlier = datetime(2024, 3, 1, 20, 0, tzinfo=timezone(timedelta(hours=-5)))
        later = datetime(2024, 3, 2, 1, 30, tzinfo=UTC)

        assert codec.encode_datetime(earlier) < codec.encode_datetime(later)


class TestDecode:
    """Tests for decoding."""

    def test_restores_nested_datetimes(self) -> None:
        created = datetime(2024, 3, 1, 9, 30, tzinfo=UTC)
        text = codec.encode({"_metadata_created": created, "history": [{"at": created}]})

        data = codec.decode(text)

        assert data["_metadata_created"] == created
        assert data["history"][0]["at"] == created

    def test_plain_strings_untouched(self) -> None:
        data = codec.decode(json.dumps({"note": "2024-03-01", "email": "a@example.com"}))
        assert data == {"note": "2024-03-01", "email": "a@example.com"}


class TestNormalize:
    """Tests for in-place datetime normalisation."""

    def test_nested_datetimes_become_utc(self) -> None:
        local = datetime(2024, 3, 1, 10, 0, tzinfo=timezone(timedelta(hours=1)))
        data = {"start_date": datetime(2024, 3, 1), "history": [{"at": local}], "n": 1}

        normalized = codec.normalize(data)

        assert normalized["start_date"] == datetime(2024, 3, 1, tzinfo=UTC)
        assert normalized["start_date"].tzinfo is UTC
        assert normalized["history"][0]["at"].tzinfo is UTC
        assert normalized["history"][0]["at"].hour == 9
        assert normalized["n"] == 1
