from datetime import datetime, timezone

from app.utils.dates import EARLIEST, parse_timestamp, timestamp_sort_key


def test_parse_timestamp() -> None:
    assert parse_timestamp("2024-03-09") == datetime(2024, 3, 9, tzinfo=timezone.utc)
    assert parse_timestamp("2024-03-09T10:00:00") == datetime(2024, 3, 9, 10, tzinfo=timezone.utc)
    assert parse_timestamp("2024-03-09T10:00:00+02:00") == datetime(2024, 3, 9, 8, tzinfo=timezone.utc)
    assert parse_timestamp("not a date") is None
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None


def test_sort_key_puts_unparseable_values_first() -> None:
    values = ["2024-03-09T10:00:00+00:00", "garbage", "2024-03-09", None]

    assert sorted(values, key=timestamp_sort_key)[-2:] == ["2024-03-09", "2024-03-09T10:00:00+00:00"]
    assert timestamp_sort_key(None) == EARLIEST
