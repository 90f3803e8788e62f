from datetime import datetime, timezone

from utils.ids import form222_number, form41_id


def test_form222_number():
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert form222_number("AB1234567", ts, 0) == "AB1234567-1704067200000-1"
    assert form222_number("AB1234567", ts, 2).endswith("-3")


def test_form41_id():
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert form41_id("DEA41", ts) == "DEA41-1704067200000"
