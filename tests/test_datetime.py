import datetime

import pytest

from pbtimestamp import ConversionOverflowError
from pbtimestamp import UtcDateTime


def test_calendar_fields():
    dt = UtcDateTime(2015, 5, 15, 9, 8, 7, 123456789)
    assert (dt.year, dt.month, dt.day) == (2015, 5, 15)
    assert (dt.hour, dt.minute, dt.second) == (9, 8, 7)
    assert dt.nanosecond == 123456789
    assert dt.unix_timestamp() == 1431684487
    assert dt.unix_timestamp_nanos() == 1431684487_123456789


@pytest.mark.parametrize(
    "args",
    [
        (2015, 2, 30),
        (2015, 13, 1),
        (2015, 1, 1, 24),
        (0, 1, 1),
        (2015, 1, 1, 0, 0, 0, 1_000_000_000),
        (2015, 1, 1, 0, 0, 0, -1),
    ],
)
def test_invalid_calendar_fields(args):
    with pytest.raises(ValueError):
        UtcDateTime(*args)


@pytest.mark.parametrize(
    "nanos,seconds,nanosecond",
    [
        (0, 0, 0),
        (1_500_000_000, 1, 500_000_000),
        (-1, -1, 999_999_999),
        (-500_000_000, -1, 500_000_000),
        (-1_000_000_000, -1, 0),
    ],
)
def test_from_unix_timestamp_nanos(nanos, seconds, nanosecond):
    dt = UtcDateTime.from_unix_timestamp_nanos(nanos)
    assert dt.unix_timestamp() == seconds
    assert dt.nanosecond == nanosecond
    assert dt.unix_timestamp_nanos() == nanos


def test_before_epoch_fields():
    dt = UtcDateTime.from_unix_timestamp_nanos(-1)
    assert (dt.year, dt.month, dt.day) == (1969, 12, 31)
    assert (dt.hour, dt.minute, dt.second) == (23, 59, 59)


@pytest.mark.parametrize("seconds", [-62_135_596_801, 253_402_300_800, 2**70])
def test_from_unix_timestamp_out_of_range(seconds):
    with pytest.raises(ConversionOverflowError):
        UtcDateTime.from_unix_timestamp(seconds)
    with pytest.raises(OverflowError):
        UtcDateTime.from_unix_timestamp_nanos(seconds * 1_000_000_000)


def test_from_unix_timestamp_nanosecond_range():
    with pytest.raises(ValueError):
        UtcDateTime.from_unix_timestamp(0, 1_000_000_000)


def test_from_datetime():
    naive = datetime.datetime(2015, 5, 15, 9, 0, 0, 5)
    aware = naive.replace(tzinfo=datetime.timezone.utc)
    assert UtcDateTime.from_datetime(naive) == UtcDateTime(2015, 5, 15, 9, 0, 0, 5000)
    assert UtcDateTime.from_datetime(aware) == UtcDateTime(2015, 5, 15, 9, 0, 0, 5000)


def test_from_datetime_with_nanosecond_attribute():
    class NanoDatetime(datetime.datetime):
        nanosecond = 789

    dt = NanoDatetime(2015, 5, 15, 9, 0, 0, 123456)
    assert UtcDateTime.from_datetime(dt).nanosecond == 123456789


def test_from_datetime_overflow():
    tz = datetime.timezone(datetime.timedelta(hours=1))
    dt = datetime.datetime(1, 1, 1, tzinfo=tz)
    with pytest.raises(ConversionOverflowError):
        UtcDateTime.from_datetime(dt)


def test_to_datetime_truncates():
    dt = UtcDateTime(2015, 5, 15, 9, 0, 0, 123456789)
    assert dt.to_datetime() == datetime.datetime(
        2015, 5, 15, 9, 0, 0, 123456, tzinfo=datetime.timezone.utc
    )
    assert UtcDateTime.from_unix_timestamp_nanos(-1).to_datetime() == datetime.datetime(
        1969, 12, 31, 23, 59, 59, 999999, tzinfo=datetime.timezone.utc
    )


def test_now():
    before = datetime.datetime.now(datetime.timezone.utc)
    now = UtcDateTime.now()
    assert now.to_datetime() >= before.replace(microsecond=0)
    assert 0 <= now.nanosecond < 1_000_000_000


def test_ordering_and_hash():
    a = UtcDateTime.from_unix_timestamp(0)
    b = UtcDateTime.from_unix_timestamp(0, 1)
    assert a < b
    assert b > a
    assert a == UtcDateTime(1970, 1, 1)
    assert hash(a) == hash(UtcDateTime(1970, 1, 1))
    assert a != "1970-01-01T00:00:00Z"


@pytest.mark.parametrize(
    "dt,text",
    [
        (UtcDateTime(2015, 5, 15, 9), "2015-05-15T09:00:00Z"),
        (UtcDateTime(2015, 5, 15, 9, 0, 0, 123_000_000), "2015-05-15T09:00:00.123Z"),
        (UtcDateTime(2015, 5, 15, 9, 0, 0, 123_456_000), "2015-05-15T09:00:00.123456Z"),
        (
            UtcDateTime(2015, 5, 15, 9, 0, 0, 123_456_789),
            "2015-05-15T09:00:00.123456789Z",
        ),
        (UtcDateTime(2015, 5, 15, 9, 0, 0, 1), "2015-05-15T09:00:00.000000001Z"),
        (UtcDateTime(1, 1, 1), "0001-01-01T00:00:00Z"),
        (
            UtcDateTime(9999, 12, 31, 23, 59, 59, 999_999_999),
            "9999-12-31T23:59:59.999999999Z",
        ),
    ],
)
def test_isoformat(dt, text):
    assert dt.isoformat() == text
    assert str(dt) == text
    assert UtcDateTime.parse(text) == dt


@pytest.mark.parametrize(
    "text",
    [
        "2015-05-15T11:00:00+02:00",
        "2015-05-15T04:00:00-05:00",
        "2015-05-15T09:00:00.000Z",
    ],
)
def test_parse_offsets(text):
    assert UtcDateTime.parse(text) == UtcDateTime(2015, 5, 15, 9)


@pytest.mark.parametrize(
    "text",
    [
        "not-a-date",
        "2015-05-15T09:00:00",
        "2015-05-15 09:00:00Z",
        "2015-05-15T09:00:00.1234567890Z",
        "",
        "2015-5-15T9:0:0Z",
        "2015-05-15T09:00:00.Z",
        "2015-05-15T11:00:00+2:00",
        "2015-05-15T11:00:00+0200",
        "2015-05-15T11:00:00+25:00",
        "2015-05-15T11:00:00+02:60",
        "2015-05-15T09:00:00Z ",
        "2015-05-15T09:00:00ZZ",
        "2015-05-15T24:00:00Z",
        "2015-05-15T09:00:61Z",
        "2015-05-15T09:00:60Z",
        "２015-05-15T09:00:00Z",
    ],
)
def test_parse_invalid(text):
    with pytest.raises(ValueError) as excinfo:
        UtcDateTime.parse(text)
    assert str(excinfo.value)


@pytest.mark.parametrize(
    "text",
    [
        "2015-05-15t09:00:00z",
        "2015-05-15t09:00:00Z",
        "2015-05-15T09:00:00z",
        "2015-05-15t11:00:00+02:00",
        "2015-05-15T09:00:00.000z",
    ],
)
def test_parse_lowercase(text):
    assert UtcDateTime.parse(text) == UtcDateTime(2015, 5, 15, 9)


@pytest.mark.parametrize(
    "text",
    [
        "2016-12-31T23:59:60Z",
        "2016-12-31T23:59:60.5Z",
        "2017-01-01T00:59:60+01:00",
    ],
)
def test_parse_leap_second(text):
    assert UtcDateTime.parse(text) == UtcDateTime(
        2016, 12, 31, 23, 59, 59, 999_999_999
    )


def test_repr():
    assert repr(UtcDateTime(1970, 1, 1)) == "UtcDateTime.parse('1970-01-01T00:00:00Z')"
