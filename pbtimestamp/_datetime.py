"""Nanosecond precision UTC calendar values."""
import calendar
import datetime
import functools
import re
import time
import typing as t

from google.protobuf.timestamp_pb2 import Timestamp as TimestampMessage

from pbtimestamp._errors import ConversionOverflowError

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MICROSECOND = 1_000

# 0001-01-01T00:00:00Z and 9999-12-31T23:59:59Z, the bounds of both
# datetime.datetime and a valid google.protobuf.Timestamp.
MIN_UNIX_SECONDS = -62_135_596_800
MAX_UNIX_SECONDS = 253_402_300_799

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

_SECONDS_PER_DAY = 86_400

# date-time from RFC 3339 section 5.6, fraction capped at nanoseconds
_RFC3339 = re.compile(
    r"(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})[Tt]"
    r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]{1,9}))?"
    r"(?P<offset>[Zz]|[+-](?P<offset_hour>[0-9]{2}):(?P<offset_minute>[0-9]{2}))"
)


@functools.total_ordering
class UtcDateTime:
    """A UTC anchored instant with nanosecond precision.

    The stdlib datetime stops at microseconds, so the instant is kept as a
    whole epoch second count plus a sub-second nanosecond component which
    is always in ``[0, 1_000_000_000)``. Calendar fields are derived on
    demand.
    """

    __slots__ = ("_seconds", "_nanosecond")

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanosecond: int = 0,
    ):
        # let datetime validate the calendar fields
        dt = datetime.datetime(year, month, day, hour, minute, second)
        if not 0 <= nanosecond < NANOS_PER_SECOND:
            raise ValueError(
                "nanosecond must be in 0..{}, got {}".format(
                    NANOS_PER_SECOND - 1, nanosecond
                )
            )
        self._seconds = calendar.timegm(dt.utctimetuple())
        self._nanosecond = nanosecond

    @classmethod
    def from_unix_timestamp(cls, seconds: int, nanosecond: int = 0) -> "UtcDateTime":
        """Build from epoch seconds and a sub-second nanosecond component."""
        if not 0 <= nanosecond < NANOS_PER_SECOND:
            raise ValueError(
                "nanosecond must be in 0..{}, got {}".format(
                    NANOS_PER_SECOND - 1, nanosecond
                )
            )
        if not MIN_UNIX_SECONDS <= seconds <= MAX_UNIX_SECONDS:
            raise ConversionOverflowError(
                "unix timestamp {}s is out of range [{}, {}]".format(
                    seconds, MIN_UNIX_SECONDS, MAX_UNIX_SECONDS
                )
            )
        instance = cls.__new__(cls)
        instance._seconds = seconds
        instance._nanosecond = nanosecond
        return instance

    @classmethod
    def from_unix_timestamp_nanos(cls, nanos: int) -> "UtcDateTime":
        """Build from a count of nanoseconds since the epoch.

        Floor division keeps the sub-second part non-negative for instants
        before the epoch.
        """
        seconds, nanosecond = divmod(nanos, NANOS_PER_SECOND)
        return cls.from_unix_timestamp(seconds, nanosecond)

    @classmethod
    def from_datetime(cls, dt: datetime.datetime) -> "UtcDateTime":
        """Build from a stdlib datetime.

        Naive datetimes are taken to be UTC. A ``nanosecond`` attribute, as
        carried by ``pandas.Timestamp``, is added to the microseconds.
        """
        try:
            seconds = calendar.timegm(dt.utctimetuple())
        except OverflowError as exc:
            raise ConversionOverflowError(str(exc)) from exc
        nanosecond = dt.microsecond * NANOS_PER_MICROSECOND + getattr(
            dt, "nanosecond", 0
        )
        return cls.from_unix_timestamp(seconds, nanosecond)

    @classmethod
    def now(cls) -> "UtcDateTime":
        return cls.from_unix_timestamp_nanos(time.time_ns())

    @classmethod
    def parse(cls, text: str) -> "UtcDateTime":
        """Parse an RFC 3339 date-time string.

        ``T`` and ``Z`` may be lowercase. A leap second (``:60``) is read as
        ``:59.999999999`` and only allowed at 23:59:60 UTC. Raises ValueError
        with a diagnostic on malformed input.
        """
        match = _RFC3339.fullmatch(text)
        if match is None:
            raise ValueError(
                "Failed to parse timestamp: {!r} is not an RFC 3339 "
                "date-time.".format(text)
            )
        offset = match.group("offset").upper()
        if offset != "Z":
            if int(match.group("offset_hour")) > 23:
                raise ValueError(
                    "Failed to parse timestamp: offset hour out of range "
                    "in {!r}.".format(text)
                )
            if int(match.group("offset_minute")) > 59:
                raise ValueError(
                    "Failed to parse timestamp: offset minute out of range "
                    "in {!r}.".format(text)
                )
        second = match.group("second")
        fraction = match.group("fraction") or ""
        leap_second = second == "60"
        if leap_second:
            second, fraction = "59", ""
        message = TimestampMessage()
        message.FromJsonString(
            "{}T{}:{}:{}{}{}".format(
                match.group("date"),
                match.group("hour"),
                match.group("minute"),
                second,
                "." + fraction if fraction else "",
                offset,
            )
        )
        nanos = message.nanos
        if leap_second:
            if message.seconds % _SECONDS_PER_DAY != _SECONDS_PER_DAY - 1:
                raise ValueError(
                    "Failed to parse timestamp: leap second is only valid "
                    "at 23:59:60 UTC, got {!r}.".format(text)
                )
            nanos = NANOS_PER_SECOND - 1
        return cls.from_unix_timestamp(message.seconds, nanos)

    def isoformat(self) -> str:
        """Format as canonical RFC 3339 in UTC.

        The fraction has 0, 3, 6 or 9 digits, as in the protobuf JSON mapping.
        """
        message = TimestampMessage(seconds=self._seconds, nanos=self._nanosecond)
        return message.ToJsonString()

    def unix_timestamp(self) -> int:
        return self._seconds

    def unix_timestamp_nanos(self) -> int:
        return self._seconds * NANOS_PER_SECOND + self._nanosecond

    @property
    def nanosecond(self) -> int:
        return self._nanosecond

    def to_datetime(self) -> datetime.datetime:
        """Return an aware stdlib datetime, truncated to microseconds."""
        return _EPOCH + datetime.timedelta(
            seconds=self._seconds,
            microseconds=self._nanosecond // NANOS_PER_MICROSECOND,
        )

    @property
    def year(self) -> int:
        return self.to_datetime().year

    @property
    def month(self) -> int:
        return self.to_datetime().month

    @property
    def day(self) -> int:
        return self.to_datetime().day

    @property
    def hour(self) -> int:
        return self.to_datetime().hour

    @property
    def minute(self) -> int:
        return self.to_datetime().minute

    @property
    def second(self) -> int:
        return self.to_datetime().second

    def _key(self) -> t.Tuple[int, int]:
        return self._seconds, self._nanosecond

    def __eq__(self, other):
        if not isinstance(other, UtcDateTime):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, UtcDateTime):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "UtcDateTime.parse({!r})".format(self.isoformat())

    def __str__(self):
        return self.isoformat()
