"""Timestamp value type and calendar bridge."""
import datetime
import typing as t

from google.protobuf.message import Message
from google.protobuf.timestamp_pb2 import Timestamp as TimestampMessage

from pbtimestamp._datetime import NANOS_PER_SECOND
from pbtimestamp._datetime import UtcDateTime

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _check_field(name: str, value, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            "{} must be an int, got {}".format(name, type(value).__name__)
        )
    if not low <= value <= high:
        raise ValueError(
            "{} {} does not fit in [{}, {}]".format(name, value, low, high)
        )
    return value


class Timestamp:
    """A point in time as ``seconds`` and ``nanos`` since the Unix epoch.

    Mirrors the field layout of ``google.protobuf.Timestamp``: ``seconds``
    is a signed 64-bit count and ``nanos`` a signed 32-bit offset. A
    normalized timestamp has ``0 <= nanos < 1_000_000_000``, but other
    values are stored as given.

    Equality and hashing are structural: two timestamps are equal only when
    both fields are equal, so ``Timestamp(1, 1_000_000_000)`` and
    ``Timestamp(2, 0)`` differ even though they denote the same instant.
    Use :meth:`normalized` before comparing if instant equality is wanted.
    """

    __slots__ = ("_seconds", "_nanos")

    def __init__(self, seconds: int = 0, nanos: int = 0):
        self._seconds = _check_field("seconds", seconds, _INT64_MIN, _INT64_MAX)
        self._nanos = _check_field("nanos", nanos, _INT32_MIN, _INT32_MAX)

    @property
    def seconds(self) -> int:
        return self._seconds

    @property
    def nanos(self) -> int:
        return self._nanos

    # region calendar bridge
    @classmethod
    def from_datetime(
        cls, dt: t.Union[UtcDateTime, datetime.datetime]
    ) -> "Timestamp":
        """Convert a calendar value to a Timestamp.

        Naive stdlib datetimes are taken to be UTC.
        """
        if not isinstance(dt, UtcDateTime):
            dt = UtcDateTime.from_datetime(dt)
        # UtcDateTime.nanosecond is always in 0..999_999_999, so it fits nanos.
        return cls(seconds=dt.unix_timestamp(), nanos=dt.nanosecond)

    def to_datetime(self) -> UtcDateTime:
        """Convert to a calendar value.

        Raises ConversionOverflowError when the instant is outside the
        calendar range; the value is never clamped.
        """
        # python ints are unbounded, so this cannot overflow for any i64/i32 pair
        total_nanos = self._seconds * NANOS_PER_SECOND + self._nanos
        return UtcDateTime.from_unix_timestamp_nanos(total_nanos)

    # endregion

    @classmethod
    def now(cls) -> "Timestamp":
        return cls.from_datetime(UtcDateTime.now())

    def normalized(self) -> "Timestamp":
        """Return the same instant with nanos in ``[0, 1_000_000_000)``."""
        seconds, nanos = divmod(self._nanos, NANOS_PER_SECOND)
        return Timestamp(seconds=self._seconds + seconds, nanos=nanos)

    # region protobuf messages
    @classmethod
    def from_message(cls, message: Message) -> "Timestamp":
        """Copy the fields of a ``google.protobuf.Timestamp`` message."""
        return cls(
            seconds=message.seconds,  # type: ignore[attr-defined]
            nanos=message.nanos,  # type: ignore[attr-defined]
        )

    def to_message(self) -> TimestampMessage:
        return TimestampMessage(seconds=self._seconds, nanos=self._nanos)

    # endregion

    def __eq__(self, other):
        if not isinstance(other, Timestamp):
            return NotImplemented
        return self._seconds == other._seconds and self._nanos == other._nanos

    def __hash__(self):
        return hash((self._seconds, self._nanos))

    def __repr__(self):
        return "Timestamp(seconds={}, nanos={})".format(self._seconds, self._nanos)
