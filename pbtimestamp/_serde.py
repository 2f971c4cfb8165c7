"""RFC 3339 serde for Timestamp."""
import json
import logging

from pbtimestamp._datetime import UtcDateTime
from pbtimestamp._errors import DeserializationError
from pbtimestamp._errors import SerializationError
from pbtimestamp._errors import ShapeError
from pbtimestamp._timestamp import Timestamp

logger = logging.getLogger(__name__)


def serialize(timestamp: Timestamp) -> str:
    """Format a Timestamp as an RFC 3339 string in UTC.

    Raises SerializationError, with the underlying error as its cause, when
    the timestamp is outside the calendar range.
    """
    try:
        dt = timestamp.to_datetime()
    except OverflowError as exc:
        logger.debug("Cannot convert %r to a calendar value: %s", timestamp, exc)
        raise SerializationError(
            "failed to serialize {!r}: {}".format(timestamp, exc)
        ) from exc
    try:
        return dt.isoformat()
    except ValueError as exc:
        logger.debug("Cannot format %r as RFC 3339: %s", dt, exc)
        raise SerializationError(
            "failed to serialize {!r}: {}".format(timestamp, exc)
        ) from exc


def deserialize(value) -> Timestamp:
    """Parse an RFC 3339 string into a Timestamp.

    Only strings are accepted; any other value raises ShapeError. Malformed
    text raises DeserializationError carrying the parser's message.
    """
    if not isinstance(value, str):
        raise ShapeError(value)
    try:
        dt = UtcDateTime.parse(value)
    except (ValueError, OverflowError) as exc:
        logger.debug("Cannot parse %r as RFC 3339: %s", value, exc)
        raise DeserializationError(str(exc)) from exc
    return Timestamp.from_datetime(dt)


def to_json(timestamp: Timestamp) -> str:
    """Encode a Timestamp as a JSON string literal."""
    return json.dumps(serialize(timestamp))


def from_json(document: str) -> Timestamp:
    """Decode a JSON string literal into a Timestamp."""
    return deserialize(json.loads(document))


def json_default(obj):
    """``default`` hook for ``json.dumps`` that encodes Timestamps.

    >>> json.dumps({"at": Timestamp(1431684000, 0)}, default=json_default)
    '{"at": "2015-05-15T09:00:00Z"}'
    """
    if isinstance(obj, Timestamp):
        return serialize(obj)
    raise TypeError(
        "Object of type {} is not JSON serializable".format(type(obj).__name__)
    )
