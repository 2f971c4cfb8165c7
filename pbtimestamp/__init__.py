from pbtimestamp._datetime import UtcDateTime
from pbtimestamp._errors import ConversionOverflowError
from pbtimestamp._errors import DeserializationError
from pbtimestamp._errors import SerializationError
from pbtimestamp._errors import ShapeError
from pbtimestamp._errors import TimestampError
from pbtimestamp._proto import MessageConverter
from pbtimestamp._proto import message_to_dict
from pbtimestamp._proto import parse_dict
from pbtimestamp._serde import deserialize
from pbtimestamp._serde import from_json
from pbtimestamp._serde import json_default
from pbtimestamp._serde import serialize
from pbtimestamp._serde import to_json
from pbtimestamp._timestamp import Timestamp

__all__ = [
    "ConversionOverflowError",
    "DeserializationError",
    "MessageConverter",
    "SerializationError",
    "ShapeError",
    "Timestamp",
    "TimestampError",
    "UtcDateTime",
    "deserialize",
    "from_json",
    "json_default",
    "message_to_dict",
    "parse_dict",
    "serialize",
    "to_json",
]
