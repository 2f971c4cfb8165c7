"""Exception hierarchy for timestamp conversion and serde."""


class TimestampError(Exception):
    """Base exception for timestamp conversion errors."""


class ConversionOverflowError(TimestampError, OverflowError):
    """Raised when an instant is outside the representable calendar range."""


class SerializationError(TimestampError, ValueError):
    """Raised when a timestamp cannot be written as RFC 3339 text."""


class DeserializationError(TimestampError, ValueError):
    """Raised when RFC 3339 text cannot be read into a timestamp.

    The message is the parser's diagnostic, unchanged.
    """


class ShapeError(TimestampError, TypeError):
    """Raised when a value handed to the deserializer is not a string."""

    def __init__(self, value, expected: str = "a date string"):
        super().__init__(
            "invalid type: {}, expected {}".format(type(value).__name__, expected)
        )
        self.value = value
        self.expected = expected
