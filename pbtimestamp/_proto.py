import json
import typing as t

from google.protobuf import json_format
from google.protobuf.descriptor_pool import DescriptorPool
from google.protobuf.message import Message
from google.protobuf.timestamp_pb2 import Timestamp as TimestampMessage

from pbtimestamp._serde import deserialize
from pbtimestamp._serde import serialize
from pbtimestamp._timestamp import Timestamp


def _serialize_timestamp_message(message: Message) -> str:
    """Print a Timestamp message through the RFC 3339 codec."""
    return serialize(Timestamp.from_message(message))


def _deserialize_timestamp_message(value, message: Message, path: t.Optional[str]):
    """Parse RFC 3339 text into a Timestamp message in place."""
    timestamp = deserialize(value)
    # assign fields rather than CopyFrom; the message may come from another pool
    message.seconds = timestamp.seconds  # type: ignore[attr-defined]
    message.nanos = timestamp.nanos  # type: ignore[attr-defined]


# region serde overrides
class _Printer(json_format._Printer):  # type: ignore
    """Printer override to handle custom messages."""

    def __init__(self, custom_serializers=None, **kwargs):
        self._custom_serializers = custom_serializers or {}
        super().__init__(**kwargs)

    def _MessageToJsonObject(self, message):
        full_name = message.DESCRIPTOR.full_name
        if full_name in self._custom_serializers:
            return self._custom_serializers[full_name](message)
        return super()._MessageToJsonObject(message)


class _Parser(json_format._Parser):  # type: ignore
    """Parser override to handle custom messages."""

    def __init__(self, custom_deserializers=None, **kwargs):
        self._custom_deserializers = custom_deserializers or {}
        super().__init__(**kwargs)

    def ConvertMessage(self, value, message, path):
        full_name = message.DESCRIPTOR.full_name
        if full_name in self._custom_deserializers:
            self._custom_deserializers[full_name](value, message, path)
            return
        super().ConvertMessage(value, message, path)


# endregion


class MessageConverter:
    def __init__(self):
        self._custom_serializers: t.Dict[str, t.Callable] = {}
        self._custom_deserializers: t.Dict[str, t.Callable] = {}
        self.register_timestamp_serializer()
        self.register_timestamp_deserializer()

    def register_serializer(self, message: t.Type[Message], serializer: t.Callable):
        """Map a message type to a custom serializer.

        The serializer receives the message and returns a JSON compatible
        object that replaces the message in the output.
        """
        full_name = message.DESCRIPTOR.full_name
        self._custom_serializers[full_name] = serializer

    def unregister_serializer(self, message: t.Type[Message]):
        full_name = message.DESCRIPTOR.full_name
        self._custom_serializers.pop(full_name, None)

    def register_deserializer(self, message: t.Type[Message], deserializer: t.Callable):
        """Map a message type to a custom deserializer.

        The deserializer is called as ``deserializer(value, message, path)``
        and fills ``message`` in place.
        """
        full_name = message.DESCRIPTOR.full_name
        self._custom_deserializers[full_name] = deserializer

    def unregister_deserializer(self, message: t.Type[Message]):
        full_name = message.DESCRIPTOR.full_name
        self._custom_deserializers.pop(full_name, None)

    # region timestamp
    def register_timestamp_serializer(self):
        self.register_serializer(TimestampMessage, _serialize_timestamp_message)

    def unregister_timestamp_serializer(self):
        self.unregister_serializer(TimestampMessage)

    def register_timestamp_deserializer(self):
        self.register_deserializer(TimestampMessage, _deserialize_timestamp_message)

    def unregister_timestamp_deserializer(self):
        self.unregister_deserializer(TimestampMessage)

    # endregion

    def message_to_dict(
        self,
        message: Message,
        preserving_proto_field_name: bool = False,
        use_integers_for_enums: bool = False,
        descriptor_pool: t.Optional[DescriptorPool] = None,
        float_precision: t.Optional[int] = None,
    ):
        """Convert a message to a JSON compatible object.

        Timestamp messages, top level or nested, become RFC 3339 strings via
        the registered serializer. The remaining options are handed to
        protobuf's printer unchanged; see ``json_format.MessageToDict``.

        Raises SerializationError for a Timestamp outside years 1..9999.
        """
        printer = _Printer(
            custom_serializers=self._custom_serializers,
            preserving_proto_field_name=preserving_proto_field_name,
            use_integers_for_enums=use_integers_for_enums,
            descriptor_pool=descriptor_pool,
            float_precision=float_precision,
        )
        return printer._MessageToJsonObject(message)

    def message_to_json(
        self,
        message: Message,
        indent: t.Optional[int] = None,
        sort_keys: bool = False,
        **kwargs,
    ) -> str:
        """Serialize a message to a JSON document.

        Keyword arguments are passed to :meth:`message_to_dict`.
        """
        return json.dumps(
            self.message_to_dict(message, **kwargs), indent=indent, sort_keys=sort_keys
        )

    def parse_dict(
        self,
        value: t.Any,
        message: Message,
        ignore_unknown_fields: bool = False,
        descriptor_pool: t.Optional[DescriptorPool] = None,
        max_recursion_depth: int = 100,
    ) -> Message:
        """Fill ``message`` in place from a JSON compatible object.

        Strings destined for Timestamp messages go through the RFC 3339
        deserializer. A bad timestamp at the top level raises the codec error
        itself; inside a field protobuf wraps it in ``json_format.ParseError``
        naming the field. The other options are protobuf's; see
        ``json_format.ParseDict``.
        """
        parser = _Parser(
            custom_deserializers=self._custom_deserializers,
            ignore_unknown_fields=ignore_unknown_fields,
            descriptor_pool=descriptor_pool,
            max_recursion_depth=max_recursion_depth,
        )
        parser.ConvertMessage(value=value, message=message, path=None)
        return message

    def parse_json(
        self, text: t.Union[str, bytes], message: Message, **kwargs
    ) -> Message:
        """Parse a JSON document into a message.

        Keyword arguments are passed to :meth:`parse_dict`.
        """
        try:
            value = json.loads(text)
        except ValueError as exc:
            raise json_format.ParseError(str(exc)) from exc
        return self.parse_dict(value, message, **kwargs)


def message_to_dict(
    message: Message,
    preserving_proto_field_name: bool = False,
    use_integers_for_enums: bool = False,
    descriptor_pool: t.Optional[DescriptorPool] = None,
    float_precision: t.Optional[int] = None,
    message_converter: t.Optional[MessageConverter] = None,
):
    """Serialize a message to a dict, printing Timestamps as RFC 3339.

    Uses ``message_converter`` when given, otherwise a fresh
    :class:`MessageConverter`.
    """
    message_converter = message_converter or MessageConverter()
    return message_converter.message_to_dict(
        message,
        preserving_proto_field_name=preserving_proto_field_name,
        use_integers_for_enums=use_integers_for_enums,
        descriptor_pool=descriptor_pool,
        float_precision=float_precision,
    )


def parse_dict(
    value: t.Any,
    message: Message,
    ignore_unknown_fields: bool = False,
    descriptor_pool: t.Optional[DescriptorPool] = None,
    max_recursion_depth: int = 100,
    message_converter: t.Optional[MessageConverter] = None,
) -> Message:
    """Fill a message from a dict, parsing Timestamps as RFC 3339.

    Uses ``message_converter`` when given, otherwise a fresh
    :class:`MessageConverter`.
    """
    message_converter = message_converter or MessageConverter()
    return message_converter.parse_dict(
        value,
        message,
        ignore_unknown_fields=ignore_unknown_fields,
        descriptor_pool=descriptor_pool,
        max_recursion_depth=max_recursion_depth,
    )
