"""Message types with Timestamp fields, built at import time.

Building from descriptors avoids checking in protoc output.
"""
from google.protobuf import descriptor_pb2
from google.protobuf import message_factory
from google.protobuf import timestamp_pb2
from google.protobuf.descriptor_pool import DescriptorPool

_FieldProto = descriptor_pb2.FieldDescriptorProto


def _build_pool() -> DescriptorPool:
    pool = DescriptorPool()
    timestamp_file = descriptor_pb2.FileDescriptorProto()
    timestamp_pb2.DESCRIPTOR.CopyToProto(timestamp_file)
    pool.AddSerializedFile(timestamp_file.SerializeToString())

    event_file = descriptor_pb2.FileDescriptorProto(
        name="example/event.proto",
        package="example",
        syntax="proto3",
        dependency=["google/protobuf/timestamp.proto"],
    )
    event = event_file.message_type.add(name="Event")
    event.field.add(
        name="name",
        json_name="name",
        number=1,
        type=_FieldProto.TYPE_STRING,
        label=_FieldProto.LABEL_OPTIONAL,
    )
    event.field.add(
        name="created_at",
        json_name="createdAt",
        number=2,
        type=_FieldProto.TYPE_MESSAGE,
        type_name=".google.protobuf.Timestamp",
        label=_FieldProto.LABEL_OPTIONAL,
    )
    event.field.add(
        name="history",
        json_name="history",
        number=3,
        type=_FieldProto.TYPE_MESSAGE,
        type_name=".google.protobuf.Timestamp",
        label=_FieldProto.LABEL_REPEATED,
    )
    pool.AddSerializedFile(event_file.SerializeToString())
    return pool


pool = _build_pool()
Event = message_factory.GetMessageClass(pool.FindMessageTypeByName("example.Event"))
