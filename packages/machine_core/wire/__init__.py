"""In-memory frame buffers and datagram codec for node state frames."""

from machine_core.wire.frames import FrameReader, FrameWriter
from machine_core.wire.serializer import (
    FrameRole,
    FrameSerializer,
    SerializationFormat,
)

__all__ = [
    "FrameReader",
    "FrameWriter",
    "FrameRole",
    "FrameSerializer",
    "SerializationFormat",
]
