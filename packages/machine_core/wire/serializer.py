"""Frame serializer for datagram transports.

Packs a batch of node state frames, tagged with their role, into one
msgpack (or JSON) payload so non-OSC transports can carry them.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Literal, cast

import msgpack

from machine_core.exceptions import MalformedMessageError
from machine_core.wire.frames import FrameReader

# Serialization format type
SerializationFormat = Literal["json", "msgpack"]

# Message role: full-state or request
FrameRole = Literal["state", "request"]

_ROLES: tuple[str, ...] = ("state", "request")


class FrameSerializer:
    """Frame batch serializer.

    Supports both msgpack (default, compact) and JSON (readable) formats.

    Usage:
        serializer = FrameSerializer()  # default: msgpack
        data = serializer.serialize("state", writer.frames)
        role, reader = serializer.deserialize(data)
        state.decode_full(reader)

        # For debugging with JSON:
        serializer = FrameSerializer(format="json")
    """

    def __init__(self, format: SerializationFormat = "msgpack"):
        """Initialize serializer.

        Args:
            format: Serialization format ("msgpack" or "json")
        """
        self._format = format

    @property
    def format(self) -> SerializationFormat:
        """Get current serialization format."""
        return self._format

    def serialize(self, role: FrameRole, frames: Sequence[Sequence[int]]) -> bytes:
        """Serialize a batch of frames to bytes.

        Args:
            role: "state" for full-state frames, "request" for request frames
            frames: Frames of integers in wire order

        Returns:
            Serialized bytes
        """
        if role not in _ROLES:
            raise ValueError(f"Unknown frame role: {role}")

        data = {"role": role, "frames": [list(frame) for frame in frames]}
        if self._format == "json":
            return json.dumps(data).encode("utf-8")
        return cast(bytes, msgpack.packb(data, use_bin_type=True))

    def deserialize(self, payload: bytes) -> tuple[FrameRole, FrameReader]:
        """Deserialize bytes to a role and a frame reader.

        Args:
            payload: Bytes to deserialize

        Returns:
            Tuple of (role, reader over the frames)

        Raises:
            MalformedMessageError: If the payload cannot be decoded or has
                the wrong shape
        """
        try:
            if self._format == "json":
                result: Any = json.loads(payload.decode("utf-8"))
            else:
                result = msgpack.unpackb(payload, raw=False)
        except (ValueError, TypeError, msgpack.UnpackException) as e:
            raise MalformedMessageError(f"Undecodable payload: {e}") from e

        if not isinstance(result, dict):
            raise MalformedMessageError(f"Expected dict, got {type(result).__name__}")

        role = result.get("role")
        if role not in _ROLES:
            raise MalformedMessageError(f"Unknown frame role: {role!r}")

        frames = result.get("frames")
        if not isinstance(frames, list) or not all(isinstance(f, list) for f in frames):
            raise MalformedMessageError("'frames' must be a list of integer lists")

        return cast(FrameRole, role), FrameReader(frames)
