"""
Wire Protocols

Abstract interfaces between NodeState and the messaging layer.

- MessageReader: cursor over inbound frames (transport -> NodeState)
- MessageWriter: sink for outbound integers (NodeState -> transport)

Data Flow:
    transport                      NodeState
    ─────────                      ─────────
    MessageReader  ─── ints ───►  decode_full / decode_request
    MessageWriter  ◄── ints ───   encode_full
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MessageReader(Protocol):
    """
    Inbound frame cursor.

    Implementations:
        - FrameReader: in-memory list of frames
        - Test doubles in unit tests
    """

    def next_frame(self) -> bool:
        """
        Advance to the next frame.

        Returns:
            True if a frame is now current, False when exhausted
        """
        ...

    def read_int(self) -> int:
        """
        Pull the next integer from the current frame.

        Raises:
            MalformedMessageError: If the current frame has no integers left
        """
        ...

    @property
    def remaining(self) -> int:
        """Number of integers left in the current frame."""
        ...


@runtime_checkable
class MessageWriter(Protocol):
    """
    Outbound integer sink.

    Implementations:
        - FrameWriter: in-memory frame buffer
    """

    def write_int(self, value: int) -> None:
        """Append one integer to the outgoing message."""
        ...
