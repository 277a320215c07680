"""
Frame buffers

FrameReader and FrameWriter implement the MessageReader / MessageWriter
protocols over plain lists of integers. Transports build a FrameReader
from whatever arrived (OSC arguments, a decoded datagram) and hand it to
NodeState.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from machine_core.exceptions import MalformedMessageError


class FrameReader:
    """
    Cursor over a finite batch of inbound frames.

    Usage:
        reader = FrameReader([[0, 0, 4, -1, 0]])
        while reader.next_frame():
            value = reader.read_int()
    """

    def __init__(self, frames: Iterable[Sequence[Any]]):
        self._frames = [list(frame) for frame in frames]
        self._frame_index = -1
        self._offset = 0

    @classmethod
    def single(cls, values: Sequence[Any]) -> FrameReader:
        """Reader holding exactly one frame"""
        return cls([values])

    def next_frame(self) -> bool:
        if self._frame_index + 1 >= len(self._frames):
            self._frame_index = len(self._frames)
            return False
        self._frame_index += 1
        self._offset = 0
        return True

    def read_int(self) -> Any:
        """Return the next value of the current frame (type checked by the caller)"""
        frame = self._current()
        if frame is None or self._offset >= len(frame):
            raise MalformedMessageError("Frame exhausted")
        value = frame[self._offset]
        self._offset += 1
        return value

    @property
    def remaining(self) -> int:
        frame = self._current()
        if frame is None:
            return 0
        return len(frame) - self._offset

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    def _current(self) -> list[Any] | None:
        if 0 <= self._frame_index < len(self._frames):
            return self._frames[self._frame_index]
        return None


class FrameWriter:
    """
    Outbound frame buffer.

    Integers are written into the open frame; end_frame() closes it.

    Usage:
        writer = FrameWriter()
        state.encode_full(writer)
        writer.end_frame()
        client.send_message(address, writer.frames[0])
    """

    def __init__(self) -> None:
        self._frames: list[list[int]] = []
        self._current: list[int] = []

    def write_int(self, value: int) -> None:
        self._current.append(int(value))

    def end_frame(self) -> None:
        """Close the open frame (no-op when nothing was written)"""
        if self._current:
            self._frames.append(self._current)
            self._current = []

    @property
    def frames(self) -> list[list[int]]:
        """Completed frames, oldest first"""
        return [list(frame) for frame in self._frames]

    def clear(self) -> None:
        self._frames.clear()
        self._current = []
