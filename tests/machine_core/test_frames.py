"""Tests for FrameReader and FrameWriter."""

import pytest

from machine_core.exceptions import MalformedMessageError
from machine_core.protocols import MessageReader, MessageWriter
from machine_core.wire import FrameReader, FrameWriter


class TestFrameReader:
    """Tests for FrameReader cursor."""

    def test_implements_protocol(self):
        assert isinstance(FrameReader([]), MessageReader)

    def test_empty_reader(self):
        reader = FrameReader([])
        assert reader.next_frame() is False
        assert reader.remaining == 0

    def test_reads_frames_in_order(self):
        reader = FrameReader([[1, 2], [3]])

        assert reader.next_frame()
        assert reader.remaining == 2
        assert reader.read_int() == 1
        assert reader.read_int() == 2
        assert reader.remaining == 0

        assert reader.next_frame()
        assert reader.read_int() == 3

        assert reader.next_frame() is False

    def test_next_frame_skips_unread_values(self):
        reader = FrameReader([[1, 2, 3], [4]])
        reader.next_frame()
        reader.read_int()
        reader.next_frame()
        assert reader.read_int() == 4

    def test_read_past_frame_raises(self):
        reader = FrameReader.single([1])
        reader.next_frame()
        reader.read_int()
        with pytest.raises(MalformedMessageError):
            reader.read_int()

    def test_read_before_first_frame_raises(self):
        reader = FrameReader.single([1])
        with pytest.raises(MalformedMessageError):
            reader.read_int()

    def test_exhausted_reader_stays_exhausted(self):
        reader = FrameReader.single([1])
        reader.next_frame()
        assert reader.next_frame() is False
        assert reader.next_frame() is False
        assert reader.remaining == 0

    def test_frame_count(self):
        assert FrameReader([[1], [2], [3]]).frame_count == 3

    def test_accepts_tuples(self):
        reader = FrameReader.single((5, 6))
        reader.next_frame()
        assert reader.read_int() == 5


class TestFrameWriter:
    """Tests for FrameWriter buffer."""

    def test_implements_protocol(self):
        assert isinstance(FrameWriter(), MessageWriter)

    def test_collects_frames(self):
        writer = FrameWriter()
        writer.write_int(1)
        writer.write_int(2)
        writer.end_frame()
        writer.write_int(3)
        writer.end_frame()
        assert writer.frames == [[1, 2], [3]]

    def test_open_frame_not_listed(self):
        writer = FrameWriter()
        writer.write_int(1)
        assert writer.frames == []

    def test_empty_end_frame_is_noop(self):
        writer = FrameWriter()
        writer.end_frame()
        assert writer.frames == []

    def test_frames_returns_copy(self):
        writer = FrameWriter()
        writer.write_int(1)
        writer.end_frame()
        writer.frames[0].append(99)
        assert writer.frames == [[1]]

    def test_clear(self):
        writer = FrameWriter()
        writer.write_int(1)
        writer.end_frame()
        writer.write_int(2)
        writer.clear()
        writer.end_frame()
        assert writer.frames == []
