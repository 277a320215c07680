"""Tests for StateSender."""

import pytest
from pythonosc.osc_bundle import OscBundle
from pythonosc.osc_message import OscMessage

from machine_core.state import NodeState
from machine_core.wire import FrameSerializer
from machine_link.sender import StateSender, encode_frames


class TestEncodeFrames:
    """Tests for encode_frames helper."""

    def test_one_frame_per_state(self):
        frames = encode_frames(NodeState(), NodeState(3, 5, 8, 2, 1))
        assert frames == [[0, 0, 4, -1, 0], [3, 5, 8, 2, 1]]


class TestStateSenderConnection:
    """Tests for connect/disconnect."""

    def test_defaults(self):
        sender = StateSender()
        assert sender._host == "127.0.0.1"
        assert sender._port == 9000
        assert not sender.is_connected

    def test_send_returns_false_when_not_connected(self):
        sender = StateSender()
        assert sender.send_state(NodeState()) is False
        assert sender.send_batch("state", [[0, 0, 4, -1, 0]]) is False

    def test_send_with_connected_sender(self):
        """Real UDP send succeeds even if nothing is listening."""
        sender = StateSender("127.0.0.1", 59123)
        sender.connect()
        assert sender.is_connected

        assert sender.send_state(NodeState(1, 2, 4, 0, 0)) is True

        sender.disconnect()
        assert not sender.is_connected

    def test_repr(self):
        assert repr(StateSender("10.0.0.2", 9001)) == "StateSender(host='10.0.0.2', port=9001)"


class TestStateSenderMessages:
    """Tests for what goes on the wire."""

    def test_send_state_address_and_args(self, sender, osc_client):
        assert sender.send_state(NodeState(3, 5, 8, 2, 1)) is True

        msg = osc_client.packets[0]
        assert isinstance(msg, OscMessage)
        assert msg.address == "/machine/state"
        assert msg.params == [3, 5, 8, 2, 1]

    def test_send_request_keeps_five_slots(self, sender, osc_client):
        assert sender.send_request(NodeState(3, 5, 8, -1, 0)) is True

        msg = osc_client.packets[0]
        assert msg.address == "/machine/request"
        assert msg.params == [3, 5, 8, -1, 0]

    def test_multiple_frames_sent_as_bundle(self, sender, osc_client):
        frames = encode_frames(NodeState(1, 2, 4, 0, 0), NodeState(1, 2, 4, 1, 0))

        assert sender.send_frames("/machine/state", frames) is True

        assert osc_client.messages == []
        bundle = osc_client.packets[0]
        assert isinstance(bundle, OscBundle)
        assert bundle.num_contents == 2
        assert [msg.params for msg in bundle] == frames
        assert all(msg.address == "/machine/state" for msg in bundle)

    def test_empty_frames_not_sent(self, sender, osc_client):
        assert sender.send_frames("/machine/state", []) is False
        assert osc_client.messages == []
        assert osc_client.packets == []

    @pytest.mark.parametrize("frames", [
        [[2**40, 0, 4, -1, 0]],
        [[1, 2, 4, 0, 0], [2**40, 0, 4, -1, 0]],
    ])
    def test_values_beyond_int32_fail_on_every_path(self, sender, osc_client, frames):
        assert sender.send_frames("/machine/state", frames) is False
        assert osc_client.packets == []

    def test_send_batch_blob(self, sender, osc_client):
        frames = [[1, 2, 4, 0, 1], [3, 4, 8, 5, 2]]

        assert sender.send_batch("state", frames) is True

        address, args = osc_client.messages[0]
        assert address == "/machine/batch"
        role, reader = FrameSerializer().deserialize(args[0])
        assert role == "state"
        assert reader.frame_count == 2

    def test_send_error_returns_false(self, sender, osc_client, caplog):
        osc_client.fail = True
        assert sender.send_state(NodeState()) is False
        assert "OSC send error" in caplog.text

    def test_batch_bad_role_returns_false(self, sender, osc_client):
        assert sender.send_batch("status", [[1, 2, 3, 4, 5]]) is False
        assert osc_client.messages == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
