"""
Machine Link State Sender

Sends node state frames to a peer over OSC/UDP.
Each frame travels as one OSC message with five int arguments.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from pythonosc import osc_bundle_builder, osc_message, osc_message_builder, udp_client

from machine_core.constants.wire import (
    OSC_BATCH_ADDRESS,
    OSC_REQUEST_ADDRESS,
    OSC_STATE_ADDRESS,
)
from machine_core.wire import FrameRole, FrameSerializer, FrameWriter

if TYPE_CHECKING:
    from machine_core.state import NodeState

logger = logging.getLogger(__name__)


def encode_frames(*states: NodeState) -> list[list[int]]:
    """Encode each state into its own five-integer frame"""
    writer = FrameWriter()
    for state in states:
        state.encode_full(writer)
        writer.end_frame()
    return writer.frames


def _build_message(address: str, frame: Sequence[int]) -> osc_message.OscMessage:
    """One OSC message with every value packed as int32"""
    builder = osc_message_builder.OscMessageBuilder(address=address)
    for value in frame:
        builder.add_arg(value, arg_type="i")
    return builder.build()


class StateSender:
    """OSC sender for one peer node"""

    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 9000

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        serializer: FrameSerializer | None = None,
    ):
        self._host = host
        self._port = port
        self._serializer = serializer or FrameSerializer()
        self._client: udp_client.SimpleUDPClient | None = None

    def connect(self) -> None:
        """Initialize OSC client"""
        self._client = udp_client.SimpleUDPClient(self._host, self._port)
        logger.info(f"State sender connected to {self._host}:{self._port}")

    def disconnect(self) -> None:
        """Close OSC client"""
        self._client = None
        logger.info(f"State sender for {self._host}:{self._port} disconnected")

    def send_state(self, state: NodeState) -> bool:
        """
        Send a full-state message.

        Args:
            state: State to publish

        Returns:
            True if sent successfully
        """
        return self.send_frames(OSC_STATE_ADDRESS, encode_frames(state))

    def send_request(self, state: NodeState) -> bool:
        """
        Send a request message.

        The frame keeps the five-slot layout; receivers only apply
        machine_num, next_node and sequence_length.

        Args:
            state: State whose identity fields form the request

        Returns:
            True if sent successfully
        """
        return self.send_frames(OSC_REQUEST_ADDRESS, encode_frames(state))

    def send_frames(self, address: str, frames: Sequence[Sequence[int]]) -> bool:
        """
        Send frames to an OSC address.

        A single frame goes out as one message; several frames are
        wrapped in an immediate OSC bundle, one message per frame.

        Args:
            address: OSC address (e.g., "/machine/state")
            frames: Frames of integers in wire order

        Returns:
            True if sent successfully
        """
        if not self._client:
            logger.warning("State sender not connected")
            return False

        if not frames:
            logger.warning(f"No frames to send to {address}")
            return False

        try:
            messages = [_build_message(address, frame) for frame in frames]
            if len(messages) == 1:
                self._client.send(messages[0])
            else:
                bundle = osc_bundle_builder.OscBundleBuilder(
                    osc_bundle_builder.IMMEDIATELY
                )
                for msg in messages:
                    bundle.add_content(msg)
                self._client.send(bundle.build())
            return True

        except Exception as e:
            logger.error(f"OSC send error: {e}")
            return False

    def send_batch(self, role: FrameRole, frames: Sequence[Sequence[int]]) -> bool:
        """
        Send frames packed into a single blob argument.

        Args:
            role: "state" or "request"
            frames: Frames of integers in wire order

        Returns:
            True if sent successfully
        """
        if not self._client:
            logger.warning("State sender not connected")
            return False

        try:
            payload = self._serializer.serialize(role, frames)
            self._client.send_message(OSC_BATCH_ADDRESS, [payload])
            return True
        except Exception as e:
            logger.error(f"OSC batch send error: {e}")
            return False

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def __repr__(self) -> str:
        return f"StateSender(host={self._host!r}, port={self._port})"
