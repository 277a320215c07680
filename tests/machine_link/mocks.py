"""
Test doubles for machine_link

Recording stand-ins for the OSC client and peer senders so tests run
without sockets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from machine_core.state import NodeState


@dataclass
class RecordingOscClient:
    """Records what a SimpleUDPClient would have sent."""

    messages: list[tuple[str, Any]] = field(default_factory=list)
    packets: list[Any] = field(default_factory=list)
    fail: bool = False

    def send_message(self, address: str, value: Any) -> None:
        if self.fail:
            raise OSError("network unreachable")
        self.messages.append((address, value))

    def send(self, content: Any) -> None:
        if self.fail:
            raise OSError("network unreachable")
        self.packets.append(content)


@dataclass
class MockPeerSender:
    """Test double for the PeerSender protocol."""

    states: list[tuple[int, ...]] = field(default_factory=list)
    requests: list[tuple[int, ...]] = field(default_factory=list)
    accept: bool = True
    disconnected: bool = False

    def send_state(self, state: NodeState) -> bool:
        self.states.append(state.as_tuple())
        return self.accept

    def send_request(self, state: NodeState) -> bool:
        self.requests.append(state.as_tuple())
        return self.accept

    def disconnect(self) -> None:
        self.disconnected = True
