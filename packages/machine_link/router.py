"""
Peer router - sends node state to the peers it names.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from machine_link.sender import StateSender

if TYPE_CHECKING:
    from machine_core.state import NodeState
    from machine_link.peers import PeerConfig

logger = logging.getLogger(__name__)


class PeerSender(Protocol):
    """
    Protocol for peer senders.

    Implementations: StateSender
    """

    def send_state(self, state: NodeState) -> bool:
        """Send a full-state message to this peer."""
        ...

    def send_request(self, state: NodeState) -> bool:
        """Send a request message to this peer."""
        ...


class PeerRouter:
    """
    Routes node state to peer senders by node id.

    The ensemble graph lives in the states themselves: publish() follows
    ``state.next_node``. Peers missing from the table are skipped.

    Usage:
        >>> router = PeerRouter.from_peers(load_peers_from_file("peers.yaml"))
        >>> router.publish(state)  # to state.next_node
        >>> router.request(state, node=3)
    """

    def __init__(self) -> None:
        """Initialize router with no peers."""
        self._senders: dict[int, PeerSender] = {}

    @classmethod
    def from_peers(cls, peers: dict[int, PeerConfig]) -> PeerRouter:
        """Create a router with a connected StateSender per configured peer."""
        router = cls()
        for node, peer in peers.items():
            sender = StateSender(peer.host, peer.port)
            sender.connect()
            router.register_peer(node, sender)
        return router

    def register_peer(self, node: int, sender: PeerSender) -> None:
        """
        Register a peer sender.

        Args:
            node: Peer machine_num
            sender: Sender implementation (StateSender)
        """
        self._senders[node] = sender

    def unregister_peer(self, node: int) -> None:
        """Remove a peer sender."""
        self._senders.pop(node, None)

    def get_registered_peers(self) -> list[int]:
        """Get list of registered peer node ids."""
        return list(self._senders.keys())

    def publish(self, state: NodeState) -> bool:
        """
        Send the full state to its downstream peer.

        Returns:
            True if a sender accepted the message
        """
        sender = self._senders.get(state.next_node)
        if sender is None:
            logger.debug(f"No peer registered for next_node {state.next_node}")
            return False
        return sender.send_state(state)

    def request(self, state: NodeState, node: int) -> bool:
        """
        Send a request message to a peer.

        Returns:
            True if a sender accepted the message
        """
        sender = self._senders.get(node)
        if sender is None:
            logger.warning(f"Request skipped: no peer registered for node {node}")
            return False
        return sender.send_request(state)

    def broadcast(self, state: NodeState) -> int:
        """
        Send the full state to every registered peer.

        Returns:
            Number of peers the message was sent to
        """
        return sum(1 for sender in self._senders.values() if sender.send_state(state))

    def close(self) -> None:
        """Disconnect every sender that supports it."""
        for sender in self._senders.values():
            disconnect = getattr(sender, "disconnect", None)
            if disconnect is not None:
                disconnect()
        self._senders.clear()
