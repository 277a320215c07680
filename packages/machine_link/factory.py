"""
Machine Link Factory

Factory functions for creating production NodeService instances.
Separates object creation from service logic (DI pattern).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from machine_core.state import NodeState

from .node import NodeService
from .peers import load_peers_from_file
from .receiver import StateReceiver
from .router import PeerRouter

if TYPE_CHECKING:
    from .config import Settings


def create_node_state(settings: Settings) -> NodeState:
    """Initial NodeState from settings (idle, no pulses)"""
    return NodeState(
        machine_num=settings.machine_num,
        next_node=settings.next_node,
        sequence_length=settings.sequence_length,
        policy=settings.policy,
    )


def create_node_service(
    settings: Settings,
    router: PeerRouter | None = None,
) -> NodeService:
    """
    Create a production NodeService with real I/O dependencies.

    Args:
        settings: Node settings
        router: PeerRouter implementation (default: built from settings.peers_file)

    Returns:
        Configured NodeService instance
    """
    if router is None:
        if settings.peers_file is not None:
            router = PeerRouter.from_peers(load_peers_from_file(settings.peers_file))
        else:
            router = PeerRouter()

    receiver = StateReceiver(create_node_state(settings))

    return NodeService(
        receiver=receiver,
        router=router,
        host=settings.listen_host,
        port=settings.listen_port,
        publish_interval=settings.publish_interval,
    )
