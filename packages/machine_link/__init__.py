"""
Machine Link

OSC transport for machine node state: sender, receiver, peer routing
and the node service that ties them together.
"""

from .config import Settings
from .factory import create_node_service, create_node_state
from .node import NodeService
from .peers import PeerConfig, load_peers, load_peers_from_file
from .receiver import StateReceiver
from .router import PeerRouter, PeerSender
from .sender import StateSender, encode_frames

__all__ = [
    "Settings",
    "NodeService",
    "StateReceiver",
    "StateSender",
    "PeerRouter",
    "PeerSender",
    "PeerConfig",
    "encode_frames",
    "load_peers",
    "load_peers_from_file",
    "create_node_service",
    "create_node_state",
]
