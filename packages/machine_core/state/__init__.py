"""Machine node state"""

from .node_state import NodeState, ValidationPolicy

__all__ = [
    "NodeState",
    "ValidationPolicy",
]
