"""machine_core - node state record and wire codec for machine ensembles."""

from machine_core.exceptions import (
    InvariantViolationError,
    MachineSyncError,
    MalformedMessageError,
)
from machine_core.state import NodeState, ValidationPolicy

__all__ = [
    "NodeState",
    "ValidationPolicy",
    "MachineSyncError",
    "MalformedMessageError",
    "InvariantViolationError",
]
