"""Exceptions raised by the node state codec"""


class MachineSyncError(Exception):
    """Base exception for all machine sync errors"""
    pass


class MalformedMessageError(MachineSyncError):
    """Incoming frame is short, non-integer, or undecodable"""
    pass


class InvariantViolationError(MachineSyncError):
    """Decoded values break a NodeState invariant"""
    pass
