"""
Protocol interfaces for machine_core.

This module exports the reader/writer seams between NodeState and
whatever transport carries its frames.
"""

from machine_core.protocols.wire import MessageReader, MessageWriter

__all__ = [
    "MessageReader",
    "MessageWriter",
]
