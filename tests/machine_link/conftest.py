"""Pytest fixtures for machine_link tests."""

from __future__ import annotations

import pytest

from machine_core.state import NodeState
from machine_link.receiver import StateReceiver
from machine_link.sender import StateSender

from mocks import RecordingOscClient


@pytest.fixture
def osc_client() -> RecordingOscClient:
    """Create a fresh RecordingOscClient."""
    return RecordingOscClient()


@pytest.fixture
def sender(osc_client: RecordingOscClient) -> StateSender:
    """StateSender wired to a recording client."""
    sender = StateSender("127.0.0.1", 9000)
    sender._client = osc_client
    return sender


@pytest.fixture
def receiver() -> StateReceiver:
    """StateReceiver holding a default NodeState."""
    return StateReceiver(NodeState())
