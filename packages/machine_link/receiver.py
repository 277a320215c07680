"""
Machine Link State Receiver

OSC/UDP server that decodes incoming frames into the local NodeState.

Addresses:
- /machine/state: one full-state frame per message
- /machine/request: one request frame per message
- /machine/batch: msgpack blob holding several frames of either role

Malformed messages are logged, counted and dropped; they never stop the
server or touch the held state.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import TYPE_CHECKING, Any

from pythonosc.dispatcher import Dispatcher
from pythonosc.osc_server import AsyncIOOSCUDPServer

from machine_core.constants.wire import (
    OSC_BATCH_ADDRESS,
    OSC_REQUEST_ADDRESS,
    OSC_STATE_ADDRESS,
)
from machine_core.exceptions import MachineSyncError
from machine_core.state import NodeState
from machine_core.wire import FrameReader, FrameRole, FrameSerializer

if TYPE_CHECKING:
    from collections.abc import Callable

    from machine_core.protocols.wire import MessageReader

logger = logging.getLogger(__name__)


class StateReceiver:
    """
    Receives node state messages and applies them to a NodeState.

    Every mutation of the held state happens under ``lock``. Local
    sequencing code that ticks the same state should hold it too.

    Usage:
        receiver = StateReceiver(NodeState(machine_num=1))
        receiver.on_update = lambda role, state: print(state.describe())
        await receiver.serve("0.0.0.0", 9000)
    """

    def __init__(
        self,
        state: NodeState | None = None,
        serializer: FrameSerializer | None = None,
    ):
        self._state = state if state is not None else NodeState()
        self._serializer = serializer or FrameSerializer()
        self._lock = threading.Lock()
        self._transport: asyncio.BaseTransport | None = None
        self._stopped: asyncio.Event | None = None

        self._dispatcher = Dispatcher()
        # OSC callbacks return None so the server sends no replies
        self._dispatcher.map(OSC_STATE_ADDRESS, self._on_state)
        self._dispatcher.map(OSC_REQUEST_ADDRESS, self._on_request)
        self._dispatcher.map(OSC_BATCH_ADDRESS, self._on_batch)
        self._dispatcher.set_default_handler(self._handle_unknown)

        # Called with (role, snapshot) after every applied message
        self.on_update: Callable[[FrameRole, NodeState], Any] | None = None

        self.received = 0
        self.dropped = 0

    @property
    def state(self) -> NodeState:
        return self._state

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def is_serving(self) -> bool:
        return self._transport is not None

    @property
    def bound_address(self) -> tuple[str, int] | None:
        """(host, port) the server is bound to, None when not serving"""
        if self._transport is None:
            return None
        sockname = self._transport.get_extra_info("sockname")
        return sockname[0], sockname[1]

    def snapshot(self) -> NodeState:
        """Copy of the held state taken under the lock"""
        with self._lock:
            return self._state.clone()

    # ----------------------------------------------------------
    # OSC handlers
    # ----------------------------------------------------------

    def handle_state(self, address: str, *args: Any) -> bool:
        """Apply a full-state message; returns True if applied"""
        return self._apply("state", FrameReader.single(args), address)

    def handle_request(self, address: str, *args: Any) -> bool:
        """Apply a request message; returns True if applied"""
        return self._apply("request", FrameReader.single(args), address)

    def handle_batch(self, address: str, *args: Any) -> bool:
        """Apply a msgpack batch of frames; returns True if applied"""
        if len(args) != 1 or not isinstance(args[0], (bytes, bytearray)):
            self._drop(address, "expected a single blob argument")
            return False

        try:
            role, reader = self._serializer.deserialize(bytes(args[0]))
        except MachineSyncError as e:
            self._drop(address, str(e))
            return False

        return self._apply(role, reader, address)

    def _on_state(self, address: str, *args: Any) -> None:
        self.handle_state(address, *args)

    def _on_request(self, address: str, *args: Any) -> None:
        self.handle_request(address, *args)

    def _on_batch(self, address: str, *args: Any) -> None:
        self.handle_batch(address, *args)

    def _handle_unknown(self, address: str, *args: Any) -> None:
        logger.debug(f"Ignoring OSC message on unmapped address {address}")

    def _apply(self, role: FrameRole, reader: MessageReader, address: str) -> bool:
        with self._lock:
            # Decode into a scratch copy; a batch is applied whole or not at all
            scratch = self._state.clone()
            try:
                if role == "request":
                    scratch.decode_request(reader)
                else:
                    scratch.decode_full(reader)
            except MachineSyncError as e:
                self._drop(address, str(e))
                return False
            self._state.copy_from(scratch)
            self.received += 1
            snapshot = scratch

        if self.on_update is not None:
            try:
                self.on_update(role, snapshot)
            except Exception as e:
                logger.error(f"Update callback error: {e}")
        return True

    def _drop(self, address: str, reason: str) -> None:
        self.dropped += 1
        logger.warning(f"Dropped message on {address}: {reason}")

    # ----------------------------------------------------------
    # Server lifecycle
    # ----------------------------------------------------------

    async def serve(self, host: str, port: int) -> None:
        """
        Listen for OSC datagrams until stop() is called.

        Args:
            host: Interface to bind
            port: UDP port to bind
        """
        loop = asyncio.get_running_loop()
        server = AsyncIOOSCUDPServer((host, port), self._dispatcher, loop)
        self._stopped = asyncio.Event()
        self._transport, _ = await server.create_serve_endpoint()
        logger.info(f"State receiver listening on {host}:{port}")

        try:
            await self._stopped.wait()
        finally:
            self._transport.close()
            self._transport = None
            logger.info("State receiver stopped")

    def stop(self) -> None:
        """Stop a running serve() call"""
        if self._stopped is not None:
            self._stopped.set()
