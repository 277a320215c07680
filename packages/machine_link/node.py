"""
Machine Link Node Service

Runs one ensemble node: an OSC receiver applying incoming frames to the
local NodeState, and a publish loop sending that state to next_node.
"""

from __future__ import annotations

import asyncio
import logging

from machine_link.receiver import StateReceiver
from machine_link.router import PeerRouter

logger = logging.getLogger(__name__)


class NodeService:
    """
    One node of the ensemble.

    The NodeState is owned by the receiver; the publish loop reads it
    through receiver.snapshot() so it never races a decode.
    """

    DEFAULT_PUBLISH_INTERVAL = 0.5

    def __init__(
        self,
        receiver: StateReceiver,
        router: PeerRouter,
        host: str = "0.0.0.0",
        port: int = 9000,
        publish_interval: float = DEFAULT_PUBLISH_INTERVAL,
    ):
        self.receiver = receiver
        self.router = router
        self._host = host
        self._port = port
        self._publish_interval = publish_interval
        self._running = False
        self.published = 0

    @property
    def is_running(self) -> bool:
        return self._running

    def publish_once(self) -> bool:
        """Send the current state to next_node"""
        sent = self.router.publish(self.receiver.snapshot())
        if sent:
            self.published += 1
        return sent

    async def _publish_loop(self) -> None:
        while self._running:
            self.publish_once()
            await asyncio.sleep(self._publish_interval)

    async def run(self) -> None:
        """Serve and publish until stop() is called"""
        self._running = True
        logger.info(f"Node {self.receiver.state.machine_num} starting")

        publisher = asyncio.create_task(self._publish_loop())
        try:
            await self.receiver.serve(self._host, self._port)
        finally:
            self._running = False
            publisher.cancel()
            try:
                await publisher
            except asyncio.CancelledError:
                pass

    def stop(self) -> None:
        """Stop serving and publishing"""
        self._running = False
        self.receiver.stop()
        self.router.close()
