"""
Machine Link Node Entry Point

Run as:
    python -m machine_link
    machine-node (after pip install)

Defaults come from MACHINE_* environment variables (see config.Settings).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from types import FrameType

from .config import Settings
from .factory import create_node_service


def setup_logging(debug: bool = False) -> None:
    """Configure logging"""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main() -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="Machine Link Node - publishes and receives node state"
    )
    parser.add_argument("--machine", type=int, default=None, help="machine_num of this node")
    parser.add_argument("--next", type=int, default=None, help="next_node peer id")
    parser.add_argument("--length", type=int, default=None, help="sequence_length")
    parser.add_argument("--port", type=int, default=None, help="OSC listen port")
    parser.add_argument("--peers", default=None, help="Peer table (YAML or JSON)")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    overrides = {
        "machine_num": args.machine,
        "next_node": args.next,
        "sequence_length": args.length,
        "listen_port": args.port,
        "peers_file": args.peers,
    }
    settings = Settings(**{k: v for k, v in overrides.items() if v is not None})

    setup_logging(args.debug or settings.debug)
    logger = logging.getLogger(__name__)

    service = create_node_service(settings)

    # Handle shutdown signals
    def signal_handler(signum: int, frame: FrameType | None) -> None:
        logger.info("Shutdown signal received")
        service.stop()

    signal.signal(signal.SIGTERM, signal_handler)

    logger.info(f"Starting node {settings.machine_num} -> {settings.next_node}")
    logger.info(f"  OSC: {settings.listen_host}:{settings.listen_port}")

    try:
        asyncio.run(service.run())
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt")
    finally:
        service.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
