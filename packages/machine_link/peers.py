"""
Peer table models and loader.

Maps node ids to the OSC endpoints their state messages go to. The table
is static configuration; nodes do not discover each other.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, Field, field_validator


class PeerConfig(BaseModel):
    """
    OSC endpoint of one peer node.

    Example:
        >>> peer = PeerConfig(node=2, host="192.168.1.12", port=9000)
    """

    node: int = Field(..., ge=0, description="Peer machine_num")
    host: str = Field(default="127.0.0.1", description="Peer hostname or IP")
    port: Annotated[int, Field(ge=1024, le=65535)] = Field(
        ..., description="Peer OSC listen port (1024-65535)"
    )

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Ensure host is not blank"""
        if not v.strip():
            raise ValueError("Peer host must not be empty")
        return v.strip()


def load_peers(config_data: dict[str, Any]) -> dict[int, PeerConfig]:
    """
    Load and validate peers from a configuration dictionary.

    Args:
        config_data: Dictionary with a "peers" key mapping node id -> config

    Returns:
        Dictionary mapping node id -> PeerConfig

    Raises:
        ValueError: If configuration is invalid
        pydantic.ValidationError: If validation fails

    Example:
        >>> peers = load_peers({"peers": {"1": {"port": 9001}}})
        >>> assert peers[1].host == "127.0.0.1"
    """
    if "peers" not in config_data:
        raise ValueError("Configuration must have 'peers' key")

    peers_dict = config_data["peers"]
    if not isinstance(peers_dict, dict):
        raise ValueError("'peers' must be a dictionary")

    peers: dict[int, PeerConfig] = {}

    for key, peer_config in peers_dict.items():
        try:
            node = int(key)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Peer key must be an integer node id: {key!r}") from e

        if not isinstance(peer_config, dict):
            raise ValueError(f"Peer '{key}' must be a dictionary")

        # Ensure node matches key
        peer_config = dict(peer_config)
        if "node" not in peer_config:
            peer_config["node"] = node
        elif peer_config["node"] != node:
            raise ValueError(
                f"Peer node mismatch: key='{key}' vs config.node='{peer_config['node']}'"
            )

        peers[node] = PeerConfig(**peer_config)

    return peers


def load_peers_from_file(file_path: Path | str) -> dict[int, PeerConfig]:
    """
    Load peers from a YAML or JSON file.

    Args:
        file_path: Path to YAML or JSON peer table

    Returns:
        Dictionary mapping node id -> PeerConfig

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid or configuration is invalid
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Peer config file not found: {path}")

    content = path.read_text(encoding="utf-8")

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        try:
            config_data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    elif suffix == ".json":
        try:
            config_data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        raise ValueError(
            f"Unsupported file format: {suffix}. Use .yaml, .yml, or .json"
        )

    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration must be a dictionary, got {type(config_data)}")

    return load_peers(config_data)
