"""Tests for the peer table loader."""

import json

import pytest
from pydantic import ValidationError

from machine_link.peers import PeerConfig, load_peers, load_peers_from_file


class TestPeerConfig:
    """Tests for PeerConfig validation."""

    def test_defaults(self):
        peer = PeerConfig(node=1, port=9001)
        assert peer.host == "127.0.0.1"

    def test_port_range(self):
        with pytest.raises(ValidationError):
            PeerConfig(node=1, port=80)
        with pytest.raises(ValidationError):
            PeerConfig(node=1, port=70000)

    def test_negative_node(self):
        with pytest.raises(ValidationError):
            PeerConfig(node=-1, port=9001)

    def test_blank_host(self):
        with pytest.raises(ValidationError):
            PeerConfig(node=1, host="  ", port=9001)


class TestLoadPeers:
    """Tests for load_peers function."""

    def test_load_peers_with_string_keys(self):
        peers = load_peers({
            "peers": {
                "1": {"host": "10.0.0.1", "port": 9001},
                "2": {"port": 9002},
            }
        })

        assert set(peers) == {1, 2}
        assert peers[1].node == 1
        assert peers[1].host == "10.0.0.1"
        assert peers[2].port == 9002

    def test_load_peers_with_int_keys(self):
        peers = load_peers({"peers": {3: {"node": 3, "port": 9003}}})
        assert peers[3].port == 9003

    def test_missing_peers_key(self):
        with pytest.raises(ValueError, match="'peers' key"):
            load_peers({})

    def test_peers_not_dict(self):
        with pytest.raises(ValueError, match="must be a dictionary"):
            load_peers({"peers": [1, 2]})

    def test_non_integer_key(self):
        with pytest.raises(ValueError, match="integer node id"):
            load_peers({"peers": {"drums": {"port": 9001}}})

    def test_node_mismatch(self):
        with pytest.raises(ValueError, match="mismatch"):
            load_peers({"peers": {"1": {"node": 2, "port": 9001}}})

    def test_does_not_mutate_input(self):
        config = {"peers": {"1": {"port": 9001}}}
        load_peers(config)
        assert config == {"peers": {"1": {"port": 9001}}}


class TestLoadPeersFromFile:
    """Tests for load_peers_from_file function."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "peers.yaml"
        path.write_text(
            "peers:\n"
            "  1:\n"
            "    host: 127.0.0.1\n"
            "    port: 9001\n"
            "  2:\n"
            "    port: 9002\n"
        )

        peers = load_peers_from_file(path)

        assert peers[1].port == 9001
        assert peers[2].port == 9002

    def test_json(self, tmp_path):
        path = tmp_path / "peers.json"
        path.write_text(json.dumps({"peers": {"4": {"port": 9004}}}))

        assert load_peers_from_file(str(path))[4].port == 9004

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_peers_from_file(tmp_path / "missing.yaml")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "peers.toml"
        path.write_text("")
        with pytest.raises(ValueError, match="Unsupported file format"):
            load_peers_from_file(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "peers.yml"
        path.write_text("peers: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_peers_from_file(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "peers.json"
        path.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_peers_from_file(path)

    def test_top_level_not_dict(self, tmp_path):
        path = tmp_path / "peers.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="must be a dictionary"):
            load_peers_from_file(path)
