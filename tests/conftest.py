# tests/conftest.py
import socket

import pytest

from udp_ping.discovery.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    """Keep a developer's UDP_PING_CONFIG out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def silent_peer():
    """A bound loopback socket that never answers anything."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    yield sock
    sock.close()


@pytest.fixture
def client_sock():
    """A plain loopback UDP socket with a short timeout."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(1.0)
    yield sock
    sock.close()


