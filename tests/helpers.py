# tests/helpers.py
import socket

from udp_ping.discovery.config import DiscoveryConfig


def loopback_config(**kwargs) -> DiscoveryConfig:
    """Config bound to loopback with a short collection window."""
    defaults = dict(
        bind_address="127.0.0.1",
        broadcast_address="127.0.0.1",
        window=0.3,
        poll_interval=0.05,
    )
    defaults.update(kwargs)
    return DiscoveryConfig(**defaults)


class FakeSocket:
    """Stands in for a UDP socket; recvfrom() yields scripted outcomes."""

    def __init__(self, outcomes=None):
        self.outcomes = list(outcomes or [])
        self.sent = []
        self.closed = False

    def recvfrom(self, bufsize):
        if not self.outcomes:
            raise socket.timeout("timed out")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def sendto(self, data, addr):
        self.sent.append((data, addr))
        return len(data)

    def getsockname(self):
        return ("127.0.0.1", 40000)

    def close(self):
        self.closed = True
