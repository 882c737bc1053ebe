"""Socket ownership shared by the Responder and Prober."""

import socket
from typing import Optional

from .config import DiscoveryConfig


class UDPEndpoint:
    """Owns one UDP socket for the lifetime of a role."""

    def __init__(self, config: Optional[DiscoveryConfig] = None):
        self.config = config or DiscoveryConfig()
        self._sock: Optional[socket.socket] = None

    @property
    def address(self) -> tuple:
        """(host, port) the socket is bound to."""
        if self._sock is None:
            raise RuntimeError(f"{type(self).__name__} socket is not open")
        return self._sock.getsockname()

    @property
    def port(self) -> int:
        return self.address[1]

    def close(self) -> None:
        """Close the UDP socket."""
        if self._sock:
            try:
                self._sock.close()
            except OSError:
                pass
            self._sock = None

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
