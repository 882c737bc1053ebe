"""UDP ping Responder.

Binds the well-known port on all interfaces and answers every exact
``PING`` probe with the local host identifier. Any other datagram is
dropped without a reply.
"""

import socket
from typing import NoReturn, Optional

from ..errors import BindError, ReceiveError, SendError
from .config import DiscoveryConfig
from .endpoint import UDPEndpoint
from .hostname import resolve_hostname
from .protocol import PING_MSG, encode_reply, format_endpoint, is_probe


class Responder(UDPEndpoint):
    """Answers discovery probes with this host's identifier.

    The Responder never initiates traffic. Each request is handled on its
    own; nothing is kept between requests.
    """

    def __init__(self, config: Optional[DiscoveryConfig] = None):
        """Initialize Responder.

        Args:
            config: Discovery configuration. Default: port 34254 on all
                interfaces, identifier from the OS host name.
        """
        super().__init__(config)
        self.identifier: Optional[str] = self.config.hostname

    def _create_socket(self) -> socket.socket:
        """Create and bind the listening UDP socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((self.config.bind_address, self.config.port))
        except OSError as e:
            sock.close()
            raise BindError(
                f"Cannot bind UDP {self.config.bind_address}:{self.config.port}: {e}"
            ) from e
        return sock

    def open(self) -> None:
        """Resolve the identifier and bind the listening socket.

        Raises:
            HostnameResolutionError: If no host name is available.
            BindError: If the port cannot be bound (e.g. already in use).
        """
        if self.identifier is None:
            self.identifier = resolve_hostname()
        self._sock = self._create_socket()
        print(f"[server] Listening on UDP {self._display_address()}")

    def handle_one(self) -> bool:
        """Receive one datagram and reply if it is a probe.

        Returns:
            True if a reply was sent, False if the datagram was ignored.

        Raises:
            ReceiveError: If receiving fails.
            SendError: If sending the reply fails.
        """
        if self._sock is None:
            self.open()

        try:
            data, addr = self._sock.recvfrom(self._recv_size)
        except OSError as e:
            raise ReceiveError(f"Receive failed: {e}") from e

        if not is_probe(data):
            return False

        try:
            self._sock.sendto(encode_reply(self.identifier), addr)
        except OSError as e:
            raise SendError(f"Reply to {format_endpoint(addr)} failed: {e}") from e

        print(f"[server] Responded to {format_endpoint(addr)} with '{self.identifier}'")
        return True

    @property
    def _recv_size(self) -> int:
        # One byte past the probe; a truncated datagram must not match.
        return max(self.config.buffer_size, len(PING_MSG) + 1)

    def serve_forever(self) -> NoReturn:
        """Answer probes until a fatal error is raised."""
        if self._sock is None:
            self.open()
        while True:
            self.handle_one()

    def _display_address(self) -> str:
        host, port = self.address
        if host == "0.0.0.0":
            host = "*"
        return f"{host}:{port}"


def run_responder(config: Optional[DiscoveryConfig] = None) -> NoReturn:
    """Run a Responder until the process ends or a fatal error occurs."""
    with Responder(config) as responder:
        responder.serve_forever()
