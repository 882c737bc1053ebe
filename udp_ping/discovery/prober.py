"""UDP ping Prober.

Broadcasts a single ``PING`` probe to the Responder port and reports every
reply that arrives within the collection window. Target Responders answer
with their host identifier as UTF-8 text.
"""

import socket
import time
from dataclasses import dataclass, field
from typing import Optional

from ..errors import BindError, ReceiveError, SendError, SocketConfigError
from .config import DiscoveryConfig
from .endpoint import UDPEndpoint
from .protocol import PING_MSG, decode_reply, format_endpoint
from .window import CollectionWindow


@dataclass
class Reply:
    """A reply received from a Responder."""
    host: str
    port: int
    text: str
    received_at: float = field(default_factory=time.time)

    @property
    def endpoint(self) -> str:
        """Sender endpoint as host:port."""
        return f"{self.host}:{self.port}"

    def __str__(self) -> str:
        return f"{self.endpoint} -> {self.text}"


class Prober(UDPEndpoint):
    """Sends one discovery probe and collects the replies.

    Every reply is reported in arrival order. Replies are not deduplicated,
    so a Responder answering twice shows up twice.
    """

    def __init__(self, config: Optional[DiscoveryConfig] = None, verbose: bool = True):
        """Initialize Prober.

        Args:
            config: Discovery configuration. Default: broadcast to
                255.255.255.255:34254 and collect for 5 seconds.
            verbose: Print progress and each reply to stdout.
        """
        super().__init__(config)
        self.verbose = verbose
        self.window = CollectionWindow(self.config.window)

    @property
    def target(self) -> tuple:
        """(host, port) the probe is sent to."""
        return self.config.broadcast_address, self.config.port

    def _create_socket(self) -> socket.socket:
        """Create, bind and configure the UDP socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((self.config.bind_address, 0))
        except OSError as e:
            sock.close()
            raise BindError(
                f"Cannot bind UDP {self.config.bind_address}:0: {e}"
            ) from e

        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        except OSError as e:
            sock.close()
            raise SocketConfigError(f"Cannot enable broadcast: {e}") from e

        sock.settimeout(self.config.poll_interval)
        return sock

    def open(self) -> None:
        """Open the ephemeral, broadcast-enabled socket.

        Raises:
            BindError: If no local endpoint can be bound.
            SocketConfigError: If broadcast cannot be enabled.
        """
        self._sock = self._create_socket()

    def send_probe(self) -> None:
        """Send the probe and start the collection window.

        Raises:
            SendError: If the probe cannot be sent.
        """
        if self._sock is None:
            self.open()

        try:
            self._sock.sendto(PING_MSG, self.target)
        except OSError as e:
            raise SendError(
                f"Probe to {format_endpoint(self.target)} failed: {e}"
            ) from e

        self.window.start()
        self._echo(f"[client] Broadcast PING to {format_endpoint(self.target)}, awaiting replies...")

    def collect(self) -> list[Reply]:
        """Collect replies until the window closes.

        The deadline is checked each time a receive times out, so the
        effective window ends at the first timeout past the deadline.

        Returns:
            Replies in arrival order.

        Raises:
            ReceiveError: On any receive failure other than a timeout.
        """
        if self._sock is None:
            self.open()
        if not self.window.started:
            self.window.start()

        replies: list[Reply] = []

        while True:
            try:
                data, addr = self._sock.recvfrom(self.config.buffer_size)
            except socket.timeout:
                if self.window.is_closed:
                    break
                continue
            except OSError as e:
                raise ReceiveError(f"Receive failed: {e}") from e

            reply = Reply(host=addr[0], port=addr[1], text=decode_reply(data))
            replies.append(reply)
            self._echo(f"[client] {reply}")

        self._echo("[client] Done.")
        return replies

    def run(self) -> list[Reply]:
        """Open, probe, and collect for one window."""
        try:
            self.open()
            self.send_probe()
            return self.collect()
        finally:
            self.close()

    def _echo(self, message: str) -> None:
        if self.verbose:
            print(message)


def run_prober(
    config: Optional[DiscoveryConfig] = None, verbose: bool = True
) -> list[Reply]:
    """Run one probe-and-collect cycle and return the replies."""
    return Prober(config, verbose=verbose).run()
