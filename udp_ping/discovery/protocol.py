"""Wire protocol for UDP ping discovery.

A Prober broadcasts the 4-byte probe ``PING`` to the Responder port. A
Responder answers with its host identifier encoded as UTF-8 text. There is
no framing beyond the datagram boundary.
"""

# Fixed Responder port
DEFAULT_PORT = 34254

# Probe payload; a Responder replies only on an exact match
PING_MSG = b"PING"

# Limited broadcast address (all-ones IPv4)
BROADCAST_ADDRESS = "255.255.255.255"

# Wildcard bind address
ANY_ADDRESS = "0.0.0.0"

# Receive buffer size in bytes. Datagrams longer than this are truncated
# by the receiving socket, so host identifiers past 512 bytes arrive cut off.
DEFAULT_BUFFER_SIZE = 512

# Collection window in seconds
DEFAULT_WINDOW = 5.0

# Per-receive timeout used by the Prober while collecting
DEFAULT_POLL_INTERVAL = 1.0


def is_probe(data: bytes) -> bool:
    """Whether a datagram payload is exactly the probe message."""
    return data == PING_MSG


def encode_reply(identifier: str) -> bytes:
    """Encode a host identifier as reply payload."""
    return identifier.encode("utf-8", errors="replace")


def decode_reply(data: bytes) -> str:
    """Decode a reply payload, replacing invalid byte sequences."""
    return data.decode("utf-8", errors="replace")


def format_endpoint(addr: tuple) -> str:
    """Render a socket address as ``host:port``."""
    return f"{addr[0]}:{addr[1]}"
