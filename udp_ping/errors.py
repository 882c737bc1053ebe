"""Error kinds raised by the Responder and Prober roles."""


class UdpPingError(Exception):
    """Base class for all udp-ping errors."""


class ConfigError(UdpPingError, ValueError):
    """Configuration file or option values are invalid."""


class HostnameResolutionError(UdpPingError, OSError):
    """The operating system did not supply a host name."""


class BindError(UdpPingError, OSError):
    """The local UDP endpoint could not be acquired."""


class SocketConfigError(UdpPingError, OSError):
    """A required socket option (broadcast) could not be enabled."""


class SendError(UdpPingError, OSError):
    """Sending a datagram failed."""


class ReceiveError(UdpPingError, OSError):
    """Receiving a datagram failed for a reason other than timeout."""
