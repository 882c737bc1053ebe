"""Host identifier resolution for the Responder."""

import os
import socket

from ..errors import HostnameResolutionError


def resolve_hostname() -> str:
    """Return the local host's display name.

    Names that are not valid UTF-8 are converted lossily, with invalid
    sequences replaced, rather than rejected.

    Raises:
        HostnameResolutionError: If the OS cannot supply a host name.
    """
    try:
        name = socket.gethostname()
    except OSError as e:
        raise HostnameResolutionError(f"Cannot resolve host name: {e}") from e

    if not name:
        raise HostnameResolutionError("Cannot resolve host name: empty name")

    # gethostname() maps undecodable bytes to surrogate escapes
    raw = os.fsencode(name)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("utf-8", errors="replace")
