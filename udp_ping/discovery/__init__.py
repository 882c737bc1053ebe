"""Discovery module - UDP broadcast probe and reply."""

from .protocol import DEFAULT_PORT, PING_MSG, BROADCAST_ADDRESS
from .config import DiscoveryConfig, load_config
from .window import CollectionWindow
from .responder import Responder, run_responder
from .prober import Prober, Reply, run_prober

__all__ = [
    "DEFAULT_PORT",
    "PING_MSG",
    "BROADCAST_ADDRESS",
    "DiscoveryConfig",
    "load_config",
    "CollectionWindow",
    "Responder",
    "run_responder",
    "Prober",
    "Reply",
    "run_prober",
]
