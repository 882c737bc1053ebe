"""Runtime configuration for udp-ping.

Settings come from defaults, an optional YAML file, and command-line
overrides, in increasing order of precedence. The YAML file may be named
explicitly or through the UDP_PING_CONFIG environment variable:

    port: 34254
    window: 5.0
    poll_interval: 1.0
    buffer_size: 512
    broadcast_address: 255.255.255.255
    bind_address: 0.0.0.0
    hostname: my-box
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .protocol import (
    ANY_ADDRESS,
    BROADCAST_ADDRESS,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_PORT,
    DEFAULT_WINDOW,
)
from ..errors import ConfigError

CONFIG_ENV_VAR = "UDP_PING_CONFIG"


@dataclass
class DiscoveryConfig:
    """Configuration shared by the Responder and Prober roles."""
    port: int = DEFAULT_PORT
    bind_address: str = ANY_ADDRESS
    broadcast_address: str = BROADCAST_ADDRESS
    window: float = DEFAULT_WINDOW
    poll_interval: float = DEFAULT_POLL_INTERVAL
    buffer_size: int = DEFAULT_BUFFER_SIZE
    hostname: Optional[str] = None  # None = ask the OS

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check value types and ranges.

        Raises:
            ConfigError: If any field is out of range or of the wrong type.
        """
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ConfigError(f"'port' must be an integer, got {self.port!r}")
        if not 0 <= self.port <= 65535:
            raise ConfigError(f"'port' must be in 0..65535, got {self.port}")

        for name in ("window", "poll_interval"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"'{name}' must be a number, got {value!r}")
            if value <= 0:
                raise ConfigError(f"'{name}' must be positive, got {value}")

        if isinstance(self.buffer_size, bool) or not isinstance(self.buffer_size, int):
            raise ConfigError(
                f"'buffer_size' must be an integer, got {self.buffer_size!r}"
            )
        if self.buffer_size < 1:
            raise ConfigError(f"'buffer_size' must be at least 1, got {self.buffer_size}")

        for name in ("bind_address", "broadcast_address"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigError(f"'{name}' must be a non-empty string, got {value!r}")

        if self.hostname is not None and (
            not isinstance(self.hostname, str) or not self.hostname
        ):
            raise ConfigError(f"'hostname' must be a non-empty string, got {self.hostname!r}")

    def with_overrides(self, **overrides: Any) -> "DiscoveryConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def parse_config_data(data: Any, source: str = "<inline>") -> DiscoveryConfig:
    """Build a DiscoveryConfig from an already loaded mapping.

    Unknown keys are ignored.

    Raises:
        ConfigError: If the data is not a mapping or holds invalid values.
    """
    if data is None:
        return DiscoveryConfig()

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config must be a YAML mapping, got {type(data).__name__} ({source})"
        )

    known = {f.name for f in fields(DiscoveryConfig)}
    try:
        return DiscoveryConfig(**{k: v for k, v in data.items() if k in known})
    except ConfigError as e:
        raise ConfigError(f"{e} ({source})") from e


def load_config(file_path: Union[str, Path, None] = None) -> DiscoveryConfig:
    """Load configuration from a YAML file.

    Args:
        file_path: Path to the YAML file. Falls back to the UDP_PING_CONFIG
            environment variable, then to defaults.

    Raises:
        ConfigError: If the file is missing, malformed, or invalid.
    """
    if file_path is None:
        file_path = os.environ.get(CONFIG_ENV_VAR) or None
    if file_path is None:
        return DiscoveryConfig()

    file_path = Path(file_path)
    if not file_path.exists():
        raise ConfigError(f"Config file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config file {file_path}: {e}") from e

    return parse_config_data(data, source=str(file_path))
