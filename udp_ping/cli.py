"""CLI entry point for udp-ping.

Usage:
    udp-ping server [options]
    udp-ping client [options]
    python -m udp_ping.cli <server|client> [options]
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import click

from .discovery.config import DiscoveryConfig, load_config
from .discovery.prober import Prober, Reply
from .discovery.responder import run_responder
from .errors import ConfigError, UdpPingError
from .reporting.json_reporter import JsonReporter

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


class Role(str, Enum):
    """Process roles selectable on the command line."""
    SERVER = "server"
    CLIENT = "client"


VALID_ROLES = {r.value for r in Role}


@dataclass
class RoleSelection:
    """Outcome of resolving the mode argument.

    Either ``role`` is set, or ``reason`` says why no role was selected.
    """
    role: Optional[Role] = None
    reason: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.role is not None


def resolve_role(mode: Optional[str]) -> RoleSelection:
    """Map the positional mode argument to a role."""
    if mode is None:
        return RoleSelection(reason="Missing mode argument")
    if mode not in VALID_ROLES:
        return RoleSelection(
            reason=f"Invalid mode: {mode} (expected 'server' or 'client')"
        )
    return RoleSelection(role=Role(mode))


def build_config(config_path: Optional[str], **overrides) -> DiscoveryConfig:
    """Load the config file and apply command-line overrides."""
    return load_config(config_path).with_overrides(**overrides)


def run_server(config: DiscoveryConfig) -> int:
    """Run the Responder role. Returns only on error or interrupt."""
    try:
        run_responder(config)
    except UdpPingError as e:
        output_error(str(e))
        return EXIT_ERROR
    except OSError as e:
        output_error(f"I/O error: {e}")
        return EXIT_ERROR
    except KeyboardInterrupt:
        click.echo("[server] Stopped.")
        return EXIT_INTERRUPTED


def run_client(config: DiscoveryConfig, as_json: bool = False) -> int:
    """Run the Prober role for one collection window."""
    prober = Prober(config, verbose=not as_json)
    start_time = time.time()
    replies: list[Reply] = []
    error: Optional[str] = None
    exit_code = EXIT_OK

    try:
        replies = prober.run()
    except UdpPingError as e:
        error = str(e)
        exit_code = EXIT_ERROR
    except OSError as e:
        error = f"I/O error: {e}"
        exit_code = EXIT_ERROR
    except KeyboardInterrupt:
        error = "Interrupted by user"
        exit_code = EXIT_INTERRUPTED

    if as_json:
        reporter = JsonReporter()
        duration_ms = int((time.time() - start_time) * 1000)
        report = reporter.generate(
            replies,
            target=prober.target,
            window=config.window,
            duration_ms=duration_ms,
            error=error,
        )
        click.echo(reporter.to_json_string(reporter.generate_output(report)))
    elif error:
        output_error(error)

    return exit_code


def output_error(message: str) -> None:
    """Print an error message to stderr."""
    click.echo(f"Error: {message}", err=True)


@click.command(
    options_metavar="[options]",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("args", nargs=-1, metavar="[MODE]")
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="YAML config file (default: $UDP_PING_CONFIG).")
@click.option("--port", type=int, help="Server UDP port (default: 34254).")
@click.option("--bind-address", help="Local bind address (default: 0.0.0.0).")
@click.option("--broadcast-address",
              help="Probe destination address (default: 255.255.255.255).")
@click.option("--timeout", "window", type=float,
              help="Client collection window in seconds (default: 5).")
@click.option("--poll-interval", type=float,
              help="Client per-receive timeout in seconds (default: 1).")
@click.option("--buffer-size", type=int,
              help="Receive buffer in bytes; longer datagrams are truncated (default: 512).")
@click.option("--hostname", help="Identifier the server replies with (default: host name).")
@click.option("--json", "as_json", is_flag=True, help="Client: print a JSON summary.")
@click.pass_context
def cli(ctx, args, config_path, as_json, **overrides):
    """Find udp-ping servers on the local network.

    MODE is 'server' to answer probes, or 'client' to broadcast one probe
    and list the replies. Arguments after MODE are ignored.
    """
    selection = resolve_role(args[0] if args else None)
    if not selection.valid:
        output_error(selection.reason)
        click.echo(f"Usage: {ctx.info_name} [server|client] [options]", err=True)
        ctx.exit(EXIT_ERROR)

    try:
        config = build_config(config_path, **overrides)
    except ConfigError as e:
        output_error(str(e))
        ctx.exit(EXIT_ERROR)

    if selection.role is Role.SERVER:
        ctx.exit(run_server(config))
    ctx.exit(run_client(config, as_json=as_json))


def main():
    """Main CLI entry point."""
    cli(prog_name="udp-ping")


if __name__ == "__main__":
    main()
