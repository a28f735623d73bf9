"""Galaxy CLI.

Provides commands to run the fan-out service, run the headless galaxy core
against a directory, and forward coding-agent hooks.
"""

import json
import logging
import os
import sys
import threading

import click

from galaxy_library.config.loader import create_default_config
from galaxy_library.config.loader import load_config as load_galaxy_config

from .config.loader import save_example_config
from .hooks.forwarder import DEFAULT_SERVER_URL
from .hooks.forwarder import forward_hook

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@click.group()
def cli():
    """File system galaxy: watch a directory and the agents working in it."""


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", type=int, default=None, help="Port to listen on")
@click.option("--mock/--no-mock", default=None, help="Generate synthetic sessions")
@click.option(
    "--mock-root",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory for mock sessions",
)
def serve(host: str | None, port: int | None, mock: bool | None, mock_root: str | None):
    """Run the fan-out service."""
    import uvicorn

    # The app reads its configuration at import, so overrides travel as env vars
    if mock is not None:
        os.environ["GALAXYD_MOCK_ENABLED"] = "true" if mock else "false"
    if mock_root is not None:
        os.environ["GALAXYD_MOCK_ROOT"] = mock_root

    from .config.loader import load_config

    config = load_config()
    uvicorn.run(
        "galaxyd.main:app",
        host=host or config.daemon.host,
        port=port or config.daemon.port,
        log_level=config.daemon.log_level.lower(),
    )


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False), required=False)
@click.option("--server-url", default=None, help="WebSocket URL of the fan-out service")
@click.option("--tick-rate", type=int, default=None, help="Ticks per second")
def watch(path: str | None, server_url: str | None, tick_rate: int | None):
    """Run the headless galaxy core against PATH, logging agent activity."""
    from galaxy_library.runtime.driver import GalaxyRuntime

    settings = load_galaxy_config(watch_path=path, server_url=server_url, tick_rate=tick_rate)
    _configure_logging(settings.log_level)

    runtime = GalaxyRuntime.from_settings(settings)
    click.echo(f"Galaxy of {runtime.model.live_count()} files under {settings.watch_path}")
    click.echo(f"Listening for agents on {settings.server_url} (Ctrl+C to stop)")

    stop = threading.Event()
    runtime.start()
    try:
        runtime.run(tick_rate=settings.tick_rate, stop_event=stop)
    except KeyboardInterrupt:
        click.echo("\nStopping...")
    finally:
        stop.set()
        runtime.stop()

    top = runtime.stats.top()
    if top:
        click.echo("Most visited files:")
        for file_path, count in top:
            click.echo(f"  {count:4d}  {file_path}")


@cli.command()
@click.option("--server-url", default=DEFAULT_SERVER_URL, show_default=True, help="Base URL of the fan-out service")
def hook(server_url: str):
    """Forward a coding-agent hook document read from stdin.

    Always exits 0 so a missing service never blocks the agent.
    """
    raw = sys.stdin.read()
    try:
        document = json.loads(raw) if raw.strip() else {}
    except json.JSONDecodeError as e:
        logger.warning(f"Hook input is not JSON: {e}")
        return
    if isinstance(document, dict):
        forward_hook(document, server_url=server_url)


@cli.command("init-config")
def init_config():
    """Write default galaxy.yaml and an example daemon.yaml."""
    galaxy_path = create_default_config()
    daemon_path = save_example_config()
    click.echo(f"Core settings:    {galaxy_path}")
    click.echo(f"Service example:  {daemon_path}")


def main():
    cli()


if __name__ == "__main__":
    main()
