"""CLI for the webhook receiver."""

import asyncio
import signal
import sys

import click
from rich.console import Console

from ..common import setup_logging
from ..errors import ConfigurationError, ServerRunError
from .config import ServerOpts
from .server import WebhookServer

console = Console()


class NullDownloader:
    """Downloader placeholder until the pipeline is wired to the handler."""


class NullUploader:
    """Uploader placeholder until the pipeline is wired to the handler."""


@click.group()
def cli():
    """Hookdl webhook receiver CLI."""
    pass


@cli.command()
@click.option("--listen", help="Listen address as host:port (overrides environment variable)")
@click.option("--tls-cert", type=click.Path(dir_okay=False), help="TLS certificate file (overrides environment variable)")
@click.option("--tls-key", type=click.Path(dir_okay=False), help="TLS key file (overrides environment variable)")
@click.option("--log-dir", help="Log directory (overrides environment variable)")
def serve(listen, tls_cert, tls_key, log_dir):
    """Start the webhook server."""
    config = ServerOpts.from_env()

    # Override with command line arguments if provided
    if listen:
        config.listen_address = listen
    if tls_cert:
        config.tls_cert = tls_cert
    if tls_key:
        config.tls_key = tls_key
    if log_dir:
        config.log_dir = log_dir

    try:
        setup_logging(config.log_dir)
        server = WebhookServer(config, NullDownloader(), NullUploader())

        console.print("🚀 Starting webhook server...")
        console.print(f"📡 Listen: {config.listen_address}")
        console.print(f"🔒 TLS: {config.tls_enabled}")

        asyncio.run(_run_until_signalled(server))
        console.print("⏹️  Server stopped")

    except ConfigurationError as e:
        console.print(f"❌ Invalid configuration: {e}", style="red")
        sys.exit(2)
    except ServerRunError as e:
        console.print("❌ Server failed:", style="red")
        if e.close_error is not None:
            console.print(f"  close: {e.close_error}", style="red")
        if e.serve_error is not None:
            console.print(f"  serve: {e.serve_error}", style="red")
        sys.exit(1)


async def _run_until_signalled(server: WebhookServer) -> None:
    """Run the server until SIGINT or SIGTERM."""
    cancel = asyncio.Event()
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, cancel.set)
    try:
        await server.run(cancel)
    finally:
        for signum in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(signum)


@cli.command()
def config():
    """Show current configuration."""
    try:
        config = ServerOpts.from_env()

        console.print("📋 Webhook Server Configuration:")
        console.print(f"  Listen Address: {config.listen_address}")
        console.print(f"  Host: {config.host}")
        console.print(f"  Port: {config.port}")
        console.print(f"  TLS Certificate: {config.tls_cert or 'Not set'}")
        console.print(f"  TLS Key: {config.tls_key or 'Not set'}")
        console.print(f"  TLS Enabled: {config.tls_enabled}")
        if config.tls_partially_configured:
            console.print("  ⚠️  Only one of certificate and key is set, TLS stays off", style="yellow")
        console.print(f"  Log Directory: {config.log_dir}")

    except ConfigurationError as e:
        console.print(f"❌ Failed to load configuration: {e}", style="red")
        sys.exit(1)


if __name__ == "__main__":
    cli()
