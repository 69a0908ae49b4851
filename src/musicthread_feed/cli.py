"""CLI interface for musicthread-feed.

Commands:
    setup   - Write a config file
    render  - Print the Atom feed for one thread
    serve   - Serve /thread/<key> feeds over HTTP
    status  - Show the effective configuration
"""

import sys
from pathlib import Path

import click

from .config import (
    CONFIG_FILE,
    INVALID_PATH_STATUSES,
    AppConfig,
    config_exists,
    load_config,
    save_config,
)
from .logging_config import setup_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", type=click.Path(), default=None, help="Config file path")
@click.pass_context
def main(ctx, verbose, config):
    """MusicThread Feed — Atom feeds for MusicThread threads."""
    setup_logging(debug=verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = Path(config) if config else CONFIG_FILE


def _load(ctx) -> AppConfig:
    config_path = ctx.obj["config_path"]
    try:
        return load_config(config_path)
    except ValueError as e:
        click.echo(f"Error: Invalid config {config_path}: {e}", err=True)
        sys.exit(1)


@main.command()
@click.pass_context
def setup(ctx):
    """Configure API and feed URLs."""
    config_path = ctx.obj["config_path"]
    current = _load(ctx)

    click.echo("MusicThread Feed — Setup")
    click.echo("=" * 40)
    click.echo("Press Enter to keep the value shown in brackets.")
    click.echo()

    api_base_url = click.prompt("MusicThread API URL", default=current.api_base_url)
    feed_base_url = click.prompt("Public feed URL", default=current.feed_base_url)
    site_base_url = click.prompt("MusicThread site URL", default=current.site_base_url)
    host = click.prompt("Server host", default=current.host)
    port = click.prompt("Server port", default=current.port, type=click.IntRange(0, 65535))
    invalid_path_status = click.prompt(
        "Status for unsupported paths",
        default=str(current.invalid_path_status),
        type=click.Choice([str(s) for s in INVALID_PATH_STATUSES]),
    )

    config = AppConfig(
        api_base_url=api_base_url,
        feed_base_url=feed_base_url,
        site_base_url=site_base_url,
        invalid_path_status=int(invalid_path_status),
        host=host,
        port=port,
    )

    save_config(config, config_path)
    click.echo(f"\nConfig saved to {config_path}")
    click.echo("Run 'musicthread-feed serve' to start serving feeds.")


@main.command()
@click.argument("thread_key")
@click.option("-o", "--output", type=click.Path(), default=None, help="Output XML file")
@click.pass_context
def render(ctx, thread_key, output):
    """Fetch a thread and print its Atom feed.

    THREAD_KEY is the key from the thread's MusicThread URL.
    If -o is not specified, the feed is written to stdout.
    """
    # Lazy imports so --help stays fast
    from .client import MusicThreadClient
    from .handler import ThreadFeedHandler

    config = _load(ctx)

    with MusicThreadClient(base_url=config.api_base_url) as client:
        handler = ThreadFeedHandler(
            client,
            links=config.links,
            invalid_path_status=config.invalid_path_status,
        )
        response = handler.handle("GET", f"/thread/{thread_key}")

    if response.status != 200:
        click.echo(f"Error ({response.status}): {response.body}", err=True)
        sys.exit(1)

    if output:
        output_path = Path(output)
        output_path.write_text(response.body, encoding="utf-8")
        click.echo(f"Feed written to {output_path}", err=True)
    else:
        click.echo(response.body, nl=False)


@main.command()
@click.option("--host", default=None, help="Interface to bind (default from config)")
@click.option("--port", type=int, default=None, help="Port to bind (default from config)")
@click.option("--no-access-log", is_flag=True, help="Only log warnings and errors")
@click.pass_context
def serve(ctx, host, port, no_access_log):
    """Serve /thread/<key> feeds over HTTP until interrupted."""
    if no_access_log:
        setup_logging(debug=ctx.obj["verbose"], access_log=False)

    from .client import MusicThreadClient
    from .handler import ThreadFeedHandler
    from .server import make_server

    config = _load(ctx)
    host = host or config.host
    port = port if port is not None else config.port

    with MusicThreadClient(base_url=config.api_base_url) as client:
        handler = ThreadFeedHandler(
            client,
            links=config.links,
            invalid_path_status=config.invalid_path_status,
        )
        with make_server(handler, host, port) as server:
            click.echo(f"Serving feeds on http://{host}:{server.server_port}/thread/<key>")
            try:
                server.serve_forever()
            except KeyboardInterrupt:
                click.echo("\nShutting down.")


@main.command()
@click.pass_context
def status(ctx):
    """Show the effective configuration."""
    config_path = ctx.obj["config_path"]
    has_config = config_exists(config_path)

    click.echo("MusicThread Feed — Status")
    click.echo("=" * 40)
    click.echo(f"Config: {'Found' if has_config else 'Not configured, using defaults'} ({config_path})")

    config = _load(ctx)
    click.echo(f"API URL: {config.api_base_url}")
    click.echo(f"Feed URL: {config.feed_base_url}")
    click.echo(f"Site URL: {config.site_base_url}")
    click.echo(f"Server: {config.host}:{config.port}")
    click.echo(f"Unsupported path status: {config.invalid_path_status}")
