"""Command-line interface for the 0x45 paste and URL service."""

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, NoReturn, Optional, TypeVar

import typer

from client import Ox45Client
from core import (
    ConfigKey,
    Configuration,
    Ox45Error,
    get_logger,
    set_log_level,
    setup_logging,
)
from core.models import (
    KeyRequest,
    ListQuery,
    ShortenRequest,
    UploadRequest,
    build_request,
)

from .formatting import (
    format_delete_result,
    format_key_result,
    format_key_status,
    format_list_result,
    format_settings,
    format_shorten_result,
    format_upload_result,
    format_url_stats,
)

logger = get_logger(__name__)

T = TypeVar("T")

app = typer.Typer(
    name="0x45",
    help="A CLI for 0x45.st: upload files, shorten URLs and manage your content.",
    no_args_is_help=True,
    add_completion=False,
)
config_app = typer.Typer(help="Manage configuration settings.", no_args_is_help=True)
key_app = typer.Typer(help="Manage API keys.", no_args_is_help=True)
url_app = typer.Typer(help="Inspect and update shortened URLs.", no_args_is_help=True)

app.add_typer(config_app, name="config")
app.add_typer(key_app, name="key")
app.add_typer(url_app, name="url")

ExpiresOption = Annotated[
    Optional[str],
    typer.Option(
        "--expires", "-e", help="Expiration time (e.g. 24h, 7d); defaults to default_expiry"
    ),
]


def _fail(message: str) -> NoReturn:
    typer.secho(f"Error: {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def run_operation(operation: Callable[[], T]) -> T:
    """Run an operation, turning any client error into a non-zero exit."""
    try:
        return operation()
    except Ox45Error as e:
        logger.debug(f"{type(e).__name__}: {e}")
        _fail(str(e))


def _configuration(ctx: typer.Context) -> Configuration:
    return ctx.obj


def _client(ctx: typer.Context) -> Ox45Client:
    return Ox45Client.from_settings(_configuration(ctx).settings)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", help="Config file (default is $HOME/.0x45.yaml)"),
    ] = None,
    api_key: Annotated[
        Optional[str], typer.Option("--api-key", help="API key for authentication")
    ] = None,
    api_url: Annotated[
        Optional[str], typer.Option("--api-url", help="Base URL of the service")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """A CLI for 0x45.st: upload files, shorten URLs and manage your content."""
    configuration = run_operation(
        lambda: Configuration.load(path=config, api_key=api_key, api_url=api_url)
    )
    set_log_level(logging.DEBUG if verbose else configuration.log_level)
    ctx.obj = configuration


# Config commands


@config_app.command("set")
def config_set(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="api_url, api_key or default_expiry")],
    value: Annotated[str, typer.Argument(help="Value to store")],
) -> None:
    """Set a configuration value and save it to the config file."""
    configuration = _configuration(ctx)
    run_operation(lambda: configuration.set(key, value))
    typer.echo(f"{key} set to {value}")


@config_app.command("get")
def config_get(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to read")],
) -> None:
    """Show the resolved value of a configuration key."""
    value = _configuration(ctx).get(key)
    if value is None:
        typer.echo(f"Config key '{key}' not found")
        return
    typer.echo(value)


@config_app.command("list")
def config_list(ctx: typer.Context) -> None:
    """Show all resolved configuration values."""
    typer.echo(format_settings(_configuration(ctx).all_settings()))


@config_app.command("unset")
def config_unset(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to remove")],
) -> None:
    """Remove a key from the config file."""
    configuration = _configuration(ctx)
    removed = run_operation(lambda: configuration.unset(key))
    if not removed:
        typer.secho(
            f"Error: Config key '{key}' not found", fg=typer.colors.YELLOW, err=True
        )
        return
    typer.echo(f"Removed config key {key}")


# Content commands


@app.command()
def upload(
    ctx: typer.Context,
    file: Annotated[
        Optional[Path],
        typer.Argument(help="File to upload; reads standard input when omitted"),
    ] = None,
    expires: ExpiresOption = None,
    private: Annotated[
        bool, typer.Option("--private", "-p", help="Make the paste private")
    ] = False,
    filename: Annotated[
        Optional[str], typer.Option("--filename", "-f", help="Override the filename")
    ] = None,
    ext: Annotated[
        Optional[str], typer.Option("--ext", "-x", help="Override the file extension")
    ] = None,
) -> None:
    """Upload a file or piped text."""
    configuration = _configuration(ctx)
    expires = expires or configuration.get(ConfigKey.DEFAULT_EXPIRY.value)

    with _client(ctx) as client:
        run_operation(lambda: client.check_upload(private=private, expires=expires))

        if file is not None:
            request = run_operation(
                lambda: UploadRequest.from_path(
                    file, filename=filename, ext=ext, expires=expires, private=private
                )
            )
        else:
            content = typer.get_binary_stream("stdin").read()
            request = run_operation(
                lambda: UploadRequest.from_stdin(
                    content, filename=filename, ext=ext, expires=expires, private=private
                )
            )

        result = run_operation(lambda: client.upload(request))

    typer.secho("Upload complete!", fg=typer.colors.GREEN)
    typer.echo(format_upload_result(result))


@app.command()
def shorten(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="URL to shorten")],
    expires: ExpiresOption = None,
    title: Annotated[
        Optional[str], typer.Option("--title", "-t", help="URL title")
    ] = None,
) -> None:
    """Shorten a URL."""
    configuration = _configuration(ctx)
    expires = expires or configuration.get(ConfigKey.DEFAULT_EXPIRY.value)

    request = run_operation(
        lambda: build_request(ShortenRequest, url=url, title=title, expires=expires)
    )
    with _client(ctx) as client:
        result = run_operation(lambda: client.shorten(request))

    typer.secho("URL shortened!", fg=typer.colors.GREEN)
    typer.echo(format_shorten_result(result))


@app.command("list")
def list_content(
    ctx: typer.Context,
    kind: Annotated[str, typer.Argument(help="What to list: pastes or urls")],
    page: Annotated[int, typer.Option("--page", "-p", help="Page number")] = 1,
    limit: Annotated[
        int, typer.Option("--limit", "-l", help="Number of items per page")
    ] = 10,
    sort: Annotated[
        str,
        typer.Option("--sort", "-s", help="Sort by created_at, expires_at, or clicks"),
    ] = "created_at",
) -> None:
    """List your pastes or shortened URLs."""
    query = run_operation(
        lambda: build_request(
            ListQuery, kind=kind.lower(), page=page, limit=limit, sort=sort
        )
    )
    with _client(ctx) as client:
        result = run_operation(lambda: client.list_items(query))

    typer.echo(format_list_result(result))


@app.command()
def delete(
    ctx: typer.Context,
    delete_id: Annotated[str, typer.Argument(help="Delete ID of the paste or URL")],
) -> None:
    """Delete a paste or shortened URL."""
    with _client(ctx) as client:
        result = run_operation(lambda: client.delete(delete_id))

    if not result.success:
        _fail(format_delete_result(result))
    typer.secho(format_delete_result(result), fg=typer.colors.GREEN)


# API key commands


@key_app.command("request")
def key_request(
    ctx: typer.Context,
    email: Annotated[
        Optional[str], typer.Option("--email", help="Your email address")
    ] = None,
    name: Annotated[Optional[str], typer.Option("--name", help="Your name")] = None,
) -> None:
    """Request a new API key by email."""
    if not email or not name:
        _fail("email and name are required")

    request = run_operation(lambda: build_request(KeyRequest, email=email, name=name))
    settings = _configuration(ctx).settings
    with Ox45Client(base_url=settings.api_url) as client:
        result = run_operation(lambda: client.request_api_key(request))

    typer.secho(format_key_result(result), fg=typer.colors.GREEN)


@key_app.command("status")
def key_status(ctx: typer.Context) -> None:
    """Show whether an API key is configured."""
    typer.echo(format_key_status(_configuration(ctx).settings))


# Shortened URL commands


@url_app.command("stats")
def url_stats(
    ctx: typer.Context,
    url_id: Annotated[str, typer.Argument(help="ID of the shortened URL")],
) -> None:
    """Show click statistics for a shortened URL."""
    with _client(ctx) as client:
        stats = run_operation(lambda: client.get_url_stats(url_id))

    typer.echo(format_url_stats(stats))


@url_app.command("expire")
def url_expire(
    ctx: typer.Context,
    url_id: Annotated[str, typer.Argument(help="ID of the shortened URL")],
    expires: Annotated[str, typer.Argument(help="New expiration time (e.g. 30d)")],
) -> None:
    """Change when a shortened URL expires."""
    with _client(ctx) as client:
        result = run_operation(lambda: client.update_url_expiration(url_id, expires))

    typer.echo(format_shorten_result(result))


def main() -> None:
    """Console script entry point."""
    setup_logging(use_colors=sys.stderr.isatty())
    app(prog_name="0x45")
