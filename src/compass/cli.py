"""CLI for the Compass school portal.

Fetch data from the Compass API, printed to stdout as JSON.

Commands:
    news-feed               Return the JSON news feed
    get-messages            Return JSON messages
    get-personal-details    Return JSON data on the current user
    get-events-for-parent   Return JSON events that a parent can see
    get-pst-cycles          Return JSON parent-teacher interview cycles
    check-parent-details    Return the JSON parent details check
    download-file           Download a single file

`compass-news` is a separate program that only prints the news feed.
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Callable, TypeVar

import click
from dotenv import load_dotenv

from . import __version__
from .auth import login_or_raise
from .credentials import AppCredentials, Credentials, PathCredentials
from .endpoints import (
    EVENTS_LIMIT,
    EVENTS_PAGE,
    check_parent_details,
    events_for_parent,
    messages,
    news_feed,
    personal_details,
    pst_cycles,
)
from .exceptions import CompassException
from .file_fetch import check_target, download_file, save_file
from .logger import setup_logger
from .session import Compass

logger = logging.getLogger(__name__)

T = TypeVar("T")


def credential_options(func):
    """Attach the options every command needs to log in."""

    @click.option("--username", envvar="COMPASS_USERNAME", help="compass username")
    @click.option("--password", envvar="COMPASS_PASSWORD", help="compass password")
    @click.option(
        "--hostname",
        envvar="COMPASS_HOSTNAME",
        help="the compass school hostname (eg. coburg-north-ps-vic.compass.education)",
    )
    @click.option(
        "--credentials",
        "credentials_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="YAML file with username, password and hostname",
    )
    @functools.wraps(func)
    def wrapper(username, password, hostname, credentials_file, **kwargs):
        creds = build_credentials(username, password, hostname, credentials_file)
        return func(creds, **kwargs)

    return wrapper


def build_credentials(
    username: str | None, password: str | None, hostname: str | None, credentials_file: Path | None
) -> Credentials:
    """Explicit values (options or environment) take precedence over the file."""
    try:
        if credentials_file is None:
            return AppCredentials(username, password, hostname)
        creds = PathCredentials(filename=credentials_file)
    except CompassException as e:
        raise click.ClickException(str(e)) from e

    creds.username = username or creds.username
    creds.password = password or creds.password
    creds.hostname = hostname or creds.hostname
    return creds


def fetch(creds: Credentials, operation: Callable[[Compass], T]) -> T:
    """Log in and run one operation, turning client errors into CLI errors."""
    try:
        with Compass(creds) as client:
            login_or_raise(client)
            return operation(client)
    except CompassException as e:
        logger.debug("Request failed", exc_info=True)
        raise click.ClickException(str(e)) from e



@click.group()
@click.version_option(version=__version__, prog_name="compass")
@click.option("--debug", is_flag=True, help="Log requests to stderr")
def cli(debug: bool):
    """Fetch data from the compass API, printed to stdout as JSON."""
    setup_logger(logging.DEBUG if debug else logging.WARNING)


@cli.command("news-feed")
@credential_options
def news_feed_command(creds: Credentials):
    """Return JSON news feed."""
    click.echo(fetch(creds, news_feed))


@cli.command("get-messages")
@credential_options
def get_messages(creds: Credentials):
    """Return JSON messages."""
    click.echo(fetch(creds, messages))


@cli.command("get-personal-details")
@credential_options
def get_personal_details(creds: Credentials):
    """Return JSON data on the current user."""
    click.echo(fetch(creds, personal_details))


@cli.command("get-events-for-parent")
@credential_options
@click.option("--user-id", required=True, help="the id of a user")
@click.option("--limit", type=click.IntRange(min=1), default=EVENTS_LIMIT, show_default=True, help="events per page")
@click.option("--page", type=click.IntRange(min=1), default=EVENTS_PAGE, show_default=True, help="page number")
def get_events_for_parent(creds: Credentials, user_id: str, limit: int, page: int):
    """JSON data with events that a parent can see."""
    click.echo(fetch(creds, lambda client: events_for_parent(client, user_id, limit=limit, page=page)))


@cli.command("get-pst-cycles")
@credential_options
def get_pst_cycles(creds: Credentials):
    """Return JSON parent-teacher interview cycles."""
    click.echo(fetch(creds, pst_cycles))


@cli.command("check-parent-details")
@credential_options
def check_parent_details_command(creds: Credentials):
    """Return JSON parent details check."""
    click.echo(fetch(creds, check_parent_details))


@cli.command("download-file")
@credential_options
@click.option("--file-id", required=True, help="the id of a file")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="write the file here instead of stdout",
)
@click.option("--overwrite", is_flag=True, help="replace an existing output file")
def download_file_command(creds: Credentials, file_id: str, output: Path | None, overwrite: bool):
    """Downloads a single file."""
    if output is None:
        data = fetch(creds, lambda client: download_file(client, file_id))
        click.get_binary_stream("stdout").write(data)
        return

    try:
        check_target(output, overwrite=overwrite)
    except (CompassException, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    path = fetch(creds, lambda client: save_file(client, file_id, output, overwrite=overwrite))
    click.echo(f"Saved {path}", err=True)


@click.command()
@click.version_option(version=__version__, prog_name="compass-news")
@click.option("--debug", is_flag=True, help="Log requests to stderr")
@credential_options
def news(creds: Credentials, debug: bool):
    """Fetch the compass news feed, printed to stdout as JSON."""
    setup_logger(logging.DEBUG if debug else logging.WARNING)
    click.echo(fetch(creds, news_feed))


def main() -> None:
    load_dotenv()
    cli()


def news_main() -> None:
    load_dotenv()
    news()


if __name__ == "__main__":
    main()
