"""Typer-based CLI for DevStash."""

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .acquire import acquire_content
from .config import ConfigStore
from .errors import MSG_PIPE_USAGE, MSG_SAVED, DevstashError, UsageError
from .models.envelope import build_envelope
from .webhook import dispatch

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="devstash",
    help="A CLI to save code snippets and notes to your DevStash vault.",
    add_completion=False,
)

config_app = typer.Typer(help="Manage CLI configuration, such as the webhook URL and auth token.")
app.add_typer(config_app, name="config")

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

WEBHOOK_URL_HELP = "Webhook URL to send data to"
AUTH_TOKEN_HELP = "Authentication token for the webhook"
TAGS_HELP = "Comma-separated tags to add to the snippet"
NOTE_HELP = "A note or description for the snippet"


def _fail(error: DevstashError) -> NoReturn:
    err_console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(code=error.exit_code)


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"devstash {__version__}")
        raise typer.Exit()


def save_snippet(
    webhook_url: Optional[str] = None,
    auth_token: Optional[str] = None,
    tags: Optional[str] = None,
    note: Optional[str] = None,
    file: Optional[str] = None,
    compose: bool = False,
) -> None:
    """Acquire content, build the envelope and send it.

    Each step finishes before the next starts; any error ends the run.
    """
    store = ConfigStore(overrides={"webhookUrl": webhook_url, "authToken": auth_token})

    try:
        content = acquire_content(
            file_path=Path(file) if file else None,
            compose=compose,
        )
        if content is None:
            console.print(MSG_PIPE_USAGE, markup=False, highlight=False)
            return

        envelope = build_envelope(content, tags=tags, note=note)
        logger.debug(f"Built snippet {envelope.id} with {len(envelope.user_tags)} tag(s)")
        dispatch(envelope, store.settings())
    except DevstashError as e:
        _fail(e)

    console.print(f"[green]{MSG_SAVED}[/green]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    webhook_url: str = typer.Option(None, "--webhook-url", help=WEBHOOK_URL_HELP),
    auth_token: str = typer.Option(None, "--auth-token", help=AUTH_TOKEN_HELP),
    tags: str = typer.Option(None, "--tags", "-t", help=TAGS_HELP),
    note: str = typer.Option(None, "--note", "-n", help=NOTE_HELP),
    file: str = typer.Option(None, "--file", "-f", help="Read the snippet from this file instead of stdin"),
    edit: bool = typer.Option(False, "--edit", "-e", help="Compose the snippet in your editor"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging on stderr"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Save text from your terminal to your DevStash vault.

    Pipe content into it to save it:

      cat my_script.js | devstash --tags "javascript,api"

      history | grep docker | devstash --note "Useful docker commands"
    """
    _configure_logging(debug)

    if ctx.invoked_subcommand is not None:
        root_options = {
            "--webhook-url": webhook_url,
            "--auth-token": auth_token,
            "--tags": tags,
            "--note": note,
            "--file": file,
            "--edit": edit,
        }
        given = [name for name, value in root_options.items() if value]
        if given:
            _fail(UsageError(
                f"{', '.join(given)} must follow the '{ctx.invoked_subcommand}' command, "
                f"e.g. 'devstash {ctx.invoked_subcommand} {given[0]} ...'"
            ))
        return

    save_snippet(
        webhook_url=webhook_url,
        auth_token=auth_token,
        tags=tags,
        note=note,
        file=file,
        compose=edit,
    )


@app.command()
def save(
    webhook_url: str = typer.Option(None, "--webhook-url", help=WEBHOOK_URL_HELP),
    auth_token: str = typer.Option(None, "--auth-token", help=AUTH_TOKEN_HELP),
    tags: str = typer.Option(None, "--tags", "-t", help=TAGS_HELP),
    note: str = typer.Option(None, "--note", "-n", help=NOTE_HELP),
    file: str = typer.Option(None, "--file", "-f", help="Read the snippet from this file instead of stdin"),
    edit: bool = typer.Option(False, "--edit", "-e", help="Compose the snippet in your editor"),
):
    """Save a snippet from a file, your editor, or piped stdin.

    A file wins over --edit, and --edit wins over stdin.
    """
    save_snippet(
        webhook_url=webhook_url,
        auth_token=auth_token,
        tags=tags,
        note=note,
        file=file,
        compose=edit,
    )


@app.command()
def new(
    tags: str = typer.Option(None, "--tags", "-t", help="Comma-separated tags for the snippet"),
    note: str = typer.Option(None, "--note", "-n", help=NOTE_HELP),
    webhook_url: str = typer.Option(None, "--webhook-url", help=WEBHOOK_URL_HELP),
    auth_token: str = typer.Option(None, "--auth-token", help=AUTH_TOKEN_HELP),
):
    """Create a new snippet using your default text editor.

    Opens $EDITOR (vim if unset) on a temporary file. The snippet is saved
    to DevStash when you save and close the editor.
    """
    save_snippet(
        webhook_url=webhook_url,
        auth_token=auth_token,
        tags=tags,
        note=note,
        compose=True,
    )


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Setting name: 'webhookUrl' or 'authToken'"),
    value: str = typer.Argument(..., help="Value to store"),
):
    """Set a configuration value. Valid keys are 'webhookUrl' and 'authToken'."""
    try:
        path = ConfigStore().set(key, value)
    except DevstashError as e:
        _fail(e)
    except OSError as e:
        err_console.print(f"[red]Error writing config file: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    console.print(f"Successfully set '{escape(key)}' in {escape(str(path))}", highlight=False)


@config_app.command("get")
def config_get(
    key: str = typer.Argument(..., help="Setting name: 'webhookUrl' or 'authToken'"),
):
    """Get a configuration value. Valid keys are 'webhookUrl' and 'authToken'."""
    value = ConfigStore().get(key)
    if value:
        typer.echo(value)
    else:
        err_console.print(f"No value set for key '{escape(key)}'", highlight=False)


if __name__ == "__main__":
    app()
