"""Root CLI group for mailgate with global flags and command registration."""

from __future__ import annotations

import click
from pydantic import ValidationError

from mailgate import __version__
from mailgate.commands import register_commands
from mailgate.commands._context import AppContext
from mailgate.config.settings import MailgateSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="mailgate")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """mailgate — composable email address validation."""
    ctx.ensure_object(dict)
    try:
        settings = MailgateSettings.from_cli(
            json_output=json_output or None,
            quiet=quiet or None,
            verbose=verbose or None,
            log_json=log_json or None,
        )
    except ValidationError as exc:
        msg = f"Invalid MAILGATE_* settings: {exc}"
        raise click.ClickException(msg) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
