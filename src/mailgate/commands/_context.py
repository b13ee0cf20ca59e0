"""AppContext — state shared by every mailgate subcommand.

Built once by the root group and handed to subcommands through
``@click.pass_obj``. It owns logging setup, verifier assembly, and the
stdout/stderr split with its exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mailgate.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from mailgate.config.settings import MailgateSettings
    from mailgate.services.result import ServiceResult
    from mailgate.services.verifier import Verifier


class AppContext:
    def __init__(self, settings: MailgateSettings) -> None:
        self.settings = settings

        from mailgate.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from mailgate.services.telemetry import enable_telemetry

            enable_telemetry()

    def build_verifier(
        self,
        *,
        domain: str | None = None,
        max_workers: int | None = None,
    ) -> Verifier:
        """Verifier from settings plus command overrides.

        A rejected configuration (for example ``--domain ""``) is emitted
        as an ``INVALID_CONFIGURATION`` failure and exits 1.
        """
        from mailgate.domain.rules import InvalidConfigurationError
        from mailgate.services.result import ServiceResult
        from mailgate.services.validate import build_verifier

        try:
            return build_verifier(self.settings, domain=domain, max_workers=max_workers)
        except InvalidConfigurationError as exc:
            self.emit(ServiceResult.failure("build_verifier", "INVALID_CONFIGURATION", str(exc)))
            raise  # emit() exits on failure

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; failures go to stderr and exit 1.

        Warnings go to stderr in human and quiet modes so piped output
        stays clean. JSON output already carries them.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if not result.ok:
            click.echo(output, err=True)
            raise SystemExit(1)
        if output:
            click.echo(output)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
