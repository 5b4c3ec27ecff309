"""formgate CLI entry point."""

import click

from formgate.config import configure_logging


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level (defaults to FORMGATE_LOG_LEVEL or INFO).",
)
def cli(log_level: str | None):
    """formgate — declarative form validation CLI."""
    from formgate.config import FormgateConfig

    configure_logging(log_level or FormgateConfig.from_env().log_level)


# Register subcommand groups
from formgate.cli.directive_cmd import directive  # noqa: E402
from formgate.cli.form_cmd import form  # noqa: E402

cli.add_command(directive)
cli.add_command(form)
