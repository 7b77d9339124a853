"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from submission_renderer.configuration import (
    DEFAULT_CONFIG_FILENAME,
    RedactionContext,
    write_placeholder_configuration,
)
from submission_renderer.run_execution import (
    OutputFormat,
    RedactRequest,
    RenderRequest,
    RunExecutionError,
    RunOutcome,
    execute_redaction_run,
    execute_render_run,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="submission-renderer")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity written to stderr",
)
def cli(log_level: str) -> None:
    """Schema-driven form submission renderer and redaction utility."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML configuration with the default settings and guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="render")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the form definition JSON file",
)
@click.option(
    "--submissions",
    "submissions_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON file holding one submission or a list of submissions",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML/JSON configuration file",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([item.value for item in OutputFormat]),
    default=OutputFormat.HTML.value,
    show_default=True,
    help="Serialization of the rendered submissions",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="File to write; html and json are echoed to stdout when omitted",
)
def render(
    schema_path: str,
    submissions_path: str,
    config_path: str | None,
    output_format: str,
    output_path: str | None,
) -> None:
    """Render submissions into label/value tables."""
    try:
        outcome = execute_render_run(
            RenderRequest(
                schema_path=schema_path,
                submissions_path=submissions_path,
                config_path=config_path,
                output_format=OutputFormat(output_format),
                output_path=output_path,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    _echo_outcome(outcome)


@cli.command(name="redact")
@click.option(
    "--schema",
    "schema_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the form definition JSON file",
)
@click.option(
    "--submissions",
    "submissions_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON file holding one submission or a list of submissions",
)
@click.option(
    "--context",
    type=click.Choice([item.value for item in RedactionContext]),
    required=False,
    help="Consumption context; defaults to redaction.context from the configuration",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML/JSON configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="File to write the redacted submissions to; echoed to stdout when omitted",
)
def redact(
    schema_path: str,
    submissions_path: str,
    context: str | None,
    config_path: str | None,
    output_path: str | None,
) -> None:
    """Remove protected fields and mask context-specific payloads."""
    try:
        outcome = execute_redaction_run(
            RedactRequest(
                schema_path=schema_path,
                submissions_path=submissions_path,
                context=context,
                config_path=config_path,
                output_path=output_path,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    _echo_outcome(outcome)


def _echo_outcome(outcome: RunOutcome) -> None:
    if outcome.output_path is not None:
        click.echo(str(outcome.output_path))
    elif outcome.content is not None:
        click.echo(outcome.content)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
