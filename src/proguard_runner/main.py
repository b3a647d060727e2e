"""CLI entrypoint for proguard-runner."""

from pathlib import Path

import rich_click as click

from proguard_runner import __version__
from proguard_runner.logging_config import setup_logger
from proguard_runner.orchestrator.backend import BackendRunError
from proguard_runner.orchestrator.controllers import (
    ProguardArgumentsCommand,
    ProguardCliController,
    ProguardFilesCommand,
    ProguardRunCommand,
)

click.rich_click.USE_MARKDOWN = True
PROGUARD_CONTROLLER = ProguardCliController()

_DEFINITION_ARGUMENT = click.argument(
    "definition_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
_JAVA_HOME_OPTION = click.option(
    "--java-home",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="JDK installation. Defaults to PROGUARD_RUNNER_JAVA_HOME, then JAVA_HOME.",
)


@click.group()
@click.version_option(version=__version__, prog_name="proguard-runner")
def proguard_runner() -> None:
    """Run ProGuard from TOML task definitions."""


@proguard_runner.command("args")
@_DEFINITION_ARGUMENT
@_JAVA_HOME_OPTION
def proguard_args(definition_path: Path, java_home: Path | None) -> None:
    """Print the ProGuard arguments for a task definition, one per line."""

    try:
        lines = PROGUARD_CONTROLLER.arguments(
            ProguardArgumentsCommand(definition_path=definition_path, java_home=java_home),
        )
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    _emit_lines(lines)


@proguard_runner.command("files")
@_DEFINITION_ARGUMENT
def proguard_files(definition_path: Path) -> None:
    """List resolved input, library and output files of a task definition."""

    try:
        lines = PROGUARD_CONTROLLER.files(ProguardFilesCommand(definition_path=definition_path))
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    _emit_lines(lines)


@proguard_runner.command("run")
@_DEFINITION_ARGUMENT
@_JAVA_HOME_OPTION
@click.option(
    "--timeout-seconds",
    type=click.IntRange(min=1),
    default=None,
    help="Override PROGUARD_RUNNER_TIMEOUT_SECONDS.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Level for ProGuard output and runner messages.",
)
def proguard_run(
    definition_path: Path,
    java_home: Path | None,
    timeout_seconds: int | None,
    log_level: str,
) -> None:
    """Run ProGuard for a task definition.

    ProGuard's standard output is logged at INFO, its standard error at ERROR.
    """

    setup_logger(log_level.upper())
    try:
        outcome = PROGUARD_CONTROLLER.run(
            ProguardRunCommand(
                definition_path=definition_path,
                java_home=java_home,
                timeout_seconds=timeout_seconds,
            ),
        )
    except (ValueError, BackendRunError) as error:
        raise click.ClickException(str(error)) from error
    _emit_lines(outcome.lines)
    if not outcome.success:
        raise click.ClickException("ProGuard run failed.")


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    proguard_runner()
