"""CLI adapter for ``lib_failure_signal`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators see the failure protocol's output without writing a test: emit
an ``INFO`` record, print a pruned stack, or run a full failure and inspect
the recovered :class:`~lib_failure_signal.domain.errors.FailurePanic`.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_log` – writes an ``INFO`` record through :func:`log_info`.
* :func:`cli_stack` – prints :func:`pruned_stack` output.
* :func:`cli_fail` – runs :func:`failf`, recovers the abort and prints it as JSON.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer and acts as its own recovery point for
the ``fail`` command, the same role the test runner plays inside a test.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.runtime.stack import pruned_stack
from .core import failf, log_info
from .domain.errors import FailurePanic
from .testing import FAILURE_MESSAGE

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
FAIL_EXIT_CODE: Final[int] = 1


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_failure_signal")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Failure-signaling core for test harnesses",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_failure_signal",
    message="lib_failure_signal version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_failure_signal")
    except metadata.PackageNotFoundError:
        click.echo("lib_failure_signal (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_failure_signal')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("log", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
def cli_log(message: str) -> None:
    """Write MESSAGE as an ``INFO`` record to the configured sink."""

    log_info("%s", message)


@cli.command("stack", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--skip",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Additional frames to omit from the top of the trace",
)
def cli_stack(skip: int) -> None:
    """Print the pruned stack of this command's own call chain."""

    click.echo(pruned_stack(skip))


@cli.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message", required=False, default=FAILURE_MESSAGE)
def cli_fail(message: str) -> None:
    """Run a failure for MESSAGE and print the recovered record as JSON.

    The ``FAIL`` record goes to the configured sink; the JSON document lists
    the fields of the :class:`FailurePanic` that reached this command. Exits
    with status 1.
    """

    try:
        failf("%s", message)
    except FailurePanic as failure:
        click.echo(json.dumps(failure.as_dict(), indent=2))
        raise SystemExit(FAIL_EXIT_CODE) from None


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_failure_signal",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
