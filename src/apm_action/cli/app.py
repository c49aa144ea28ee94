"""CLI application entry point and command routing for apm-action.

This module is the **sole error boundary** for the entire application.
It catches :class:`~apm_action.exceptions.ApmActionError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Commands
--------
* ``apm-action [run]``  — run the APM workflow (default)
* ``apm-action gather`` — print the gathered argument vector as JSON
* ``apm-action doctor`` — environment diagnostics
* ``apm-action --version``

Every option falls back to the matching ``INPUT_*`` variable, so the
same entry point serves both the CI action and local runs.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from collections.abc import Mapping

from apm_action.cli import exit_codes
from apm_action.cli.console import console
from apm_action.cli.logging_setup import configure_logging, in_github_actions
from apm_action.exceptions import ApmActionError
from apm_action.version import __version__

logger = logging.getLogger(__name__)

COMMANDS: tuple[str, ...] = ("run", "gather", "doctor")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="apm-action",
        description="Run an APM workflow script with gathered parameters.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="run",
        choices=COMMANDS,
        help="Command to execute (default: run).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument("--script", default=None, help="APM script to run (default: start).")
    parser.add_argument(
        "--parameters",
        default=None,
        help='Structured parameters as a JSON object, e.g. \'{"model": "gpt-4"}\'.',
    )
    parser.add_argument(
        "--args",
        dest="extra_args",
        default=None,
        help=(
            "Additional shell-like arguments appended after the parameters. "
            "Use --args='--flag ...' when the value starts with a dash."
        ),
    )
    parser.add_argument(
        "--working-directory",
        default=None,
        help="Directory to run APM commands in.",
    )
    parser.add_argument(
        "--skip-install",
        action="store_const",
        const="true",
        default=None,
        help="Skip 'apm install' and 'apm compile'.",
    )
    parser.add_argument(
        "--apm-version",
        default=None,
        help="APM CLI version referenced in install guidance.",
    )
    return parser


def _overrides(args: argparse.Namespace) -> dict[str, str | None]:
    return {
        "script": args.script,
        "parameters": args.parameters,
        "args": args.extra_args,
        "working_directory": args.working_directory,
        "skip_install": args.skip_install,
        "apm_version": args.apm_version,
    }


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_run(args: argparse.Namespace, environ: Mapping[str, str]) -> int:
    """Execute the workflow and publish the action outputs.

    Outputs are written on every path; an exception still propagates
    to the error boundary after ``success=false`` is recorded.
    """
    from apm_action.core.models import ExecutionResult
    from apm_action.core.workflow_runner import WorkflowRunner
    from apm_action.infra.action_inputs import load_action_inputs
    from apm_action.infra.action_outputs import execution_outputs, write_outputs
    from apm_action.infra.subprocess_runner import SubprocessCommandRunner

    try:
        inputs = load_action_inputs(environ, _overrides(args))
        logger.info("Starting APM AI Workflow Runner...")
        result = WorkflowRunner(SubprocessCommandRunner()).execute(inputs, environ)
    except Exception as exc:
        write_outputs(
            execution_outputs(ExecutionResult(success=False, output=str(exc))),
            environ,
        )
        raise

    write_outputs(execution_outputs(result), environ)

    if not result.success:
        logger.error("APM workflow execution failed")
        return exit_codes.GENERAL_ERROR

    logger.info("APM workflow completed successfully!")
    return exit_codes.SUCCESS


def _handle_gather(args: argparse.Namespace, environ: Mapping[str, str]) -> int:
    """Print the argument vector ``run`` would pass after ``apm run <script>``."""
    from apm_action.core.parameter_gatherer import ParameterGatherer
    from apm_action.infra.action_inputs import load_action_inputs

    inputs = load_action_inputs(environ, _overrides(args))
    print(json.dumps(ParameterGatherer().gather_inputs(inputs)))
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace, environ: Mapping[str, str]) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from apm_action.cli.doctor import run_doctor

    return run_doctor()


_HANDLERS = {
    "run": _handle_run,
    "gather": _handle_gather,
    "doctor": _handle_doctor,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run the apm-action CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.
    environ:
        Environment mapping to read inputs from.  When ``None``,
        ``os.environ`` is used.  Accepting both enables deterministic
        testing without monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    env: Mapping[str, str] = os.environ if environ is None else environ

    configure_logging(
        logging.DEBUG if args.verbose else logging.INFO,
        github_actions=in_github_actions(env),
    )
    return _HANDLERS[args.command](args, env)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ApmActionError as exc:
        console.print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
