"""``apm-action doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can run APM workflows.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from apm_action.cli import exit_codes
from apm_action.cli.console import console
from apm_action.infra.apm_detector import detect_apm
from apm_action.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _apm_cli_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the APM CLI row.

    A missing CLI is a failure: ``run`` cannot proceed without it.
    """
    status_obj = detect_apm()
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return "apm", path_str, "[green]OK[/green]"
    return "apm", "not found", "[red]FAIL[/red]"


def _rich_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the optional Rich row."""
    try:
        from importlib.metadata import PackageNotFoundError, version

        return "rich", version("rich"), "[green]OK[/green]"
    except PackageNotFoundError:
        return "rich", "not installed", "[yellow]WARN[/yellow]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _apm_action_version_check() -> tuple[str, str, str]:
    return "apm-action", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\napm-action doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    from rich.table import Table

    table = Table(
        title="apm-action doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _apm_action_version_check(),
        _python_version_check(),
        _apm_cli_check(),
        _rich_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        _print_rich_doctor_table(checks)
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)

    apm_status = detect_apm()
    if not apm_status.found and apm_status.install_commands:
        console.print("[yellow]APM CLI is not installed.[/yellow]")
        console.print("Install using:\n")
        for cmd in apm_status.install_commands:
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
