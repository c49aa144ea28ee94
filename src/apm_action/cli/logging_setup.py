"""Logging configuration for the ``apm_action`` logger tree.

Inside GitHub Actions, warnings and errors are rendered as workflow
commands (``::warning::…``) so they surface as run annotations.
Elsewhere Rich's handler is used when available, with a plain stderr
handler as fallback.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

PACKAGE_LOGGER: str = "apm_action"

_COMMANDS: tuple[tuple[int, str], ...] = (
    (logging.ERROR, "error"),
    (logging.WARNING, "warning"),
    (logging.INFO, ""),
    (logging.DEBUG, "debug"),
)


def escape_command_data(message: str) -> str:
    """Escape *message* for use as workflow-command data."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class GitHubActionsFormatter(logging.Formatter):
    """Render records as GitHub Actions workflow commands.

    INFO is printed as-is; other levels map to ``::debug::``,
    ``::warning::`` or ``::error::``.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = next(
            (name for level, name in _COMMANDS if record.levelno >= level),
            "debug",
        )
        if not command:
            return message
        return f"::{command}::{escape_command_data(message)}"


def in_github_actions(environ: Mapping[str, str]) -> bool:
    return environ.get("GITHUB_ACTIONS", "").lower() == "true"


def _build_handler(github_actions: bool) -> logging.Handler:
    if github_actions:
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(GitHubActionsFormatter("%(message)s"))
        return handler

    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        return handler

    from apm_action.cli.console import get_rich_console

    return RichHandler(
        console=get_rich_console(),
        show_time=False,
        show_path=False,
        markup=False,
    )


def configure_logging(
    level: int = logging.INFO,
    *,
    github_actions: bool = False,
) -> logging.Logger:
    """Install a single handler on the package logger and return it.

    Calling this again replaces the previously installed handler.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(_build_handler(github_actions))
    logger.setLevel(level)
    logger.propagate = False
    return logger
