"""``subprocess``-backed implementation of :class:`~apm_action.core.protocols.CommandRunner`.

This module is the **only** place in the codebase that spawns
processes.  ``OSError`` from process creation is caught here and
re-raised as :class:`~apm_action.exceptions.CliNotFoundError` or
:class:`~apm_action.exceptions.CommandFailedError`.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping, Sequence

from apm_action.core.models import CommandResult
from apm_action.exceptions import CliNotFoundError, CommandFailedError

logger = logging.getLogger(__name__)


class SubprocessCommandRunner:
    """Concrete :class:`CommandRunner` backed by :func:`subprocess.run`.

    Arguments are passed as a list — never through a shell — so the
    gathered vector reaches the child process exactly as built.
    stderr is merged into stdout so ``output`` keeps the interleaving
    the user saw.  Undecodable bytes become U+FFFD instead of failing
    the run.
    """

    def __init__(self, *, echo: bool = True) -> None:
        self._echo: bool = echo

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> CommandResult:
        """Run *command* and capture its exit code and combined output.

        Raises
        ------
        CliNotFoundError
            When *command* does not exist or is not executable.
        CommandFailedError
            For any other ``OSError`` while starting the process.
        """
        argv = [command, *args]
        logger.debug("Running: %s", argv)

        try:
            completed = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                env=dict(env) if env is not None else None,
                cwd=cwd,
                check=False,
            )
        except FileNotFoundError as exc:
            if cwd is not None and exc.filename == cwd:
                raise CommandFailedError(
                    f"Working directory does not exist: {cwd}",
                    command=command,
                ) from exc
            raise CliNotFoundError(
                f"'{command}' was not found.",
                hint="Make sure it is installed and on PATH.",
            ) from exc
        except PermissionError as exc:
            raise CliNotFoundError(
                f"'{command}' is not executable: {exc}",
            ) from exc
        except OSError as exc:
            raise CommandFailedError(
                f"Could not start '{command}': {exc}",
                command=command,
            ) from exc

        output = completed.stdout or ""
        if self._echo and output:
            logger.info("%s", output.rstrip())
        return CommandResult(exit_code=completed.returncode, output=output)
