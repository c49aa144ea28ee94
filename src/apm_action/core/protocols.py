"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from apm_action.core.models import CommandResult


class CommandRunner(Protocol):
    """Contract for executing an external command.

    Any object that implements :meth:`run` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> CommandResult:
        """Run *command* with *args* and return its exit code and output.

        Parameters
        ----------
        command:
            Executable name or path (e.g. ``"apm"``).
        args:
            Argument vector, passed through verbatim — never re-parsed
            by a shell.
        env:
            Complete environment for the child process, or ``None`` to
            inherit the current one.
        cwd:
            Working directory for the child process, or ``None``.

        A non-zero exit code is reported in the result, not raised.

        Raises
        ------
        CliNotFoundError
            When *command* cannot be located or started.
        CommandFailedError
            When the process cannot be spawned for another OS reason.
        """
        ...  # pragma: no cover
