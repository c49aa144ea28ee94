"""Shared pytest fixtures and configuration for the apm-action test suite.

Guidelines
----------
* No internet access in any test.
* No real ``apm`` binary: commands go through :class:`FakeCommandRunner`.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state or the real process environment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field

import pytest

from apm_action.core.models import CommandResult


@dataclass
class RecordedCall:
    command: str
    args: list[str]
    env: dict[str, str] | None
    cwd: str | None


@dataclass
class FakeCommandRunner:
    """In-memory :class:`CommandRunner` keyed by the first argument."""

    results: dict[str, CommandResult] = field(default_factory=dict)
    errors: dict[str, Exception] = field(default_factory=dict)
    calls: list[RecordedCall] = field(default_factory=list)

    def run(
        self,
        command: str,
        args: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> CommandResult:
        self.calls.append(
            RecordedCall(command, list(args), dict(env) if env is not None else None, cwd),
        )
        key = args[0] if args else ""
        if key in self.errors:
            raise self.errors[key]
        return self.results.get(key, CommandResult(exit_code=0, output=""))

    def subcommands(self) -> list[str]:
        return [call.args[0] for call in self.calls]


@pytest.fixture
def fake_runner() -> FakeCommandRunner:
    return FakeCommandRunner(
        results={"--version": CommandResult(exit_code=0, output="apm 0.4.2\n")},
    )


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    """Undo ``configure_logging`` so ``caplog`` keeps seeing records."""
    logger = logging.getLogger("apm_action")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
