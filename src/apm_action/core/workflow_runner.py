"""Core workflow runner — drives one ``apm`` workflow end to end.

This service delegates every external command to a
:class:`~apm_action.core.protocols.CommandRunner` injected at
construction time.  It is responsible for:

* Verifying the APM CLI answers ``--version``.
* Runtime setup, dependency install and ``AGENTS.md`` compilation.
* Gathering parameters and invoking ``apm run <script>``.
* Ensuring only :class:`~apm_action.exceptions.ApmActionError`
  subclasses escape the individual steps.

Guarantees
----------
* Never changes the process working directory; ``cwd`` is passed
  to the runner instead.
* Never mutates the caller's environment mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from apm_action.core.models import (
    ActionInputs,
    ArgumentVector,
    CommandResult,
    ExecutionResult,
)
from apm_action.core.parameter_gatherer import ParameterGatherer
from apm_action.core.protocols import CommandRunner
from apm_action.exceptions import (
    ApmActionError,
    CliNotFoundError,
    CommandFailedError,
    append_install_suggestion,
)

logger = logging.getLogger(__name__)

APM_COMMAND: str = "apm"
DEFAULT_RUNTIME: str = "codex"
INSTALL_SCRIPT: str = "install"
INSTALL_ONLY_OUTPUT: str = "Dependencies installed and AGENTS.md compiled successfully"
DEFAULT_HOME: str = "/home/runner"


def build_execution_env(environ: Mapping[str, str]) -> dict[str, str]:
    """Return the environment every ``apm`` command runs with.

    The Copilot CLI only loads MCP servers from ``$XDG_CONFIG_HOME``
    when it runs in standalone mode.
    """
    env = dict(environ)
    env["XDG_CONFIG_HOME"] = environ.get("HOME") or DEFAULT_HOME
    env["COPILOT_AGENT_RUNNER_TYPE"] = "STANDALONE"
    return env


class WorkflowRunner:
    """Stateless orchestration of a single action invocation.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    gatherer:
        Parameter gatherer; a default :class:`ParameterGatherer` when
        omitted.
    """

    def __init__(
        self,
        runner: CommandRunner,
        gatherer: ParameterGatherer | None = None,
    ) -> None:
        self._runner: CommandRunner = runner
        self._gatherer: ParameterGatherer = gatherer or ParameterGatherer()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def execute(
        self,
        inputs: ActionInputs,
        environ: Mapping[str, str],
    ) -> ExecutionResult:
        """Run the full workflow and return the action outputs.

        Known failures are logged and reported as an unsuccessful
        :class:`ExecutionResult`; they are not raised.
        """
        try:
            return self._execute(inputs, environ)
        except ApmActionError as exc:
            logger.error("APM execution failed: %s", exc)
            return ExecutionResult(success=False, output=str(exc))

    def build_run_args(self, inputs: ActionInputs) -> ArgumentVector:
        """Return the argument vector for ``apm run <script> ...``."""
        return ["run", inputs.script, *self._gatherer.gather_inputs(inputs)]

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _execute(
        self,
        inputs: ActionInputs,
        environ: Mapping[str, str],
    ) -> ExecutionResult:
        env = build_execution_env(environ)
        cwd = None if inputs.working_directory == "." else inputs.working_directory

        logger.info("Ensuring APM CLI is available...")
        self.ensure_cli(inputs, env)

        logger.info("Setting up AI runtime...")
        self.setup_runtime(inputs, env, cwd)

        if cwd is not None:
            logger.info("Using working directory: %s", cwd)

        if inputs.skip_install:
            logger.info("Skipping dependency installation and compilation")
        else:
            logger.info("Installing APM and MCP dependencies...")
            self._run_required("install", [], env, cwd)
            logger.info("Compiling AGENTS.md from dependencies...")
            self._run_required("compile", [], env, cwd)

        if inputs.script == INSTALL_SCRIPT:
            logger.info("APM dependencies installation and compilation completed")
            return ExecutionResult(success=True, output=INSTALL_ONLY_OUTPUT)

        run_args = self.build_run_args(inputs)
        logger.info("Running APM script: %s", inputs.script)
        if len(run_args) > 2:
            logger.info("Parameters: %s", ", ".join(run_args[2:]))

        result = self._runner.run(APM_COMMAND, run_args, env=env, cwd=cwd)
        return ExecutionResult(success=result.succeeded, output=result.output.strip())

    def ensure_cli(self, inputs: ActionInputs, env: Mapping[str, str]) -> None:
        """Verify that ``apm --version`` succeeds.

        Raises
        ------
        CliNotFoundError
            When the CLI is missing or does not answer ``--version``.
        """
        try:
            result = self._runner.run(APM_COMMAND, ["--version"], env=env)
        except CliNotFoundError as exc:
            raise CliNotFoundError(
                str(exc),
                hint=append_install_suggestion(
                    exc.hint or "Make sure 'apm' is on PATH.", inputs.apm_version,
                ),
            ) from exc

        if not result.succeeded:
            raise CliNotFoundError(
                f"APM CLI is not usable ('apm --version' exited with {result.exit_code}).",
                hint=append_install_suggestion(
                    "Reinstall the APM CLI or check PATH.", inputs.apm_version,
                ),
            )
        version = result.output.strip()
        if version:
            logger.info("APM CLI already installed: %s", version)

    def setup_runtime(
        self,
        inputs: ActionInputs,
        env: Mapping[str, str],
        cwd: str | None = None,
    ) -> None:
        """Run ``apm runtime setup codex``; failures only warn."""
        runtime_env = dict(env)
        runtime_env["GITHUB_TOKEN"] = env.get("GITHUB_TOKEN") or inputs.github_token

        try:
            result = self._runner.run(
                APM_COMMAND,
                ["runtime", "setup", DEFAULT_RUNTIME],
                env=runtime_env,
                cwd=cwd,
            )
        except ApmActionError as exc:
            logger.warning("Runtime setup warning: %s", exc)
            return

        if result.succeeded:
            logger.info("Runtime setup completed")
        else:
            logger.warning(
                "Runtime setup had issues (exit code %d) but continuing...",
                result.exit_code,
            )

    def _run_required(
        self,
        subcommand: str,
        args: Sequence[str],
        env: Mapping[str, str],
        cwd: str | None,
    ) -> CommandResult:
        """Run ``apm <subcommand>`` and raise when it fails."""
        full_command = f"{APM_COMMAND} {subcommand}"
        result = self._runner.run(APM_COMMAND, [subcommand, *args], env=env, cwd=cwd)
        if not result.succeeded:
            raise CommandFailedError(
                f"APM command '{full_command}' failed with exit code {result.exit_code}",
                command=full_command,
                exit_code=result.exit_code,
            )
        return result
