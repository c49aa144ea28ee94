"""Custom exception hierarchy for apm-action.

All exceptions that cross layer boundaries must inherit from
:class:`ApmActionError`.  Raw ``OSError`` / ``subprocess`` failures
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Malformed *parameter* input is deliberately absent from this list:
it is reported as a logged warning and never raised.

Hierarchy
---------
ApmActionError
├── InvalidInputError
├── CliNotFoundError
├── CommandFailedError
├── OutputWriteError
└── EnvironmentError
"""

from __future__ import annotations


class ApmActionError(Exception):
    """Base exception for all apm-action errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Inputs ----------------------------------------------------------------

class InvalidInputError(ApmActionError):
    """Raised when an action input cannot be interpreted (e.g. a bad boolean)."""


# --- External CLI ----------------------------------------------------------

class CliNotFoundError(ApmActionError):
    """Raised when the ``apm`` executable cannot be located or started."""


class CommandFailedError(ApmActionError):
    """Raised when a required ``apm`` sub-command exits unsuccessfully."""

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        exit_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.command: str = command
        self.exit_code: int | None = exit_code


# --- Action outputs --------------------------------------------------------

class OutputWriteError(ApmActionError):
    """Raised when step outputs cannot be written to ``GITHUB_OUTPUT``."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(ApmActionError):
    """Raised when a required runtime dependency is not available."""


APM_INSTALL_SCRIPT_URL: str = (
    "https://raw.githubusercontent.com/danielmeppiel/apm-cli/main/install.sh"
)
"""Official install script used in hints; never fetched by this package."""


def append_install_suggestion(hint: str, version: str = "latest") -> str:
    """Append APM CLI install guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Install the APM CLI:"
    if marker in hint:
        return hint
    prefix = "" if version in ("", "latest") else f"APM_VERSION={version} "
    return "\n".join(
        (
            hint,
            marker,
            f"    curl -sSL {APM_INSTALL_SCRIPT_URL} | {prefix}sh",
        )
    )
