"""Domain models for apm-action.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and construction from raw text.  They
carry zero I/O and zero dependencies on external packages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from apm_action.exceptions import InvalidInputError

ParameterMap = dict[str, Any]
"""Decoded structured parameters, in JSON document key order."""

ArgumentVector = list[str]
"""Ordered CLI arguments handed to ``apm run <script>``."""

_TRUE_TEXT: frozenset[str] = frozenset({"true", "yes", "1"})
_FALSE_TEXT: frozenset[str] = frozenset({"false", "no", "0", ""})


def parse_bool_input(name: str, raw: str | None) -> bool:
    """Interpret an action input string as a boolean.

    Raises
    ------
    InvalidInputError
        If *raw* is not a recognised boolean spelling.
    """
    text = (raw or "").strip().lower()
    if text in _TRUE_TEXT:
        return True
    if text in _FALSE_TEXT:
        return False
    raise InvalidInputError(
        f"Input '{name}' must be a boolean, got {raw!r}.",
        hint="Use 'true' or 'false'.",
    )


# ---------------------------------------------------------------------------
# Action inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ActionInputs:
    """Every input the action accepts, already normalised."""

    script: str = "start"
    """APM script name passed to ``apm run``."""

    parameters: str = ""
    """JSON object text with structured parameters."""

    args: str = ""
    """Free-form, shell-like argument string."""

    working_directory: str = "."
    """Directory every ``apm`` command runs in."""

    skip_install: bool = False
    """Skip ``apm install`` / ``apm compile`` when ``True``."""

    apm_version: str = "latest"
    """Requested APM CLI version, used in install guidance."""

    github_token: str = ""
    """Fallback token for runtime setup when ``GITHUB_TOKEN`` is unset."""

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> ActionInputs:
        """Build inputs from any caller-supplied name/value mapping.

        Names are matched case-insensitively with ``-`` and ``_``
        treated alike.  Unknown names are ignored; blank values fall
        back to the defaults.
        """
        normalised = {
            key.strip().lower().replace("-", "_"): value
            for key, value in values.items()
        }

        def text(name: str, default: str) -> str:
            value = normalised.get(name)
            if value is None or value.strip() == "":
                return default
            return value

        return cls(
            script=text("script", "start").strip(),
            parameters=normalised.get("parameters", "") or "",
            args=normalised.get("args", "") or "",
            working_directory=text("working_directory", ".").strip(),
            skip_install=parse_bool_input(
                "skip-install", normalised.get("skip_install"),
            ),
            apm_version=text("apm_version", "latest").strip(),
            github_token=normalised.get("github_token", "") or "",
        )


# ---------------------------------------------------------------------------
# Command and workflow results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit code and combined stdout/stderr of one external command."""

    exit_code: int
    output: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of a full workflow run, exposed as the action outputs."""

    success: bool
    output: str
