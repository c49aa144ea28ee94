"""Infrastructure: publishing step outputs through ``GITHUB_OUTPUT``.

Each output is appended with the multi-line delimiter form::

    name<<ghadelimiter_<uuid>
    value
    ghadelimiter_<uuid>

so that arbitrary command output (newlines included) round-trips.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from pathlib import Path

from apm_action.core.models import ExecutionResult
from apm_action.exceptions import OutputWriteError

OUTPUT_FILE_VAR: str = "GITHUB_OUTPUT"


def format_output(name: str, value: str) -> str:
    """Return one output record in delimiter form."""
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise OutputWriteError(
            f"Unexpected input: output '{name}' contains the delimiter.",
        )
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(outputs: Mapping[str, str], environ: Mapping[str, str]) -> bool:
    """Append *outputs* to the file named by ``GITHUB_OUTPUT``.

    Returns ``False`` without writing when the variable is unset (e.g.
    local runs), ``True`` once every output is written.

    Raises
    ------
    OutputWriteError
        If the output file cannot be written.
    """
    target = environ.get(OUTPUT_FILE_VAR)
    if not target:
        return False

    records = "".join(format_output(name, value) for name, value in outputs.items())
    try:
        with Path(target).open("a", encoding="utf-8") as handle:
            handle.write(records)
    except OSError as exc:
        raise OutputWriteError(
            f"Could not write step outputs to {target}: {exc}",
        ) from exc
    return True


def execution_outputs(result: ExecutionResult) -> dict[str, str]:
    """Map an :class:`ExecutionResult` to the action's declared outputs."""
    return {
        "success": "true" if result.success else "false",
        "output": result.output,
    }
