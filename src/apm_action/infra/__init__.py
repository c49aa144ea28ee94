"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system: process
spawning, PATH probing, and the CI runner's input/output files.
Every raw ``OSError`` must be caught here and re-raised as an
:class:`~apm_action.exceptions.ApmActionError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from apm_action.infra.action_inputs import load_action_inputs, read_action_inputs
from apm_action.infra.action_outputs import execution_outputs, write_outputs
from apm_action.infra.apm_detector import ApmStatus, detect_apm
from apm_action.infra.subprocess_runner import SubprocessCommandRunner

__all__: list[str] = [
    "ApmStatus",
    "SubprocessCommandRunner",
    "detect_apm",
    "execution_outputs",
    "load_action_inputs",
    "read_action_inputs",
    "write_outputs",
]
