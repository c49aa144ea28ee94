"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem, environment, or network access.
* No imports from ``cli`` or ``infra``.
* Malformed parameter input is logged, never raised.
"""

from apm_action.core.models import (
    ActionInputs,
    ArgumentVector,
    CommandResult,
    ExecutionResult,
    ParameterMap,
)
from apm_action.core.parameter_encoder import encode_parameters
from apm_action.core.parameter_gatherer import ParameterGatherer, gather_parameters
from apm_action.core.protocols import CommandRunner
from apm_action.core.tokenizer import split_arguments
from apm_action.core.workflow_runner import WorkflowRunner

__all__: list[str] = [
    "ActionInputs",
    "ArgumentVector",
    "CommandResult",
    "CommandRunner",
    "ExecutionResult",
    "ParameterGatherer",
    "ParameterMap",
    "WorkflowRunner",
    "encode_parameters",
    "gather_parameters",
    "split_arguments",
]
