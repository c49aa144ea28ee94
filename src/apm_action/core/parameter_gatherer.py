"""Parameter gathering — structured parameters first, free-form second.

The gatherer is the single place that decides argument *order*:
``encode_parameters(parameters) + split_arguments(args)``.  Nothing is
deduplicated; when both inputs name the same logical flag the later
(free-form) occurrence wins in the downstream CLI's own parsing.

Guarantees
----------
* Pure — no environment access, no I/O beyond logged warnings.
* Never raises for malformed input.
* Stateless; one instance may be shared freely.
"""

from __future__ import annotations

import logging

from apm_action.core.models import ActionInputs, ArgumentVector
from apm_action.core.parameter_encoder import encode_parameters
from apm_action.core.tokenizer import split_arguments

logger = logging.getLogger(__name__)


class ParameterGatherer:
    """Combine the ``parameters`` and ``args`` inputs into one vector."""

    def gather(
        self,
        parameters: str | None = None,
        args: str | None = None,
    ) -> ArgumentVector:
        """Return ``--param`` pairs from *parameters* followed by *args* tokens.

        Parameters
        ----------
        parameters:
            JSON object text (user-friendly structured input).
        args:
            Shell-like free-form text (power-user escape hatch).
        """
        gathered: ArgumentVector = []
        gathered.extend(encode_parameters(parameters))
        gathered.extend(split_arguments(args))
        logger.debug("Gathered %d argument(s)", len(gathered))
        return gathered

    def gather_inputs(self, inputs: ActionInputs) -> ArgumentVector:
        """Convenience wrapper over :meth:`gather` for :class:`ActionInputs`."""
        return self.gather(inputs.parameters, inputs.args)


def gather_parameters(
    parameters: str | None = None,
    args: str | None = None,
) -> ArgumentVector:
    """Module-level shortcut for :meth:`ParameterGatherer.gather`."""
    return ParameterGatherer().gather(parameters, args)
