"""Infrastructure: reading action inputs from the process environment.

GitHub Actions exposes every ``with:`` input as ``INPUT_<NAME>``
(name upper-cased, spaces replaced by ``_``, hyphens kept).  All such
variables are enumerated generically so that the core receives a plain
mapping and never depends on a fixed list of input names.
"""

from __future__ import annotations

from collections.abc import Mapping

from apm_action.core.models import ActionInputs

INPUT_PREFIX: str = "INPUT_"


def read_action_inputs(environ: Mapping[str, str]) -> dict[str, str]:
    """Return every ``INPUT_*`` variable keyed by lower-cased input name.

    ``INPUT_SKIP-INSTALL`` becomes ``skip-install``; values are returned
    untouched.
    """
    return {
        key[len(INPUT_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(INPUT_PREFIX) and len(key) > len(INPUT_PREFIX)
    }


def load_action_inputs(
    environ: Mapping[str, str],
    overrides: Mapping[str, str | None] | None = None,
) -> ActionInputs:
    """Build :class:`ActionInputs` from the environment plus *overrides*.

    *overrides* (typically CLI flags) win over environment values;
    ``None`` entries are ignored.

    Raises
    ------
    InvalidInputError
        If a boolean input has an unrecognised value.
    """
    values = read_action_inputs(environ)
    if overrides:
        for name, value in overrides.items():
            if value is not None:
                values[name.replace("_", "-")] = value
    return ActionInputs.from_mapping(values)
