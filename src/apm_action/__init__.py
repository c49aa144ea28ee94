"""apm-action — CI glue that runs APM workflow scripts with parameters.

Merges structured JSON parameters and free-form shell-like arguments
into a single argument vector for ``apm run <script>``.
"""

from apm_action.version import __version__

__all__: list[str] = ["__version__"]
