"""Allow ``python -m apm_action`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m apm_action`` behaves identically to the ``apm-action``
console script.
"""

from __future__ import annotations

from apm_action.cli.app import cli

if __name__ == "__main__":
    cli()
