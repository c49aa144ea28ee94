"""Infrastructure: APM CLI detection and install guidance.

This module is responsible for locating the ``apm`` executable on the
system PATH and providing installation guidance when it is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No PATH modification.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from apm_action.exceptions import APM_INSTALL_SCRIPT_URL


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ApmStatus:
    """Result of an APM CLI detection probe.

    Attributes
    ----------
    found : bool
        Whether ``apm`` was located on PATH.
    path : Path | None
        Absolute path to the ``apm`` binary, or ``None``.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the CLI.  Empty when
        ``apm`` is already present.
    """

    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_apm(version: str = "latest") -> ApmStatus:
    """Probe PATH for an ``apm`` binary.

    Returns an :class:`ApmStatus` regardless of whether ``apm`` is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which("apm")

    if result is not None:
        resolved = Path(result).resolve()
        return ApmStatus(
            found=True,
            path=resolved,
            version_hint=f"found at {resolved}",
            install_commands=(),
        )

    return ApmStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=install_commands(version),
    )


# ---------------------------------------------------------------------------
# Install guidance
# ---------------------------------------------------------------------------

def install_commands(version: str = "latest") -> tuple[str, ...]:
    """Return install commands for *version* (``latest`` when blank)."""
    if version in ("", "latest"):
        return (f"curl -sSL {APM_INSTALL_SCRIPT_URL} | sh",)
    return (f"curl -sSL {APM_INSTALL_SCRIPT_URL} | APM_VERSION={version} sh",)
