"""Tests for the ``apm-action doctor`` command (cli/doctor.py).

The APM CLI probe is mocked — no system dependency, no internet.

Coverage:
* Individual check functions return correct tuples.
* Doctor returns SUCCESS when ``apm`` is present, GENERAL_ERROR when not.
* Plain (Rich-less) rendering includes install guidance.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from apm_action.cli import exit_codes
from apm_action.infra.apm_detector import ApmStatus

DETECT_PATH = "apm_action.cli.doctor.detect_apm"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _apm_found() -> ApmStatus:
    return ApmStatus(
        found=True,
        path=Path("/usr/local/bin/apm"),
        version_hint="found at /usr/local/bin/apm",
        install_commands=(),
    )


def _apm_missing() -> ApmStatus:
    return ApmStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=("curl -sSL https://example.invalid/install.sh | sh",),
    )


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from apm_action.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status


class TestApmCliCheck:
    @patch(DETECT_PATH)
    def test_found(self, mock_detect: MagicMock) -> None:
        from apm_action.cli.doctor import _apm_cli_check

        mock_detect.return_value = _apm_found()
        label, value, status = _apm_cli_check()
        assert label == "apm"
        assert value == str(Path("/usr/local/bin/apm"))
        assert "OK" in status

    @patch(DETECT_PATH)
    def test_missing_is_failure(self, mock_detect: MagicMock) -> None:
        from apm_action.cli.doctor import _apm_cli_check

        mock_detect.return_value = _apm_missing()
        _label, value, status = _apm_cli_check()
        assert value == "not found"
        assert "FAIL" in status


class TestRichCheck:
    def test_installed(self) -> None:
        from apm_action.cli.doctor import _rich_check

        label, _value, status = _rich_check()
        assert label == "rich"
        assert "OK" in status


class TestOsCheck:
    @patch("apm_action.cli.doctor.platform.machine", return_value="arm64")
    @patch("apm_action.cli.doctor.platform.release", return_value="23.4.0")
    @patch("apm_action.cli.doctor.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
    ) -> None:
        from apm_action.cli.doctor import _os_check

        _label, value, _status = _os_check()
        assert value == "macOS 23.4.0 (arm64)"


class TestStatusPlain:
    @pytest.mark.parametrize(
        ("markup", "plain"),
        [
            ("[green]OK[/green]", "OK"),
            ("[yellow]WARN[/yellow]", "WARN"),
            ("[red]FAIL (>=3.10 required)[/red]", "FAIL"),
        ],
    )
    def test_conversion(self, markup: str, plain: str) -> None:
        from apm_action.cli.doctor import _status_plain

        assert _status_plain(markup) == plain


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    @patch(DETECT_PATH)
    def test_all_pass_returns_success(self, mock_detect: MagicMock) -> None:
        from apm_action.cli.doctor import run_doctor

        mock_detect.return_value = _apm_found()
        assert run_doctor() == exit_codes.SUCCESS

    @patch(DETECT_PATH)
    def test_missing_cli_returns_general_error(self, mock_detect: MagicMock) -> None:
        from apm_action.cli.doctor import run_doctor

        mock_detect.return_value = _apm_missing()
        assert run_doctor() == exit_codes.GENERAL_ERROR

    @patch(DETECT_PATH)
    @patch.dict("sys.modules", {"rich": None, "rich.console": None, "rich.table": None})
    def test_plain_output_shows_install_guidance(
        self,
        mock_detect: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from apm_action.cli.doctor import run_doctor

        mock_detect.return_value = _apm_missing()
        run_doctor()

        err = capsys.readouterr().err
        assert "apm-action doctor" in err
        assert "https://example.invalid/install.sh" in err
        assert "Some checks failed." in err
        assert "[bold" not in err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("apm_action.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, mock_run: MagicMock) -> None:
        from apm_action.cli.app import main

        assert main(["doctor"], environ={}) == exit_codes.GENERAL_ERROR
        mock_run.assert_called_once()
