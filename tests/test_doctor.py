"""Tests for the ``vidref doctor`` command (cli/doctor.py).

Optional dependencies are hidden through ``sys.modules`` — no system
dependency, no internet.

Coverage:
* Doctor runs and returns SUCCESS when everything required is present.
* Missing credentials and a missing yt-dlp are warnings, not failures.
* A missing httpx or an old Python fails the run.
* Plain output is used when Rich is unavailable.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from vidref.cli import exit_codes
from vidref.config import ResolverConfig


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from vidref.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status


class TestHttpxVersionCheck:
    def test_installed(self) -> None:
        from vidref.cli.doctor import _httpx_version_check

        label, _value, status = _httpx_version_check()
        assert label == "httpx"
        assert "OK" in status

    @patch.dict("sys.modules", {"httpx": None})
    def test_not_installed(self) -> None:
        from vidref.cli.doctor import _httpx_version_check

        _label, value, status = _httpx_version_check()
        assert value == "NOT INSTALLED"
        assert "FAIL" in status


class TestYtdlpVersionCheck:
    @patch.dict("sys.modules", {"yt_dlp": None, "yt_dlp.version": None})
    def test_not_installed_is_warning(self) -> None:
        from vidref.cli.doctor import _ytdlp_version_check

        label, value, status = _ytdlp_version_check()
        assert label == "yt-dlp"
        assert value == "NOT INSTALLED"
        assert "WARN" in status


class TestRichVersionCheck:
    @patch.dict("sys.modules", {"rich": None})
    def test_not_installed_is_warning(self) -> None:
        from vidref.cli.doctor import _rich_version_check

        label, value, status = _rich_version_check()
        assert label == "rich"
        assert value == "NOT INSTALLED"
        assert "WARN" in status


class TestApiKeyCheck:
    def test_configured(self) -> None:
        from vidref.cli.doctor import _api_key_check

        _label, value, status = _api_key_check(ResolverConfig(api_key="secret"))
        assert value == "configured"
        assert "secret" not in value
        assert "OK" in status

    def test_missing_is_warning(self) -> None:
        from vidref.cli.doctor import _api_key_check

        _label, value, status = _api_key_check(ResolverConfig())
        assert "not set" in value
        assert "WARN" in status


class TestOsCheck:
    @patch("vidref.cli.doctor.platform.machine", return_value="arm64")
    @patch("vidref.cli.doctor.platform.release", return_value="23.4.0")
    @patch("vidref.cli.doctor.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
    ) -> None:
        from vidref.cli.doctor import _os_check

        _label, value, _status = _os_check()
        assert "macOS" in value
        assert "Darwin" not in value


class TestVidrefVersionCheck:
    def test_returns_current_version(self) -> None:
        from vidref.cli.doctor import _vidref_version_check
        from vidref.version import __version__

        label, value, status = _vidref_version_check()
        assert label == "vidref"
        assert value == __version__
        assert "OK" in status


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    def test_keyless_still_succeeds(self) -> None:
        """A missing API key is a WARN, not a FAIL."""
        from vidref.cli.doctor import run_doctor

        assert run_doctor(ResolverConfig()) == exit_codes.SUCCESS

    @patch(
        "vidref.cli.doctor._python_version_check",
        return_value=("Python", "3.8.0", "[red]FAIL (>=3.10 required)[/red]"),
    )
    def test_failed_check_returns_general_error(self, _mock_python: MagicMock) -> None:
        from vidref.cli.doctor import run_doctor

        assert run_doctor(ResolverConfig()) == exit_codes.GENERAL_ERROR

    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.console": None})
    def test_plain_output_without_rich(self, capsys: pytest.CaptureFixture[str]) -> None:
        from vidref.cli.doctor import run_doctor

        code = run_doctor(ResolverConfig(backend="ytdlp"))
        err = capsys.readouterr().err
        assert code == exit_codes.SUCCESS
        assert "vidref doctor" in err
        assert "ytdlp" in err
        assert "All checks passed." in err
