"""Tests for the stderr diagnostics system.

Covers:
- NO_COLOR / TERM=dumb colour disabling
- stderr-only discipline
- Quiet mode suppression rules
- Verbose mode debug output
- Global instance management
"""

from __future__ import annotations

import pytest

from hookline import output as output_module
from hookline.config import configure
from hookline.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# NO_COLOR / TERM=dumb detection
# ------------------------------------------------------------------ #


class TestColorDisabling:
    """Test that NO_COLOR and TERM=dumb are respected."""

    def test_no_color_env_disables_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "yes")
        assert _should_disable_color() is True

    def test_term_dumb_disables_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stderr discipline
# ------------------------------------------------------------------ #


class TestStderrDiscipline:
    """Every diagnostic goes to stderr; nothing touches stdout."""

    @pytest.mark.parametrize("method", ["info", "warning", "error", "debug"])
    def test_goes_to_stderr(self, capsys, method):
        mgr = OutputManager(no_color=True, verbose=True)
        getattr(mgr, method)("hello diagnostics")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "hello diagnostics" in captured.err

    def test_warning_prefix(self, capsys):
        OutputManager(no_color=True).warning("careful")
        assert capsys.readouterr().err == "Warning: careful\n"

    def test_error_prefix(self, capsys):
        OutputManager(no_color=True).error("broken")
        assert capsys.readouterr().err == "Error: broken\n"

    def test_rich_mode_does_not_interpret_markup_in_message(self, capfd, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm")
        OutputManager().info("[bold]literal[/bold]")
        assert "[bold]literal[/bold]" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Quiet / verbose
# ------------------------------------------------------------------ #


class TestQuietMode:
    def test_quiet_suppresses_info(self, capsys):
        OutputManager(no_color=True, quiet=True).info("hidden")
        assert capsys.readouterr().err == ""

    def test_quiet_does_not_suppress_warning(self, capsys):
        OutputManager(no_color=True, quiet=True).warning("shown")
        assert "shown" in capsys.readouterr().err

    def test_quiet_does_not_suppress_error(self, capsys):
        OutputManager(no_color=True, quiet=True).error("shown")
        assert "shown" in capsys.readouterr().err

    def test_quiet_property(self):
        assert OutputManager(quiet=True).is_quiet is True


class TestVerboseMode:
    def test_debug_hidden_by_default(self, capsys):
        OutputManager(no_color=True).debug("secret")
        assert capsys.readouterr().err == ""

    def test_debug_prefix_in_no_color(self, capsys):
        OutputManager(no_color=True, verbose=True).debug("trace")
        assert capsys.readouterr().err == "[debug] trace\n"

    def test_verbose_property(self):
        assert OutputManager(verbose=True).is_verbose is True
        assert OutputManager().is_verbose is False


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_lazily_created(self):
        reset_output()
        assert output_module._output is None
        mgr = get_output()
        assert isinstance(mgr, OutputManager)
        assert get_output() is mgr

    def test_set_output(self):
        mgr = OutputManager(quiet=True)
        set_output(mgr)
        assert get_output() is mgr

    def test_reset_output(self):
        set_output(OutputManager())
        reset_output()
        assert output_module._output is None

    def test_verbosity_follows_config(self):
        configure(verbose=True)
        reset_output()
        assert get_output().is_verbose is True

    def test_request_trace_logged_when_verbose(self, capsys, make_transport):
        from hookline.http.request import Request

        set_output(OutputManager(no_color=True, verbose=True))
        with Request("https://api.example.com/ping", transport=make_transport(status=204)) as req:
            req.execute()
        assert "GET https://api.example.com/ping -> 204 No Content" in capsys.readouterr().err
