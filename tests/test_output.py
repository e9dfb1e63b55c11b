"""Tests for the output system.

Covers:
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- Verbose mode debug output
- Global instance management
"""

from __future__ import annotations

import pytest

from clapi import output as output_module
from clapi.output import (
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


class TestColorDisabling:
    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_color_enabled_by_default(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


class TestStreams:
    def test_print_data_goes_to_stdout(self, capsys):
        OutputManager(no_color=True).print_data("payload")
        captured = capsys.readouterr()
        assert captured.out == "payload\n"
        assert captured.err == ""

    def test_print_data_keeps_existing_newline(self, capsys):
        OutputManager(no_color=True).print_data("line\n")
        assert capsys.readouterr().out == "line\n"

    def test_diagnostics_go_to_stderr(self, capsys):
        mgr = OutputManager(no_color=True)
        mgr.info("reading")
        mgr.success("done")
        mgr.warning("careful")
        mgr.error("broken")
        mgr.suggest("next")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.splitlines() == [
            "reading",
            "done",
            "Warning: careful",
            "Error: broken",
            "→ next",
        ]

    def test_markup_in_messages_is_not_interpreted(self, capsys, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        OutputManager().error("bad [bold]value[/bold]")
        assert "bad [bold]value[/bold]" in capsys.readouterr().err


class TestQuietAndVerbose:
    def test_quiet_suppresses_info(self, capsys):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.info("hidden")
        mgr.success("hidden")
        mgr.suggest("hidden")
        assert capsys.readouterr().err == ""

    def test_quiet_keeps_warnings_and_errors(self, capsys):
        mgr = OutputManager(no_color=True, quiet=True)
        mgr.warning("w")
        mgr.error("e")
        assert capsys.readouterr().err == "Warning: w\nError: e\n"

    def test_debug_needs_verbose(self, capsys):
        OutputManager(no_color=True).debug("quiet")
        assert capsys.readouterr().err == ""
        OutputManager(no_color=True, verbose=True).debug("loud")
        assert capsys.readouterr().err == "[debug] loud\n"

    def test_flags_exposed(self):
        mgr = OutputManager(quiet=True, verbose=True)
        assert mgr.is_quiet and mgr.is_verbose


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        reset_output()
        first = get_output()
        assert isinstance(first, OutputManager)
        assert get_output() is first

    def test_set_output(self):
        mgr = OutputManager(quiet=True)
        set_output(mgr)
        assert get_output() is mgr

    def test_reset_output(self):
        set_output(OutputManager())
        reset_output()
        assert output_module._output is None

    def test_convenience_functions_delegate(self, capsys):
        set_output(OutputManager(no_color=True))
        output_module.print_data("data")
        output_module.info("note")
        output_module.error("oops")
        captured = capsys.readouterr()
        assert captured.out == "data\n"
        assert captured.err == "note\nError: oops\n"

    @pytest.mark.parametrize("name", ["info", "success", "suggest"])
    def test_convenience_respects_quiet(self, capsys, name):
        set_output(OutputManager(no_color=True, quiet=True))
        getattr(output_module, name)("x")
        assert capsys.readouterr().err == ""
