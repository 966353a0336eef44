"""Tests for dialect detection and the dialect registry."""

import pytest

from shline.core.quoting import QuotingFunctions, ShellQuoting
from shline.dialects import Dialect, detect_dialect, get_handler, quoting_for

KNOWN = [Dialect.BASH, Dialect.CMD, Dialect.POWERSHELL]

# Opening and closing delimiter added by each quoting mode
DELIMITERS = {
    (Dialect.BASH, ShellQuoting.STRONG): ("'", "'"),
    (Dialect.BASH, ShellQuoting.WEAK): ('"', '"'),
    (Dialect.CMD, ShellQuoting.STRONG): ('"', '"'),
    (Dialect.CMD, ShellQuoting.WEAK): ('"', '"'),
    (Dialect.POWERSHELL, ShellQuoting.STRONG): ("'", "'"),
    (Dialect.POWERSHELL, ShellQuoting.WEAK): ('"', '"'),
}


class TestDetectDialect:
    @pytest.mark.parametrize(
        "executable",
        ["bash", "/bin/bash", "/usr/local/bin/bash", "bash.exe", "C:\\Program Files\\Git\\bin\\bash.exe"],
    )
    def test_bash(self, executable):
        assert detect_dialect(executable) is Dialect.BASH

    @pytest.mark.parametrize(
        "executable",
        [
            "pwsh",
            "/usr/bin/pwsh",
            "pwsh.exe",
            "powershell",
            "C:\\Windows\\System32\\WindowsPowerShell\\v1.0\\powershell.exe",
            "PowerShell.EXE",
        ],
    )
    def test_powershell(self, executable):
        assert detect_dialect(executable) is Dialect.POWERSHELL

    @pytest.mark.parametrize(
        "executable", ["cmd", "cmd.exe", "C:\\Windows\\System32\\CMD.EXE", "Cmd.Exe"]
    )
    def test_cmd(self, executable):
        assert detect_dialect(executable) is Dialect.CMD

    @pytest.mark.parametrize(
        "executable", ["/usr/bin/fish", "/bin/zsh", "/bin/sh", "BASH.EXE", "bash-completion", "", None]
    )
    def test_unknown(self, executable):
        assert detect_dialect(executable) is Dialect.UNKNOWN

    def test_bash_is_case_sensitive(self):
        assert detect_dialect("/bin/Bash") is Dialect.UNKNOWN


class TestRegistry:
    @pytest.mark.parametrize("dialect", KNOWN)
    def test_handler_matches_its_own_name(self, dialect):
        handler = get_handler(dialect)
        assert handler.PATTERN.search(dialect.value)

    def test_unknown_has_no_handler(self):
        assert get_handler(Dialect.UNKNOWN) is None

    def test_unknown_quoting_is_empty(self):
        assert quoting_for(Dialect.UNKNOWN) == QuotingFunctions()

    @pytest.mark.parametrize("dialect", KNOWN)
    def test_exec_args(self, dialect):
        expected = {
            Dialect.BASH: ("-l", "-c"),
            Dialect.CMD: ("/c",),
            Dialect.POWERSHELL: ("-c",),
        }
        assert get_handler(dialect).EXEC_ARGS == expected[dialect]


class TestQuotingMatrix:
    """Every dialect implements every mode and leaves safe input alone."""

    @pytest.mark.parametrize("dialect", KNOWN)
    @pytest.mark.parametrize("mode", list(ShellQuoting))
    def test_mode_is_implemented(self, dialect, mode):
        assert quoting_for(dialect).get(mode) is not None

    @pytest.mark.parametrize("dialect", KNOWN)
    @pytest.mark.parametrize("value", ["", "abc", "ABC123", "0"])
    def test_escape_is_identity_on_safe_input(self, dialect, value):
        assert quoting_for(dialect).escape(value) == value

    @pytest.mark.parametrize("dialect", KNOWN)
    @pytest.mark.parametrize("mode", [ShellQuoting.STRONG, ShellQuoting.WEAK])
    @pytest.mark.parametrize("value", ["", "abc", "ABC123", "0"])
    def test_quoting_only_adds_delimiters(self, dialect, mode, value):
        opening, closing = DELIMITERS[(dialect, mode)]
        assert quoting_for(dialect).get(mode)(value) == opening + value + closing

    @pytest.mark.parametrize("dialect", KNOWN)
    @pytest.mark.parametrize("mode", list(ShellQuoting))
    @pytest.mark.parametrize("value", ["\\", "`", "'", '"', "%", "\n", " ", "\\\\\"'`%$|&;"])
    def test_total_on_metacharacters(self, dialect, mode, value):
        assert isinstance(quoting_for(dialect).get(mode)(value), str)
