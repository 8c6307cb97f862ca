import os
import sys

import pytest

from minishellpy.cli import main, run_line
from minishellpy.env import Shell


def _feeder(lines, consumed):
    items = iter(lines)

    def fake_input(prompt=""):
        try:
            item = next(items)
        except StopIteration:
            raise EOFError
        consumed.append(item)
        if isinstance(item, BaseException):
            raise item
        return item

    return fake_input


def test_exit_requests_stop():
    shell = Shell.from_envp([])
    assert run_line(shell, "exit") is True
    assert shell.exit_status == -1


def test_unclosed_quote_reports_failure(capsys):
    shell = Shell.from_envp([])
    assert run_line(shell, "echo 'abc") is False
    out = capsys.readouterr().out
    assert "Error: Unclosed quote" in out
    assert "Tokenization failed" in out


def test_parse_error_is_reported(capsys):
    shell = Shell.from_envp([])
    assert run_line(shell, "| ls") is False
    assert "Error: Pipe without command" in capsys.readouterr().out


def test_empty_line_prints_eof_token_only(capsys):
    shell = Shell.from_envp([])
    shell.exit_status = 4
    assert run_line(shell, "   ") is False
    out = capsys.readouterr().out
    assert out.splitlines() == ["Type: 8, Value: NULL|"]
    assert shell.exit_status == 4


def test_exit_status_expansion_in_tokens(capsys):
    shell = Shell.from_envp([])
    shell.exit_status = 5
    assert run_line(shell, "exit $?") is True
    assert "Type: 0, Value: 5|" in capsys.readouterr().out


def test_standalone_redirection_creates_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    shell = Shell.from_envp([])
    assert run_line(shell, "> created.txt") is False
    assert (tmp_path / "created.txt").exists()
    assert "Executing standalone redirections..." in capsys.readouterr().out
    assert shell.exit_status == 0


def test_pwd_prints_cwd(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    shell = Shell.from_envp([])
    run_line(shell, "pwd")
    assert os.getcwd() in capsys.readouterr().out.splitlines()
    assert shell.exit_status == 0


def test_env_prints_variables(capsys):
    shell = Shell.from_envp(["FOO=bar"])
    run_line(shell, "env")
    assert "FOO=bar" in capsys.readouterr().out.splitlines()


def test_external_command_exit_status():
    shell = Shell.from_envp(["PATH=/bin:/usr/bin"])
    run_line(shell, f"{sys.executable} -c 'import sys; sys.exit(3)'")
    assert shell.exit_status == 3


def test_unknown_command_sets_127(tmp_path, capsys):
    shell = Shell.from_envp([f"PATH={tmp_path}"])
    assert run_line(shell, "no_such_cmd_xyz") is False
    assert shell.exit_status == 127
    assert "Command not found: no_such_cmd_xyz" in capsys.readouterr().out


def test_main_stops_at_exit(monkeypatch, capsys):
    consumed = []
    monkeypatch.setattr("builtins.input", _feeder(["exit", "pwd"], consumed))
    assert main([]) == 0
    assert consumed == ["exit"]
    assert capsys.readouterr().out.startswith("\033[H\033[J")


def test_main_returns_on_end_of_input(monkeypatch):
    consumed = []
    monkeypatch.setattr("builtins.input", _feeder([], consumed))
    assert main([]) == 0
    assert consumed == []


def test_main_continues_after_interrupt(monkeypatch):
    consumed = []
    interrupt = KeyboardInterrupt()
    monkeypatch.setattr("builtins.input", _feeder([interrupt, "exit"], consumed))
    assert main([]) == 0
    assert consumed == [interrupt, "exit"]


@pytest.mark.parametrize("line", ["", "   "])
def test_main_ignores_blank_lines(monkeypatch, line):
    consumed = []
    monkeypatch.setattr("builtins.input", _feeder([line, "exit"], consumed))
    assert main([]) == 0
    assert consumed == [line, "exit"]