import os
from pathlib import Path

import pytest

from minishellpy.builtins import (
    builtin_cd,
    builtin_env,
    builtin_pwd,
    execute_builtin,
    is_builtin,
    update_oldpwd,
)
from minishellpy.env import Shell
from minishellpy.models import Command, Redirect, RedirectType


@pytest.mark.parametrize(
    "name, expected",
    [("cd", True), ("env", True), ("pwd", True), ("exit", True), ("ls", False), (None, False)],
)
def test_is_builtin(name, expected):
    assert is_builtin(name) is expected


def _shell_at(path):
    return Shell.from_envp([f"PWD={path}", "OLDPWD=/", "HOME=/unused"])


def test_cd_changes_directory_and_updates_env(tmp_path, monkeypatch):
    start = tmp_path / "start"
    dest = tmp_path / "dest"
    start.mkdir()
    dest.mkdir()
    monkeypatch.chdir(start)
    shell = _shell_at(os.getcwd())
    before = os.getcwd()
    assert builtin_cd(shell, [str(dest)]) == 0
    assert Path(os.getcwd()) == dest.resolve()
    assert shell.env.get("PWD") == os.getcwd()
    assert shell.env.get("OLDPWD") == before


def test_cd_too_many_arguments(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert builtin_cd(_shell_at(tmp_path), ["a", "b"]) == 1
    assert "cd: too many arguments" in capsys.readouterr().err
    assert Path(os.getcwd()) == tmp_path.resolve()


def test_cd_missing_directory(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    shell = _shell_at("/somewhere")
    assert builtin_cd(shell, [str(tmp_path / "missing")]) == 1
    assert capsys.readouterr().err.startswith("cd: ")
    assert shell.env.get("PWD") == "/somewhere"


@pytest.mark.parametrize("args", [[], None, ["~"]])
def test_cd_goes_home(tmp_path, monkeypatch, args):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(home))
    assert builtin_cd(_shell_at(tmp_path), args) == 0
    assert Path(os.getcwd()) == home.resolve()


def test_cd_home_not_set(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("HOME", raising=False)
    assert builtin_cd(_shell_at(tmp_path), []) == 1
    assert "cd: HOME not set" in capsys.readouterr().err


def test_cd_bad_home_is_not_fatal(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "missing"))
    assert builtin_cd(_shell_at(tmp_path), []) == 0
    assert Path(os.getcwd()) == tmp_path.resolve()
    assert capsys.readouterr().err.startswith("cd: ")


def test_update_oldpwd():
    shell = Shell.from_envp(["OLDPWD=/a"])
    assert update_oldpwd(shell, "/b") == 0
    assert shell.env.get("OLDPWD") == "/b"
    missing = Shell.from_envp(["PATH=/bin"])
    assert update_oldpwd(missing, "/b") == 1
    assert missing.env.get("OLDPWD") is None
    assert update_oldpwd(shell, None) == 1


def test_pwd_prints_cwd(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert builtin_pwd(Shell()) == 0
    assert capsys.readouterr().out == os.getcwd() + "\n"


def test_env_prints_variables(capsys):
    shell = Shell.from_envp(["A=1", "B=two", "C="])
    assert builtin_env(shell) == 0
    assert capsys.readouterr().out == "A=1\nB=two\nC=\n"


def test_env_empty_fails(capsys):
    assert builtin_env(Shell()) == 1
    assert capsys.readouterr().out == ""


def test_execute_builtin_redirects_output(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "out.txt"
    cmd = Command(command="pwd", redirects=[Redirect(str(target), RedirectType.OUTPUT)])
    assert execute_builtin(cmd, Shell()) == 0
    assert target.read_text() == os.getcwd() + "\n"
    assert capsys.readouterr().out == ""


def test_execute_builtin_exit_marks_shell():
    shell = Shell()
    assert execute_builtin(Command(command="exit"), shell) == 0
    assert shell.exit_status == -1


def test_execute_builtin_missing_input(tmp_path, capsys):
    missing = tmp_path / "missing"
    shell = Shell.from_envp(["A=1"])
    cmd = Command(command="env", redirects=[Redirect(str(missing), RedirectType.INPUT)])
    assert execute_builtin(cmd, shell) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert str(missing) in captured.err


def test_execute_builtin_without_redirects(capsys):
    shell = Shell.from_envp(["X=y"])
    assert execute_builtin(Command(command="env"), shell) == 0
    assert capsys.readouterr().out == "X=y\n"