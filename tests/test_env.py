from minishellpy.env import Environment, Shell


def test_from_envp_splits_on_first_equals():
    env = Environment.from_envp(["A=b=c"])
    assert list(env) == [("A", "b=c")]


def test_from_envp_skips_entries_without_equals():
    env = Environment.from_envp(["NOEQUALS", "X=1"])
    assert list(env) == [("X", "1")]
    assert len(env) == 1


def test_from_envp_none_is_empty():
    env = Environment.from_envp(None)
    assert len(env) == 0
    assert env.to_envp() == []


def test_empty_value_kept():
    env = Environment.from_envp(["EMPTY="])
    assert env.get("EMPTY") == ""


def test_to_envp_round_trip():
    envp = ["PATH=/bin:/usr/bin", "HOME=/home/u", "PATH=/dup"]
    assert Environment.from_envp(envp).to_envp() == envp


def test_format_lines_matches_envp():
    envp = ["A=1", "B="]
    assert Environment.from_envp(envp).format_lines() == envp


def test_get_exact():
    env = Environment.from_envp(["HOME=/home/u", "PATH=/bin"])
    assert env.get("PATH") == "/bin"


def test_get_missing_is_none():
    assert Environment.from_envp(["HOME=/h"]).get("PATH") is None


def test_get_is_prefix_match():
    env = Environment.from_envp(["PATHEXT=x", "PATH=/bin"])
    assert env.get("PATH") == "x"
    assert env.get("PA") == "x"


def test_get_longer_key_does_not_match():
    assert Environment.from_envp(["PA=1"]).get("PATH") is None


def test_update_existing_returns_previous():
    env = Environment.from_envp(["PWD=/old", "OLDPWD=/older"])
    assert env.update_existing("PWD", "/new") == "/old"
    assert env.get("PWD") == "/new"
    assert env.get("OLDPWD") == "/older"


def test_update_existing_missing_adds_nothing():
    env = Environment.from_envp(["HOME=/h"])
    assert env.update_existing("PWD", "/x") is None
    assert env.to_envp() == ["HOME=/h"]


def test_update_existing_requires_exact_name():
    env = Environment.from_envp(["PWDX=/a"])
    assert env.update_existing("PWD", "/b") is None
    assert env.get("PWDX") == "/a"


def test_shell_from_envp():
    shell = Shell.from_envp(["USER=u"])
    assert shell.exit_status == 0
    assert shell.env.get("USER") == "u"


def test_default_shell_is_empty():
    shell = Shell()
    assert len(shell.env) == 0
    assert shell.exit_status == 0