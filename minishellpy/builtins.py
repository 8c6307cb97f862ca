"""The commands the shell runs itself: cd, pwd, env and exit."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from contextlib import redirect_stdout

from .env import Shell
from .models import Command
from .redirections import apply_redirections

_BUILTINS = frozenset({"cd", "env", "pwd", "exit"})


def _perror(prefix: str, exc: OSError) -> None:
    print(f"{prefix}: {exc.strerror}", file=sys.stderr)


def is_builtin(name: str | None) -> bool:
    """Return True if ``name`` is handled by the shell itself."""
    return name in _BUILTINS


def update_oldpwd(shell: Shell, path: str | None) -> int:
    """Set an existing OLDPWD to ``path``; 0 on success, 1 if it was not set."""
    if path is None:
        return 1
    return 0 if shell.env.update_existing("OLDPWD", path) is not None else 1


def builtin_cd(shell: Shell, args: Sequence[str] | None) -> int:
    """Change directory and refresh PWD and OLDPWD; returns the exit status.

    With no argument or ``~`` the process HOME is used; failing to enter
    HOME is reported but not treated as an error.
    """
    args = list(args or [])
    if len(args) > 1:
        print("cd: too many arguments", file=sys.stderr)
        return 1
    if not args or args[0] == "~":
        home = os.environ.get("HOME")
        if home is None:
            print("cd: HOME not set", file=sys.stderr)
            return 1
        try:
            os.chdir(home)
        except OSError as exc:
            _perror("cd", exc)
    else:
        try:
            os.chdir(args[0])
        except OSError as exc:
            _perror("cd", exc)
            return 1
    try:
        cwd = os.getcwd()
    except OSError as exc:
        _perror("getcwd", exc)
        return 1
    update_oldpwd(shell, shell.env.update_existing("PWD", cwd))
    return 0


def builtin_pwd(shell: Shell | None) -> int:
    """Print the current directory."""
    if shell is None:
        return 1
    try:
        cwd = os.getcwd()
    except OSError as exc:
        _perror("getcwd", exc)
        return 1
    print(cwd)
    return 0


def builtin_env(shell: Shell | None) -> int:
    """Print every environment variable; 1 when the environment is empty."""
    if shell is None or not len(shell.env):
        return 1
    for line in shell.env.format_lines():
        print(line)
    return 0


def _dispatch(command: Command, shell: Shell) -> int:
    name = command.command
    if name == "cd":
        return builtin_cd(shell, command.args)
    if name == "env":
        return builtin_env(shell)
    if name == "pwd":
        return builtin_pwd(shell)
    if name == "exit":
        shell.exit_status = -1
    return 0


def execute_builtin(command: Command, shell: Shell) -> int:
    """Run a builtin with its redirections applied; returns its exit status.

    ``exit`` marks the request by setting the shell's exit status to -1.
    A redirection that cannot be opened is reported and yields 1.
    """
    try:
        with apply_redirections(command) as (_, stdout):
            if stdout is None:
                return _dispatch(command, shell)
            sys.stdout.flush()
            with os.fdopen(stdout, "w", closefd=False) as target, redirect_stdout(target):
                return _dispatch(command, shell)
    except OSError as exc:
        if exc.filename is None:
            raise
        _perror(str(exc.filename), exc)
        return 1