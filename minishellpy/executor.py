"""Running parsed commands: builtins, external programs and pipelines."""

from __future__ import annotations

import copy
import os
import subprocess
import sys
import tempfile
from collections.abc import Sequence
from contextlib import redirect_stdout
from typing import IO, Any

from .builtins import execute_builtin, is_builtin
from .env import Shell
from .models import Command
from .redirections import apply_redirections, handle_standalone_redirections


def _report(prefix: str, exc: OSError) -> None:
    print(f"{prefix}: {exc.strerror}", file=sys.stderr)


def _is_executable(path: str) -> bool:
    return os.access(path, os.F_OK | os.X_OK)


def _display(name: str | None) -> str:
    return "(null)" if name is None else name


def _child_env(shell: Shell) -> dict[str, str]:
    env: dict[str, str] = {}
    for key, value in shell.env:
        env.setdefault(key, value)
    return env


def find_executable(command: Command, shell: Shell) -> str | None:
    """Return the path that would run ``command``, or None if none is found.

    Names starting with ``/`` or ``.`` are used as given; other names are
    looked up in the directories of the shell's PATH. Without a PATH
    variable nothing is found at all.
    """
    path_env = shell.env.get("PATH")
    if path_env is None:
        print("Error: PATH environment variable not set", file=sys.stderr)
        return None
    name = command.command or ""
    if name.startswith(("/", ".")):
        return name if _is_executable(name) else None
    for directory in filter(None, path_env.split(":")):
        candidate = f"{directory}/{name}"
        if _is_executable(candidate):
            return candidate
    return None


def execute_single_command(command: Command, shell: Shell) -> None:
    """Run one command and store its exit status on the shell.

    Builtins run in the shell itself; ``exit`` leaves the status at -1 so
    the caller can stop. An unknown command sets status 127.
    """
    if is_builtin(command.command):
        result = execute_builtin(command, shell)
        if not (command.command == "exit" and shell.exit_status == -1):
            shell.exit_status = result
        return

    if not command.command:
        print(f"Command not found: {command.command or ''}")
        shell.exit_status = 0
        return

    command.path = find_executable(command, shell)
    if command.path is None:
        print(f"Command not found: {command.command}")
        shell.exit_status = 127
        return

    sys.stdout.flush()
    try:
        with apply_redirections(command) as (stdin, stdout):
            try:
                completed = subprocess.run(
                    command.argv(),
                    executable=command.path,
                    env=_child_env(shell),
                    stdin=stdin,
                    stdout=stdout,
                    check=False,
                )
            except OSError as exc:
                _report("execve", exc)
                shell.exit_status = 1
                return
    except OSError as exc:
        _report(str(exc.filename), exc)
        shell.exit_status = 1
        return
    if completed.returncode >= 0:
        shell.exit_status = completed.returncode


def _release(stream: Any) -> None:
    if hasattr(stream, "close"):
        stream.close()


def _builtin_stage(
    command: Command, shell: Shell, last: bool
) -> tuple[int, IO[str] | None]:
    # A builtin inside a pipeline must not change the shell's own state.
    cwd = os.getcwd()
    isolated = copy.deepcopy(shell)
    try:
        if last:
            return execute_builtin(command, isolated) & 0xFF, None
        buffer = tempfile.TemporaryFile(mode="w+")
        with redirect_stdout(buffer):
            status = execute_builtin(command, isolated) & 0xFF
        buffer.flush()
        buffer.seek(0)
        return status, buffer
    finally:
        os.chdir(cwd)


def _external_stage(
    command: Command, shell: Shell, stdin: Any, last: bool
) -> tuple[int | subprocess.Popen, Any]:
    path = find_executable(command, shell) if command.command else None
    if path is None:
        print(f"Command not found: {_display(command.command)}", file=sys.stderr)
        return 1, subprocess.DEVNULL
    command.path = path
    try:
        proc = subprocess.Popen(
            command.argv(),
            executable=path,
            env=_child_env(shell),
            stdin=stdin,
            stdout=None if last else subprocess.PIPE,
        )
    except OSError as exc:
        _report("execve", exc)
        return 1, subprocess.DEVNULL
    return proc, proc.stdout


def execute_pipeline(commands: Sequence[Command], shell: Shell) -> None:
    """Run commands connected by pipes; the last one's status is kept.

    Builtins run isolated, as if in a child process. Redirections of
    external commands inside a pipeline are not applied.
    """
    stages = list(commands)
    if not stages:
        return
    sys.stdout.flush()
    pending: list[int | subprocess.Popen] = []
    upstream: Any = None
    for position, command in enumerate(stages):
        last = position == len(stages) - 1
        try:
            if is_builtin(command.command):
                outcome, downstream = _builtin_stage(command, shell, last)
            else:
                outcome, downstream = _external_stage(command, shell, upstream, last)
        finally:
            _release(upstream)
        pending.append(outcome)
        upstream = downstream
    _release(upstream)

    statuses = [item if isinstance(item, int) else item.wait() for item in pending]
    if statuses[-1] >= 0:
        shell.exit_status = statuses[-1]


def execute_external_command(commands: Sequence[Command], shell: Shell) -> None:
    """Run a pipeline when there are several commands, else a single one."""
    commands = list(commands)
    if len(commands) > 1:
        print("Executing pipeline of commands...")
        execute_pipeline(commands, shell)
    elif commands:
        execute_single_command(commands[0], shell)


def execute_commands(shell: Shell, commands: Sequence[Command]) -> None:
    """Run a parsed command list, updating the shell's exit status."""
    commands = list(commands)
    index = 0
    while index < len(commands):
        command = commands[index]
        if index + 1 < len(commands):
            print(f"Executing pipeline starting with: {_display(command.command)}")
            execute_external_command(commands[index:], shell)
            index += 1
            while index < len(commands) and commands[index].command is not None:
                index += 1
            continue
        if command.command is None:
            print("Executing standalone redirections...")
            failed = handle_standalone_redirections(command, shell) != 0
            shell.exit_status = 1 if failed else 0
        elif command.command == "":
            print("Error: Cannot execute empty command")
            shell.exit_status = 1
        else:
            print(f"Executing external command: {command.command}")
            execute_external_command([command], shell)
        index += 1