"""Opening the files named by a command's redirections."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from .env import Shell
from .models import Command, RedirectType

_OUTPUT_FLAGS = {
    RedirectType.OUTPUT: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    RedirectType.APPEND: os.O_WRONLY | os.O_CREAT | os.O_APPEND,
}
_FILE_MODE = 0o644


def _perror(name: str, exc: OSError) -> None:
    print(f"{name}: {exc.strerror}", file=sys.stderr)


def _close(fd: int | None) -> None:
    if fd is not None:
        os.close(fd)


@contextmanager
def apply_redirections(command: Command) -> Iterator[tuple[int | None, int | None]]:
    """Open the command's redirection targets in order.

    Yields ``(stdin_fd, stdout_fd)``; either is None when the command does
    not redirect that stream. Every output target is created or truncated
    even when a later one replaces it. Heredocs are left alone. An OSError
    from opening a file propagates after any opened descriptor is closed;
    all descriptors are closed when the block ends.
    """
    stdin: int | None = None
    stdout: int | None = None
    try:
        for redirect in command.redirects:
            if redirect.type is RedirectType.INPUT:
                fd = os.open(redirect.filename, os.O_RDONLY)
                _close(stdin)
                stdin = fd
            elif redirect.type in _OUTPUT_FLAGS:
                fd = os.open(redirect.filename, _OUTPUT_FLAGS[redirect.type], _FILE_MODE)
                _close(stdout)
                stdout = fd
        yield stdin, stdout
    finally:
        _close(stdin)
        _close(stdout)


def check_output_redirection(
    filename: str | None, append: bool = False, out: TextIO | None = None
) -> bool:
    """Create or truncate (or, with ``append``, create) ``filename``.

    Reports progress and errors on ``out``; returns True on success.
    """
    out = sys.stdout if out is None else out
    if not filename:
        print("Error: Empty filename for output redirection", file=out)
        return False
    if filename in (".", "..") or os.path.isdir(filename):
        print(f"Error: {filename}: Is a directory", file=out)
        return False
    flags = _OUTPUT_FLAGS[RedirectType.APPEND if append else RedirectType.OUTPUT]
    try:
        fd = os.open(filename, flags, _FILE_MODE)
    except OSError as exc:
        _perror(filename, exc)
        return False
    os.close(fd)
    if append:
        print(
            f"File '{filename}' opened for appending (or created if it didn't exist)",
            file=out,
        )
    else:
        print(f"File '{filename}' created/truncated successfully", file=out)
    return True


def check_input_redirection(filename: str | None, out: TextIO | None = None) -> bool:
    """Check that ``filename`` can be opened for reading; True on success."""
    out = sys.stdout if out is None else out
    if not filename:
        print("Error: Empty filename for input redirection", file=out)
        return False
    if os.path.isdir(filename):
        print(f"Error: {filename}: Is a directory", file=out)
        return False
    try:
        fd = os.open(filename, os.O_RDONLY)
    except OSError as exc:
        _perror(filename, exc)
        return False
    os.close(fd)
    print(f"File '{filename}' opened for reading successfully", file=out)
    return True


def handle_heredoc(
    delimiter: str, expand_vars: bool, shell: Shell, out: TextIO | None = None
) -> bool:
    """Acknowledge a heredoc; its body is not read here."""
    out = sys.stdout if out is None else out
    print(f"Heredoc parsing completed with delimiter '{delimiter}'", file=out)
    print("Note: Heredoc execution is handled by execution module", file=out)
    return True


def handle_standalone_redirections(
    command: Command, shell: Shell, out: TextIO | None = None
) -> int:
    """Process the redirections of a command that has no name.

    Every redirection is attempted; returns 1 if any failed, else 0.
    """
    out = sys.stdout if out is None else out
    status = 0
    for redirect in command.redirects:
        name = redirect.filename
        if redirect.type is RedirectType.INPUT:
            print(f"Input redirection: < {name}", file=out)
            ok = check_input_redirection(name, out)
        elif redirect.type is RedirectType.OUTPUT:
            print(f"Output redirection: > {name}", file=out)
            ok = check_output_redirection(name, False, out)
        elif redirect.type is RedirectType.APPEND:
            print(f"Append redirection: >> {name}", file=out)
            ok = check_output_redirection(name, True, out)
        else:
            print(f"Heredoc redirection: << {name}", file=out)
            ok = handle_heredoc(name, not redirect.quoted_delimiter, shell, out)
        if not ok:
            status = 1
    return status