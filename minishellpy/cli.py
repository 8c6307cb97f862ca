"""The interactive prompt loop."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Sequence

from .env import Shell
from .executor import execute_commands
from .lexer import format_tokens, tokenize
from .models import ParseError, TokenizeError
from .parser import format_commands, parse_tokens
from .signals import setup_interactive_signals

try:
    import readline
except ImportError:  # pragma: no cover - platforms without readline
    readline = None  # type: ignore[assignment]

PROMPT = "minishell > "
_CLEAR_SCREEN = "\033[H\033[J"
_SIGQUIT = getattr(signal, "SIGQUIT", None)


def run_line(shell: Shell, line: str) -> bool:
    """Tokenize, parse and run one input line.

    Debugging output for tokens and commands is printed on the way.
    Returns True when the line asked the shell to exit.
    """
    try:
        tokens = tokenize(line, shell)
    except TokenizeError as exc:
        print(f"Error: {exc}")
        print("Tokenization failed")
        return False
    for text in format_tokens(tokens):
        print(text)

    try:
        commands = parse_tokens(tokens)
    except ParseError as exc:
        print(f"Error: {exc}")
        return False
    if not commands:
        return False

    for text in format_commands(commands):
        print(text)
    execute_commands(shell, commands)
    return shell.exit_status == -1


def _add_history(line: str) -> None:
    if line and readline is not None:
        readline.add_history(line)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the prompt loop until end of input or ``exit``."""
    previous_int = signal.getsignal(signal.SIGINT)
    previous_quit = signal.getsignal(_SIGQUIT) if _SIGQUIT is not None else None

    print(_CLEAR_SCREEN, end="")
    shell = Shell.from_envp(f"{key}={value}" for key, value in os.environ.items())
    setup_interactive_signals()
    try:
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                break
            except KeyboardInterrupt:
                continue
            _add_history(line)
            if run_line(shell, line):
                break
    finally:
        signal.signal(signal.SIGINT, previous_int)
        if _SIGQUIT is not None and previous_quit is not None:
            signal.signal(_SIGQUIT, previous_quit)
    return 0


if __name__ == "__main__":
    sys.exit(main())