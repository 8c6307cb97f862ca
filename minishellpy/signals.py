"""Signal handling for the prompt, running commands and heredocs."""

from __future__ import annotations

import os
import signal
from types import FrameType

_SIGQUIT = getattr(signal, "SIGQUIT", None)


def _sigint_prompt(signum: int, frame: FrameType | None) -> None:
    """Print a newline and abandon the line being typed."""
    os.write(1, b"\n")
    raise KeyboardInterrupt


def _sigint_running(signum: int, frame: FrameType | None) -> None:
    """Print a newline and let the running command deal with the signal."""
    os.write(1, b"\n")


def _install(sigint_handler, sigquit_action) -> None:
    signal.signal(signal.SIGINT, sigint_handler)
    if _SIGQUIT is not None:
        signal.signal(_SIGQUIT, sigquit_action)


def setup_interactive_signals() -> None:
    """At the prompt: Ctrl-C starts a fresh line, Ctrl-\\ is ignored."""
    _install(_sigint_prompt, signal.SIG_IGN)


def setup_execution_signals() -> None:
    """While a command runs: Ctrl-C prints a newline, Ctrl-\\ has its default."""
    _install(_sigint_running, signal.SIG_DFL)


def setup_heredoc_signals() -> None:
    """While reading a heredoc: Ctrl-C abandons input, Ctrl-\\ is ignored."""
    _install(_sigint_prompt, signal.SIG_IGN)