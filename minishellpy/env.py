"""Environment variables and shell state."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass
class _Variable:
    key: str
    value: str


class Environment:
    """An ordered list of environment variables, duplicates kept as given."""

    def __init__(self) -> None:
        self._vars: list[_Variable] = []

    @classmethod
    def from_envp(cls, envp: Iterable[str] | None) -> Environment:
        """Build from ``KEY=VALUE`` strings; entries without ``=`` are skipped."""
        env = cls()
        if envp is None:
            return env
        for entry in envp:
            key, sep, value = entry.partition("=")
            if sep:
                env._vars.append(_Variable(key, value))
        return env

    def get(self, key: str) -> str | None:
        """Return the first variable whose name starts with ``key``, or None.

        The match is a prefix match on the stored name, so ``get("PA")``
        finds ``PATH``.
        """
        for var in self._vars:
            if var.key.startswith(key):
                return var.value
        return None

    def update_existing(self, key: str, value: str) -> str | None:
        """Replace the value of the variable named exactly ``key``.

        Returns the previous value, or None when no such variable exists;
        nothing is added in that case.
        """
        for var in self._vars:
            if var.key == key:
                previous, var.value = var.value, value
                return previous
        return None

    def to_envp(self) -> list[str]:
        """Return the variables as ``KEY=VALUE`` strings for a child process."""
        return [f"{var.key}={var.value}" for var in self._vars]

    def format_lines(self) -> list[str]:
        """Return the lines the ``env`` builtin prints."""
        return [f"{var.key}={var.value or ''}" for var in self._vars]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return ((var.key, var.value) for var in self._vars)

    def __len__(self) -> int:
        return len(self._vars)


@dataclass
class Shell:
    """The running shell: its environment and the last exit status."""

    env: Environment = field(default_factory=Environment)
    exit_status: int = 0

    @classmethod
    def from_envp(cls, envp: Iterable[str] | None) -> Shell:
        return cls(env=Environment.from_envp(envp), exit_status=0)