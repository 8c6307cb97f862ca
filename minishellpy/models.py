"""Data types shared by the lexer, parser and executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class TokenizeError(ValueError):
    """Raised when an input line cannot be split into tokens."""


class ParseError(ValueError):
    """Raised when a token stream does not form valid commands."""


class TokenType(IntEnum):
    """Kinds of token produced by the lexer."""

    WORD = 0
    PIPE = 1
    REDIRECT_IN = 2
    REDIRECT_OUT = 3
    APPEND = 4
    HEREDOC = 5
    SINGLE_QUOTE = 6
    DOUBLE_QUOTE = 7
    EOF = 8

    @property
    def is_redirection(self) -> bool:
        return self in (
            TokenType.REDIRECT_IN,
            TokenType.REDIRECT_OUT,
            TokenType.APPEND,
            TokenType.HEREDOC,
        )

    @property
    def is_word_like(self) -> bool:
        return self in (TokenType.WORD, TokenType.SINGLE_QUOTE, TokenType.DOUBLE_QUOTE)


@dataclass
class Token:
    """A single lexical token; ``value`` is None only for EOF."""

    type: TokenType
    value: str | None = None


class RedirectType(IntEnum):
    """Kinds of redirection attached to a command."""

    INPUT = 0
    OUTPUT = 1
    APPEND = 2
    HEREDOC = 3

    @property
    def label(self) -> str:
        return _REDIRECT_LABELS[self]


_REDIRECT_LABELS = {
    RedirectType.INPUT: "Input",
    RedirectType.OUTPUT: "Output",
    RedirectType.APPEND: "Append",
    RedirectType.HEREDOC: "Heredoc",
}


@dataclass
class Redirect:
    """A redirection target; ``quoted_delimiter`` matters only for heredocs."""

    filename: str
    type: RedirectType
    quoted_delimiter: bool = False


@dataclass
class Command:
    """One command of a pipeline with its arguments and redirections."""

    command: str | None = None
    args: list[str] = field(default_factory=list)
    redirects: list[Redirect] = field(default_factory=list)
    input_file: str | None = None
    output_file: str | None = None
    append: bool = False
    heredoc: bool = False
    heredoc_delimiter: str | None = None
    heredoc_expand: bool = False
    path: str | None = None

    def add_redirect(self, redirect: Redirect) -> None:
        """Append a redirection, keeping the order they were written in."""
        self.redirects.append(redirect)

    def argv(self) -> list[str]:
        """Return the argument vector: the command name followed by its args."""
        if self.command is None:
            raise ValueError("command has no name")
        return [self.command, *self.args]