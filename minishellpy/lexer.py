"""Splitting an input line into tokens, with quoting and variable expansion."""

from __future__ import annotations

import string
from collections.abc import Iterable

from .env import Shell
from .models import Token, TokenizeError, TokenType

_WHITESPACE = frozenset(" \t\n\v\f\r")
_OPERATORS = frozenset("|<>")
_NAME_START = frozenset(string.ascii_letters + "_")
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_DOUBLE_QUOTE_ESCAPES = frozenset('"\\$`\n')


def expand_variables(text: str, shell: Shell) -> str:
    """Expand ``$?``, ``${NAME}`` and ``$NAME`` references in ``text``.

    Undefined variables expand to nothing, and inserted values are never
    expanded again. A string in which no expansion took place (no
    reference and no trailing ``$``) yields an empty string.
    """
    out = text
    i = 0
    changed = False
    while i < len(out):
        if out[i] != "$":
            i += 1
            continue
        nxt = out[i + 1] if i + 1 < len(out) else ""
        if nxt == "?":
            value = str(shell.exit_status)
            out = out[:i] + value + out[i + 2:]
            i += len(value)
            changed = True
        elif nxt == "{":
            close = out.find("}", i + 2)
            if close == -1:
                i += 1
                continue
            value = shell.env.get(out[i + 2:close]) or ""
            out = out[:i] + value + out[close + 1:]
            i += len(value)
            changed = True
        elif nxt and nxt in _NAME_START:
            end = i + 1
            while end < len(out) and out[end] in _NAME_CHARS:
                end += 1
            value = shell.env.get(out[i + 1:end]) or ""
            out = out[:i] + value + out[end:]
            i += len(value)
            changed = True
        elif not nxt:
            # A lone dollar at the end stays literal.
            changed = True
            i += 1
        else:
            i += 1
    return out if changed else ""


class _Lexer:
    def __init__(self, text: str, shell: Shell) -> None:
        self.text = text
        self.shell = shell
        self.pos = 0
        self.tokens: list[Token] = []

    def _peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def _at_escaped_single_quote(self) -> bool:
        return self._peek() == "\\" and self._peek(1) == "'"

    def _extract_quoted(self, quote: str) -> str:
        self.pos += 1
        parts: list[str] = []
        while self._peek() and self._peek() != quote:
            char = self._peek()
            nxt = self._peek(1)
            if char == "\\" and nxt:
                if quote == '"':
                    if nxt in _DOUBLE_QUOTE_ESCAPES:
                        parts.append(nxt)
                        self.pos += 2
                    else:
                        parts.append("\\")
                        self.pos += 1
                    continue
                if nxt == "'":
                    break
            parts.append(char)
            self.pos += 1
        if self._peek() != quote:
            raise TokenizeError("Unclosed quote")
        self.pos += 1
        return "".join(parts)

    def _expand_if_needed(self, part: str) -> str:
        return expand_variables(part, self.shell) if "$" in part else part

    def _unquoted_run(self) -> str:
        start = self.pos
        while True:
            char = self._peek()
            if (
                not char
                or char in _WHITESPACE
                or char in _OPERATORS
                or char in "'\""
                or self._at_escaped_single_quote()
            ):
                break
            self.pos += 1
        return self.text[start:self.pos]

    def _word(self) -> Token:
        parts: list[str] = []
        while True:
            char = self._peek()
            if not char or char in _WHITESPACE or char in _OPERATORS:
                break
            if char == "'":
                parts.append(self._extract_quoted(char))
            elif char == '"':
                parts.append(self._expand_if_needed(self._extract_quoted(char)))
            elif self._at_escaped_single_quote():
                parts.append("'")
                self.pos += 2
            else:
                parts.append(self._expand_if_needed(self._unquoted_run()))
        return Token(TokenType.WORD, "".join(parts))

    def _operator(self, char: str) -> Token:
        doubled = self._peek(1) == char
        if char == "|":
            self.pos += 1
            return Token(TokenType.PIPE, "|")
        if char == "<":
            if doubled:
                self.pos += 2
                return Token(TokenType.HEREDOC, "<<")
            self.pos += 1
            return Token(TokenType.REDIRECT_IN, "<")
        if doubled:
            self.pos += 2
            return Token(TokenType.APPEND, ">>")
        self.pos += 1
        return Token(TokenType.REDIRECT_OUT, ">")

    def run(self) -> list[Token]:
        while self._peek():
            while self._peek() and self._peek() in _WHITESPACE:
                self.pos += 1
            char = self._peek()
            if not char:
                break
            if char in _OPERATORS:
                token = self._operator(char)
            elif (
                char in "'\""
                and self.tokens
                and self.tokens[-1].type is TokenType.HEREDOC
            ):
                # A quoted heredoc delimiter stays a separate quoted token.
                kind = TokenType.SINGLE_QUOTE if char == "'" else TokenType.DOUBLE_QUOTE
                token = Token(kind, self._extract_quoted(char))
            else:
                token = self._word()
            self.tokens.append(token)
        self.tokens.append(Token(TokenType.EOF, None))
        return self.tokens


def tokenize(text: str, shell: Shell) -> list[Token]:
    """Split ``text`` into tokens ending with an EOF token.

    Raises TokenizeError on an unclosed quote.
    """
    return _Lexer(text, shell).run()


def format_tokens(tokens: Iterable[Token]) -> list[str]:
    """Return one debugging line per token."""
    return [
        f"Type: {int(token.type)}, Value: {'NULL' if token.value is None else token.value}|"
        for token in tokens
    ]