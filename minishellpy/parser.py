"""Turning a token stream into a list of commands."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import Command, ParseError, Redirect, RedirectType, Token, TokenType

_REDIRECT_KINDS = {
    TokenType.REDIRECT_IN: RedirectType.INPUT,
    TokenType.REDIRECT_OUT: RedirectType.OUTPUT,
    TokenType.APPEND: RedirectType.APPEND,
    TokenType.HEREDOC: RedirectType.HEREDOC,
}


def _attach_redirect(current: Command, kind: RedirectType, target: Token) -> None:
    filename = target.value
    assert filename is not None
    if kind is RedirectType.INPUT:
        if current.input_file is not None:
            raise ParseError("Multiple input redirections not allowed")
        current.add_redirect(Redirect(filename, kind))
        current.input_file = filename
    elif kind is RedirectType.OUTPUT:
        current.add_redirect(Redirect(filename, kind))
        current.output_file = filename
        current.append = False
    elif kind is RedirectType.APPEND:
        current.add_redirect(Redirect(filename, kind))
        current.output_file = filename
        current.append = True
    else:
        quoted = target.type in (TokenType.SINGLE_QUOTE, TokenType.DOUBLE_QUOTE)
        current.add_redirect(Redirect(filename, kind, quoted_delimiter=quoted))
        current.heredoc = True
        current.heredoc_delimiter = filename


def _check_redirect_target(operator: Token, target: Token | None) -> None:
    if target is None or target.type is TokenType.EOF:
        raise ParseError("Missing filename after redirection operator")
    if not target.type.is_word_like:
        raise ParseError("Expected filename after redirection operator")
    if target.value is None:
        raise ParseError("Null filename after redirection operator")
    if target.value == "":
        raise ParseError("Empty filename after redirection operator")
    if operator.type in (TokenType.REDIRECT_OUT, TokenType.APPEND) and target.value in (
        ".",
        "..",
    ):
        raise ParseError(f"{target.value}: Is a directory")


def parse_tokens(tokens: Sequence[Token]) -> list[Command]:
    """Group tokens into commands separated by pipes.

    Parsing stops at the first EOF token. Raises ParseError on a pipe
    without a command, an empty command, or a malformed redirection.
    """
    commands: list[Command] = []
    current: Command | None = None
    index = 0

    def lookahead() -> Token | None:
        return tokens[index + 1] if index + 1 < len(tokens) else None

    while index < len(tokens) and tokens[index].type is not TokenType.EOF:
        token = tokens[index]
        if token.type is TokenType.WORD:
            if token.value is None:
                raise ParseError("Token without value")
            if current is None:
                if token.value == "":
                    raise ParseError("Empty command")
                current = Command(command=token.value)
                commands.append(current)
            else:
                current.args.append(token.value)
        elif token.type is TokenType.PIPE:
            following = lookahead()
            if current is None or following is None or not following.type.is_word_like:
                raise ParseError("Pipe without command")
            if not following.value:
                raise ParseError("Empty command after pipe")
            current = Command(command=following.value)
            commands.append(current)
            index += 1
        elif token.type.is_redirection:
            target = lookahead()
            _check_redirect_target(token, target)
            assert target is not None
            if current is None:
                current = Command()
                commands.append(current)
            _attach_redirect(current, _REDIRECT_KINDS[token.type], target)
            index += 1
        elif token.type in (TokenType.SINGLE_QUOTE, TokenType.DOUBLE_QUOTE):
            value = token.value or ""
            if current is not None:
                current.args.append(value)
            else:
                if value == "":
                    raise ParseError("Empty quoted string cannot be used as command")
                current = Command(command=value)
                commands.append(current)
        index += 1
    return commands


def format_commands(commands: Iterable[Command]) -> list[str]:
    """Return the debugging lines describing each command."""
    lines: list[str] = []
    for command in commands:
        name = "(null)" if command.command is None else command.command
        lines.append(f"Command: {name}")
        if command.args:
            arg_lines = [f"{i} {arg}|" for i, arg in enumerate(command.args)]
            lines.append("  Args: " + arg_lines[0])
            lines.extend(arg_lines[1:])
            lines.append("")
        if command.redirects:
            lines.append("  Redirections:")
            lines.extend(
                f"    {redirect.type.label} -> {redirect.filename}"
                for redirect in command.redirects
            )
        if command.input_file is not None:
            lines.append(f"  Input file: {command.input_file}")
        if command.output_file is not None:
            lines.append(f"  Output file: {command.output_file}")
        if command.append:
            lines.append("  Append mode: true")
        if command.heredoc:
            lines.append("  Heredoc: true")
    return lines