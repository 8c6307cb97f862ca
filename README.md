# minishellpy

A small interactive shell for POSIX systems. It reads a line at a prompt,
splits it into tokens, builds a list of commands and runs them, either one
at a time or joined into a pipeline.

## Features

- Single quotes, double quotes and unquoted text written next to each other
  are joined into one word (`"a"'b'c` gives `abc`).
- Inside double quotes, a backslash escapes `"`, `\`, `$`, `` ` `` and a
  newline; before any other character it is kept. Outside quotes, `\'`
  gives a literal single quote.
- Variables are expanded in unquoted text and in double quotes, but not in
  single quotes: `$NAME`, `${NAME}` and `$?` (the exit status of the last
  command). A variable that is not set expands to nothing.
- Operators: `|` pipe, `<` input, `>` output, `>>` append and `<<`
  here-document delimiter. Only one `<` is allowed per command. A line that
  holds only redirections checks the files it names, creating or
  truncating output files.
- Pipelines with `|`. Builtins may take part in a pipeline; there they run
  apart from the shell, so a `cd` inside a pipeline does not change the
  shell's directory.
- Builtins: `cd`, `pwd`, `env` and `exit`. Other commands are looked up in
  the directories of `PATH`, or used as given when they start with `/` or
  `.`. An unknown command sets the exit status to 127.
- Ctrl-C at the prompt gives a fresh prompt. Ctrl-\ is ignored.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
minishellpy
```

and type commands at the `minishell > ` prompt:

```
minishell > echo "home is $HOME"
minishell > ls -l | grep py
minishell > ls > listing.txt
minishell > cd /tmp
minishell > pwd
minishell > exit
```

End of input (Ctrl-D) or `exit` leaves the shell. Lines typed at the prompt
go into the readline history where the `readline` module is available.

The shell prints the tokens and the parsed commands of every line before it
runs them, along with notes on what it is executing, so what the tokenizer
and the parser made of a line can be seen directly.

## Using it from Python

The pieces can also be used on their own:

```python
from minishellpy.env import Shell
from minishellpy.lexer import tokenize
from minishellpy.parser import parse_tokens
from minishellpy.cli import run_line

shell = Shell.from_envp(["HOME=/home/someone", "PATH=/usr/bin:/bin"])
tokens = tokenize('echo "$HOME" | wc -c', shell)
commands = parse_tokens(tokens)
for command in commands:
    print(command.argv())

run_line(shell, "pwd")
print(shell.exit_status)
```

- `minishellpy.lexer`: `tokenize`, `expand_variables` and `format_tokens`.
  `tokenize` raises `TokenizeError` on an unclosed quote.
- `minishellpy.parser`: `parse_tokens` and `format_commands`.
  `parse_tokens` raises `ParseError` on a line it cannot turn into
  commands, for example a pipe with nothing after it, an empty command, or
  a redirection without a file name.
- `minishellpy.models`: `Token`, `TokenType`, `Command`, `Redirect`,
  `RedirectType` and the two exceptions.
- `minishellpy.env`: `Environment` and `Shell`.
- `minishellpy.executor`: `execute_commands`, `execute_pipeline`,
  `execute_single_command` and `find_executable`.
- `minishellpy.builtins` and `minishellpy.redirections`: the builtins and
  the handling of redirection targets.
- `minishellpy.cli`: `run_line`, which returns True when the line asked
  the shell to exit, and `main`, the prompt loop.

## Behaviour worth knowing

- `Environment.get` matches by prefix, so `$PA` expands to the value of
  `PATH` when that is the first name starting with `PA`.
- A word that contains a `$` which starts no reference, such as `$1` or
  `a$-b`, expands to an empty string; a `$` at the very end of a word is
  kept.
- `cd` with no argument or with `~` uses the `HOME` of the process, not of
  the shell's environment. It updates `PWD` and `OLDPWD` only when those
  variables already exist.
- `exit` takes no status; after it, `Shell.exit_status` is -1.

## What it does not do

- Here-documents are recognised and parsed, but their bodies are never
  read: a command with `<<` gets no input from it.
- Redirections on external commands inside a pipeline are not applied.
- There are no `export`, `unset` or `echo` builtins; `echo` runs the
  program found in `PATH`, and the shell's environment can only be changed
  through `cd`.
- There is no `;`, `&&`, `||`, background `&`, subshell or wildcard
  expansion.

## Running the tests

```
pip install .[test]
pytest
```