"""A small interactive shell: a tokenizer, a parser, builtins, redirections and pipelines."""

__version__ = "0.1.0"