"""Parse, evaluate and write small Lisp-like text editing scripts."""

__version__ = "0.1.0"