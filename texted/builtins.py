"""Builtin functions for strings and the mark."""

from __future__ import annotations

import re
from typing import Sequence

from .buffer import Buffer
from .documentation import ExampleDoc, FunctionDoc, ParameterDoc, register_documentation
from .values import Number, ScriptError, String, Symbol, Value


def set_mark_command(args: Sequence[Value], buffer: Buffer) -> Value:
    """Set the mark at the given position, or at point when no position is given."""
    if len(args) > 1:
        raise ScriptError(f"set-mark-command expects at most 1 argument, got {len(args)}")
    if args:
        position = args[0]
        if not isinstance(position, Number):
            raise ScriptError("set-mark-command expects a number argument")
        buffer.mark = int(position)
    else:
        buffer.mark = buffer.point
    return String("")


def string_match(args: Sequence[Value], buffer: Buffer) -> Value:
    """Return the 0-based index of the first match of a pattern in a string, or nil."""
    if len(args) != 2:
        raise ScriptError(f"string-match expects 2 arguments, got {len(args)}")
    pattern, target = args
    if not isinstance(pattern, String) or not isinstance(target, String):
        raise ScriptError("string-match expects string arguments")

    try:
        regex = re.compile(pattern.value)
    except re.error:
        index = target.value.find(pattern.value)
        return Symbol("nil") if index == -1 else Number(index)

    match = regex.search(target.value)
    if match is None:
        return Symbol("nil")
    return Number(match.start())


def substring(args: Sequence[Value], buffer: Buffer) -> Value:
    """Extract part of a string using 1-based start (inclusive) and end (exclusive)."""
    if not 2 <= len(args) <= 3:
        raise ScriptError(f"substring expects 2 or 3 arguments, got {len(args)}")
    source = args[0]
    if not isinstance(source, String):
        raise ScriptError("substring expects a string as first argument")
    if not isinstance(args[1], Number):
        raise ScriptError("substring expects a number as second argument")

    text = source.value
    start = int(args[1]) - 1
    if len(args) == 3:
        if not isinstance(args[2], Number):
            raise ScriptError("substring expects a number as third argument")
        end = int(args[2]) - 1
    else:
        end = len(text)

    start = max(start, 0)
    end = min(end, len(text))
    if start > end:
        return String("")
    return String(text[start:end])


def upcase(args: Sequence[Value], buffer: Buffer) -> Value:
    """Convert a string to uppercase."""
    if len(args) != 1:
        raise ScriptError(f"upcase expects 1 argument, got {len(args)}")
    source = args[0]
    if not isinstance(source, String):
        raise ScriptError("upcase expects a string argument")
    return String(source.value.upper())


register_documentation(
    FunctionDoc(
        name="set-mark-command",
        summary="Set mark at specified position or current point",
        description=(
            "Sets the mark at a specified position or at the current point. When called "
            "without arguments, it behaves identically to set-mark (sets mark at current "
            "point). When called with a position argument, it sets the mark at that "
            "specific position."
        ),
        category="mark",
        parameters=[
            ParameterDoc(
                name="position",
                type="number",
                description=(
                    "Buffer position where to set the mark (1-based). "
                    "If omitted, uses current point"
                ),
                optional=True,
            )
        ],
        examples=[
            ExampleDoc(
                description="Set mark at specific position",
                input="set-mark-command 5; mark",
                buffer="Hello world test",
                output="Mark is set to position 5",
            ),
            ExampleDoc(
                description="Set mark at current point (no argument)",
                input="goto-char 8; set-mark-command; mark",
                buffer="Hello world test",
                output="Mark is set to position 8 (current point)",
            ),
        ],
        see_also=["set-mark", "mark", "goto-char", "region-beginning", "region-end"],
    )
)

register_documentation(
    FunctionDoc(
        name="string-match",
        summary="Search for pattern within a string and return match index",
        description=(
            "Searches for a pattern within a string and returns the index of the first "
            "match. Takes two arguments: a pattern and a target string to search within. "
            "The pattern can be either a literal string or a regular expression. If the "
            "pattern is a valid regular expression, it uses regexp matching. If the "
            "pattern is not a valid regexp, it falls back to literal string search. "
            "Returns the 0-based index of the first match as a number, or the symbol "
            "'nil' if no match is found. This function operates on string arguments and "
            "does not modify the buffer."
        ),
        category="string",
        parameters=[
            ParameterDoc(
                name="pattern",
                type="string",
                description="Pattern to search for (literal string or regular expression)",
            ),
            ParameterDoc(
                name="string",
                type="string",
                description="Target string to search within",
            ),
        ],
        examples=[
            ExampleDoc(
                description="Search for literal text in string",
                input='string-match "wor" "Hello world"',
                buffer="Test buffer",
                output="Returns 6 (index of 'wor' in 'Hello world')",
            ),
            ExampleDoc(
                description="Search for regex pattern in string",
                input='string-match "[0-9]+" "Hello 123 world"',
                buffer="Test buffer",
                output="Returns 6 (index of first digit sequence)",
            ),
            ExampleDoc(
                description="Pattern not found in string",
                input='string-match "xyz" "Hello world"',
                buffer="Test buffer",
                output="Returns 'nil' (pattern not found)",
            ),
        ],
        see_also=["looking-at", "re-search-forward", "replace-regexp-in-string"],
    )
)

register_documentation(
    FunctionDoc(
        name="substring",
        category="string",
        summary="Extract a portion of a string",
        description=(
            "Extracts a substring from STRING starting at START (1-based, inclusive). If "
            "END is provided, extracts up to END (1-based, exclusive). If END is omitted, "
            "extracts to the end of the string. Performs bounds checking and adjusts "
            "invalid indices safely."
        ),
        parameters=[
            ParameterDoc(
                name="string", type="string", description="The source string to extract from"
            ),
            ParameterDoc(
                name="start",
                type="number",
                description="The starting position (1-based, inclusive)",
            ),
            ParameterDoc(
                name="end",
                type="number",
                description="The ending position (1-based, exclusive) - optional",
                optional=True,
            ),
        ],
        examples=[
            ExampleDoc(
                description="Extract substring with start and end",
                input='substring "Hello world" 1 5',
                output='"Hell"',
            ),
            ExampleDoc(
                description="Extract substring to end",
                input='substring "Hello world" 7',
                output='"world"',
            ),
        ],
        see_also=["length", "concat"],
    )
)

register_documentation(
    FunctionDoc(
        name="upcase",
        category="string",
        summary="Convert string to uppercase",
        description=(
            "Converts all alphabetic characters in STRING to uppercase. "
            "Non-alphabetic characters remain unchanged."
        ),
        parameters=[
            ParameterDoc(
                name="string", type="string", description="The string to convert to uppercase"
            ),
        ],
        examples=[
            ExampleDoc(
                description="Convert mixed case to uppercase",
                input='upcase "Hello World"',
                output='"HELLO WORLD"',
            ),
            ExampleDoc(
                description="Convert with numbers",
                input='upcase "test123"',
                output='"TEST123"',
            ),
        ],
        see_also=["downcase", "capitalize"],
    )
)