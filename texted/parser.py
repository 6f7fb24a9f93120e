"""Parsers for texted scripts: the line-based shell/S-expression format and JSON."""

from __future__ import annotations

import io
import json
import math
import re
from typing import Any, Iterable, TextIO

from .values import List, Number, ScriptError, String, Symbol, Value


class ParseError(ScriptError):
    """Raised when a script cannot be parsed."""


# ---------------------------------------------------------------------------
# Line-based format
# ---------------------------------------------------------------------------


def parse_reader(stream: Iterable[str]) -> list[Value]:
    """Parse a script from a text stream in the line-based format.

    Leading whitespace is stripped from each line; a line starting with '('
    is read as an S-expression, any other line becomes a list of its tokens.
    Semicolons outside string literals separate commands like newlines do.
    """
    expressions: list[Value] = []
    try:
        for raw in stream:
            line = raw[:-1] if raw.endswith("\n") else raw
            if line.endswith("\r"):
                line = line[:-1]
            line = line.lstrip()
            if not line:
                continue
            for command in split_on_semicolons(line):
                command = command.strip()
                if command:
                    expressions.append(_parse_line(command))
    except OSError as err:
        raise ParseError(f"reading input: {err}") from err
    return expressions


def parse_string(text: str) -> list[Value]:
    """Parse a script held in a string using the line-based format."""
    return parse_reader(io.StringIO(text))


def parse_sexp(text: str) -> list[Value]:
    """Parse a pure S-expression; a lone value is returned as itself, not wrapped in a list."""
    trimmed = text.strip()
    if not trimmed:
        return []
    if trimmed.startswith("("):
        return [_parse_sexpression(trimmed)]
    return [parse_token(trimmed)]


def parse_format(format: str, text: str) -> list[Value]:
    """Parse text in the given format: "sexp" (also the default), "shell" or "json"."""
    if format == "shell":
        return parse_string(text)
    if format == "json":
        return parse_json_string(text)
    return parse_sexp(text)


def _parse_line(line: str) -> Value:
    if line.startswith("("):
        return _parse_sexpression(line)
    return _parse_shell_like(line)


def _parse_sexpression(line: str) -> Value:
    tokens = tokenize(line)
    expr, _ = _parse_tokens(tokens, 0)
    return expr


def _parse_shell_like(line: str) -> Value:
    tokens = tokenize(line)
    elements: list[Value] = []
    pos = 0
    while pos < len(tokens):
        token = tokens[pos]
        if token == "(":
            expr, pos = _parse_tokens(tokens, pos)
            elements.append(expr)
        elif token == ")":
            raise ParseError("unexpected closing parenthesis in shell-like syntax")
        else:
            elements.append(parse_token(token))
            pos += 1
    return List(elements)


def tokenize(line: str) -> list[str]:
    """Split a line into tokens, keeping quoted strings whole and parentheses separate."""
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False
    escape_next = False

    def flush() -> None:
        if current:
            tokens.append("".join(current))
            current.clear()

    for ch in line:
        if escape_next:
            current.append(ch)
            escape_next = False
        elif ch == "\\":
            current.append(ch)
            if in_quotes:
                escape_next = True
        elif ch == '"':
            current.append(ch)
            in_quotes = not in_quotes
        elif ch in "()":
            if in_quotes:
                current.append(ch)
            else:
                flush()
                tokens.append(ch)
        elif ch in " \t\n\r":
            if in_quotes:
                current.append(ch)
            else:
                flush()
        else:
            current.append(ch)

    if in_quotes:
        raise ParseError("unterminated string literal")
    flush()
    return tokens


def _parse_tokens(tokens: list[str], start: int) -> tuple[Value, int]:
    if start >= len(tokens):
        raise ParseError("unexpected end of input")
    token = tokens[start]
    if token == "(":
        return _parse_list(tokens, start + 1)
    if token == ")":
        raise ParseError("unexpected closing parenthesis")
    return parse_token(token), start + 1


def _parse_list(tokens: list[str], start: int) -> tuple[Value, int]:
    elements: list[Value] = []
    pos = start
    while pos < len(tokens) and tokens[pos] != ")":
        element, pos = _parse_tokens(tokens, pos)
        elements.append(element)
    if pos >= len(tokens):
        raise ParseError("unterminated list")
    return List(elements), pos + 1


def split_on_semicolons(line: str) -> list[str]:
    """Split a line on semicolons that are not inside string literals."""
    parts: list[str] = []
    current: list[str] = []
    in_quotes = False
    escape_next = False

    for ch in line:
        if escape_next:
            current.append(ch)
            escape_next = False
        elif ch == "\\":
            current.append(ch)
            if in_quotes:
                escape_next = True
        elif ch == '"':
            current.append(ch)
            in_quotes = not in_quotes
        elif ch == ";" and not in_quotes:
            parts.append("".join(current))
            current.clear()
        else:
            current.append(ch)

    if current:
        parts.append("".join(current))
    return parts


_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?\d+"
)
_SPECIAL = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)


def _parse_number(token: str) -> float | None:
    """Return the number a token spells, or None if it is not a number in range."""
    if _SPECIAL.fullmatch(token):
        return float(token)
    if _DECIMAL.fullmatch(token):
        value = float(token)
        return None if math.isinf(value) else value
    if _HEX_FLOAT.fullmatch(token):
        try:
            return float.fromhex(token)
        except OverflowError:
            return None
    return None


_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
_HEX_WIDTHS = {"x": 2, "u": 4, "U": 8}
_HEX_DIGITS = set("0123456789abcdefABCDEF")
_OCT_DIGITS = set("01234567")


def _unquote(token: str) -> str:
    """Decode a double-quoted string literal with backslash escapes."""
    body = token[1:-1]
    if "\n" in body:
        raise ValueError("newline in string literal")
    out: list[str] = []
    pos = 0
    while pos < len(body):
        ch = body[pos]
        if ch == '"':
            raise ValueError("unescaped quote")
        if ch != "\\":
            out.append(ch)
            pos += 1
            continue
        if pos + 1 >= len(body):
            raise ValueError("trailing backslash")
        code = body[pos + 1]
        pos += 2
        if code in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[code])
        elif code in _HEX_WIDTHS:
            width = _HEX_WIDTHS[code]
            digits = body[pos : pos + width]
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                raise ValueError(f"invalid \\{code} escape")
            value = int(digits, 16)
            if code != "x" and (value > 0x10FFFF or 0xD800 <= value <= 0xDFFF):
                raise ValueError(f"invalid code point in \\{code} escape")
            out.append(chr(value))
            pos += width
        elif code in _OCT_DIGITS:
            digits = body[pos - 1 : pos + 2]
            if len(digits) != 3 or not set(digits) <= _OCT_DIGITS:
                raise ValueError("invalid octal escape")
            value = int(digits, 8)
            if value > 255:
                raise ValueError("octal escape out of range")
            out.append(chr(value))
            pos += 2
        else:
            raise ValueError(f"invalid escape \\{code}")
    return "".join(out)


def parse_token(token: str) -> Value:
    """Turn a single token into a string, a number or a symbol."""
    if token.startswith('"') and token.endswith('"'):
        if len(token) < 2:
            raise ParseError(f"invalid string literal: {token}")
        try:
            return String(_unquote(token))
        except ValueError as err:
            raise ParseError(f"invalid string literal {token}: {err}") from err
    number = _parse_number(token)
    if number is not None:
        return Number(number)
    return Symbol(token)


# ---------------------------------------------------------------------------
# JSON format
# ---------------------------------------------------------------------------


def _type_name(value: object) -> str:
    return type(value).__name__


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _json_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number {text} out of range")
    return value


def _json_int(text: str) -> float:
    try:
        return float(int(text))
    except OverflowError:
        raise ValueError(f"number {text} out of range") from None


def _json_constant(text: str) -> Any:
    raise ValueError(f"invalid JSON value {text}")


def _decoder() -> json.JSONDecoder:
    return json.JSONDecoder(
        parse_float=_json_float, parse_int=_json_int, parse_constant=_json_constant
    )


_JSON_WHITESPACE = " \t\n\r"


def parse_json_reader(stream: TextIO) -> list[Value]:
    """Parse a stream of whitespace-separated JSON command arrays."""
    text = stream.read()
    decoder = _decoder()
    expressions: list[Value] = []
    pos = 0
    while True:
        while pos < len(text) and text[pos] in _JSON_WHITESPACE:
            pos += 1
        if pos >= len(text):
            break
        try:
            raw, pos = decoder.raw_decode(text, pos)
        except ValueError as err:
            raise ParseError(f"JSON decode error: {err}") from err
        expressions.append(convert_json_value(raw))
    return expressions


def parse_json_string(text: str) -> list[Value]:
    """Parse a JSON array whose elements are command arrays."""
    try:
        raw_values = _decoder().decode(text)
    except ValueError as err:
        raise ParseError(f"JSON unmarshal error: {err}") from err
    if raw_values is None:
        return []
    if not isinstance(raw_values, list):
        raise ParseError(
            f"JSON unmarshal error: cannot unmarshal {_type_name(raw_values)} into an array"
        )

    expressions: list[Value] = []
    for index, raw in enumerate(raw_values):
        try:
            validate_json_format(raw)
        except ParseError as err:
            raise ParseError(f"invalid format at index {index}: {err}") from err
        expressions.append(convert_json_value(raw))
    return expressions


def convert_json_value(value: Any) -> Value:
    """Convert a decoded JSON value: arrays become lists, strings symbols, numbers numbers."""
    if isinstance(value, list):
        return convert_json_array(value)
    if isinstance(value, str):
        return Symbol(value)
    if _is_number(value):
        return Number(value)
    if value is None or isinstance(value, bool):
        raise ParseError(f"unsupported JSON type: {_type_name(value)}")
    raise ParseError(f"unexpected JSON type: {_type_name(value)}")


def convert_json_array(arr: list) -> Value:
    """Convert a JSON array into a list whose first element, a string, becomes a symbol."""
    if not arr:
        return List([])
    head = arr[0]
    if not isinstance(head, str):
        raise ParseError(
            f"first element of JSON array must be a string (symbol), got {_type_name(head)}"
        )
    elements: list[Value] = [Symbol(head)]
    for index, item in enumerate(arr[1:], start=1):
        try:
            elements.append(convert_json_item(item))
        except ParseError as err:
            raise ParseError(f"error converting array element {index}: {err}") from err
    return List(elements)


def convert_json_item(item: Any) -> Value:
    """Convert an array element after the first: strings stay strings."""
    if isinstance(item, bool):
        raise ParseError("boolean values are not supported in texted JSON")
    if item is None:
        raise ParseError("null values are not supported in texted JSON")
    if isinstance(item, str):
        return String(item)
    if _is_number(item):
        return Number(item)
    if isinstance(item, list):
        return convert_json_array(item)
    raise ParseError(f"unsupported JSON type: {_type_name(item)} (value: {item!r})")


def validate_json_format(value: Any) -> None:
    """Check that a decoded top-level JSON value follows the texted JSON rules."""
    _validate_json_value(value, top_level=True)


def _validate_json_value(value: Any, top_level: bool) -> None:
    if isinstance(value, list):
        if not value:
            return
        if not isinstance(value[0], str):
            raise ParseError(
                f"first element of array must be string, got {_type_name(value[0])}"
            )
        for index, item in enumerate(value[1:], start=1):
            try:
                _validate_json_value(item, top_level=False)
            except ParseError as err:
                raise ParseError(f"invalid element at index {index}: {err}") from err
        return
    if value is None or isinstance(value, bool):
        raise ParseError("boolean and null values are not supported in texted JSON")
    if isinstance(value, str):
        if top_level:
            raise ParseError("top-level strings are not allowed in texted JSON")
        return
    if _is_number(value):
        if top_level:
            raise ParseError("top-level numbers are not allowed in texted JSON")
        return
    if isinstance(value, dict):
        raise ParseError("objects are not supported in texted JSON")
    raise ParseError(f"unsupported type: {_type_name(value)}")