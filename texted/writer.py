"""Writers that serialise texted expressions as shell lines, S-expressions or JSON."""

from __future__ import annotations

import enum
import json
import math
from typing import Iterable, TextIO, Union

from .values import List, Number, String, Symbol, Value


class Format(str, enum.Enum):
    """Supported output formats."""

    SHELL = "shell"
    SEXP = "sexp"
    JSON = "json"


class WriterError(Exception):
    """Raised when a value cannot be written in the requested format."""


def _type_name(value: object) -> str:
    return type(value).__name__


_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class JSONWriter:
    """Writes expressions as JSON arrays, one per line."""

    def write(self, stream: TextIO, expressions: Iterable[Value]) -> None:
        """Write each expression as a JSON line."""
        for expr in expressions:
            self.write_value(stream, expr)

    def write_value(self, stream: TextIO, value: Value) -> None:
        """Write a single value as a JSON line."""
        stream.write(self._encode(self._to_json(value)) + "\n")

    def _to_json(self, value: Value) -> object:
        if isinstance(value, List):
            return [self._to_json(element) for element in value.elements]
        if isinstance(value, Symbol):
            return value.name
        if isinstance(value, String):
            return value.value
        if isinstance(value, Number):
            number = value.value
            if math.isnan(number) or math.isinf(number):
                raise WriterError(f"unsupported number value for JSON: {number}")
            if number.is_integer() and abs(number) < 1e21:
                return int(number)
            return number
        raise WriterError(f"unsupported value type for JSON: {_type_name(value)}")

    @staticmethod
    def _encode(obj: object) -> str:
        text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        return "".join(_HTML_ESCAPES.get(ch, ch) for ch in text)


class SExpWriter:
    """Writes expressions as S-expressions, one per line."""

    def write(self, stream: TextIO, expressions: Iterable[Value]) -> None:
        """Write each expression followed by a newline."""
        for expr in expressions:
            self.write_value(stream, expr)
            stream.write("\n")

    def write_value(self, stream: TextIO, value: Value) -> None:
        """Write a single value in S-expression form."""
        stream.write(str(value))


class ShellWriter:
    """Writes command lists as shell-like lines."""

    def write(self, stream: TextIO, expressions: Iterable[Value]) -> None:
        """Write each command followed by a newline."""
        for expr in expressions:
            self.write_value(stream, expr)
            stream.write("\n")

    def write_value(self, stream: TextIO, value: Value) -> None:
        """Write a single command list as a shell-like line."""
        if not isinstance(value, List):
            raise WriterError(
                f"can only convert lists to shell format, got {_type_name(value)}"
            )
        stream.write(" ".join(self._token(element) for element in value.elements))

    @staticmethod
    def _token(value: Value) -> str:
        if isinstance(value, Symbol):
            return value.name
        if isinstance(value, (String, Number)):
            return str(value)
        if isinstance(value, List):
            raise WriterError("nested lists are not supported in shell format")
        raise WriterError(f"unsupported value type for shell format: {_type_name(value)}")


Writer = Union[JSONWriter, SExpWriter, ShellWriter]

_WRITERS = {
    Format.SHELL: ShellWriter,
    Format.SEXP: SExpWriter,
    Format.JSON: JSONWriter,
}


def new_writer(format: Union[Format, str]) -> Writer:
    """Return a writer for the given format."""
    try:
        key = Format(format)
    except ValueError:
        raise WriterError(f"unsupported format: {format}") from None
    return _WRITERS[key]()