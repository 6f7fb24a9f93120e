"""Value types of the texted expression language: symbols, numbers, strings and lists."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Iterator, Optional


class Kind(enum.Enum):
    """The type classification of a value."""

    SYMBOL = "symbol"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"


class ScriptError(Exception):
    """Raised when a texted script or one of its functions fails."""


class Value:
    """Base class of every value that can appear in a texted expression."""

    KIND: Kind

    def kind(self) -> Kind:
        """Return the kind of this value."""
        return self.KIND


_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _quote(text: str) -> str:
    """Return text as a double-quoted literal with escapes for special characters."""
    parts = ['"']
    for ch in text:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                parts.append(f"\\x{code:02x}")
            elif code < 0x10000:
                parts.append(f"\\u{code:04x}")
            else:
                parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)


def _format_number(value: float) -> str:
    """Format a number: whole numbers without a fraction, others in shortest form."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer():
        return "%.0f" % value

    sign, digits, exponent = Decimal(repr(value)).as_tuple()
    digit_list = list(digits)
    while len(digit_list) > 1 and digit_list[-1] == 0:
        digit_list.pop()
        exponent += 1
    point_exponent = len(digit_list) + exponent - 1
    prefix = "-" if sign else ""

    if point_exponent < -4 or point_exponent >= 6:
        head = str(digit_list[0])
        tail = "".join(str(d) for d in digit_list[1:])
        mantissa = f"{head}.{tail}" if tail else head
        exp_sign = "-" if point_exponent < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(point_exponent):02d}"

    return prefix + format(Decimal(repr(abs(value))), "f")


@dataclass(frozen=True)
class Symbol(Value):
    """A symbolic name, such as a function name."""

    name: str
    KIND = Kind.SYMBOL

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class String(Value):
    """A string literal."""

    value: str
    KIND = Kind.STRING

    def __str__(self) -> str:
        return _quote(self.value)


@dataclass(frozen=True)
class Number(Value):
    """A numeric value, stored as a float."""

    value: float
    KIND = Kind.NUMBER

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    @classmethod
    def from_int(cls, value: int) -> "Number":
        """Create a number from an integer."""
        return cls(float(value))

    def __int__(self) -> int:
        return int(self.value)

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return _format_number(self.value)


@dataclass
class List(Value):
    """An ordered list of values; a list headed by a symbol is a function call."""

    elements: list = field(default_factory=list)
    KIND = Kind.LIST

    def __post_init__(self) -> None:
        self.elements = list(self.elements)

    def __str__(self) -> str:
        return "(" + " ".join(str(element) for element in self.elements) + ")"

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.elements)

    def is_empty(self) -> bool:
        """Return True if the list has no elements."""
        return not self.elements

    def first(self) -> Optional[Value]:
        """Return the first element, or None if the list is empty."""
        return self.elements[0] if self.elements else None

    def rest(self) -> "List":
        """Return a new list holding every element but the first."""
        return List(self.elements[1:])

    def append(self, element: Value) -> "List":
        """Return a new list with element added at the end."""
        return List([*self.elements, element])

    def get(self, index: int) -> Optional[Value]:
        """Return the element at index, or None if index is out of range."""
        if 0 <= index < len(self.elements):
            return self.elements[index]
        return None

    @classmethod
    def of(cls, *elements: Value) -> "List":
        """Create a list from the given elements."""
        return cls(list(elements))

    @classmethod
    def from_iterable(cls, elements: Iterable[Value]) -> "List":
        """Create a list from an iterable of values."""
        return cls(list(elements))


def is_a(value: Value, kind: Kind) -> bool:
    """Return True if value is of the given kind."""
    return value.kind() == kind


def equal(a: Optional[Value], b: Optional[Value]) -> bool:
    """Deep equality of two values: same kind and equal contents."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    if a.kind() != b.kind():
        return False

    if isinstance(a, String) and isinstance(b, String):
        return a.value == b.value
    if isinstance(a, Number) and isinstance(b, Number):
        return a.value == b.value
    if isinstance(a, Symbol) and isinstance(b, Symbol):
        return a.name == b.name
    if isinstance(a, List) and isinstance(b, List):
        if len(a) != len(b):
            return False
        return all(equal(x, y) for x, y in zip(a.elements, b.elements))
    return a is b


def is_word_char(ch: str) -> bool:
    """Return True if ch is an ASCII letter or digit."""
    return len(ch) == 1 and ("a" <= ch <= "z" or "A" <= ch <= "Z" or "0" <= ch <= "9")