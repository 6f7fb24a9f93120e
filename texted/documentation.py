"""Documentation records for builtin functions and the registry that holds them."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ParameterDoc:
    """Documents a single function parameter."""

    name: str
    type: str
    description: str = ""
    optional: bool = False


@dataclass(frozen=True)
class ExampleDoc:
    """A concrete usage example for a function."""

    description: str
    input: str
    buffer: str = ""
    output: str = ""


@dataclass(frozen=True)
class FunctionDoc:
    """Full documentation for a single function."""

    name: str
    summary: str = ""
    description: str = ""
    parameters: tuple = field(default_factory=tuple)
    examples: tuple = field(default_factory=tuple)
    see_also: tuple = field(default_factory=tuple)
    category: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "examples", tuple(self.examples))
        object.__setattr__(self, "see_also", tuple(self.see_also))


_registry: dict[str, FunctionDoc] = {}
_lock = threading.RLock()


def register_documentation(doc: FunctionDoc) -> None:
    """Add or replace a function's documentation in the registry."""
    with _lock:
        _registry[doc.name] = doc


def get_documentation(name: str) -> Optional[FunctionDoc]:
    """Return the documentation for name, or None if none is registered."""
    with _lock:
        return _registry.get(name)


def get_all_documentation() -> list[FunctionDoc]:
    """Return all registered documentation sorted by function name."""
    with _lock:
        return sorted(_registry.values(), key=lambda doc: doc.name)


def get_documentation_by_category(category: str) -> list[FunctionDoc]:
    """Return the documentation of every function in category, sorted by name."""
    with _lock:
        docs = [doc for doc in _registry.values() if doc.category == category]
    return sorted(docs, key=lambda doc: doc.name)


def get_categories() -> list[str]:
    """Return the distinct non-empty categories, sorted."""
    with _lock:
        return sorted({doc.category for doc in _registry.values() if doc.category})


def get_registered_function_count() -> int:
    """Return the number of documented functions."""
    with _lock:
        return len(_registry)