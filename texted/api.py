"""Running texted scripts on strings and files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .buffer import Buffer
from .evaluator import eval_program, new_default_environment
from .parser import parse_json_string, parse_string
from .values import ScriptError, Value

_FORMATS = ("shell", "sexp", "json")


@dataclass
class EditResult:
    """The outcome of editing a single file."""

    filename: str
    success: bool
    error: Optional[Exception] = None


def is_valid_format(format: str) -> bool:
    """Return True if format is one of shell, sexp or json."""
    return format in _FORMATS


def _run(input_text: str, program: list[Value]) -> str:
    buffer = Buffer(input_text)
    try:
        eval_program(program, new_default_environment(), buffer)
    except ScriptError as err:
        raise ScriptError(f"script execution failed: {err}") from err
    return str(buffer)


def execute_script(input_text: str, script: str) -> str:
    """Run a line-based script on input_text and return the edited text."""
    try:
        program = parse_string(script)
    except ScriptError as err:
        raise ScriptError(f"parsing script: {err}") from err
    return _run(input_text, program)


def execute_script_with_format(input_text: str, script: str, format: str) -> str:
    """Run a script written in the given format on input_text and return the edited text."""
    if not is_valid_format(format):
        raise ScriptError(
            f"invalid script format: {format} (must be shell, sexp, or json)"
        )
    try:
        if format == "json":
            program = parse_json_string(script)
        else:
            program = parse_string(script)
    except ScriptError as err:
        raise ScriptError(f"parsing script: {err}") from err
    return _run(input_text, program)


def _read_file(filename: str) -> str:
    try:
        with open(filename, encoding="utf-8", errors="surrogateescape", newline="") as fh:
            return fh.read()
    except OSError as err:
        raise OSError(f"failed to read file {filename}: {err}") from err


def _write_file(filename: str, content: str) -> None:
    try:
        with open(
            filename, "w", encoding="utf-8", errors="surrogateescape", newline=""
        ) as fh:
            fh.write(content)
    except OSError as err:
        raise OSError(f"failed to write file {filename}: {err}") from err


def edit_file(filename: str, script: str) -> None:
    """Apply a line-based script to a file in place."""
    modified = execute_script(_read_file(filename), script)
    _write_file(filename, modified)


def edit_file_with_format(filename: str, script: str, format: str) -> None:
    """Apply a script in the given format to a file in place."""
    modified = execute_script_with_format(_read_file(filename), script, format)
    _write_file(filename, modified)


def edit_files(files: Iterable[str], script: str) -> list[EditResult]:
    """Apply a script to each file, recording success or failure per file."""
    results = []
    for filename in files:
        try:
            edit_file(filename, script)
        except (ScriptError, OSError) as err:
            results.append(EditResult(filename, False, err))
        else:
            results.append(EditResult(filename, True))
    return results


def edit_files_with_format(
    files: Iterable[str], script: str, format: str
) -> list[EditResult]:
    """Apply a script in the given format to each file, recording each outcome."""
    results = []
    for filename in files:
        try:
            edit_file_with_format(filename, script, format)
        except (ScriptError, OSError) as err:
            results.append(EditResult(filename, False, err))
        else:
            results.append(EditResult(filename, True))
    return results