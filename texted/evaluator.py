"""Evaluation of texted programs against a buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from . import builtins
from .buffer import Buffer
from .values import List, Number, ScriptError, String, Symbol, Value

BuiltinFn = Callable[[Sequence[Value], Buffer], Value]


@dataclass
class Environment:
    """The functions available to a program, by name."""

    functions: dict = field(default_factory=dict)


@dataclass(frozen=True)
class TraceContext:
    """State handed to a trace callback after each top-level instruction."""

    buffer: Buffer
    environment: Environment
    instruction: Value


TraceCallback = Callable[[TraceContext], None]


class ExecutionError(ScriptError):
    """A script failure together with the execution state at the time it occurred."""

    def __init__(
        self,
        original_error: BaseException,
        program: Sequence[Value],
        instruction_index: int,
        current_instruction: Optional[Value],
        buffer: Buffer,
        env: Environment,
    ) -> None:
        super().__init__(str(original_error))
        self.original_error = original_error
        self.program = list(program)
        self.instruction_index = instruction_index
        self.current_instruction = current_instruction
        self.buffer_contents = str(buffer)
        self.point = buffer.point
        self.mark = buffer.mark
        self.last_search_match = buffer.last_search_match
        self.last_search_start = buffer.last_search_start
        self.last_search_end = buffer.last_search_end
        self.environment = env

    def __str__(self) -> str:
        if self.current_instruction is not None:
            instruction = str(self.current_instruction)
        else:
            instruction = "(nil instruction)"
        return (
            f"{self.original_error} (at instruction {self.instruction_index}: "
            f"{instruction}, point={self.point}, mark={self.mark})"
        )


def _eval_expression(expr: Value, env: Environment, buffer: Buffer) -> Value:
    if isinstance(expr, (String, Number)):
        return expr
    if isinstance(expr, List):
        if expr.is_empty():
            raise ScriptError("empty list")
        head = expr.first()
        if not isinstance(head, Symbol):
            raise ScriptError("first element of list must be a symbol")
        fn = env.functions.get(head.name)
        if fn is None:
            raise ScriptError(f"undefined-function {String(head.name)}")
        args = [_eval_expression(arg, env, buffer) for arg in expr.elements[1:]]
        return fn(args, buffer)
    raise ScriptError("unknown expression type")


def eval_program(
    program: Sequence[Value],
    env: Environment,
    buffer: Buffer,
    trace: Optional[TraceCallback] = None,
) -> Value:
    """Evaluate each expression in order and return the value of the last one.

    An empty program yields the empty string. Failures raise ExecutionError.
    """
    result: Value = String("")
    for index, expr in enumerate(program):
        try:
            result = _eval_expression(expr, env, buffer)
        except ScriptError as err:
            raise ExecutionError(err, program, index, expr, buffer, env) from err
        if trace is not None:
            trace(TraceContext(buffer=buffer, environment=env, instruction=expr))
    return result


def new_default_environment() -> Environment:
    """Return an environment holding the builtin functions."""
    return Environment(
        functions={
            "substring": builtins.substring,
            "string-match": builtins.string_match,
            "upcase": builtins.upcase,
            "set-mark-command": builtins.set_mark_command,
        }
    )