"""Exception types raised by the front end and the evaluator.

Two families are kept apart:

- `ParseError` (a `SyntaxError`) for anything the lexer or parser rejects.
  It records what was expected, what was actually found and where.
- `EvalError` (a `RuntimeError`) for failures while evaluating a parsed
  program. The specific subclasses also derive from the matching builtin
  (`NameError`, `TypeError`, ...) so callers can catch either.

Nothing in the interpreter recovers from these; they propagate to the host.
"""

from __future__ import annotations
from typing import Optional


class ParseError(SyntaxError):
    def __init__(
        self,
        message: str = "",
        *,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
        position: Optional[int] = None,
        line: int = 0,
        column: int = 0,
    ):
        self.expected = expected
        self.actual = actual
        self.position = position
        self.line = line
        self.column = column
        if not message:
            message = f"expected {expected}, got {actual}"
        where = []
        if position is not None:
            where.append(f"token {position}")
        if line:
            where.append(f"line {line}, column {column}")
        if where:
            message = f"{message} (at {', '.join(where)})"
        super().__init__(message)


class LexError(ParseError):
    pass


class EvalError(RuntimeError):
    pass


class EvalNameError(EvalError, NameError):
    def __init__(self, name: str):
        super().__init__(f"identifier not found: {name}")
        self.name = name


class EvalTypeError(EvalError, TypeError):
    pass


class EvalZeroDivisionError(EvalError, ZeroDivisionError):
    pass


class IntegerOverflowError(EvalError, OverflowError):
    pass
